"""Backend adapters for the compositor.

`CompositorBackend` is the interface consumed by the planner; `NiriBackend`
implements it over niri's IPC socket.
"""

from .backend import CompositorBackend
from .niri import NiriBackend

__all__ = ["CompositorBackend", "NiriBackend"]
