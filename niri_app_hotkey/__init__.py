"""niri-app-hotkey - hotkey friendly window control for the niri compositor.

Each invocation queries niri once, selects the windows of a configured
application with its match / exclude rules, then launches, shows, hides,
activates or toggles them.
"""
