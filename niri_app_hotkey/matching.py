"""Window matching engine.

Turns the match / exclude rules of an application into an ordered list of
candidate windows:

1. a window matches when it satisfies any match rule,
   and satisfies a rule when every pattern set on the rule is found (`re.search`)
2. a matching window satisfying any exclude rule is dropped
3. survivors are sorted by pid (stable: windows of a same process keep niri's order)
4. a match rule `index` keeps only the window at that position of the sorted list
"""

__all__ = ["filter_windows", "matches_any", "rule_matches"]

from collections.abc import Iterable, Sequence
from logging import Logger

from .config import ApplicationConfig, WindowRule
from .models import WindowInfo

# windows without pid go last
_NO_PID = float("inf")


def rule_matches(window: WindowInfo, rule: WindowRule) -> bool:
    """Return True if every pattern of `rule` is found in `window`."""
    if rule.app_id is not None and (window.app_id is None or not rule.app_id.search(window.app_id)):
        return False
    return not (rule.title is not None and (window.title is None or not rule.title.search(window.title)))


def matches_any(window: WindowInfo, rules: Iterable[WindowRule]) -> bool:
    """Return True if `window` satisfies at least one of `rules`."""
    return any(rule_matches(window, rule) for rule in rules)


def _pid_key(window: WindowInfo) -> float:
    return _NO_PID if window.pid is None else window.pid


def filter_windows(windows: Sequence[WindowInfo], app: ApplicationConfig, log: Logger | None = None) -> list[WindowInfo]:
    """Return the candidate windows of `app`, sorted by pid.

    Args:
        windows: every window, in compositor order
        app: the application whose rules apply
        log: optional logger for debug traces
    """
    matched = [window for window in windows if matches_any(window, app.match_rules)]
    kept = [window for window in matched if not matches_any(window, app.exclude_rules)]
    kept.sort(key=_pid_key)
    excluded = len(matched) - len(kept)

    index = app.index
    if index is not None:
        # out of range gives an empty list
        kept = kept[index : index + 1]

    if log:
        for rule in app.match_rules:
            log.debug("[%s] match %s", app.name, rule)
        for rule in app.exclude_rules:
            log.debug("[%s] exclude %s", app.name, rule)
        log.debug(
            "[%s] %d window(s) matched, %d excluded, %d kept%s",
            app.name,
            len(matched),
            excluded,
            len(kept),
            "" if index is None else f" (index {index})",
        )
    return kept
