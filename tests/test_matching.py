from unittest.mock import Mock

from niri_app_hotkey.matching import filter_windows, matches_any, rule_matches
from niri_app_hotkey.models import WindowInfo

from .testtools import application, exclude, match, window


class TestRuleMatches:
    """A rule matches when every pattern it sets is found."""

    def test_app_id_only(self):
        rule = match(app_id="^firefox$")
        assert rule_matches(window(1, app_id="firefox"), rule)
        assert not rule_matches(window(1, app_id="firefox-esr"), rule)

    def test_search_not_fullmatch(self):
        assert rule_matches(window(1, app_id="org.mozilla.firefox"), match(app_id="firefox"))

    def test_both_patterns_required(self):
        rule = match(app_id="^kitty$", title="htop")
        assert rule_matches(window(1, app_id="kitty", title="htop - user"), rule)
        assert not rule_matches(window(1, app_id="kitty", title="vim"), rule)
        assert not rule_matches(window(1, app_id="foot", title="htop"), rule)

    def test_missing_attribute_fails(self):
        assert not rule_matches(WindowInfo(id=1, title="x"), match(app_id=".*"))
        assert not rule_matches(WindowInfo(id=1, app_id="x"), match(title=".*"))

    def test_matches_any_is_or(self):
        rules = [match(app_id="^foot$"), match(title="^Notes")]
        assert matches_any(window(1, app_id="foot"), rules)
        assert matches_any(window(1, app_id="other", title="Notes - today"), rules)
        assert not matches_any(window(1, app_id="other", title="Todo"), rules)

    def test_matches_any_empty(self):
        assert not matches_any(window(1), [])


class TestFilterWindows:
    """Match, exclude, sort by pid, then index."""

    def test_exclusion_wins(self):
        app = application(match(app_id="^firefox$"), excludes=[exclude(title="Picture-in-Picture")])
        windows = [
            window(1, app_id="firefox", title="Home"),
            window(2, app_id="firefox", title="Picture-in-Picture"),
            window(3, app_id="foot", title="shell"),
        ]
        assert [w.id for w in filter_windows(windows, app)] == [1]

    def test_pid_order(self):
        app = application(match(app_id="app"))
        windows = [window(1, pid=50), window(2, pid=10), window(3, pid=30)]
        assert [w.pid for w in filter_windows(windows, app)] == [10, 30, 50]

    def test_stable_for_same_pid(self):
        app = application(match(app_id="app"))
        windows = [window(7, pid=20), window(3, pid=10), window(5, pid=20), window(1, pid=20)]
        assert [w.id for w in filter_windows(windows, app)] == [3, 7, 5, 1]

    def test_missing_pid_goes_last(self):
        app = application(match(app_id="app"))
        windows = [WindowInfo(id=1, app_id="app"), window(2, pid=99), window(3, pid=4)]
        assert [w.id for w in filter_windows(windows, app)] == [3, 2, 1]

    def test_index(self):
        app = application(match(app_id="app", index=1))
        windows = [window(1, pid=50), window(2, pid=10), window(3, pid=30)]
        assert [w.id for w in filter_windows(windows, app)] == [3]

    def test_index_applies_after_exclusion(self):
        app = application(match(app_id="app", index=0), excludes=[exclude(title="skip")])
        windows = [window(1, pid=1, title="skip"), window(2, pid=2)]
        assert [w.id for w in filter_windows(windows, app)] == [2]

    def test_index_out_of_range(self):
        app = application(match(app_id="app", index=3))
        assert filter_windows([window(1), window(2)], app) == []

    def test_no_match(self):
        app = application(match(app_id="^nothing$"))
        assert filter_windows([window(1), window(2)], app) == []

    def test_debug_log(self):
        log = Mock()
        app = application(match(app_id="app", index=0), excludes=[exclude(title="skip")])
        filter_windows([window(1, title="skip"), window(2), window(3)], app, log)
        assert log.debug.call_count == 3
        log.debug.assert_any_call("[%s] match %s", "term", app.match_rules[0])
        assert str(app.exclude_rules[0]) == "title='skip'"
        assert log.debug.call_args.args[1:] == ("term", 3, 1, 1, " (index 0)")
