from niri_app_hotkey.models import Visibility, WindowInfo, WorkspaceInfo
from niri_app_hotkey.visibility import classify, classify_all, find_active_workspace, find_hidden_workspace

from .testtools import HIDDEN_WS, NORMAL_WS, OTHER_WS, window, workspaces


def test_hidden_workspace():
    assert classify(window(1, workspace_id=HIDDEN_WS), workspaces()) is Visibility.HIDDEN


def test_hidden_wins_over_focus():
    assert classify(window(1, workspace_id=HIDDEN_WS, focused=True), workspaces()) is Visibility.HIDDEN


def test_visible_focused():
    assert classify(window(1, focused=True), workspaces()) is Visibility.VISIBLE_FOCUSED


def test_visible_unfocused():
    assert classify(window(1, workspace_id=OTHER_WS), workspaces()) is Visibility.VISIBLE_UNFOCUSED


def test_unknown_workspace():
    assert classify(window(1, workspace_id=1234, focused=True), workspaces()) is Visibility.VISIBLE_UNFOCUSED
    assert classify(WindowInfo(id=1, focused=True), workspaces()) is Visibility.VISIBLE_UNFOCUSED


def test_visible_property():
    assert not Visibility.HIDDEN.visible
    assert Visibility.VISIBLE_FOCUSED.visible
    assert Visibility.VISIBLE_UNFOCUSED.visible


def test_classify_all_keeps_order():
    windows = [window(3, workspace_id=HIDDEN_WS), window(1, focused=True), window(2)]
    candidates = classify_all(windows, workspaces())
    assert [c.id for c in candidates] == [3, 1, 2]
    assert [c.visibility for c in candidates] == [Visibility.HIDDEN, Visibility.VISIBLE_FOCUSED, Visibility.VISIBLE_UNFOCUSED]


def test_find_hidden_workspace():
    assert find_hidden_workspace(workspaces()).id == HIDDEN_WS
    assert find_hidden_workspace(workspaces(hidden=False)) is None


def test_find_first_hidden_workspace():
    spaces = [WorkspaceInfo(id=5, hidden=True), WorkspaceInfo(id=4, hidden=True)]
    assert find_hidden_workspace(spaces).id == 5


def test_find_active_workspace():
    assert find_active_workspace(workspaces()).id == NORMAL_WS
    assert find_active_workspace(workspaces(focused=OTHER_WS)).id == OTHER_WS


def test_hidden_workspace_is_never_active():
    assert find_active_workspace(workspaces(focused=None) + [WorkspaceInfo(id=10, hidden=True, focused=True)]) is None


def test_workspace_label():
    assert WorkspaceInfo(id=3, name="hidden").label == "hidden"
    assert WorkspaceInfo(id=3, idx=2).label == "2"
    assert WorkspaceInfo(id=3).label == "3"
