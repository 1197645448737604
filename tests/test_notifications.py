import logging

import pytest

from ludo import notifications as ntf
from ludo.notifications import MEDIUM, Notification, Severity
from ludo.state import global_state


@pytest.fixture(autouse=True)
def fresh():
    ntf.clear()
    verbose = global_state.verbose
    yield
    global_state.verbose = verbose
    ntf.clear()


def test_list_returns_notifications():
    nid1 = ntf.display(Severity.ERROR, "Test1", MEDIUM)
    nid2 = ntf.display(Severity.ERROR, "Test2", MEDIUM)
    nid3 = ntf.display(Severity.ERROR, "Test3", MEDIUM)
    assert ntf.list_all() == [
        Notification(id=nid1, severity=Severity.ERROR, message="Test1", duration=MEDIUM),
        Notification(id=nid2, severity=Severity.ERROR, message="Test2", duration=MEDIUM),
        Notification(id=nid3, severity=Severity.ERROR, message="Test3", duration=MEDIUM),
    ]


def test_display_stacks_notifications():
    nid1 = ntf.display(Severity.ERROR, "Test1", MEDIUM)
    nid2 = ntf.display(Severity.INFO, "Test2", MEDIUM)
    nid3 = ntf.display(Severity.WARNING, "Test3", MEDIUM)
    assert ntf.list_all() == [
        Notification(id=nid1, severity=Severity.ERROR, message="Test1", duration=MEDIUM),
        Notification(id=nid2, severity=Severity.INFO, message="Test2", duration=MEDIUM),
        Notification(id=nid3, severity=Severity.WARNING, message="Test3", duration=MEDIUM),
    ]
    assert len({nid1, nid2, nid3}) == 3


def test_display_and_log_formats_message():
    ntf.display_and_log(Severity.INFO, "Tests", "Joypad #%d loaded with name %s.", 3, "Foo")
    assert ntf.list_all()[0].message == "Joypad #3 loaded with name Foo."


def test_display_and_log_simple_message():
    ntf.display_and_log(Severity.INFO, "Tests", "Hello world.")
    assert ntf.list_all()[0].message == "Hello world."


def test_display_and_log_logs_if_verbose(caplog):
    caplog.set_level(logging.INFO, logger="ludo.notifications")
    global_state.verbose = True
    ntf.display_and_log(Severity.INFO, "Test", "Joypad #%d loaded with name %s.", 3, "Foo")
    assert caplog.messages == ["[Test]: Joypad #3 loaded with name Foo."]


def test_display_and_log_silent_if_not_verbose(caplog):
    caplog.set_level(logging.INFO, logger="ludo.notifications")
    global_state.verbose = False
    ntf.display_and_log(Severity.INFO, "Test", "Joypad #%d loaded with name %s.", 3, "Foo")
    assert caplog.messages == []


def test_process_deletes_outdated():
    ntf.display(Severity.ERROR, "Test1", 5)
    ntf.display(Severity.ERROR, "Test1", 4)
    ntf.display(Severity.ERROR, "Test1", 3)
    ntf.display(Severity.ERROR, "Test2", 2)
    ntf.display(Severity.ERROR, "Test3", 1)
    ntf.process(1)
    ntf.process(1)
    assert len(ntf.list_all()) == 3


def test_clear_empties_list():
    ntf.display(Severity.ERROR, "Test1", MEDIUM)
    ntf.display(Severity.ERROR, "Test2", MEDIUM)
    ntf.display(Severity.ERROR, "Test3", MEDIUM)
    ntf.clear()
    assert len(ntf.list_all()) == 0


def test_update_independently():
    ntf.display(Severity.ERROR, "Test1", MEDIUM / 2)
    nid2 = ntf.display(Severity.ERROR, "Test2", MEDIUM)
    nid3 = ntf.display(Severity.ERROR, "Test3", MEDIUM)

    for _ in range(4):
        ntf.process(0.5)
    ntf.update(nid2, Severity.SUCCESS, "Test4")
    ntf.process(0.5)

    assert ntf.list_all() == [
        Notification(id=nid2, severity=Severity.SUCCESS, message="Test4", duration=MEDIUM - 0.5),
        Notification(id=nid3, severity=Severity.ERROR, message="Test3", duration=MEDIUM - 0.5 * 5),
    ]


def test_update_unknown_id_changes_nothing():
    nid = ntf.display(Severity.INFO, "Kept", MEDIUM)
    ntf.update("missing", Severity.ERROR, "Changed")
    assert ntf.list_all() == [
        Notification(id=nid, severity=Severity.INFO, message="Kept", duration=MEDIUM)
    ]