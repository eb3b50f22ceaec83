from __future__ import annotations

import pytest

import sysfstray.tray.entrypoint as entry
from sysfstray.core.utils.exceptions import DisplayConnectionError, FatalWaitError, NotificationStreamError


class _Tray:
    instances: list["_Tray"] = []
    raise_on_run: BaseException | None = None

    def __init__(self, descriptors, *, display_name=None):
        self.descriptors = descriptors
        self.display_name = display_name
        self.ran = False
        self.closed = 0
        _Tray.instances.append(self)

    def run(self):
        self.ran = True
        if _Tray.raise_on_run is not None:
            raise _Tray.raise_on_run

    def close(self):
        self.closed += 1


@pytest.fixture(autouse=True)
def _fake_tray(monkeypatch: pytest.MonkeyPatch):
    _Tray.instances = []
    _Tray.raise_on_run = None
    monkeypatch.setattr(entry, "AttributeTray", _Tray)
    monkeypatch.setattr(entry, "configure_logging", lambda: None)


def test_no_arguments_prints_usage_and_exits_1(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as excinfo:
        entry.main([])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("usage: sysfs-tray")
    assert "PATH:LABEL:FG:BG1:BG0" in err
    assert _Tray.instances == []


def test_malformed_colour_is_a_usage_error(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as excinfo:
        entry.main(["/sys/a:A:notacolour"])

    assert excinfo.value.code == 1
    assert "invalid FG value 'notacolour'" in capsys.readouterr().err


def test_unknown_option_exits_1() -> None:
    with pytest.raises(SystemExit) as excinfo:
        entry.main(["--bogus", "/sys/a:A"])

    assert excinfo.value.code == 1


def test_happy_path_builds_descriptors_in_order_and_runs() -> None:
    _Tray.raise_on_run = FatalWaitError("select: Bad file descriptor")

    entry.main(["--display", ":1", "/sys/a:A", "/sys/b:B:0xFFFFFF:0x00AA00:0x303030"])

    (tray,) = _Tray.instances
    assert [d.label for d in tray.descriptors] == ["A", "B"]
    assert tray.descriptors[1].bg_active == 0x00AA00
    assert tray.display_name == ":1"
    assert tray.ran is True
    assert tray.closed == 1


def test_fatal_wait_returns_normally(caplog: pytest.LogCaptureFixture) -> None:
    _Tray.raise_on_run = FatalWaitError("select: Bad file descriptor")

    assert entry.main(["/sys/a:A"]) is None
    assert "Event loop stopped" in caplog.text


@pytest.mark.parametrize(
    "exc",
    [DisplayConnectionError("cannot open display :0"), NotificationStreamError("inotify_init1: failed")],
)
def test_subsystem_connection_failure_exits_1(exc: Exception) -> None:
    _Tray.raise_on_run = exc

    with pytest.raises(SystemExit) as excinfo:
        entry.main(["/sys/a:A"])

    assert excinfo.value.code == 1
    assert _Tray.instances[0].closed == 1


def test_keyboard_interrupt_propagates_after_teardown() -> None:
    _Tray.raise_on_run = KeyboardInterrupt()

    with pytest.raises(KeyboardInterrupt):
        entry.main(["/sys/a:A"])

    assert _Tray.instances[0].closed == 1


def test_unhandled_exception_exits_1_and_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = {"exc": 0}
    _Tray.raise_on_run = RuntimeError("boom")
    monkeypatch.setattr(
        entry.logger,
        "exception",
        lambda *_a, **_k: calls.__setitem__("exc", calls["exc"] + 1),
    )

    with pytest.raises(SystemExit) as excinfo:
        entry.main(["/sys/a:A"])

    assert excinfo.value.code == 1
    assert calls["exc"] == 1


def test_help_documents_argument_format(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as excinfo:
        entry.main(["--help"])

    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "up to 7 characters" in out
    assert "0x303030" in out
    assert "write 0o10, not 010" in out
