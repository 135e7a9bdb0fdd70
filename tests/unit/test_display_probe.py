"""Unit tests for X11 display preflight checks."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest
from Xlib import error as xerror

from nestlaunch.common.errors import PreflightError
from nestlaunch.common.settings import settings
from nestlaunch.x11.display import DisplayProbe, displayNumber_parse


class _FakeDisplay:
    """Fake Xlib display connection."""

    def __init__(self, name: str) -> None:
        self._name: str = name
        self.closed: bool = False

    def get_display_name(self) -> str:
        return self._name

    def close(self) -> None:
        self.closed = True


class _FakeDisplayFactory:
    """Fake Xlib Display constructor recording requested names."""

    def __init__(self, reachable: bool = True) -> None:
        self.reachable: bool = reachable
        self.requested: list[Optional[str]] = []
        self.opened: list[_FakeDisplay] = []

    def __call__(self, name: Optional[str]) -> _FakeDisplay:
        self.requested.append(name)
        if not self.reachable:
            raise xerror.DisplayNameError(name or "")
        connection = _FakeDisplay(name or ":0")
        self.opened.append(connection)
        return connection


def _probe(tmp_path: Path, factory: _FakeDisplayFactory, host: Optional[str] = None) -> DisplayProbe:
    (tmp_path / "sockets").mkdir(exist_ok=True)
    return DisplayProbe(
        host_display=host,
        display_factory=factory,
        socket_dir=str(tmp_path / "sockets"),
        lock_dir=str(tmp_path),
    )


class TestDisplayNumberParse:
    """Tests for display name parsing."""

    @pytest.mark.parametrize(
        "name, number",
        [(":1", 1), (":0.0", 0), ("localhost:12", 12), ("unix:3.1", 3)],
    )
    def test_valid(self, name: str, number: int) -> None:
        assert displayNumber_parse(name) == number

    @pytest.mark.parametrize("name", ["", "1", ":", ":x"])
    def test_invalid(self, name: str) -> None:
        with pytest.raises(ValueError):
            displayNumber_parse(name)


class TestHostDisplayCheck:
    """Tests for outer display reachability."""

    def test_reachable_connection_is_closed(self, tmp_path) -> None:
        factory = _FakeDisplayFactory()
        _probe(tmp_path, factory, host=":0").hostDisplay_check()

        assert factory.requested == [":0"]
        assert factory.opened[0].closed is True

    def test_default_display_used_when_unset(self, tmp_path) -> None:
        factory = _FakeDisplayFactory()
        _probe(tmp_path, factory).hostDisplay_check()
        assert factory.requested == [None]

    def test_unreachable_raises(self, tmp_path) -> None:
        factory = _FakeDisplayFactory(reachable=False)
        with pytest.raises(PreflightError, match="Cannot connect to host display"):
            _probe(tmp_path, factory).hostDisplay_check()


class TestNestedDisplayIsFree:
    """Tests for nested display number availability."""

    def test_free(self, tmp_path) -> None:
        assert _probe(tmp_path, _FakeDisplayFactory()).nestedDisplay_isFree(":1") is True

    def test_socket_present(self, tmp_path) -> None:
        probe = _probe(tmp_path, _FakeDisplayFactory())
        (tmp_path / "sockets" / "X1").touch()
        assert probe.nestedDisplay_isFree(":1") is False

    def test_lock_file_present(self, tmp_path) -> None:
        probe = _probe(tmp_path, _FakeDisplayFactory())
        (tmp_path / ".X1-lock").touch()
        assert probe.nestedDisplay_isFree(":1") is False

    def test_other_display_ignored(self, tmp_path) -> None:
        probe = _probe(tmp_path, _FakeDisplayFactory())
        (tmp_path / "sockets" / "X0").touch()
        assert probe.nestedDisplay_isFree(":1") is True


class TestPreflightRun:
    """Tests for combined preflight."""

    def test_passes(self, tmp_path) -> None:
        _probe(tmp_path, _FakeDisplayFactory()).preflight_run(settings.sessionParameters_get())

    def test_taken_display_raises(self, tmp_path) -> None:
        probe = _probe(tmp_path, _FakeDisplayFactory())
        (tmp_path / ".X1-lock").touch()
        with pytest.raises(PreflightError, match="already in use"):
            probe.preflight_run(settings.sessionParameters_get())

    def test_default_dirs_from_settings(self) -> None:
        probe = DisplayProbe(display_factory=_FakeDisplayFactory())
        assert probe._socket_dir == Path(settings.X11_SOCKET_DIR)
        assert probe._lock_dir == Path(settings.X11_LOCK_DIR)
