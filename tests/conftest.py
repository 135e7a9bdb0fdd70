"""Pytest configuration and shared fixtures for nestlaunch tests

This module provides common fixtures and fakes used across the unit tests.
No test here builds a real project or starts a real X server.
"""

import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Generator, Optional

import pytest

from nestlaunch.common.config import Config, ConfigLoader
from nestlaunch.common.settings import settings


class FakeRunner:
    """Stand-in for subprocess.run that records every command"""

    def __init__(self, returncode: int = 0, stdout: str = "", error: Optional[OSError] = None) -> None:
        self.returncode: int = returncode
        self.stdout: str = stdout
        self.error: Optional[OSError] = error
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, Any]] = []

    def __call__(self, command: list[str], **kwargs: Any) -> SimpleNamespace:
        self.calls.append(list(command))
        self.kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(returncode=self.returncode, stdout=self.stdout, stderr="")


class FakeLocator:
    """Locator returning a fixed answer and counting queries"""

    def __init__(self, path: Optional[str]) -> None:
        self.path: Optional[str] = path
        self.queries: list[str] = []

    def resolve(self, name: str) -> Optional[str]:
        self.queries.append(name)
        return self.path


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Successful process runner"""
    return FakeRunner()


@pytest.fixture
def session_script(tmp_path: Path) -> Path:
    """Session script file that exists on disk"""
    script = tmp_path / "xinitrc"
    script.write_text("#!/bin/sh\nexec ./target/debug/wm start\n")
    script.chmod(0o755)
    return script


@pytest.fixture
def sample_config() -> Config:
    """Load the example configuration shipped at the repo root"""
    config_path = Path(__file__).parent.parent / "config.yml"
    if not config_path.exists():
        pytest.skip("config.yml not found - required for this test")
    return ConfigLoader.config_load(config_path)


@pytest.fixture
def reset_settings() -> Generator[None, None, None]:
    """Reset settings singleton between tests"""
    settings._config = None
    yield
    settings._config = None


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)
