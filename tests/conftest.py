"""Shared pytest fixtures for usecase tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
from click.testing import CliRunner

from tests.sample_use_cases import User
from usecase.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def admin() -> User:
    """The logged-in user (id 42) with admin rights."""
    return User(42, "Christian", can_admin=True)


@pytest.fixture(autouse=True)
def _telemetry_off() -> Generator[None]:
    """Keep the telemetry context var from leaking between tests."""
    disable_telemetry()
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _root_handlers() -> Generator[None]:
    """CLI invocations reconfigure logging; put the root handlers back."""
    root = logging.getLogger()
    original = root.handlers[:]
    original_level = root.level
    lib_level = logging.getLogger("usecase").level
    yield
    root.handlers = original
    root.setLevel(original_level)
    logging.getLogger("usecase").setLevel(lib_level)
