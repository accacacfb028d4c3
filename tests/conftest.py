"""Shared test fixtures for the mediumify test suite."""

from __future__ import annotations

import pytest

from mediumify.config import MediumifyConfig
from mediumify.converter.formatter import MediumFormatter

VALID_TOKEN = "ghp_" + "a1B2c3D4e5" * 4


class FakeClock:
    """Manually advanced monotonic clock; ``sleep`` advances it."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def config() -> MediumifyConfig:
    """Configuration tuned for fast, deterministic tests."""
    return MediumifyConfig(
        retry_max_attempts=3,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
        retry_jitter=False,
    )


@pytest.fixture
def formatter(config: MediumifyConfig) -> MediumFormatter:
    return MediumFormatter(config)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token() -> str:
    return VALID_TOKEN
