from __future__ import annotations

from datetime import datetime, timezone

import pytest

START = datetime(2024, 6, 20, tzinfo=timezone.utc)


class CallRecorder:
    """Timer callback that records each state it is called with."""

    def __init__(self) -> None:
        self.calls: list[object] = []

    def __call__(self, state: object) -> None:
        self.calls.append(state)

    @property
    def sequence(self) -> str:
        return "".join(str(call) for call in self.calls)


@pytest.fixture
def start() -> datetime:
    return START


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()
