"""Shared test fixtures."""

import io
from typing import Callable, Tuple, Type

import pytest

from bftape.brainfuck import BrainfuckInterpreter, StepSnapshot
from bftape.core.config import BrainfuckConfig


class StepLimitReached(Exception):
    """Raised by the step-limiting observer to stop a run that would not end."""


@pytest.fixture
def config() -> BrainfuckConfig:
    """Small tape, all options off."""
    return BrainfuckConfig(memory_size=64)


@pytest.fixture
def make_interpreter() -> Callable[..., Tuple[BrainfuckInterpreter, io.BytesIO]]:
    """Factory for an interpreter wired to in-memory streams."""

    def _make(config: BrainfuckConfig, input_data: bytes = b"",
              observer=None) -> Tuple[BrainfuckInterpreter, io.BytesIO]:
        output = io.BytesIO()
        interpreter = BrainfuckInterpreter(
            config,
            input_stream=io.BytesIO(input_data),
            output_stream=output,
            observer=observer,
        )
        return interpreter, output

    return _make


@pytest.fixture
def step_limit_reached() -> Type[StepLimitReached]:
    """Exception raised by observers from ``step_limit``."""
    return StepLimitReached


@pytest.fixture
def step_limit() -> Callable[[int], Callable[[StepSnapshot], None]]:
    """Observer factory that aborts a run after a number of steps."""

    def _limit(max_steps: int) -> Callable[[StepSnapshot], None]:
        count = 0

        def observer(snapshot: StepSnapshot) -> None:
            nonlocal count
            count += 1
            if count > max_steps:
                raise StepLimitReached(snapshot.pc)

        return observer

    return _limit
