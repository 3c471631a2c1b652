"""Configurable Brainfuck interpreter with a fixed-size byte tape."""

from bftape.brainfuck import BrainfuckInterpreter, ExecutionResult, StepSnapshot
from bftape.brainfuck_debugger import DebugTracer
from bftape.core.bf_runner import load_program, run_code
from bftape.core.config import BrainfuckConfig, load_config
from bftape.core.sanitize import clean_code

__version__ = "0.1.0"

__all__ = [
    "BrainfuckConfig",
    "BrainfuckInterpreter",
    "DebugTracer",
    "ExecutionResult",
    "StepSnapshot",
    "clean_code",
    "load_config",
    "load_program",
    "run_code",
]
