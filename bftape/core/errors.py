"""Error taxonomy for the Brainfuck interpreter.

Fatal errors are raised and stop the run at the first failing instruction.
``UnclosedLoopError`` is the one exception to that rule: the interpreter
collects it as a diagnostic on the result instead of raising it.
"""

from typing import Optional


class BrainfuckError(Exception):
    """Base class for everything the interpreter reports."""


class StartupError(BrainfuckError):
    """Bad arguments or an unreadable program; nothing has executed yet."""


class ProgramTooLargeError(StartupError):
    def __init__(self, path: str, limit: int):
        self.path = path
        self.limit = limit
        super().__init__(f"Program {path} exceeds the maximum size of {limit} bytes")


class ConfigError(StartupError):
    """Invalid configuration value or config file."""


class AllocationError(BrainfuckError):
    """The tape could not be reserved."""


class ExecutionError(BrainfuckError):
    """A fatal condition raised while the dispatch loop was running."""

    def __init__(self, message: str, pc: Optional[int] = None):
        self.pc = pc
        super().__init__(message)


class OutOfBoundsError(ExecutionError):
    def __init__(self, pc: int):
        super().__init__(f"Data pointer out of bounds at position {pc}", pc)


class UnmatchedBracketError(ExecutionError):
    def __init__(self, bracket: str, pc: int):
        self.bracket = bracket
        super().__init__(f"Unmatched '{bracket}' at position {pc}", pc)


class TooManyNestedLoopsError(ExecutionError):
    def __init__(self, limit: int, pc: int):
        self.limit = limit
        super().__init__(f"Too many nested loops (max {limit})", pc)


class UnclosedLoopError(BrainfuckError):
    """Loops still open when the program ran out of instructions."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"{count} unclosed loops")
