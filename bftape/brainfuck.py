"""
Brainfuck Interpreter

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the byte in the cell at the pointer
    ,   Input a byte and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.

The tape is a fixed-length numpy array of unsigned bytes. Moving off either
end is an error unless ``wrap_memory`` is set, in which case the tape is
circular. Input is staged one line at a time; at end of input ``,`` either
zeroes the cell (``eof_behavior``) or leaves it unchanged.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, List, Optional

import numpy as np

from bftape.core.config import BrainfuckConfig
from bftape.core.errors import (
    AllocationError,
    BrainfuckError,
    OutOfBoundsError,
    TooManyNestedLoopsError,
    UnclosedLoopError,
    UnmatchedBracketError,
)
from bftape.core.input_buffer import InputBuffer

logger = logging.getLogger(__name__)


@dataclass
class StepSnapshot:
    """Interpreter state just before an instruction executes."""
    pc: int
    instruction: str
    pointer: int
    tape: np.ndarray


@dataclass
class ExecutionResult:
    tape: np.ndarray
    pointer: int
    pc: int
    steps: int
    diagnostics: List[BrainfuckError] = field(default_factory=list)

    @property
    def unclosed_loops(self) -> int:
        return sum(d.count for d in self.diagnostics if isinstance(d, UnclosedLoopError))


Observer = Callable[[StepSnapshot], None]


class BrainfuckInterpreter:
    def __init__(self, config: Optional[BrainfuckConfig] = None,
                 input_stream: Optional[BinaryIO] = None,
                 output_stream: Optional[BinaryIO] = None,
                 observer: Optional[Observer] = None):
        self.config = config or BrainfuckConfig()
        self.input_stream = input_stream if input_stream is not None else sys.stdin.buffer
        self.output_stream = output_stream if output_stream is not None else sys.stdout.buffer
        if observer is None and self.config.debug_mode:
            from bftape.brainfuck_debugger import DebugTracer
            observer = DebugTracer()
        self.observer = observer

    def _allocate_tape(self) -> np.ndarray:
        try:
            return np.zeros(self.config.memory_size, dtype=np.uint8)
        except (MemoryError, ValueError) as e:
            raise AllocationError(f"Memory allocation failed for {self.config.memory_size} cells") from e

    def run(self, code: str) -> ExecutionResult:
        """Execute sanitized Brainfuck code until it ends or a fatal error is raised."""
        config = self.config
        memory = self._allocate_tape()
        last = config.memory_size - 1
        pointer = 0
        pc = 0
        steps = 0
        loop_stack: List[int] = []
        input_buffer = InputBuffer(self.input_stream, interactive=config.interactive_input,
                                   prompt_stream=self.output_stream)
        output = self.output_stream
        observer = self.observer
        code_length = len(code)

        logger.debug("Running %d instructions on a %d cell tape", code_length, config.memory_size)

        while pc < code_length:
            cmd = code[pc]

            if observer is not None:
                observer(StepSnapshot(pc=pc, instruction=cmd, pointer=pointer, tape=memory))

            if cmd == '>':
                if pointer < last:
                    pointer += 1
                elif config.wrap_memory:
                    pointer = 0
                else:
                    raise OutOfBoundsError(pc)

            elif cmd == '<':
                if pointer > 0:
                    pointer -= 1
                elif config.wrap_memory:
                    pointer = last
                else:
                    raise OutOfBoundsError(pc)

            elif cmd == '+':
                memory[pointer] = (int(memory[pointer]) + 1) % 256

            elif cmd == '-':
                memory[pointer] = (int(memory[pointer]) - 1) % 256

            elif cmd == '.':
                output.write(bytes((int(memory[pointer]),)))
                output.flush()

            elif cmd == ',':
                value = input_buffer.read_byte()
                if value is not None:
                    memory[pointer] = value
                elif config.eof_behavior:
                    memory[pointer] = 0

            elif cmd == '[':
                if memory[pointer] == 0:
                    pc = self._skip_loop(code, pc)
                else:
                    if len(loop_stack) >= config.max_nested_loops:
                        raise TooManyNestedLoopsError(config.max_nested_loops, pc)
                    loop_stack.append(pc)

            elif cmd == ']':
                if not loop_stack:
                    raise UnmatchedBracketError(']', pc)
                if memory[pointer] != 0:
                    pc = loop_stack[-1]
                else:
                    loop_stack.pop()

            pc += 1
            steps += 1

        diagnostics: List[BrainfuckError] = []
        if loop_stack:
            diagnostics.append(UnclosedLoopError(len(loop_stack)))

        logger.debug("Finished after %d steps", steps)
        return ExecutionResult(tape=memory, pointer=pointer, pc=pc, steps=steps, diagnostics=diagnostics)

    @staticmethod
    def _skip_loop(code: str, start: int) -> int:
        """Find the ']' matching the '[' at ``start`` by scanning forward."""
        depth = 1
        pc = start
        while depth > 0:
            pc += 1
            if pc >= len(code):
                raise UnmatchedBracketError('[', start)
            if code[pc] == '[':
                depth += 1
            elif code[pc] == ']':
                depth -= 1
        return pc
