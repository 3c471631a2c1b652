"""
Brainfuck Step-by-Step Tracer

Observer for ``BrainfuckInterpreter`` that prints the program counter, the
instruction about to run and a window of the memory tape around the data
pointer before every step.
"""

import sys
from typing import Optional, TextIO, Tuple

from bftape.brainfuck import StepSnapshot


def tape_window(pointer: int, memory_size: int, context: int) -> Tuple[int, int]:
    """Inclusive (start, end) of the cells shown around the pointer."""
    start = pointer - context if pointer > context else 0
    end = pointer + context if pointer + context < memory_size else memory_size - 1
    return start, end


class DebugTracer:
    """Writes a snapshot of the tape for each executed instruction."""

    def __init__(self, stream: Optional[TextIO] = None, context: int = 10, table: bool = False):
        self.stream = stream
        self.context = context
        self.table = table
        self.steps = 0

    def __call__(self, snapshot: StepSnapshot) -> None:
        self.steps += 1
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(self.format_snapshot(snapshot))
        stream.flush()

    def format_snapshot(self, snapshot: StepSnapshot) -> str:
        start, end = tape_window(snapshot.pointer, len(snapshot.tape), self.context)
        header = f"\n[DEBUG] PC: {snapshot.pc}, Instruction: {snapshot.instruction}\n"
        if self.table:
            return header + self._format_table(snapshot, start, end)

        cells = []
        for i, value in enumerate(snapshot.tape[start:end + 1].tolist(), start):
            cells.append(f"[{value}] " if i == snapshot.pointer else f"{value} ")
        return header + f"Memory[{start}-{end}]: " + "".join(cells) + "\n"

    def _format_table(self, snapshot: StepSnapshot, start: int, end: int) -> str:
        memory_vals = []
        memory_ptrs = []
        memory_addrs = []

        for i, value in enumerate(snapshot.tape[start:end + 1].tolist(), start):
            memory_vals.append(f"{value:3d}")
            memory_ptrs.append(" ^ " if i == snapshot.pointer else "   ")
            memory_addrs.append(f"{i:3d}")

        return (
            "Memory:   [" + "|".join(memory_vals) + "]\n"
            + "Pointer:   " + " ".join(memory_ptrs) + "\n"
            + "Address:   " + " ".join(memory_addrs) + "\n"
        )
