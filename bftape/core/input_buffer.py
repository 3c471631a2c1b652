from typing import BinaryIO, Optional

PROMPT = b"\nInput: "


class InputBuffer:
    """Stages console input one line at a time for the ',' command.

    A fresh line is only requested once every byte of the previous one has
    been consumed. When ``interactive`` is set the prompt is written to
    ``prompt_stream`` before the blocking read. Text streams are encoded as
    UTF-8, so one character may fill several cells.
    """

    def __init__(self, stream: Optional[BinaryIO], interactive: bool = False,
                 prompt_stream: Optional[BinaryIO] = None):
        self.stream = stream
        self.interactive = interactive
        self.prompt_stream = prompt_stream
        self.line = b""
        self.position = 0
        self.lines_read = 0

    def exhausted(self) -> bool:
        return self.position >= len(self.line)

    def _refill(self) -> None:
        self.line = b""
        self.position = 0
        if self.stream is None:
            return
        if self.interactive and self.prompt_stream is not None:
            self.prompt_stream.write(PROMPT)
            self.prompt_stream.flush()
        line = self.stream.readline()
        if isinstance(line, str):
            line = line.encode("utf-8")
        if line:
            self.line = line
            self.lines_read += 1

    def read_byte(self) -> Optional[int]:
        """Return the next staged byte, or None at end of input."""
        if self.exhausted():
            self._refill()
        if self.exhausted():
            return None
        value = self.line[self.position]
        self.position += 1
        return value
