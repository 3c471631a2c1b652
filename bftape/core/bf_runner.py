import io
import logging
from typing import Any, Optional, Tuple, Union

from bftape.brainfuck import BrainfuckInterpreter, ExecutionResult, Observer
from bftape.core.config import MAX_PROGRAM_SIZE, BrainfuckConfig
from bftape.core.errors import ProgramTooLargeError, StartupError
from bftape.core.sanitize import clean_code

logger = logging.getLogger(__name__)


def load_program(path: str, max_size: int = MAX_PROGRAM_SIZE) -> str:
    """Read a program file and strip it down to Brainfuck commands.

    Files larger than ``max_size`` bytes are rejected rather than truncated.
    """
    try:
        with open(path, 'rb') as f:
            source = f.read(max_size + 1)
    except OSError as e:
        raise StartupError(f"Could not open file {path}") from e
    if len(source) > max_size:
        raise ProgramTooLargeError(path, max_size)
    code = clean_code(source)
    logger.debug("Loaded %s: %d bytes, %d instructions", path, len(source), len(code))
    return code


def execute(code: str, config: BrainfuckConfig, input_data: Union[str, bytes] = b"",
            observer: Optional[Observer] = None) -> Tuple[bytes, ExecutionResult]:
    """Run code against in-memory streams. Returns (output, result).

    Text input is encoded as UTF-8 before it is fed to ','.
    """
    if isinstance(input_data, str):
        input_data = input_data.encode("utf-8")
    output = io.BytesIO()
    itp = BrainfuckInterpreter(config, input_stream=io.BytesIO(input_data),
                               output_stream=output, observer=observer)
    result = itp.run(clean_code(code))
    return output.getvalue(), result


def run_code(code: str, input_data: Union[str, bytes] = b"",
             config: Optional[BrainfuckConfig] = None, **overrides: Any) -> bytes:
    """Execute BF code with the given input and return everything it printed.

    Fatal errors propagate; keyword arguments override fields of ``config``.
    """
    config = (config or BrainfuckConfig()).with_overrides(**overrides)
    output, _ = execute(code, config, input_data)
    return output
