from typing import Union

COMMANDS = "><+-.,[]"


def clean_code(source: Union[str, bytes]) -> str:
    """Remove comments, keeping only the eight Brainfuck commands in order.

    Bytes are decoded as latin-1 so every input byte is looked at exactly once.
    """
    if isinstance(source, (bytes, bytearray)):
        source = bytes(source).decode("latin-1")
    return ''.join(c for c in source if c in COMMANDS)
