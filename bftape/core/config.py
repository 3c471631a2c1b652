"""Interpreter configuration.

Defaults can be moved with environment variables (a ``.env`` file in the
working directory is honoured):

    BF_MEMORY_SIZE        tape length in cells (default 30000)
    BF_MAX_NESTED_LOOPS   loop stack ceiling (default 1000)
    BF_MAX_PROGRAM_SIZE   largest program file accepted, in bytes (default 1000000)

A YAML or JSON config file may set any ``BrainfuckConfig`` field; command-line
flags are applied on top of it.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from bftape.core.errors import ConfigError

logger = logging.getLogger(__name__)

load_dotenv(find_dotenv(usecwd=True))

DEFAULT_MEMORY_SIZE = 30000


def _env_int(name: str, default: int) -> int:
    value = parse_positive_int(os.environ.get(name, ""))
    return default if value is None else value


def parse_positive_int(text: Any) -> Optional[int]:
    """Parse a leading integer the way C's atoi does; None unless it is > 0."""
    if isinstance(text, bool):
        return None
    if isinstance(text, int):
        return text if text > 0 else None
    match = re.match(r"\s*([+-]?\d+)", str(text))
    if not match:
        return None
    value = int(match.group(1))
    return value if value > 0 else None


def parse_memory_size(text: Any) -> int:
    """Tape size from user input; anything non-numeric or zero means the default.

    The fallback is the default in effect, so BF_MEMORY_SIZE moves it too.
    """
    value = parse_positive_int(text)
    return MEMORY_SIZE if value is None else value


MEMORY_SIZE = _env_int("BF_MEMORY_SIZE", DEFAULT_MEMORY_SIZE)
MAX_NESTED_LOOPS = _env_int("BF_MAX_NESTED_LOOPS", 1000)
MAX_PROGRAM_SIZE = _env_int("BF_MAX_PROGRAM_SIZE", 1000000)


@dataclass(frozen=True)
class BrainfuckConfig:
    wrap_memory: bool = False
    debug_mode: bool = False
    memory_size: int = MEMORY_SIZE
    eof_behavior: bool = False
    max_nested_loops: int = MAX_NESTED_LOOPS
    # Whether the input source is a terminal; decides if ',' prompts.
    interactive_input: bool = False

    def __post_init__(self):
        if isinstance(self.memory_size, bool) or not isinstance(self.memory_size, int) or self.memory_size <= 0:
            raise ConfigError(f"memory_size must be a positive integer, got {self.memory_size!r}")
        if isinstance(self.max_nested_loops, bool) or not isinstance(self.max_nested_loops, int) \
                or self.max_nested_loops <= 0:
            raise ConfigError(f"max_nested_loops must be a positive integer, got {self.max_nested_loops!r}")
        for name in ("wrap_memory", "debug_mode", "eof_behavior", "interactive_input"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")

    def describe(self) -> str:
        """One-line summary printed before a run."""
        return "Configuration: Memory Size={}, Wrapping={}, Debug={}, EOF=Set to {}".format(
            self.memory_size,
            "Enabled" if self.wrap_memory else "Disabled",
            "Enabled" if self.debug_mode else "Disabled",
            "0" if self.eof_behavior else "Unchanged",
        )

    def with_overrides(self, **overrides: Any) -> 'BrainfuckConfig':
        """Copy with the given fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BrainfuckConfig':
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        values = dict(data)
        if "memory_size" in values:
            values["memory_size"] = parse_memory_size(values["memory_size"])
        return cls(**values)


def load_config_file(path: str) -> Dict[str, Any]:
    """Read config values from a YAML (.yml/.yaml) or JSON file."""
    try:
        with open(path, 'r') as f:
            if path.endswith(('.yml', '.yaml')):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    logger.debug("Loaded %d config values from %s", len(data), path)
    return data


def load_config(path: Optional[str] = None, **overrides: Any) -> BrainfuckConfig:
    """Build the run configuration: env defaults, then config file, then overrides."""
    base = BrainfuckConfig.from_dict(load_config_file(path)) if path else BrainfuckConfig()
    config = base.with_overrides(**overrides)
    logger.debug("Resolved %s", config)
    return config
