#!/usr/bin/env python3
"""
Command-line front end: bftape [options] <brainfuck_file>
"""

import argparse
import logging
import sys
from typing import List, Optional

from bftape.brainfuck import BrainfuckInterpreter
from bftape.brainfuck_debugger import DebugTracer
from bftape.core.bf_runner import load_program
from bftape.core.config import MEMORY_SIZE, load_config, parse_memory_size
from bftape.core.errors import BrainfuckError, StartupError

logger = logging.getLogger(__name__)

EPILOG = "Example: %(prog)s -w -m 100000 program.bf"


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad arguments with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    ap = UsageArgumentParser(prog="bftape", epilog=EPILOG,
                             description="Run a Brainfuck program from a file.")
    ap.add_argument("file", help="Brainfuck source file")
    ap.add_argument("-w", dest="wrap_memory", action="store_const", const=True,
                    help="Enable memory wrapping (instead of bounds checking)")
    ap.add_argument("-d", dest="debug_mode", action="store_const", const=True,
                    help="Enable debug mode")
    ap.add_argument("-m", dest="memory_size", metavar="SIZE", type=parse_memory_size,
                    help=f"Set memory size (default: {MEMORY_SIZE})")
    ap.add_argument("-z", dest="eof_behavior", action="store_const", const=True,
                    help="Set cell to 0 on EOF (default: leave unchanged)")
    ap.add_argument("-t", "--table", action="store_true",
                    help="Show the debug trace as a memory/pointer/address table")
    ap.add_argument("-c", "--config", help="YAML or JSON file with configuration values")
    ap.add_argument("-q", "--quiet", action="store_true",
                    help="Do not print the banner and completion message")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = load_config(
            args.config,
            wrap_memory=args.wrap_memory,
            debug_mode=args.debug_mode,
            memory_size=args.memory_size,
            eof_behavior=args.eof_behavior,
            interactive_input=sys.stdin.isatty(),
        )
        code = load_program(args.file)
    except StartupError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Running Brainfuck program from: {args.file}")
        print(config.describe() + "\n", flush=True)

    observer = DebugTracer(table=args.table) if config.debug_mode else None
    interpreter = BrainfuckInterpreter(config, observer=observer)
    try:
        result = interpreter.run(code)
    except BrainfuckError as e:
        sys.stdout.flush()
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 1

    logger.debug("Program finished after %d steps", result.steps)
    for diagnostic in result.diagnostics:
        print(f"Error: {diagnostic}", file=sys.stderr)

    if not args.quiet:
        print("\n\nProgram execution complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
