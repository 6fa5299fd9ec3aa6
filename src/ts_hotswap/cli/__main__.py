"""
Main Entry Point for the ts-hotswap CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `ts_hotswap.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from ts_hotswap import __version__
from ts_hotswap.cli import handlers


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="ts-hotswap: split a script into hot-swappable modules")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: COMPILE ---
  cmd_compile = subparsers.add_parser("compile", help="Split a script into locals and main modules")
  cmd_compile.add_argument("--input", type=Path, default=None, help="Input script (default: in/in.ts)")
  cmd_compile.add_argument("--locals-out", type=Path, default=None, help="Locals module (default: out/locals.ts)")
  cmd_compile.add_argument("--main-out", type=Path, default=None, help="Main module (default: out/main.ts)")
  cmd_compile.add_argument("--locals-name", default=None, help="Injected parameter name (default: __locals__)")
  cmd_compile.add_argument(
    "--legacy-scoping",
    action="store_true",
    default=None,
    help="Reproduce historical destructuring, for...of and catch scoping (Overrides config)",
  )
  cmd_compile.add_argument("--tsx", action="store_true", help="Parse the input as TSX")
  cmd_compile.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the full execution trace to a JSON file."
  )

  # --- Command: BINDINGS ---
  cmd_bindings = subparsers.add_parser("bindings", help="List the persisted bindings of a script")
  cmd_bindings.add_argument("--input", type=Path, default=None, help="Input script (default: in/in.ts)")
  cmd_bindings.add_argument("--legacy-scoping", action="store_true", default=None, help="Use key-named bindings")
  cmd_bindings.add_argument("--tsx", action="store_true", help="Parse the input as TSX")

  args = parser.parse_args(argv)

  if args.command == "compile":
    return handlers.handle_compile(
      input_path=args.input,
      locals_out=args.locals_out,
      main_out=args.main_out,
      locals_name=args.locals_name,
      legacy_scoping=args.legacy_scoping,
      tsx=args.tsx,
      json_trace_path=args.json_trace,
    )

  elif args.command == "bindings":
    return handlers.handle_bindings(input_path=args.input, legacy_scoping=args.legacy_scoping, tsx=args.tsx)

  return 0


if __name__ == "__main__":
  sys.exit(main())
