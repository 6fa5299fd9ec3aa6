"""
Command Handlers.

Implements the ``compile`` and ``bindings`` commands:
1. Configuration loading (``pyproject.toml`` + CLI overrides).
2. Reading the input script.
3. Running the engine.
4. Writing both modules (only after a successful compile) and the trace.
"""

import json
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from ts_hotswap.config import CompilerConfig
from ts_hotswap.core.engine import HotswapEngine
from ts_hotswap.core.result import CompileResult
from ts_hotswap.utils.console import console, log_error, log_info, log_success


def _load_config(input_path: Optional[Path], **overrides) -> Optional[CompilerConfig]:
  search_path = input_path.parent if input_path is not None else None
  try:
    return CompilerConfig.load(input_path=input_path, search_path=search_path, **overrides)
  except ValidationError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return None


def _read_source(path: Path) -> Optional[str]:
  if not path.is_file():
    log_error(f"Input not found: [path]{path}[/path]")
    return None
  try:
    with open(path, "rt", encoding="utf-8") as f:
      return f.read()
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Cannot read [path]{path}[/path]: {escape(str(e))}")
    return None


def _write_modules(outputs: List[Tuple[Path, str]]) -> bool:
  """Writes every module or none of them."""
  written: List[Path] = []
  try:
    for path, text in outputs:
      path.parent.mkdir(parents=True, exist_ok=True)
      with open(path, "wt", encoding="utf-8") as f:
        written.append(path)
        f.write(text)
  except OSError as e:
    for path in written:
      path.unlink(missing_ok=True)
    log_error(f"Failed to write output: {escape(str(e))}")
    return False
  return True


def _write_trace(path: Path, result: CompileResult) -> None:
  try:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wt", encoding="utf-8") as f:
      json.dump(result.trace_events, f, indent=2)
    log_info(f"Trace saved to [path]{path}[/path]")
  except OSError as e:
    log_error(f"Failed to write trace: {escape(str(e))}")


def handle_compile(
  input_path: Optional[Path] = None,
  locals_out: Optional[Path] = None,
  main_out: Optional[Path] = None,
  locals_name: Optional[str] = None,
  legacy_scoping: Optional[bool] = None,
  tsx: bool = False,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'compile' command execution.

  Args:
      input_path: Script to split (default: ``in/in.ts``).
      locals_out: Destination of the locals module (default: ``out/locals.ts``).
      main_out: Destination of the main module (default: ``out/main.ts``).
      locals_name: Override for the injected parameter name.
      legacy_scoping: If True, reproduce historical scoping behaviour.
      tsx: If True, parse with the TSX grammar.
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  config = _load_config(
    input_path,
    locals_out=locals_out,
    main_out=main_out,
    locals_name=locals_name,
    legacy_scoping=legacy_scoping,
    dialect="tsx" if tsx else None,
  )
  if config is None:
    return 1

  code = _read_source(config.input_path)
  if code is None:
    return 1

  result = HotswapEngine(config).run(code)

  if json_trace_path:
    _write_trace(json_trace_path, result)

  if not result.success:
    for err in result.errors:
      log_error(f"Failed to compile [path]{config.input_path}[/path]: {escape(err)}")
    return 1

  if not _write_modules([(config.locals_out, result.locals_code), (config.main_out, result.main_code)]):
    return 1

  log_success(
    f"Compiled: [path]{config.input_path}[/path] -> "
    f"[path]{config.locals_out}[/path], [path]{config.main_out}[/path] ({len(result.bindings)} bindings)"
  )
  return 0


def handle_bindings(input_path: Optional[Path] = None, legacy_scoping: Optional[bool] = None, tsx: bool = False) -> int:
  """
  Handles the 'bindings' command: prints the persisted bindings of a script.

  Args:
      input_path: Script to inspect (default: ``in/in.ts``).
      legacy_scoping: If True, use key-named destructuring bindings.
      tsx: If True, parse with the TSX grammar.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  config = _load_config(input_path, legacy_scoping=legacy_scoping, dialect="tsx" if tsx else None)
  if config is None:
    return 1

  code = _read_source(config.input_path)
  if code is None:
    return 1

  result = HotswapEngine(config).run(code)
  if not result.success:
    for err in result.errors:
      log_error(escape(err))
    return 1

  table = Table(title=f"Bindings of {config.input_path}")
  table.add_column("Name", style="code")
  table.add_column("Access")
  for b in result.bindings:
    table.add_row(escape(b.name), "read/write" if b.mutable else "read-only")
  console.print(table)
  return 0
