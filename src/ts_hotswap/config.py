"""
Runtime Configuration Store.

Settings are read from the ``[tool.ts_hotswap]`` table of the nearest
``pyproject.toml`` and overridden by explicit (CLI) arguments.
"""

import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from ts_hotswap.frontend.parser import SUPPORTED_DIALECTS

DEFAULT_INPUT = Path("in") / "in.ts"
DEFAULT_LOCALS_OUT = Path("out") / "locals.ts"
DEFAULT_MAIN_OUT = Path("out") / "main.ts"


class CompilerConfig(BaseModel):
  """
  Global configuration container for the split compiler.
  """

  locals_name: str = Field("__locals__", description="Name of the parameter injected into the main module.")
  entry_name: str = Field("app", description="Identifier the entry call chain must bottom out at.")
  dialect: str = Field("typescript", description="Parser grammar: 'typescript' or 'tsx'.")
  legacy_scoping: bool = Field(
    False,
    description="Reproduce historical key-named destructuring, leaking for...of shadows and pre-catch scopes.",
  )
  input_path: Path = Field(DEFAULT_INPUT, description="Script read by the CLI.")
  locals_out: Path = Field(DEFAULT_LOCALS_OUT, description="Where the CLI writes the locals module.")
  main_out: Path = Field(DEFAULT_MAIN_OUT, description="Where the CLI writes the main module.")

  @field_validator("locals_name", "entry_name")
  @classmethod
  def validate_identifier(cls, v: str) -> str:
    """
    Ensures the name can be spliced into generated code.

    Args:
        v (str): The candidate name.

    Returns:
        str: The stripped name.

    Raises:
        ValueError: If the name is not a plain identifier.
    """
    v_clean = v.strip()
    if not v_clean.replace("$", "_").isidentifier():
      raise ValueError(f"'{v}' is not a valid identifier")
    return v_clean

  @field_validator("dialect")
  @classmethod
  def validate_dialect(cls, v: str) -> str:
    v_clean = v.lower().strip()
    if v_clean not in SUPPORTED_DIALECTS:
      raise ValueError(f"Unknown dialect: '{v_clean}'. Supported dialects: {list(SUPPORTED_DIALECTS)}")
    return v_clean

  @classmethod
  def load(
    cls,
    locals_name: Optional[str] = None,
    entry_name: Optional[str] = None,
    dialect: Optional[str] = None,
    legacy_scoping: Optional[bool] = None,
    input_path: Optional[Path] = None,
    locals_out: Optional[Path] = None,
    main_out: Optional[Path] = None,
    search_path: Optional[Path] = None,
  ) -> "CompilerConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        locals_name (Optional[str]): Override for the injected parameter name.
        entry_name (Optional[str]): Override for the entry identifier.
        dialect (Optional[str]): Override for the parser dialect.
        legacy_scoping (Optional[bool]): Override for legacy scoping.
        input_path (Optional[Path]): Override for the input script.
        locals_out (Optional[Path]): Override for the locals module output.
        main_out (Optional[Path]): Override for the main module output.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        CompilerConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    def _path(override: Optional[Path], key: str, default: Path) -> Path:
      if override is not None:
        return Path(override)
      if key in toml_config:
        raw = Path(toml_config[key])
        return toml_dir / raw if toml_dir and not raw.is_absolute() else raw
      return default

    if legacy_scoping is not None:
      final_legacy = legacy_scoping
    else:
      final_legacy = toml_config.get("legacy_scoping", False)

    return cls(
      locals_name=locals_name or toml_config.get("locals_name", "__locals__"),
      entry_name=entry_name or toml_config.get("entry_name", "app"),
      dialect=dialect or toml_config.get("dialect", "typescript"),
      legacy_scoping=final_legacy,
      input_path=_path(input_path, "input_path", DEFAULT_INPUT),
      locals_out=_path(locals_out, "locals_out", DEFAULT_LOCALS_OUT),
      main_out=_path(main_out, "main_out", DEFAULT_MAIN_OUT),
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("ts_hotswap", {}), parent

  return {}, None
