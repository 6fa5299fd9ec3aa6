"""
Tests for CompilerConfig loading and validation.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from ts_hotswap.config import CompilerConfig


def test_defaults():
  config = CompilerConfig()
  assert config.locals_name == "__locals__"
  assert config.entry_name == "app"
  assert config.dialect == "typescript"
  assert config.legacy_scoping is False
  assert config.input_path == Path("in") / "in.ts"
  assert config.locals_out == Path("out") / "locals.ts"
  assert config.main_out == Path("out") / "main.ts"


@pytest.mark.parametrize("name", ["1abc", "a-b", "", "a b"])
def test_invalid_locals_name(name):
  with pytest.raises(ValidationError):
    CompilerConfig(locals_name=name)


def test_dialect_is_normalized():
  assert CompilerConfig(dialect=" TSX ").dialect == "tsx"
  with pytest.raises(ValidationError):
    CompilerConfig(dialect="flow")


def test_load_without_toml(tmp_path):
  config = CompilerConfig.load(search_path=tmp_path)
  assert config == CompilerConfig()


def test_load_from_pyproject(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    "[tool.ts_hotswap]\n"
    'locals_name = "state"\n'
    "legacy_scoping = true\n"
    'main_out = "build/main.ts"\n',
    encoding="utf-8",
  )
  nested = tmp_path / "src" / "scripts"
  nested.mkdir(parents=True)

  config = CompilerConfig.load(search_path=nested)

  assert config.locals_name == "state"
  assert config.legacy_scoping is True
  assert config.main_out == tmp_path / "build" / "main.ts"
  assert config.locals_out == Path("out") / "locals.ts"


def test_cli_overrides_win(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    '[tool.ts_hotswap]\nlocals_name = "state"\nlegacy_scoping = true\n',
    encoding="utf-8",
  )
  config = CompilerConfig.load(locals_name="ctx", legacy_scoping=False, search_path=tmp_path)
  assert config.locals_name == "ctx"
  assert config.legacy_scoping is False


def test_other_tool_sections_are_ignored(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool.other]\nlocals_name = "nope"\n', encoding="utf-8")
  assert CompilerConfig.load(search_path=tmp_path).locals_name == "__locals__"


def test_malformed_toml_falls_back_to_defaults(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.ts_hotswap\n", encoding="utf-8")
  assert CompilerConfig.load(search_path=tmp_path) == CompilerConfig()
