"""
Tests for the CLI 'compile' and 'bindings' commands.

Verifies:
1. Default fixed locations (in/in.ts -> out/locals.ts, out/main.ts).
2. Both files are written only on success; exit status reflects the outcome.
3. Flag overrides and trace dumping.
"""

import json
from unittest.mock import patch

import pytest
from rich.console import Console

from ts_hotswap.cli.__main__ import main
from ts_hotswap.utils.console import set_console

SCRIPT = "let hits = 0;\napp(() => hits++);\n"


@pytest.fixture
def workspace(tmp_path, monkeypatch):
  monkeypatch.chdir(tmp_path)
  (tmp_path / "in").mkdir()
  return tmp_path


@pytest.fixture
def recorded():
  """Routes console and log output to an in-memory recording console."""
  capture = Console(record=True, width=200)
  set_console(capture)
  return capture


def test_compile_default_locations(workspace):
  (workspace / "in" / "in.ts").write_text(SCRIPT, encoding="utf-8")

  assert main(["compile"]) == 0

  main_code = (workspace / "out" / "main.ts").read_text(encoding="utf-8")
  locals_code = (workspace / "out" / "locals.ts").read_text(encoding="utf-8")
  assert main_code == "export default (__locals__) => () => (__locals__.hits)++"
  assert locals_code.startswith("let hits = 0;\n")
  assert "get hits() { return hits },set hits(v) { hits = v }," in locals_code


def test_compile_failure_writes_nothing(workspace, recorded):
  (workspace / "in" / "in.ts").write_text("let a = 1;\napp(() => { class A {} });\n", encoding="utf-8")

  assert main(["compile"]) == 1

  assert not (workspace / "out").exists()
  assert "Class declarations are not supported" in recorded.export_text()


def test_compile_missing_input(workspace, recorded):
  assert main(["compile"]) == 1
  assert "Input not found" in recorded.export_text()


def test_write_failure_leaves_no_module(workspace, recorded):
  (workspace / "in" / "in.ts").write_text(SCRIPT, encoding="utf-8")
  locals_out = workspace / "gen" / "locals.ts"
  main_out = workspace / "gen" / "main.ts"
  main_out.mkdir(parents=True)

  code = main(["compile", "--locals-out", str(locals_out), "--main-out", str(main_out)])

  assert code == 1
  assert not locals_out.exists()
  assert main_out.is_dir()
  assert "Failed to write output" in recorded.export_text()


def test_undecodable_input(workspace, recorded):
  (workspace / "in" / "in.ts").write_bytes(b"let x = '\xff'; app(() => x);")

  assert main(["compile"]) == 1
  assert not (workspace / "out").exists()
  assert "Cannot read" in recorded.export_text()


def test_compile_flags(workspace):
  script = workspace / "script.tsx"
  script.write_text("let n = 0;\napp(() => <b>{n}</b>);\n", encoding="utf-8")
  plain = workspace / "plain.ts"
  plain.write_text(SCRIPT, encoding="utf-8")

  # JSX parses under --tsx but is rejected by the rewriter.
  assert main(["compile", "--input", str(script), "--tsx"]) == 1

  locals_out = workspace / "gen" / "l.ts"
  main_out = workspace / "gen" / "m.ts"
  trace = workspace / "trace.json"
  code = main(
    [
      "compile",
      "--input",
      str(plain),
      "--locals-out",
      str(locals_out),
      "--main-out",
      str(main_out),
      "--locals-name",
      "state",
      "--json-trace",
      str(trace),
    ]
  )

  assert code == 0
  assert main_out.read_text(encoding="utf-8") == "export default (state) => () => (state.hits)++"
  assert locals_out.exists()
  events = json.loads(trace.read_text(encoding="utf-8"))
  assert any(e["type"] == "source_mutation" for e in events)


def test_legacy_flag_is_forwarded(workspace):
  (workspace / "in" / "in.ts").write_text(SCRIPT, encoding="utf-8")
  with patch("ts_hotswap.cli.handlers.handle_compile", return_value=0) as mock_handle:
    main(["compile", "--legacy-scoping"])

  mock_handle.assert_called_once()
  assert mock_handle.call_args.kwargs["legacy_scoping"] is True


def test_legacy_flag_defaults_to_config(workspace):
  with patch("ts_hotswap.cli.handlers.handle_compile", return_value=0) as mock_handle:
    main(["compile"])
  assert mock_handle.call_args.kwargs["legacy_scoping"] is None


def test_invalid_locals_name(workspace, recorded):
  (workspace / "in" / "in.ts").write_text(SCRIPT, encoding="utf-8")
  assert main(["compile", "--locals-name", "not valid"]) == 1
  assert "Invalid configuration" in recorded.export_text()


def test_bindings_table(workspace, recorded):
  (workspace / "in" / "in.ts").write_text('import { db } from "./db";\nconst max = 3;\n' + SCRIPT, encoding="utf-8")

  assert main(["bindings"]) == 0

  output = recorded.export_text()
  assert "db" in output
  assert "max" in output
  assert "read/write" in output
  assert not (workspace / "out").exists()


def test_version(capsys):
  with pytest.raises(SystemExit) as exc:
    main(["--version"])
  assert exc.value.code == 0
  assert "0.1.0" in capsys.readouterr().out
