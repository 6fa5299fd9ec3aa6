"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Compile helpers returning the generated main / locals text.
- Console and tracer isolation between tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'ts_hotswap' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from ts_hotswap import split  # noqa: E402
from ts_hotswap.core.tracer import reset_tracer  # noqa: E402
from ts_hotswap.utils.console import reset_console  # noqa: E402


@pytest.fixture
def main_of():
  """Returns a helper compiling a script and returning only the main module."""

  def _compile(code: str, **overrides) -> str:
    return split(code, **overrides)[1]

  return _compile


@pytest.fixture
def locals_of():
  """Returns a helper compiling a script and returning only the locals module."""

  def _compile(code: str, **overrides) -> str:
    return split(code, **overrides)[0]

  return _compile


@pytest.fixture(autouse=True)
def isolate_global_state():
  """
  Ensures the global tracer and console proxy do not leak between tests.
  """
  yield
  reset_tracer()
  reset_console()
