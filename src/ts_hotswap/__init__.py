"""
ts-hotswap Package.

Splits a TypeScript script that ends in an ``app(...)`` entry call into two
modules, so the entry logic can be hot-swapped while top-level state persists:

- a *locals* module keeping the original declarations and exporting a sealed
  accessor object over them;
- a *main* module holding only the entry call's first argument, rewritten to
  reach persisted state through an injected ``__locals__`` parameter.

Usage
-----

.. code-block:: python

    import ts_hotswap

    locals_code, main_code = ts_hotswap.split("let n = 0; app(() => n++);")
    print(main_code)
    # export default (__locals__) => () => (__locals__.n)++

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from ts_hotswap import CompilerConfig, HotswapEngine

    engine = HotswapEngine(CompilerConfig(locals_name="state"))
    res = engine.run(source)
    if res.success:
        print(res.locals_code, res.main_code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Any, Tuple

from ts_hotswap.config import CompilerConfig
from ts_hotswap.core.engine import HotswapEngine
from ts_hotswap.core.result import CompileResult
from ts_hotswap.errors import CompileError

__version__ = "0.1.0"


def split(code: str, **overrides: Any) -> Tuple[str, str]:
  """
  Splits a script into its locals and main modules.

  Args:
      code (str): The script text.
      **overrides: ``CompilerConfig`` fields (e.g. ``locals_name``, ``dialect``).

  Returns:
      Tuple[str, str]: The locals module text and the main module text.

  Raises:
      CompileError: If the script cannot be split.
  """
  engine = HotswapEngine(CompilerConfig(**overrides))
  result = engine.compile(code)
  return result.locals_code, result.main_code


__all__ = [
  "CompileError",
  "CompileResult",
  "CompilerConfig",
  "HotswapEngine",
  "split",
  "__version__",
]
