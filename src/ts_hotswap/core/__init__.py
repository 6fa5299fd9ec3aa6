"""
Core Split Pass.

Modules:
    - ``patch_buffer``: offset-keyed text edits over an immutable source.
    - ``locator``: finds the entry call and seeds both derived buffers.
    - ``bindings``: top-level binding extraction.
    - ``scopes``: copy-on-write scope snapshots.
    - ``rewriter``: scope-aware rewrite of the entry argument.
    - ``synthesizer``: locals export and main header.
    - ``engine``: the orchestrating ``HotswapEngine``.
"""

from ts_hotswap.core.bindings import Binding, BindingExtractor
from ts_hotswap.core.engine import HotswapEngine
from ts_hotswap.core.patch_buffer import SourcePatchBuffer
from ts_hotswap.core.result import BindingInfo, CompileResult

__all__ = [
  "Binding",
  "BindingExtractor",
  "BindingInfo",
  "CompileResult",
  "HotswapEngine",
  "SourcePatchBuffer",
]
