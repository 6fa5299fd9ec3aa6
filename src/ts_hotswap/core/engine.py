"""
Orchestration Engine for the Hot-Swap Split.

This module provides the `HotswapEngine`, the primary driver of the pass. A
single compile runs, synchronously and to completion:

1.  **Parsing**: source text -> tree-sitter tree -> script nodes.
2.  **Locating**: find the entry call; seed the locals and main buffers.
3.  **Extraction**: collect top-level bindings and their mutability.
4.  **Rewriting**: rewrite free references in the entry argument.
5.  **Synthesis**: append the locals export; wrap the main module.

Every failure is fatal. `compile` raises `CompileError`; `run` folds it into a
failed `CompileResult` carrying no module text.
"""

from typing import Optional

from ts_hotswap.config import CompilerConfig
from ts_hotswap.core.bindings import BindingExtractor
from ts_hotswap.core.locator import EntryPointLocator
from ts_hotswap.core.result import BindingInfo, CompileResult
from ts_hotswap.core.rewriter import ScopedRewriter
from ts_hotswap.core.synthesizer import synthesize_locals, synthesize_main
from ts_hotswap.core.tracer import get_tracer, reset_tracer
from ts_hotswap.errors import CompileError
from ts_hotswap.frontend.nodes import Program
from ts_hotswap.frontend.parser import TypeScriptParser


class HotswapEngine:
  """
  The main compilation unit.

  Splits one script into its locals module and main module according to the
  given configuration.
  """

  def __init__(self, config: Optional[CompilerConfig] = None) -> None:
    self.config = config or CompilerConfig()
    self._parser = TypeScriptParser(self.config.dialect)

  def parse(self, code: str) -> Program:
    """
    Parses the source string into script nodes.

    Args:
        code (str): Input source code.

    Returns:
        Program: The lifted script.

    Raises:
        ParseError: If the text is not valid for the configured dialect.
    """
    return self._parser.parse(code)

  def compile(self, code: str) -> CompileResult:
    """
    Executes the full split pipeline.

    Args:
        code (str): The script text.

    Returns:
        CompileResult: Both module texts, the bindings and the trace.

    Raises:
        CompileError: On any failure; nothing is produced.
    """
    reset_tracer()
    tracer = get_tracer()
    tracer.start_phase("Hot-Swap Split", self.config.dialect)

    tracer.start_phase("Parsing", "Source -> Script Nodes")
    program = self.parse(code)
    tracer.end_phase()

    tracer.start_phase("Locating", f"Searching for {self.config.entry_name}()")
    entry = EntryPointLocator(self.config.entry_name).locate(program, code)
    tracer.end_phase()

    tracer.start_phase("Extraction", "Top-level bindings")
    extractor = BindingExtractor(self.config.entry_name, self.config.legacy_scoping)
    bindings = extractor.extract(entry.locals_statements, entry.locals_buffer)
    tracer.end_phase()

    tracer.start_phase("Rewriting", "Entry argument")
    rewriter = ScopedRewriter(entry.main_buffer, self.config.locals_name, self.config.legacy_scoping)
    rewriter.rewrite(entry.argument, [b.name for b in bindings])
    tracer.end_phase()

    tracer.start_phase("Synthesis", "Locals export and main header")
    synthesize_locals(entry.locals_buffer, bindings)
    synthesize_main(entry.main_buffer, entry.call, entry.argument, self.config.locals_name)
    locals_code = entry.locals_buffer.render()
    main_code = entry.main_buffer.render()
    tracer.end_phase()

    tracer.end_phase()
    return CompileResult(
      locals_code=locals_code,
      main_code=main_code,
      bindings=[BindingInfo(name=b.name, mutable=b.mutable) for b in bindings],
      success=True,
      trace_events=tracer.export(),
    )

  def run(self, code: str) -> CompileResult:
    """
    Executes the pipeline, reporting failures in the result instead of raising.

    Args:
        code (str): The script text.

    Returns:
        CompileResult: A successful result, or one with ``success=False``,
        the error message and no module text.
    """
    try:
      return self.compile(code)
    except CompileError as e:
      return CompileResult(success=False, errors=[str(e)], trace_events=get_tracer().export())
