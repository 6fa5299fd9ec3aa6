"""
TypeScript Parser Frontend.

Wraps tree-sitter and the TypeScript grammars to turn script text into the
node set of :mod:`ts_hotswap.frontend.nodes`. Syntax errors are fatal and are
reported with the position of the first offending node.
"""

from typing import Callable, Dict, Optional

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node as TSNode, Parser, Tree

from ts_hotswap.errors import ParseError
from ts_hotswap.frontend.lifter import Lifter, OffsetMap
from ts_hotswap.frontend.nodes import Program

_GRAMMARS: Dict[str, Callable[[], object]] = {
  "typescript": ts_typescript.language_typescript,
  "tsx": ts_typescript.language_tsx,
}

SUPPORTED_DIALECTS = tuple(_GRAMMARS)


def _first_error(node: TSNode) -> Optional[TSNode]:
  if node.type == "ERROR" or node.is_missing:
    return node
  for child in node.children:
    if child.has_error or child.is_missing:
      found = _first_error(child)
      if found is not None:
        return found
  return None


class TypeScriptParser:
  """
  Parses TypeScript (or TSX) source into a ``Program`` node.

  Attributes:
      dialect (str): Either 'typescript' or 'tsx'.
  """

  def __init__(self, dialect: str = "typescript") -> None:
    if dialect not in _GRAMMARS:
      raise ValueError(f"Unknown dialect '{dialect}'. Supported: {SUPPORTED_DIALECTS}")
    self.dialect = dialect
    self._parser = Parser(Language(_GRAMMARS[dialect]()))

  def parse_tree(self, code: str) -> Tree:
    """Returns the raw tree-sitter tree for ``code``."""
    return self._parser.parse(code.encode("utf-8"))

  def parse(self, code: str) -> Program:
    """
    Parses source text and lifts it into script nodes.

    Args:
        code (str): The script text.

    Returns:
        Program: The lifted top-level statement list.

    Raises:
        ParseError: If the text is not valid for the configured dialect.
    """
    source = code.encode("utf-8")
    tree = self._parser.parse(source)
    root = tree.root_node
    offsets = OffsetMap(code, source)

    if root.has_error:
      bad = _first_error(root) or root
      span = offsets.span(bad)
      what = f"missing '{bad.type}'" if bad.is_missing else "unexpected syntax"
      raise ParseError(f"Parse error: {what}", kind=bad.type, position=span.position)

    return Lifter(code, offsets).lift_program(root)
