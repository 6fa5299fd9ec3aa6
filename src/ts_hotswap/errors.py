"""
Compilation Errors.

Every failure of the split pass is fatal for the script being compiled. Errors
carry the construct kind and, where known, the source position so callers can
render a precise diagnostic. The pass never logs; it raises and lets the caller
decide presentation.
"""

from typing import Optional, Tuple


class CompileError(Exception):
  """
  Base class for all failures raised while splitting a script.

  Attributes:
      message (str): Human readable description.
      kind (Optional[str]): The syntax construct involved (e.g. 'class_declaration').
      position (Optional[Tuple[int, int]]): 1-based line and 0-based column.
  """

  def __init__(
    self,
    message: str,
    kind: Optional[str] = None,
    position: Optional[Tuple[int, int]] = None,
  ) -> None:
    self.message = message
    self.kind = kind
    self.position = position
    super().__init__(str(self))

  def __str__(self) -> str:
    if self.position:
      line, column = self.position
      return f"{self.message} (line {line}, column {column})"
    return self.message


class ParseError(CompileError):
  """The input is not valid source for the configured dialect."""


class EntryPointNotFound(CompileError):
  """No top-level statement is a call rooted at the entry identifier."""


class MissingEntryArgument(EntryPointNotFound):
  """The entry call exists but has no usable first argument."""


class UnsupportedBindingShape(CompileError):
  """A top-level declaration target cannot be classified into bindings."""


class MalformedPattern(CompileError):
  """A pattern position that requires an identifier holds something else."""


class UnsupportedConstruct(CompileError):
  """The entry argument contains syntax the scoped rewriter does not handle."""


class PatchConflict(ValueError):
  """Two edits scheduled on one patch buffer overlap, or an edit is out of range."""
