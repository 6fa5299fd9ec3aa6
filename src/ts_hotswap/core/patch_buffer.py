"""
Source Patch Buffer.

An immutable original text plus a set of scheduled edits keyed by *original*
character offsets. Each derived module owns one buffer, so edits made while
building the locals module never leak into the main module and vice versa.

Edits are applied once, at render time, in offset order. Registration order
does not matter because overlapping edits are rejected when scheduled.
"""

from dataclasses import dataclass
from typing import List

from ts_hotswap.errors import PatchConflict


@dataclass(frozen=True)
class _Edit:
  start: int
  end: int
  text: str

  @property
  def is_insert(self) -> bool:
    return self.start == self.end

  def conflicts_with(self, other: "_Edit") -> bool:
    if self.is_insert and other.is_insert:
      return self.start == other.start
    if self.is_insert:
      return other.start < self.start < other.end
    if other.is_insert:
      return self.start < other.start < self.end
    return self.start < other.end and other.start < self.end


class SourcePatchBuffer:
  """
  Text buffer that accumulates non-overlapping edits against an original string.

  Usage:
      buf = SourcePatchBuffer("let x = 1")
      buf.replace(4, 5, "y")
      buf.append(";")
      buf.render()  # "let y = 1;"
  """

  def __init__(self, original: str) -> None:
    self._original = original
    self._edits: List[_Edit] = []
    self._tail: List[str] = []

  @property
  def original(self) -> str:
    """The untouched source text."""
    return self._original

  def __len__(self) -> int:
    return len(self._original)

  def replace(self, start: int, end: int, text: str) -> None:
    """
    Schedules replacement of ``original[start:end]`` with ``text``.

    A zero-length range inserts ``text`` at ``start``.

    Raises:
        PatchConflict: If the range is invalid or overlaps an existing edit.
    """
    if not 0 <= start <= end <= len(self._original):
      raise PatchConflict(f"Edit range [{start}, {end}) outside source of length {len(self._original)}")
    edit = _Edit(start, end, text)
    for existing in self._edits:
      if edit.conflicts_with(existing):
        raise PatchConflict(f"Edit [{start}, {end}) overlaps [{existing.start}, {existing.end})")
    self._edits.append(edit)

  def remove(self, start: int, end: int) -> None:
    """Schedules deletion of ``original[start:end]``. Empty ranges are ignored."""
    if start == end:
      return
    self.replace(start, end, "")

  def append(self, text: str) -> None:
    """Adds ``text`` after the end of the rendered output."""
    self._tail.append(text)

  def slice_original(self, start: int, end: int) -> str:
    """Reads back a range of the original text, ignoring scheduled edits."""
    return self._original[start:end]

  def render(self) -> str:
    """Applies every scheduled edit and returns the final text."""
    parts: List[str] = []
    cursor = 0
    for edit in sorted(self._edits, key=lambda e: (e.start, not e.is_insert)):
      parts.append(self._original[cursor : edit.start])
      parts.append(edit.text)
      cursor = edit.end
    parts.append(self._original[cursor:])
    parts.extend(self._tail)
    return "".join(parts)

  def __str__(self) -> str:
    return self.render()
