"""
Scope Snapshots.

Tracks which persisted names are still free (and therefore rewritable) at a point
of the rewrite walk. Each scope-introducing construct forks the enclosing
snapshot; shadowing a name in the fork never affects the parent.
"""

from typing import FrozenSet, Iterable, Iterator


class ScopeSnapshot:
  """
  Copy-on-write set of persisted binding names.

  The underlying set is an immutable ``frozenset`` shared between a snapshot and
  its forks; ``shadow`` swaps in a new set for this snapshot only.
  """

  __slots__ = ("_names",)

  def __init__(self, names: Iterable[str] = ()) -> None:
    self._names: FrozenSet[str] = frozenset(names)

  def fork(self) -> "ScopeSnapshot":
    """Returns a child snapshot sharing the current names."""
    child = ScopeSnapshot.__new__(ScopeSnapshot)
    child._names = self._names
    return child

  def shadow(self, name: str) -> None:
    """Marks ``name`` as locally bound from this point on."""
    if name in self._names:
      self._names = self._names - {name}

  def __contains__(self, name: object) -> bool:
    return name in self._names

  def __iter__(self) -> Iterator[str]:
    return iter(sorted(self._names))

  def __len__(self) -> int:
    return len(self._names)

  def __repr__(self) -> str:
    return f"ScopeSnapshot({sorted(self._names)!r})"
