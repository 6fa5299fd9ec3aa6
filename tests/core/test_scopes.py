"""
Tests for copy-on-write Scope Snapshots.
"""

from ts_hotswap.core.scopes import ScopeSnapshot


def test_membership_and_iteration():
  scope = ScopeSnapshot(["b", "a"])
  assert "a" in scope
  assert "z" not in scope
  assert list(scope) == ["a", "b"]
  assert len(scope) == 2


def test_shadow_in_fork_does_not_affect_parent():
  parent = ScopeSnapshot(["x", "y"])
  child = parent.fork()
  child.shadow("x")

  assert "x" not in child
  assert "x" in parent
  assert "y" in child


def test_shadow_in_parent_after_fork_does_not_affect_child():
  parent = ScopeSnapshot(["x"])
  child = parent.fork()
  parent.shadow("x")
  assert "x" in child


def test_shadow_unknown_name_is_noop():
  scope = ScopeSnapshot(["x"])
  scope.shadow("nope")
  assert list(scope) == ["x"]


def test_repr_lists_names():
  assert repr(ScopeSnapshot(["b", "a"])) == "ScopeSnapshot(['a', 'b'])"
