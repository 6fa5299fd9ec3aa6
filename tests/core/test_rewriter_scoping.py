"""
Tests for scope handling in the Scoped Rewriter.

Covers shadowing by declarations, parameters, loop headers, catch clauses and
function declarations, the initializer-before-shadow ordering, and the
``legacy_scoping`` switch.
"""

import pytest

HEADER = "export default (__locals__) => "


def test_free_reference_is_rewritten(main_of):
  assert main_of("let x = 1; app(() => x)") == HEADER + "() => (__locals__.x)"


def test_untouched_argument_is_kept_verbatim(main_of):
  code = "let x = 1;\napp(async (req) => {\n  // no persisted state\n  return req.body;\n});\n"
  assert main_of(code) == HEADER + "async (req) => {\n  // no persisted state\n  return req.body;\n}"


def test_inner_declaration_shadows(main_of):
  code = "let x = 1; app(() => { let x = 2; return x; })"
  assert main_of(code) == HEADER + "() => { let x = 2; return x; }"


def test_initializer_reads_outer_binding(main_of):
  code = "let x = 1; app(() => { let x = x + 1; })"
  assert main_of(code) == HEADER + "() => { let x = (__locals__.x) + 1; }"


def test_reference_before_shadow_is_rewritten(main_of):
  code = "let x = 1; app(() => { f(x); const x = 2; f(x); })"
  assert main_of(code) == HEADER + "() => { f((__locals__.x)); const x = 2; f(x); }"


def test_block_shadow_does_not_leak(main_of):
  code = "let x = 1; app(() => { { let x = 2; } return x; })"
  assert main_of(code) == HEADER + "() => { { let x = 2; } return (__locals__.x); }"


def test_if_branch_shadow_does_not_leak(main_of):
  code = "let x = 1; app((c) => { if (c) { let x = 2; } else { x = 3; } return x; })"
  expected = "(c) => { if (c) { let x = 2; } else { (__locals__.x) = 3; } return (__locals__.x); }"
  assert main_of(code) == HEADER + expected


def test_parameters_shadow(main_of):
  assert main_of("let a = 1; app((a) => a)") == HEADER + "(a) => a"
  assert main_of("let n = 0; app(n => n + 1)") == HEADER + "n => n + 1"


def test_default_sees_earlier_parameters(main_of):
  code = "let a = 1; let b = 2; app((a, c = a + b) => c)"
  assert main_of(code) == HEADER + "(a, c = a + (__locals__.b)) => c"


def test_destructured_parameters_shadow(main_of):
  code = "let a = 1; let b = 2; app(({a}, [c]) => a + b + c)"
  assert main_of(code) == HEADER + "({a}, [c]) => a + (__locals__.b) + c"


def test_typed_parameters_shadow(main_of):
  code = "let a = 1; app((a: number, b?: string) => a)"
  assert main_of(code) == HEADER + "(a: number, b?: string) => a"


def test_function_declaration_is_hoisted(main_of):
  code = "let f = 1; app(() => { g(f); function f() { return 2; } })"
  assert main_of(code) == HEADER + "() => { g(f); function f() { return 2; } }"


def test_named_function_expression_shadows_itself(main_of):
  code = "let fact = 0; app(function fact(n) { return n ? n * fact(n - 1) : 1; })"
  assert main_of(code) == HEADER + "function fact(n) { return n ? n * fact(n - 1) : 1; }"


def test_object_method_parameters_shadow(main_of):
  code = "let a = 1; app(() => ({ m(a) { return a; }, n() { return a; } }))"
  expected = "() => ({ m(a) { return a; }, n() { return (__locals__.a); } })"
  assert main_of(code) == HEADER + expected


def test_for_loop_header_shadows_inside_loop_only(main_of):
  code = "let i = 9; app(() => { for (let i = 0; i < 3; i++) { f(i); } return i; })"
  expected = "() => { for (let i = 0; i < 3; i++) { f(i); } return (__locals__.i); }"
  assert main_of(code) == HEADER + expected


def test_for_loop_initializer_reads_outer(main_of):
  code = "let i = 9; app(() => { for (let i = i; i > 0; i--) {} })"
  assert main_of(code) == HEADER + "() => { for (let i = (__locals__.i); i > 0; i--) {} }"


def test_for_in_shadows_inside_loop_only(main_of):
  code = "let k = 1; app((o) => { for (const k in o) { f(k); } return k; })"
  expected = "(o) => { for (const k in o) { f(k); } return (__locals__.k); }"
  assert main_of(code) == HEADER + expected


def test_for_of_iterable_uses_enclosing_scope(main_of):
  code = "let x = [1]; app(() => { for (const x of x) { f(x); } })"
  assert main_of(code) == HEADER + "() => { for (const x of (__locals__.x)) { f(x); } }"


def test_for_of_without_declaration_assigns_persisted(main_of):
  code = "let x = 0; app((xs) => { for (x of xs) {} })"
  assert main_of(code) == HEADER + "(xs) => { for ((__locals__.x) of xs) {} }"


def test_declaration_default_sees_own_shadow(main_of):
  code = "let b = 1; app((o) => { const {c = b} = o; return c; })"
  assert main_of(code) == HEADER + "(o) => { const {c = (__locals__.b)} = o; return c; }"


def test_destructuring_declaration_shadows_local_names(main_of):
  code = "let a = 1; let b = 2; app((o) => { const {a: b, ...rest} = o; return a + b; })"
  expected = "(o) => { const {a: b, ...rest} = o; return (__locals__.a) + b; }"
  assert main_of(code) == HEADER + expected


def test_switch_cases_use_outer_scope_for_tests(main_of):
  code = "let v = 1; app((s) => { switch (s) { case v: return v; default: return 0; } })"
  expected = "(s) => { switch (s) { case (__locals__.v): return (__locals__.v); default: return 0; } }"
  assert main_of(code) == HEADER + expected


def test_catch_parameter_is_never_rewritten(main_of):
  code = "let e = 1; app(() => { try { f(); } catch (e) {} })"
  assert main_of(code) == HEADER + "() => { try { f(); } catch (e) {} }"


class TestFixedScoping:
  """Default behaviour."""

  def test_for_of_shadow_does_not_leak(self, main_of):
    code = "let x = 1; app((xs) => { for (const x of xs) { f(x); } return x; })"
    expected = "(xs) => { for (const x of xs) { f(x); } return (__locals__.x); }"
    assert main_of(code) == HEADER + expected

  def test_catch_body_sees_parameter(self, main_of):
    code = "let e = 1; app(() => { try { f(); } catch (e) { g(e); } })"
    assert main_of(code) == HEADER + "() => { try { f(); } catch (e) { g(e); } }"


class TestLegacyScoping:
  """Historical behaviour reproduced with ``legacy_scoping=True``."""

  def test_for_of_shadow_leaks(self, main_of):
    code = "let x = 1; app((xs) => { for (const x of xs) { f(x); } return x; })"
    expected = "(xs) => { for (const x of xs) { f(x); } return x; }"
    assert main_of(code, legacy_scoping=True) == HEADER + expected

  def test_catch_body_uses_outer_scope(self, main_of):
    code = "let e = 1; app(() => { try { f(); } catch (e) { g(e); } })"
    assert main_of(code, legacy_scoping=True) == HEADER + "() => { try { f(); } catch (e) { g((__locals__.e)); } }"

  def test_renamed_destructuring_rewrites_key_name(self, main_of):
    code = "let {a: renamed} = obj; app(() => a + renamed)"
    assert main_of(code, legacy_scoping=True) == HEADER + "() => (__locals__.a) + renamed"
    assert main_of(code) == HEADER + "() => a + (__locals__.renamed)"


@pytest.mark.parametrize("locals_name", ["state", "$ctx"])
def test_custom_locals_name(main_of, locals_name):
  out = main_of("let x = 1; app(() => x)", locals_name=locals_name)
  assert out == f"export default ({locals_name}) => () => ({locals_name}.x)"
