"""
Tests for the tree-sitter Parser adapter and the Lifter.

Verifies:
1. Statement, expression and pattern kinds are lifted into script nodes.
2. Spans are character offsets into the original text.
3. Syntax errors raise ParseError with a position.
"""

import pytest

from ts_hotswap.errors import ParseError
from ts_hotswap.frontend import nodes as n
from ts_hotswap.frontend.lifter import OffsetMap
from ts_hotswap.frontend.parser import TypeScriptParser


@pytest.fixture(scope="module")
def parser():
  return TypeScriptParser()


def first(parser, code):
  return parser.parse(code).body[0]


def test_variable_declaration(parser):
  stmt = first(parser, "const a = 1, b = a;")
  assert isinstance(stmt, n.VariableDeclaration)
  assert stmt.kind == "const"
  assert [d.id.name for d in stmt.declarations] == ["a", "b"]
  assert isinstance(stmt.declarations[0].init, n.Literal)
  assert isinstance(stmt.declarations[1].init, n.Identifier)


def test_var_kind(parser):
  assert first(parser, "var v;").kind == "var"


def test_object_pattern_entries(parser):
  stmt = first(parser, "let {a, b: c, d = 1, ...rest} = o;")
  pattern = stmt.declarations[0].id
  assert isinstance(pattern, n.ObjectPattern)
  shorthand, pair, defaulted, rest = pattern.properties

  assert shorthand.shorthand and shorthand.key.name == "a"
  assert not pair.shorthand and pair.key.name == "b" and pair.value.name == "c"
  assert defaulted.shorthand and isinstance(defaulted.value, n.AssignmentPattern)
  assert isinstance(rest, n.RestElement) and rest.argument.name == "rest"


def test_array_pattern(parser):
  pattern = first(parser, "const [x, ...ys] = arr;").declarations[0].id
  assert isinstance(pattern, n.ArrayPattern)
  assert isinstance(pattern.elements[1], n.RestElement)


def test_imports(parser):
  stmt = first(parser, 'import d, { type T, v as w } from "m";')
  assert isinstance(stmt, n.ImportDeclaration)
  assert stmt.source == "m"
  assert not stmt.type_only
  assert [(s.local.name, s.type_only) for s in stmt.specifiers] == [("d", False), ("T", True), ("w", False)]

  type_only = first(parser, 'import type { U } from "m";')
  assert type_only.type_only


def test_import_require(parser):
  stmt = first(parser, 'import fs = require("fs");')
  assert isinstance(stmt, n.ImportEquals)
  assert stmt.local.name == "fs"


def test_type_declarations(parser):
  program = parser.parse("type T = number;\ninterface I { a: T }\ndeclare function f(): void;")
  assert [type(s) for s in program.body] == [n.TypeDeclaration] * 3


def test_declared_variable_is_a_declaration(parser):
  stmt = first(parser, "declare const g: number;")
  assert isinstance(stmt, n.VariableDeclaration)
  assert stmt.kind == "const"
  assert stmt.declarations[0].id.name == "g"
  assert stmt.declarations[0].init is None


def test_classes_and_exports_are_kept(parser):
  program = parser.parse("class A {}\nexport const x = 1;")
  assert isinstance(program.body[0], n.ClassDeclaration)
  assert isinstance(program.body[1], n.ExportDeclaration)
  assert isinstance(program.body[1].declaration, n.VariableDeclaration)


def test_call_chain(parser):
  call = first(parser, "app.config({}).run(() => {});").expression
  assert isinstance(call, n.CallExpression)
  assert isinstance(call.callee, n.MemberExpression)
  assert call.callee.property.name == "run"
  assert isinstance(call.callee.object, n.CallExpression)
  assert isinstance(call.arguments[0], n.ArrowFunctionExpression)


def test_member_vs_subscript(parser):
  dotted = first(parser, "a.b;").expression
  indexed = first(parser, "a[b];").expression
  assert not dotted.computed
  assert indexed.computed


def test_dynamic_import_callee(parser):
  call = first(parser, 'import("m");').expression
  assert isinstance(call.callee, n.ImportCallee)


def test_tagged_template(parser):
  expr = first(parser, "tag`a${b}c`;").expression
  assert isinstance(expr, n.TaggedTemplateExpression)
  assert [e.name for e in expr.quasi.expressions] == ["b"]


def test_type_wrappers(parser):
  expr = first(parser, "x as number;").expression
  assert isinstance(expr, n.TypeWrapper)
  assert expr.expression.name == "x"


def test_statement_headers_drop_parentheses(parser):
  stmt = first(parser, "while (x) {}")
  assert isinstance(stmt.test, n.Identifier)


def test_for_of_and_for_in(parser):
  of_loop = first(parser, "for (const x of xs) {}")
  in_loop = first(parser, "for (k in o) {}")
  assert isinstance(of_loop, n.ForOfStatement)
  assert isinstance(of_loop.left, n.VariableDeclaration)
  assert of_loop.left.declarations[0].id.name == "x"
  assert isinstance(in_loop, n.ForInStatement)
  assert isinstance(in_loop.left, n.Identifier)


def test_switch_cases(parser):
  stmt = first(parser, "switch (s) { case 1: f(); break; default: g(); }")
  assert isinstance(stmt, n.SwitchStatement)
  assert len(stmt.cases) == 2
  assert isinstance(stmt.cases[0].test, n.Literal)
  assert len(stmt.cases[0].consequent) == 2
  assert stmt.cases[1].test is None


def test_try_catch_finally(parser):
  stmt = first(parser, "try { a(); } catch (e) { b(); } finally { c(); }")
  assert stmt.handler.param.name == "e"
  assert stmt.finalizer is not None


def test_parameters_keep_defaults(parser):
  fn = first(parser, "function f(a: number, b = 2, { c }: O = {}, ...rest: number[]) {}")
  assert isinstance(fn, n.FunctionDeclaration)
  a, b, c, rest = fn.params
  assert isinstance(a, n.Identifier)
  assert isinstance(b, n.AssignmentPattern)
  assert isinstance(c, n.AssignmentPattern) and isinstance(c.left, n.ObjectPattern)
  assert isinstance(rest, n.RestElement)


def test_jsx_placeholder():
  expr = TypeScriptParser("tsx").parse("<div />;").body[0].expression
  assert isinstance(expr, n.JSXElement)


def test_spans_are_character_offsets(parser):
  code = 'const s = "ü"; s;'
  program = parser.parse(code)
  ident = program.body[1].expression
  assert code[ident.start : ident.end] == "s"
  assert ident.start == 15


def test_offset_map_identity_for_ascii():
  offsets = OffsetMap("abc", b"abc")
  assert offsets.char(2) == 2


def test_offset_map_multibyte():
  code = "é=1"
  offsets = OffsetMap(code, code.encode("utf-8"))
  assert offsets.char(2) == 1
  assert offsets.char(4) == 3


def test_parse_error(parser):
  with pytest.raises(ParseError) as exc:
    parser.parse("let x = ;\n")
  assert exc.value.position is not None
  assert str(exc.value).startswith("Parse error")


def test_unknown_dialect():
  with pytest.raises(ValueError):
    TypeScriptParser("flow")
