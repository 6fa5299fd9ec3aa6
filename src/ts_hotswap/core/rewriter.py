"""
Scoped Rewriter.

Walks the entry argument and rewrites every free reference to a persisted name
into an access on the injected locals parameter::

    x        ->  (__locals__.x)
    {x}      ->  {x:(__locals__.x)}

A reference is free when its name is still present in the active
``ScopeSnapshot``. Every construct that introduces bindings (blocks, function
parameters, loop headers, catch clauses, switch cases, object methods) forks
the snapshot and shadows the names it declares, so later references inside it
resolve to the local and references outside are unaffected.

Initializers are rewritten *before* their declarator shadows, so ``let x = x``
still reads the persisted ``x``.

Dispatch is a closed ``isinstance`` chain over the node unions of
:mod:`ts_hotswap.frontend.nodes` that ends in ``assert_never``; a new node kind
without a branch is a type-checking error.
"""

from typing import Iterable, List, Optional, Union, assert_never

from ts_hotswap.core.patch_buffer import SourcePatchBuffer
from ts_hotswap.core.scopes import ScopeSnapshot
from ts_hotswap.core.tracer import get_tracer
from ts_hotswap.errors import MalformedPattern, UnsupportedConstruct
from ts_hotswap.frontend.nodes import (
  ArrayExpression,
  ArrayPattern,
  ArrowFunctionExpression,
  AssignmentExpression,
  AssignmentPattern,
  AwaitExpression,
  BinaryExpression,
  BlockStatement,
  BreakStatement,
  CallExpression,
  ClassDeclaration,
  ClassExpression,
  ConditionalExpression,
  ContinueStatement,
  DebuggerStatement,
  DoWhileStatement,
  EmptyStatement,
  EnumDeclaration,
  ExportDeclaration,
  Expression,
  ExpressionStatement,
  ForInStatement,
  ForOfStatement,
  ForStatement,
  FunctionDeclaration,
  FunctionExpression,
  Identifier,
  IfStatement,
  ImportCallee,
  ImportDeclaration,
  ImportEquals,
  JSXElement,
  LabeledStatement,
  Literal,
  MemberExpression,
  MetaProperty,
  NewExpression,
  Node,
  ObjectExpression,
  ObjectMethod,
  ObjectPattern,
  ParenthesizedExpression,
  Pattern,
  PrivateName,
  Property,
  RestElement,
  ReturnStatement,
  SequenceExpression,
  SpreadElement,
  Statement,
  Super,
  SwitchStatement,
  TaggedTemplateExpression,
  TemplateLiteral,
  ThisExpression,
  ThrowStatement,
  TryStatement,
  TypeDeclaration,
  TypeWrapper,
  UnaryExpression,
  Unsupported,
  UpdateExpression,
  VariableDeclaration,
  WhileStatement,
  WithStatement,
  YieldExpression,
)

FunctionLike = Union[FunctionDeclaration, FunctionExpression, ArrowFunctionExpression, ObjectMethod]


def _unsupported(node: Node, what: str, kind: str) -> UnsupportedConstruct:
  return UnsupportedConstruct(f"{what} not supported inside the entry argument", kind=kind, position=node.span.position)


class ScopedRewriter:
  """
  Rewrites persisted-name references inside the entry argument, in place, on
  the main buffer.

  Attributes:
      buffer (SourcePatchBuffer): The main module buffer.
      locals_name (str): Name of the injected locals parameter.
      legacy_scoping (bool): Reproduce the historical ``for...of`` and ``catch``
          scoping (loop variables leak into the enclosing scope; catch bodies do
          not see the catch parameter).
  """

  def __init__(self, buffer: SourcePatchBuffer, locals_name: str = "__locals__", legacy_scoping: bool = False) -> None:
    self.buffer = buffer
    self.locals_name = locals_name
    self.legacy_scoping = legacy_scoping
    self._tracer = get_tracer()

  def rewrite(self, argument: Expression, names: Iterable[str]) -> None:
    """
    Rewrites ``argument`` against the set of persisted names.

    Args:
        argument: The entry call's first argument.
        names: Every extracted binding name.

    Raises:
        UnsupportedConstruct: If the argument contains syntax the walk rejects.
        MalformedPattern: If a declaration pattern is not well formed.
    """
    self.visit_expression(argument, ScopeSnapshot(names))

  # --- Edits ---

  def _edit(self, ident: Identifier, text: str, node_type: str) -> None:
    self.buffer.replace(ident.start, ident.end, text)
    self._tracer.log_mutation(node_type, ident.name, text, ident.start)

  def _reference(self, ident: Identifier, scope: ScopeSnapshot) -> None:
    if ident.name in scope:
      self._edit(ident, f"({self.locals_name}.{ident.name})", "Identifier")

  def _shorthand(self, ident: Identifier, scope: ScopeSnapshot) -> None:
    if ident.name in scope:
      self._edit(ident, f"{ident.name}:({self.locals_name}.{ident.name})", "Shorthand")

  # --- Statements ---

  def _visit_body(self, statements: List[Statement], scope: ScopeSnapshot) -> None:
    # Function declarations are visible across their whole block.
    for statement in statements:
      if isinstance(statement, FunctionDeclaration) and statement.id is not None:
        scope.shadow(statement.id.name)
    for statement in statements:
      self.visit_statement(statement, scope)

  def visit_statement(self, stmt: Statement, scope: ScopeSnapshot) -> None:
    """Rewrites one statement; declarations shadow names in ``scope``."""
    if isinstance(stmt, BlockStatement):
      self._visit_body(stmt.body, scope.fork())
    elif isinstance(stmt, (EmptyStatement, DebuggerStatement, BreakStatement, ContinueStatement, TypeDeclaration)):
      pass
    elif isinstance(stmt, ExpressionStatement):
      self.visit_expression(stmt.expression, scope)
    elif isinstance(stmt, IfStatement):
      self.visit_expression(stmt.test, scope)
      self.visit_statement(stmt.consequent, scope.fork())
      if stmt.alternate is not None:
        self.visit_statement(stmt.alternate, scope.fork())
    elif isinstance(stmt, LabeledStatement):
      self.visit_statement(stmt.body, scope)
    elif isinstance(stmt, ReturnStatement):
      if stmt.argument is not None:
        self.visit_expression(stmt.argument, scope)
    elif isinstance(stmt, ThrowStatement):
      self.visit_expression(stmt.argument, scope)
    elif isinstance(stmt, SwitchStatement):
      self.visit_expression(stmt.discriminant, scope)
      for case in stmt.cases:
        if case.test is not None:
          self.visit_expression(case.test, scope)
        self._visit_body(case.consequent, scope.fork())
    elif isinstance(stmt, TryStatement):
      self._try(stmt, scope)
    elif isinstance(stmt, WhileStatement):
      self.visit_expression(stmt.test, scope)
      self.visit_statement(stmt.body, scope.fork())
    elif isinstance(stmt, DoWhileStatement):
      self.visit_statement(stmt.body, scope.fork())
      self.visit_expression(stmt.test, scope)
    elif isinstance(stmt, WithStatement):
      self.visit_expression(stmt.object, scope)
      self.visit_statement(stmt.body, scope.fork())
    elif isinstance(stmt, ForStatement):
      self._for(stmt, scope)
    elif isinstance(stmt, (ForInStatement, ForOfStatement)):
      self._for_each(stmt, scope)
    elif isinstance(stmt, VariableDeclaration):
      self._declare_variables(stmt, scope)
    elif isinstance(stmt, FunctionDeclaration):
      if stmt.id is not None:
        scope.shadow(stmt.id.name)
      self._function(stmt, scope)
    elif isinstance(stmt, EnumDeclaration):
      for member in stmt.members:
        if member.initializer is not None:
          self.visit_expression(member.initializer, scope)
      scope.shadow(stmt.id.name)
    elif isinstance(stmt, ClassDeclaration):
      raise _unsupported(stmt, "Class declarations are", "class_declaration")
    elif isinstance(stmt, (ImportDeclaration, ImportEquals)):
      raise _unsupported(stmt, "Import statements are", "import_statement")
    elif isinstance(stmt, ExportDeclaration):
      raise _unsupported(stmt, "Export statements are", "export_statement")
    elif isinstance(stmt, Unsupported):
      raise _unsupported(stmt, f"'{stmt.kind}' is", stmt.kind)
    else:
      assert_never(stmt)

  def _try(self, stmt: TryStatement, scope: ScopeSnapshot) -> None:
    self.visit_statement(stmt.block, scope)
    handler = stmt.handler
    if handler is not None:
      catch_scope = scope.fork()
      if handler.param is not None:
        self._declare(handler.param, catch_scope)
      body_scope = scope if self.legacy_scoping else catch_scope
      self.visit_statement(handler.body, body_scope)
    if stmt.finalizer is not None:
      self.visit_statement(stmt.finalizer, scope)

  def _for(self, stmt: ForStatement, scope: ScopeSnapshot) -> None:
    loop = scope.fork()
    if isinstance(stmt.init, VariableDeclaration):
      self._declare_variables(stmt.init, loop)
    elif stmt.init is not None:
      self.visit_expression(stmt.init, loop)
    if stmt.test is not None:
      self.visit_expression(stmt.test, loop)
    if stmt.update is not None:
      self.visit_expression(stmt.update, loop)
    self.visit_statement(stmt.body, loop.fork())

  def _for_each(self, stmt: Union[ForInStatement, ForOfStatement], scope: ScopeSnapshot) -> None:
    self.visit_expression(stmt.right, scope)
    if self.legacy_scoping and isinstance(stmt, ForOfStatement):
      loop = scope
    else:
      loop = scope.fork()
    if isinstance(stmt.left, VariableDeclaration):
      self._declare_variables(stmt.left, loop)
    else:
      self._assign_target(stmt.left, loop)
    self.visit_statement(stmt.body, loop.fork())

  # --- Declarations ---

  def _declare_variables(self, decl: VariableDeclaration, scope: ScopeSnapshot) -> None:
    for declarator in decl.declarations:
      if declarator.init is not None:
        self.visit_expression(declarator.init, scope)
      self._declare(declarator.id, scope)

  def _declare(self, pattern: Pattern, scope: ScopeSnapshot) -> None:
    """
    Shadows every name bound by a declaration pattern.

    Computed keys are rewritten in the scope as it stands when they are reached;
    default values after their own target has shadowed.
    """
    if isinstance(pattern, Identifier):
      scope.shadow(pattern.name)
    elif isinstance(pattern, AssignmentPattern):
      self._declare(pattern.left, scope)
      self.visit_expression(pattern.right, scope)
    elif isinstance(pattern, ArrayPattern):
      for element in pattern.elements:
        if element is not None:
          self._declare(element, scope)
    elif isinstance(pattern, RestElement):
      if not isinstance(pattern.argument, Identifier):
        raise MalformedPattern("Rest element must be an identifier", kind="RestElement", position=pattern.span.position)
      scope.shadow(pattern.argument.name)
    elif isinstance(pattern, ObjectPattern):
      for prop in pattern.properties:
        if isinstance(prop, RestElement):
          self._declare(prop, scope)
        else:
          self._declare_property(prop, scope)
    elif isinstance(pattern, MemberExpression):
      raise _unsupported(pattern, "Member expressions as declaration targets are", "member_expression")
    else:
      raise MalformedPattern(
        f"Unexpected {type(pattern).__name__} in declaration pattern",
        kind=type(pattern).__name__,
        position=pattern.span.position,
      )

  def _declare_property(self, prop: Property, scope: ScopeSnapshot) -> None:
    if prop.computed:
      self.visit_expression(prop.key, scope)
    if prop.shorthand:
      if not isinstance(prop.key, Identifier):
        raise MalformedPattern("Object property must be an identifier", kind="Property", position=prop.span.position)
      if isinstance(prop.value, AssignmentPattern):
        self._declare(prop.value, scope)
      else:
        scope.shadow(prop.key.name)
    elif isinstance(prop.value, (Identifier, ObjectPattern, ArrayPattern, AssignmentPattern)):
      self._declare(prop.value, scope)
    else:
      raise MalformedPattern(
        f"Unexpected {type(prop.value).__name__} as object pattern value",
        kind=type(prop.value).__name__,
        position=prop.value.span.position,
      )

  def _assign_target(self, target: Pattern, scope: ScopeSnapshot) -> None:
    """Rewrites the left side of an assignment (or a bare ``for...in`` target)."""
    if isinstance(target, Identifier):
      self._reference(target, scope)
    elif isinstance(target, (TypeWrapper, ParenthesizedExpression)):
      self._assign_target(target.expression, scope)
    elif isinstance(target, RestElement):
      self._assign_target(target.argument, scope)
    elif isinstance(target, AssignmentPattern):
      self._assign_target(target.left, scope)
      self.visit_expression(target.right, scope)
    elif isinstance(target, ArrayPattern):
      for element in target.elements:
        if element is not None:
          self._assign_target(element, scope)
    elif isinstance(target, ObjectPattern):
      for prop in target.properties:
        if isinstance(prop, RestElement):
          self._assign_target(prop.argument, scope)
        else:
          self._assign_property(prop, scope)
    else:
      self.visit_expression(target, scope)

  def _assign_property(self, prop: Property, scope: ScopeSnapshot) -> None:
    if prop.computed:
      self.visit_expression(prop.key, scope)
    if not prop.shorthand:
      self._assign_target(prop.value, scope)
      return
    if not isinstance(prop.key, Identifier):
      raise MalformedPattern("Object property must be an identifier", kind="Property", position=prop.span.position)
    self._shorthand(prop.key, scope)
    if isinstance(prop.value, AssignmentPattern):
      self.visit_expression(prop.value.right, scope)

  # --- Functions ---

  def _function(self, fn: FunctionLike, scope: ScopeSnapshot, own_name: Optional[Identifier] = None) -> None:
    inner = scope.fork()
    if own_name is not None:
      inner.shadow(own_name.name)
    for param in fn.params:
      self._declare(param, inner)
    if isinstance(fn.body, BlockStatement):
      self._visit_body(fn.body.body, inner)
    else:
      self.visit_expression(fn.body, inner)

  # --- Expressions ---

  def _arguments(self, arguments: List[Union[Expression, SpreadElement]], scope: ScopeSnapshot) -> None:
    for arg in arguments:
      self.visit_expression(arg.argument if isinstance(arg, SpreadElement) else arg, scope)

  def _object(self, expr: ObjectExpression, scope: ScopeSnapshot) -> None:
    for prop in expr.properties:
      if isinstance(prop, Property):
        if prop.computed:
          self.visit_expression(prop.key, scope)
        if prop.shorthand and isinstance(prop.key, Identifier):
          self._shorthand(prop.key, scope)
        else:
          self.visit_expression(prop.value, scope)
      elif isinstance(prop, ObjectMethod):
        if prop.computed:
          self.visit_expression(prop.key, scope)
        self._function(prop, scope)
      elif isinstance(prop, SpreadElement):
        self.visit_expression(prop.argument, scope)
      else:
        raise _unsupported(prop, f"'{prop.kind}' is", prop.kind)

  def visit_expression(self, expr: Expression, scope: ScopeSnapshot) -> None:
    """Rewrites free references inside one expression."""
    if isinstance(expr, Identifier):
      self._reference(expr, scope)
    elif isinstance(expr, (ThisExpression, Super, MetaProperty, Literal)):
      pass
    elif isinstance(expr, TemplateLiteral):
      for part in expr.expressions:
        self.visit_expression(part, scope)
    elif isinstance(expr, TaggedTemplateExpression):
      if not isinstance(expr.tag, ImportCallee):
        self.visit_expression(expr.tag, scope)
      self.visit_expression(expr.quasi, scope)
    elif isinstance(expr, ArrayExpression):
      self._arguments(expr.elements, scope)
    elif isinstance(expr, ObjectExpression):
      self._object(expr, scope)
    elif isinstance(expr, FunctionExpression):
      self._function(expr, scope, own_name=expr.id)
    elif isinstance(expr, ArrowFunctionExpression):
      self._function(expr, scope)
    elif isinstance(expr, ClassExpression):
      raise _unsupported(expr, "Class expressions are", "class")
    elif isinstance(expr, CallExpression):
      if not isinstance(expr.callee, ImportCallee):
        self.visit_expression(expr.callee, scope)
      self._arguments(expr.arguments, scope)
    elif isinstance(expr, NewExpression):
      self.visit_expression(expr.callee, scope)
      self._arguments(expr.arguments, scope)
    elif isinstance(expr, MemberExpression):
      self.visit_expression(expr.object, scope)
      if expr.computed and not isinstance(expr.property, PrivateName):
        self.visit_expression(expr.property, scope)
    elif isinstance(expr, (UnaryExpression, UpdateExpression, AwaitExpression)):
      self.visit_expression(expr.argument, scope)
    elif isinstance(expr, BinaryExpression):
      if not isinstance(expr.left, PrivateName):
        self.visit_expression(expr.left, scope)
      self.visit_expression(expr.right, scope)
    elif isinstance(expr, AssignmentExpression):
      self._assign_target(expr.left, scope)
      self.visit_expression(expr.right, scope)
    elif isinstance(expr, ConditionalExpression):
      self.visit_expression(expr.test, scope)
      self.visit_expression(expr.consequent, scope)
      self.visit_expression(expr.alternate, scope)
    elif isinstance(expr, SequenceExpression):
      for part in expr.expressions:
        self.visit_expression(part, scope)
    elif isinstance(expr, (ParenthesizedExpression, TypeWrapper)):
      self.visit_expression(expr.expression, scope)
    elif isinstance(expr, YieldExpression):
      if expr.argument is not None:
        self.visit_expression(expr.argument, scope)
    elif isinstance(expr, JSXElement):
      raise _unsupported(expr, "JSX is", expr.kind)
    elif isinstance(expr, Unsupported):
      raise _unsupported(expr, f"'{expr.kind}' is", expr.kind)
    else:
      assert_never(expr)
