"""
Script Syntax Nodes.

Defines the closed set of statement, expression and pattern nodes the split pass
understands. The lifter produces these from the parser's concrete tree; the
binding extractor, locator and scoped rewriter consume them. Each node keeps the
character span it covers in the original text, which is all the patch buffers
need to edit the source in place.

Type-level syntax is not modelled. Forms the rewriter cannot handle are still
represented (``ClassDeclaration``, ``JSXElement``, ``Unsupported``...) so that
a script's top-level state may use them freely.
"""

from dataclasses import dataclass, field
from typing import List, Literal as LiteralType, Optional, Union


@dataclass(frozen=True)
class Span:
  """
  Location of a node in the original text.

  Attributes:
      start (int): Character offset of the first character.
      end (int): Character offset one past the last character.
      line (int): 1-based line of ``start``.
      column (int): 0-based column of ``start``.
  """

  start: int
  end: int
  line: int = 1
  column: int = 0

  @property
  def position(self):
    return (self.line, self.column)


@dataclass
class Node:
  """Base class for all syntax nodes."""

  span: Span

  @property
  def start(self) -> int:
    return self.span.start

  @property
  def end(self) -> int:
    return self.span.end


# --- Expressions ---


@dataclass
class Identifier(Node):
  name: str


@dataclass
class PrivateName(Node):
  """``#field`` references (member properties, ``#x in obj``)."""

  name: str


@dataclass
class ThisExpression(Node):
  pass


@dataclass
class Super(Node):
  pass


@dataclass
class ImportCallee(Node):
  """The ``import`` keyword used as the callee of a dynamic import."""


@dataclass
class MetaProperty(Node):
  """``new.target`` or ``import.meta``."""

  meta: str
  property: str


@dataclass
class Literal(Node):
  """
  String, numeric, regex, boolean and null literals.

  Attributes:
      kind (str): The literal flavour ('string', 'number', 'regex', 'true', 'false', 'null').
      raw (str): Source spelling.
  """

  kind: str
  raw: str


@dataclass
class TemplateLiteral(Node):
  expressions: List["Expression"] = field(default_factory=list)


@dataclass
class TaggedTemplateExpression(Node):
  tag: "Expression"
  quasi: TemplateLiteral


@dataclass
class SpreadElement(Node):
  argument: "Expression"


@dataclass
class ArrayExpression(Node):
  elements: List[Union["Expression", SpreadElement]] = field(default_factory=list)


@dataclass
class Property(Node):
  """
  A keyed entry of an object literal or object pattern.

  For shorthand entries (``{a}``) ``key`` and ``value`` are both the identifier;
  a shorthand pattern entry with a default (``{a = 1}``) has an
  ``AssignmentPattern`` value whose left side is that identifier.
  """

  key: "PropertyKey"
  value: Union["Expression", "Pattern"]
  computed: bool = False
  shorthand: bool = False


@dataclass
class ObjectMethod(Node):
  """Methods, getters and setters declared inside an object literal."""

  key: "PropertyKey"
  params: List["Pattern"]
  body: "BlockStatement"
  computed: bool = False
  kind: str = "method"


@dataclass
class ObjectExpression(Node):
  properties: List[Union[Property, ObjectMethod, SpreadElement, "Unsupported"]] = field(default_factory=list)


@dataclass
class FunctionExpression(Node):
  id: Optional[Identifier]
  params: List["Pattern"]
  body: "BlockStatement"
  is_async: bool = False
  is_generator: bool = False


@dataclass
class ArrowFunctionExpression(Node):
  params: List["Pattern"]
  body: Union["BlockStatement", "Expression"]
  is_async: bool = False


@dataclass
class ClassExpression(Node):
  id: Optional[Identifier] = None


@dataclass
class CallExpression(Node):
  callee: Union["Expression", ImportCallee]
  arguments: List[Union["Expression", SpreadElement]] = field(default_factory=list)
  optional: bool = False


@dataclass
class NewExpression(Node):
  callee: "Expression"
  arguments: List[Union["Expression", SpreadElement]] = field(default_factory=list)


@dataclass
class MemberExpression(Node):
  """
  Property access. ``computed`` distinguishes ``a[x]`` from ``a.x``; for the
  latter ``property`` is an ``Identifier`` naming the property, not a reference.
  """

  object: "Expression"
  property: Union["Expression", PrivateName]
  computed: bool = False
  optional: bool = False


@dataclass
class UnaryExpression(Node):
  operator: str
  argument: "Expression"


@dataclass
class UpdateExpression(Node):
  operator: str
  argument: "Expression"


@dataclass
class BinaryExpression(Node):
  """Arithmetic, comparison and logical operators; ``left`` may be a ``PrivateName``."""

  operator: str
  left: Union["Expression", PrivateName]
  right: "Expression"


@dataclass
class AssignmentExpression(Node):
  operator: str
  left: "Pattern"
  right: "Expression"


@dataclass
class ConditionalExpression(Node):
  test: "Expression"
  consequent: "Expression"
  alternate: "Expression"


@dataclass
class SequenceExpression(Node):
  expressions: List["Expression"] = field(default_factory=list)


@dataclass
class ParenthesizedExpression(Node):
  expression: "Expression"


@dataclass
class AwaitExpression(Node):
  argument: "Expression"


@dataclass
class YieldExpression(Node):
  argument: Optional["Expression"] = None
  delegate: bool = False


@dataclass
class TypeWrapper(Node):
  """
  Runtime expression wrapped in type-level syntax: ``x as T``, ``x satisfies T``,
  ``x!``, ``<T>x`` and ``f<T>``.
  """

  kind: str
  expression: "Expression"


@dataclass
class JSXElement(Node):
  kind: str


@dataclass
class Unsupported(Node):
  """Any syntax form the lifter does not model. ``kind`` is the parser's node type."""

  kind: str


# --- Patterns ---


@dataclass
class RestElement(Node):
  argument: "Pattern"


@dataclass
class AssignmentPattern(Node):
  left: "Pattern"
  right: "Expression"


@dataclass
class ArrayPattern(Node):
  elements: List[Optional["Pattern"]] = field(default_factory=list)


@dataclass
class ObjectPattern(Node):
  properties: List[Union[Property, RestElement]] = field(default_factory=list)


# --- Statements ---


@dataclass
class BlockStatement(Node):
  body: List["Statement"] = field(default_factory=list)


@dataclass
class EmptyStatement(Node):
  pass


@dataclass
class DebuggerStatement(Node):
  pass


@dataclass
class BreakStatement(Node):
  label: Optional[str] = None


@dataclass
class ContinueStatement(Node):
  label: Optional[str] = None


@dataclass
class ExpressionStatement(Node):
  expression: "Expression"


@dataclass
class IfStatement(Node):
  test: "Expression"
  consequent: "Statement"
  alternate: Optional["Statement"] = None


@dataclass
class LabeledStatement(Node):
  label: str
  body: "Statement"


@dataclass
class ReturnStatement(Node):
  argument: Optional["Expression"] = None


@dataclass
class ThrowStatement(Node):
  argument: "Expression"


@dataclass
class SwitchCase(Node):
  test: Optional["Expression"]
  consequent: List["Statement"] = field(default_factory=list)


@dataclass
class SwitchStatement(Node):
  discriminant: "Expression"
  cases: List[SwitchCase] = field(default_factory=list)


@dataclass
class CatchClause(Node):
  param: Optional["Pattern"]
  body: BlockStatement


@dataclass
class TryStatement(Node):
  block: BlockStatement
  handler: Optional[CatchClause] = None
  finalizer: Optional[BlockStatement] = None


@dataclass
class WhileStatement(Node):
  test: "Expression"
  body: "Statement"


@dataclass
class DoWhileStatement(Node):
  body: "Statement"
  test: "Expression"


@dataclass
class WithStatement(Node):
  object: "Expression"
  body: "Statement"


@dataclass
class VariableDeclarator(Node):
  id: "Pattern"
  init: Optional["Expression"] = None


@dataclass
class VariableDeclaration(Node):
  kind: LiteralType["var", "let", "const"]
  declarations: List[VariableDeclarator] = field(default_factory=list)


@dataclass
class ForStatement(Node):
  init: Union[VariableDeclaration, "Expression", None]
  test: Optional["Expression"]
  update: Optional["Expression"]
  body: "Statement"


@dataclass
class ForInStatement(Node):
  left: Union[VariableDeclaration, "Pattern"]
  right: "Expression"
  body: "Statement"


@dataclass
class ForOfStatement(Node):
  left: Union[VariableDeclaration, "Pattern"]
  right: "Expression"
  body: "Statement"
  is_await: bool = False


@dataclass
class FunctionDeclaration(Node):
  id: Optional[Identifier]
  params: List["Pattern"]
  body: BlockStatement
  is_async: bool = False
  is_generator: bool = False


@dataclass
class ClassDeclaration(Node):
  id: Optional[Identifier] = None


@dataclass
class ImportSpecifier(Node):
  """
  One local name introduced by an import.

  Attributes:
      local (Identifier): The name bound in the importing module.
      type_only (bool): True for ``import { type T }`` specifiers.
  """

  local: Identifier
  type_only: bool = False


@dataclass
class ImportDeclaration(Node):
  source: Optional[str]
  specifiers: List[ImportSpecifier] = field(default_factory=list)
  type_only: bool = False


@dataclass
class ImportEquals(Node):
  """``import x = require("m")`` and ``import x = A.B``."""

  local: Identifier


@dataclass
class ExportDeclaration(Node):
  declaration: Optional["Statement"] = None


@dataclass
class EnumMember(Node):
  name: str
  initializer: Optional["Expression"] = None


@dataclass
class EnumDeclaration(Node):
  id: Identifier
  members: List[EnumMember] = field(default_factory=list)


@dataclass
class TypeDeclaration(Node):
  """Type-only declarations: aliases, interfaces, ``declare`` forms, namespaces."""

  kind: str


@dataclass
class Program(Node):
  body: List["Statement"] = field(default_factory=list)


Expression = Union[
  Identifier,
  ThisExpression,
  Super,
  MetaProperty,
  Literal,
  TemplateLiteral,
  TaggedTemplateExpression,
  ArrayExpression,
  ObjectExpression,
  FunctionExpression,
  ArrowFunctionExpression,
  ClassExpression,
  CallExpression,
  NewExpression,
  MemberExpression,
  UnaryExpression,
  UpdateExpression,
  BinaryExpression,
  AssignmentExpression,
  ConditionalExpression,
  SequenceExpression,
  ParenthesizedExpression,
  AwaitExpression,
  YieldExpression,
  TypeWrapper,
  JSXElement,
  Unsupported,
]

Pattern = Union[
  ObjectPattern,
  ArrayPattern,
  AssignmentPattern,
  RestElement,
  Expression,
]

PropertyKey = Union[Identifier, PrivateName, Literal, Expression]

Statement = Union[
  BlockStatement,
  EmptyStatement,
  DebuggerStatement,
  BreakStatement,
  ContinueStatement,
  ExpressionStatement,
  IfStatement,
  LabeledStatement,
  ReturnStatement,
  ThrowStatement,
  SwitchStatement,
  TryStatement,
  WhileStatement,
  DoWhileStatement,
  WithStatement,
  ForStatement,
  ForInStatement,
  ForOfStatement,
  VariableDeclaration,
  FunctionDeclaration,
  ClassDeclaration,
  ImportDeclaration,
  ImportEquals,
  ExportDeclaration,
  EnumDeclaration,
  TypeDeclaration,
  Unsupported,
]

PATTERN_NODES = (ObjectPattern, ArrayPattern, AssignmentPattern, RestElement)
