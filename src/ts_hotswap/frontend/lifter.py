"""
Concrete Tree Lifter.

Converts the tree-sitter concrete syntax tree of a TypeScript script into the
closed node set of :mod:`ts_hotswap.frontend.nodes`.

The lifter is total: it never rejects a well-formed tree. Anything it does not
model becomes an ``Unsupported`` node tagged with the grammar's node type, and
type-level declarations become ``TypeDeclaration``. Deciding what is allowed
where is left to the consumers.

Offsets reported by tree-sitter are UTF-8 byte offsets; ``OffsetMap`` converts
them to character offsets into the original ``str``.
"""

from bisect import bisect_left
from typing import Callable, Dict, List, Optional, Tuple, Union

from tree_sitter import Node as TSNode

from ts_hotswap.frontend import nodes as n
from ts_hotswap.frontend.nodes import Span

_SKIPPED = frozenset({"comment", "html_comment", "hash_bang_line"})

_TYPE_DECLARATIONS = frozenset(
  {
    "type_alias_declaration",
    "interface_declaration",
    "module",
    "internal_module",
    "function_signature",
  }
)

_TYPE_WRAPPERS = frozenset(
  {
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
    "type_assertion",
    "instantiation_expression",
  }
)

_TYPE_ONLY_CHILDREN = frozenset({"type_arguments", "type_annotation", "type_parameters", "comment"})

_LITERALS = frozenset({"string", "number", "regex", "true", "false", "null"})


class OffsetMap:
  """Maps UTF-8 byte offsets of ``source`` to character offsets of ``code``."""

  def __init__(self, code: str, source: bytes) -> None:
    self._identity = len(code) == len(source)
    self._byte_starts: List[int] = []
    if not self._identity:
      pos = 0
      for ch in code:
        self._byte_starts.append(pos)
        pos += len(ch.encode("utf-8"))
      self._byte_starts.append(pos)

  def char(self, byte_offset: int) -> int:
    if self._identity:
      return byte_offset
    return bisect_left(self._byte_starts, byte_offset)

  def span(self, node: TSNode) -> Span:
    start = self.char(node.start_byte)
    row, byte_col = node.start_point
    column = start - self.char(node.start_byte - byte_col)
    return Span(start, self.char(node.end_byte), row + 1, column)


class Lifter:
  """
  Builds script nodes from a tree-sitter tree.

  Attributes:
      code (str): The original text the tree was parsed from.
  """

  def __init__(self, code: str, offsets: OffsetMap) -> None:
    self.code = code
    self._offsets = offsets
    self._statements: Dict[str, Callable[[TSNode], n.Statement]] = {
      "expression_statement": self._expression_statement,
      "lexical_declaration": self.lift_variable_declaration,
      "variable_declaration": self.lift_variable_declaration,
      "statement_block": self.lift_block,
      "empty_statement": lambda node: n.EmptyStatement(self._span(node)),
      "debugger_statement": lambda node: n.DebuggerStatement(self._span(node)),
      "break_statement": self._break_statement,
      "continue_statement": self._continue_statement,
      "if_statement": self._if_statement,
      "labeled_statement": self._labeled_statement,
      "return_statement": self._return_statement,
      "throw_statement": self._throw_statement,
      "switch_statement": self._switch_statement,
      "try_statement": self._try_statement,
      "while_statement": self._while_statement,
      "do_statement": self._do_statement,
      "with_statement": self._with_statement,
      "for_statement": self._for_statement,
      "for_in_statement": self._for_in_statement,
      "function_declaration": self._function_declaration,
      "generator_function_declaration": self._function_declaration,
      "class_declaration": self._class_declaration,
      "abstract_class_declaration": self._class_declaration,
      "import_statement": self._import_statement,
      "import_alias": self._import_alias,
      "export_statement": self._export_statement,
      "enum_declaration": self._enum_declaration,
    }
    self._expressions: Dict[str, Callable[[TSNode], n.Expression]] = {
      "identifier": self._identifier,
      "undefined": self._identifier,
      "shorthand_property_identifier": self._identifier,
      "shorthand_property_identifier_pattern": self._identifier,
      "this": lambda node: n.ThisExpression(self._span(node)),
      "super": lambda node: n.Super(self._span(node)),
      "meta_property": self._meta_property,
      "template_string": self._template_string,
      "array": self._array,
      "object": self._object,
      "function_expression": self._function_expression,
      "function": self._function_expression,
      "generator_function": self._function_expression,
      "arrow_function": self._arrow_function,
      "class": self._class_expression,
      "call_expression": self._call_expression,
      "new_expression": self._new_expression,
      "member_expression": self._member_expression,
      "subscript_expression": self._subscript_expression,
      "unary_expression": self._unary_expression,
      "update_expression": self._update_expression,
      "binary_expression": self._binary_expression,
      "assignment_expression": self._assignment_expression,
      "augmented_assignment_expression": self._assignment_expression,
      "ternary_expression": self._ternary_expression,
      "sequence_expression": self._sequence_expression,
      "parenthesized_expression": self._parenthesized_expression,
      "await_expression": self._await_expression,
      "yield_expression": self._yield_expression,
    }

  # --- Helpers ---

  def _span(self, node: TSNode) -> Span:
    return self._offsets.span(node)

  def _span_between(self, first: TSNode, last: TSNode) -> Span:
    head = self._span(first)
    return Span(head.start, self._span(last).end, head.line, head.column)

  def _text(self, node: TSNode) -> str:
    span = self._span(node)
    return self.code[span.start : span.end]

  def _named(self, node: Optional[TSNode]) -> List[TSNode]:
    if node is None:
      return []
    return [c for c in node.named_children if c.type not in _SKIPPED]

  def _field(self, node: TSNode, name: str) -> Optional[TSNode]:
    return node.child_by_field_name(name)

  def _fields(self, node: TSNode, name: str) -> List[TSNode]:
    return [c for c in node.children_by_field_name(name) if c.is_named and c.type not in _SKIPPED]

  def _has_token(self, node: TSNode, *tokens: str) -> bool:
    return any(not c.is_named and c.type in tokens for c in node.children)

  def _unsupported(self, node: TSNode) -> n.Unsupported:
    return n.Unsupported(self._span(node), node.type)

  # --- Program & Statements ---

  def lift_program(self, root: TSNode) -> n.Program:
    """Lifts the root ``program`` node."""
    return n.Program(self._span(root), [self.lift_statement(c) for c in self._named(root)])

  def lift_statement(self, node: TSNode) -> n.Statement:
    """Lifts any statement-position node."""
    if node.type in _TYPE_DECLARATIONS:
      return n.TypeDeclaration(self._span(node), node.type)
    if node.type == "ambient_declaration":
      return self._ambient_declaration(node)
    handler = self._statements.get(node.type)
    if handler is None:
      return self._unsupported(node)
    return handler(node)

  def _ambient_declaration(self, node: TSNode) -> n.Statement:
    # `declare const x: T;` still binds x at runtime; other ambient forms are types only.
    inner = self._named(node)
    if inner and inner[0].type in ("lexical_declaration", "variable_declaration"):
      return self.lift_variable_declaration(inner[0])
    return n.TypeDeclaration(self._span(node), node.type)

  def lift_block(self, node: TSNode) -> n.BlockStatement:
    return n.BlockStatement(self._span(node), [self.lift_statement(c) for c in self._named(node)])

  def _body_block(self, node: Optional[TSNode], owner: TSNode) -> n.BlockStatement:
    if node is None:
      span = self._span(owner)
      return n.BlockStatement(Span(span.end, span.end, span.line, span.column))
    return self.lift_block(node)

  def _expression_statement(self, node: TSNode) -> n.Statement:
    inner = self._named(node)[0]
    if inner.type in _TYPE_DECLARATIONS:
      return n.TypeDeclaration(self._span(node), inner.type)
    return n.ExpressionStatement(self._span(node), self.lift_expression(inner))

  def lift_variable_declaration(self, node: TSNode) -> n.VariableDeclaration:
    """Lifts ``var`` / ``let`` / ``const`` declarations."""
    if node.type == "variable_declaration":
      kind = "var"
    else:
      kind_node = self._field(node, "kind")
      kind = kind_node.type if kind_node is not None else node.children[0].type
    declarators = []
    for child in self._named(node):
      if child.type != "variable_declarator":
        continue
      value = self._field(child, "value")
      declarators.append(
        n.VariableDeclarator(
          self._span(child),
          self.lift_pattern(self._field(child, "name")),
          self.lift_expression(value) if value is not None else None,
        )
      )
    return n.VariableDeclaration(self._span(node), kind, declarators)

  def _label(self, node: TSNode) -> Optional[str]:
    label = self._field(node, "label")
    return self._text(label) if label is not None else None

  def _break_statement(self, node: TSNode) -> n.BreakStatement:
    return n.BreakStatement(self._span(node), self._label(node))

  def _continue_statement(self, node: TSNode) -> n.ContinueStatement:
    return n.ContinueStatement(self._span(node), self._label(node))

  def _condition(self, node: TSNode) -> n.Expression:
    # Statement headers keep their own parentheses; they are not expressions.
    if node.type == "parenthesized_expression":
      return self.lift_expression(self._named(node)[0])
    return self.lift_expression(node)

  def _if_statement(self, node: TSNode) -> n.IfStatement:
    alternate = None
    else_clause = self._field(node, "alternative")
    if else_clause is not None:
      alternate = self.lift_statement(self._named(else_clause)[0])
    return n.IfStatement(
      self._span(node),
      self._condition(self._field(node, "condition")),
      self.lift_statement(self._field(node, "consequence")),
      alternate,
    )

  def _labeled_statement(self, node: TSNode) -> n.LabeledStatement:
    body = self._field(node, "body")
    if body is None:
      body = self._named(node)[-1]
    return n.LabeledStatement(self._span(node), self._label(node) or "", self.lift_statement(body))

  def _return_statement(self, node: TSNode) -> n.ReturnStatement:
    children = self._named(node)
    argument = self.lift_expression(children[0]) if children else None
    return n.ReturnStatement(self._span(node), argument)

  def _throw_statement(self, node: TSNode) -> n.ThrowStatement:
    return n.ThrowStatement(self._span(node), self.lift_expression(self._named(node)[0]))

  def _switch_statement(self, node: TSNode) -> n.SwitchStatement:
    cases = []
    for clause in self._named(self._field(node, "body")):
      value = self._field(clause, "value") if clause.type == "switch_case" else None
      value_id = value.id if value is not None else None
      consequent = [self.lift_statement(c) for c in self._named(clause) if c.id != value_id]
      test = self.lift_expression(value) if value is not None else None
      cases.append(n.SwitchCase(self._span(clause), test, consequent))
    return n.SwitchStatement(self._span(node), self._condition(self._field(node, "value")), cases)

  def _try_statement(self, node: TSNode) -> n.TryStatement:
    handler = None
    catch = self._field(node, "handler")
    if catch is not None:
      param = self._field(catch, "parameter")
      handler = n.CatchClause(
        self._span(catch),
        self.lift_pattern(param) if param is not None else None,
        self.lift_block(self._field(catch, "body")),
      )
    finalizer = None
    finally_clause = self._field(node, "finalizer")
    if finally_clause is not None:
      finalizer = self.lift_block(self._field(finally_clause, "body"))
    return n.TryStatement(self._span(node), self.lift_block(self._field(node, "body")), handler, finalizer)

  def _while_statement(self, node: TSNode) -> n.WhileStatement:
    return n.WhileStatement(
      self._span(node),
      self._condition(self._field(node, "condition")),
      self.lift_statement(self._field(node, "body")),
    )

  def _do_statement(self, node: TSNode) -> n.DoWhileStatement:
    return n.DoWhileStatement(
      self._span(node),
      self.lift_statement(self._field(node, "body")),
      self._condition(self._field(node, "condition")),
    )

  def _with_statement(self, node: TSNode) -> n.WithStatement:
    return n.WithStatement(
      self._span(node),
      self._condition(self._field(node, "object")),
      self.lift_statement(self._field(node, "body")),
    )

  def _for_clause(self, nodes: List[TSNode]) -> Union[n.VariableDeclaration, n.Expression, None]:
    for child in nodes:
      if child.type == "empty_statement":
        return None
      if child.type == "expression_statement":
        return self.lift_expression(self._named(child)[0])
      if child.type in ("lexical_declaration", "variable_declaration"):
        return self.lift_variable_declaration(child)
      return self.lift_expression(child)
    return None

  def _for_statement(self, node: TSNode) -> n.ForStatement:
    init = self._for_clause(self._fields(node, "initializer"))
    test = self._for_clause(self._fields(node, "condition"))
    increment = self._field(node, "increment")
    return n.ForStatement(
      self._span(node),
      init,
      test if not isinstance(test, n.VariableDeclaration) else None,
      self.lift_expression(increment) if increment is not None else None,
      self.lift_statement(self._field(node, "body")),
    )

  def _for_in_statement(self, node: TSNode) -> n.Statement:
    left_node = self._field(node, "left")
    kind_node = self._field(node, "kind")
    left: Union[n.VariableDeclaration, n.Pattern]
    if kind_node is not None:
      value = self._field(node, "value")
      declarator = n.VariableDeclarator(
        self._span(left_node),
        self.lift_pattern(left_node),
        self.lift_expression(value) if value is not None else None,
      )
      left = n.VariableDeclaration(self._span_between(kind_node, left_node), kind_node.type, [declarator])
    else:
      left = self.lift_pattern(left_node)

    right = self.lift_expression(self._field(node, "right"))
    body = self.lift_statement(self._field(node, "body"))
    operator = self._field(node, "operator")
    is_of = operator.type == "of" if operator is not None else self._has_token(node, "of")
    if is_of:
      return n.ForOfStatement(self._span(node), left, right, body, self._has_token(node, "await"))
    return n.ForInStatement(self._span(node), left, right, body)

  def lift_params(self, node: Optional[TSNode]) -> List[n.Pattern]:
    """Lifts a ``formal_parameters`` list, dropping ``this`` parameters."""
    params: List[n.Pattern] = []
    for child in self._named(node):
      if child.type in ("required_parameter", "optional_parameter"):
        pattern = self._field(child, "pattern")
        if pattern is None or pattern.type == "this":
          continue
        lifted = self.lift_pattern(pattern)
        value = self._field(child, "value")
        if value is not None:
          lifted = n.AssignmentPattern(self._span(child), lifted, self.lift_expression(value))
        params.append(lifted)
      elif child.type != "decorator":
        params.append(self.lift_pattern(child))
    return params

  def _optional_identifier(self, node: Optional[TSNode]) -> Optional[n.Identifier]:
    if node is None:
      return None
    return n.Identifier(self._span(node), self._text(node))

  def _function_declaration(self, node: TSNode) -> n.FunctionDeclaration:
    return n.FunctionDeclaration(
      self._span(node),
      self._optional_identifier(self._field(node, "name")),
      self.lift_params(self._field(node, "parameters")),
      self._body_block(self._field(node, "body"), node),
      self._has_token(node, "async"),
      self._has_token(node, "*"),
    )

  def _class_declaration(self, node: TSNode) -> n.ClassDeclaration:
    return n.ClassDeclaration(self._span(node), self._optional_identifier(self._field(node, "name")))

  def _import_statement(self, node: TSNode) -> n.Statement:
    source_node = self._field(node, "source")
    source = self._text(source_node)[1:-1] if source_node is not None else None
    specifiers: List[n.ImportSpecifier] = []
    for child in self._named(node):
      if child.type == "import_require_clause":
        local = self._named(child)[0]
        return n.ImportEquals(self._span(node), n.Identifier(self._span(local), self._text(local)))
      if child.type == "import_clause":
        specifiers.extend(self._import_clause(child))
    return n.ImportDeclaration(self._span(node), source, specifiers, self._has_token(node, "type", "typeof"))

  def _import_clause(self, clause: TSNode) -> List[n.ImportSpecifier]:
    specifiers = []
    for child in self._named(clause):
      if child.type == "identifier":
        specifiers.append(n.ImportSpecifier(self._span(child), self._identifier(child)))
      elif child.type == "namespace_import":
        local = self._named(child)[0]
        specifiers.append(n.ImportSpecifier(self._span(child), self._identifier(local)))
      elif child.type == "named_imports":
        for spec in self._named(child):
          if spec.type != "import_specifier":
            continue
          local = self._field(spec, "alias")
          if local is None:
            local = self._field(spec, "name")
          specifiers.append(
            n.ImportSpecifier(
              self._span(spec),
              n.Identifier(self._span(local), self._text(local)),
              self._has_token(spec, "type", "typeof"),
            )
          )
    return specifiers

  def _import_alias(self, node: TSNode) -> n.ImportEquals:
    local = self._named(node)[0]
    return n.ImportEquals(self._span(node), n.Identifier(self._span(local), self._text(local)))

  def _export_statement(self, node: TSNode) -> n.ExportDeclaration:
    declaration = self._field(node, "declaration")
    return n.ExportDeclaration(
      self._span(node),
      self.lift_statement(declaration) if declaration is not None else None,
    )

  def _enum_declaration(self, node: TSNode) -> n.EnumDeclaration:
    members = []
    for member in self._named(self._field(node, "body")):
      if member.type == "enum_assignment":
        name = self._field(member, "name")
        value = self._field(member, "value")
        members.append(
          n.EnumMember(
            self._span(member),
            self._text(name),
            self.lift_expression(value) if value is not None else None,
          )
        )
      else:
        members.append(n.EnumMember(self._span(member), self._text(member)))
    name_node = self._field(node, "name")
    return n.EnumDeclaration(self._span(node), n.Identifier(self._span(name_node), self._text(name_node)), members)

  # --- Expressions ---

  def lift_expression(self, node: TSNode) -> n.Expression:
    """Lifts any expression-position node."""
    kind = node.type
    if kind in _LITERALS:
      return n.Literal(self._span(node), kind, self._text(node))
    if kind in _TYPE_WRAPPERS:
      inner = next(c for c in self._named(node) if c.type not in _TYPE_ONLY_CHILDREN)
      return n.TypeWrapper(self._span(node), kind, self.lift_expression(inner))
    if kind.startswith("jsx_"):
      return n.JSXElement(self._span(node), kind)
    handler = self._expressions.get(kind)
    if handler is None:
      return self._unsupported(node)
    return handler(node)

  def _identifier(self, node: TSNode) -> n.Identifier:
    return n.Identifier(self._span(node), self._text(node))

  def _meta_property(self, node: TSNode) -> n.MetaProperty:
    meta, _, prop = self._text(node).partition(".")
    return n.MetaProperty(self._span(node), meta.strip(), prop.strip())

  def _template_string(self, node: TSNode) -> n.TemplateLiteral:
    expressions = []
    for child in self._named(node):
      if child.type == "template_substitution":
        expressions.append(self.lift_expression(self._named(child)[0]))
    return n.TemplateLiteral(self._span(node), expressions)

  def _element(self, node: TSNode) -> Union[n.Expression, n.SpreadElement]:
    if node.type == "spread_element":
      return n.SpreadElement(self._span(node), self.lift_expression(self._named(node)[0]))
    return self.lift_expression(node)

  def _array(self, node: TSNode) -> n.ArrayExpression:
    return n.ArrayExpression(self._span(node), [self._element(c) for c in self._named(node)])

  def lift_key(self, node: TSNode) -> Tuple[n.PropertyKey, bool]:
    """Lifts a property name, returning ``(key, computed)``."""
    if node.type == "computed_property_name":
      return self.lift_expression(self._named(node)[0]), True
    if node.type == "private_property_identifier":
      return n.PrivateName(self._span(node), self._text(node)), False
    if node.type in ("string", "number"):
      return n.Literal(self._span(node), node.type, self._text(node)), False
    return n.Identifier(self._span(node), self._text(node)), False

  def _object(self, node: TSNode) -> n.ObjectExpression:
    properties: List[Union[n.Property, n.ObjectMethod, n.SpreadElement, n.Unsupported]] = []
    for child in self._named(node):
      if child.type == "pair":
        key, computed = self.lift_key(self._field(child, "key"))
        value = self.lift_expression(self._field(child, "value"))
        properties.append(n.Property(self._span(child), key, value, computed))
      elif child.type == "shorthand_property_identifier":
        ident = self._identifier(child)
        properties.append(n.Property(self._span(child), ident, ident, shorthand=True))
      elif child.type == "spread_element":
        properties.append(n.SpreadElement(self._span(child), self.lift_expression(self._named(child)[0])))
      elif child.type == "method_definition":
        properties.append(self._method(child))
      else:
        properties.append(self._unsupported(child))
    return n.ObjectExpression(self._span(node), properties)

  def _method(self, node: TSNode) -> n.ObjectMethod:
    key, computed = self.lift_key(self._field(node, "name"))
    kind = "method"
    if self._has_token(node, "get"):
      kind = "get"
    elif self._has_token(node, "set"):
      kind = "set"
    return n.ObjectMethod(
      self._span(node),
      key,
      self.lift_params(self._field(node, "parameters")),
      self._body_block(self._field(node, "body"), node),
      computed,
      kind,
    )

  def _function_expression(self, node: TSNode) -> n.FunctionExpression:
    return n.FunctionExpression(
      self._span(node),
      self._optional_identifier(self._field(node, "name")),
      self.lift_params(self._field(node, "parameters")),
      self._body_block(self._field(node, "body"), node),
      self._has_token(node, "async"),
      self._has_token(node, "*"),
    )

  def _arrow_function(self, node: TSNode) -> n.ArrowFunctionExpression:
    single = self._field(node, "parameter")
    if single is not None:
      params: List[n.Pattern] = [self._identifier(single)]
    else:
      params = self.lift_params(self._field(node, "parameters"))
    body_node = self._field(node, "body")
    body: Union[n.BlockStatement, n.Expression]
    if body_node.type == "statement_block":
      body = self.lift_block(body_node)
    else:
      body = self.lift_expression(body_node)
    return n.ArrowFunctionExpression(self._span(node), params, body, self._has_token(node, "async"))

  def _class_expression(self, node: TSNode) -> n.ClassExpression:
    return n.ClassExpression(self._span(node), self._optional_identifier(self._field(node, "name")))

  def _arguments(self, node: Optional[TSNode]) -> List[Union[n.Expression, n.SpreadElement]]:
    return [self._element(c) for c in self._named(node)]

  def _is_optional(self, node: TSNode) -> bool:
    return any(c.type == "optional_chain" for c in node.children)

  def _call_expression(self, node: TSNode) -> n.Expression:
    function = self._field(node, "function")
    callee: Union[n.Expression, n.ImportCallee]
    if function.type == "import":
      callee = n.ImportCallee(self._span(function))
    else:
      callee = self.lift_expression(function)
    arguments = self._field(node, "arguments")
    if arguments is not None and arguments.type == "template_string":
      return n.TaggedTemplateExpression(self._span(node), callee, self._template_string(arguments))
    return n.CallExpression(self._span(node), callee, self._arguments(arguments), self._is_optional(node))

  def _new_expression(self, node: TSNode) -> n.NewExpression:
    return n.NewExpression(
      self._span(node),
      self.lift_expression(self._field(node, "constructor")),
      self._arguments(self._field(node, "arguments")),
    )

  def _member_expression(self, node: TSNode) -> n.MemberExpression:
    prop = self._field(node, "property")
    lifted: Union[n.Expression, n.PrivateName]
    if prop.type == "private_property_identifier":
      lifted = n.PrivateName(self._span(prop), self._text(prop))
    else:
      lifted = n.Identifier(self._span(prop), self._text(prop))
    return n.MemberExpression(
      self._span(node),
      self.lift_expression(self._field(node, "object")),
      lifted,
      computed=False,
      optional=self._is_optional(node),
    )

  def _subscript_expression(self, node: TSNode) -> n.MemberExpression:
    return n.MemberExpression(
      self._span(node),
      self.lift_expression(self._field(node, "object")),
      self.lift_expression(self._field(node, "index")),
      computed=True,
      optional=self._is_optional(node),
    )

  def _operator(self, node: TSNode, default: str = "") -> str:
    op = self._field(node, "operator")
    return op.type if op is not None else default

  def _unary_expression(self, node: TSNode) -> n.UnaryExpression:
    return n.UnaryExpression(self._span(node), self._operator(node), self.lift_expression(self._field(node, "argument")))

  def _update_expression(self, node: TSNode) -> n.UpdateExpression:
    return n.UpdateExpression(self._span(node), self._operator(node), self.lift_expression(self._field(node, "argument")))

  def _binary_expression(self, node: TSNode) -> n.BinaryExpression:
    left_node = self._field(node, "left")
    left: Union[n.Expression, n.PrivateName]
    if left_node.type == "private_property_identifier":
      left = n.PrivateName(self._span(left_node), self._text(left_node))
    else:
      left = self.lift_expression(left_node)
    return n.BinaryExpression(
      self._span(node), self._operator(node), left, self.lift_expression(self._field(node, "right"))
    )

  def _assignment_expression(self, node: TSNode) -> n.AssignmentExpression:
    return n.AssignmentExpression(
      self._span(node),
      self._operator(node, "="),
      self.lift_pattern(self._field(node, "left")),
      self.lift_expression(self._field(node, "right")),
    )

  def _ternary_expression(self, node: TSNode) -> n.ConditionalExpression:
    return n.ConditionalExpression(
      self._span(node),
      self.lift_expression(self._field(node, "condition")),
      self.lift_expression(self._field(node, "consequence")),
      self.lift_expression(self._field(node, "alternative")),
    )

  def _sequence_expression(self, node: TSNode) -> n.SequenceExpression:
    expressions: List[n.Expression] = []
    for child in self._named(node):
      if child.type == "sequence_expression":
        expressions.extend(self._sequence_expression(child).expressions)
      else:
        expressions.append(self.lift_expression(child))
    return n.SequenceExpression(self._span(node), expressions)

  def _parenthesized_expression(self, node: TSNode) -> n.ParenthesizedExpression:
    inner = next(c for c in self._named(node) if c.type not in _TYPE_ONLY_CHILDREN)
    return n.ParenthesizedExpression(self._span(node), self.lift_expression(inner))

  def _await_expression(self, node: TSNode) -> n.AwaitExpression:
    return n.AwaitExpression(self._span(node), self.lift_expression(self._named(node)[0]))

  def _yield_expression(self, node: TSNode) -> n.YieldExpression:
    children = self._named(node)
    argument = self.lift_expression(children[0]) if children else None
    return n.YieldExpression(self._span(node), argument, self._has_token(node, "*"))

  # --- Patterns ---

  def lift_pattern(self, node: TSNode) -> n.Pattern:
    """Lifts a binding or assignment target."""
    kind = node.type
    if kind == "object_pattern":
      return self._object_pattern(node)
    if kind == "array_pattern":
      return n.ArrayPattern(self._span(node), [self.lift_pattern(c) for c in self._named(node)])
    if kind == "assignment_pattern":
      return n.AssignmentPattern(
        self._span(node),
        self.lift_pattern(self._field(node, "left")),
        self.lift_expression(self._field(node, "right")),
      )
    if kind == "rest_pattern":
      return n.RestElement(self._span(node), self.lift_pattern(self._named(node)[0]))
    return self.lift_expression(node)

  def _object_pattern(self, node: TSNode) -> n.ObjectPattern:
    properties: List[Union[n.Property, n.RestElement]] = []
    for child in self._named(node):
      if child.type == "pair_pattern":
        key, computed = self.lift_key(self._field(child, "key"))
        value = self.lift_pattern(self._field(child, "value"))
        properties.append(n.Property(self._span(child), key, value, computed))
      elif child.type == "shorthand_property_identifier_pattern":
        ident = self._identifier(child)
        properties.append(n.Property(self._span(child), ident, ident, shorthand=True))
      elif child.type == "object_assignment_pattern":
        left = self._field(child, "left")
        target = self.lift_pattern(left)
        default = n.AssignmentPattern(self._span(child), target, self.lift_expression(self._field(child, "right")))
        key = target if isinstance(target, n.Identifier) else self._unsupported(left)
        properties.append(n.Property(self._span(child), key, default, shorthand=True))
      elif child.type == "rest_pattern":
        properties.append(n.RestElement(self._span(child), self.lift_pattern(self._named(child)[0])))
      else:
        properties.append(n.Property(self._span(child), self._unsupported(child), self._unsupported(child)))
    return n.ObjectPattern(self._span(node), properties)
