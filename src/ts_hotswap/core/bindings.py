"""
Binding Extractor.

Computes the top-level names of the locals module that the main module must be
able to reach, together with their mutability:

- ``const`` declarations and value imports are read-only;
- ``let`` and ``var`` declarations are mutable;
- the entry identifier itself is never exposed.

Only top-level statements are inspected. Array destructuring contributes no
bindings. Object destructuring contributes the locally bound names (or, with
``legacy_scoping``, the property keys).
"""

from dataclasses import dataclass
from typing import List, Sequence

from ts_hotswap.core.patch_buffer import SourcePatchBuffer
from ts_hotswap.core.tracer import get_tracer
from ts_hotswap.errors import MalformedPattern, UnsupportedBindingShape
from ts_hotswap.frontend.nodes import (
  ArrayPattern,
  AssignmentPattern,
  Identifier,
  ImportDeclaration,
  MemberExpression,
  Node,
  ObjectPattern,
  Pattern,
  Property,
  RestElement,
  Statement,
  VariableDeclaration,
)


@dataclass(frozen=True)
class Binding:
  """
  A top-level name exposed through the locals module.

  Attributes:
      name (str): The declared name (or the literal text of a non-identifier target).
      mutable (bool): True if the main module may assign to it.
  """

  name: str
  mutable: bool


class BindingExtractor:
  """
  Walks top-level statements and collects bindings in declaration order.
  Duplicates are kept; they mirror redeclarations in the locals module.
  """

  def __init__(self, entry_name: str = "app", legacy_scoping: bool = False) -> None:
    self.entry_name = entry_name
    self.legacy_scoping = legacy_scoping

  def extract(self, statements: Sequence[Statement], buffer: SourcePatchBuffer) -> List[Binding]:
    """
    Collects bindings from the locals-module statement list.

    Args:
        statements: Top-level statements, entry statement excluded.
        buffer: The locals buffer, used to read back non-identifier targets.

    Returns:
        List[Binding]: Bindings in declaration order.

    Raises:
        UnsupportedBindingShape: For declaration targets that cannot be classified.
        MalformedPattern: For rest targets or keys that must be identifiers.
    """
    tracer = get_tracer()
    bindings: List[Binding] = []
    for statement in statements:
      if isinstance(statement, VariableDeclaration):
        mutable = statement.kind != "const"
        for declarator in statement.declarations:
          for name in self._declared_names(declarator.id, buffer):
            bindings.append(Binding(name, mutable))
            tracer.log_binding(name, mutable)
      elif isinstance(statement, ImportDeclaration):
        if statement.type_only:
          continue
        for specifier in statement.specifiers:
          if specifier.type_only or specifier.local.name == self.entry_name:
            continue
          bindings.append(Binding(specifier.local.name, False))
          tracer.log_binding(specifier.local.name, False)
    return bindings

  def _declared_names(self, target: Pattern, buffer: SourcePatchBuffer) -> List[str]:
    if isinstance(target, Identifier):
      return [target.name]
    if isinstance(target, MemberExpression):
      return [buffer.slice_original(target.start, target.end)]
    if isinstance(target, ArrayPattern):
      return []
    if isinstance(target, ObjectPattern):
      if self.legacy_scoping:
        return self._pattern_keys(target)
      return self._object_pattern_names(target)
    raise UnsupportedBindingShape(
      f"Unsupported binding type: {type(target).__name__}",
      kind=type(target).__name__,
      position=target.span.position,
    )

  def _rest_name(self, rest: RestElement) -> str:
    if not isinstance(rest.argument, Identifier):
      raise MalformedPattern("Rest element must be an identifier", kind="RestElement", position=rest.span.position)
    return rest.argument.name

  def _pattern_keys(self, pattern: ObjectPattern) -> List[str]:
    names = []
    for prop in pattern.properties:
      if isinstance(prop, RestElement):
        names.append(self._rest_name(prop))
      elif isinstance(prop.key, Identifier) and not prop.computed:
        names.append(prop.key.name)
      else:
        raise MalformedPattern("Object property must be an identifier", kind="Property", position=prop.span.position)
    return names

  def _object_pattern_names(self, pattern: ObjectPattern) -> List[str]:
    names: List[str] = []
    for prop in pattern.properties:
      if isinstance(prop, RestElement):
        names.append(self._rest_name(prop))
      else:
        names.extend(self._property_names(prop))
    return names

  def _property_names(self, prop: Property) -> List[str]:
    if prop.shorthand:
      if not isinstance(prop.key, Identifier):
        raise MalformedPattern("Object property must be an identifier", kind="Property", position=prop.span.position)
      return [prop.key.name]
    return self._nested_names(prop.value)

  def _nested_names(self, value: Node) -> List[str]:
    if isinstance(value, Identifier):
      return [value.name]
    if isinstance(value, AssignmentPattern):
      return self._nested_names(value.left)
    if isinstance(value, ObjectPattern):
      return self._object_pattern_names(value)
    if isinstance(value, ArrayPattern):
      return []
    raise UnsupportedBindingShape(
      f"Unsupported binding type: {type(value).__name__}",
      kind=type(value).__name__,
      position=value.span.position,
    )
