"""
Module Synthesizers.

Final edits applied to the two derived buffers:

- ``synthesize_locals`` appends the sealed accessor-object export through which
  the main module reads and writes persisted state.
- ``synthesize_main`` turns the entry call into an exported single-parameter
  function whose body is the (already rewritten) first argument.
"""

from typing import Sequence

from ts_hotswap.core.bindings import Binding
from ts_hotswap.core.patch_buffer import SourcePatchBuffer
from ts_hotswap.frontend.nodes import CallExpression, Node


def accessor_entry(binding: Binding) -> str:
  """
  Renders one member of the locals export.

  Read-only bindings are plain shorthand properties; mutable ones become a
  getter/setter pair closing over the declared name.
  """
  name = binding.name
  if not binding.mutable:
    return f"{name},"
  return f"get {name}() {{ return {name} }},set {name}(v) {{ {name} = v }},"


def locals_export(bindings: Sequence[Binding]) -> str:
  """Builds the ``export default Object.seal({...});`` statement."""
  entries = "".join(accessor_entry(b) for b in bindings)
  return f"export default Object.seal({{{entries}}});"


def synthesize_locals(buffer: SourcePatchBuffer, bindings: Sequence[Binding]) -> None:
  """
  Appends the accessor export to the locals buffer on its own line.

  Args:
      buffer: The locals buffer, already missing the entry statement.
      bindings: Extracted bindings in declaration order.
  """
  buffer.append(f"\n{locals_export(bindings)}\n")


def main_header(locals_name: str) -> str:
  return f"export default ({locals_name}) => "


def synthesize_main(buffer: SourcePatchBuffer, call: CallExpression, argument: Node, locals_name: str) -> None:
  """
  Replaces the callee and opening parenthesis with the export header and drops
  everything after the first argument up to the end of the call.

  Args:
      buffer: The main buffer, already trimmed to the call's own span.
      call: The entry call.
      argument: The call's first argument.
      locals_name: Name of the injected locals parameter.
  """
  buffer.replace(call.start, argument.start, main_header(locals_name))
  buffer.remove(argument.end, call.end)
