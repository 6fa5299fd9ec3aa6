"""
Entry-Point Locator.

Finds the top-level statement holding the entry call, i.e. a bare call whose
callee chain bottoms out at the entry identifier (``app(fn)``,
``app.configure(x).run(fn)``, ``app()(fn)``), and splits the script into the
two derived buffers:

- the *locals* buffer: the original text minus the entry statement;
- the *main* buffer: only the text of the entry call itself.
"""

from dataclasses import dataclass
from typing import List

from ts_hotswap.core.patch_buffer import SourcePatchBuffer
from ts_hotswap.errors import EntryPointNotFound, MissingEntryArgument
from ts_hotswap.frontend.nodes import (
  CallExpression,
  Expression,
  ExpressionStatement,
  Identifier,
  ImportCallee,
  MemberExpression,
  ParenthesizedExpression,
  Program,
  SpreadElement,
  Statement,
)


@dataclass
class EntryPoint:
  """
  Result of splitting a script at its entry call.

  Attributes:
      call (CallExpression): The matched entry call.
      argument (Expression): The call's first argument; the hot-swappable logic.
      statement_index (int): Position of the entry statement in the program body.
      locals_statements (List[Statement]): Program body without the entry statement.
      locals_buffer (SourcePatchBuffer): Buffer for the locals module.
      main_buffer (SourcePatchBuffer): Buffer for the main module.
  """

  call: CallExpression
  argument: Expression
  statement_index: int
  locals_statements: List[Statement]
  locals_buffer: SourcePatchBuffer
  main_buffer: SourcePatchBuffer


def is_app_rooted(callee: object, entry_name: str = "app") -> bool:
  """
  Checks whether a callee chain bottoms out at the entry identifier.

  A callee is app-rooted if it is the identifier itself, or a call or member
  access whose callee/object is app-rooted. Grouping parentheses are ignored.
  """
  while True:
    if isinstance(callee, Identifier):
      return callee.name == entry_name
    if isinstance(callee, CallExpression):
      callee = callee.callee
    elif isinstance(callee, MemberExpression):
      callee = callee.object
    elif isinstance(callee, ParenthesizedExpression):
      callee = callee.expression
    else:
      return False


class EntryPointLocator:
  """
  Scans top-level statements, in order, for the first entry call.
  """

  def __init__(self, entry_name: str = "app") -> None:
    self.entry_name = entry_name

  def locate(self, program: Program, code: str) -> EntryPoint:
    """
    Splits ``program`` at its entry call.

    Args:
        program (Program): The lifted script.
        code (str): The original text the program was lifted from.

    Returns:
        EntryPoint: The entry call and the two pre-seeded derived buffers.

    Raises:
        EntryPointNotFound: If no top-level statement is an app-rooted call.
        MissingEntryArgument: If the entry call has no plain first argument.
    """
    for index, statement in enumerate(program.body):
      if not isinstance(statement, ExpressionStatement):
        continue
      call = statement.expression
      if not isinstance(call, CallExpression) or isinstance(call.callee, ImportCallee):
        continue
      if not is_app_rooted(call.callee, self.entry_name):
        continue

      if not call.arguments:
        raise MissingEntryArgument(
          f"{self.entry_name}() entry call has no argument",
          kind="call_expression",
          position=call.span.position,
        )
      argument = call.arguments[0]
      if isinstance(argument, SpreadElement):
        raise MissingEntryArgument(
          "Entry call argument cannot be a spread",
          kind="spread_element",
          position=argument.span.position,
        )

      locals_buffer = SourcePatchBuffer(code)
      locals_buffer.remove(statement.start, statement.end)

      main_buffer = SourcePatchBuffer(code)
      main_buffer.remove(0, call.start)
      main_buffer.remove(call.end, len(code))

      return EntryPoint(
        call=call,
        argument=argument,
        statement_index=index,
        locals_statements=[s for j, s in enumerate(program.body) if j != index],
        locals_buffer=locals_buffer,
        main_buffer=main_buffer,
      )

    raise EntryPointNotFound(f"No {self.entry_name}() call found", kind="program")
