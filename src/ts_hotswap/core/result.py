"""
Data structures representing the output of the split pass.

This module defines the `CompileResult` Pydantic model, which encapsulates the
two generated modules, the extracted bindings, any errors encountered, and the
execution trace logs.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class BindingInfo(BaseModel):
  """Serializable view of one extracted binding."""

  name: str
  mutable: bool


class CompileResult(BaseModel):
  """
  Container for the results of a compile job.

  A failed compile carries no module text at all; callers must never write a
  partial result.
  """

  locals_code: str = Field(default="", description="The generated locals module.")
  main_code: str = Field(default="", description="The generated main module.")
  bindings: List[BindingInfo] = Field(default_factory=list, description="Bindings exposed by the locals module.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if both modules were generated.",
  )
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
