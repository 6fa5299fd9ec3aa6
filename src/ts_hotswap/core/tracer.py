"""
Compilation Trace Logger.

Records the step-by-step execution of the split pass as structured events:
1. Lifecycle Phases (Parsing, Locating, Extraction, Rewriting, Synthesis).
2. Bindings discovered at top level.
3. Source Mutations (each identifier or shorthand entry rewritten).

The output is a list of dictionaries suitable for JSON serialization. Nothing is
printed; the CLI decides whether to persist the trace.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  BINDING_FOUND = "binding_found"
  SOURCE_MUTATION = "source_mutation"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records compilation events.
  The engine resets it per compile and exports the events into the result.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase (e.g., 'Scoped Rewrite'). Returns Phase ID."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=phase_id,
        type=TraceEventType.PHASE_START,
        timestamp=time.time(),
        description=name,
        parent_id=parent,
        metadata={"detail": description},
      )
    )
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self):
    """Ends the current active phase."""
    if not self._active_phases:
      return

    phase_id = self._active_phases.pop()
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=TraceEventType.PHASE_END,
        timestamp=time.time(),
        description="End Phase",
        parent_id=phase_id,
      )
    )

  def log_binding(self, name: str, mutable: bool):
    """Logs a top-level binding picked up by the extractor."""
    kind = "mutable" if mutable else "readonly"
    self._log_simple(TraceEventType.BINDING_FOUND, f"Binding {name} ({kind})", {"name": name, "mutable": mutable})

  def log_mutation(self, node_type: str, before: str, after: str, offset: int):
    """Logs a source rewrite."""
    self._log_simple(
      TraceEventType.SOURCE_MUTATION,
      f"Rewrote {node_type}",
      {"before": before, "after": after, "offset": offset},
    )

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]):
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]


_GLOBAL_TRACER = TraceLogger()


def get_tracer() -> TraceLogger:
  return _GLOBAL_TRACER


def reset_tracer():
  global _GLOBAL_TRACER
  _GLOBAL_TRACER = TraceLogger()
