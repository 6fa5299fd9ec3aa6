"""
Tests for the Tracing System.
"""

import json

from ts_hotswap.core.tracer import TraceEventType, TraceLogger, get_tracer, reset_tracer


def test_phase_nesting():
  logger = TraceLogger()

  p1 = logger.start_phase("Parent")
  logger.start_phase("Child")
  logger.end_phase()  # End Child
  logger.end_phase()  # End Parent

  events = logger.export()

  # 4 events: Start P, Start C, End C, End P
  assert len(events) == 4
  assert events[0]["type"] == TraceEventType.PHASE_START
  assert events[1]["parent_id"] == p1
  assert events[2]["type"] == TraceEventType.PHASE_END


def test_end_phase_without_start_is_noop():
  logger = TraceLogger()
  logger.end_phase()
  assert logger.export() == []


def test_binding_and_mutation_metadata():
  logger = TraceLogger()
  phase = logger.start_phase("Rewriting")
  logger.log_binding("count", True)
  logger.log_mutation("Identifier", "count", "(__locals__.count)", 12)

  events = logger.export()
  binding, mutation = events[1], events[2]

  assert binding["type"] == TraceEventType.BINDING_FOUND
  assert binding["metadata"] == {"name": "count", "mutable": True}
  assert binding["parent_id"] == phase
  assert mutation["type"] == TraceEventType.SOURCE_MUTATION
  assert mutation["metadata"]["after"] == "(__locals__.count)"
  assert mutation["metadata"]["offset"] == 12


def test_export_is_json_serializable():
  logger = TraceLogger()
  logger.log_binding("a", False)
  dumped = json.loads(json.dumps(logger.export()))
  assert dumped[0]["type"] == "binding_found"


def test_reset_replaces_global_tracer():
  first = get_tracer()
  first.log_binding("a", False)
  reset_tracer()
  assert get_tracer() is not first
  assert get_tracer().export() == []
