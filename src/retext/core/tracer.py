"""
Pipeline Trace Logger.

Records the step-by-step execution of plugin pipelines when tracing is enabled
in the configuration:

1. Run boundaries (`run_start`, `run_end`).
2. Each plugin invocation (`plugin_start`, `plugin_end`, `plugin_error`).

Plugin events point at their run through `parent_id`. The output is a list of
plain dicts suitable for JSON serialization.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from retext.enums import TraceEventType


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class PipelineTracer:
  """
  Collects trace events for one processing instance.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []

  def start_run(self, plugin_count: int) -> str:
    """Records the start of a run. Returns the run ID used as parent for plugin events."""
    run_id = str(uuid.uuid4())
    self._events.append(
      TraceEvent(
        id=run_id,
        type=TraceEventType.RUN_START,
        timestamp=time.time(),
        description="Run pipeline",
        metadata={"plugins": plugin_count},
      )
    )
    return run_id

  def end_run(self, run_id: str, error: Optional[BaseException] = None) -> None:
    meta: Dict[str, Any] = {"success": error is None}
    if error is not None:
      meta["error"] = repr(error)
    self._log(TraceEventType.RUN_END, "End run", run_id, meta)

  def plugin_start(self, run_id: str, plugin_name: str, index: int) -> None:
    self._log(TraceEventType.PLUGIN_START, f"Start {plugin_name}", run_id, {"plugin": plugin_name, "index": index})

  def plugin_end(self, run_id: str, plugin_name: str, index: int, replaced: bool = False) -> None:
    self._log(
      TraceEventType.PLUGIN_END,
      f"End {plugin_name}",
      run_id,
      {"plugin": plugin_name, "index": index, "replaced_node": replaced},
    )

  def plugin_error(self, run_id: str, plugin_name: str, index: int, error: BaseException) -> None:
    self._log(
      TraceEventType.PLUGIN_ERROR,
      f"{plugin_name} failed",
      run_id,
      {"plugin": plugin_name, "index": index, "error": repr(error)},
    )

  def _log(self, evt_type: TraceEventType, desc: str, parent: Optional[str], meta: Dict[str, Any]) -> None:
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  def clear(self) -> None:
    self._events.clear()

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
