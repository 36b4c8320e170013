"""
Styling Trace Logger.

Records what a styling run did and why:
1. Phases (the run, each style, each organized module body).
2. Mutations (a statement block before and after organization).
3. Alias lifts and the lifts that were considered but vetoed.

Events nest under the phase that was open when they were recorded. A tracer
belongs to a single run; the engine creates a fresh one per call.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  AST_MUTATION = "ast_mutation"
  ALIAS_LIFT = "alias_lift"
  INSPECTION = "inspection"


@dataclass
class TraceEvent:
  """
  One recorded step.

  Attributes:
      id: Unique event id; a phase's start event id is the phase id.
      type: The event kind.
      timestamp: Wall-clock time of recording.
      description: Human-readable summary.
      parent_id: The enclosing phase (for a phase end: the phase it closes).
      metadata: Kind-specific details.
  """

  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


def _new_id() -> str:
  return str(uuid.uuid4())


class TraceLogger:
  """
  Collects the events of one styling run.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._open: List[str] = []

  @property
  def events(self) -> List[TraceEvent]:
    return list(self._events)

  @property
  def current_phase(self) -> Optional[str]:
    return self._open[-1] if self._open else None

  def _record(
    self,
    kind: TraceEventType,
    description: str,
    metadata: Optional[Dict[str, Any]] = None,
    parent_id: Optional[str] = None,
    event_id: Optional[str] = None,
  ) -> TraceEvent:
    event = TraceEvent(
      id=event_id or _new_id(),
      type=kind,
      timestamp=time.time(),
      description=description,
      parent_id=parent_id if parent_id is not None else self.current_phase,
      metadata=metadata or {},
    )
    self._events.append(event)
    return event

  def start_phase(self, name: str, description: str = "") -> str:
    """
    Opens a phase nested in the current one.

    Args:
        name: Phase title, e.g. ``"Module Foo.Bar"``.
        description: Optional detail.

    Returns:
        str: The phase id.
    """
    event = self._record(TraceEventType.PHASE_START, name, {"detail": description})
    self._open.append(event.id)
    return event.id

  def end_phase(self) -> None:
    """Closes the innermost open phase; does nothing when none is open."""
    if self._open:
      self._record(TraceEventType.PHASE_END, "End Phase", parent_id=self._open.pop())

  def log_mutation(self, label: str, before: str, after: str) -> None:
    self._record(TraceEventType.AST_MUTATION, f"Transformed {label}", {"before": before, "after": after})

  def log_lift(self, chain: str, alias: str, occurrences: int) -> None:
    """Records a reference chain promoted to a new alias."""
    self._record(
      TraceEventType.ALIAS_LIFT,
      f"Lifted {chain} -> {alias}",
      {"chain": chain, "alias": alias, "occurrences": occurrences},
    )

  def log_inspection(self, node_str: str, outcome: str, detail: str = "") -> None:
    """Records a decision that left the tree unchanged."""
    self._record(TraceEventType.INSPECTION, f"Inspecting '{node_str}'", {"outcome": outcome, "detail": detail})

  def export(self) -> List[Dict[str, Any]]:
    """The events as plain dictionaries, ready for JSON."""
    return [asdict(e) for e in self._events]
