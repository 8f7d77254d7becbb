"""Observer hook for per-order progress of a matching run.

Observers see ciphertext handles and decisions as they are produced. They
are called after the fact and their return values are ignored, so nothing
an observer does can influence the run.
"""

import logging
from dataclasses import dataclass, field as datafield

from core.orders import Side
from scheme.ciphertext import Ciphertext

logger = logging.getLogger(__name__)


class MatchObserver:
    """Base observer: every hook is a no-op."""

    def on_order_encrypted(self, side: Side, index: int, ct: Ciphertext):
        pass

    def on_intermediate_sum(self, side: Side, index: int, ct: Ciphertext):
        pass

    def on_direction(self, scarce: Side, comparison: Ciphertext):
        pass

    def on_fill_decision(self, side: Side, index: int, filled: bool):
        pass

    def on_remainder(self, side: Side, index: int, remaining: Ciphertext):
        pass


class LoggingObserver(MatchObserver):
    """Narrates a run through the logging module."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.INFO):
        self.log = log or logger
        self.level = level

    def on_order_encrypted(self, side, index, ct):
        self.log.log(self.level, "%s order #%d encrypted: %r", side.value, index + 1, ct)

    def on_intermediate_sum(self, side, index, ct):
        self.log.log(self.level, "%s intermediate sum after #%d: %r", side.value, index + 1, ct)

    def on_direction(self, scarce, comparison):
        self.log.log(self.level, "Comparison result %r: %s side fully filled, %s side trimmed",
                     comparison, scarce.value, scarce.other.value)

    def on_fill_decision(self, side, index, filled):
        outcome = "filled" if filled else "cannot be filled"
        self.log.log(self.level, "%s order #%d %s", side.value, index + 1, outcome)

    def on_remainder(self, side, index, remaining):
        self.log.log(self.level, "Remaining liquidity against %s side after #%d: %r",
                     side.value, index + 1, remaining)


@dataclass
class TraceEvent:
    kind: str
    side: Side
    index: int | None = None
    ciphertext: Ciphertext | None = None
    filled: bool | None = None


@dataclass
class RecordingObserver(MatchObserver):
    """Keeps every event in order. Used by tests and post-run inspection."""
    events: list[TraceEvent] = datafield(default_factory=list)

    def on_order_encrypted(self, side, index, ct):
        self.events.append(TraceEvent("encrypted", side, index, ct))

    def on_intermediate_sum(self, side, index, ct):
        self.events.append(TraceEvent("sum", side, index, ct))

    def on_direction(self, scarce, comparison):
        self.events.append(TraceEvent("direction", scarce, ciphertext=comparison))

    def on_fill_decision(self, side, index, filled):
        self.events.append(TraceEvent("decision", side, index, filled=filled))

    def on_remainder(self, side, index, remaining):
        self.events.append(TraceEvent("remainder", side, index, remaining))

    def of_kind(self, kind: str) -> list[TraceEvent]:
        return [e for e in self.events if e.kind == kind]
