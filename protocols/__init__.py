"""Confidential greedy order matching: aggregation, oracles, fill engine, results."""

from protocols.observer import MatchObserver, LoggingObserver, RecordingObserver, TraceEvent
from protocols.aggregation import OrderAggregator
from protocols.oracle import DecryptionOracle, ComparisonOracle
from protocols.greedy_fill import (
    GreedyFillEngine, EncryptedOrderBook, FillOutcome, FillPassResult,
    MatchConfig, MatchState, TieBreak, FitRule,
)
from protocols.result import MatchResult, ResultAssembler
from protocols.matching import MatchingEngine, match_orders, match_orders_async
