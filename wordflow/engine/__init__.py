"""Gesture tracing, game sessions and word discovery for WordFlow."""

from .models import (
    AppConfig,
    EventKind,
    PointerEvent,
    TraceState,
    TraceStep,
    IDLE,
    DiscoveredWord,
    DiscoveryMetrics,
    DiscoveryResult,
)
from .trace import TraceStateMachine, DEFAULT_DEBOUNCE, replay_gestures, load_gestures
from .session import GameSession
from .discovery import (
    WordDiscoveryEngine,
    DiscoveryScheduler,
    CancellationToken,
    compute_metrics,
    UNCOMMON_LETTERS,
)

__all__ = [
    "AppConfig",
    "EventKind",
    "PointerEvent",
    "TraceState",
    "TraceStep",
    "IDLE",
    "DiscoveredWord",
    "DiscoveryMetrics",
    "DiscoveryResult",
    "TraceStateMachine",
    "DEFAULT_DEBOUNCE",
    "replay_gestures",
    "load_gestures",
    "GameSession",
    "WordDiscoveryEngine",
    "DiscoveryScheduler",
    "CancellationToken",
    "compute_metrics",
    "UNCOMMON_LETTERS",
]
