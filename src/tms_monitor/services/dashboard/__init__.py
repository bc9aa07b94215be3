"""Dashboard state, controller and refresh scheduling."""

from .controller import DashboardController, RefreshOutcome
from .scheduler import RefreshScheduler
from .state import DashboardState, DashboardView, build_view, initial_state, reduce

__all__ = [
    "DashboardController",
    "RefreshOutcome",
    "RefreshScheduler",
    "DashboardState",
    "DashboardView",
    "build_view",
    "initial_state",
    "reduce",
]
