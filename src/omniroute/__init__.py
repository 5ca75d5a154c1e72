"""OmniRoute - task-to-agent routing engine.

Given a free-form development task and its context, selects which execution
agent (tool agent, reasoning agent, or a hybrid pair of both) should perform
it, estimates cost and performance, and keeps a bounded decision history
used to tune future decisions.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from omniroute.engine import RoutingEngine
from omniroute.errors import (
    NoAgentsAvailableError,
    NoEligibleAgentError,
    RoutingError,
)
from omniroute.models import RoutingDecision, TaskContext
from omniroute.registry import (
    DEFAULT_REASONING_AGENTS,
    CapabilityRegistry,
    load_registry,
)

try:
    __version__ = version("omniroute")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "DEFAULT_REASONING_AGENTS",
    "CapabilityRegistry",
    "NoAgentsAvailableError",
    "NoEligibleAgentError",
    "RoutingDecision",
    "RoutingEngine",
    "RoutingError",
    "TaskContext",
    "load_registry",
]
