# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Routing Engine - task-to-agent routing facade.

Flow:
1. Analyze task text and context into a TaskProfile
2. Filter the capability registry into candidate pools
3. Score every eligible candidate
4. Select the top scorer and its fallbacks
5. Record the decision in the bounded history

Every step is synchronous, pure computation over the in-memory registry and
history. Only step 5 mutates state, and it is serialized by the history lock,
so one engine may be shared between threads. Engines do not share history;
create one per tenant when isolation is needed.

Example:
    >>> engine = RoutingEngine(load_registry(reasoning_agents=DEFAULT_REASONING_AGENTS))
    >>> decision = engine.route("Write unit tests", {"fileCount": 3})
    >>> decision.selected.name
    'test-generator'
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from omniroute.analyzer import TaskAnalyzer, TextClassifier
from omniroute.candidate_filter import filter_candidates
from omniroute.config import RoutingSettings, get_settings
from omniroute.errors import (
    NoAgentsAvailableError,
    NoEligibleAgentError,
    UnknownDecisionError,
)
from omniroute.history import RoutingHistory
from omniroute.metrics import MetricsTracker
from omniroute.models import (
    CandidatePools,
    MetricsReport,
    RoutingDecision,
    ScoredCandidate,
    TaskContext,
    TaskProfile,
)
from omniroute.registry import CapabilityRegistry
from omniroute.scoring import ScoringEngine
from omniroute.selector import select

logger = logging.getLogger(__name__)


class RoutingEngine:
    """Select an execution agent for a development task.

    Args:
        registry: Pre-loaded, immutable capability registry.
        settings: Engine limits; defaults to ``get_settings()``.
        history: History buffer; a fresh one sized by
            ``settings.history_capacity`` when omitted.
        classifier: Text matching strategy for the task analyzer.
    """

    def __init__(
        self,
        registry: CapabilityRegistry,
        settings: RoutingSettings | None = None,
        history: RoutingHistory | None = None,
        classifier: TextClassifier | None = None,
    ) -> None:
        self.registry = registry
        self.settings = settings or get_settings()
        self.analyzer = TaskAnalyzer(classifier)
        self.tracker = MetricsTracker(
            history=history,
            capacity=self.settings.history_capacity,
            summary_length=self.settings.task_summary_length,
        )
        self.scorer = ScoringEngine(
            history=self.tracker,
            hybrid_min_complexity=self.settings.hybrid_min_complexity,
        )

        self._stats_lock = threading.Lock()
        self.routing_stats = {
            "total_routes": 0,
            "successful_routes": 0,
            "no_agents_available": 0,
            "no_eligible_agent": 0,
        }

        logger.info(
            "RoutingEngine initialized",
            extra={
                "agent_count": len(registry),
                "history_capacity": self.tracker.history.capacity,
            },
        )

    @property
    def history(self) -> RoutingHistory:
        return self.tracker.history

    def _count(self, key: str) -> None:
        with self._stats_lock:
            self.routing_stats[key] += 1

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def analyze(
        self, task_text: str, context: TaskContext | Mapping[str, Any] | None = None
    ) -> TaskProfile:
        return self.analyzer.analyze(task_text, context)

    def filter(self, profile: TaskProfile) -> CandidatePools:
        return filter_candidates(
            profile,
            self.registry,
            hybrid_min_complexity=self.settings.hybrid_min_complexity,
        )

    def score(
        self, pools: CandidatePools, profile: TaskProfile
    ) -> list[ScoredCandidate]:
        return self.scorer.score_pools(pools, profile, self.registry)

    def select(
        self, scored: list[ScoredCandidate], profile: TaskProfile
    ) -> RoutingDecision:
        return select(scored, profile, max_fallbacks=self.settings.max_fallbacks)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def route(
        self,
        task_text: str,
        context: TaskContext | Mapping[str, Any] | None = None,
    ) -> RoutingDecision:
        """Route a task to the best-scoring eligible agent.

        Args:
            task_text: Free-form description of the development task.
            context: Optional ``TaskContext`` or mapping with ``fileCount``,
                ``urgency``, ``qualityRequirement`` and ``budgetConstraint``
                (snake_case keys accepted).

        Returns:
            RoutingDecision with the selected candidate and up to
            ``settings.max_fallbacks`` fallbacks.

        Raises:
            NoAgentsAvailableError: If the registry is empty.
            NoEligibleAgentError: If no agent is eligible for the task.
        """
        self._count("total_routes")
        summary = (task_text or "")[: self.settings.task_summary_length]

        if not self.registry:
            self._count("no_agents_available")
            logger.error(
                "Routing failed: capability registry is empty",
                extra={"task_summary": summary},
            )
            raise NoAgentsAvailableError()

        profile = self.analyze(task_text, context)
        pools = self.filter(profile)
        scored = self.score(pools, profile)

        try:
            decision = self.select(scored, profile)
        except NoEligibleAgentError as e:
            self._count("no_eligible_agent")
            logger.warning(
                "No eligible agent for task",
                extra={"task_summary": summary, **e.details},
            )
            raise

        self.tracker.record(task_text, decision)
        self._count("successful_routes")

        logger.info(
            f"Routed task to {decision.selected.name}",
            extra={
                "task_summary": summary,
                "selected_agent": decision.selected.name,
                "agent_type": decision.selected.candidate_type.value,
                "score": decision.selected.score,
                "estimated_cost": str(decision.selected.estimated_cost),
                "complexity_score": profile.complexity_score,
                "total_candidates": len(scored),
            },
        )
        return decision

    def report_outcome(self, decision_id: UUID, success: bool) -> None:
        """Report whether a routed decision succeeded.

        Raises:
            UnknownDecisionError: If the decision is not in the history buffer.
        """
        if not self.tracker.report_outcome(decision_id, success):
            raise UnknownDecisionError(decision_id)
        logger.debug(
            "Recorded decision outcome",
            extra={"decision_id": str(decision_id), "success": success},
        )

    def get_metrics(self, window_size: int | None = None) -> MetricsReport:
        """Distribution, cost and utilization report over recent decisions."""
        if window_size is None:
            window_size = self.settings.metrics_window
        return self.tracker.get_metrics(window_size)

    def get_routing_stats(self) -> dict[str, Any]:
        with self._stats_lock:
            stats: dict[str, Any] = self.routing_stats.copy()

        total = stats["total_routes"]
        if total > 0:
            stats["success_rate"] = stats["successful_routes"] / total
        return stats


__all__ = ["RoutingEngine"]
