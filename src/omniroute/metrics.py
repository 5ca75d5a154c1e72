# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Metrics & Feedback Tracker.

Records routing decisions into the bounded history and aggregates the most
recent window into distribution, cost and utilization reports. Purely
observational: nothing here feeds back into a decision already returned.

Recommendation thresholds:
    underutilization: share < 5% of the window, only when the window holds
                      more than 10 decisions
    overutilization:  share > 60% of the window
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from omniroute.enums import EnumCandidateType, EnumCostTrend, EnumRecommendationType
from omniroute.history import DEFAULT_CAPACITY, RoutingHistory
from omniroute.models import (
    AgentDistribution,
    CostAnalysis,
    HistoryEntry,
    MetricsReport,
    OptimizationRecommendation,
    RoutingDecision,
)
from omniroute.scoring import COST_QUANTUM

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 20
DEFAULT_TASK_SUMMARY_LENGTH = 100

UNDERUTILIZATION_SHARE = 0.05
UNDERUTILIZATION_MIN_WINDOW = 10
OVERUTILIZATION_SHARE = 0.60

_UNDERUTILIZATION_SUGGESTION = "Consider reviewing agent capabilities or routing logic"
_OVERUTILIZATION_SUGGESTION = "Consider load balancing or adding similar agents"


def agent_distribution(entries: Sequence[HistoryEntry]) -> AgentDistribution:
    counts = Counter(entry.agent_kind for entry in entries)
    return AgentDistribution(
        tool_agent=counts[EnumCandidateType.TOOL_AGENT],
        reasoning_agent=counts[EnumCandidateType.REASONING_AGENT],
        hybrid=counts[EnumCandidateType.HYBRID],
    )


def cost_analysis(entries: Sequence[HistoryEntry]) -> CostAnalysis:
    if not entries:
        return CostAnalysis()

    costs = [entry.estimated_cost for entry in entries]
    total = sum(costs, Decimal("0"))
    average = (total / len(costs)).quantize(COST_QUANTUM, rounding=ROUND_HALF_UP)

    trend = EnumCostTrend.STABLE
    if len(costs) > 1:
        if costs[-1] > costs[0]:
            trend = EnumCostTrend.INCREASING
        elif costs[-1] < costs[0]:
            trend = EnumCostTrend.DECREASING

    return CostAnalysis(
        total_estimated_cost=total,
        average_cost_per_task=average,
        cost_trend=trend,
    )


def optimization_recommendations(
    entries: Sequence[HistoryEntry],
) -> tuple[OptimizationRecommendation, ...]:
    """Flag agents whose share of the window is unusually low or high."""
    total = len(entries)
    if total == 0:
        return ()

    usage = Counter(entry.selected_agent_name for entry in entries)
    recommendations: list[OptimizationRecommendation] = []
    for agent_name, count in usage.items():
        share = count / total
        if share < UNDERUTILIZATION_SHARE and total > UNDERUTILIZATION_MIN_WINDOW:
            recommendations.append(
                OptimizationRecommendation(
                    type=EnumRecommendationType.UNDERUTILIZATION,
                    agent=agent_name,
                    usage_share=share,
                    suggestion=_UNDERUTILIZATION_SUGGESTION,
                )
            )
        if share > OVERUTILIZATION_SHARE:
            recommendations.append(
                OptimizationRecommendation(
                    type=EnumRecommendationType.OVERUTILIZATION,
                    agent=agent_name,
                    usage_share=share,
                    suggestion=_OVERUTILIZATION_SUGGESTION,
                )
            )
    return tuple(recommendations)


def history_entry(
    task_text: str,
    decision: RoutingDecision,
    summary_length: int = DEFAULT_TASK_SUMMARY_LENGTH,
) -> HistoryEntry:
    selected = decision.selected
    return HistoryEntry(
        decision_id=decision.decision_id,
        timestamp=decision.decided_at,
        task_summary=(task_text or "")[:summary_length],
        selected_agent_name=selected.name,
        agent_names=selected.agent_names,
        agent_kind=selected.candidate_type,
        score=selected.score,
        estimated_cost=selected.estimated_cost,
        reasoning=selected.reasoning,
    )


class MetricsTracker:
    """Record decisions and report on the recent window.

    Args:
        history: History buffer to write into; a new one with ``capacity``
            is created when omitted.
        capacity: Capacity of the created history buffer.
        summary_length: Characters of task text kept per entry.
    """

    def __init__(
        self,
        history: RoutingHistory | None = None,
        capacity: int = DEFAULT_CAPACITY,
        summary_length: int = DEFAULT_TASK_SUMMARY_LENGTH,
    ) -> None:
        self.history = history if history is not None else RoutingHistory(capacity)
        self.summary_length = summary_length

    def record(self, task_text: str, decision: RoutingDecision) -> HistoryEntry:
        entry = history_entry(task_text, decision, self.summary_length)
        self.history.append(entry)
        logger.debug(
            "Recorded routing decision",
            extra={
                "decision_id": str(entry.decision_id),
                "selected_agent": entry.selected_agent_name,
                "history_size": len(self.history),
            },
        )
        return entry

    def report_outcome(self, decision_id: UUID, success: bool) -> bool:
        return self.history.mark_outcome(decision_id, success)

    def success_rate(self, agent_name: str) -> float | None:
        return self.history.success_rate(agent_name)

    def get_metrics(self, window_size: int = DEFAULT_WINDOW_SIZE) -> MetricsReport:
        """Aggregate the most recent ``window_size`` decisions.

        Underutilization needs a window of more than 10 decisions and a share
        below 5%, so an agent chosen once only shows up in windows of 21 or
        more. A window of 0 yields an empty report.
        """
        window = self.history.entries(window_size)
        return MetricsReport(
            window_size=len(window),
            total_routed=self.history.total_recorded,
            agent_distribution=agent_distribution(window),
            cost_analysis=cost_analysis(window),
            recommendations=optimization_recommendations(window),
        )


__all__ = [
    "DEFAULT_TASK_SUMMARY_LENGTH",
    "DEFAULT_WINDOW_SIZE",
    "OVERUTILIZATION_SHARE",
    "UNDERUTILIZATION_MIN_WINDOW",
    "UNDERUTILIZATION_SHARE",
    "MetricsTracker",
    "agent_distribution",
    "cost_analysis",
    "history_entry",
    "optimization_recommendations",
]
