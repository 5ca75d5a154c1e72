# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Scoring Engine - numeric score, cost estimate and prediction per candidate.

Score Components (summed, higher is better):
1. Domain match - tool agent: 20 per shared domain tag;
   reasoning agent: 25 flat when the task covers its primary domain
2. Compliance match - 15 per specialization matching a compliance tag
3. Performance alignment - PERFORMANCE_ALIGNMENT[need][tier], in [3, 10]
4. Cost efficiency - COST_EFFICIENCY[cost_tier][constraint], in [3, 10]
5. Historical bonus - +10 / +5 / -5 from the agent's reported success rate

Hybrid score: 0.8 * (score(tool) + score(reasoning)) + 25 when the task is
complex enough, else + 0. The 0.8 factor models coordination overhead.

All tables are named module constants so they can be tested and tuned
independently of the control flow.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Protocol

from omniroute.candidate_filter import HYBRID_MIN_COMPLEXITY
from omniroute.enums import (
    EnumAgentKind,
    EnumCostConstraint,
    EnumCostTier,
    EnumPerformanceNeed,
    EnumPerformancePrediction,
    EnumPerformanceTier,
    EnumTaskType,
)
from omniroute.models import (
    AgentCapability,
    CandidatePools,
    HybridCandidate,
    ScoreBreakdown,
    ScoredCandidate,
    TaskProfile,
)
from omniroute.registry import CapabilityRegistry

logger = logging.getLogger(__name__)

TOOL_DOMAIN_MATCH_WEIGHT = 20.0
REASONING_DOMAIN_MATCH_SCORE = 25.0
COMPLIANCE_MATCH_WEIGHT = 15.0

HYBRID_COORDINATION_FACTOR = 0.8
HYBRID_BONUS = 25.0

DEFAULT_TABLE_SCORE = 5.0

PERFORMANCE_ALIGNMENT: MappingProxyType[
    EnumPerformanceNeed, MappingProxyType[EnumPerformanceTier, float]
] = MappingProxyType(
    {
        EnumPerformanceNeed.HIGH_PERFORMANCE: MappingProxyType(
            {
                EnumPerformanceTier.THOROUGH: 10.0,
                EnumPerformanceTier.BALANCED: 7.0,
                EnumPerformanceTier.FAST: 8.0,
            }
        ),
        EnumPerformanceNeed.BALANCED: MappingProxyType(
            {
                EnumPerformanceTier.THOROUGH: 8.0,
                EnumPerformanceTier.BALANCED: 10.0,
                EnumPerformanceTier.FAST: 8.0,
            }
        ),
        EnumPerformanceNeed.COST_OPTIMIZED: MappingProxyType(
            {
                EnumPerformanceTier.THOROUGH: 5.0,
                EnumPerformanceTier.BALANCED: 8.0,
                EnumPerformanceTier.FAST: 10.0,
            }
        ),
    }
)

COST_EFFICIENCY: MappingProxyType[
    EnumCostTier, MappingProxyType[EnumCostConstraint, float]
] = MappingProxyType(
    {
        EnumCostTier.STANDARD: MappingProxyType(
            {
                EnumCostConstraint.BUDGET: 7.0,
                EnumCostConstraint.STANDARD: 10.0,
                EnumCostConstraint.PREMIUM: 8.0,
            }
        ),
        EnumCostTier.BUDGET: MappingProxyType(
            {
                EnumCostConstraint.BUDGET: 10.0,
                EnumCostConstraint.STANDARD: 8.0,
                EnumCostConstraint.PREMIUM: 5.0,
            }
        ),
        EnumCostTier.PREMIUM: MappingProxyType(
            {
                EnumCostConstraint.BUDGET: 3.0,
                EnumCostConstraint.STANDARD: 7.0,
                EnumCostConstraint.PREMIUM: 10.0,
            }
        ),
        EnumCostTier.INFRASTRUCTURE: MappingProxyType(
            {
                EnumCostConstraint.BUDGET: 8.0,
                EnumCostConstraint.STANDARD: 9.0,
                EnumCostConstraint.PREMIUM: 9.0,
            }
        ),
    }
)

# (exclusive lower bound on success rate, bonus), checked in order.
HISTORICAL_BONUS_THRESHOLDS: tuple[tuple[float, float], ...] = (
    (0.9, 10.0),
    (0.8, 5.0),
)
HISTORICAL_PENALTY_THRESHOLD = 0.6
HISTORICAL_PENALTY = -5.0

BASE_COST: MappingProxyType[EnumCostTier, Decimal] = MappingProxyType(
    {
        EnumCostTier.INFRASTRUCTURE: Decimal("0.01"),
        EnumCostTier.BUDGET: Decimal("0.05"),
        EnumCostTier.STANDARD: Decimal("0.10"),
        EnumCostTier.PREMIUM: Decimal("0.25"),
    }
)
COMPLEXITY_COST_STEP = Decimal("0.2")
HYBRID_COORDINATION_COST = Decimal("0.02")
COST_QUANTUM = Decimal("0.0001")

HYBRID_REASONING = "Enhanced domain expertise with infrastructure integration"


class SuccessRateSource(Protocol):
    """Anything that can report an agent's historical success rate."""

    def success_rate(self, agent_name: str) -> float | None:
        """Fraction of reported outcomes that succeeded, None without reports."""
        ...


# =============================================================================
# Score components
# =============================================================================


def domain_match_score(agent: AgentCapability, profile: TaskProfile) -> float:
    if agent.kind is EnumAgentKind.TOOL_AGENT:
        shared = profile.domain_tags.intersection(agent.domain_expertise)
        return TOOL_DOMAIN_MATCH_WEIGHT * len(shared)
    if agent.primary_domain is not None and agent.primary_domain in profile.domain_tags:
        return REASONING_DOMAIN_MATCH_SCORE
    return 0.0


def compliance_match_score(agent: AgentCapability, profile: TaskProfile) -> float:
    shared = profile.compliance_tags.intersection(agent.specializations)
    return COMPLIANCE_MATCH_WEIGHT * len(shared)


def performance_alignment_score(
    need: EnumPerformanceNeed, tier: EnumPerformanceTier
) -> float:
    return PERFORMANCE_ALIGNMENT.get(need, {}).get(tier, DEFAULT_TABLE_SCORE)


def cost_efficiency_score(
    cost_tier: EnumCostTier, constraint: EnumCostConstraint
) -> float:
    return COST_EFFICIENCY.get(cost_tier, {}).get(constraint, DEFAULT_TABLE_SCORE)


def historical_bonus(success_rate: float | None) -> float:
    """Bonus for proven performers, penalty for poor ones, 0 without data."""
    if success_rate is None:
        return 0.0
    for threshold, bonus in HISTORICAL_BONUS_THRESHOLDS:
        if success_rate > threshold:
            return bonus
    if success_rate < HISTORICAL_PENALTY_THRESHOLD:
        return HISTORICAL_PENALTY
    return 0.0


# =============================================================================
# Cost and performance estimates
# =============================================================================


def estimate_cost(cost_tier: EnumCostTier, complexity_score: int) -> Decimal:
    """``base_cost * (1 + 0.2 * complexity)``, quantized to 4 places."""
    multiplier = 1 + COMPLEXITY_COST_STEP * complexity_score
    return (BASE_COST[cost_tier] * multiplier).quantize(
        COST_QUANTUM, rounding=ROUND_HALF_UP
    )


def estimate_hybrid_cost(hybrid: HybridCandidate, complexity_score: int) -> Decimal:
    return (
        estimate_cost(hybrid.tool_agent.cost_tier, complexity_score)
        + estimate_cost(hybrid.reasoning_agent.cost_tier, complexity_score)
        + HYBRID_COORDINATION_COST
    )


def predict_performance(
    tier: EnumPerformanceTier, complexity_score: int
) -> EnumPerformancePrediction:
    if tier is EnumPerformanceTier.THOROUGH and complexity_score <= 3:
        return EnumPerformancePrediction.EXCELLENT
    if tier is EnumPerformanceTier.FAST and complexity_score >= 4:
        return EnumPerformancePrediction.MODERATE
    return EnumPerformancePrediction.GOOD


def _describe(agent: AgentCapability, task_type: EnumTaskType) -> str:
    if agent.kind is EnumAgentKind.TOOL_AGENT:
        expertise = ", ".join(agent.domain_expertise) or "general-purpose"
        return f"Tool agent with {expertise} expertise for {task_type} task"
    specializations = ", ".join(agent.specializations) or "general"
    domain = agent.primary_domain or "general"
    return (
        f"Reasoning agent specialized in {domain} "
        f"with {specializations} capabilities for {task_type} task"
    )


# =============================================================================
# ScoringEngine
# =============================================================================


class ScoringEngine:
    """Score candidates against a task profile.

    Args:
        history: Source of historical success rates; ``None`` disables the
            historical bonus.
        hybrid_min_complexity: Complexity at which the hybrid bonus applies.
    """

    def __init__(
        self,
        history: SuccessRateSource | None = None,
        hybrid_min_complexity: int = HYBRID_MIN_COMPLEXITY,
    ) -> None:
        self.history = history
        self.hybrid_min_complexity = hybrid_min_complexity

    def _success_rate(self, agent_name: str) -> float | None:
        if self.history is None:
            return None
        return self.history.success_rate(agent_name)

    def breakdown(self, agent: AgentCapability, profile: TaskProfile) -> ScoreBreakdown:
        return ScoreBreakdown(
            domain_match=domain_match_score(agent, profile),
            compliance_match=compliance_match_score(agent, profile),
            performance_alignment=performance_alignment_score(
                profile.performance_need, agent.performance_tier
            ),
            cost_efficiency=cost_efficiency_score(
                agent.cost_tier, profile.cost_constraint
            ),
            historical_bonus=historical_bonus(self._success_rate(agent.name)),
        )

    def hybrid_breakdown(
        self, hybrid: HybridCandidate, profile: TaskProfile
    ) -> ScoreBreakdown:
        tool = self.breakdown(hybrid.tool_agent, profile)
        reasoning = self.breakdown(hybrid.reasoning_agent, profile)
        bonus = (
            HYBRID_BONUS
            if profile.complexity_score >= self.hybrid_min_complexity
            else 0.0
        )
        return ScoreBreakdown(
            domain_match=tool.domain_match + reasoning.domain_match,
            compliance_match=tool.compliance_match + reasoning.compliance_match,
            performance_alignment=(
                tool.performance_alignment + reasoning.performance_alignment
            ),
            cost_efficiency=tool.cost_efficiency + reasoning.cost_efficiency,
            historical_bonus=tool.historical_bonus + reasoning.historical_bonus,
            coordination_factor=HYBRID_COORDINATION_FACTOR,
            hybrid_bonus=bonus,
        )

    def score(
        self, candidate: AgentCapability | HybridCandidate, profile: TaskProfile
    ) -> float:
        if isinstance(candidate, HybridCandidate):
            return self.hybrid_breakdown(candidate, profile).total
        return self.breakdown(candidate, profile).total

    def score_candidate(
        self, candidate: AgentCapability | HybridCandidate, profile: TaskProfile
    ) -> ScoredCandidate:
        if isinstance(candidate, HybridCandidate):
            breakdown = self.hybrid_breakdown(candidate, profile)
            return ScoredCandidate(
                candidate=candidate,
                score=breakdown.total,
                breakdown=breakdown,
                estimated_cost=estimate_hybrid_cost(
                    candidate, profile.complexity_score
                ),
                performance_prediction=EnumPerformancePrediction.EXCELLENT,
                reasoning=f"{HYBRID_REASONING} for {profile.task_type} task",
            )

        breakdown = self.breakdown(candidate, profile)
        return ScoredCandidate(
            candidate=candidate,
            score=breakdown.total,
            breakdown=breakdown,
            estimated_cost=estimate_cost(candidate.cost_tier, profile.complexity_score),
            performance_prediction=predict_performance(
                candidate.performance_tier, profile.complexity_score
            ),
            reasoning=_describe(candidate, profile.task_type),
        )

    def score_pools(
        self,
        pools: CandidatePools,
        profile: TaskProfile,
        registry: CapabilityRegistry,
    ) -> list[ScoredCandidate]:
        """Score every candidate in ``pools``.

        Single agents come first in registry declaration order, followed by
        hybrids in the order they were built.
        """
        singles = sorted(
            (*pools.tool_agents, *pools.reasoning_agents),
            key=lambda agent: registry.position(agent.name),
        )
        scored = [self.score_candidate(agent, profile) for agent in singles]
        scored.extend(self.score_candidate(h, profile) for h in pools.hybrids)

        logger.debug(
            "Scored candidates",
            extra={"scores": {s.name: s.score for s in scored}},
        )
        return scored


__all__ = [
    "BASE_COST",
    "COMPLEXITY_COST_STEP",
    "COMPLIANCE_MATCH_WEIGHT",
    "COST_EFFICIENCY",
    "DEFAULT_TABLE_SCORE",
    "HISTORICAL_BONUS_THRESHOLDS",
    "HISTORICAL_PENALTY",
    "HISTORICAL_PENALTY_THRESHOLD",
    "HYBRID_BONUS",
    "HYBRID_COORDINATION_COST",
    "HYBRID_COORDINATION_FACTOR",
    "HYBRID_REASONING",
    "PERFORMANCE_ALIGNMENT",
    "REASONING_DOMAIN_MATCH_SCORE",
    "TOOL_DOMAIN_MATCH_WEIGHT",
    "ScoringEngine",
    "SuccessRateSource",
    "compliance_match_score",
    "cost_efficiency_score",
    "domain_match_score",
    "estimate_cost",
    "estimate_hybrid_cost",
    "historical_bonus",
    "performance_alignment_score",
    "predict_performance",
]
