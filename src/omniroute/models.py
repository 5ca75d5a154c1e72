# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Pydantic v2 data models for the routing engine.

Per-call models (``TaskContext``, ``TaskProfile``, ``ScoredCandidate``,
``RoutingDecision``) are immutable (``frozen=True``) and discarded after use.
``HistoryEntry`` is the only mutable model: it lives in the bounded routing
history and may receive an outcome flag after the fact.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from omniroute.enums import (
    EnumAgentKind,
    EnumCandidateType,
    EnumCostConstraint,
    EnumCostTier,
    EnumCostTrend,
    EnumPerformanceNeed,
    EnumPerformancePrediction,
    EnumPerformanceTier,
    EnumQualityRequirement,
    EnumRecommendationType,
    EnumTaskType,
    EnumUrgency,
)

FALLBACK_REASON = "Fallback option if primary agent fails"


def _coerce_choice(value: Any, enum_cls: type[StrEnum]) -> StrEnum | None:
    """Map a raw context value onto ``enum_cls``, or None when it is not a member."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return None
    return None


def _unique(values: Any) -> tuple[str, ...]:
    """Deduplicate a sequence of tags while keeping declaration order."""
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    return tuple(dict.fromkeys(str(v) for v in values if v))


# =============================================================================
# Request side
# =============================================================================


class TaskContext(BaseModel):
    """Ambient context supplied with a routing request.

    Accepts both snake_case and camelCase keys. Missing or malformed values
    become ``None`` and take their documented defaults during analysis.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    file_count: int | None = Field(
        default=None,
        validation_alias=AliasChoices("file_count", "fileCount"),
    )
    urgency: EnumUrgency | None = None
    quality_requirement: EnumQualityRequirement | None = Field(
        default=None,
        validation_alias=AliasChoices("quality_requirement", "qualityRequirement"),
    )
    budget_constraint: EnumCostConstraint | None = Field(
        default=None,
        validation_alias=AliasChoices("budget_constraint", "budgetConstraint"),
    )

    @field_validator("file_count", mode="before")
    @classmethod
    def _normalize_file_count(cls, v: Any) -> int | None:
        if v is None or isinstance(v, bool):
            return None
        try:
            count = int(v)
        except (TypeError, ValueError):
            return None
        return count if count >= 0 else None

    @field_validator("urgency", mode="before")
    @classmethod
    def _normalize_urgency(cls, v: Any) -> StrEnum | None:
        return _coerce_choice(v, EnumUrgency)

    @field_validator("quality_requirement", mode="before")
    @classmethod
    def _normalize_quality(cls, v: Any) -> StrEnum | None:
        return _coerce_choice(v, EnumQualityRequirement)

    @field_validator("budget_constraint", mode="before")
    @classmethod
    def _normalize_budget(cls, v: Any) -> StrEnum | None:
        return _coerce_choice(v, EnumCostConstraint)


class TaskProfile(BaseModel):
    """Structured, derived representation of a routing request.

    Attributes:
        complexity_score: Task complexity, always within [1, 5].
        domain_tags: Domains detected in the task text.
        performance_need: Derived from urgency and quality requirement.
        cost_constraint: Budget constraint, ``standard`` when absent.
        compliance_tags: Compliance requirements detected in the task text.
        task_type: Coarse task type; informational only.
    """

    model_config = ConfigDict(frozen=True)

    complexity_score: int = Field(..., ge=1, le=5)
    domain_tags: frozenset[str] = frozenset()
    performance_need: EnumPerformanceNeed = EnumPerformanceNeed.BALANCED
    cost_constraint: EnumCostConstraint = EnumCostConstraint.STANDARD
    compliance_tags: frozenset[str] = frozenset()
    task_type: EnumTaskType = EnumTaskType.GENERAL


# =============================================================================
# Candidates
# =============================================================================


class AgentCapability(BaseModel):
    """Static registry entry describing one execution agent.

    An empty ``domain_expertise`` marks a general-purpose agent. For reasoning
    agents the first domain is the agent's primary domain.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    kind: EnumAgentKind
    domain_expertise: tuple[str, ...] = ()
    specializations: tuple[str, ...] = ()
    performance_tier: EnumPerformanceTier = EnumPerformanceTier.BALANCED
    cost_tier: EnumCostTier = EnumCostTier.STANDARD
    description: str = ""

    @field_validator("domain_expertise", "specializations", mode="before")
    @classmethod
    def _dedupe_tags(cls, v: Any) -> tuple[str, ...]:
        return _unique(v)

    @property
    def is_general_purpose(self) -> bool:
        return not self.domain_expertise

    @property
    def primary_domain(self) -> str | None:
        return self.domain_expertise[0] if self.domain_expertise else None

    @property
    def candidate_type(self) -> EnumCandidateType:
        return EnumCandidateType(self.kind.value)

    @property
    def agent_names(self) -> tuple[str, ...]:
        return (self.name,)


class HybridCandidate(BaseModel):
    """Composite plan pairing an infrastructure tool agent with a reasoning agent."""

    model_config = ConfigDict(frozen=True)

    tool_agent: AgentCapability
    reasoning_agent: AgentCapability

    @model_validator(mode="after")
    def _check_pair(self) -> HybridCandidate:
        if self.tool_agent.kind is not EnumAgentKind.TOOL_AGENT:
            msg = f"{self.tool_agent.name} is not a tool agent"
            raise ValueError(msg)
        if self.tool_agent.cost_tier is not EnumCostTier.INFRASTRUCTURE:
            msg = f"{self.tool_agent.name} is not an infrastructure-tier tool agent"
            raise ValueError(msg)
        if self.reasoning_agent.kind is not EnumAgentKind.REASONING_AGENT:
            msg = f"{self.reasoning_agent.name} is not a reasoning agent"
            raise ValueError(msg)
        return self

    @property
    def name(self) -> str:
        return f"{self.tool_agent.name} + {self.reasoning_agent.name}"

    @property
    def candidate_type(self) -> EnumCandidateType:
        return EnumCandidateType.HYBRID

    @property
    def agent_names(self) -> tuple[str, ...]:
        return (self.tool_agent.name, self.reasoning_agent.name)


Candidate = AgentCapability | HybridCandidate


class CandidatePools(BaseModel):
    """Eligible candidates split by kind, in registry declaration order."""

    model_config = ConfigDict(frozen=True)

    tool_agents: tuple[AgentCapability, ...] = ()
    reasoning_agents: tuple[AgentCapability, ...] = ()
    hybrids: tuple[HybridCandidate, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.tool_agents or self.reasoning_agents or self.hybrids)

    def __len__(self) -> int:
        return len(self.tool_agents) + len(self.reasoning_agents) + len(self.hybrids)


# =============================================================================
# Scoring results
# =============================================================================


class ScoreBreakdown(BaseModel):
    """Per-signal contributions to a candidate score.

    For a hybrid, the five signals hold the sums over both component agents,
    ``coordination_factor`` is the overhead discount and ``hybrid_bonus`` the
    complexity bonus.
    """

    model_config = ConfigDict(frozen=True)

    domain_match: float = 0.0
    compliance_match: float = 0.0
    performance_alignment: float = 0.0
    cost_efficiency: float = 0.0
    historical_bonus: float = 0.0
    coordination_factor: float = Field(default=1.0, gt=0.0, le=1.0)
    hybrid_bonus: float = 0.0

    @property
    def base(self) -> float:
        return (
            self.domain_match
            + self.compliance_match
            + self.performance_alignment
            + self.cost_efficiency
            + self.historical_bonus
        )

    @property
    def total(self) -> float:
        return self.coordination_factor * self.base + self.hybrid_bonus


class ScoredCandidate(BaseModel):
    """A candidate with its score, cost estimate and performance prediction."""

    model_config = ConfigDict(frozen=True)

    candidate: AgentCapability | HybridCandidate
    score: float
    breakdown: ScoreBreakdown
    estimated_cost: Decimal
    performance_prediction: EnumPerformancePrediction
    reasoning: str

    @property
    def name(self) -> str:
        return self.candidate.name

    @property
    def candidate_type(self) -> EnumCandidateType:
        return self.candidate.candidate_type

    @property
    def agent_names(self) -> tuple[str, ...]:
        return self.candidate.agent_names


class RoutingDecision(BaseModel):
    """Result of a routing call.

    ``selected`` always carries the highest score among ``candidates``;
    ``fallbacks`` follow it in descending score order.
    """

    model_config = ConfigDict(frozen=True)

    decision_id: UUID = Field(default_factory=uuid4)
    decided_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    profile: TaskProfile
    selected: ScoredCandidate
    fallbacks: tuple[ScoredCandidate, ...] = ()
    candidates: tuple[ScoredCandidate, ...] = ()

    @property
    def fallback_reason(self) -> str:
        return FALLBACK_REASON


# =============================================================================
# History and metrics
# =============================================================================


class HistoryEntry(BaseModel):
    """One recorded routing decision.

    ``success`` is ``None`` until an outcome is reported for the decision.
    """

    model_config = ConfigDict(validate_assignment=True)

    decision_id: UUID
    timestamp: datetime
    task_summary: str
    selected_agent_name: str
    agent_names: tuple[str, ...]
    agent_kind: EnumCandidateType
    score: float
    estimated_cost: Decimal
    reasoning: str
    success: bool | None = None


class AgentDistribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    tool_agent: int = 0
    reasoning_agent: int = 0
    hybrid: int = 0


class CostAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_estimated_cost: Decimal = Decimal("0")
    average_cost_per_task: Decimal = Decimal("0")
    cost_trend: EnumCostTrend = EnumCostTrend.STABLE


class OptimizationRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: EnumRecommendationType
    agent: str
    usage_share: float = Field(..., ge=0.0, le=1.0)
    suggestion: str


class MetricsReport(BaseModel):
    """Aggregated view over the most recent routing decisions."""

    model_config = ConfigDict(frozen=True)

    window_size: int
    total_routed: int
    agent_distribution: AgentDistribution
    cost_analysis: CostAnalysis
    recommendations: tuple[OptimizationRecommendation, ...] = ()


__all__ = [
    "FALLBACK_REASON",
    "AgentCapability",
    "AgentDistribution",
    "Candidate",
    "CandidatePools",
    "CostAnalysis",
    "HistoryEntry",
    "HybridCandidate",
    "MetricsReport",
    "OptimizationRecommendation",
    "RoutingDecision",
    "ScoreBreakdown",
    "ScoredCandidate",
    "TaskContext",
    "TaskProfile",
]
