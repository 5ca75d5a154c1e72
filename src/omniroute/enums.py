# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Enumerations for the task-to-agent routing engine.

Every closed vocabulary used by the router is a ``StrEnum`` so values
serialise cleanly to JSON and compare equal to their plain string form.
"""

from __future__ import annotations

from enum import StrEnum


class EnumAgentKind(StrEnum):
    """Kind of a registered execution agent."""

    TOOL_AGENT = "tool_agent"
    """Low-cost executor with narrow, well-defined capabilities."""

    REASONING_AGENT = "reasoning_agent"
    """Higher-cost executor chosen for domain depth or compliance sensitivity."""


class EnumCandidateType(StrEnum):
    """Type of a scored candidate, including composite hybrid plans."""

    TOOL_AGENT = "tool_agent"
    REASONING_AGENT = "reasoning_agent"
    HYBRID = "hybrid"


class EnumPerformanceTier(StrEnum):
    """Ordinal performance tier of an agent (fast < balanced < thorough)."""

    FAST = "fast"
    BALANCED = "balanced"
    THOROUGH = "thorough"


class EnumCostTier(StrEnum):
    """Cost tier of an agent."""

    INFRASTRUCTURE = "infrastructure"
    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"


class EnumPerformanceNeed(StrEnum):
    """Performance need derived from task urgency and quality requirement."""

    HIGH_PERFORMANCE = "high_performance"
    BALANCED = "balanced"
    COST_OPTIMIZED = "cost_optimized"


class EnumCostConstraint(StrEnum):
    """Budget constraint of a routing request."""

    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"


class EnumUrgency(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class EnumQualityRequirement(StrEnum):
    DRAFT = "draft"
    STANDARD = "standard"
    PRODUCTION = "production"


class EnumPerformancePrediction(StrEnum):
    """Expected quality of an agent's work on the profiled task."""

    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"


class EnumTaskType(StrEnum):
    """Coarse task type, informational only (not used in scoring)."""

    CODE_GENERATION = "code_generation"
    TEST_CREATION = "test_creation"
    DOCUMENTATION = "documentation"
    DEBUGGING = "debugging"
    REFACTORING = "refactoring"
    ANALYSIS = "analysis"
    GENERAL = "general"


class EnumCostTrend(StrEnum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class EnumRecommendationType(StrEnum):
    """Kind of optimization recommendation emitted by the metrics tracker."""

    UNDERUTILIZATION = "underutilization"
    OVERUTILIZATION = "overutilization"


__all__ = [
    "EnumAgentKind",
    "EnumCandidateType",
    "EnumCostConstraint",
    "EnumCostTier",
    "EnumCostTrend",
    "EnumPerformanceNeed",
    "EnumPerformancePrediction",
    "EnumPerformanceTier",
    "EnumQualityRequirement",
    "EnumRecommendationType",
    "EnumTaskType",
    "EnumUrgency",
]
