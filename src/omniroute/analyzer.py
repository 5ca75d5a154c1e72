# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Task Analyzer - turns a task description and context into a TaskProfile.

Classification is deliberately crude: case-insensitive substring matching
against fixed keyword tables, no tokenization or stemming ("test" matches
"latest"). The matching strategy sits behind the ``TextClassifier`` protocol
so it can be swapped (e.g. for an embedding classifier) without touching the
rest of the pipeline.

Complexity scoring:
    start at 1
    +2 if file_count > 5, else +1 if file_count > 2
    +1 per complexity keyword present
    +1 if any regulated-domain keyword is present
    clamp to [1, 5]
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any, Protocol

from omniroute.enums import (
    EnumCostConstraint,
    EnumPerformanceNeed,
    EnumQualityRequirement,
    EnumTaskType,
    EnumUrgency,
)
from omniroute.models import TaskContext, TaskProfile

MIN_COMPLEXITY = 1
MAX_COMPLEXITY = 5

COMPLEXITY_KEYWORDS: tuple[str, ...] = (
    "architecture",
    "design",
    "refactor",
    "migrate",
    "security",
    "compliance",
    "optimization",
    "integration",
)

REGULATED_DOMAIN_KEYWORDS: tuple[str, ...] = ("credit", "fcra")

DOMAIN_KEYWORDS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "regulated_data": ("credit", "score", "report", "dispute", "fcra", "facta"),
        "testing": ("test", "spec", "coverage", "e2e", "unit", "integration"),
        "security": ("security", "audit", "pii", "encrypt", "compliance"),
        "documentation": ("document", "readme", "guide", "explain"),
        "database": ("database", "sql", "postgres", "schema", "migration"),
        "frontend": ("react", "component", "ui", "interface", "user"),
        "backend": ("api", "server", "service", "endpoint", "backend"),
        "devops": ("deploy", "ci/cd", "docker", "build", "pipeline"),
    }
)

COMPLIANCE_KEYWORDS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "regulatory_compliance": ("fcra", "credit"),
        "privacy_compliance": ("pii", "privacy"),
        "security_compliance": ("security", "audit"),
    }
)

# Ordered: the first type with a matching keyword wins.
TASK_TYPE_KEYWORDS: tuple[tuple[EnumTaskType, tuple[str, ...]], ...] = (
    (
        EnumTaskType.CODE_GENERATION,
        ("create", "implement", "build", "develop", "generate"),
    ),
    (EnumTaskType.TEST_CREATION, ("test", "spec", "coverage", "unittest", "e2e")),
    (EnumTaskType.DOCUMENTATION, ("document", "readme", "guide", "explain", "comment")),
    (
        EnumTaskType.DEBUGGING,
        ("debug", "fix", "error", "bug", "issue", "troubleshoot"),
    ),
    (EnumTaskType.REFACTORING, ("refactor", "restructure", "reorganize", "optimize")),
    (EnumTaskType.ANALYSIS, ("analyze", "review", "assess", "evaluate", "examine")),
)


class TextClassifier(Protocol):
    """Matching strategy used by the analyzer."""

    def count(self, text: str, keywords: Sequence[str]) -> int:
        """Number of distinct keywords present in text."""
        ...

    def tags(self, text: str, vocabulary: Mapping[str, Sequence[str]]) -> frozenset[str]:
        """Vocabulary labels with at least one keyword present in text."""
        ...


class SubstringClassifier:
    """Case-insensitive substring matcher."""

    def count(self, text: str, keywords: Sequence[str]) -> int:
        lowered = text.lower()
        return sum(1 for keyword in keywords if keyword in lowered)

    def tags(self, text: str, vocabulary: Mapping[str, Sequence[str]]) -> frozenset[str]:
        lowered = text.lower()
        return frozenset(
            label
            for label, keywords in vocabulary.items()
            if any(keyword in lowered for keyword in keywords)
        )


def assess_performance_need(context: TaskContext) -> EnumPerformanceNeed:
    if (
        context.urgency is EnumUrgency.HIGH
        or context.quality_requirement is EnumQualityRequirement.PRODUCTION
    ):
        return EnumPerformanceNeed.HIGH_PERFORMANCE
    if (
        context.urgency is EnumUrgency.LOW
        or context.quality_requirement is EnumQualityRequirement.DRAFT
    ):
        return EnumPerformanceNeed.COST_OPTIMIZED
    return EnumPerformanceNeed.BALANCED


class TaskAnalyzer:
    """Build a ``TaskProfile`` from task text and context. Never raises."""

    def __init__(self, classifier: TextClassifier | None = None) -> None:
        self.classifier: TextClassifier = classifier or SubstringClassifier()

    def assess_complexity(self, task_text: str, context: TaskContext) -> int:
        score = MIN_COMPLEXITY
        file_count = context.file_count or 0
        if file_count > 5:
            score += 2
        elif file_count > 2:
            score += 1

        score += self.classifier.count(task_text, COMPLEXITY_KEYWORDS)

        if self.classifier.count(task_text, REGULATED_DOMAIN_KEYWORDS):
            score += 1

        return max(MIN_COMPLEXITY, min(score, MAX_COMPLEXITY))

    def classify_task_type(self, task_text: str) -> EnumTaskType:
        for task_type, keywords in TASK_TYPE_KEYWORDS:
            if self.classifier.count(task_text, keywords):
                return task_type
        return EnumTaskType.GENERAL

    def analyze(
        self,
        task_text: str,
        context: TaskContext | Mapping[str, Any] | None = None,
    ) -> TaskProfile:
        """Derive the routing profile of a task.

        Args:
            task_text: Free-form task description.
            context: ``TaskContext`` or a raw mapping; malformed fields are
                normalized to their defaults.

        Returns:
            Immutable TaskProfile.
        """
        if not isinstance(context, TaskContext):
            raw = dict(context) if isinstance(context, Mapping) else {}
            context = TaskContext.model_validate(raw)
        task_text = task_text or ""

        return TaskProfile(
            complexity_score=self.assess_complexity(task_text, context),
            domain_tags=self.classifier.tags(task_text, DOMAIN_KEYWORDS),
            performance_need=assess_performance_need(context),
            cost_constraint=context.budget_constraint or EnumCostConstraint.STANDARD,
            compliance_tags=self.classifier.tags(task_text, COMPLIANCE_KEYWORDS),
            task_type=self.classify_task_type(task_text),
        )


__all__ = [
    "COMPLEXITY_KEYWORDS",
    "COMPLIANCE_KEYWORDS",
    "DOMAIN_KEYWORDS",
    "MAX_COMPLEXITY",
    "MIN_COMPLEXITY",
    "REGULATED_DOMAIN_KEYWORDS",
    "TASK_TYPE_KEYWORDS",
    "SubstringClassifier",
    "TaskAnalyzer",
    "TextClassifier",
    "assess_performance_need",
]
