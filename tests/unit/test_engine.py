# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""End-to-end tests for RoutingEngine.

Tests cover:
- Routing with ranked fallbacks
- Budget-sensitive and compliance-heavy tasks
- Hybrid selection for complex multi-domain tasks
- Error paths: empty registry, no eligible agent, unknown decision
- Outcome feedback into later scores
- History bound, metrics and routing stats
- Concurrent routing on a shared engine
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal
from uuid import uuid4

import pytest

from omniroute.config import RoutingSettings
from omniroute.engine import RoutingEngine
from omniroute.enums import (
    EnumAgentKind,
    EnumCandidateType,
    EnumCostTier,
    EnumPerformanceTier,
)
from omniroute.errors import (
    NoAgentsAvailableError,
    NoEligibleAgentError,
    UnknownDecisionError,
)
from omniroute.models import AgentCapability
from omniroute.registry import (
    DEFAULT_REASONING_AGENTS,
    CapabilityRegistry,
    load_registry,
)

WRITE_TESTS = "Write unit tests"


def _make_frontend_registry() -> CapabilityRegistry:
    return CapabilityRegistry(
        [
            AgentCapability(
                name="ui_tool",
                kind=EnumAgentKind.TOOL_AGENT,
                domain_expertise=("frontend",),
                cost_tier=EnumCostTier.INFRASTRUCTURE,
            ),
            AgentCapability(
                name="ui_designer",
                kind=EnumAgentKind.REASONING_AGENT,
                domain_expertise=("frontend",),
            ),
        ]
    )


# =============================================================================
# Routing
# =============================================================================


@pytest.mark.unit
class TestRoute:
    def test_selects_best_and_ranks_fallbacks(self, engine: RoutingEngine) -> None:
        decision = engine.route(WRITE_TESTS, {"fileCount": 3})

        assert decision.selected.name == "test-generator"
        assert decision.selected.score == 40.0
        assert decision.selected.candidate_type is EnumCandidateType.REASONING_AGENT
        assert [(f.name, f.score) for f in decision.fallbacks] == [
            ("test_runner", 37.0),
            ("shell_helper", 17.0),
        ]
        assert decision.profile.complexity_score == 2

    def test_reasoning_names_task_type(self, engine: RoutingEngine) -> None:
        decision = engine.route(WRITE_TESTS, {"fileCount": 3})
        assert decision.profile.task_type.value == "test_creation"
        for scored in (decision.selected, *decision.fallbacks):
            assert "for test_creation task" in scored.reasoning
        (entry,) = engine.history.entries()
        assert entry.reasoning == decision.selected.reasoning

    def test_selected_score_is_maximum(self, engine: RoutingEngine) -> None:
        decision = engine.route(
            "Refactor the security architecture of the payments API",
            {"fileCount": 8, "urgency": "high"},
        )
        assert decision.selected.score == max(c.score for c in decision.candidates)
        assert decision.selected.name not in {f.name for f in decision.fallbacks}
        assert len(decision.fallbacks) <= 2

    def test_budget_task_prefers_budget_tier(self, engine: RoutingEngine) -> None:
        decision = engine.route(
            "Explain the README setup guide",
            {"urgency": "low", "budgetConstraint": "budget"},
        )
        assert decision.selected.name == "documentation-writer"
        assert decision.selected.estimated_cost == Decimal("0.0600")

    def test_compliance_specialist_scenario(self, agent_a: AgentCapability) -> None:
        engine = RoutingEngine(CapabilityRegistry([agent_a]))
        decision = engine.route(
            "Generate tests for credit score calculation with compliance",
            {"fileCount": 3},
        )
        assert decision.profile.complexity_score == 4
        assert decision.selected.name == "AgentA"
        assert decision.selected.breakdown.domain_match == 20.0
        assert decision.fallbacks == ()

    def test_hybrid_selected_for_complex_task(self) -> None:
        registry = CapabilityRegistry(
            [
                AgentCapability(
                    name="pg",
                    kind=EnumAgentKind.TOOL_AGENT,
                    domain_expertise=("database",),
                    performance_tier=EnumPerformanceTier.BALANCED,
                    cost_tier=EnumCostTier.INFRASTRUCTURE,
                ),
                *load_registry(
                    reasoning_agents={
                        "security-auditor": DEFAULT_REASONING_AGENTS["security-auditor"]
                    }
                ).agents(),
            ]
        )
        decision = RoutingEngine(registry).route(
            "Security audit of the postgres database schema for PII",
            {"fileCount": 6},
        )

        assert decision.profile.complexity_score == 4
        assert decision.selected.candidate_type is EnumCandidateType.HYBRID
        assert decision.selected.agent_names == ("pg", "security-auditor")
        assert decision.selected.score == pytest.approx(112.2)
        assert decision.selected.estimated_cost == Decimal("0.4880")
        assert [f.name for f in decision.fallbacks] == ["security-auditor", "pg"]

    def test_routing_is_deterministic(self, sample_registry: CapabilityRegistry) -> None:
        task = "Add e2e test coverage for the postgres schema migration"
        context = {"fileCount": 4}
        first = RoutingEngine(sample_registry).route(task, context)
        second = RoutingEngine(sample_registry).route(task, context)
        assert [c.name for c in first.candidates] == [c.name for c in second.candidates]
        assert [c.score for c in first.candidates] == [c.score for c in second.candidates]

    def test_logs_selection(
        self, engine: RoutingEngine, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="omniroute.engine"):
            engine.route(WRITE_TESTS, {"fileCount": 3})
        assert "Routed task to test-generator" in caplog.text


# =============================================================================
# Errors
# =============================================================================


@pytest.mark.unit
class TestRouteErrors:
    def test_empty_registry(self) -> None:
        engine = RoutingEngine(CapabilityRegistry())
        with pytest.raises(NoAgentsAvailableError):
            engine.route(WRITE_TESTS)
        assert len(engine.history) == 0
        assert engine.get_routing_stats()["no_agents_available"] == 1

    def test_no_eligible_agent(self) -> None:
        engine = RoutingEngine(_make_frontend_registry())
        with pytest.raises(NoEligibleAgentError) as exc_info:
            engine.route("Run database migrations for the orders table")

        assert exc_info.value.domain_tags == {"database"}
        assert len(engine.history) == 0
        stats = engine.get_routing_stats()
        assert stats["no_eligible_agent"] == 1
        assert stats["success_rate"] == 0.0

    def test_unknown_decision_outcome(self, engine: RoutingEngine) -> None:
        with pytest.raises(UnknownDecisionError):
            engine.report_outcome(uuid4(), True)


# =============================================================================
# Feedback and history
# =============================================================================


@pytest.mark.unit
class TestFeedback:
    def test_success_raises_later_score(self, engine: RoutingEngine) -> None:
        first = engine.route(WRITE_TESTS, {"fileCount": 3})
        engine.report_outcome(first.decision_id, True)

        second = engine.route(WRITE_TESTS, {"fileCount": 3})
        assert second.selected.name == "test-generator"
        assert second.selected.score == 50.0
        assert second.selected.breakdown.historical_bonus == 10.0

    def test_failure_can_change_selection(self, engine: RoutingEngine) -> None:
        first = engine.route(WRITE_TESTS, {"fileCount": 3})
        engine.report_outcome(first.decision_id, False)

        second = engine.route(WRITE_TESTS, {"fileCount": 3})
        assert second.selected.name == "test_runner"
        assert second.fallbacks[0].name == "test-generator"
        assert second.fallbacks[0].score == 35.0

    def test_decisions_without_outcome_do_not_affect_scores(
        self, engine: RoutingEngine
    ) -> None:
        scores = [engine.route(WRITE_TESTS, {"fileCount": 3}).selected.score for _ in range(5)]
        assert scores == [40.0] * 5

    def test_history_is_bounded(self, sample_registry: CapabilityRegistry) -> None:
        engine = RoutingEngine(
            sample_registry, settings=RoutingSettings(history_capacity=100)
        )
        ids = [engine.route(WRITE_TESTS).decision_id for _ in range(150)]

        assert len(engine.history) == 100
        kept = {entry.decision_id for entry in engine.history.entries()}
        assert not kept & set(ids[:50])
        assert engine.get_metrics().total_routed == 150

    def test_task_summary_truncated(self, engine: RoutingEngine) -> None:
        engine.route("test " * 100)
        (entry,) = engine.history.entries()
        assert len(entry.task_summary) == 100


# =============================================================================
# Metrics and stats
# =============================================================================


@pytest.mark.unit
class TestMetrics:
    def test_default_window(self, engine: RoutingEngine) -> None:
        for _ in range(25):
            engine.route(WRITE_TESTS, {"fileCount": 3})
        report = engine.get_metrics()
        assert report.window_size == 20
        assert report.agent_distribution.reasoning_agent == 20
        assert report.cost_analysis.cost_trend.value == "stable"
        assert [r.agent for r in report.recommendations] == ["test-generator"]

    def test_explicit_window(self, engine: RoutingEngine) -> None:
        for _ in range(3):
            engine.route(WRITE_TESTS)
        assert engine.get_metrics(2).window_size == 2

    def test_zero_window_is_empty(self, engine: RoutingEngine) -> None:
        for _ in range(5):
            engine.route(WRITE_TESTS)
        report = engine.get_metrics(0)
        assert report.window_size == 0
        assert report.total_routed == 5
        assert report.agent_distribution.reasoning_agent == 0
        assert report.recommendations == ()

    def test_underutilization_in_large_window(self, engine: RoutingEngine) -> None:
        for _ in range(24):
            engine.route(WRITE_TESTS, {"fileCount": 3})
        engine.route(
            "Explain the README setup guide",
            {"urgency": "low", "budgetConstraint": "budget"},
        )

        report = engine.get_metrics(25)
        recs = {(r.type.value, r.agent) for r in report.recommendations}
        assert recs == {
            ("underutilization", "documentation-writer"),
            ("overutilization", "test-generator"),
        }
        assert not any(
            r.type.value == "underutilization" for r in engine.get_metrics().recommendations
        )

    def test_routing_stats(self, engine: RoutingEngine) -> None:
        engine.route(WRITE_TESTS)
        stats = engine.get_routing_stats()
        assert stats["total_routes"] == 1
        assert stats["successful_routes"] == 1
        assert stats["success_rate"] == 1.0

    def test_stats_without_routes_have_no_rate(self, engine: RoutingEngine) -> None:
        assert "success_rate" not in engine.get_routing_stats()


@pytest.mark.unit
def test_concurrent_routing(sample_registry: CapabilityRegistry) -> None:
    engine = RoutingEngine(sample_registry, settings=RoutingSettings(history_capacity=50))
    errors: list[BaseException] = []

    def worker() -> None:
        try:
            for _ in range(20):
                engine.route(WRITE_TESTS, {"fileCount": 3})
        except Exception as e:  # noqa: BLE001
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(engine.history) == 50
    assert engine.get_routing_stats()["successful_routes"] == 120
