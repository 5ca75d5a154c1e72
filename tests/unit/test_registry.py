# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Tests for the capability registry.

Tests cover:
- Domain expertise extraction from tool agent descriptions
- Command and complexity to performance tier mapping
- load_registry declaration order and tier assignment
- Rejection of duplicate names and malformed entries
- Mapping behaviour of CapabilityRegistry
"""

from __future__ import annotations

import pytest

from omniroute.enums import EnumAgentKind, EnumCostTier, EnumPerformanceTier
from omniroute.errors import EnumRoutingErrorCode, RegistryError
from omniroute.models import AgentCapability
from omniroute.registry import (
    DEFAULT_REASONING_AGENTS,
    CapabilityRegistry,
    assess_agent_performance_tier,
    assess_tool_performance_tier,
    extract_domain_expertise,
    load_registry,
)


def _make_agent(name: str, kind: EnumAgentKind = EnumAgentKind.TOOL_AGENT) -> AgentCapability:
    return AgentCapability(name=name, kind=kind)


# =============================================================================
# Extraction helpers
# =============================================================================


@pytest.mark.unit
class TestExtractDomainExpertise:
    def test_multiple_domains_in_table_order(self) -> None:
        assert extract_domain_expertise(
            "Postgres access with PII security and FCRA credit checks"
        ) == ("regulated_data", "security", "database")

    def test_playwright_is_testing(self) -> None:
        assert extract_domain_expertise("Playwright browser runner") == ("testing",)

    def test_no_match_is_general_purpose(self) -> None:
        assert extract_domain_expertise("GitHub operations") == ()

    def test_empty_description(self) -> None:
        assert extract_domain_expertise("") == ()


@pytest.mark.unit
@pytest.mark.parametrize(
    ("command", "expected"),
    [
        ("node", EnumPerformanceTier.THOROUGH),
        ("npx", EnumPerformanceTier.BALANCED),
        ("bash", EnumPerformanceTier.FAST),
        ("  NODE ", EnumPerformanceTier.THOROUGH),
        ("python", EnumPerformanceTier.BALANCED),
        (None, EnumPerformanceTier.BALANCED),
    ],
)
def test_assess_tool_performance_tier(
    command: str | None, expected: EnumPerformanceTier
) -> None:
    assert assess_tool_performance_tier(command) is expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("complexity", "expected"),
    [
        ("low", EnumPerformanceTier.FAST),
        ("medium", EnumPerformanceTier.BALANCED),
        ("high", EnumPerformanceTier.THOROUGH),
        ("extreme", EnumPerformanceTier.BALANCED),
        (None, EnumPerformanceTier.BALANCED),
    ],
)
def test_assess_agent_performance_tier(
    complexity: str | None, expected: EnumPerformanceTier
) -> None:
    assert assess_agent_performance_tier(complexity) is expected


# =============================================================================
# load_registry
# =============================================================================


@pytest.mark.unit
class TestLoadRegistry:
    def test_tool_agents_declared_first(self, sample_registry: CapabilityRegistry) -> None:
        names = list(sample_registry)
        assert names[:3] == ["pg_tools", "test_runner", "shell_helper"]
        assert names[3:] == list(DEFAULT_REASONING_AGENTS)

    def test_tool_agents_are_infrastructure(
        self, sample_registry: CapabilityRegistry
    ) -> None:
        for agent in sample_registry.tool_agents():
            assert agent.cost_tier is EnumCostTier.INFRASTRUCTURE
            assert agent.kind is EnumAgentKind.TOOL_AGENT

    def test_tool_agent_fields(self, sample_registry: CapabilityRegistry) -> None:
        runner = sample_registry["test_runner"]
        assert runner.domain_expertise == ("testing",)
        assert runner.performance_tier is EnumPerformanceTier.THOROUGH
        assert sample_registry["shell_helper"].is_general_purpose

    def test_reasoning_agent_fields(self, sample_registry: CapabilityRegistry) -> None:
        auditor = sample_registry["security-auditor"]
        assert auditor.kind is EnumAgentKind.REASONING_AGENT
        assert auditor.primary_domain == "security"
        assert auditor.cost_tier is EnumCostTier.PREMIUM
        assert auditor.performance_tier is EnumPerformanceTier.THOROUGH
        assert auditor.specializations == ("privacy_compliance", "security_compliance")

    def test_reasoning_agent_defaults(self) -> None:
        registry = load_registry(reasoning_agents={"helper": {}})
        helper = registry["helper"]
        assert helper.is_general_purpose
        assert helper.cost_tier is EnumCostTier.STANDARD
        assert helper.performance_tier is EnumPerformanceTier.BALANCED

    def test_empty_inputs(self) -> None:
        registry = load_registry()
        assert len(registry) == 0
        assert not registry

    def test_non_mapping_entry_rejected(self) -> None:
        with pytest.raises(RegistryError) as exc_info:
            load_registry(tool_agents={"broken": "npx"})  # type: ignore[dict-item]
        assert exc_info.value.code is EnumRoutingErrorCode.INVALID_REGISTRY
        assert exc_info.value.details["agent_name"] == "broken"

    def test_invalid_cost_tier_rejected(self) -> None:
        with pytest.raises(RegistryError, match="Invalid registry entry: bad"):
            load_registry(reasoning_agents={"bad": {"cost_tier": "luxury"}})

    def test_duplicate_name_across_kinds_rejected(self) -> None:
        with pytest.raises(RegistryError, match="Duplicate agent name"):
            load_registry(
                tool_agents={"shared": {"command": "npx"}},
                reasoning_agents={"shared": {"domain": "testing"}},
            )


# =============================================================================
# CapabilityRegistry
# =============================================================================


@pytest.mark.unit
class TestCapabilityRegistry:
    def test_positions_follow_declaration(self) -> None:
        registry = CapabilityRegistry([_make_agent("b"), _make_agent("a")])
        assert registry.position("b") == 0
        assert registry.position("a") == 1

    def test_by_kind(self) -> None:
        registry = CapabilityRegistry(
            [
                _make_agent("tool"),
                _make_agent("thinker", EnumAgentKind.REASONING_AGENT),
            ]
        )
        assert [a.name for a in registry.tool_agents()] == ["tool"]
        assert [a.name for a in registry.reasoning_agents()] == ["thinker"]

    def test_duplicate_rejected(self) -> None:
        with pytest.raises(RegistryError):
            CapabilityRegistry([_make_agent("x"), _make_agent("x")])

    def test_lookup_unknown_raises_key_error(self) -> None:
        registry = CapabilityRegistry([_make_agent("x")])
        with pytest.raises(KeyError):
            registry["y"]

    def test_repr_lists_names(self) -> None:
        assert repr(CapabilityRegistry([_make_agent("x")])) == "CapabilityRegistry(['x'])"
