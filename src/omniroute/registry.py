# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Capability registry - declarative description of every known agent.

The registry is an immutable, ordered mapping of agent name to
``AgentCapability``. Declaration order matters: the router breaks score ties
by it.

Registries are normally supplied pre-built by the host. ``load_registry``
builds one from plain mappings shaped like the host's agent configuration,
including the free-text domain expertise extraction used for tool agents.

Example:
    >>> registry = load_registry(
    ...     tool_agents={
    ...         "postgres": {"description": "Postgres database access", "command": "npx"},
    ...     },
    ...     reasoning_agents=DEFAULT_REASONING_AGENTS,
    ... )
    >>> registry["postgres"].domain_expertise
    ('database',)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from omniroute.enums import EnumAgentKind, EnumCostTier, EnumPerformanceTier
from omniroute.errors import RegistryError
from omniroute.models import AgentCapability

logger = logging.getLogger(__name__)

# Description substrings that grant a tool agent a domain.
DESCRIPTION_EXPERTISE_KEYWORDS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "regulated_data": ("credit", "fcra"),
        "testing": ("test", "playwright"),
        "security": ("security", "pii"),
        "database": ("database", "postgres"),
    }
)

# Launch command of a tool agent -> performance tier.
COMMAND_PERFORMANCE_TIERS: MappingProxyType[str, EnumPerformanceTier] = MappingProxyType(
    {
        "node": EnumPerformanceTier.THOROUGH,
        "npx": EnumPerformanceTier.BALANCED,
        "bash": EnumPerformanceTier.FAST,
    }
)

# Declared complexity of a reasoning agent -> performance tier.
COMPLEXITY_PERFORMANCE_TIERS: MappingProxyType[str, EnumPerformanceTier] = MappingProxyType(
    {
        "low": EnumPerformanceTier.FAST,
        "medium": EnumPerformanceTier.BALANCED,
        "high": EnumPerformanceTier.THOROUGH,
    }
)

DEFAULT_REASONING_AGENTS: MappingProxyType[str, Mapping[str, Any]] = MappingProxyType(
    {
        "code-reviewer": {
            "domain": "code_quality",
            "complexity": "medium",
            "cost_tier": "standard",
            "specializations": ["security_compliance", "regulatory_compliance"],
        },
        "test-generator": {
            "domain": "testing",
            "complexity": "high",
            "cost_tier": "premium",
            "specializations": ["regulatory_compliance", "e2e_automation"],
        },
        "documentation-writer": {
            "domain": "documentation",
            "complexity": "low",
            "cost_tier": "budget",
            "specializations": ["technical_writing", "api_docs"],
        },
        "architecture-planner": {
            "domain": "planning",
            "complexity": "high",
            "cost_tier": "premium",
            "specializations": ["system_design", "compliance_architecture"],
        },
        "security-auditor": {
            "domain": "security",
            "complexity": "high",
            "cost_tier": "premium",
            "specializations": ["privacy_compliance", "security_compliance"],
        },
    }
)


def extract_domain_expertise(description: str) -> tuple[str, ...]:
    """Derive domain tags from a free-text agent description.

    Plain case-insensitive substring matching; an empty result marks the
    agent as general purpose.
    """
    text = description.lower()
    return tuple(
        domain
        for domain, keywords in DESCRIPTION_EXPERTISE_KEYWORDS.items()
        if any(keyword in text for keyword in keywords)
    )


def assess_tool_performance_tier(command: str | None) -> EnumPerformanceTier:
    """Map a tool agent's launch command onto the performance scale."""
    return COMMAND_PERFORMANCE_TIERS.get(
        (command or "").strip().lower(), EnumPerformanceTier.BALANCED
    )


def assess_agent_performance_tier(complexity: str | None) -> EnumPerformanceTier:
    """Map a reasoning agent's declared complexity onto the performance scale."""
    return COMPLEXITY_PERFORMANCE_TIERS.get(
        (complexity or "").strip().lower(), EnumPerformanceTier.BALANCED
    )


class CapabilityRegistry(Mapping[str, AgentCapability]):
    """Immutable, ordered mapping of agent name to capability."""

    def __init__(self, agents: Iterable[AgentCapability] = ()) -> None:
        entries: dict[str, AgentCapability] = {}
        for agent in agents:
            if agent.name in entries:
                raise RegistryError(
                    f"Duplicate agent name in registry: {agent.name}",
                    details={"agent_name": agent.name},
                )
            entries[agent.name] = agent
        self._agents = MappingProxyType(entries)
        self._positions = {name: index for index, name in enumerate(entries)}

    def __getitem__(self, name: str) -> AgentCapability:
        return self._agents[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._agents)

    def __len__(self) -> int:
        return len(self._agents)

    def __repr__(self) -> str:
        return f"CapabilityRegistry({list(self._agents)!r})"

    def position(self, name: str) -> int:
        """Declaration index of an agent."""
        return self._positions[name]

    def agents(self) -> list[AgentCapability]:
        return list(self._agents.values())

    def by_kind(self, kind: EnumAgentKind) -> list[AgentCapability]:
        return [a for a in self._agents.values() if a.kind is kind]

    def tool_agents(self) -> list[AgentCapability]:
        return self.by_kind(EnumAgentKind.TOOL_AGENT)

    def reasoning_agents(self) -> list[AgentCapability]:
        return self.by_kind(EnumAgentKind.REASONING_AGENT)


def _tool_agent_from_config(name: str, config: Mapping[str, Any]) -> AgentCapability:
    description = str(config.get("description") or "")
    return AgentCapability(
        name=name,
        kind=EnumAgentKind.TOOL_AGENT,
        domain_expertise=extract_domain_expertise(description),
        specializations=config.get("specializations") or (),
        performance_tier=assess_tool_performance_tier(config.get("command")),
        cost_tier=EnumCostTier.INFRASTRUCTURE,
        description=description,
    )


def _reasoning_agent_from_config(
    name: str, config: Mapping[str, Any]
) -> AgentCapability:
    domain = config.get("domain")
    return AgentCapability(
        name=name,
        kind=EnumAgentKind.REASONING_AGENT,
        domain_expertise=(domain,) if domain else (),
        specializations=config.get("specializations") or (),
        performance_tier=assess_agent_performance_tier(config.get("complexity")),
        cost_tier=config.get("cost_tier") or EnumCostTier.STANDARD,
        description=str(config.get("description") or ""),
    )


def load_registry(
    tool_agents: Mapping[str, Mapping[str, Any]] | None = None,
    reasoning_agents: Mapping[str, Mapping[str, Any]] | None = None,
) -> CapabilityRegistry:
    """Build a registry from raw agent configuration mappings.

    Tool agents are declared before reasoning agents.

    Args:
        tool_agents: name -> ``{"description", "command", "capabilities"}``.
            Tool agents are always infrastructure cost tier.
        reasoning_agents: name -> ``{"domain", "complexity", "cost_tier",
            "specializations"}``.

    Returns:
        CapabilityRegistry in declaration order.

    Raises:
        RegistryError: If an entry is malformed or a name is declared twice.
    """
    agents: list[AgentCapability] = []
    sources = (
        (tool_agents or {}, _tool_agent_from_config),
        (reasoning_agents or {}, _reasoning_agent_from_config),
    )
    for configs, build in sources:
        for name, config in configs.items():
            if not isinstance(config, Mapping):
                raise RegistryError(
                    f"Registry entry for {name} must be a mapping",
                    details={"agent_name": name, "type": type(config).__name__},
                )
            try:
                agents.append(build(name, config))
            except ValidationError as e:
                raise RegistryError(
                    f"Invalid registry entry: {name}",
                    details={"agent_name": name, "errors": e.errors()},
                ) from e

    registry = CapabilityRegistry(agents)
    logger.info(
        "Loaded capability registry",
        extra={
            "tool_agent_count": len(registry.tool_agents()),
            "reasoning_agent_count": len(registry.reasoning_agents()),
        },
    )
    return registry


__all__ = [
    "COMMAND_PERFORMANCE_TIERS",
    "COMPLEXITY_PERFORMANCE_TIERS",
    "DEFAULT_REASONING_AGENTS",
    "DESCRIPTION_EXPERTISE_KEYWORDS",
    "CapabilityRegistry",
    "assess_agent_performance_tier",
    "assess_tool_performance_tier",
    "extract_domain_expertise",
    "load_registry",
]
