# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Candidate Filter - intersects a TaskProfile with the capability registry.

An agent is eligible when it is general purpose (no domain expertise), shares
a domain with the task, or holds a specialization matching one of the task's
compliance tags. Hybrid pairs are only built for tasks at or above the hybrid
complexity threshold, from eligible infrastructure-tier tool agents and
eligible reasoning agents.
"""

from __future__ import annotations

import logging

from omniroute.enums import EnumAgentKind, EnumCostTier
from omniroute.models import (
    AgentCapability,
    CandidatePools,
    HybridCandidate,
    TaskProfile,
)
from omniroute.registry import CapabilityRegistry

logger = logging.getLogger(__name__)

HYBRID_MIN_COMPLEXITY = 3


def is_eligible(agent: AgentCapability, profile: TaskProfile) -> bool:
    if agent.is_general_purpose:
        return True
    if profile.domain_tags.intersection(agent.domain_expertise):
        return True
    return bool(profile.compliance_tags.intersection(agent.specializations))


def build_hybrids(
    tool_agents: list[AgentCapability] | tuple[AgentCapability, ...],
    reasoning_agents: list[AgentCapability] | tuple[AgentCapability, ...],
) -> tuple[HybridCandidate, ...]:
    """Pair every infrastructure tool agent with every reasoning agent."""
    infrastructure = [
        a for a in tool_agents if a.cost_tier is EnumCostTier.INFRASTRUCTURE
    ]
    return tuple(
        HybridCandidate(tool_agent=tool, reasoning_agent=reasoning)
        for tool in infrastructure
        for reasoning in reasoning_agents
    )


def filter_candidates(
    profile: TaskProfile,
    registry: CapabilityRegistry,
    hybrid_min_complexity: int = HYBRID_MIN_COMPLEXITY,
) -> CandidatePools:
    """Split the eligible agents of ``registry`` into candidate pools.

    Args:
        profile: Profile of the task being routed.
        registry: Capability registry, iterated in declaration order.
        hybrid_min_complexity: Minimum complexity for hybrid construction.

    Returns:
        CandidatePools; empty when no agent is eligible.
    """
    tool_agents: list[AgentCapability] = []
    reasoning_agents: list[AgentCapability] = []

    for agent in registry.values():
        if not is_eligible(agent, profile):
            continue
        if agent.kind is EnumAgentKind.TOOL_AGENT:
            tool_agents.append(agent)
        else:
            reasoning_agents.append(agent)

    hybrids: tuple[HybridCandidate, ...] = ()
    if profile.complexity_score >= hybrid_min_complexity:
        hybrids = build_hybrids(tool_agents, reasoning_agents)

    logger.debug(
        "Filtered candidates",
        extra={
            "tool_agents": len(tool_agents),
            "reasoning_agents": len(reasoning_agents),
            "hybrids": len(hybrids),
            "registry_size": len(registry),
        },
    )

    return CandidatePools(
        tool_agents=tuple(tool_agents),
        reasoning_agents=tuple(reasoning_agents),
        hybrids=hybrids,
    )


__all__ = [
    "HYBRID_MIN_COMPLEXITY",
    "build_hybrids",
    "filter_candidates",
    "is_eligible",
]
