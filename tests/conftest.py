# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Shared fixtures for routing engine tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from omniroute.config import RoutingSettings, clear_settings_cache
from omniroute.engine import RoutingEngine
from omniroute.enums import EnumAgentKind, EnumCostTier, EnumPerformanceTier
from omniroute.models import AgentCapability
from omniroute.registry import (
    DEFAULT_REASONING_AGENTS,
    CapabilityRegistry,
    load_registry,
)

# -------------------------------------------------------------------------
# Settings
# -------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_settings() -> Iterator[None]:
    """Give every test a fresh settings singleton."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> RoutingSettings:
    return RoutingSettings()


# -------------------------------------------------------------------------
# Registries
# -------------------------------------------------------------------------

SAMPLE_TOOL_AGENTS = {
    "pg_tools": {"description": "Postgres database access", "command": "npx"},
    "test_runner": {"description": "Playwright test runner", "command": "node"},
    "shell_helper": {"description": "General shell automation", "command": "bash"},
}


@pytest.fixture
def sample_registry() -> CapabilityRegistry:
    """Three infrastructure tool agents followed by the default reasoning agents."""
    return load_registry(
        tool_agents=SAMPLE_TOOL_AGENTS,
        reasoning_agents=DEFAULT_REASONING_AGENTS,
    )


@pytest.fixture
def agent_a() -> AgentCapability:
    return AgentCapability(
        name="AgentA",
        kind=EnumAgentKind.TOOL_AGENT,
        domain_expertise=("testing",),
        performance_tier=EnumPerformanceTier.FAST,
        cost_tier=EnumCostTier.BUDGET,
    )


@pytest.fixture
def engine(
    sample_registry: CapabilityRegistry, settings: RoutingSettings
) -> RoutingEngine:
    return RoutingEngine(sample_registry, settings=settings)
