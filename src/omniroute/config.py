# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Configuration for the routing engine.

Loads from environment variables with the OMNIROUTE_ prefix (or a .env
file). Example: OMNIROUTE_HISTORY_CAPACITY=500
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RoutingSettings(BaseSettings):
    """Tunable limits of the routing engine.

    Scoring weights and lookup tables are code constants in
    ``omniroute.scoring``; only capacities and thresholds live here.
    """

    model_config = SettingsConfigDict(
        env_prefix="OMNIROUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    history_capacity: int = Field(
        default=100,
        ge=1,
        le=100000,
        description="Maximum routing decisions kept in history (oldest evicted first)",
    )
    metrics_window: int = Field(
        default=20,
        ge=1,
        le=10000,
        description="Default number of recent decisions aggregated by get_metrics",
    )
    max_fallbacks: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Number of fallback candidates returned with a decision",
    )
    task_summary_length: int = Field(
        default=100,
        ge=10,
        le=1000,
        description="Characters of the task text kept in a history entry",
    )
    hybrid_min_complexity: int = Field(
        default=3,
        ge=1,
        le=5,
        description="Complexity at which hybrid candidates are built and rewarded",
    )


@lru_cache(maxsize=1)
def get_settings() -> RoutingSettings:
    """Get singleton settings instance.

    Note:
        For test isolation, use ``clear_settings_cache()`` to reset the
        singleton before each test that needs fresh settings.
    """
    return RoutingSettings()


def clear_settings_cache() -> None:
    """Clear the settings singleton cache for test isolation."""
    get_settings.cache_clear()


__all__ = [
    "RoutingSettings",
    "clear_settings_cache",
    "get_settings",
]
