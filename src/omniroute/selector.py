# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Decision Selector - picks the winner and the fallback chain."""

from __future__ import annotations

from collections.abc import Sequence

from omniroute.errors import NoEligibleAgentError
from omniroute.models import RoutingDecision, ScoredCandidate, TaskProfile

DEFAULT_MAX_FALLBACKS = 2


def rank(scored: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Sort descending by score; the sort is stable so ties keep input order."""
    return sorted(scored, key=lambda candidate: candidate.score, reverse=True)


def select(
    scored: Sequence[ScoredCandidate],
    profile: TaskProfile,
    max_fallbacks: int = DEFAULT_MAX_FALLBACKS,
) -> RoutingDecision:
    """Build a routing decision from scored candidates.

    Args:
        scored: Candidates in registry declaration order.
        profile: Profile of the routed task.
        max_fallbacks: Maximum number of fallbacks after the selected one.

    Returns:
        RoutingDecision with the top scorer selected.

    Raises:
        NoEligibleAgentError: If ``scored`` is empty.
    """
    if not scored:
        raise NoEligibleAgentError(
            domain_tags=profile.domain_tags,
            compliance_tags=profile.compliance_tags,
        )

    ranked = rank(scored)
    selected = ranked[0]
    fallbacks = tuple(
        candidate for candidate in ranked[1:] if candidate.name != selected.name
    )[:max_fallbacks]

    return RoutingDecision(
        profile=profile,
        selected=selected,
        fallbacks=fallbacks,
        candidates=tuple(ranked),
    )


__all__ = ["DEFAULT_MAX_FALLBACKS", "rank", "select"]
