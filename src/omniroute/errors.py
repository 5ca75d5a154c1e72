# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Error codes and exception classes for the routing engine.

Two routing failures exist:

* ``NoAgentsAvailableError`` - the capability registry is empty. This is a
  configuration error and is not retried.
* ``NoEligibleAgentError`` - a well-formed task matched no candidate. Callers
  should surface "no suitable agent" to the end user or broaden eligibility.

Everything else about a routing request is normalized rather than rejected.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class EnumRoutingErrorCode(StrEnum):
    """Error codes for routing operations."""

    NO_AGENTS_AVAILABLE = "NO_AGENTS_AVAILABLE"
    NO_ELIGIBLE_AGENT = "NO_ELIGIBLE_AGENT"
    UNKNOWN_DECISION = "UNKNOWN_DECISION"
    INVALID_REGISTRY = "INVALID_REGISTRY"


class RoutingError(Exception):
    """Base exception class for routing operations.

    Attributes:
        code: Error code from EnumRoutingErrorCode
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: EnumRoutingErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code}, message={self.message}, "
            f"details={self.details})"
        )


class NoAgentsAvailableError(RoutingError):
    """Raised when the capability registry holds no agents."""

    def __init__(self, message: str = "Capability registry is empty") -> None:
        super().__init__(EnumRoutingErrorCode.NO_AGENTS_AVAILABLE, message)


class NoEligibleAgentError(RoutingError):
    """Raised when no registered agent is eligible for a task.

    Attributes:
        domain_tags: Domain tags of the task that no agent covers.
        compliance_tags: Compliance tags of the task that no agent covers.
    """

    def __init__(
        self,
        domain_tags: frozenset[str] | set[str] = frozenset(),
        compliance_tags: frozenset[str] | set[str] = frozenset(),
    ) -> None:
        self.domain_tags = frozenset(domain_tags)
        self.compliance_tags = frozenset(compliance_tags)
        unmatched = sorted(self.domain_tags | self.compliance_tags)
        message = (
            "No suitable agent for task"
            + (f" (unmatched: {', '.join(unmatched)})" if unmatched else "")
        )
        super().__init__(
            EnumRoutingErrorCode.NO_ELIGIBLE_AGENT,
            message,
            details={
                "domain_tags": sorted(self.domain_tags),
                "compliance_tags": sorted(self.compliance_tags),
            },
        )


class UnknownDecisionError(RoutingError):
    """Raised when an outcome is reported for a decision not in history."""

    def __init__(self, decision_id: object) -> None:
        self.decision_id = decision_id
        super().__init__(
            EnumRoutingErrorCode.UNKNOWN_DECISION,
            f"Decision {decision_id} is not in the routing history",
            details={"decision_id": str(decision_id)},
        )


class RegistryError(RoutingError):
    """Raised when a capability registry cannot be built."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(EnumRoutingErrorCode.INVALID_REGISTRY, message, details)


__all__ = [
    "EnumRoutingErrorCode",
    "NoAgentsAvailableError",
    "NoEligibleAgentError",
    "RegistryError",
    "RoutingError",
    "UnknownDecisionError",
]
