# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Bounded routing history.

A FIFO ring buffer of ``HistoryEntry`` records owned by one engine instance.
Appends past capacity evict the oldest entry. All mutation goes through a
single ``threading.Lock``; readers get copies and tolerate slightly stale
views.

Outcomes reported for a decision feed the per-agent success rate used by
the historical score bonus. Entries without a reported outcome do not count.
"""

from __future__ import annotations

import threading
from collections import deque
from uuid import UUID

from omniroute.models import HistoryEntry

DEFAULT_CAPACITY = 100


class RoutingHistory:
    """Thread-safe, capacity-bounded history of routing decisions."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            msg = f"capacity must be >= 1, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._entries: deque[HistoryEntry] = deque(maxlen=capacity)
        self._total_recorded = 0
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def total_recorded(self) -> int:
        """Entries appended since creation, including evicted ones."""
        return self._total_recorded

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: HistoryEntry) -> None:
        with self._lock:
            self._entries.append(entry)
            self._total_recorded += 1

    def entries(self, window: int | None = None) -> list[HistoryEntry]:
        """Snapshot of the most recent ``window`` entries, oldest first."""
        with self._lock:
            snapshot = list(self._entries)
        if window is None:
            return snapshot
        if window <= 0:
            return []
        return snapshot[-window:]

    def mark_outcome(self, decision_id: UUID, success: bool) -> bool:
        """Set the outcome of a buffered decision.

        Returns:
            False when the decision is not (or no longer) buffered.
        """
        with self._lock:
            for entry in reversed(self._entries):
                if entry.decision_id == decision_id:
                    entry.success = success
                    return True
        return False

    def success_rate(self, agent_name: str) -> float | None:
        """Share of reported outcomes that succeeded for decisions using ``agent_name``.

        Hybrid decisions count for both component agents. Returns None when
        no outcome has been reported for the agent.
        """
        with self._lock:
            outcomes = [
                entry.success
                for entry in self._entries
                if entry.success is not None and agent_name in entry.agent_names
            ]
        if not outcomes:
            return None
        return sum(outcomes) / len(outcomes)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._total_recorded = 0


__all__ = ["DEFAULT_CAPACITY", "RoutingHistory"]
