"""Enumeration types for rental entities."""

from enum import Enum


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    def can_transition_to(self, target: "ApplicationStatus") -> bool:
        """Return True if ``target`` is reachable from this status in one step."""
        return target in _TRANSITIONS[self]


# Decided applications never reopen
_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset({ApplicationStatus.APPROVED, ApplicationStatus.REJECTED}),
    ApplicationStatus.APPROVED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
}

DECISION_STATUSES = frozenset({ApplicationStatus.APPROVED, ApplicationStatus.REJECTED})
