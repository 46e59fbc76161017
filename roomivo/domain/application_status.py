from __future__ import annotations

from dataclasses import dataclass

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class ApplicationStatusPolicy:
    """Allowed transitions of a rental application.

    ``pending`` is the only initial state; ``accepted`` and ``rejected`` are
    terminal. There is no way back to ``pending``.
    """

    transitions: tuple[tuple[str, str], ...] = (
        (PENDING, ACCEPTED),
        (PENDING, REJECTED),
    )

    def can_transition(self, current: str, target: str) -> bool:
        return (current, target) in self.transitions
