"""Participant roster.

Participants are identified by their position in the roster. Names may be
blank while the user is still typing; blank entries keep their slot but are
left out of every money calculation.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


def active_participants(names: Iterable[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(index, trimmed_name)`` for every non-blank name."""
    for index, name in enumerate(names):
        trimmed = name.strip()
        if trimmed:
            yield index, trimmed


@dataclass
class ParticipantRoster:
    names: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.names)

    def add(self) -> int:
        self.names.append("")
        return len(self.names) - 1

    def rename(self, index: int, name: str) -> bool:
        if not 0 <= index < len(self.names):
            return False
        self.names[index] = name
        return True

    def remove(self, index: int) -> bool:
        """Splice out one participant; later indexes shift down by one."""
        if not 0 <= index < len(self.names):
            return False
        del self.names[index]
        return True

    def active(self) -> list[tuple[int, str]]:
        return list(active_participants(self.names))

    def has_active(self) -> bool:
        return any(True for _ in active_participants(self.names))
