from __future__ import annotations

from typing import Protocol, Sequence

from .model import MemberGroup


class GroupRepository(Protocol):
    def list_groups(self) -> Sequence[MemberGroup]:
        """All groups ordered by name, each with its leader and members loaded."""
        raise NotImplementedError
