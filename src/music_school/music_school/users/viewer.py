"""Who is looking at derived data.

A closed set of two variants; code that scopes data matches on the concrete
type instead of inspecting role strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class AdminViewer:
    """Sees every teacher and school-wide revenue."""


@dataclass(frozen=True)
class StaffViewer:
    """Sees only the linked teacher's figures; nothing when unlinked."""

    teacher_id: Optional[str] = None


Viewer = Union[AdminViewer, StaffViewer]


def viewer_for(role: Role, teacher_id: Optional[str] = None) -> Viewer:
    if Role(role) == Role.ADMIN:
        return AdminViewer()
    return StaffViewer(teacher_id=teacher_id or None)
