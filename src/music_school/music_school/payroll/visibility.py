"""Role-based narrowing of which teachers a viewer may see.

Scoping happens before aggregation: out-of-scope teachers and their lessons
are never iterated.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..roster.model import Teacher
from ..users.viewer import AdminViewer, StaffViewer, Viewer


def teachers_in_scope(viewer: Viewer, teachers: Iterable[Teacher]) -> list[Teacher]:
    if isinstance(viewer, AdminViewer):
        return list(teachers)
    if isinstance(viewer, StaffViewer):
        if not viewer.teacher_id:
            return []
        return [t for t in teachers if t.id == viewer.teacher_id]
    raise TypeError(f"Unsupported viewer: {viewer!r}")


def teacher_id_scope(viewer: Viewer) -> Optional[frozenset[str]]:
    """Teacher ids whose lessons the viewer may see; None means all."""
    if isinstance(viewer, AdminViewer):
        return None
    if isinstance(viewer, StaffViewer):
        return frozenset({viewer.teacher_id}) if viewer.teacher_id else frozenset()
    raise TypeError(f"Unsupported viewer: {viewer!r}")


def revenue_visible(viewer: Viewer) -> bool:
    """Revenue is a school-wide figure; only admins get it."""
    return isinstance(viewer, AdminViewer)
