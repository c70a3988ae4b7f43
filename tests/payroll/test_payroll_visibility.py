from __future__ import annotations

import pytest

from src.music_school.music_school.core.enums import Role
from src.music_school.music_school.payroll.visibility import revenue_visible, teacher_id_scope, teachers_in_scope
from src.music_school.music_school.roster.model import Teacher
from src.music_school.music_school.users.viewer import AdminViewer, StaffViewer, viewer_for

TEACHERS = [Teacher("t1", "Alice", 60), Teacher("t2", "Bob", 50)]


def test_admin_sees_all_teachers_and_revenue():
    viewer = AdminViewer()

    assert teachers_in_scope(viewer, TEACHERS) == TEACHERS
    assert teacher_id_scope(viewer) is None
    assert revenue_visible(viewer)


def test_linked_staff_sees_only_own_teacher():
    viewer = StaffViewer(teacher_id="t2")

    assert [t.id for t in teachers_in_scope(viewer, TEACHERS)] == ["t2"]
    assert teacher_id_scope(viewer) == frozenset({"t2"})
    assert not revenue_visible(viewer)


def test_unlinked_staff_sees_nothing():
    viewer = StaffViewer()

    assert teachers_in_scope(viewer, TEACHERS) == []
    assert teacher_id_scope(viewer) == frozenset()


def test_viewer_for_maps_roles():
    assert viewer_for(Role.ADMIN, "t1") == AdminViewer()
    assert viewer_for(Role.STAFF, "t1") == StaffViewer("t1")
    assert viewer_for(Role.STAFF, "") == StaffViewer(None)


def test_unknown_viewer_type_is_rejected():
    with pytest.raises(TypeError):
        teachers_in_scope("admin", TEACHERS)
