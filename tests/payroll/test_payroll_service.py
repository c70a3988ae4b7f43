from __future__ import annotations

import pytest

from src.music_school.music_school.catalog.repository import SystemConfigRepository
from src.music_school.music_school.catalog.service import CatalogService
from src.music_school.music_school.core.enums import SortDirection
from src.music_school.music_school.core.exceptions import AuthorizationError, NotFoundError
from src.music_school.music_school.lessons.model import Lesson
from src.music_school.music_school.lessons.repository import LessonRepository
from src.music_school.music_school.payroll.service import PayrollReportService
from src.music_school.music_school.payroll.sorting import SortState
from src.music_school.music_school.payroll.window import MonthWindow
from src.music_school.music_school.roster.model import Teacher
from src.music_school.music_school.roster.repository import TeacherRepository
from src.music_school.music_school.storage.memory_store import InMemoryCollectionStore
from src.music_school.music_school.users.viewer import AdminViewer, StaffViewer


@pytest.fixture()
def service():
    store = InMemoryCollectionStore()
    teachers = TeacherRepository(store)
    lessons = LessonRepository(store)
    teachers.add(Teacher("t1", "John Smith", 60))
    teachers.add(Teacher("t2", "Jane Doe", 50))
    teachers.add(Teacher("t3", "Idle Ida", 40))
    lessons.add_many(
        [
            Lesson("20240305001", "t1", "2024-03-05", "10:00", 60, "PRIVATE", price=1000, cost=600, is_completed=True),
            Lesson("20240306001", "t1", "2024-03-06", "10:00", 60, "PRIVATE", price=2000, cost=1200),
            Lesson("20240307001", "t2", "2024-03-07", "14:00", 90, "SMALL_GROUP", price=800, cost=400, is_completed=True),
            Lesson("20240401001", "t2", "2024-04-01", "14:00", 90, "SMALL_GROUP", price=800, cost=400, is_completed=True),
        ]
    )
    return PayrollReportService(lessons, teachers, CatalogService(SystemConfigRepository(store)))


def test_admin_summary_has_every_teacher_and_revenue(service):
    summary = service.build_payroll(AdminViewer(), MonthWindow("2024-03"))

    assert [r.teacher_name for r in summary.records] == ["John Smith", "Jane Doe", "Idle Ida"]
    assert summary.total_cost == 1000
    assert summary.revenue == 1800
    assert [p.name for p in summary.chart] == ["Private lesson", "Small group"]
    assert "revenue" in summary.to_dict()


def test_staff_summary_is_scoped_and_hides_revenue(service):
    summary = service.build_payroll(StaffViewer("t2"), MonthWindow("2024-03"))

    assert [r.teacher_id for r in summary.records] == ["t2"]
    assert summary.revenue is None
    assert "revenue" not in summary.to_dict()


def test_unlinked_staff_gets_empty_summary(service):
    summary = service.build_payroll(StaffViewer(), MonthWindow("2024-03"))

    assert summary.records == []
    assert summary.total_cost == 0
    assert summary.chart == []
    assert summary.revenue is None


def test_search_narrows_totals_and_chart(service):
    summary = service.build_payroll(AdminViewer(), MonthWindow("2024-03"), search="smith")

    assert [r.teacher_name for r in summary.records] == ["John Smith"]
    assert summary.total_cost == 600
    assert [p.name for p in summary.chart] == ["Private lesson"]


def test_sort_state_is_applied(service):
    summary = service.build_payroll(
        AdminViewer(), MonthWindow("2024-03"), sort=SortState("teacherName", SortDirection.ASC)
    )

    assert [r.teacher_name for r in summary.records] == ["Idle Ida", "Jane Doe", "John Smith"]


def test_export_returns_filename_and_bom_csv(service):
    filename, payload = service.export_payroll(AdminViewer(), MonthWindow("2024-03"))

    assert filename == "payroll_2024-03.csv"
    assert payload.startswith(b"\xef\xbb\xbf")
    assert payload.decode("utf-8-sig").splitlines()[1] == "John Smith,1,1.0,600,0,0,600"


def test_teacher_lessons_detail(service):
    lessons = service.teacher_lessons(AdminViewer(), MonthWindow("2024-03"), "t1")

    assert [lesson.id for lesson in lessons] == ["20240305001"]


def test_staff_cannot_open_another_teachers_detail(service):
    with pytest.raises(AuthorizationError):
        service.teacher_lessons(StaffViewer("t2"), MonthWindow("2024-03"), "t1")


def test_detail_for_missing_teacher(service):
    with pytest.raises(NotFoundError):
        service.teacher_lessons(AdminViewer(), MonthWindow("2024-03"), "nobody")
