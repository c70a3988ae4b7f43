from __future__ import annotations

from datetime import datetime

import pytest

from src.music_school.music_school.core.enums import SortDirection
from src.music_school.music_school.core.exceptions import ValidationError
from src.music_school.music_school.lessons.model import Lesson
from src.music_school.music_school.lessons.repository import LessonRepository
from src.music_school.music_school.payroll.sorting import SortState
from src.music_school.music_school.payroll.window import RangeWindow
from src.music_school.music_school.reports.service import ReportService, main_subject
from src.music_school.music_school.roster.model import Student, Teacher
from src.music_school.music_school.roster.repository import StudentRepository, TeacherRepository
from src.music_school.music_school.storage.memory_store import InMemoryCollectionStore
from src.music_school.music_school.users.viewer import AdminViewer, StaffViewer

MARCH = RangeWindow("2024-03-01", "2024-03-31")


@pytest.fixture()
def service():
    store = InMemoryCollectionStore()
    teachers = TeacherRepository(store)
    students = StudentRepository(store)
    lessons = LessonRepository(store)
    teachers.add(Teacher("t1", "Alice", 60))
    teachers.add(Teacher("t2", "Bob", 50))
    students.add(Student("s1", "Sam"))
    students.add(Student("s2", "Sue"))
    lessons.add_many(
        [
            Lesson("1", "t1", "2024-03-04", "10:00", 60, "PRIVATE", subject="Piano (classical)",
                   student_ids=("s1",), cost=600, is_completed=True),
            Lesson("2", "t1", "2024-03-04", "11:00", 30, "PRIVATE", subject="Piano",
                   student_ids=("s1", "s2"), cost=300),
            Lesson("3", "t2", "2024-03-02", "09:00", 90, "SMALL_GROUP", subject="Violin",
                   student_ids=("s2",), cost=500, is_completed=True),
            Lesson("4", "gone", "2024-03-09", "09:00", 60, "PRIVATE", subject="Guitar", cost=None, is_completed=True),
            Lesson("5", "t1", "2024-04-01", "09:00", 60, "PRIVATE", subject="Piano", cost=600, is_completed=True),
        ]
    )
    return ReportService(lessons, teachers, students)


def test_headline_stats_count_all_lessons_in_range(service):
    report = service.build_report(AdminViewer(), MARCH)

    assert report.total_lessons == 4
    assert report.completed_lessons == 3
    assert report.completion_rate == 75
    assert report.total_cost == 1100
    assert report.total_hours == 4.0
    assert report.active_students == 2


def test_subject_distribution_uses_first_word(service):
    report = service.build_report(AdminViewer(), MARCH)

    assert [(p.name, p.count) for p in report.subjects] == [("Piano", 2), ("Violin", 1), ("Guitar", 1)]
    assert main_subject("Music Theory") == "Music"


def test_daily_activity_is_keyed_by_month_day(service):
    report = service.build_report(AdminViewer(), MARCH)

    assert [(p.name, p.count) for p in report.daily] == [("03-02", 1), ("03-04", 2), ("03-09", 1)]


def test_teacher_stats_default_to_cost_descending(service):
    report = service.build_report(AdminViewer(), MARCH)

    assert [(s.name, s.lessons, s.cost, s.avg) for s in report.teacher_stats] == [
        ("Alice", 2, 600, 300),
        ("Bob", 1, 500, 500),
        ("Unknown", 1, 0, 0),
    ]
    assert report.teacher_stats[0].hours == 1.5


def test_teacher_stats_search_and_sort(service):
    report = service.build_report(
        AdminViewer(), MARCH, search="o", sort=SortState("hours", SortDirection.ASC)
    )

    assert [s.name for s in report.teacher_stats] == ["Unknown", "Bob"]


def test_unknown_report_sort_key_is_rejected(service):
    with pytest.raises(ValidationError):
        service.build_report(AdminViewer(), MARCH, sort=SortState("total", SortDirection.ASC))


def test_staff_report_is_scoped_to_own_teacher(service):
    report = service.build_report(StaffViewer("t2"), MARCH)

    assert report.total_lessons == 1
    assert [s.name for s in report.teacher_stats] == ["Bob"]
    assert service.build_report(StaffViewer(), MARCH).total_lessons == 0


def test_empty_range_has_zero_completion_rate(service):
    report = service.build_report(AdminViewer(), RangeWindow("2023-01-01", "2023-01-31"))

    assert report.completion_rate == 0
    assert report.teacher_stats == []


def test_export_report(service):
    filename, payload = service.export_report(AdminViewer(), MARCH)

    assert filename == "report_2024-03-01_2024-03-31.csv"
    assert len(payload.decode("utf-8-sig").splitlines()) == 5


def test_dashboard_admin_cards_and_week_view(service):
    board = service.dashboard(AdminViewer(), now=datetime(2024, 3, 4, 10, 30), view="week")

    assert board.today_lessons == 2
    assert board.teacher_count == 2
    assert board.student_count == 2
    assert board.monthly_hours == 4.0
    assert board.in_progress == ["1"]
    # Week of Monday 2024-03-04 runs Sunday 03-03 .. Saturday 03-09.
    assert list(board.lessons_by_date) == ["2024-03-04", "2024-03-09"]
    assert [p.name for p in board.last_days] == ["02-27", "02-28", "02-29", "03-01", "03-02", "03-03", "03-04"]
    assert [p.count for p in board.last_days][-3:] == [1, 0, 2]


def test_dashboard_hides_admin_cards_from_staff(service):
    board = service.dashboard(StaffViewer("t1"), now=datetime(2024, 3, 4, 12, 0))

    assert board.teacher_count is None
    assert board.monthly_hours is None
    assert board.student_count is None
    assert [p.name for p in board.top_subjects] == ["Piano", "Violin", "Guitar"]


def test_dashboard_rejects_unknown_view(service):
    with pytest.raises(ValidationError):
        service.dashboard(AdminViewer(), now=datetime(2024, 3, 4), view="year")
