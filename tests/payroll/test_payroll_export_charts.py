from __future__ import annotations

from src.music_school.music_school.catalog.model import ClassType
from src.music_school.music_school.core.constants import CHART_COLORS
from src.music_school.music_school.lessons.model import Lesson
from src.music_school.music_school.payroll.charts import class_type_series
from src.music_school.music_school.payroll.export import (
    payroll_csv,
    payroll_filename,
    report_filename,
    report_lessons_csv,
)
from src.music_school.music_school.payroll.model import ClassTypeTotals, PayrollRecord
from src.music_school.music_school.payroll.window import MonthWindow, RangeWindow

CATALOG = (ClassType("PRIVATE", "Private lesson"), ClassType("SMALL_GROUP", "Small group"), ClassType("LARGE_GROUP", "Group class"))


def record(name, breakdown):
    return PayrollRecord(
        teacher_id=name,
        teacher_name=name,
        total_hours=sum(b.hours for b in breakdown.values()),
        total_lessons=sum(b.count for b in breakdown.values()),
        total_pay=sum(b.amount for b in breakdown.values()),
        breakdown=breakdown,
    )


def test_payroll_csv_layout():
    rows = [
        record("Alice", {"PRIVATE": ClassTypeTotals(2, 1.5, 1200), "SMALL_GROUP": ClassTypeTotals(0, 0, 0)}),
        record("Bob", {"LARGE_GROUP": ClassTypeTotals(1, 2.5, 500)}),
    ]

    text = payroll_csv(rows, CATALOG).decode("utf-8")

    assert text.startswith("\ufeff")
    lines = text.lstrip("\ufeff").split("\n")
    assert lines[0] == "Teacher,Lessons,Hours,Private lesson pay,Small group pay,Group class pay,Total pay"
    assert lines[1] == "Alice,2,1.5,1200,0,0,1200"
    assert lines[2] == "Bob,1,2.5,0,0,500,500"
    assert lines[3] == ""


def test_payroll_csv_quotes_names_with_commas():
    text = payroll_csv([record("Lee, Ann", {})], CATALOG).decode("utf-8-sig")

    assert text.split("\n")[1].startswith('"Lee, Ann",0,0.0')


def test_filenames():
    assert payroll_filename(MonthWindow("2024-03")) == "payroll_2024-03.csv"
    assert payroll_filename(RangeWindow("2024-03-01", "2024-03-15")) == "payroll_2024-03-01_2024-03-15.csv"
    assert report_filename("2024-03-01", "2024-03-31") == "report_2024-03-01_2024-03-31.csv"


def test_report_lessons_csv():
    lessons = [
        Lesson("L1", "t1", "2024-03-05", "10:00", 60, "PRIVATE", title="Scales", subject="Piano",
               student_ids=("s1", "s2"), price=1000, cost=600, is_completed=True),
        Lesson("L2", "gone", "2024-03-06", "11:30", 45, "PRIVATE", title="Etude", subject="Violin"),
    ]

    text = report_lessons_csv(lessons, {"t1": "Alice"}).decode("utf-8-sig")
    lines = text.split("\n")

    assert lines[0] == "Date,Time,Title,Subject,Teacher,Students,Duration (min),Cost,Status"
    assert lines[1] == "2024-03-05,10:00,Scales,Piano,Alice,2,60,600,Completed"
    assert lines[2] == "2024-03-06,11:30,Etude,Violin,Unknown,0,45,0,Not completed"


def test_chart_drops_zero_categories_and_keeps_catalog_colors():
    rows = [
        record("Alice", {"PRIVATE": ClassTypeTotals(1, 1, 600), "LARGE_GROUP": ClassTypeTotals(0, 0, 0)}),
        record("Bob", {"LARGE_GROUP": ClassTypeTotals(2, 2, 400), "PRIVATE": ClassTypeTotals(1, 1, 100)}),
    ]

    points = class_type_series(rows, CATALOG)

    assert [(p.name, p.value) for p in points] == [("Private lesson", 700), ("Group class", 400)]
    assert points[0].color == CHART_COLORS[0]
    assert points[1].color == CHART_COLORS[2]


def test_chart_of_no_records_is_empty():
    assert class_type_series([], CATALOG) == []
