from __future__ import annotations

import itertools

from src.music_school.music_school.catalog.model import ClassType, SystemConfig
from src.music_school.music_school.lessons.model import Lesson
from src.music_school.music_school.payroll.aggregator import (
    aggregate_payroll,
    completed_in_window,
    lessons_for_teacher,
    total_revenue,
)
from src.music_school.music_school.payroll.window import MonthWindow, RangeWindow
from src.music_school.music_school.roster.model import Teacher

CATALOG = SystemConfig.default().class_types
ALICE = Teacher(id="t1", name="Alice", commission_rate=60)
BOB = Teacher(id="t2", name="Bob", commission_rate=50)

_ids = itertools.count(1)


def make_lesson(teacher_id="t1", date="2024-03-05", *, minutes=60, type="PRIVATE", price=1000, cost=600,
                done=True, start="10:00"):
    return Lesson(
        id=f"L{next(_ids)}",
        teacher_id=teacher_id,
        date=date,
        start_time=start,
        duration_minutes=minutes,
        class_type=type,
        price=price,
        cost=cost,
        is_completed=done,
    )


def test_commission_scenario_with_unknown_class_type():
    lessons = [
        make_lesson(price=1000, cost=600, type="PRIVATE"),
        make_lesson(price=2000, cost=1200, type="PRIVATE", done=False),
        make_lesson(price=1500, cost=900, type="GROUP"),
    ]

    [record] = aggregate_payroll(lessons, [ALICE], CATALOG, MonthWindow("2024-03"))

    assert record.total_lessons == 2
    assert record.total_pay == 1500
    assert record.breakdown["PRIVATE"].count == 1
    assert record.breakdown["PRIVATE"].amount == 600
    assert record.breakdown["GROUP"].count == 1
    assert record.breakdown["GROUP"].amount == 900


def test_breakdown_reconciles_with_totals():
    lessons = [
        make_lesson(type="PRIVATE", cost=500),
        make_lesson(type="SMALL_GROUP", cost=300, minutes=90),
        make_lesson(type="RETIRED_TYPE", cost=200, minutes=45),
        make_lesson(type="RETIRED_TYPE", cost=None),
        make_lesson("t2", type="LARGE_GROUP", cost=700),
    ]

    for record in aggregate_payroll(lessons, [ALICE, BOB], CATALOG, MonthWindow("2024-03")):
        assert sum(b.amount for b in record.breakdown.values()) == record.total_pay
        assert sum(b.count for b in record.breakdown.values()) == record.total_lessons


def test_catalog_types_are_preseeded_with_zero():
    [record] = aggregate_payroll([make_lesson(type="PRIVATE")], [ALICE], CATALOG, MonthWindow("2024-03"))

    assert set(record.breakdown) == {"PRIVATE", "SMALL_GROUP", "LARGE_GROUP"}
    assert record.breakdown["LARGE_GROUP"].count == 0
    assert record.breakdown["LARGE_GROUP"].amount == 0


def test_incomplete_lessons_contribute_nothing():
    lessons = [make_lesson(price=5000, cost=3000, done=False)]

    [record] = aggregate_payroll(lessons, [ALICE], CATALOG, MonthWindow("2024-03"))

    assert record.total_lessons == 0
    assert record.total_pay == 0
    assert record.total_hours == 0
    assert total_revenue(lessons, MonthWindow("2024-03")) == 0


def test_teacher_without_lessons_still_listed_with_zero_average():
    [alice, bob] = aggregate_payroll([make_lesson("t1")], [ALICE, BOB], CATALOG, MonthWindow("2024-03"))

    assert alice.total_lessons == 1
    assert bob.teacher_name == "Bob"
    assert bob.total_lessons == 0
    assert bob.average_pay == 0


def test_missing_cost_and_price_count_as_zero():
    lessons = [make_lesson(price=None, cost=None, minutes=30), make_lesson(price=800, cost=480)]

    [record] = aggregate_payroll(lessons, [ALICE], CATALOG, MonthWindow("2024-03"))

    assert record.total_lessons == 2
    assert record.total_pay == 480
    assert record.total_hours == 1.5
    assert total_revenue(lessons, MonthWindow("2024-03")) == 800


def test_month_window_is_a_prefix_match():
    lessons = [
        make_lesson(date="2024-02-29"),
        make_lesson(date="2024-03-01"),
        make_lesson(date="2024-03-31"),
        make_lesson(date="2024-04-01"),
    ]

    assert [lesson.date for lesson in completed_in_window(lessons, MonthWindow("2024-03"))] == ["2024-03-01", "2024-03-31"]


def test_range_window_is_inclusive():
    lessons = [make_lesson(date=d) for d in ("2024-03-09", "2024-03-10", "2024-03-15", "2024-03-16")]

    window = RangeWindow(start="2024-03-10", end="2024-03-15")

    assert [lesson.date for lesson in completed_in_window(lessons, window)] == ["2024-03-10", "2024-03-15"]


def test_lessons_of_out_of_scope_teachers_are_ignored():
    lessons = [make_lesson("t1", cost=100), make_lesson("t2", cost=999)]

    records = aggregate_payroll(lessons, [ALICE], CATALOG, MonthWindow("2024-03"))

    assert [r.teacher_id for r in records] == ["t1"]
    assert records[0].total_pay == 100


def test_revenue_is_summed_from_price_not_cost():
    lessons = [make_lesson("t1", price=1000, cost=600), make_lesson("t2", price=2000, cost=1000)]

    assert total_revenue(lessons, MonthWindow("2024-03")) == 3000
    assert total_revenue(lessons, MonthWindow("2024-03"), ["t2"]) == 2000


def test_aggregation_is_idempotent():
    lessons = [make_lesson(minutes=m, type=t) for m, t in ((45, "PRIVATE"), (50, "X"), (70, "SMALL_GROUP"))]
    window = MonthWindow("2024-03")

    first = aggregate_payroll(lessons, [ALICE, BOB], CATALOG, window)
    second = aggregate_payroll(lessons, [ALICE, BOB], CATALOG, window)

    assert first == second
    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]


def test_average_pay_per_lesson():
    lessons = [make_lesson(cost=600), make_lesson(cost=300)]

    [record] = aggregate_payroll(lessons, [ALICE], CATALOG, MonthWindow("2024-03"))

    assert record.average_pay == 450


def test_lessons_for_teacher_sorted_by_date_then_time():
    lessons = [
        make_lesson(date="2024-03-07", start="09:00"),
        make_lesson(date="2024-03-05", start="15:00"),
        make_lesson(date="2024-03-05", start="08:30"),
        make_lesson("t2", date="2024-03-01"),
        make_lesson(date="2024-03-02", done=False),
    ]

    rows = lessons_for_teacher(lessons, MonthWindow("2024-03"), "t1")

    assert [(lesson.date, lesson.start_time) for lesson in rows] == [
        ("2024-03-05", "08:30"),
        ("2024-03-05", "15:00"),
        ("2024-03-07", "09:00"),
    ]


def test_custom_catalog_order_drives_breakdown_keys():
    catalog = (ClassType("DUET", "Duet"), ClassType("PRIVATE", "Private lesson"))

    [record] = aggregate_payroll([make_lesson(type="PRIVATE")], [ALICE], catalog, MonthWindow("2024-03"))

    assert list(record.breakdown) == ["DUET", "PRIVATE"]
