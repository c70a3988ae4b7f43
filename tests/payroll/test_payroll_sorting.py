from __future__ import annotations

from src.music_school.music_school.core.enums import SortDirection
from src.music_school.music_school.payroll.model import ClassTypeTotals, PayrollRecord
from src.music_school.music_school.payroll.sorting import SortState, search_and_sort_payroll, search_by_name


def record(name, pay, lessons=1, hours=1.0, breakdown=None):
    return PayrollRecord(
        teacher_id=name.lower().replace(" ", "-"),
        teacher_name=name,
        total_hours=hours,
        total_lessons=lessons,
        total_pay=pay,
        breakdown=breakdown or {},
    )


def test_search_is_case_insensitive_substring():
    rows = [record("John Smith", 100), record("Jane Doe", 200)]

    assert [r.teacher_name for r in search_and_sort_payroll(rows, search="Smith")] == ["John Smith"]
    assert [r.teacher_name for r in search_and_sort_payroll(rows, search="smith")] == ["John Smith"]


def test_empty_search_keeps_everyone():
    rows = [record("A", 1), record("B", 2)]

    assert len(search_by_name(rows, "  ", lambda r: r.teacher_name)) == 2


def test_default_sort_is_total_pay_descending():
    rows = [record("A", 100), record("B", 500), record("C", 300)]

    assert [r.total_pay for r in search_and_sort_payroll(rows)] == [500, 300, 100]


def test_clicking_same_key_again_flips_to_ascending():
    rows = [record("A", 100), record("B", 500), record("C", 300)]
    state = SortState()

    state = state.request("total")

    assert state.direction == SortDirection.ASC
    assert [r.total_pay for r in search_and_sort_payroll(rows, state=state)] == [100, 300, 500]


def test_sort_toggle_rules():
    state = SortState(key="total", direction=SortDirection.DESC)

    state = state.request("hours")
    assert (state.key, state.direction) == ("hours", SortDirection.ASC)

    state = state.request("hours")
    assert (state.key, state.direction) == ("hours", SortDirection.DESC)

    state = state.request("hours")
    assert (state.key, state.direction) == ("hours", SortDirection.ASC)


def test_sort_by_name_and_average():
    rows = [record("Carol", 900, lessons=3), record("alan", 400, lessons=1), record("Bea", 0, lessons=0)]

    by_name = search_and_sort_payroll(rows, state=SortState(key="teacherName", direction=SortDirection.ASC))
    by_avg = search_and_sort_payroll(rows, state=SortState(key="avg", direction=SortDirection.DESC))

    assert [r.teacher_name for r in by_name] == ["Bea", "Carol", "alan"]
    assert [r.teacher_name for r in by_avg] == ["alan", "Carol", "Bea"]


def test_sort_by_class_type_amount_treats_missing_as_zero():
    rows = [
        record("A", 0, breakdown={"PRIVATE": ClassTypeTotals(count=1, hours=1, amount=300)}),
        record("B", 0),
        record("C", 0, breakdown={"PRIVATE": ClassTypeTotals(count=2, hours=2, amount=700)}),
    ]

    ordered = search_and_sort_payroll(rows, state=SortState(key="PRIVATE", direction=SortDirection.ASC))

    assert [r.teacher_name for r in ordered] == ["B", "A", "C"]


def test_ties_keep_prior_order_in_both_directions():
    rows = [record("First", 100), record("Second", 100), record("Third", 50)]

    desc = search_and_sort_payroll(rows, state=SortState(key="total", direction=SortDirection.DESC))
    asc = search_and_sort_payroll(rows, state=SortState(key="total", direction=SortDirection.ASC))

    assert [r.teacher_name for r in desc] == ["First", "Second", "Third"]
    assert [r.teacher_name for r in asc] == ["Third", "First", "Second"]


def test_parse_falls_back_to_default_and_ascending():
    default = SortState()

    assert SortState.parse(None, None, default=default) == default
    assert SortState.parse("lessons", "sideways", default=default) == SortState("lessons", SortDirection.ASC)
    assert SortState.parse("lessons", "DESC", default=default) == SortState("lessons", SortDirection.DESC)
