from datetime import date, datetime, time

import pytest

from wagetrack.core.enums import ReportWindow
from wagetrack.core.exceptions import ValidationError
from wagetrack.employees.model import Employee
from wagetrack.payroll.aggregator import PeriodAggregator, WindowTotals


@pytest.fixture
def agg():
    return PeriodAggregator()


def test_window_bounds(agg, fixed_now):
    today = fixed_now.date()
    assert agg.window_bounds(ReportWindow.DAILY, fixed_now) == (today, today)
    assert agg.window_bounds(ReportWindow.WEEKLY, fixed_now) == (date(2024, 3, 9), today)
    assert agg.window_bounds(ReportWindow.MONTHLY, fixed_now) == (date(2024, 3, 1), None)
    assert agg.window_bounds(
        ReportWindow.CUSTOM, fixed_now, start=date(2024, 1, 1), end=date(2024, 1, 31)
    ) == (date(2024, 1, 1), date(2024, 1, 31))


def test_window_bounds_accepts_plain_date_and_string_window(agg):
    assert agg.window_bounds("daily", date(2024, 3, 15)) == (date(2024, 3, 15), date(2024, 3, 15))


def test_custom_window_requires_ordered_bounds(agg, fixed_now):
    with pytest.raises(ValidationError):
        agg.window_bounds(ReportWindow.CUSTOM, fixed_now, start=date(2024, 1, 1))
    with pytest.raises(ValidationError):
        agg.window_bounds(ReportWindow.CUSTOM, fixed_now, start=date(2024, 2, 1), end=date(2024, 1, 1))


def test_dashboard_buckets(agg, fixed_now, sam, alex, record):
    records = [
        record(1, alex, date(2024, 3, 15), time(9, 0), time(17, 0)),  # today, 8h @ 20
        record(2, sam, date(2024, 3, 9), time(22, 0), time(2, 0)),  # 6 days ago, 4h @ 10
        record(3, sam, date(2024, 3, 8), time(9, 0), time(10, 0)),  # outside week, 1h @ 10
        record(4, alex, date(2024, 3, 1), time(12, 0), time(14, 0)),  # first of month, 2h @ 20
        record(5, alex, date(2024, 2, 29), time(9, 0), time(17, 0)),  # previous month
    ]

    stats = agg.dashboard(records, fixed_now)

    assert stats.daily == WindowTotals(hours=8.0, wages=160.0)
    assert stats.weekly == WindowTotals(hours=12.0, wages=200.0)
    assert stats.monthly == WindowTotals(hours=15.0, wages=250.0)


def test_monthly_window_is_open_ended(agg, fixed_now, sam, record):
    later_this_month = record(1, sam, date(2024, 3, 28), time(9, 0), time(11, 0))
    totals = agg.window_totals([later_this_month], ReportWindow.MONTHLY, fixed_now)
    assert totals.hours == 2.0


def test_open_and_orphan_records_add_nothing(agg, fixed_now, sam, record):
    records = [
        record(1, sam, date(2024, 3, 15), time(14, 30), None),
        record(2, None, date(2024, 3, 15), time(9, 0), time(17, 0)),
    ]
    for window in (ReportWindow.DAILY, ReportWindow.WEEKLY, ReportWindow.MONTHLY):
        assert agg.window_totals(records, window, fixed_now) == WindowTotals(0.0, 0.0)


def test_same_employee_two_shifts(agg, record):
    worker = Employee(employee_id=7, owner_id=1, name="Jo", hourly_rate=20.0)
    records = [
        record(1, worker, date(2024, 3, 4), time(9, 0), time(17, 0)),
        record(2, worker, date(2024, 3, 5), time(9, 0), time(13, 0)),
    ]

    report = agg.summarize(records)

    assert len(report.employees) == 1
    summary = report.employees[0]
    assert (summary.hours, summary.wages, summary.shift_count) == (12.0, 240.0, 2)
    assert summary.hourly_rate == 20.0


def test_orphan_record_is_excluded_entirely(agg, sam, record):
    records = [
        record(1, None, date(2024, 3, 4), time(9, 0), time(17, 0), employee_id=55),
        record(2, sam, date(2024, 3, 4), time(9, 0), time(14, 0)),
    ]

    report = agg.summarize(records)

    assert report.total_hours == 5.0
    assert report.total_wages == 50.0
    assert [e.employee_name for e in report.employees] == ["Sam"]
    assert report.total_shifts == 1


def test_open_shift_counts_as_shift_but_not_hours(agg, sam, record):
    records = [
        record(1, sam, date(2024, 3, 4), time(9, 0), time(17, 0)),
        record(2, sam, date(2024, 3, 5), time(14, 30), None),
    ]

    summary = agg.summarize(records).employees[0]

    assert summary.shift_count == 2
    assert summary.hours == 8.0
    assert summary.wages == 80.0


def test_ranking_by_wages_descending_with_stable_ties(agg, record):
    a = Employee(1, 1, "A", 10.0)
    b = Employee(2, 1, "B", 20.0)
    c = Employee(3, 1, "C", 10.0)
    d = Employee(4, 1, "D", 5.0)
    day = date(2024, 3, 4)
    records = [
        record(1, a, day, time(9, 0), time(13, 0)),  # 40
        record(2, d, day, time(9, 0), time(10, 0)),  # 5
        record(3, b, day, time(9, 0), time(14, 0)),  # 100
        record(4, c, day, time(9, 0), time(13, 0)),  # 40, ties with A, appears later
    ]

    report = agg.summarize(records)
    names = [e.employee_name for e in report.employees]

    assert names == ["B", "A", "C", "D"]
    wages = [e.wages for e in report.employees]
    assert wages == sorted(wages, reverse=True)


def test_grand_totals_match_employee_sums(agg, sam, alex, record):
    records = [
        record(1, sam, date(2024, 3, 1), time(8, 15), time(16, 45)),
        record(2, alex, date(2024, 3, 2), time(23, 30), time(7, 0)),
        record(3, sam, date(2024, 3, 3), time(10, 0), time(12, 20)),
    ]

    report = agg.summarize(records)

    assert report.total_wages == pytest.approx(sum(e.wages for e in report.employees))
    assert report.total_hours == pytest.approx(sum(e.hours for e in report.employees))


def test_summarize_filters_inclusive_range(agg, sam, record):
    records = [
        record(1, sam, date(2024, 2, 29), time(9, 0), time(10, 0)),
        record(2, sam, date(2024, 3, 1), time(9, 0), time(11, 0)),
        record(3, sam, date(2024, 3, 31), time(9, 0), time(12, 0)),
        record(4, sam, date(2024, 4, 1), time(9, 0), time(13, 0)),
    ]

    report = agg.summarize(records, start=date(2024, 3, 1), end=date(2024, 3, 31))

    assert report.total_hours == 5.0
    assert report.employees[0].shift_count == 2
    assert (report.start, report.end) == (date(2024, 3, 1), date(2024, 3, 31))


def test_report_for_window_and_top_earners(agg, fixed_now, sam, alex, record):
    records = [
        record(1, sam, date(2024, 3, 15), time(9, 0), time(17, 0)),
        record(2, alex, date(2024, 3, 10), time(9, 0), time(17, 0)),
    ]

    daily = agg.report_for_window(records, ReportWindow.DAILY, fixed_now)
    assert [e.employee_name for e in daily.employees] == ["Sam"]

    assert [e.employee_name for e in agg.top_earners(records, limit=1)] == ["Alex"]
    assert agg.top_earners(records, limit=0) == []


def test_empty_input(agg, fixed_now):
    report = agg.summarize([])
    assert report.employees == []
    assert report.total_hours == 0 and report.total_wages == 0
    assert agg.dashboard([], fixed_now).daily == WindowTotals()


def test_idempotent(agg, fixed_now, sam, alex, record):
    records = [
        record(1, sam, date(2024, 3, 15), time(22, 0), time(6, 0)),
        record(2, alex, date(2024, 3, 12), time(9, 0), None),
        record(3, None, date(2024, 3, 11), time(9, 0), time(17, 0)),
    ]
    assert agg.dashboard(records, fixed_now) == agg.dashboard(records, fixed_now)
    assert agg.summarize(records) == agg.summarize(records)


def test_accepts_generators(agg, sam, record):
    gen = (record(i, sam, date(2024, 3, i), time(9, 0), time(10, 0)) for i in range(1, 4))
    assert agg.summarize(gen).total_hours == 3.0


def test_reference_time_is_explicit(agg, sam, record):
    r = record(1, sam, date(2024, 3, 15), time(9, 0), time(10, 0))
    assert agg.window_totals([r], ReportWindow.DAILY, datetime(2024, 3, 15, 23, 59)).hours == 1.0
    assert agg.window_totals([r], ReportWindow.DAILY, datetime(2024, 3, 16, 0, 0)).hours == 0.0
