from __future__ import annotations

import pytest

from benched.core.session import BenchmarkSession
from benched.report.formatting import NumberFormat
from benched.report.generator import RESPONSE_HEADERS, ReportConfig, ReportGenerator
from benched.utils.timers import ManualClock


def run_frames(session: BenchmarkSession, clock: ManualClock, count: int, duration: float = 0.001) -> None:
    for idx in range(count):
        session.start_frame(idx)
        clock.advance(duration)
        session.end_frame()


def test_number_format_defaults():
    fmt = NumberFormat()
    assert fmt.format(1234.5) == "1.234,500"
    assert fmt.format(0) == "0,000"
    assert fmt.format(-0.0001) == "0,000"
    assert fmt.format(-2.25) == "-2,250"


def test_number_format_rejects_clashing_delimiter():
    with pytest.raises(ValueError):
        NumberFormat(delimiter=",")


def test_group_size_must_be_positive():
    with pytest.raises(ValueError):
        ReportConfig(group_size=0)


def test_windowed_summary_row_count(session, clock):
    run_frames(session, clock, 250)
    table = ReportGenerator(ReportConfig(group_size=100)).windowed_frames(session.snapshot())
    assert table.column("Frame Range") == ["0-100", "100-200", "200-250"]
    assert table.name == "frameTime_100"


def test_window_health_is_strict():
    gen = ReportGenerator()
    assert not gen.window_ok([0.05] * 10)
    assert gen.window_ok([0.0499] * 10)


def test_window_health_flag_in_table():
    clock = ManualClock()
    session = BenchmarkSession("health", clock=clock)
    run_frames(session, clock, 4, duration=0.25)
    for idx in range(4, 8):
        session.start_frame(idx)
        clock.advance(0.125)
        session.end_frame()
    gen = ReportGenerator(ReportConfig(group_size=4, window_ok_threshold=0.25))
    table = gen.windowed_frames(session.snapshot())
    assert table.column("OK") == ["0", "1"]


def test_windowed_phases_are_zero_filled(session, clock):
    session.start_frame(0)
    with session.measure("gc"):
        clock.advance(0.004)
    session.set_metric("alloc", 3.0)
    session.end_frame()
    session.start_frame(1)
    clock.advance(0.001)
    session.end_frame()

    table = ReportGenerator().windowed_frames(session.snapshot())
    [row] = table.rows
    headers = table.headers
    assert row[headers.index("gc (Max)")] == "4,000"
    assert row[headers.index("gc (Avg)")] == "2,000"
    assert row[headers.index("alloc (Avg)")] == "1,500"
    assert row[headers.index("alloc (Max)")] == "3,000"
    assert row[headers.index("alloc (Total)")] == "3,000"


def test_phase_summary_only_counts_frames_with_phase(session, clock):
    for idx, spent in enumerate([0.002, None, 0.004]):
        session.start_frame(idx)
        if spent is not None:
            with session.measure("ai"):
                clock.advance(spent)
        session.end_frame()
    table = ReportGenerator().phase_summary(session.snapshot())
    assert table.rows == [["ai", "2", "4,000", "3,000", "4,000", "4,000"]]


def test_raw_frames_absence_markers(session, clock):
    session.start_frame(0)
    with session.measure("render"):
        clock.advance(0.001)
    session.end_frame()
    session.start_frame(1)
    session.set_metric("draws", 12)
    clock.advance(0.01)
    session.end_frame()

    table = ReportGenerator().raw_frames(session.snapshot())
    assert table.headers == ["Frame", "OK", "Start", "End", "Duration (ms)", "render", "draws"]
    first, second = table.rows
    assert first[1] == "1"
    assert first[5] == "1,000"
    assert first[6] == "-"
    assert second[1] == "0"
    assert second[5] == "0"
    assert second[6] == "12,000"


def test_activity_summary_without_activities(session, clock):
    run_frames(session, clock, 3)
    gen = ReportGenerator()
    table = gen.activity_summary(session.snapshot())
    assert table.headers == ["Category"] + RESPONSE_HEADERS
    assert table.rows == []
    assert gen.grouped_activity_summaries(session.snapshot()) == {}


def test_activity_summary_per_category(session, clock):
    session.start_frame(0)
    session.start_activity("scroll", "s")
    session.start_activity("click", "c")
    session.end_frame()
    session.start_frame(1)
    clock.advance(0.002)
    session.complete_activity("c")
    session.end_frame()
    session.start_frame(2)
    clock.advance(0.002)
    session.complete_activity("s")
    session.end_frame()

    table = ReportGenerator().activity_summary(session.snapshot())
    assert table.column("Category") == ["click", "scroll"]
    click, scroll = table.rows
    assert click[1] == "1"
    assert click[2] == "2,000"
    assert click[6] == "1,000"
    assert scroll[2] == "4,000"
    assert scroll[6] == "2,000"


def test_grouped_activities_bucket_by_start_frame(session, clock):
    for idx in (5, 150, 160):
        session.start_frame(idx)
        session.start_activity("open", f"a{idx}")
        clock.advance(0.001)
        session.complete_activity(f"a{idx}")
        session.end_frame()

    tables = ReportGenerator(ReportConfig(group_size=100)).grouped_activity_summaries(session.snapshot())
    table = tables["open"]
    assert table.column("Frame Range") == ["0-100", "100-200"]
    assert table.column("Count") == ["1", "2"]


def test_build_collects_all_tables(session, clock):
    run_frames(session, clock, 2)
    report = ReportGenerator().build(session.snapshot())
    assert set(report.tables()) == {"activities", "frameTime", "frameTime_100", "raw"}
    assert report.session == "test"
