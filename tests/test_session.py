from __future__ import annotations

import dataclasses

import pytest


def test_single_frame_round_trip(session, clock):
    session.start_frame(0)
    session.start_measurement("render")
    clock.advance(0.004)
    session.end_measurement()
    clock.advance(0.001)
    session.end_frame()

    frames = session.frames
    assert list(frames) == [0]
    assert frames[0].time_per_phase["render"] == pytest.approx(0.004)
    assert frames[0].duration == pytest.approx(0.005)
    assert session.current_frame is None
    assert "render" in session.phase_samples  # cleared by the next start_frame

    session.start_frame(1)
    assert session.phase_samples == {}
    assert session.active_measurements == []
    assert session.metrics == {}


def test_start_frame_discards_previous_in_progress_state(session, clock):
    session.start_frame(0)
    session.start_measurement("update")
    session.set_metric("entities", 10)
    session.start_frame(1)
    assert session.active_measurements == []
    assert session.metrics == {}
    session.end_frame()
    assert session.frames[1].time_per_phase == {}
    assert 0 not in session.frames


def test_end_frame_without_start_is_noop(session, errors):
    assert session.end_frame() is None
    assert session.frames == {}
    assert len(errors) == 1


def test_end_frame_force_closes_open_measurements(session, clock, errors):
    session.start_frame(3)
    session.start_measurement("physics")
    clock.advance(0.002)
    session.start_measurement("broadphase")
    clock.advance(0.001)
    frame = session.end_frame()
    assert len(errors) == 2
    assert frame.time_per_phase["broadphase"] == pytest.approx(0.001)
    assert frame.time_per_phase["physics"] == pytest.approx(0.003)


def test_frame_record_is_immutable(session):
    session.start_frame(0)
    session.set_metric("m", 1.0)
    frame = session.end_frame()
    with pytest.raises(dataclasses.FrozenInstanceError):
        frame.end_time = 10.0
    with pytest.raises(TypeError):
        frame.metrics["m"] = 2.0


def test_metrics_snapshot_by_value(session):
    session.start_frame(0)
    session.set_metric("draw_calls", 5)
    session.update_metric("draw_calls", 0, lambda v: v + 1)
    session.update_metric("triangles", 100, lambda v: v * 2)
    frame = session.end_frame()
    session.start_frame(1)
    session.set_metric("draw_calls", 99)
    assert frame.metrics == {"draw_calls": 6, "triangles": 200}


def test_reused_frame_index_overwrites(session, clock):
    session.start_frame(0)
    session.end_frame()
    session.start_frame(0)
    session.set_metric("second", 1.0)
    session.end_frame()
    assert len(session.frames) == 1
    assert session.frames[0].metrics == {"second": 1.0}


def test_snapshot_is_detached(session):
    session.start_frame(0)
    session.end_frame()
    snap = session.snapshot()
    session.start_frame(1)
    session.end_frame()
    assert list(snap.frames) == [0]
    assert len(session.frames) == 2
