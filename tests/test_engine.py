"""
Tests for the ThermalEngine boundary operations.
"""
import threading

import pytest

from conftest import FakeVideoSource, make_frames, red_top_row_frame
from thermal_video_analyzer import ThermalEngine
from thermal_video_analyzer.config import EngineConfig
from thermal_video_analyzer.exceptions import EngineNotReadyError, FrameUnavailableError
from thermal_video_analyzer.models import LineSegment, Point, VideoInfo


def engine_with(frames, config=None, **source_kwargs):
    sources = []

    def opener(path):
        source = FakeVideoSource(frames, **source_kwargs)
        sources.append(source)
        return source

    return ThermalEngine(config, video_opener=opener), sources


def test_initial_state():
    engine = ThermalEngine()
    assert not engine.is_ready()
    assert engine.get_video_info() == VideoInfo()
    assert engine.calibration_size == 0
    assert engine.get_pixel_temperature(1, 2, 3) is None
    assert engine.get_frame(0) is None
    assert engine.get_frame_jpeg(0) is None


def test_load_video_and_info():
    engine, _ = engine_with(make_frames(count=7, width=16, height=8), fps=30.0)
    assert engine.load_video("demo.avi")
    assert engine.is_ready()
    assert engine.get_video_info() == VideoInfo(frame_count=7, fps=30.0, width=16, height=8, loaded=True)
    assert engine.get_video_info().to_dict()["frameCount"] == 7


def test_load_video_missing_file(tmp_path):
    engine = ThermalEngine()
    assert not engine.load_video(tmp_path / "missing.avi")
    assert "File not found" in engine.last_error
    assert not engine.is_ready()


def test_load_video_without_frames():
    engine, sources = engine_with([])
    assert not engine.load_video("empty.avi")
    assert "no frames" in engine.last_error
    assert sources[0].released
    assert not engine.is_ready()


def test_reload_releases_previous_video():
    engine, sources = engine_with(make_frames())
    engine.load_video("a.avi")
    engine.load_video("b.avi")
    assert sources[0].released
    assert not sources[1].released
    engine.close()
    assert sources[1].released
    assert not engine.is_ready()


def test_load_calibration(calibration_csv):
    engine = ThermalEngine()
    assert engine.load_calibration(calibration_csv)
    assert engine.calibration_size == 2
    assert engine.last_error is None


def test_failed_calibration_load_clears_table(calibration_csv, tmp_path):
    engine = ThermalEngine()
    engine.load_calibration(calibration_csv)
    bad = tmp_path / "bad.csv"
    bad.write_text("X,Y,R,G,B,Temperature_C\n")
    assert not engine.load_calibration(bad)
    assert "No usable calibration data" in engine.last_error
    assert engine.calibration_size == 0


def test_pixel_temperature(calibration_csv):
    engine = ThermalEngine()
    engine.load_calibration(calibration_csv)
    assert engine.get_pixel_temperature(255, 0, 0) == 1000.0
    assert engine.get_pixel_temperature(254, 1, 1) == 1000.0


def test_pixel_temperature_rejects_bad_channels():
    with pytest.raises(ValueError, match="between 0 and 255"):
        ThermalEngine().get_pixel_temperature(0, 300, 0)


def test_analyze_line_red_row(calibration_csv):
    engine, _ = engine_with([red_top_row_frame()])
    engine.load_video("demo.avi")
    engine.load_calibration(calibration_csv)
    profile = engine.analyze_line(0, (0, 0), (9, 0))
    assert profile.temperatures == [1000.0] * 10


def test_analyze_line_clamps_frame_index(calibration_csv):
    engine, sources = engine_with(make_frames(count=3))
    engine.load_video("demo.avi")
    engine.load_calibration(calibration_csv)
    engine.analyze_line(99, (0, 0), (1, 1))
    engine.analyze_line(2, (0, 0), (1, 1))
    assert sources[0].decode_calls == [2]


def test_analyze_line_requires_video_and_calibration(calibration_csv):
    engine, _ = engine_with(make_frames())
    with pytest.raises(EngineNotReadyError, match="Video not loaded"):
        engine.analyze_line(0, (0, 0), (1, 1))
    engine.load_video("demo.avi")
    with pytest.raises(EngineNotReadyError, match="Temperature mapping not loaded"):
        engine.analyze_line(0, (0, 0), (1, 1))


def test_analyze_line_decode_failure(calibration_csv):
    engine, _ = engine_with(make_frames(), fail_on={1})
    engine.load_video("demo.avi")
    engine.load_calibration(calibration_csv)
    with pytest.raises(FrameUnavailableError):
        engine.analyze_line(1, (0, 0), (1, 1))


def test_analyze_line_pair(calibration_csv):
    engine, sources = engine_with([red_top_row_frame()])
    engine.load_video("demo.avi")
    engine.load_calibration(calibration_csv)
    horizontal = LineSegment.from_coords(0, 0, 9, 0)
    vertical = LineSegment.from_coords(0, 0, 0, 9)
    first, second = engine.analyze_line_pair(0, horizontal, vertical)
    assert first.stats.count == 10
    # black is equidistant from red and green; red comes first
    assert second.temperatures == [1000.0] * 10
    assert sources[0].decode_calls == [0]


def test_clamp_segment():
    engine, _ = engine_with(make_frames(width=10, height=6))
    engine.load_video("demo.avi")
    clamped = engine.clamp_segment(LineSegment.from_coords(-4, 3, 25, 40))
    assert clamped == LineSegment(Point(0, 3), Point(9, 5))


def test_get_frame_jpeg():
    engine, _ = engine_with([red_top_row_frame()], config=EngineConfig(jpeg_quality=80))
    engine.load_video("demo.avi")
    data_url = engine.get_frame_jpeg(0)
    assert data_url.startswith("data:image/jpeg;base64,/9j/")


def test_context_manager_closes():
    engine, sources = engine_with(make_frames())
    with engine:
        engine.load_video("demo.avi")
    assert sources[0].released


def test_concurrent_analysis_is_serialized(calibration_csv):
    engine, sources = engine_with(make_frames(count=4))
    engine.load_video("demo.avi")
    engine.load_calibration(calibration_csv)
    errors = []

    def worker(frame_index):
        try:
            for _ in range(20):
                profile = engine.analyze_line(frame_index, (0, 0), (9, 9))
                assert len(profile) == 10
        except Exception as e:  # collected and asserted below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
