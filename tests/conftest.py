"""
Shared fixtures: an in-memory video source and small calibration tables.
"""
import numpy as np
import pytest

from thermal_video_analyzer.calibration import CalibrationTable
from thermal_video_analyzer.video import VideoSource


class FakeVideoSource(VideoSource):
    """Frames held in memory (BGR); counts decode calls."""

    def __init__(self, frames, fps=25.0, fail_on=()):
        self.frames = list(frames)
        self.frame_count = len(self.frames)
        self.fps = fps
        self.height, self.width = self.frames[0].shape[:2] if self.frames else (0, 0)
        self.fail_on = set(fail_on)
        self.decode_calls = []
        self.released = False

    def read_frame(self, index):
        self.decode_calls.append(index)
        if index in self.fail_on:
            return None
        return self.frames[index].copy()

    def release(self):
        self.released = True

    @property
    def is_opened(self):
        return not self.released


def make_frames(count=5, width=10, height=10):
    """Frames whose every pixel is blue channel = frame number."""
    frames = []
    for i in range(count):
        frame = np.zeros((height, width, 3), dtype=np.uint8)
        frame[:, :, 0] = i
        frames.append(frame)
    return frames


def red_top_row_frame(width=10, height=10):
    """Black frame with a pure red (BGR 0,0,255) top row."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[0, :] = (0, 0, 255)
    return frame


@pytest.fixture
def fake_source():
    return FakeVideoSource(make_frames())


@pytest.fixture
def red_green_table():
    table = CalibrationTable()
    table.add(255, 0, 0, 1000.0)
    table.add(0, 255, 0, 500.0)
    return table


@pytest.fixture
def calibration_csv(tmp_path):
    path = tmp_path / "temp_mapping.csv"
    path.write_text(
        "X,Y,R,G,B,Temperature_C\n"
        "0,0,255,0,0,1000.0\n"
        "1,0,0,255,0,500.0\n"
    )
    return path
