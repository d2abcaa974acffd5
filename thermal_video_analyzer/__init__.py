"""
thermal-video-analyzer - temperature profiles from colour-mapped thermal video

Pixel colours of a thermal camera video are mapped to °C through a
calibration table (X,Y,R,G,B,Temperature_C rows); temperatures are then
sampled along line segments drawn across any frame.

Main usage:
    from thermal_video_analyzer import ThermalEngine

    engine = ThermalEngine()
    engine.load_video("demo_vid.avi")
    engine.load_calibration("temp_mapping.csv")

    profile = engine.analyze_line(120, (40, 10), (40, 200))
    print(f"Max temperature: {profile.stats.max:.2f}°C")
"""

__version__ = "0.1.0"

from .calibration import CalibrationTable, load_calibration_csv, parse_calibration_rows
from .config import EngineConfig, load_config
from .engine import ThermalEngine
from .exceptions import (
    CalibrationLoadError,
    ConfigValidationError,
    EngineNotReadyError,
    FrameUnavailableError,
    ThermalEngineError,
    VideoLoadError,
)
from .models import CalibrationEntry, LineProfile, LineSegment, LineStats, Point, VideoInfo
from .raster import rasterize_line
from .resolver import ColorResolver
from .video import FrameCache, OpenCVVideoSource, VideoSource

__all__ = [
    "ThermalEngine",  # main entry point
    "EngineConfig",
    "load_config",
    "CalibrationTable",
    "load_calibration_csv",
    "parse_calibration_rows",
    "ColorResolver",
    "FrameCache",
    "VideoSource",
    "OpenCVVideoSource",
    "rasterize_line",
    "CalibrationEntry",
    "LineProfile",
    "LineSegment",
    "LineStats",
    "Point",
    "VideoInfo",
    "ThermalEngineError",
    "CalibrationLoadError",
    "VideoLoadError",
    "EngineNotReadyError",
    "FrameUnavailableError",
    "ConfigValidationError",
]
