"""ThermalEngine: calibrated temperature lookups and line profiles over a video."""

import base64
import logging
import threading
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import cv2

from .analyzer import LineAnalyzer
from .calibration import CalibrationTable, load_calibration_csv
from .config import EngineConfig
from .exceptions import (
    CalibrationLoadError,
    EngineNotReadyError,
    ThermalEngineError,
    VideoLoadError,
)
from .models import LineProfile, LineSegment, Point, VideoInfo
from .resolver import ColorResolver
from .utilities import is_channel
from .video import FrameCache, OpenCVVideoSource, VideoSource

logger = logging.getLogger(__name__)

VideoOpener = Callable[[Union[str, Path]], VideoSource]


class ThermalEngine:
    """
    Owns one video, one calibration table and the frame cache for a session.

    All public methods hold the instance lock, so one engine may be shared
    between threads; calls are serialized.

    Usage example:
        with ThermalEngine() as engine:
            engine.load_video("demo_vid.avi")
            engine.load_calibration("temp_mapping.csv")
            profile = engine.analyze_line(0, (10, 20), (80, 20))
            print(profile.stats.max)
    """

    def __init__(self, config: Optional[EngineConfig] = None, video_opener: VideoOpener = OpenCVVideoSource):
        self.config = config or EngineConfig()
        self._open_video = video_opener
        self._lock = threading.RLock()
        self._source: Optional[VideoSource] = None
        self._frames: Optional[FrameCache] = None
        self._table = CalibrationTable()
        self._resolver = ColorResolver(self._table, self.config.match_threshold)
        self._info = VideoInfo()
        self.last_error: Optional[str] = None

    def load_video(self, video_path: Union[str, Path]) -> bool:
        """Open a video, replacing any current one. False (see last_error) on failure."""
        with self._lock:
            self._release_video()
            try:
                source = self._open_video(video_path)
                if source.frame_count <= 0:
                    source.release()
                    raise VideoLoadError(f"Video has no frames: {video_path}")
            except (FileNotFoundError, ThermalEngineError) as e:
                self.last_error = str(e)
                logger.error("Failed to load video: %s", e)
                return False

            self._source = source
            self._frames = FrameCache(source, self.config.frame_cache_size)
            self._info = VideoInfo(
                frame_count=source.frame_count,
                fps=source.fps,
                width=source.width,
                height=source.height,
                loaded=True,
            )
            self.last_error = None
            logger.info(
                "Video loaded: %d frames, %.2f fps, %dx%d",
                source.frame_count, source.fps, source.width, source.height,
            )
            return True

    def load_calibration(self, csv_path: Union[str, Path]) -> bool:
        """Load a calibration CSV, replacing the current table. False on failure."""
        with self._lock:
            try:
                table = load_calibration_csv(csv_path)
            except (FileNotFoundError, CalibrationLoadError) as e:
                self.last_error = str(e)
                logger.error("Failed to load temperature mapping: %s", e)
                self.set_calibration(CalibrationTable())
                return False
            self.set_calibration(table)
            self.last_error = None
            return True

    def set_calibration(self, table: CalibrationTable) -> None:
        """Install an already built table."""
        with self._lock:
            self._table = table
            self._resolver = ColorResolver(table, self.config.match_threshold)

    @property
    def calibration_size(self) -> int:
        return len(self._table)

    def get_video_info(self) -> VideoInfo:
        with self._lock:
            loaded = self._source is not None and self._source.is_opened
            info = self._info
            return VideoInfo(info.frame_count, info.fps, info.width, info.height, loaded)

    def is_ready(self) -> bool:
        """True when a video is open and has at least one frame."""
        info = self.get_video_info()
        return info.loaded and info.frame_count > 0

    def get_pixel_temperature(self, r: int, g: int, b: int) -> Optional[float]:
        """Temperature for an RGB colour, or None if nothing is calibrated."""
        if not (is_channel(r) and is_channel(g) and is_channel(b)):
            raise ValueError("RGB values must be between 0 and 255")
        with self._lock:
            return self._resolver.resolve(r, g, b)

    def get_frame(self, frame_index: int):
        """Decoded BGR frame (clamped index, read-only), or None."""
        with self._lock:
            if self._frames is None:
                return None
            return self._frames.get_frame(frame_index)

    def get_frame_jpeg(self, frame_index: int) -> Optional[str]:
        """Frame as a ``data:image/jpeg;base64,`` URL, or None."""
        with self._lock:
            frame = self.get_frame(frame_index)
            if frame is None:
                return None
            ok, buffer = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, self.config.jpeg_quality])
            if not ok:
                return None
            return "data:image/jpeg;base64," + base64.b64encode(buffer.tobytes()).decode("ascii")

    def analyze_line(self, frame_index: int, start: Tuple[int, int], end: Tuple[int, int]) -> LineProfile:
        """Temperatures along start→end in frame ``frame_index``.

        Raises EngineNotReadyError without video or calibration, and
        FrameUnavailableError when the frame cannot be decoded.
        """
        segment = LineSegment(Point(*map(int, start)), Point(*map(int, end)))
        with self._lock:
            return self._analyzer().analyze(frame_index, segment)

    def analyze_line_pair(self, frame_index: int, line1: LineSegment, line2: LineSegment) -> List[LineProfile]:
        """Analyze two segments of the same frame; profiles in argument order."""
        with self._lock:
            analyzer = self._analyzer()
            return [analyzer.analyze(frame_index, line1), analyzer.analyze(frame_index, line2)]

    def clamp_segment(self, segment: LineSegment) -> LineSegment:
        """Clamp both endpoints into the loaded frame."""
        info = self.get_video_info()

        def clamp(p: Point) -> Point:
            return Point(
                max(0, min(p.x, info.width - 1)),
                max(0, min(p.y, info.height - 1)),
            )

        return LineSegment(clamp(segment.start), clamp(segment.end))

    def _analyzer(self) -> LineAnalyzer:
        if self._frames is None or not self.is_ready():
            raise EngineNotReadyError("Video not loaded")
        if len(self._table) == 0:
            raise EngineNotReadyError("Temperature mapping not loaded")
        return LineAnalyzer(self._frames, self._resolver)

    def close(self) -> None:
        with self._lock:
            self._release_video()

    def _release_video(self) -> None:
        if self._frames is not None:
            self._frames.clear()
        if self._source is not None:
            self._source.release()
        self._source = None
        self._frames = None
        self._info = VideoInfo()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
