"""Video sources and the decoded-frame cache."""

import logging
from abc import ABC, abstractmethod
from collections import OrderedDict
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

from .exceptions import VideoLoadError

logger = logging.getLogger(__name__)


class VideoSource(ABC):
    """An opened video that can decode frame N into an H x W x 3 BGR uint8 array."""

    frame_count: int = 0
    fps: float = 0.0
    width: int = 0
    height: int = 0

    @abstractmethod
    def read_frame(self, index: int) -> Optional[np.ndarray]:
        """Seek to ``index`` and decode it; None on failure."""

    @abstractmethod
    def release(self) -> None:
        pass

    @property
    @abstractmethod
    def is_opened(self) -> bool:
        pass


class OpenCVVideoSource(VideoSource):
    """VideoSource backed by cv2.VideoCapture."""

    def __init__(self, video_path: Union[str, Path]):
        self.video_path = Path(video_path)
        if not self.video_path.exists():
            raise FileNotFoundError(f"File not found: {self.video_path}")

        self._cap = cv2.VideoCapture(str(self.video_path))
        if not self._cap.isOpened():
            raise VideoLoadError(f"Could not open video file: {self.video_path}")

        self.frame_count = int(self._cap.get(cv2.CAP_PROP_FRAME_COUNT))
        self.fps = float(self._cap.get(cv2.CAP_PROP_FPS))
        self.width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

    def read_frame(self, index: int) -> Optional[np.ndarray]:
        if not self._cap.isOpened():
            return None
        self._cap.set(cv2.CAP_PROP_POS_FRAMES, index)
        ret, frame = self._cap.read()
        if not ret:
            return None
        return frame

    def release(self) -> None:
        if self._cap.isOpened():
            self._cap.release()

    @property
    def is_opened(self) -> bool:
        return self._cap.isOpened()


class FrameCache:
    """Clamped, memoised frame access over a VideoSource.

    With ``size == 1`` only the last decoded frame is kept; larger sizes keep
    an LRU of that many frames. Repeating the last request never re-decodes.
    Returned frames are shared with the cache and marked read-only; copy one
    before drawing on it.
    """

    def __init__(self, source: VideoSource, size: int = 1):
        if size < 1:
            raise ValueError("Frame cache size must be at least 1")
        self.source = source
        self.size = size
        self._frames: "OrderedDict[int, np.ndarray]" = OrderedDict()
        self.last_index = -1

    def clamp(self, index: int) -> int:
        return max(0, min(int(index), self.source.frame_count - 1))

    def get_frame(self, index: int) -> Optional[np.ndarray]:
        """Return frame ``index`` (clamped), or None if it cannot be decoded."""
        if not self.source.is_opened or self.source.frame_count <= 0:
            return None

        index = self.clamp(index)
        frame = self._frames.get(index)
        if frame is not None:
            self._frames.move_to_end(index)
            self.last_index = index
            return frame

        frame = self.source.read_frame(index)
        if frame is None:
            logger.warning("Could not read frame %d", index)
            return None

        frame.setflags(write=False)
        self._frames[index] = frame
        while len(self._frames) > self.size:
            self._frames.popitem(last=False)
        self.last_index = index
        return frame

    def clear(self) -> None:
        self._frames.clear()
        self.last_index = -1
