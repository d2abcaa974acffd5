"""Errors raised by the thermal engine."""


class ThermalEngineError(Exception):
    """Base class for thermal engine errors."""


class CalibrationLoadError(ThermalEngineError):
    """Raised when a calibration table yields no usable entries."""


class VideoLoadError(ThermalEngineError):
    """Raised when a video cannot be opened or has no frames."""


class EngineNotReadyError(ThermalEngineError):
    """Raised when analysis is requested before video and calibration are loaded."""


class FrameUnavailableError(ThermalEngineError):
    """Raised when the requested frame could not be decoded."""

    def __init__(self, frame_index: int):
        self.frame_index = frame_index
        super().__init__(f"Could not decode frame {frame_index}")


class ConfigValidationError(ThermalEngineError):
    """Raised when configuration validation fails."""
