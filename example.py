#!/usr/bin/env python3
"""
Example script for thermal_video_analyzer

This script loads a thermal video and its colour calibration, samples the
temperature along a horizontal and a vertical line through the frame centre
and plots both profiles.

Usage:
    python example.py

Make sure to replace the video and CSV paths with your own files.
"""

import matplotlib.pyplot as plt
import numpy as np

from thermal_video_analyzer import LineSegment, ThermalEngine


def main():
    """Profile two perpendicular lines through the middle of one frame."""

    print("Thermal Video Analyzer - Basic Example")
    print("=" * 50)

    # Replace with your actual files
    video_file = "videos/demo_vid.avi"
    mapping_file = "data/temp_mapping.csv"
    frame_index = 0

    with ThermalEngine() as engine:
        if not engine.load_video(video_file):
            print(f"Error: {engine.last_error}")
            return
        if not engine.load_calibration(mapping_file):
            print(f"Error: {engine.last_error}")
            return

        info = engine.get_video_info()
        print(f"  Frames: {info.frame_count} @ {info.fps:.1f} fps")
        print(f"  Resolution: {info.width}x{info.height}")
        print(f"  Calibration entries: {engine.calibration_size}")

        cx, cy = info.width // 2, info.height // 2
        horizontal = LineSegment.from_coords(0, cy, info.width - 1, cy)
        vertical = LineSegment.from_coords(cx, 0, cx, info.height - 1)
        first, second = engine.analyze_line_pair(frame_index, horizontal, vertical)

        for name, profile in (("Horizontal", first), ("Vertical", second)):
            stats = profile.stats
            print(f"\n{name}: {len(profile)} samples")
            print(f"  Range: {stats.min:.1f}°C - {stats.max:.1f}°C")
            print(f"  Average: {stats.avg:.1f}°C")

        frame = engine.get_frame(frame_index)

    plt.figure(figsize=(12, 5))

    plt.subplot(1, 2, 1)
    plt.imshow(frame[:, :, ::-1])
    plt.plot([0, info.width - 1], [cy, cy], color='white')
    plt.plot([cx, cx], [0, info.height - 1], color='cyan')
    plt.title(f'Frame {frame_index}')

    plt.subplot(1, 2, 2)
    for name, profile in (("Horizontal", first), ("Vertical", second)):
        values = np.array([np.nan if t is None else t for t in profile.temperatures], dtype=np.float64)
        plt.plot(np.linspace(0, 100, len(values)), values, label=name)
    plt.xlabel('Position along line (%)')
    plt.ylabel('Temperature (°C)')
    plt.legend()
    plt.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
