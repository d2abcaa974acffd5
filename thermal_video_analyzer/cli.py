"""
Command-line interface for the thermal video analyzer.
"""

import argparse
import logging
import sys

from .config import EngineConfig, load_config
from .engine import ThermalEngine
from .exceptions import ThermalEngineError
from .models import LineSegment
from .utilities import UnitConversion


def build_parser():
    parser = argparse.ArgumentParser(
        description="Temperature profiles along lines of a colour-mapped thermal video"
    )

    parser.add_argument(
        "video_path",
        help="Path to the thermal video"
    )

    parser.add_argument(
        "calibration_path",
        help="Path to the X,Y,R,G,B,Temperature_C calibration CSV"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="YAML or JSON engine configuration"
    )

    parser.add_argument(
        "--info",
        action="store_true",
        help="Show video information"
    )

    parser.add_argument(
        "--pixel",
        type=int,
        nargs=3,
        metavar=("R", "G", "B"),
        help="Print the temperature of an RGB colour"
    )

    parser.add_argument(
        "--line",
        type=int,
        nargs=5,
        metavar=("FRAME", "X1", "Y1", "X2", "Y2"),
        help="Analyze the temperature along a line of a frame"
    )

    parser.add_argument(
        "--pair",
        type=int,
        nargs=9,
        metavar=("FRAME", "X1", "Y1", "X2", "Y2", "X3", "Y3", "X4", "Y4"),
        help="Analyze two lines of a frame; the second profile is reversed"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show temperature statistics for analyzed lines"
    )

    parser.add_argument(
        "--export-csv",
        type=str,
        help="Export the analyzed line profile(s) to a CSV file"
    )

    parser.add_argument(
        "--snapshot",
        nargs=2,
        metavar=("FRAME", "OUTPUT"),
        help="Write a frame as a base64 JPEG data URL to OUTPUT"
    )

    parser.add_argument(
        "--plot",
        action="store_true",
        help="Plot the analyzed line profile(s)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else EngineConfig()
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else config.logging_level,
            format="%(asctime)s [%(levelname)s] [%(module)s] - %(message)s",
        )

        with ThermalEngine(config) as engine:
            if not engine.load_video(args.video_path):
                raise ThermalEngineError(f"Failed to load video: {engine.last_error}")
            if not engine.load_calibration(args.calibration_path):
                raise ThermalEngineError(f"Failed to load temperature mapping: {engine.last_error}")

            unit = config.temperature_unit
            profiles = []

            if args.info:
                print_info(engine)

            if args.pixel:
                r, g, b = args.pixel
                temperature = engine.get_pixel_temperature(r, g, b)
                if temperature is None:
                    print(f"RGB({r}, {g}, {b}): no calibration data")
                else:
                    print(f"RGB({r}, {g}, {b}): {format_temperature(temperature, unit)}")

            if args.line:
                frame_index = check_frame_index(engine, args.line[0])
                segment = engine.clamp_segment(LineSegment.from_coords(*args.line[1:]))
                profiles.append(engine.analyze_line(frame_index, segment.start, segment.end))

            if args.pair:
                frame_index = check_frame_index(engine, args.pair[0])
                line1 = engine.clamp_segment(LineSegment.from_coords(*args.pair[1:5]))
                line2 = engine.clamp_segment(LineSegment.from_coords(*args.pair[5:9]))
                first, second = engine.analyze_line_pair(frame_index, line1, line2)
                profiles.extend([first, second.reversed()])

            for number, profile in enumerate(profiles, start=1):
                print_profile(profile, number, unit)
                if args.stats:
                    print_stats(profile, unit)

            if args.export_csv:
                if not profiles:
                    raise ValueError("--export-csv requires --line or --pair")
                export_to_csv(profiles, args.export_csv, unit)
                print(f"Data exported to: {args.export_csv}")

            if args.snapshot:
                frame_index = check_frame_index(engine, int(args.snapshot[0]))
                data_url = engine.get_frame_jpeg(frame_index)
                if data_url is None:
                    raise ThermalEngineError(f"Could not decode frame {frame_index}")
                with open(args.snapshot[1], "w", encoding="ascii") as f:
                    f.write(data_url)
                print(f"Frame {frame_index} written to: {args.snapshot[1]}")

            if args.plot and profiles:
                plot_profiles(profiles, unit)

            if not any([args.info, args.pixel, profiles, args.snapshot]):
                info = engine.get_video_info()
                print(f"Video loaded successfully: {args.video_path}")
                print(f"Frames: {info.frame_count} @ {info.fps:.2f} fps, {info.width}x{info.height}")
                print(f"Calibration entries: {engine.calibration_size}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def check_frame_index(engine, frame_index):
    """Reject frame numbers outside the video instead of clamping them."""
    frame_count = engine.get_video_info().frame_count
    if frame_index < 0 or frame_index >= frame_count:
        raise ValueError(f"Invalid frame number: {frame_index} (video has {frame_count} frames)")
    return frame_index


def format_temperature(temperature, unit):
    if temperature is None:
        return "n/a"
    return f"{UnitConversion.from_celsius(temperature, unit):.2f}{UnitConversion.unitlabel(unit)}"


def print_info(engine):
    """Print video information."""
    info = engine.get_video_info()

    print("\n=== VIDEO INFORMATION ===")
    print(f"Frames: {info.frame_count}")
    print(f"FPS: {info.fps:.2f}")
    print(f"Resolution: {info.width}x{info.height}")
    print(f"Calibration entries: {engine.calibration_size}")
    print(f"Ready: {engine.is_ready()}")


def print_profile(profile, number, unit):
    """Print one temperature profile."""
    x1, y1, x2, y2 = profile.segment.as_tuple()
    print(f"\n=== LINE {number}: frame {profile.frame_index}, ({x1},{y1}) -> ({x2},{y2}) ===")
    print(f"Samples: {len(profile)}")
    print(", ".join(format_temperature(t, unit) for t in profile.temperatures))


def print_stats(profile, unit):
    """Print temperature statistics."""
    stats = profile.stats

    print("\n=== TEMPERATURE STATISTICS ===")
    if stats.count == 0:
        print("No calibrated samples")
        return
    print(f"Minimum temperature: {format_temperature(stats.min, unit)}")
    print(f"Maximum temperature: {format_temperature(stats.max, unit)}")
    print(f"Average temperature: {format_temperature(stats.avg, unit)}")
    spread = UnitConversion.from_celsius(stats.max, unit) - UnitConversion.from_celsius(stats.min, unit)
    print(f"Temperature range: {spread:.2f}")
    print(f"Calibrated samples: {stats.count}")


def export_to_csv(profiles, output_path, unit="C"):
    """Export profiles to CSV; absent samples are left empty."""
    import csv

    with open(output_path, 'w', newline='') as csvfile:
        writer = csv.writer(csvfile)

        # Header
        writer.writerow(['Line', 'Index', 'X', 'Y', f'Temperature_{unit}'])

        # Data
        for number, profile in enumerate(profiles, start=1):
            for index, (point, temperature) in enumerate(zip(profile.points, profile.temperatures)):
                value = UnitConversion.from_celsius(temperature, unit)
                writer.writerow([number, index, point.x, point.y, '' if value is None else value])


def plot_profiles(profiles, unit):
    """Chart profiles against position along the line (0-100 %)."""
    import matplotlib.pyplot as plt
    import numpy as np

    plt.figure(figsize=(10, 5))
    for number, profile in enumerate(profiles, start=1):
        values = np.array(
            [np.nan if t is None else UnitConversion.from_celsius(t, unit) for t in profile.temperatures],
            dtype=np.float64,
        )
        position = np.linspace(0, 100, len(values)) if len(values) > 1 else np.zeros(len(values))
        plt.plot(position, values, label=f"Line {number}")
    plt.xlabel('Position along line (%)')
    plt.ylabel(f'Temperature ({UnitConversion.unitlabel(unit)})')
    plt.title(f'Temperature profile - frame {profiles[0].frame_index}')
    plt.legend()
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
