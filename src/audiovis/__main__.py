#!/usr/bin/env python3
"""
Audio Visualizer CLI Tool
=========================

Renders a spectrum/waveform visualisation of an audio file to a video.
Librosa provides the analysis, OpenCV draws the frames and MoviePy muxes
them with the original audio.

Styles:
- bars: frequency bars with fading peak dots.
- radial: mirrored bars radiating out of a circle.
- waveform: time-domain amplitude line.

Usage:
    python -m audiovis input.wav --output result.mp4 --style radial
    python -m audiovis -h (for help)
"""

import argparse
import logging
import os
import sys

from moviepy import AudioFileClip, VideoClip

from audiovis.audio_analyser import AudioAnalyser
from audiovis.config import ColorScheme, RenderConfig, VisualStyle
from audiovis.constants import (
    DEFAULT_ELEMENT_COUNT,
    DEFAULT_FPS,
    DEFAULT_INNER_RADIUS_FACTOR,
    DEFAULT_MAX_BAR_LENGTH_PERCENT,
    DEFAULT_PEAK_DECAY_MS,
    DEFAULT_RESOLUTION,
)
from audiovis.visualiser_renderer import VisualiserRenderer

logger = logging.getLogger(__name__)


def get_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate a music visualisation video from an audio file."
    )
    parser.add_argument("input", help="Path to input audio file (WAV/MP3)")
    parser.add_argument("--output", "-o", default="output.mp4", help="Path to output video file")
    parser.add_argument("--width", type=int, default=DEFAULT_RESOLUTION[0], help="Video width")
    parser.add_argument("--height", type=int, default=DEFAULT_RESOLUTION[1], help="Video height")
    parser.add_argument("--fps", type=int, default=DEFAULT_FPS, help="Frames per second")
    parser.add_argument("--duration", type=float, help="Limit duration in seconds (optional)")
    parser.add_argument(
        "--style",
        default=VisualStyle.BARS.value,
        help="Visual style: " + ", ".join(s.value for s in VisualStyle),
    )
    parser.add_argument(
        "--bars", type=int, default=DEFAULT_ELEMENT_COUNT, help="Number of bars/segments"
    )
    parser.add_argument(
        "--scheme",
        default=ColorScheme.RAINBOW.value,
        help="Color scheme: " + ", ".join(s.value for s in ColorScheme),
    )
    parser.add_argument(
        "--peak-decay",
        type=float,
        default=DEFAULT_PEAK_DECAY_MS,
        help="Time in ms for a peak dot to fade out",
    )
    parser.add_argument(
        "--inner-radius",
        type=float,
        default=DEFAULT_INNER_RADIUS_FACTOR,
        help="Radial style: inner radius is min(width, height) divided by this",
    )
    parser.add_argument(
        "--max-bar-length",
        type=float,
        default=DEFAULT_MAX_BAR_LENGTH_PERCENT,
        help="Radial style: longest bar as a percentage of the inner radius",
    )
    parser.add_argument("--no-peaks", action="store_true", help="Disable peak dots")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def build_config(args):
    return RenderConfig(
        style=args.style,
        element_count=args.bars,
        color_scheme=args.scheme,
        peak_decay_ms=args.peak_decay,
        inner_radius_factor=args.inner_radius,
        max_bar_length_percent=args.max_bar_length,
        show_peaks=not args.no_peaks,
    )


def main(argv=None):
    args = get_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s"
    )

    # 1. Validation
    if not os.path.exists(args.input):
        sys.exit(f"[!] Input file not found: {args.input}")

    config = build_config(args)
    logger.debug(f"Render config: {config}")

    # 2. Analyse Audio
    analyser = AudioAnalyser(args.input)

    # 3. Setup Video Generation
    duration = analyser.duration
    if args.duration and args.duration < duration:
        duration = args.duration
        logger.info(f"[i] Truncating duration to {duration} seconds.")

    logger.info(f"[+] Preparing render: {args.width}x{args.height} @ {args.fps}fps")
    logger.info(f"[+] Style: {config.style.value}, scheme: {config.color_scheme.value}")
    logger.info(f"[+] Duration: {duration:.2f} seconds")

    renderer = VisualiserRenderer(analyser, args.width, args.height, args.fps, config)

    # 4. Create MoviePy Clip with the original audio
    video_clip = VideoClip(renderer.make_frame, duration=duration)
    audio_clip = AudioFileClip(args.input).subclipped(0, duration)
    video_clip = video_clip.with_audio(audio_clip)

    # 5. Export
    logger.info("[+] Rendering video... (This may take a while)")
    video_clip.write_videofile(
        args.output,
        fps=args.fps,
        codec="libx264",
        audio_codec="aac",
        threads=4,
        preset="medium",
        logger="bar",
    )

    logger.info(f"[+] Done! Saved to {args.output}")


if __name__ == "__main__":
    main()
