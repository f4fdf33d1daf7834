"""
CLI entry point for GlyphMind.

Usage:
    glyphmind "some text" [options]
    glyphmind --file notes.txt --png glyph.png
    echo "some text" | python -m glyphmind --mp4 glyph.mp4
"""

import argparse
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from glyphmind.config import GlyphRenderOptions, RenderConfig, load_render_options
from glyphmind.io.exporter import png_data_url
from glyphmind.logging_config import setup_logging
from glyphmind.pipeline import GlyphPipeline
from glyphmind.session import INPUT_TYPES, SessionHistory


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  frame {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  frame {current}/{total}", flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glyphmind",
        description="Turn text into a resonance signature and an animated glyph",
    )

    parser.add_argument("text", nargs="?", default=None, help="Text to analyze (default: read stdin)")
    parser.add_argument("-f", "--file", type=Path, default=None, help="Read text from a file")
    parser.add_argument(
        "--input-type", type=str, default="text", choices=INPUT_TYPES,
        help="Input type recorded in the session history (default: text)",
    )

    # Outputs
    parser.add_argument("--json", type=Path, default=None, help="Write the analysis record to JSON")
    parser.add_argument("--png", type=Path, default=None, help="Write a static glyph PNG")
    parser.add_argument("--mp4", type=Path, default=None, help="Write an animated glyph MP4")
    parser.add_argument("--live", action="store_true", help="Open a live animation window")
    parser.add_argument("--session", type=Path, default=None, help="Append the analysis to a session history file")

    # Render options
    parser.add_argument("--config", type=Path, default=None, help="JSON render options file (overrides flags)")
    parser.add_argument("--width", type=int, default=400, help="Surface width (default: 400)")
    parser.add_argument("--height", type=int, default=400, help="Surface height (default: 400)")
    parser.add_argument("--static", action="store_true", help="Draw a single static frame in the live window")
    parser.add_argument("--no-particles", action="store_true", help="Disable the particle swarm")
    parser.add_argument("--no-field", action="store_true", help="Disable the resonance field")

    # Animation / video
    parser.add_argument("--fps", type=int, default=60, help="Frames per second (default: 60)")
    parser.add_argument("-d", "--duration", type=float, default=5.0, help="Video length in seconds (default: 5)")
    parser.add_argument(
        "-q", "--quality", type=str, default="medium",
        choices=["high", "medium", "fast"],
        help="Encoding quality (default: medium)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Particle seed for reproducible output")
    parser.add_argument(
        "--legacy-respawn", action="store_true",
        help="Respawn particles inside a fixed 800x600 area instead of the surface",
    )

    # Logging
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")

    return parser


def read_text(args) -> str:
    """Text from the argument, the --file option or stdin, in that order."""
    if args.text is not None:
        return args.text
    if args.file is not None:
        if not args.file.exists():
            print(f"Error: Input file not found: {args.file}", file=sys.stderr)
            sys.exit(1)
        return args.file.read_text(encoding="utf-8")
    if sys.stdin.isatty():
        print("Error: No text given (pass it as an argument, with --file, or on stdin)", file=sys.stderr)
        sys.exit(1)
    return sys.stdin.read()


def build_options(args) -> GlyphRenderOptions:
    options = GlyphRenderOptions(
        width=args.width,
        height=args.height,
        animate=not args.static,
        show_particles=not args.no_particles,
        show_resonance_field=not args.no_field,
    )
    if args.config is not None:
        if not args.config.exists():
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            sys.exit(1)
        try:
            options = load_render_options(args.config, base=options)
        except ValueError as exc:
            print(f"Error: Invalid config file {args.config}: {exc}", file=sys.stderr)
            sys.exit(1)

    if options.width <= 0 or options.height <= 0:
        print(f"Error: Invalid size {options.width}x{options.height}", file=sys.stderr)
        sys.exit(1)
    return options


def run_live(pipeline: GlyphPipeline, vector, options: GlyphRenderOptions):
    """Animate ``vector`` in a pygame window until it is closed."""
    import pygame

    from glyphmind.visualizers.glyph import GlyphRenderer
    from glyphmind.visualizers.scheduler import PygameScheduler

    pygame.init()
    try:
        screen = pygame.display.set_mode((options.width, options.height))
        pygame.display.set_caption(f"GlyphMind - {vector.glyph.shape.value}")

        scheduler = PygameScheduler(fps=pipeline.config.fps)
        renderer = GlyphRenderer(surface=screen, config=pipeline.config, scheduler=scheduler)
        renderer.render(vector, options)

        if not options.animate:
            # Keep the window responsive while showing the still frame
            def hold():
                scheduler.schedule(hold)
            scheduler.schedule(hold)

        def on_event(event):
            if event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                scheduler.quit()

        scheduler.run(on_event=on_event)
        renderer.stop_animation()
    finally:
        pygame.quit()


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=str(args.log_file) if args.log_file else None,
    )

    text = read_text(args)
    options = build_options(args)

    config = RenderConfig(
        fps=args.fps,
        legacy_respawn_bounds=args.legacy_respawn,
        seed=args.seed,
    )
    pipeline = GlyphPipeline(config=config, options=options)

    # Step 1: Analysis
    t0 = time.time()
    result = pipeline.process(text, output_path=args.json)
    vector = result["vector"]

    print(vector.meaning_signature)
    print(f"  Cognitive load:      {vector.cognitive_load:6.1f}")
    print(f"  Emotional intensity: {vector.emotional_intensity:6.1f}")
    print(f"  Symbolic density:    {vector.symbolic_density:6.1f}")
    print(f"  Temporal flow:       {vector.temporal_flow:6.1f}")
    print(f"  Emergence points:    {', '.join(f'{p:.0f}' for p in vector.emergence_points) or '-'}")
    print(
        f"  Glyph: {vector.glyph.shape.value}, complexity {vector.glyph.complexity}, "
        f"frequency {vector.glyph.frequency:.2f}, color {vector.glyph.color}"
    )
    print(f"  Analysis took {(time.time() - t0) * 1000:.1f}ms")

    if "output_path" in result:
        print(f"Record: {result['output_path']}")

    # Step 2: Exports
    snapshot = None
    if args.png is not None:
        path = pipeline.render_still(vector, args.png, replace(options, animate=False))
        print(f"Still: {path}")
        snapshot = png_data_url(path.read_bytes())

    if args.mp4 is not None:
        t1 = time.time()
        print(f"\nRendering {args.duration:.1f}s at {options.width}x{options.height} @ {args.fps}fps")
        try:
            path = pipeline.render_video(
                vector,
                args.mp4,
                duration=args.duration,
                options=options,
                quality=args.quality,
                progress_callback=_progress_bar,
            )
        except RuntimeError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        size_mb = path.stat().st_size / 1024 / 1024
        print(f"Video: {path} ({size_mb:.1f} MB, {time.time() - t1:.1f}s)")

    if args.session is not None:
        history = SessionHistory(args.session)
        entry = history.add_entry(args.input_type, text, vector, glyph_snapshot=snapshot)
        print(f"Session entry {entry.id}: tags {', '.join(entry.tags)}")

    if args.live:
        run_live(pipeline, vector, options)


if __name__ == "__main__":
    main()
