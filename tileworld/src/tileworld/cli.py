"""Command-line interface for streaming terrain generation."""

import argparse
import logging
import math
import sys
import time

import structlog


def render_ascii(streamer, center_x: float, center_z: float, radius: int) -> str:
    """Render the stored categories around a center as text.

    One glyph per tile, rows running north to south. Absent tiles are blank.
    """
    cx, cz = math.floor(center_x), math.floor(center_z)
    rows = []
    for z in range(cz - radius, cz + radius + 1):
        row = []
        for x in range(cx - radius, cx + radius + 1):
            tile = streamer.store.get(x, z)
            row.append(tile.category.glyph if tile is not None else " ")
        rows.append("".join(row))
    return "\n".join(rows)


def category_mix(streamer) -> dict[str, int]:
    """Count stored tiles per category, most common first."""
    counts: dict[str, int] = {}
    for _, tile in streamer.store.items():
        counts[tile.category.value] = counts.get(tile.category.value, 0) + 1
    return dict(sorted(counts.items(), key=lambda item: -item[1]))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for terrain streaming."""
    parser = argparse.ArgumentParser(
        description="Stream procedural board terrain along a straight walk"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path or name of TOML config file"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed (overrides config)"
    )
    parser.add_argument(
        "--steps", type=int, default=4, help="Number of movement updates (default: 4)"
    )
    parser.add_argument(
        "--dx", type=float, default=8.0, help="Tiles moved east per step (default: 8)"
    )
    parser.add_argument(
        "--dz", type=float, default=0.0, help="Tiles moved south per step (default: 0)"
    )
    parser.add_argument(
        "--radius", type=int, default=12, help="Preview radius in tiles (default: 12)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    # Import here to avoid slow startup for --help
    from .applier import HeadlessBoard, TerrainApplier
    from .chunks import ChunkStreamer
    from .config import Config, find_config, load_config
    from .exceptions import TerrainError

    config = load_config(find_config(args.config)) if args.config else Config()
    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    streamer = ChunkStreamer(config)
    square_size = config.streaming.square_size

    print(
        f"Streaming {config.streaming.tile_unit_size}x{config.streaming.tile_unit_size} "
        f"chunks, visible range {config.streaming.visible_range}, seed {config.seed}"
    )

    x = z = 0.0
    start_time = time.time()
    try:
        for _ in range(args.steps):
            board = HeadlessBoard(math.floor(x), math.floor(z), args.radius, square_size)
            updated = TerrainApplier(streamer, board).apply(x, z)
            print(
                f"  center ({x:.1f}, {z:.1f}): {len(streamer.store)} tiles stored, "
                f"{updated} board squares updated"
            )
            x += args.dx
            z += args.dz
    except TerrainError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.time() - start_time

    x -= args.dx
    z -= args.dz
    print()
    print(render_ascii(streamer, x, z, args.radius))
    print()
    mix = category_mix(streamer)
    total = sum(mix.values()) or 1
    print(
        "Category mix: "
        + ", ".join(f"{name} {count / total:.0%}" for name, count in mix.items())
    )
    print(
        f"Done in {elapsed:.2f}s: {streamer.solver_invocations} solver runs, "
        f"{streamer.chunks_evicted} chunks evicted"
    )


if __name__ == "__main__":
    main()
