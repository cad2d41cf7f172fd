"""Simple ASCII demo for the arcade engine.

Run with: `python -m gridarcade --mode puzzle --ticks 40`

Starts a session, lets the periodic tick run unattended for a number of
steps, then prints the final frame and counters.  Useful as a smoke test that
a mode boots and evolves without any front-end attached.  Pass ``--pygame`` to
open the interactive window instead.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from . import ArcadeConfig, GameMode, GameState, render_grid


def _format_grid(grid: List[List[int]]) -> str:
    rows = []
    for row in grid:
        rows.append("".join("#" if cell else "." for cell in row))
    return "\n".join(rows)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--mode",
        choices=[m.value for m in GameMode],
        default=GameMode.PUZZLE.value,
    )
    parser.add_argument("--ticks", type=int, default=40, help="Number of ticks to simulate")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--pygame", action="store_true", help="Open the pygame window")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    mode = GameMode(args.mode)
    if args.pygame:
        from .run_pygame import main as run_window

        run_window(mode, seed=args.seed)
        return

    gs = GameState(config=ArcadeConfig(random_seed=args.seed))
    gs.start(mode)
    for _ in range(max(0, args.ticks)):
        gs.tick()
    print(_format_grid(render_grid(gs)))
    print(f"mode={gs.mode.value} status={gs.status.value} score={gs.score} level={gs.level}")


if __name__ == "__main__":
    main()
