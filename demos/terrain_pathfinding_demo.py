#!/usr/bin/env python3
"""
Terrain Pathfinding Demo - Random terrain, far-apart endpoints, animated trace.

Runs a few scenario cycles and, for each:
1. Draws terrain parameters and endpoints, retrying until a path exists
2. Reports the batch result (path length, distance, nodes explored)
3. Runs the animated search on the same endpoints and reports the trace

Optionally writes the last trace as JSON for a front end to play back.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import json
import logging
import numpy as np

from terrainpath import run_animated_search, run_cycle, CompleteStep
from terrainpath.result import Timer
from terrainpath.steps import steps_to_dicts


def main():
    parser = argparse.ArgumentParser(
        description="Terrain pathfinding -- noise terrain plus best-first search"
    )
    parser.add_argument("--width", type=int, default=80,
                        help="Grid width. Default 80.")
    parser.add_argument("--height", type=int, default=50,
                        help="Grid height. Default 50.")
    parser.add_argument("--cycles", type=int, default=3,
                        help="Number of scenarios to run. Default 3.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for scenario sampling. Default: random.")
    parser.add_argument("--min-distance", type=int, default=50,
                        help="Minimum Manhattan distance between endpoints. Default 50.")
    parser.add_argument("--trace-out", type=str, default=None,
                        help="Write the last animation trace to this JSON file.")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable debug logging.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    rng = np.random.default_rng(args.seed)

    print("=" * 60)
    print("Terrain Pathfinding")
    print("=" * 60)
    print(f"Grid: {args.width}x{args.height}")

    trace = []
    for i in range(args.cycles):
        cycle = run_cycle(args.width, args.height, rng=rng, min_distance=args.min_distance)
        result = cycle.result

        print(f"\n--- Cycle {i + 1} ---")
        print(f"  Terrain: seed={cycle.seed} detail={cycle.detail:.2f} (attempts: {cycle.attempts})")
        print(f"  Start: {cycle.start}  Goal: {cycle.end}")
        print(result.summary())

        if not result.path_exists:
            print("  No path found -- skipping animated search.")
            continue

        with Timer() as timer:
            trace = run_animated_search(cycle.start, cycle.end, cycle.graph)
        finished = bool(trace) and isinstance(trace[-1], CompleteStep)
        print(f"  Animated: {len(trace)} steps, complete={finished}, {timer.elapsed:.3f}s")
        print(f"  Replay: {len(cycle.steps)} path-progress steps")

    if args.trace_out and trace:
        with open(args.trace_out, "w") as f:
            json.dump(steps_to_dicts(trace), f)
        print(f"\nSaved: {args.trace_out}")


if __name__ == "__main__":
    main()
