# scripts/odds_report.py
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import Any, Dict, List, Optional, Sequence

from holdem_odds.config import SimulationConfig
from holdem_odds.engine.simulation import calculate
from holdem_odds.helpers.errors import OddsError


# (name, hand, board, opponents)
SCENARIOS = [
    ("AK vs 1 opponent, preflop", ["As", "Kd"], [], 1),
    ("AA vs 2 opponents, ace on the flop", ["As", "Ah"], ["Ac", "2d", "3s"], 2),
    ("Flush draw vs 3 opponents", ["Ah", "Kh"], ["Qh", "Jh", "2d"], 3),
    ("Quad aces vs 4 opponents", ["As", "Ad"], ["Ac", "Ah", "Kd"], 4),
]


def run_scenario(
    name: str,
    hand: Sequence[str],
    board: Sequence[str],
    opponents: int,
    cfg: SimulationConfig,
) -> Optional[Dict[str, Any]]:
    print(f"\n=== {name} ===")
    print(f"Hand:      {' '.join(hand)}")
    print(f"Board:     {' '.join(board) or '-'}")
    print(f"Opponents: {opponents}")

    try:
        start = time.perf_counter()
        res = calculate(
            hand, board, opponents, cfg.simulations,
            seed=cfg.seed, workers=cfg.workers,
        )
        elapsed_ms = (time.perf_counter() - start) * 1000.0
    except OddsError as e:
        print(f"Failed: {e}")
        return None

    print(f"- win:         {res.win}%")
    print(f"- tie:         {res.tie}%")
    print(f"- lose:        {res.lose}%")
    print(f"- simulations: {res.simulations}")
    print(f"- time:        {elapsed_ms:.2f}ms")

    row: Dict[str, Any] = {"name": name, "hand": list(hand), "board": list(board), "opponents": opponents}
    row.update(res.as_dict())
    row["elapsed_ms"] = round(elapsed_ms, 2)
    return row


def build_config(args: argparse.Namespace) -> SimulationConfig:
    env = SimulationConfig.from_env()
    return SimulationConfig(
        simulations=args.simulations if args.simulations is not None else env.simulations,
        seed=args.seed if args.seed is not None else env.seed,
        workers=args.workers if args.workers is not None else env.workers,
    ).validate()


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Monte Carlo Texas Hold'em odds")
    ap.add_argument("--hand", nargs=2, metavar="CARD", help="hole cards, e.g. As Kd")
    ap.add_argument("--board", nargs="*", default=[], metavar="CARD", help="0-5 known community cards")
    ap.add_argument("--opponents", type=int, default=1)
    ap.add_argument("--simulations", type=int, default=None)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--out", type=str, default=None, help="write results as JSON")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = build_config(args)
    except OddsError as e:
        print(f"Bad configuration: {e}", file=sys.stderr)
        return 2

    if args.hand:
        scenarios = [("Custom hand", args.hand, args.board, args.opponents)]
    else:
        scenarios = SCENARIOS

    results = []
    for name, hand, board, opponents in scenarios:
        row = run_scenario(name, hand, board, opponents, cfg)
        if row is not None:
            results.append(row)

    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(results, f, indent=2)
        print(f"\nWrote {args.out} with {len(results)} results.")

    return 0 if len(results) == len(scenarios) else 1


if __name__ == "__main__":
    sys.exit(main())
