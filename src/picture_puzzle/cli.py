from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .errors import GenerationIntegrityError
from .game.pattern import format_pattern, generate_puzzle_pattern, pattern_summary
from .game.rules import (
    DIFFICULTY_PROFILES,
    Difficulty,
    FixedCount,
    calculate_score,
    format_time,
    get_difficulty_profile,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="picture-puzzle")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate and print a seeded board")
    gen.add_argument("--size", type=int, default=6)
    gen.add_argument("--seed", type=int, default=12345)

    score = sub.add_parser("score", help="Compute a score breakdown")
    score.add_argument("difficulty", choices=[d.value for d in Difficulty])
    score.add_argument("--lines", type=int, default=0)
    score.add_argument("--elapsed", type=int, required=True, help="Seconds used")
    score.add_argument("--limit", type=int, default=None, help="Time limit (defaults to the difficulty's)")

    sub.add_parser("difficulties", help="List the difficulty table")
    return p


def _cmd_generate(args: argparse.Namespace) -> int:
    try:
        pattern = generate_puzzle_pattern(args.size, args.seed)
    except GenerationIntegrityError as e:
        logger.error(f"Generation failed: {e}")
        return 1
    print(format_pattern(pattern))
    print()
    print(f"pieces: {len(pattern.pieces)}  complete: {pattern.is_complete}")
    print("shapes: " + ", ".join(f"{k}={v}" for k, v in sorted(pattern_summary(pattern).items())))
    return 0


def _cmd_score(args: argparse.Namespace) -> int:
    limit = args.limit if args.limit is not None else get_difficulty_profile(args.difficulty).time_limit_seconds
    result = calculate_score(args.difficulty, args.lines, args.elapsed, limit)
    print(f"time:        {format_time(args.elapsed)} / {format_time(limit)}")
    print(f"base:        {result.base_score}")
    print(f"lines:       {result.lines_cleared_score}")
    print(f"time bonus:  {result.time_bonus}")
    print(f"total:       {result.total_score}")
    return 0


def _cmd_difficulties(args: argparse.Namespace) -> int:
    for difficulty, profile in DIFFICULTY_PROFILES.items():
        normal = profile.normal_count
        ratio = f"{normal.count}" if isinstance(normal, FixedCount) else f"{normal.low}-{normal.high}"
        print(
            f"{difficulty.value:<8} {profile.label:<11} {profile.puzzle_count}:{ratio:<4} "
            f"{format_time(profile.time_limit_seconds)}  base {profile.base_score:<5} "
            f"charges {profile.clear_charges}  hint {'yes' if profile.show_target_indicator else 'no'}"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(asctime)s] %(message)s",
    )
    handlers = {
        "generate": _cmd_generate,
        "score": _cmd_score,
        "difficulties": _cmd_difficulties,
    }
    return handlers[args.command](args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
