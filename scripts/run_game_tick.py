"""
Run one game tick: lock races whose lock time has passed, settle finished ones.

Usage:
    python scripts/run_game_tick.py
    python scripts/run_game_tick.py --force-settle
"""

import argparse
import asyncio
import json
import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mtb_fantasy.config import get_settings
from mtb_fantasy.database import AsyncSessionLocal, init_db
from mtb_fantasy.services import run_game_tick


async def main():
    parser = argparse.ArgumentParser(description="Run the fantasy game scheduler once")
    parser.add_argument(
        "--force-lock",
        action="store_true",
        help="Lock every scheduled race regardless of its lock time",
    )
    parser.add_argument(
        "--force-settle",
        action="store_true",
        help="Settle without waiting for final results and rewrite every score",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    await init_db()
    outcome = await run_game_tick(
        AsyncSessionLocal,
        force_lock=args.force_lock,
        force_settle=args.force_settle,
    )

    print(json.dumps(outcome.model_dump(mode="json"), indent=2))
    if outcome.errors:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
