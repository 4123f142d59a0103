"""
Headless CLI: drives one game session with a simple auto-player.

Time is simulated (one tick = tick_seconds of game time, no sleeping), so a
full 10-minute session runs instantly. Without --use-llm the mentor stays
silent and no oracle calls are made.
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

# Ensure project root is in sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import get_settings, setup_logging
from src.ai_layer.advisor import AdvisoryOracle
from src.simulation_layer.clock import ManualClock
from src.simulation_layer.engine import GameEngine
from src.simulation_layer.errors import OracleUnavailable


class SilentOracle(AdvisoryOracle):
    """Oracle that is never reachable; the gateway keeps its last text."""

    async def generate_shock(self, stats: dict):
        raise OracleUnavailable("LLM disabled")

    async def get_advice(self, action: str, stats: dict) -> str:
        raise OracleUnavailable("LLM disabled")


def auto_play(engine: GameEngine, restock_below: int, donate_above: int) -> None:
    """Greedy policy: collect, restock, seat bookings, donate surplus."""
    for slot_id in engine.scheduler.ready_slots():
        engine.complete(slot_id)

    for resource, count in list(engine.stats.inventory.items()):
        if count < restock_below:
            engine.purchase_inventory(resource)

    for booking in engine.pending_bookings:
        if engine.scheduler.first_empty() is None:
            break
        engine.accept_booking(booking.id)

    if not engine.pending_bookings:
        engine.refresh_bookings()

    if engine.stats.money > donate_above:
        engine.donate(engine.settings.economy.donation_presets[0])


async def simulate(engine: GameEngine, clock: ManualClock, ticks: int, args) -> None:
    step_ms = int(engine.settings.simulation.tick_seconds * 1000)
    for i in range(ticks):
        clock.advance(step_ms)
        engine.tick()
        auto_play(engine, args.restock_below, args.donate_above)
        await engine.gateway.flush()

        if (i + 1) % 60 == 0:
            stats = engine.stats
            print(
                f"  t={i + 1:>4}s  money=${stats.money:<6} eco={stats.eco_score:<3} "
                f"rep={stats.reputation:<4} park={engine.community.stats.project_current}"
            )


def main():
    parser = argparse.ArgumentParser(description="PuraVida village tourism simulation")
    parser.add_argument("--ticks", type=int, default=600, help="Number of 1-second ticks")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--use-llm",
        action="store_true",
        help="Call the configured LLM for events and mentor advice",
    )
    parser.add_argument("--restock-below", type=int, default=2)
    parser.add_argument("--donate-above", type=int, default=3000)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(logging.INFO if args.verbose else logging.WARNING)
    if not args.use_llm:
        logging.getLogger("src.ai_layer.event_gateway").setLevel(logging.ERROR)
    settings = get_settings()

    clock = ManualClock(start_ms=0)
    seed = args.seed if args.seed is not None else settings.simulation.seed
    engine = GameEngine(
        settings=settings,
        clock=clock,
        rng=random.Random(seed),
        oracle=AdvisoryOracle() if args.use_llm else SilentOracle(),
    )

    print("=" * 80)
    print("PuraVida Village Tourism Simulation")
    print("=" * 80)
    print(f"Ticks: {args.ticks}")
    print(f"Mentor: {settings.llm.provider if args.use_llm else 'offline'}")
    print()

    asyncio.run(simulate(engine, clock, args.ticks, args))

    stats = engine.stats
    community = engine.community.stats
    print()
    print("Final stats:")
    print(f"  Money: ${stats.money}")
    print(f"  Eco-score: {stats.eco_score}")
    print(f"  Reputation: {stats.reputation}")
    print(f"  Donated: ${stats.total_donated}")
    print(f"  Inventory: {stats.inventory}")
    print(f"  Park fund: {community.project_current}/{community.project_goal} "
          f"({community.progress_percent:.1f}%)")

    history = engine.history_frame()
    if not history.empty:
        print()
        print(f"Last {len(history)} completions: revenue ${history['revenue'].sum()}, "
              f"mean eco {history['eco_score'].mean():.1f}")

    print()
    print("Leaderboard:")
    for rank, peer in enumerate(community.leaderboard(), 1):
        print(f"  {rank}. {peer.avatar} {peer.name}: {peer.score}")
    print()
    print(f"Don Carlos: {engine.advisory_text}")


if __name__ == "__main__":
    main()
