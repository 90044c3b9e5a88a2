#!/usr/bin/env python3
"""
Dungeon Simulator - Command Line Interface

Estimate a character's odds in a dungeon and inspect the bundled rosters.

Usage:
    python cli.py simulate --class Warrior --level 30 --health 20000 \\
        --min-damage 150 --max-damage 260 --dungeon light:DesecratedCatacombs
    python cli.py simulate --state state.json --dungeon light:MinesOfGloria --current
    python cli.py dungeons
    python cli.py monsters --dungeon shadow:DesecratedCatacombs
    python cli.py monsters --habitat Water
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Optional, Sequence

from packages.simulate.calc.damage import DamageRange
from packages.simulate.combat.resolver import SimulationError
from packages.simulate.combat.simulator import (
    FightSimulationResult,
    simulate_current_enemy,
    simulate_dungeon,
)
from packages.simulate.config import SimulationConfig
from packages.simulate.content.classes import parse_class
from packages.simulate.content.monsters import (
    HabitatType,
    Monster,
    dungeon_key,
    get_tables,
    parse_dungeon,
)
from packages.simulate.parallel import ParallelSimulator
from packages.simulate.state.gamestate import CharacterStats, GameState
from packages.simulate.state.rng import seed_to_long

logger = logging.getLogger("cli")


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_monster(index: int, monster: Monster) -> str:
    return (
        f"{index:>3}. {monster.name:<28} lvl {monster.level:<4} {monster.class_.value:<13}"
        f" hp {monster.health:>10.0f}  dmg {monster.min_damage:.0f}-{monster.max_damage:.0f}"
        f"  crit {monster.crit_chance:.0%}"
    )


def format_result(label: str, result: FightSimulationResult) -> str:
    lines = [
        f"{label}",
        f"  Win ratio:  {result.win_ratio:.2%}",
        f"  Won:        {result.won_fights} / {result.completed}",
    ]
    if result.aborted:
        lines.append(f"  Aborted:    {result.aborted}")
    return "\n".join(lines)


def result_to_dict(dungeon: str, result: Optional[FightSimulationResult]) -> Dict[str, Any]:
    if result is None:
        return {"dungeon": dungeon, "result": None}
    return {
        "dungeon": dungeon,
        "result": {
            "win_ratio": result.win_ratio,
            "won_fights": result.won_fights,
            "trials": result.trials,
            "aborted": result.aborted,
        },
    }


# =============================================================================
# COMMANDS
# =============================================================================

def load_game_state(args) -> GameState:
    """Game state from --state, or from the stat flags."""
    if args.state:
        with open(args.state, "r") as f:
            return GameState.from_dict(json.load(f))

    missing = [
        flag for flag, value in (
            ("--class", args.class_name),
            ("--health", args.health),
            ("--min-damage", args.min_damage),
            ("--max-damage", args.max_damage),
        ) if value is None
    ]
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} (or pass --state)")

    character = CharacterStats(
        name=args.name,
        class_=parse_class(args.class_name),
        level=args.level,
        max_health=args.health,
        damage=DamageRange(args.min_damage, args.max_damage),
        crit_chance=args.crit_chance,
        crit_multiplier=args.crit_multiplier,
        armor=args.armor,
    )
    return GameState(character=character)


def cmd_simulate(args) -> int:
    """Simulate a dungeon (or its next enemy) for the given character."""
    try:
        game_state = load_game_state(args)
        dungeon = parse_dungeon(args.dungeon)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    seed = seed_to_long(args.seed) if args.seed else None
    config = SimulationConfig(n_workers=args.workers, seed=seed)

    try:
        if args.workers > 1 and not args.current:
            with ParallelSimulator(config=config) as sim:
                result = sim.simulate_dungeon(game_state, dungeon, args.trials)
        elif args.current:
            result = simulate_current_enemy(game_state, dungeon, args.trials, config=config)
        else:
            result = simulate_dungeon(game_state, dungeon, args.trials, config=config)
    except SimulationError as e:
        logger.error("Simulation failed: %s", e)
        return 1

    key = dungeon_key(dungeon)
    if args.json:
        print(json.dumps(result_to_dict(key, result), indent=2))
    elif result is None:
        print(f"No enemies to fight in {key}")
    else:
        character = game_state.character
        label = f"{character.name} ({character.class_.value} lvl {character.level}) vs {key}"
        print(format_result(label, result))
    return 0


def cmd_dungeons(args) -> int:
    """List every dungeon and habitat with a roster."""
    tables = get_tables()
    if args.json:
        print(json.dumps({
            "dungeons": {
                dungeon_key(d): len(tables.dungeon_monsters(d)) for d in tables.dungeons
            },
            "habitats": {
                h.value: len(tables.habitat_monsters(h)) for h in tables.habitats
            },
        }, indent=2))
        return 0

    print("Dungeons:")
    for dungeon in tables.dungeons:
        print(f"  {dungeon_key(dungeon):<40} {len(tables.dungeon_monsters(dungeon))} monsters")
    print("Habitats:")
    for habitat in tables.habitats:
        print(f"  {habitat.value:<40} {len(tables.habitat_monsters(habitat))} monsters")
    return 0


def cmd_monsters(args) -> int:
    """Show the roster of one dungeon or habitat."""
    tables = get_tables()
    try:
        if args.habitat:
            title = f"Habitat {args.habitat}"
            roster = tables.habitat_monsters(HabitatType(args.habitat.capitalize()))
        else:
            dungeon = parse_dungeon(args.dungeon)
            title = dungeon_key(dungeon)
            roster = tables.dungeon_monsters(dungeon)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps([
            {
                "name": m.name,
                "level": m.level,
                "class": m.class_.value,
                "health": m.health,
                "min_damage": m.min_damage,
                "max_damage": m.max_damage,
                "crit_chance": m.crit_chance,
                "armor": m.armor,
            }
            for m in roster
        ], indent=2))
        return 0

    print(title)
    if not roster:
        print("  (no roster)")
    for i, monster in enumerate(roster, 1):
        print(format_monster(i, monster))
    return 0


# =============================================================================
# MAIN
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Dungeon Simulator - estimate dungeon win odds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s simulate --class Mage --level 20 --health 6000 --min-damage 300 --max-damage 520 --dungeon DesecratedCatacombs
  %(prog)s simulate --state state.json --dungeon light:MinesOfGloria --trials 100000 --workers 4
  %(prog)s dungeons
  %(prog)s monsters --dungeon light:RuinsOfGnark
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Simulate command
    sim_parser = subparsers.add_parser("simulate", help="Simulate a dungeon for a character")
    sim_parser.add_argument("--dungeon", "-d", required=True,
                            help="Dungeon, e.g. light:DesecratedCatacombs or shadow:Hell")
    sim_parser.add_argument("--state", help="Game state JSON file")
    sim_parser.add_argument("--name", default="Player", help="Character name")
    sim_parser.add_argument("--class", dest="class_name", help="Character class")
    sim_parser.add_argument("--level", type=int, default=1, help="Character level")
    sim_parser.add_argument("--health", type=float, help="Maximum health")
    sim_parser.add_argument("--min-damage", type=float, help="Minimum weapon damage")
    sim_parser.add_argument("--max-damage", type=float, help="Maximum weapon damage")
    sim_parser.add_argument("--crit-chance", type=float, default=0.0, help="Crit chance (0-1)")
    sim_parser.add_argument("--crit-multiplier", type=float, default=2.0, help="Crit multiplier")
    sim_parser.add_argument("--armor", type=float, default=0.0, help="Armor value")
    sim_parser.add_argument("--trials", "-n", type=int, default=10_000, help="Number of trials")
    sim_parser.add_argument("--seed", "-s", help="Seed for reproducible results")
    sim_parser.add_argument("--workers", "-w", type=int, default=1,
                            help="Worker processes (1 = run in this process)")
    sim_parser.add_argument("--current", action="store_true",
                            help="Only fight the next unbeaten monster")
    sim_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Dungeons command
    dungeons_parser = subparsers.add_parser("dungeons", help="List dungeons with rosters")
    dungeons_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Monsters command
    monsters_parser = subparsers.add_parser("monsters", help="Show a dungeon or habitat roster")
    group = monsters_parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--dungeon", "-d", help="Dungeon, e.g. light:DesecratedCatacombs")
    group.add_argument("--habitat", help="Pet habitat (Water, Light, Earth, Shadow, Fire)")
    monsters_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if not args.command:
        parser.print_help()
        return 1

    # Dispatch to command handler
    commands = {
        "simulate": cmd_simulate,
        "dungeons": cmd_dungeons,
        "monsters": cmd_monsters,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
