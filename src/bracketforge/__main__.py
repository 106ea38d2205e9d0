"""Command line interface for Bracket Forge.

Generates bracket structures from participant files, runs interactive
Swiss tournaments and simulates Swiss pairing quality.
"""

# Bracket Forge
# Copyright (C) 2025  Bracket Forge developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from bracketforge.constants import BRACKET_FORMATS, EVENT_DOUBLES, EVENT_SINGLES
from bracketforge.exceptions import BracketForgeException
from bracketforge.models import (
    GenerationRequest,
    HybridConfig,
    MatchResult,
    Participant,
    SwissConfig,
    SwissState,
)
from bracketforge.testing.rtg import ResultPattern, run_swiss_simulation
from bracketforge.tournament import (
    apply_results,
    calculate_final_ranking,
    create_swiss_state,
    generate_next_round,
    generate_structure,
)
from bracketforge.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their options
COMMANDS = {
    "generate": {
        "description": "Generate a bracket structure from a participant file",
        "options": {
            "--input": "Participant JSON file (list or {'participants': [...]})",
            "--format": "single_elimination/round_robin/hybrid",
            "--event-type": "singles/doubles (default: singles)",
            "--group-size": "Hybrid group size (default: 4)",
            "--advancers": "Hybrid advancers per group (default: 1)",
            "--output": "Write the structure JSON here instead of stdout",
        },
    },
    "swiss": {
        "description": "Run an interactive Swiss tournament",
        "options": {
            "--input": "Participant JSON file",
            "--rounds": "Stop after this many rounds",
            "--no-rematch-check": "Allow rematches",
            "--max-variance": "Largest rating gap for a pairing (default: 300)",
            "--output": "Save the final state JSON here",
        },
    },
    "simulate": {
        "description": "Simulate Swiss tournaments and report pairing quality",
        "options": {
            "--players": "Participants per tournament (default: 16)",
            "--runs": "Number of simulated tournaments (default: 10)",
            "--seed": "Random seed for reproducibility",
            "--pattern": "Result pattern (realistic/balanced/predictable/random)",
        },
    },
    "help": {
        "description": "Show help for specific command",
        "options": {"<command>": "Command name to get help for"},
    },
    "exit": {"description": "Exit the interactive mode", "options": {}},
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                     BRACKET FORGE - CLI                       ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}/help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave interactive mode
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:15}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer():
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        options_completer = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
        completions[cmd] = options_completer
        completions[f"/{cmd}"] = options_completer

    completions["/help"] = None
    completions["/list"] = None
    return NestedCompleter.from_nested_dict(completions)


def load_participants(path: str) -> List[Participant]:
    """Read participants from a JSON file.

    The file holds either a list of participant objects or an object with
    a ``participants`` list.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    records = data["participants"] if isinstance(data, dict) else data
    return [Participant.from_dict(record) for record in records]


def write_json(data: Dict[str, Any], output: Optional[str]) -> None:
    content = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(content, encoding="utf-8")
        print(f"{Colors.OKGREEN}Saved to: {output}{Colors.ENDC}")
    else:
        print(content)


# ========== generate ==========


def add_generate_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument("--input", required=True, help="Participant JSON file")
    parser.add_argument(
        "--format", choices=list(BRACKET_FORMATS), required=True, help="Structure format"
    )
    parser.add_argument(
        "--event-type", choices=[EVENT_SINGLES, EVENT_DOUBLES], default=EVENT_SINGLES
    )
    parser.add_argument("--group-size", type=int, default=HybridConfig.group_size)
    parser.add_argument(
        "--advancers", type=int, default=HybridConfig.advancers_per_group
    )
    parser.add_argument("--output", help="Output file path")
    return parser


def run_generate_command(args: argparse.Namespace) -> int:
    """Run the generate command."""
    request = GenerationRequest(
        participants=load_participants(args.input),
        format=args.format,
        event_type=args.event_type,
        hybrid=HybridConfig(
            group_size=args.group_size, advancers_per_group=args.advancers
        ),
    )
    structure = generate_structure(request)
    write_json(structure.to_dict(), args.output)
    return 0


# ========== swiss ==========


def add_swiss_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument("--input", required=True, help="Participant JSON file")
    parser.add_argument("--rounds", type=int, help="Stop after this many rounds")
    parser.add_argument(
        "--no-rematch-check",
        action="store_true",
        help="Allow participants to meet more than once",
    )
    parser.add_argument(
        "--max-variance", type=float, default=SwissConfig.max_rating_variance
    )
    parser.add_argument("--output", help="Save the final state JSON here")
    return parser


def ask_result(ask: Callable[[str], str], match) -> MatchResult:
    """Prompt until a valid result is entered for ``match``.

    Accepts "1" (first player wins), "2" (second player wins) or "d" (draw).
    """
    while True:
        answer = (
            ask(
                f"  #{match.match_number} {match.player1_name} vs "
                f"{match.player2_name} [1/2/d]: "
            )
            .strip()
            .lower()
        )
        if answer == "1":
            return MatchResult(
                match.player1_id, match.player2_id, winner_id=match.player1_id
            )
        if answer == "2":
            return MatchResult(
                match.player1_id, match.player2_id, winner_id=match.player2_id
            )
        if answer == "d":
            return MatchResult(match.player1_id, match.player2_id, is_draw=True)
        print(f"{Colors.WARNING}Enter 1, 2 or d{Colors.ENDC}")


def print_standings(state: SwissState) -> None:
    print(f"\n{Colors.BOLD}Standings after round {state.current_round}:{Colors.ENDC}")
    for rank, participant in enumerate(calculate_final_ranking(state), start=1):
        print(
            f"  {rank:3}. {participant.name:25} {participant.points:4g} pts  "
            f"Buchholz {participant.buchholz:g}"
        )


def play_swiss_session(
    state: SwissState, ask: Callable[[str], str], max_rounds: Optional[int] = None
) -> SwissState:
    """Collect results round by round until the tournament (or ``max_rounds``) ends."""
    last_round = min(state.total_rounds, max_rounds or state.total_rounds)
    while True:
        round_ = state.get_round(state.current_round)
        print(f"\n{Colors.BOLD}Round {round_.round_number}/{state.total_rounds}{Colors.ENDC}")
        for participant_id in round_.unpaired_ids:
            name = state.participants_by_id[participant_id].name
            print(f"  {Colors.WARNING}{name} has no opponent this round{Colors.ENDC}")

        results = [ask_result(ask, match) for match in round_.matches]
        if results:
            state = apply_results(state, round_.round_number, results)
        print_standings(state)

        if state.current_round >= last_round:
            return state
        state, _ = generate_next_round(state)


def run_swiss_command(
    args: argparse.Namespace, ask: Optional[Callable[[str], str]] = None
) -> int:
    """Run an interactive Swiss tournament."""
    config = SwissConfig(
        allow_rematch=args.no_rematch_check, max_rating_variance=args.max_variance
    )
    state = create_swiss_state(load_participants(args.input), config)
    print(
        f"\n{Colors.BOLD}Swiss tournament {state.tournament_id}: "
        f"{len(state.participants)} participants, {state.total_rounds} rounds{Colors.ENDC}"
    )

    if ask is None:
        ask = PromptSession(history=InMemoryHistory()).prompt
    state = play_swiss_session(state, ask, args.rounds)

    print(f"\n{Colors.OKGREEN}Fairness score: {state.fairness_score:.1f}{Colors.ENDC}")
    if args.output:
        write_json(state.to_dict(), args.output)
    return 0


# ========== simulate ==========


def add_simulate_arguments(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument("--players", type=int, default=16, help="Number of players")
    parser.add_argument("--runs", type=int, default=10, help="Number of tournaments")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.REALISTIC.value,
        help="Result pattern",
    )
    return parser


def run_simulate_command(args: argparse.Namespace) -> int:
    """Run the simulate command."""
    print(f"\n{Colors.BOLD}Simulating {args.runs} Swiss tournaments...{Colors.ENDC}")
    report = run_swiss_simulation(
        args.players,
        runs=args.runs,
        seed=args.seed,
        result_pattern=ResultPattern(args.pattern),
    )
    averages = report["averages"]
    print(f"\n{Colors.BOLD}Results ({report['simulation_count']} runs):{Colors.ENDC}")
    print(f"  Fairness score: {averages['fairness_score']}")
    print(f"  Average rating gap: {averages['average_rating_variance']}")
    print(f"  Balance score: {averages['balance_score']}")
    print(f"  Rematches: {averages['rematch_count']}")
    return 0


# ========== entry points ==========

SUBCOMMANDS = {
    "generate": (add_generate_arguments, run_generate_command),
    "swiss": (add_swiss_arguments, run_swiss_command),
    "simulate": (add_simulate_arguments, run_simulate_command),
}


def run_command(command: str, args_list: List[str]) -> int:
    """Parse ``args_list`` for one subcommand and run it."""
    add_arguments, handler = SUBCOMMANDS[command]
    parser = add_arguments(argparse.ArgumentParser(prog=command))
    return handler(parser.parse_args(args_list))


def run_interactive_mode() -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    style = Style.from_dict({"prompt": "#00aa00 bold"})
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    while True:
        try:
            user_input = session.prompt("bracketforge> ").strip()
            if not user_input:
                continue

            if user_input in ["exit", "quit", "q", "/exit"]:
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                return 0

            if user_input in ["/help", "help", "?", "/list"]:
                print_commands_list()
                continue

            parts = user_input.split()
            command = parts[0].lstrip("/")

            if command == "help":
                if len(parts) > 1:
                    print_command_help(parts[1].lstrip("/"))
                else:
                    print_commands_list()
                continue

            if command not in SUBCOMMANDS:
                print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
                print(f"Type {Colors.BOLD}/help{Colors.ENDC} to see available commands")
                continue

            try:
                run_command(command, parts[1:])
            except SystemExit:
                # argparse exits on bad arguments
                continue
            except (BracketForgeException, OSError, json.JSONDecodeError) as e:
                print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
                logger.debug("Command failed", exc_info=True)

        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            return 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="bracketforge",
        description="Tournament structure generation for Bracket Forge",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  bracketforge

  # Single elimination bracket
  bracketforge generate --format single_elimination --input players.json

  # Hybrid with groups of 3, two advancing
  bracketforge generate --format hybrid --group-size 3 --advancers 2 --input players.json

  # Interactive Swiss tournament
  bracketforge swiss --input players.json

  # Pairing quality over 50 simulated tournaments
  bracketforge simulate --players 32 --runs 50 --seed 42
        """,
    )
    parser.add_argument(
        "--interactive", "-i", action="store_true", help="Start in interactive mode"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for name, (add_arguments, handler) in SUBCOMMANDS.items():
        subparser = subparsers.add_parser(name, help=COMMANDS[name]["description"])
        add_arguments(subparser)
        subparser.set_defaults(func=handler)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if args.interactive or not hasattr(args, "func"):
        return run_interactive_mode()

    try:
        return args.func(args)
    except (BracketForgeException, OSError, json.JSONDecodeError) as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(f"\n{Colors.WARNING}Interrupted{Colors.ENDC}")
        return 130


if __name__ == "__main__":
    sys.exit(main())
