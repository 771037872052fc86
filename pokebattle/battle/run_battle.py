"""Runs a local battle between two agents.

This script loads a team for each side, builds a seeded state machine, and
asks the agents for choices until the battle ends or the turn limit is hit.
"""

import time
from typing import List, Optional

from absl import app, flags, logging

from pokebattle.agents.agent_interface import Agent
from pokebattle.agents.agent_registry import AgentRegistry
from pokebattle.game.data.game_data import GameData
from pokebattle.game.environment.battle_state_machine import BattleStateMachine
from pokebattle.game.interface.team_loader import TeamLoader
from pokebattle.game.mechanics.random_source import SeededRandomSource
from pokebattle.game.protocol.battle_event_logger import (
    DEFAULT_LOG_DIR,
    BattleEventLogger,
)
from pokebattle.game.schema.battle_state import SIDE_IDS

FLAGS = flags.FLAGS

_AGENTS = ", ".join(AgentRegistry.get_available_agents())

flags.DEFINE_string(
    "team_p1", None, "Team file name (without .team) for p1 (default: random team)"
)
flags.DEFINE_string(
    "team_p2", None, "Team file name (without .team) for p2 (default: random team)"
)
flags.DEFINE_string("teams_dir", "data/teams", "Directory holding <format>/*.team")
flags.DEFINE_string("format", "sample", "Team format subdirectory")
flags.DEFINE_string("agent_p1", "random", f"Agent for p1. Available: {_AGENTS}")
flags.DEFINE_string("agent_p2", "random", f"Agent for p2. Available: {_AGENTS}")
flags.DEFINE_integer(
    "seed", None, "Seed for every random draw (default: derived from the clock)"
)
flags.DEFINE_integer("max_turns", 200, "Stop the battle after this many turns")
flags.DEFINE_bool(
    "log_events",
    False,
    "Write every battle event to <log_dir>/<p1>_<p2>_<battle_id>_<epoch>.txt",
)
flags.DEFINE_string("log_dir", DEFAULT_LOG_DIR, "Directory for event log files")
flags.DEFINE_string(
    "data_dir", None, "Directory with species/moves/natures/type chart JSON"
)
flags.DEFINE_bool("verbose", False, "Print a line for every battle event")


def run_battle(
    seed: int,
    team_p1: Optional[str] = None,
    team_p2: Optional[str] = None,
    agent_p1: str = "random",
    agent_p2: str = "random",
    max_turns: int = 200,
    teams_dir: str = "data/teams",
    format_name: str = "sample",
    logger: Optional[BattleEventLogger] = None,
    verbose: bool = False,
) -> BattleStateMachine:
    """Play one battle to the end or to the turn limit.

    The battle, both agents and the random team picks each get their own
    random source derived from the seed, so a seed replays the same battle.

    Returns:
        The state machine, for inspecting the final state and event log
    """
    team_rng = SeededRandomSource(seed + 1)
    team_loader = TeamLoader(teams_dir=teams_dir, format_name=format_name)
    roster_p1 = team_loader.load_team(team_p1, rng=team_rng)
    roster_p2 = team_loader.load_team(team_p2, rng=team_rng)

    battle_id = f"local-{seed}"
    machine = BattleStateMachine(
        SeededRandomSource(seed), battle_id=battle_id, logger=logger
    )
    result = machine.start(roster_p1, roster_p2)
    if verbose:
        for event in result.events:
            print(event.describe())

    agents: List[Agent] = [
        AgentRegistry.create_agent(
            name, side_id, machine.get_event_store(), SeededRandomSource(seed + 2 + i)
        )
        for i, (side_id, name) in enumerate(zip(SIDE_IDS, (agent_p1, agent_p2)))
    ]

    while not machine.is_battle_over():
        if machine.get_state().turn_number >= max_turns:
            logging.warning("[%s] Turn limit %d reached", battle_id, max_turns)
            break
        for agent in agents:
            choice = agent.choose_action(
                machine.get_state(), machine.legal_choices(agent.side_id)
            )
            result = machine.submit_choice(agent.side_id, choice)
        if verbose and result is not None:
            print(f"== Turn {result.turn} ==")
            for event in result.events:
                print(event.describe())

    return machine


def main(argv: List[str]) -> None:
    """Entry point for the script."""
    del argv
    logging.set_verbosity(logging.INFO)

    if FLAGS.data_dir:
        GameData(FLAGS.data_dir)

    seed = FLAGS.seed if FLAGS.seed is not None else int(time.time())
    logging.info(
        "Starting battle: %s vs %s (seed %d)", FLAGS.agent_p1, FLAGS.agent_p2, seed
    )

    logger = None
    if FLAGS.log_events:
        logger = BattleEventLogger(
            FLAGS.agent_p1,
            FLAGS.agent_p2,
            f"local-{seed}",
            int(time.time()),
            log_dir=FLAGS.log_dir,
        )
        logging.info("Event logging enabled: %s", logger.filepath)

    try:
        machine = run_battle(
            seed,
            team_p1=FLAGS.team_p1,
            team_p2=FLAGS.team_p2,
            agent_p1=FLAGS.agent_p1,
            agent_p2=FLAGS.agent_p2,
            max_turns=FLAGS.max_turns,
            teams_dir=FLAGS.teams_dir,
            format_name=FLAGS.format,
            logger=logger,
            verbose=FLAGS.verbose,
        )
    finally:
        if logger:
            logger.close()

    state = machine.get_state()
    if not state.ended:
        logging.info("Result: unfinished after %d turns", state.turn_number)
    elif state.winner is None:
        logging.info("Result: Tie after %d turns", state.turn_number)
    else:
        logging.info("Result: %s won after %d turns", state.winner, state.turn_number)


def run() -> None:
    app.run(main)


if __name__ == "__main__":
    run()
