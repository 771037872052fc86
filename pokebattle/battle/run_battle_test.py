import json
import unittest
from pathlib import Path

from absl.testing import absltest

from pokebattle.battle.run_battle import run_battle
from pokebattle.game.protocol.battle_event_logger import BattleEventLogger

TEAMS_DIR = str(Path(__file__).resolve().parents[2] / "data" / "teams")


class RunBattleTest(absltest.TestCase):
    def test_battle_finishes(self) -> None:
        machine = run_battle(
            7,
            team_p1="kanto_classics",
            team_p2="modern_core",
            agent_p1="first_move",
            agent_p2="random",
            teams_dir=TEAMS_DIR,
        )

        state = machine.get_state()
        self.assertTrue(state.ended or state.turn_number == 200)
        if state.ended:
            self.assertEqual(machine.get_event_log()[-1].kind, "battle-ended")

    def test_same_seed_replays_battle(self) -> None:
        def play(seed: int):
            machine = run_battle(seed, teams_dir=TEAMS_DIR)
            return [event.to_dict() for event in machine.get_event_log()]

        self.assertEqual(play(42), play(42))

    def test_turn_limit(self) -> None:
        machine = run_battle(3, max_turns=1, teams_dir=TEAMS_DIR)
        state = machine.get_state()
        self.assertTrue(state.ended or state.turn_number == 1)

    def test_logs_every_event(self) -> None:
        log_dir = self.create_tempdir().full_path
        logger = BattleEventLogger("random", "random", "local-5", 0, log_dir=log_dir)
        try:
            machine = run_battle(5, max_turns=3, teams_dir=TEAMS_DIR, logger=logger)
        finally:
            logger.close()

        with open(logger.filepath) as f:
            lines = [json.loads(line) for line in f]
        self.assertLen(lines, len(machine.get_event_log()))
        self.assertEqual(lines[0]["turn_number"], 0)
        self.assertEqual(lines[0]["event"]["kind"], "battle-started")

    def test_unknown_team(self) -> None:
        with self.assertRaises(FileNotFoundError):
            run_battle(1, team_p1="missing", teams_dir=TEAMS_DIR)


if __name__ == "__main__":
    unittest.main()
