import json
import os
import unittest

from absl.testing import absltest

from pokebattle.game.events.battle_event import (
    BattleStartedEvent,
    MoveUsedEvent,
    StatusAppliedEvent,
    TurnEndedEvent,
)
from pokebattle.game.protocol.battle_event_logger import BattleEventLogger
from pokebattle.game.schema.enums import Status


class BattleEventLoggerTest(absltest.TestCase):
    def setUp(self) -> None:
        self.log_dir = os.path.join(self.create_tempdir().full_path, "logs")

    def _read_lines(self, path: str):
        with open(path) as f:
            return [json.loads(line) for line in f]

    def test_filename(self) -> None:
        logger = BattleEventLogger("random", "first_move", "local-7", 1700000000, self.log_dir)
        logger.close()
        self.assertEqual(
            logger.filepath,
            os.path.join(self.log_dir, "random_first_move_local-7_1700000000.txt"),
        )
        self.assertTrue(os.path.exists(logger.filepath))

    def test_writes_one_json_line_per_event(self) -> None:
        logger = BattleEventLogger("a", "b", "x", 1, self.log_dir)
        logger.log_event(0, BattleStartedEvent("Eevee", "Pikachu"))
        logger.log_events(
            1,
            [
                MoveUsedEvent("p2", 0, "Pikachu", 1, "Thunder Wave"),
                StatusAppliedEvent("p1", 0, "Eevee", Status.PARALYSIS),
                TurnEndedEvent(1),
            ],
        )
        logger.close()

        lines = self._read_lines(logger.filepath)
        self.assertLen(lines, 4)
        self.assertEqual(
            lines[0],
            {
                "turn_number": 0,
                "event": {"kind": "battle-started", "p1_lead": "Eevee", "p2_lead": "Pikachu"},
            },
        )
        self.assertEqual(lines[2]["turn_number"], 1)
        self.assertEqual(lines[2]["event"]["status"], "par")
        self.assertEqual(lines[3]["event"], {"kind": "turn-ended", "turn": 1})

    def test_log_after_close_is_ignored(self) -> None:
        logger = BattleEventLogger("a", "b", "x", 2, self.log_dir)
        logger.close()
        logger.log_event(1, TurnEndedEvent(1))
        logger.close()
        self.assertEqual(self._read_lines(logger.filepath), [])


if __name__ == "__main__":
    unittest.main()
