"""Logs battle events to file for debugging and analysis."""

import json
import os
from typing import Any, Dict, Iterable, Optional, TextIO

from pokebattle.game.events.battle_event import BattleEvent

DEFAULT_LOG_DIR = "/tmp/logs"


class BattleEventLogger:
    """Writes one JSON line per battle event to a file."""

    def __init__(
        self,
        p1_name: str,
        p2_name: str,
        battle_id: str,
        epoch_secs: int,
        log_dir: str = DEFAULT_LOG_DIR,
    ) -> None:
        """Open the log file.

        The file is named <p1_name>_<p2_name>_<battle_id>_<epoch_secs>.txt.

        Args:
            p1_name: Name of the agent playing p1
            p2_name: Name of the agent playing p2
            battle_id: Identifier of the battle
            epoch_secs: Timestamp in epoch seconds for the log filename
            log_dir: Directory for log files, created if missing
        """
        self._file: Optional[TextIO] = None
        os.makedirs(log_dir, exist_ok=True)
        filename = f"{p1_name}_{p2_name}_{battle_id}_{epoch_secs}.txt"
        self.filepath = os.path.join(log_dir, filename)
        self._file = open(self.filepath, "w")

    def log_event(self, turn_number: int, event: BattleEvent) -> None:
        """Log a battle event.

        Args:
            turn_number: Turn the event belongs to (0 for the battle start)
            event: BattleEvent to log
        """
        if self._file is None:
            return

        log_entry: Dict[str, Any] = {"turn_number": turn_number, "event": event.to_dict()}
        self._file.write(f"{json.dumps(log_entry)}\n")
        self._file.flush()

    def log_events(self, turn_number: int, events: Iterable[BattleEvent]) -> None:
        for event in events:
            self.log_event(turn_number, event)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None
