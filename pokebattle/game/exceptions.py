"""Custom exceptions for battle engine errors."""

from typing import Optional


class BattleError(Exception):
    """Base class for all errors raised by the battle engine."""


class ValidationError(BattleError):
    """Raised when a roster is malformed.

    This is fatal to battle start: BattleStateMachine.start() raises it before
    the battle moves to IN_PROGRESS, so a failed start leaves no partial state.
    """


class IllegalChoiceError(BattleError):
    """Raised when a submitted choice cannot be executed.

    The state machine rejects the choice without mutating any state and
    waits for a new submission from the same side.

    Attributes:
        side_id: Side that submitted the choice ("p1" or "p2")
        reason: Human-readable reason for the rejection
    """

    def __init__(self, side_id: str, reason: str):
        """Initialize the IllegalChoiceError.

        Args:
            side_id: Side that submitted the choice
            reason: Why the choice was rejected
        """
        self.side_id = side_id
        self.reason = reason
        super().__init__(f"Illegal choice for {side_id}: {reason}")


class DataNotFoundError(BattleError):
    """Raised when the data provider cannot resolve a species, move, nature or type.

    Attributes:
        kind: Kind of object that was looked up (e.g. "species", "move")
        name: Name that was looked up
    """

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind.capitalize()} not found: {name}")


class DataSchemaError(BattleError):
    """Raised when a static data record does not match the expected schema."""

    def __init__(self, source: str, detail: str, record: Optional[str] = None):
        self.source = source
        self.detail = detail
        self.record = record
        location = f"{source}[{record}]" if record else source
        super().__init__(f"Malformed data in {location}: {detail}")


class InvariantViolationError(BattleError):
    """Raised when engine state breaks an invariant.

    This always indicates a programming defect, never bad user input.
    """
