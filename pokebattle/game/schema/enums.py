"""Enums for battle state representation."""

from enum import Enum


class Status(Enum):
    """Persistent status conditions. A combatant holds at most one."""

    NONE = "none"
    BURN = "brn"
    PARALYSIS = "par"
    POISON = "psn"
    TOXIC = "tox"
    SLEEP = "slp"
    FREEZE = "frz"

    @classmethod
    def from_name(cls, name: str) -> "Status":
        """Parse a status from its short code or long name.

        Args:
            name: Status string (e.g., "brn", "burn", "bad-poison")

        Returns:
            Status enum value

        Raises:
            ValueError: If the string is not recognized

        Examples:
            >>> Status.from_name("paralysis")
            Status.PARALYSIS
            >>> Status.from_name("tox")
            Status.TOXIC
        """
        mapping = {
            "none": cls.NONE,
            "brn": cls.BURN,
            "burn": cls.BURN,
            "par": cls.PARALYSIS,
            "paralysis": cls.PARALYSIS,
            "paralyze": cls.PARALYSIS,
            "psn": cls.POISON,
            "poison": cls.POISON,
            "tox": cls.TOXIC,
            "toxic": cls.TOXIC,
            "badpoison": cls.TOXIC,
            "slp": cls.SLEEP,
            "sleep": cls.SLEEP,
            "frz": cls.FREEZE,
            "freeze": cls.FREEZE,
        }
        normalized = name.lower().replace("-", "").replace("_", "").replace(" ", "")
        if normalized not in mapping:
            raise ValueError(f"Unknown status: {name}")
        return mapping[normalized]


class Weather(Enum):
    """Field weather conditions."""

    NONE = "none"
    SUN = "sun"
    RAIN = "rain"
    SANDSTORM = "sandstorm"
    SNOW = "snow"


class SideCondition(Enum):
    """Side-specific field conditions."""

    REFLECT = "reflect"
    LIGHT_SCREEN = "lightscreen"

    @classmethod
    def from_name(cls, name: str) -> "SideCondition":
        """Parse a side condition from a name such as "Light Screen" or "light_screen"."""
        normalized = name.lower().replace(" ", "").replace("_", "").replace("-", "")
        for condition in cls:
            if condition.value == normalized:
                return condition
        raise ValueError(f"Unknown side condition: {name}")


class FieldEffect(Enum):
    """Global field effects."""

    TRICK_ROOM = "trickroom"
    GRAVITY = "gravity"


class Stat(Enum):
    """Pokemon stats, including the accuracy and evasion stage-only stats."""

    HP = "hp"
    ATK = "atk"
    DEF = "def"
    SPA = "spa"
    SPD = "spd"
    SPE = "spe"
    ACCURACY = "accuracy"
    EVASION = "evasion"

    @classmethod
    def from_key(cls, key: str) -> "Stat":
        """Parse a stat from a short key, a Showdown label or a long name.

        Examples:
            >>> Stat.from_key("SpA")
            Stat.SPA
            >>> Stat.from_key("special_defense")
            Stat.SPD
        """
        aliases = {
            "attack": cls.ATK,
            "defense": cls.DEF,
            "specialattack": cls.SPA,
            "specialdefense": cls.SPD,
            "speed": cls.SPE,
            "acc": cls.ACCURACY,
            "eva": cls.EVASION,
        }
        normalized = key.lower().replace("_", "").replace(" ", "").replace("-", "")
        if normalized in aliases:
            return aliases[normalized]
        for stat in cls:
            if stat.value == normalized:
                return stat
        raise ValueError(f"Unknown stat: {key}")


# Stats that can carry a stage in battle. HP never does.
BOOSTABLE_STATS = (
    Stat.ATK,
    Stat.DEF,
    Stat.SPA,
    Stat.SPD,
    Stat.SPE,
    Stat.ACCURACY,
    Stat.EVASION,
)


class VolatileCondition(Enum):
    """Temporary combatant conditions that reset on switch."""

    PROTECT = "protect"
    CONFUSION = "confusion"
    FLINCH = "flinch"
    RECHARGE = "recharge"

    @classmethod
    def from_name(cls, name: str) -> "VolatileCondition":
        aliases = {"confuse": cls.CONFUSION, "confused": cls.CONFUSION}
        normalized = name.lower().replace(" ", "").replace("_", "")
        if normalized in aliases:
            return aliases[normalized]
        for condition in cls:
            if condition.value == normalized:
                return condition
        raise ValueError(f"Unknown volatile condition: {name}")


class MoveCategory(Enum):
    """Damage class of a move."""

    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"


class MoveTarget(Enum):
    """Who a move is aimed at."""

    OPPONENT = "opponent"
    SELF = "self"
    ALL = "all"
    ALL_OPPONENTS = "all-opponents"
    ALL_ALLIES = "all-allies"

    def hits_opponent(self) -> bool:
        return self in (MoveTarget.OPPONENT, MoveTarget.ALL, MoveTarget.ALL_OPPONENTS)


class EffectTarget(Enum):
    """Who a secondary effect lands on."""

    USER = "user"
    TARGET = "target"


class BattlePhase(Enum):
    """Lifecycle of a battle instance."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    ENDED = "ended"


# The 18 elemental types, in the order used by the type chart.
POKEMON_TYPES = (
    "normal",
    "fire",
    "water",
    "electric",
    "grass",
    "ice",
    "fighting",
    "poison",
    "ground",
    "flying",
    "psychic",
    "bug",
    "rock",
    "ghost",
    "dragon",
    "dark",
    "steel",
    "fairy",
)
