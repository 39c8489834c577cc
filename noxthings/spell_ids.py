"""Spell phonemes, spell flags and spell identifiers."""

from __future__ import annotations

from enum import IntEnum, IntFlag
from typing import Any

from .binreader import ThingsError

PHONEME_MAX = 9


class Phoneme(IntEnum):
    """One gesture of a spell incantation."""

    KA = 0  # upper-left
    UN = 1  # up
    IN = 2  # upper-right
    ET = 3  # left
    END = 4
    CHA = 5  # right
    RO = 6  # lower-left
    ZO = 7  # down
    DO = 8  # lower-right

    def __str__(self) -> str:
        return _PHONEME_NAMES[self]

    @classmethod
    def parse(cls, text: str) -> Phoneme:
        """Parse a phoneme name, ignoring case; an empty name is the end mark."""
        try:
            return _PHONEME_BY_NAME[text.lower()]
        except KeyError:
            raise ThingsError(f"unknown spell phoneme: {text!r}") from None

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, value: Any) -> Phoneme:
        """Accept a phoneme name or its numeric code."""
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value < PHONEME_MAX:
                return cls(value)
            raise ThingsError(f"invalid phoneme: {value}")
        raise ThingsError(f"invalid phoneme value: {value!r}")


_PHONEME_NAMES = {
    Phoneme.KA: "ka",
    Phoneme.UN: "un",
    Phoneme.IN: "in",
    Phoneme.ET: "et",
    Phoneme.END: "!",
    Phoneme.CHA: "cha",
    Phoneme.RO: "ro",
    Phoneme.ZO: "zo",
    Phoneme.DO: "do",
}
_PHONEME_BY_NAME = {name: ph for ph, name in _PHONEME_NAMES.items()}
_PHONEME_BY_NAME[""] = Phoneme.END


class SpellFlags(IntFlag):
    """Bit flags describing how a spell behaves."""

    UNK1 = 0x1
    DURATION = 0x2
    TARGETED = 0x4
    AT_LOCATION = 0x8
    MOBS_CAN_CAST = 0x10
    OFFENSIVE = 0x20
    UNK7 = 0x40
    UNK8 = 0x80
    INSTANT = 0x100
    DEFENSIVE = 0x200
    UNK11 = 0x400
    UNK12 = 0x800
    SUMMON_MAIN = 0x1000
    SUMMON_CREATURE = 0x2000
    MARK_MAIN = 0x4000
    MARK_NUMBER = 0x8000
    GOTO_MARK_MAIN = 0x10000
    GOTO_MARK_NUMBER = 0x20000
    CAN_COUNTER = 0x40000
    CANT_HOLD_CROWN = 0x80000
    UNK21 = 0x100000
    CANT_TARGET_SELF = 0x200000
    NO_TRAP = 0x400000
    NO_MANA = 0x800000
    CLASS_ANY = 0x1000000
    CLASS_WIZARD = 0x2000000
    CLASS_CONJURER = 0x4000000
    UNK28 = 0x8000000
    UNK29 = 0x10000000
    UNK30 = 0x20000000
    UNK31 = 0x40000000
    UNK32 = 0x80000000

    def split(self) -> list[SpellFlags]:
        """Single-bit flags set in this value, lowest first."""
        value = int(self)
        return [SpellFlags(1 << bit) for bit in range(32) if value & (1 << bit)]

    def has(self, other: SpellFlags) -> bool:
        """Whether any of the given bits are set."""
        return bool(int(self) & int(other))

    def __str__(self) -> str:
        value = int(self)
        if value == 0:
            return ""
        parts = self.split()
        if len(parts) > 1:
            return " | ".join(str(p) for p in parts)
        return _FLAG_NAMES.get(value) or f"SpellFlags({value})"

    @classmethod
    def parse(cls, text: str) -> SpellFlags:
        """Parse one flag name, accepting the legacy aliases."""
        try:
            return _FLAG_BY_NAME[text]
        except KeyError:
            raise ThingsError(f"unknown spell flag: {text!r}") from None

    def to_json(self) -> Any:
        """0, a single name or number, or a list of names and numbers."""
        if int(self) == 0:
            return 0
        out = [_FLAG_NAMES.get(int(f)) or int(f) for f in self.split()]
        return out[0] if len(out) == 1 else out

    @classmethod
    def from_json(cls, value: Any) -> SpellFlags:
        """Accept a number, a flag name, or a list of either."""
        if isinstance(value, list):
            result = cls(0)
            for item in value:
                result |= cls._from_scalar(item)
            return result
        return cls._from_scalar(value)

    @classmethod
    def _from_scalar(cls, value: Any) -> SpellFlags:
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value < 1 << 32:
                return cls(value)
            raise ThingsError(f"spell flags out of range: {value}")
        raise ThingsError(f"invalid spell flags value: {value!r}")


_FLAG_NAMES = {
    SpellFlags.DURATION: "DURATION",
    SpellFlags.TARGETED: "TARGETED",
    SpellFlags.AT_LOCATION: "AT_LOCATION",
    SpellFlags.MOBS_CAN_CAST: "MOBS_CAN_CAST",
    SpellFlags.OFFENSIVE: "OFFENSIVE",
    SpellFlags.INSTANT: "INSTANT",
    SpellFlags.DEFENSIVE: "DEFENSIVE",
    SpellFlags.SUMMON_MAIN: "SUMMON_SPELL",
    SpellFlags.SUMMON_CREATURE: "SUMMON_CREATURE",
    SpellFlags.MARK_MAIN: "MARK_SPELL",
    SpellFlags.MARK_NUMBER: "MARK_NUMBER",
    SpellFlags.GOTO_MARK_MAIN: "GOTO_MARK_SPELL",
    SpellFlags.GOTO_MARK_NUMBER: "GOTO_MARK_NUMBER",
    SpellFlags.CAN_COUNTER: "CAN_COUNTER",
    SpellFlags.CANT_HOLD_CROWN: "CANT_HOLD_CROWN",
    SpellFlags.CANT_TARGET_SELF: "CANT_TARGET_SELF",
    SpellFlags.NO_TRAP: "NO_TRAP",
    SpellFlags.NO_MANA: "NO_MANA",
    SpellFlags.CLASS_ANY: "CLASS_ANY",
    SpellFlags.CLASS_WIZARD: "CLASS_WIZARD",
    SpellFlags.CLASS_CONJURER: "CLASS_CONJURER",
}
_FLAG_NAMES = {int(k): v for k, v in _FLAG_NAMES.items()}

_FLAG_BY_NAME = {name: SpellFlags(value) for value, name in _FLAG_NAMES.items()}
_FLAG_BY_NAME.update(
    {
        "TARGET_FOE": SpellFlags.TARGETED,
        "TARGET_POINT": SpellFlags.AT_LOCATION,
        "CANCELS_PROTECT": SpellFlags.OFFENSIVE,
        "AUTO_TRACK": SpellFlags.DEFENSIVE,
        "SUMMON": SpellFlags.SUMMON_CREATURE,
        "COMMON_USE": SpellFlags.CLASS_ANY,
        "WIS_USE": SpellFlags.CLASS_WIZARD,
        "CON_USE": SpellFlags.CLASS_CONJURER,
    }
)


class SpellID(IntEnum):
    """Numeric identifier of a spell; its text form carries a SPELL_ prefix."""

    INVALID = 0
    ANCHOR = 1
    ARACHNAPHOBIA = 2
    BLIND = 3
    BLINK = 4
    BURN = 5
    CANCEL = 6
    CHAIN_LIGHTNING_BOLT = 7
    CHANNEL_LIFE = 8
    CHARM = 9
    CLEANSING_FLAME = 10
    CLEANSING_MANA_FLAME = 11
    CONFUSE = 12
    COUNTERSPELL = 13
    CURE_POISON = 14
    DEATH = 15
    DEATH_RAY = 16
    DETECT_MAGIC = 17
    DETONATE = 18
    DETONATE_GLYPHS = 19
    DISENCHANT_ALL = 20
    TURN_UNDEAD = 21
    DRAIN_MANA = 22
    EARTHQUAKE = 23
    LIGHTNING = 24
    EXPLOSION = 25
    FEAR = 26
    FIREBALL = 27
    FIREWALK = 28
    FIST = 29
    FORCE_FIELD = 30
    FORCE_OF_NATURE = 31
    FREEZE = 32
    FUMBLE = 33
    GLYPH = 34
    GREATER_HEAL = 35
    HASTE = 36
    INFRAVISION = 37
    INVERSION = 38
    INVISIBILITY = 39
    INVULNERABILITY = 40
    LESSER_HEAL = 41
    LIGHT = 42
    CHAIN_LIGHTNING = 43
    LOCK = 44
    MARK = 45
    MARK_1 = 46
    MARK_2 = 47
    MARK_3 = 48
    MARK_4 = 49
    MAGIC_MISSILE = 50
    SHIELD = 51
    METEOR = 52
    METEOR_SHOWER = 53
    MOONGLOW = 54
    NULLIFY = 55
    MANA_BOMB = 56
    PHANTOM = 57
    PIXIE_SWARM = 58
    PLASMA = 59
    POISON = 60
    PROTECTION_FROM_ELECTRICITY = 61
    PROTECTION_FROM_FIRE = 62
    PROTECTION_FROM_MAGIC = 63
    PROTECTION_FROM_POISON = 64
    PULL = 65
    PUSH = 66
    OVAL_SHIELD = 67
    RESTORE_HEALTH = 68
    RESTORE_MANA = 69
    RUN = 70
    SHOCK = 71
    SLOW = 72
    SMALL_ZAP = 73
    STUN = 74
    SUMMON_BAT = 75
    SUMMON_BLACK_BEAR = 76
    SUMMON_BEAR = 77
    SUMMON_BEHOLDER = 78
    SUMMON_BOMBER = 79
    SUMMON_CARNIVOROUS_PLANT = 80
    SUMMON_ALBINO_SPIDER = 81
    SUMMON_SMALL_ALBINO_SPIDER = 82
    SUMMON_EVIL_CHERUB = 83
    SUMMON_EMBER_DEMON = 84
    SUMMON_GHOST = 85
    SUMMON_GIANT_LEECH = 86
    SUMMON_IMP = 87
    SUMMON_MECHANICAL_FLYER = 88
    SUMMON_MECHANICAL_GOLEM = 89
    SUMMON_MIMIC = 90
    SUMMON_OGRE = 91
    SUMMON_OGRE_BRUTE = 92
    SUMMON_OGRE_WARLORD = 93
    SUMMON_SCORPION = 94
    SUMMON_SHADE = 95
    SUMMON_SKELETON = 96
    SUMMON_SKELETON_LORD = 97
    SUMMON_SPIDER = 98
    SUMMON_SMALL_SPIDER = 99
    SUMMON_SPITTING_SPIDER = 100
    SUMMON_STONE_GOLEM = 101
    SUMMON_TROLL = 102
    SUMMON_URCHIN = 103
    SUMMON_WASP = 104
    SUMMON_WILLOWISP = 105
    SUMMON_WOLF = 106
    SUMMON_BLACK_WOLF = 107
    SUMMON_WHITE_WOLF = 108
    SUMMON_ZOMBIE = 109
    SUMMON_VILE_ZOMBIE = 110
    SUMMON_DEMON = 111
    SUMMON_LICH = 112
    SUMMON_DRYAD = 113
    SUMMON_URCHIN_SHAMAN = 114
    SWAP = 115
    TAG = 116
    TELEPORT_OTHER_TO_MARK_1 = 117
    TELEPORT_OTHER_TO_MARK_2 = 118
    TELEPORT_OTHER_TO_MARK_3 = 119
    TELEPORT_OTHER_TO_MARK_4 = 120
    TELEPORT_POP = 121
    TELEPORT_TO_MARK_1 = 122
    TELEPORT_TO_MARK_2 = 123
    TELEPORT_TO_MARK_3 = 124
    TELEPORT_TO_MARK_4 = 125
    TELEPORT_TO_TARGET = 126
    TELEKINESIS = 127
    TOXIC_CLOUD = 128
    TRIGGER_GLYPH = 129
    VAMPIRISM = 130
    VILLAIN = 131
    WALL = 132
    WINK = 133
    SUMMON_CREATURE = 134
    MARK_LOCATION = 135
    TELEPORT_TO_MARKER = 136

    def __str__(self) -> str:
        return _SPELL_PREFIX + self.name

    def valid(self) -> bool:
        """Whether this is a real spell rather than the invalid placeholder."""
        return self != SpellID.INVALID


_SPELL_PREFIX = "SPELL_"


def parse_spell_id(name: str) -> SpellID:
    """Look up a spell by its SPELL_ name; unknown names give SpellID.INVALID."""
    if not name.startswith(_SPELL_PREFIX):
        return SpellID.INVALID
    return SpellID.__members__.get(name[len(_SPELL_PREFIX):], SpellID.INVALID)