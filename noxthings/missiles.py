"""Configuration of missile-launching spells, with per-level overrides."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any

DEFAULT_SPREAD = 16
DEFAULT_PROJECTILE = "MagicMissile"
DEFAULT_OFFSET = 4.0
DEFAULT_VEL_MULT = 0.1
DEFAULT_SPEED_RND_MIN = 0.80000001
DEFAULT_SPEED_RND_MAX = 1.2
DEFAULT_SEARCH_DIST = 600.0


@dataclass
class MissilesSpell:
    """Parameters of a spell that launches missiles; zero means unset."""

    count: int = 0
    spread: int = 0
    projectile: str = ""
    vel_mult: float = 0.0
    offset: float = 0.0
    speed_rnd_min: float = 0.0
    speed_rnd_max: float = 0.0
    search_dist: float = 0.0

    def set_defaults(self) -> None:
        """Fill every unset field except the count with its default."""
        if not self.spread:
            self.spread = DEFAULT_SPREAD
        if not self.projectile:
            self.projectile = DEFAULT_PROJECTILE
        if not self.offset:
            self.offset = DEFAULT_OFFSET
        if not self.vel_mult:
            self.vel_mult = DEFAULT_VEL_MULT
        if not self.speed_rnd_min:
            self.speed_rnd_min = DEFAULT_SPEED_RND_MIN
        if not self.speed_rnd_max:
            self.speed_rnd_max = DEFAULT_SPEED_RND_MAX
        if not self.search_dist:
            self.search_dist = DEFAULT_SEARCH_DIST

    def merge(self, other: MissilesSpell) -> None:
        """Override fields with the set fields of another config (count excluded)."""
        if other.spread:
            self.spread = other.spread
        if other.projectile:
            self.projectile = other.projectile
        if other.offset:
            self.offset = other.offset
        if other.vel_mult:
            self.vel_mult = other.vel_mult
        if other.speed_rnd_min:
            self.speed_rnd_min = other.speed_rnd_min
        if other.speed_rnd_max:
            self.speed_rnd_max = other.speed_rnd_max
        if other.search_dist:
            self.search_dist = other.search_dist

    def to_dict(self) -> dict[str, Any]:
        """Mapping of the set fields only."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MissilesSpell:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class MissilesSpellConf:
    """Base missile parameters plus optional overrides for each spell level."""

    base: MissilesSpell = field(default_factory=MissilesSpell)
    levels: list[MissilesSpell] = field(default_factory=list)

    def level(self, lvl: int) -> MissilesSpell:
        """Effective parameters for a spell level (levels count from 1)."""
        out = replace(self.base)
        out.set_defaults()
        if not self.levels:
            return out
        index = lvl - 1
        if index < 0:
            return out
        out.merge(self.levels[min(index, len(self.levels) - 1)])
        return out

    def to_dict(self) -> dict[str, Any]:
        out = self.base.to_dict()
        if self.levels:
            out["levels"] = [lv.to_dict() for lv in self.levels]
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MissilesSpellConf:
        levels = [MissilesSpell.from_dict(lv) for lv in data.get("levels") or []]
        return cls(base=MissilesSpell.from_dict(data), levels=levels)


def missiles_for_level(conf: MissilesSpellConf | None, lvl: int) -> MissilesSpell:
    """Effective parameters for a level; defaults when there is no config."""
    if conf is None:
        out = MissilesSpell()
        out.set_defaults()
        return out
    return conf.level(lvl)