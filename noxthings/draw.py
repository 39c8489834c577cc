"""Draw descriptions attached to things."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .binreader import BinaryReader, ThingsError, UnexpectedEOFError
from .images import (
    Animation,
    ImageRef,
    read_animation,
    read_animations8,
    read_image_ref,
    read_image_refs8,
    skip_animation,
    skip_animations8,
    skip_image_ref,
    skip_image_refs8,
)


class Draw:
    """Base of all decoded draw descriptions."""


@dataclass
class BaseDraw(Draw):
    img: ImageRef = field(default_factory=ImageRef)


@dataclass
class StaticDraw(Draw):
    img: ImageRef = field(default_factory=ImageRef)


@dataclass
class WeaponDraw(Draw):
    img: ImageRef = field(default_factory=ImageRef)


@dataclass
class ArmorDraw(Draw):
    img: ImageRef = field(default_factory=ImageRef)


@dataclass
class StaticRandomDraw(Draw):
    imgs: list[ImageRef] = field(default_factory=list)


@dataclass
class DoorDraw(Draw):
    imgs: list[ImageRef] = field(default_factory=list)


@dataclass
class AnimateDraw(Draw):
    anim: Animation = field(default_factory=Animation)


@dataclass
class GlyphDraw(Draw):
    anim: Animation = field(default_factory=Animation)


@dataclass
class WeaponAnimateDraw(Draw):
    anim: Animation = field(default_factory=Animation)


@dataclass
class ArmorAnimateDraw(Draw):
    anim: Animation = field(default_factory=Animation)


@dataclass
class FlagDraw(Draw):
    anim: Animation = field(default_factory=Animation)


@dataclass
class SphericalShieldDraw(Draw):
    anim: Animation = field(default_factory=Animation)


@dataclass
class SummonEffectDraw(Draw):
    anim: Animation = field(default_factory=Animation)


@dataclass
class ConditionalAnimateDraw(Draw):
    anims: list[Animation] = field(default_factory=list)


@dataclass
class MonsterGeneratorDraw(Draw):
    anims: list[Animation] = field(default_factory=list)


def _skip_anim_complex_header(r: BinaryReader) -> int:
    count = r.read_u8()
    r.skip(1)
    r.skip_bytes8()
    return count


def _skip_refs(r: BinaryReader, count: int) -> None:
    for _ in range(count):
        skip_image_ref(r)


def _skip_vector_draw(r: BinaryReader) -> None:
    count = _skip_anim_complex_header(r)
    _skip_refs(r, 8 * count)


def _skip_state_draw(r: BinaryReader) -> None:
    while True:
        cmd = r.read_sect()
        if cmd is None or cmd == "END ":
            return
        r.skip(4)
        r.skip_bytes8()
        r.skip_bytes8()
        _skip_refs(r, _skip_anim_complex_header(r))


def _skip_monster_draw(r: BinaryReader) -> None:
    while True:
        sect = r.read_sect()
        if sect is None or sect == "END ":
            return
        if sect != "STAT":
            raise ThingsError(f"unsupported player draw sect: {sect!r}")
        r.skip(1)
        r.skip_bytes8()
        r.skip_bytes8()
        _skip_refs(r, 8 * _skip_anim_complex_header(r))


def _skip_player_draw(r: BinaryReader) -> None:
    sect = r.read_sect()
    if sect is None or sect == "END ":
        return
    if sect != "STAT":
        raise ThingsError(f"unsupported player draw sect: {sect!r}")
    while True:
        r.skip_bytes8()
        count = _skip_anim_complex_header(r)
        while True:
            sect = r.read_sect()
            if sect is None:
                raise UnexpectedEOFError("player draw ended without END")
            if sect == "END ":
                return
            if sect == "STAT":
                break
            if sect != "SEQU":
                raise ThingsError(f"unsupported player draw sect: {sect!r}")
            r.skip_bytes8()
            _skip_refs(r, 8 * count)


_SKIP_ONLY: dict[str, Callable[[BinaryReader], None]] = {
    "AnimateStateDraw": _skip_state_draw,
    "VectorAnimateDraw": _skip_vector_draw,
    "ReleasedSoulDraw": _skip_vector_draw,
    "MonsterDraw": _skip_monster_draw,
    "MaidenDraw": _skip_monster_draw,
    "PlayerDraw": _skip_player_draw,
    "SlaveDraw": skip_image_refs8,
    "BoulderDraw": skip_image_refs8,
    "ArrowDraw": skip_image_refs8,
    "WeakArrowDraw": skip_image_refs8,
    "HarpoonDraw": skip_image_refs8,
}

_DECODED: dict[str, tuple[type, Callable, Callable[[BinaryReader], None]]] = {
    "StaticDraw": (StaticDraw, read_image_ref, skip_image_ref),
    "WeaponDraw": (WeaponDraw, read_image_ref, skip_image_ref),
    "ArmorDraw": (ArmorDraw, read_image_ref, skip_image_ref),
    "BaseDraw": (BaseDraw, read_image_ref, skip_image_ref),
    "StaticRandomDraw": (StaticRandomDraw, read_image_refs8, skip_image_refs8),
    "DoorDraw": (DoorDraw, read_image_refs8, skip_image_refs8),
    "AnimateDraw": (AnimateDraw, read_animation, skip_animation),
    "GlyphDraw": (GlyphDraw, read_animation, skip_animation),
    "WeaponAnimateDraw": (WeaponAnimateDraw, read_animation, skip_animation),
    "ArmorAnimateDraw": (ArmorAnimateDraw, read_animation, skip_animation),
    "FlagDraw": (FlagDraw, read_animation, skip_animation),
    "SphericalShieldDraw": (SphericalShieldDraw, read_animation, skip_animation),
    "SummonEffectDraw": (SummonEffectDraw, read_animation, skip_animation),
    "ConditionalAnimateDraw": (ConditionalAnimateDraw, read_animations8, skip_animations8),
    "MonsterGeneratorDraw": (MonsterGeneratorDraw, read_animations8, skip_animations8),
}


def _read_draw_header(r: BinaryReader) -> str:
    name = r.read_string8()
    r.read_u64_align()
    return name


def read_thing_draw(r: BinaryReader) -> Draw | None:
    """Read a draw description; None for kinds that are only skipped."""
    name = _read_draw_header(r)
    decoded = _DECODED.get(name)
    if decoded is not None:
        cls, reader, _ = decoded
        return cls(reader(r))
    skipper = _SKIP_ONLY.get(name)
    if skipper is not None:
        skipper(r)
    return None


def skip_thing_draw(r: BinaryReader) -> None:
    """Skip a draw description."""
    name = _read_draw_header(r)
    decoded = _DECODED.get(name)
    if decoded is not None:
        decoded[2](r)
        return
    skipper = _SKIP_ONLY.get(name)
    if skipper is not None:
        skipper(r)