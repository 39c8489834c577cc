"""Wall definitions from the WALL section of things data."""

from __future__ import annotations

from dataclasses import dataclass, field

from .binreader import BinaryReader
from .geometry import Point
from .images import ImageRef, read_image_ref, skip_image_ref

WALL_DIRECTIONS = 15
IMAGES_PER_VARIANT = 4


@dataclass(frozen=True)
class WallImage:
    """One image of a wall variant with its drawing offset."""

    pt: Point = field(default_factory=Point)
    img: ImageRef = field(default_factory=ImageRef)


def _empty_images() -> tuple[WallImage, ...]:
    return tuple(WallImage() for _ in range(IMAGES_PER_VARIANT))


@dataclass
class WallVariant:
    """A visual variant of a wall piece: four images."""

    images: tuple[WallImage, ...] = field(default_factory=_empty_images)


@dataclass
class WallDirection:
    """All variants of a wall for one direction."""

    variants: list[WallVariant] = field(default_factory=list)


def _empty_directions() -> list[WallDirection]:
    return [WallDirection() for _ in range(WALL_DIRECTIONS)]


@dataclass
class Wall:
    """A wall type definition."""

    name: str = ""
    unk1: int = 0
    unk2: int = 0
    unk3: int = 0
    unk4: int = 0
    open_sound: str = ""
    close_sound: str = ""
    break_sound: str = ""
    directions: list[WallDirection] = field(default_factory=_empty_directions)


def _read_variant(r: BinaryReader) -> WallVariant:
    images = []
    for _ in range(IMAGES_PER_VARIANT):
        x = r.read_i32()
        y = r.read_i32()
        images.append(WallImage(pt=Point(x, y), img=read_image_ref(r)))
    return WallVariant(images=tuple(images))


def _read_wall(r: BinaryReader) -> Wall:
    name = r.read_string8()
    unk1 = r.read_u32()
    unk2 = r.read_u32()
    unk3 = r.read_u32()
    unk4 = r.read_u16()
    for _ in range(r.read_u64_align()):
        r.read_string8()  # debris object names, not kept
    open_sound = r.read_string8()
    close_sound = r.read_string8()
    break_sound = r.read_string8()
    r.read_u8()  # variations count hint
    directions = []
    for _ in range(WALL_DIRECTIONS):
        count = r.read_u64_align()
        directions.append(WallDirection([_read_variant(r) for _ in range(count)]))
    return Wall(
        name=name,
        unk1=unk1,
        unk2=unk2,
        unk3=unk3,
        unk4=unk4,
        open_sound=open_sound,
        close_sound=close_sound,
        break_sound=break_sound,
        directions=directions,
    )


def read_walls(r: BinaryReader) -> list[Wall]:
    """Read the body of a WALL section, including its END tag."""
    walls = [_read_wall(r) for _ in range(r.read_u32())]
    r.check_end()
    return walls


def skip_walls(r: BinaryReader) -> None:
    """Skip the body of a WALL section, including its END tag."""
    r.skip(4)
    r.skip_bytes8()
    r.skip(3 * 4 + 2 * 1)
    for _ in range(r.read_u64_align() & 0xFF):
        r.skip_bytes8()
    for _ in range(3):
        r.skip_bytes8()
    r.skip(1)
    for _ in range(WALL_DIRECTIONS):
        count = r.read_u64_align() & 0xFF
        for _ in range(count * IMAGES_PER_VARIANT):
            r.skip(2 * 4)
            skip_image_ref(r)
    r.check_end()