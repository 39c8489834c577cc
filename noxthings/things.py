"""Thing definitions from the THNG sections of things data."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto

from .binreader import BinaryReader, ThingsError
from .draw import Draw, read_thing_draw, skip_thing_draw
from .geometry import Point
from .images import ImageRef, read_image_ref, skip_image_ref


class Extent:
    """Base of collision extents."""


@dataclass(frozen=True)
class Circle(Extent):
    r: int = 0


@dataclass(frozen=True)
class Box(Extent):
    w: int = 0
    h: int = 0


@dataclass(frozen=True)
class Center(Extent):
    pass


@dataclass(frozen=True)
class RGB:
    r: int = 0
    g: int = 0
    b: int = 0


@dataclass
class ProcFunc:
    """A named handler function with its arguments."""

    name: str
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ZSize:
    bottom: int = 0
    top: int = 0


@dataclass
class Thing:
    """An object type definition."""

    name: str = ""
    pretty_name: str = ""
    description: str = ""
    class_: list[str] = field(default_factory=list)
    sub_class: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)
    menu: ImageRef | None = None
    image: ImageRef | None = None
    health: int | None = None
    speed: int | None = None
    size: Point | None = None
    zsize: ZSize | None = None
    z: int | None = None
    extent: Extent | None = None
    mass: float = 0.0
    weight: int = 0
    price: int | None = None
    carry_cap: int = 0
    lifetime: int = 0
    experience: int = 0
    material: str = ""
    draw: Draw | None = None
    audio_loop: str = ""
    damage_sound: str = ""
    light_intensity: int = 0
    light_direction: int = 0
    light_penumbra: int = 0
    light_color: RGB | None = None
    preprocess: ProcFunc | None = None
    on_create: ProcFunc | None = None
    on_init: ProcFunc | None = None
    on_update: ProcFunc | None = None
    on_damage: ProcFunc | None = None
    on_client_update: ProcFunc | None = None
    on_collide: ProcFunc | None = None
    on_pickup: ProcFunc | None = None
    on_use: ProcFunc | None = None
    on_drop: ProcFunc | None = None
    on_xfer: ProcFunc | None = None
    on_destroy: ProcFunc | None = None
    on_die: ProcFunc | None = None


class _Kind(Enum):
    STR = auto()
    INT = auto()
    FLOAT = auto()
    LIST = auto()
    PROC = auto()
    IMAGE = auto()


_ATTRS: dict[str, tuple[str, _Kind]] = {
    "PRETTYNAME": ("pretty_name", _Kind.STR),
    "DESCRIPTION": ("description", _Kind.STR),
    "CLASS": ("class_", _Kind.LIST),
    "SUBCLASS": ("sub_class", _Kind.LIST),
    "FLAGS": ("flags", _Kind.LIST),
    "MENUICON": ("menu", _Kind.IMAGE),
    "PRETTYIMAGE": ("image", _Kind.IMAGE),
    "HEALTH": ("health", _Kind.INT),
    "SPEED": ("speed", _Kind.INT),
    "Z": ("z", _Kind.INT),
    "MASS": ("mass", _Kind.FLOAT),
    "WEIGHT": ("weight", _Kind.INT),
    "WORTH": ("price", _Kind.INT),
    "CARRYCAPACITY": ("carry_cap", _Kind.INT),
    "LIFETIME": ("lifetime", _Kind.INT),
    "EXPERIENCE": ("experience", _Kind.INT),
    "MATERIAL": ("material", _Kind.STR),
    "AUDIOLOOP": ("audio_loop", _Kind.STR),
    "DAMAGESOUND": ("damage_sound", _Kind.STR),
    "LIGHTINTENSITY": ("light_intensity", _Kind.INT),
    "LIGHTDIRECTION": ("light_direction", _Kind.INT),
    "LIGHTPENUMBRA": ("light_penumbra", _Kind.INT),
    "PREPROCESS": ("preprocess", _Kind.PROC),
    "CREATE": ("on_create", _Kind.PROC),
    "INIT": ("on_init", _Kind.PROC),
    "UPDATE": ("on_update", _Kind.PROC),
    "DAMAGE": ("on_damage", _Kind.PROC),
    "CLIENTUPDATE": ("on_client_update", _Kind.PROC),
    "COLLIDE": ("on_collide", _Kind.PROC),
    "PICKUP": ("on_pickup", _Kind.PROC),
    "USE": ("on_use", _Kind.PROC),
    "DROP": ("on_drop", _Kind.PROC),
    "XFER": ("on_xfer", _Kind.PROC),
    "DESTROY": ("on_destroy", _Kind.PROC),
    "DIE": ("on_die", _Kind.PROC),
}

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")


def _parse_int(key: str, val: str) -> int:
    if not _INT_RE.fullmatch(val):
        raise ThingsError(f"cannot parse {key!r}: invalid syntax {val!r}")
    return int(val)


def _parse_u8(key: str, val: str) -> int:
    if not _UINT_RE.fullmatch(val):
        raise ThingsError(f"error parsing {key!r}: invalid syntax {val!r}")
    v = int(val)
    if v > 0xFF:
        raise ThingsError(f"error parsing {key!r}: value out of range {val!r}")
    return v


def _parse_float(key: str, val: str) -> float:
    if val.startswith("."):
        val = "0" + val
    if not val or "_" in val or val != val.strip():
        raise ThingsError(f"cannot parse {key!r}: invalid syntax {val!r}")
    try:
        return float(val)
    except ValueError:
        raise ThingsError(f"cannot parse {key!r}: invalid syntax {val!r}") from None


def parse_thing_attr(thing: Thing, key: str, val: str) -> bool:
    """Set a simple attribute by its key; False if the key is not known."""
    entry = _ATTRS.get(key)
    if entry is None:
        return False
    name, kind = entry
    if kind is _Kind.PROC:
        parts = val.split()
        if not parts:
            raise ThingsError(f"missing function name for {key!r}")
        value: object = ProcFunc(name=parts[0], args=parts[1:])
    elif kind is _Kind.STR:
        value = val
    elif kind is _Kind.INT:
        value = _parse_int(key, val)
    elif kind is _Kind.FLOAT:
        value = _parse_float(key, val)
    elif kind is _Kind.LIST:
        value = [part.strip().upper() for part in val.split("+")]
    else:
        raise ThingsError(f"unsupported value type for {key!r}")
    setattr(thing, name, value)
    return True


def fix_thing_attrs(attr: str) -> list[str]:
    """Split a line holding several KEY = VALUE pairs into separate pairs."""
    parts = attr.split("=")
    last = len(parts) - 1
    kvs: list[str] = []
    for i, part in enumerate(parts):
        part = part.strip()
        if i in (0, last):
            kvs.append(part)
            continue
        cut = part.rfind(" ")
        if cut < 0:
            kvs.append(part)
        else:
            kvs.extend((part[:cut].strip(), part[cut + 1:].strip()))
    return [" = ".join(kvs[i:i + 2]) for i in range(0, len(kvs), 2)]


def _expect_no_value(key: str, val: str) -> None:
    if val:
        raise ThingsError(f"unexpected value for attr {key!r}: {val!r}")


def _parse_extent(attr: str, key: str, val: str) -> Extent:
    parts = val.split()
    if not parts:
        raise ThingsError(f"unsupported extent type: '' ({attr!r})")
    typ = parts[0].upper()
    args = parts[1:]
    if typ == "CENTER":
        if args:
            raise ThingsError(f"expected zero element for {typ!r}")
        return Center()
    if typ == "CIRCLE":
        if len(args) != 1:
            raise ThingsError(f"expected one element for {typ!r}")
        return Circle(r=_parse_int(key, args[0]))
    if typ == "BOX":
        if len(args) != 2:
            raise ThingsError(f"expected two element for {typ!r}")
        return Box(w=_parse_int(key, args[0]), h=_parse_int(key, args[1]))
    raise ThingsError(f"unsupported extent type: {typ!r} ({attr!r})")


def _apply_attr(r: BinaryReader, thing: Thing, attr: str) -> None:
    raw_key, _, raw_val = attr.partition("=")
    key = raw_key.strip().upper()
    val = raw_val.strip()
    if key == "DRAW":
        _expect_no_value(key, val)
        thing.draw = read_thing_draw(r)
    elif key == "MENUICON":
        _expect_no_value(key, val)
        thing.menu = read_image_ref(r)
    elif key == "PRETTYIMAGE":
        _expect_no_value(key, val)
        thing.image = read_image_ref(r)
    elif key in ("SIZE", "ZSIZE"):
        parts = val.split()
        if len(parts) != 2:
            raise ThingsError(f"expected two element for {key!r}")
        v1, v2 = (_parse_int(key, p) for p in parts)
        if key == "SIZE":
            thing.size = Point(v1, v2)
        else:
            thing.zsize = ZSize(bottom=v1, top=v2)
    elif key == "LIGHTCOLOR":
        parts = val.split()
        if len(parts) != 3:
            raise ThingsError(f"expected three element for {key!r}")
        red, green, blue = (_parse_u8(key, p) for p in parts)
        thing.light_color = RGB(red, green, blue)
    elif key == "EXTENT":
        thing.extent = _parse_extent(attr, key, val)
    elif not parse_thing_attr(thing, key, val):
        raise ThingsError(f"unsupported thing attr: {attr!r}")


def read_thing(r: BinaryReader) -> Thing:
    """Read the body of a THNG section."""
    thing = Thing(name=r.read_string8())
    while attr := r.read_string8():
        # some files hold several pairs on one line
        attrs = fix_thing_attrs(attr) if attr.count("=") > 1 else [attr]
        for item in attrs:
            _apply_attr(r, thing, item)
    return thing


def skip_thing(r: BinaryReader) -> None:
    """Skip the body of a THNG section."""
    r.skip_bytes8()
    while attr := r.read_bytes8():
        name = attr.split(b"=", 1)[0].strip().upper()
        if name == b"DRAW":
            skip_thing_draw(r)
        elif name in (b"MENUICON", b"PRETTYIMAGE"):
            skip_image_ref(r)