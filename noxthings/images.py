"""Image references, animations and image sections of things data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from .binreader import TEXT_ENCODING, BinaryReader, ThingsError


class AnimationKind(IntEnum):
    """How an animation is played."""

    ONE_SHOT = 0
    ONE_SHOT_REMOVE = 1
    LOOP = 2
    LOOP_AND_FADE = 3
    RANDOM = 4
    SLAVE = 5

    def __str__(self) -> str:
        return _KIND_NAMES[self]

    @classmethod
    def parse(cls, text: str | bytes) -> AnimationKind:
        """Parse the textual name used in the data files."""
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode(TEXT_ENCODING)
        try:
            return _KIND_BY_NAME[text]
        except KeyError:
            raise ThingsError(f"unsupported anim type: {text!r}") from None


_KIND_NAMES = {
    AnimationKind.ONE_SHOT: "OneShot",
    AnimationKind.ONE_SHOT_REMOVE: "OneShotRemove",
    AnimationKind.LOOP: "Loop",
    AnimationKind.LOOP_AND_FADE: "LoopAndFade",
    AnimationKind.RANDOM: "Random",
    AnimationKind.SLAVE: "Slave",
}
_KIND_BY_NAME = {name: kind for kind, name in _KIND_NAMES.items()}


@dataclass(frozen=True)
class ImageRef:
    """Reference to an image, either by index or by name."""

    ind: int = 0
    ind2: int = 0
    name: str = ""

    def to_json(self) -> Any:
        """A bare index, or an object with the secondary index and name."""
        if self.ind != 0:
            return self.ind
        out: dict[str, Any] = {}
        if self.ind2 != 0:
            out["ind"] = self.ind2
        if self.name:
            out["name"] = self.name
        return out

    @classmethod
    def from_json(cls, value: Any) -> ImageRef:
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(ind=value)
        if isinstance(value, dict):
            ind2 = value.get("ind", 0)
            name = value.get("name", "")
            if not isinstance(ind2, int) or isinstance(ind2, bool):
                raise ThingsError(f"invalid image index: {ind2!r}")
            if not isinstance(name, str):
                raise ThingsError(f"invalid image name: {name!r}")
            return cls(ind2=ind2, name=name)
        raise ThingsError(f"invalid image reference: {value!r}")


@dataclass
class Animation:
    """A sequence of frames with a playback kind."""

    field: int = 0
    kind: AnimationKind = AnimationKind.ONE_SHOT
    frames: list[ImageRef] = field(default_factory=list)


@dataclass
class Image:
    """A named image: either a single reference or an animation."""

    name: str
    img: ImageRef | None = None
    ani: Animation | None = None


def read_image_ref(r: BinaryReader) -> ImageRef:
    ind = r.read_i32()
    if ind != -1:
        return ImageRef(ind=ind)
    ind2 = r.read_u8()
    name = r.read_string8()
    return ImageRef(ind2=ind2, name=name)


def skip_image_ref(r: BinaryReader) -> None:
    if r.read_i32() != -1:
        return
    r.skip(1)
    r.skip_bytes8()


def read_image_refs8(r: BinaryReader) -> list[ImageRef]:
    return [read_image_ref(r) for _ in range(r.read_u8())]


def skip_image_refs8(r: BinaryReader) -> None:
    for _ in range(r.read_u8()):
        skip_image_ref(r)


def read_animation(r: BinaryReader) -> Animation:
    count = r.read_u8()
    field_value = r.read_u8()
    kind = AnimationKind.parse(r.read_bytes8())
    frames = [read_image_ref(r) for _ in range(count)]
    return Animation(field=field_value, kind=kind, frames=frames)


def skip_animation(r: BinaryReader) -> None:
    count = r.read_u8()
    r.skip(1)
    r.skip_bytes8()
    for _ in range(count):
        skip_image_ref(r)


def read_animations8(r: BinaryReader) -> list[Animation]:
    return [read_animation(r) for _ in range(r.read_u8())]


def skip_animations8(r: BinaryReader) -> None:
    for _ in range(r.read_u8()):
        skip_animation(r)


def read_image(r: BinaryReader) -> Image:
    name = r.read_string8()
    typ = r.read_i8()
    if typ == 1:
        return Image(name=name, img=read_image_ref(r))
    if typ == 2:
        return Image(name=name, ani=read_animation(r))
    raise ThingsError(f"invalid image type: {typ}")


def read_images(r: BinaryReader) -> list[Image]:
    """Read the body of an IMAG section."""
    return [read_image(r) for _ in range(r.read_u32())]


def skip_images(r: BinaryReader) -> None:
    """Skip the body of an IMAG section."""
    for _ in range(r.read_u32()):
        r.skip_bytes8()
        typ = r.read_i8()
        if typ == 1:
            skip_image_ref(r)
        elif typ == 2:
            skip_animation(r)
        else:
            raise ThingsError(f"invalid image type: {typ}")