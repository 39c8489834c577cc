"""Reading of whole things data files, section by section."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import BinaryIO, Callable

from .binreader import BinaryReader, ThingsError
from .images import Image, read_images as _read_images, skip_images
from .sections import skip_ability, skip_audio, skip_avnt, skip_edge, skip_floor
from .spells import Spell, read_spells as _read_spells, skip_spells
from .things import Thing, read_thing, skip_thing
from .walls import Wall, read_walls as _read_walls, skip_walls

_PADDING = "\x00\x00\x00\x00"

_SKIPPERS: dict[str, Callable[[BinaryReader], None]] = {
    "FLOR": skip_floor,
    "EDGE": skip_edge,
    "WALL": skip_walls,
    "AUD ": skip_audio,
    "AVNT": skip_avnt,
    "SPEL": skip_spells,
    "ABIL": skip_ability,
    "IMAG": skip_images,
    "THNG": skip_thing,
}


@dataclass
class Data:
    """Everything decoded from a things file."""

    images: list[Image] = field(default_factory=list)
    things: list[Thing] = field(default_factory=list)
    spells: list[Spell] = field(default_factory=list)
    walls: list[Wall] = field(default_factory=list)


class Reader:
    """Reader of decrypted things data from a seekable stream or a file path."""

    def __init__(self, stream: BinaryIO | str | os.PathLike[str]) -> None:
        if isinstance(stream, (str, os.PathLike)):
            self._stream: BinaryIO = open(stream, "rb")
            self._owned = True
        else:
            self._stream = stream
            self._owned = False
        self._r = BinaryReader(self._stream)

    def close(self) -> None:
        """Close the file if this reader opened it."""
        if self._owned:
            self._stream.close()

    def __enter__(self) -> Reader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _unsupported(self, sect: str) -> ThingsError:
        return ThingsError(f"unsupported section: {sect!r} (at {self._r.offset()})")

    def _skip_until(self, expected: str) -> bool:
        """Skip sections until the expected one; False when there is none left."""
        r = self._r
        while (sect := r.read_sect()) is not None:
            if sect == expected:
                return True
            if sect == _PADDING:
                r.check_zeros()
                return False
            skipper = _SKIPPERS.get(sect)
            if skipper is None:
                raise self._unsupported(sect)
            skipper(r)
        return False

    def read_all(self) -> Data:
        """Decode every supported section of the file."""
        r = self._r
        r.seek(0)
        data = Data()
        while (sect := r.read_sect()) is not None:
            if sect == "WALL":
                data.walls.extend(_read_walls(r))
            elif sect == "SPEL":
                data.spells = _read_spells(r)
            elif sect == "IMAG":
                data.images.extend(_read_images(r))
            elif sect == "THNG":
                data.things.append(read_thing(r))
            elif sect == _PADDING:
                r.check_zeros()
                break
            else:
                skipper = _SKIPPERS.get(sect)
                if skipper is None:
                    raise self._unsupported(sect)
                skipper(r)
        return data

    def read_images(self) -> list[Image]:
        """All images from every IMAG section."""
        self._r.seek(0)
        out: list[Image] = []
        while self._skip_until("IMAG"):
            out.extend(_read_images(self._r))
        return out

    def read_spells(self) -> list[Spell]:
        """Spells from the first SPEL section."""
        self._r.seek(0)
        if not self._skip_until("SPEL"):
            return []
        return _read_spells(self._r)

    def read_things(self) -> list[Thing]:
        """All thing definitions."""
        self._r.seek(0)
        out: list[Thing] = []
        while self._skip_until("THNG"):
            out.append(read_thing(self._r))
        return out

    def read_walls(self) -> list[Wall]:
        """All wall definitions from every WALL section."""
        self._r.seek(0)
        out: list[Wall] = []
        while self._skip_until("WALL"):
            out.extend(_read_walls(self._r))
        return out