"""Skipping of things sections whose contents are not decoded."""

from __future__ import annotations

from .binreader import BinaryReader, ThingsError
from .images import skip_image_ref


def skip_ability(r: BinaryReader) -> None:
    """Skip the body of an ABIL section."""
    for _ in range(r.read_u32()):
        r.skip_bytes8()
        r.skip(1)
        for _ in range(3):
            skip_image_ref(r)
        r.skip_bytes8()
        r.skip_bytes16()
        r.skip_bytes8()
        r.skip_bytes8()
        r.skip_bytes8()


def _skip_chunks(r: BinaryReader) -> None:
    """Skip length-prefixed chunks up to a zero length."""
    while size := r.read_u8():
        r.skip(size)


def skip_audio(r: BinaryReader) -> None:
    """Skip the body of an AUD section; it has no END tag."""
    count = r.read_i32()
    for _ in range(max(count, 0)):
        r.skip_bytes8()
        r.skip(9)
        _skip_chunks(r)


_AVNT_FIXED_SIZES = {1: 1, 2: 1, 3: 1, 4: 1, 5: 1, 6: 2, 9: 2, 10: 2, 8: 8}


def skip_avnt(r: BinaryReader) -> None:
    """Skip the body of an AVNT section."""
    r.skip_bytes8()
    while True:
        kind = r.read_i8()
        if kind == 0:
            return
        if kind == 7:
            _skip_chunks(r)
            continue
        size = _AVNT_FIXED_SIZES.get(kind)
        if size is None:
            raise ThingsError(f"unknown AVNT type: {kind}")
        r.skip(size)


def skip_edge(r: BinaryReader) -> None:
    """Skip the body of an EDGE section, including its END tag."""
    r.skip(4)
    r.skip_bytes8()
    r.skip(2 * 4 + 1)
    n1 = r.read_u8()
    r.skip(2)
    n2 = r.read_u8()
    n3 = r.read_u8()
    for _ in range(2 * n1 * (n2 + n3)):
        skip_image_ref(r)
    r.check_end()


def skip_floor(r: BinaryReader) -> None:
    """Skip the body of a FLOR section, including its END tag."""
    r.skip(4)
    r.skip_bytes8()
    r.skip(3 * 1 + 2 * 4 + 1)
    n1 = r.read_u8()
    n2 = r.read_u8()
    n3 = r.read_u8()
    r.skip(1)
    for _ in range(n1 * n2 * n3):
        skip_image_ref(r)
    r.check_end()