import io
import struct

import pytest

from noxthings.binreader import BinaryReader, ThingsError, UnexpectedEOFError
from noxthings.sections import (
    skip_ability,
    skip_audio,
    skip_avnt,
    skip_edge,
    skip_floor,
)


def _reader(data: bytes) -> BinaryReader:
    return BinaryReader(io.BytesIO(data))


def _b8(s: bytes) -> bytes:
    return bytes([len(s)]) + s


def _b16(s: bytes) -> bytes:
    return struct.pack("<H", len(s)) + s


def _ref_ind(ind: int) -> bytes:
    return struct.pack("<i", ind)


def _ref_named(ind2: int, name: bytes) -> bytes:
    return struct.pack("<i", -1) + bytes([ind2]) + _b8(name)


def _tag(name: str) -> bytes:
    return name.encode("latin-1")[::-1]


END = _tag("END ")
TRAILER = b"\xAA\xBB"


def _consumed(fn, body: bytes) -> bool:
    r = _reader(body + TRAILER)
    fn(r)
    return r.offset() == len(body) and r.read(2) == TRAILER


def _ability_entry() -> bytes:
    return (
        _b8(b"ABIL_NAME")
        + b"\x01"
        + _ref_ind(3)
        + _ref_named(2, b"icon")
        + _ref_ind(7)
        + _b8(b"title")
        + _b16(b"a longer description")
        + _b8(b"s1")
        + _b8(b"")
        + _b8(b"s3")
    )


def test_skip_ability_consumes_entries():
    body = struct.pack("<I", 2) + _ability_entry() + _ability_entry()
    assert _consumed(skip_ability, body)


def test_skip_ability_empty():
    assert _consumed(skip_ability, struct.pack("<I", 0))


def test_skip_ability_truncated():
    body = struct.pack("<I", 1) + _ability_entry()[:-2]
    with pytest.raises(UnexpectedEOFError):
        skip_ability(_reader(body))


def _audio_entry() -> bytes:
    return _b8(b"Sound") + bytes(9) + b"\x03abc" + b"\x01z" + b"\x00"


def test_skip_audio_consumes_entries():
    body = struct.pack("<i", 2) + _audio_entry() + _audio_entry()
    assert _consumed(skip_audio, body)


def test_skip_audio_negative_count_reads_only_count():
    assert _consumed(skip_audio, struct.pack("<i", -5))


def test_skip_audio_truncated_chunk():
    body = struct.pack("<i", 1) + _b8(b"x") + bytes(9) + b"\x05ab"
    with pytest.raises(UnexpectedEOFError):
        skip_audio(_reader(body))


def test_skip_avnt_all_kinds():
    body = (
        _b8(b"event")
        + b"\x01a\x02b\x03c\x04d\x05e"
        + b"\x06ab\x09cd\x0aef"
        + b"\x07\x02xy\x01z\x00"
        + b"\x08" + bytes(8)
        + b"\x00"
    )
    assert _consumed(skip_avnt, body)


def test_skip_avnt_unknown_kind():
    body = _b8(b"event") + b"\x0b"
    with pytest.raises(ThingsError, match="unknown AVNT type: 11"):
        skip_avnt(_reader(body))


def test_skip_avnt_negative_kind_is_unknown():
    body = _b8(b"") + b"\xff"
    with pytest.raises(ThingsError, match="unknown AVNT type: -1"):
        skip_avnt(_reader(body))


def _edge(n1: int, n2: int, n3: int, end: bytes = END) -> bytes:
    refs = b"".join(
        _ref_ind(i) if i % 2 else _ref_named(i, b"e")
        for i in range(2 * n1 * (n2 + n3))
    )
    return (
        bytes(4)
        + _b8(b"EdgeName")
        + bytes(9)
        + bytes([n1])
        + bytes(2)
        + bytes([n2, n3])
        + refs
        + end
    )


def test_skip_edge_consumes_images_and_end():
    assert _consumed(skip_edge, _edge(2, 1, 2))


def test_skip_edge_without_images():
    assert _consumed(skip_edge, _edge(0, 3, 3))


def test_skip_edge_wrong_end_tag():
    with pytest.raises(ThingsError, match="expected END"):
        skip_edge(_reader(_edge(1, 1, 0, end=_tag("WALL"))))


def test_skip_edge_missing_end():
    with pytest.raises(UnexpectedEOFError):
        skip_edge(_reader(_edge(1, 0, 1, end=b"")))


def _floor(n1: int, n2: int, n3: int, end: bytes = END) -> bytes:
    refs = b"".join(_ref_named(i, b"f") if i % 3 == 0 else _ref_ind(i) for i in range(n1 * n2 * n3))
    return (
        bytes(4)
        + _b8(b"FloorName")
        + bytes(12)
        + bytes([n1, n2, n3])
        + b"\x00"
        + refs
        + end
    )


def test_skip_floor_consumes_images_and_end():
    assert _consumed(skip_floor, _floor(2, 3, 2))


def test_skip_floor_wrong_end_tag():
    with pytest.raises(ThingsError, match="expected END"):
        skip_floor(_reader(_floor(1, 1, 1, end=_tag("FLOR"))))