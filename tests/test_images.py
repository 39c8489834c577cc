import io
import struct

import pytest

from noxthings.binreader import BinaryReader, ThingsError, UnexpectedEOFError
from noxthings.images import (
    Animation,
    AnimationKind,
    Image,
    ImageRef,
    read_animation,
    read_animations8,
    read_image,
    read_image_ref,
    read_image_refs8,
    read_images,
    skip_animation,
    skip_animations8,
    skip_image_ref,
    skip_image_refs8,
    skip_images,
)


def _reader(data: bytes) -> BinaryReader:
    return BinaryReader(io.BytesIO(data))


def _string8(s: str) -> bytes:
    b = s.encode()
    return bytes([len(b)]) + b


def _ref_ind(ind: int) -> bytes:
    return struct.pack("<i", ind)


def _ref_named(ind2: int, name: str) -> bytes:
    return struct.pack("<i", -1) + bytes([ind2]) + _string8(name)


def _animation(field: int, kind: str, frames: list) -> bytes:
    return bytes([len(frames), field]) + _string8(kind) + b"".join(frames)


ALL_KIND_NAMES = ["OneShot", "OneShotRemove", "Loop", "LoopAndFade", "Random", "Slave"]


@pytest.mark.parametrize("name", ALL_KIND_NAMES)
def test_animation_kind_round_trip(name):
    kind = AnimationKind.parse(name)
    assert str(kind) == name
    assert AnimationKind.parse(name.encode()) is kind


def test_animation_kind_values():
    assert AnimationKind.parse("OneShot") == AnimationKind.ONE_SHOT
    assert AnimationKind.parse("Loop") == AnimationKind.LOOP
    assert AnimationKind.parse("Slave") == AnimationKind.SLAVE


def test_animation_kind_unknown():
    with pytest.raises(ThingsError, match="unsupported anim type"):
        AnimationKind.parse("Bounce")


def test_image_ref_json_index():
    ref = ImageRef(ind=1234)
    assert ref.to_json() == 1234
    assert ImageRef.from_json(1234) == ref


def test_image_ref_json_named_round_trip():
    ref = ImageRef(ind2=3, name="SomeImage")
    js = ref.to_json()
    assert js == {"ind": 3, "name": "SomeImage"}
    assert ImageRef.from_json(js) == ref


def test_image_ref_from_json_invalid():
    with pytest.raises(ThingsError):
        ImageRef.from_json("bad")
    with pytest.raises(ThingsError):
        ImageRef.from_json(True)


def test_read_image_ref_by_index():
    assert read_image_ref(_reader(_ref_ind(777))) == ImageRef(ind=777)


def test_read_image_ref_named():
    ref = read_image_ref(_reader(_ref_named(5, "Sparkle")))
    assert ref == ImageRef(ind2=5, name="Sparkle")


@pytest.mark.parametrize("data", [_ref_ind(42), _ref_named(9, "NamedFrame")])
def test_skip_image_ref_consumes_same_bytes(data):
    r = _reader(data)
    skip_image_ref(r)
    assert r.offset() == len(data)


def test_image_refs8():
    data = bytes([3]) + _ref_ind(10) + _ref_named(1, "A") + _ref_ind(20)
    refs = read_image_refs8(_reader(data))
    assert refs == [ImageRef(ind=10), ImageRef(ind2=1, name="A"), ImageRef(ind=20)]
    r = _reader(data)
    skip_image_refs8(r)
    assert r.offset() == len(data)


def test_read_animation():
    data = _animation(4, "LoopAndFade", [_ref_ind(100), _ref_named(2, "Frame")])
    ani = read_animation(_reader(data))
    assert ani == Animation(
        field=4,
        kind=AnimationKind.LOOP_AND_FADE,
        frames=[ImageRef(ind=100), ImageRef(ind2=2, name="Frame")],
    )
    r = _reader(data)
    skip_animation(r)
    assert r.offset() == len(data)


def test_read_animation_bad_kind():
    with pytest.raises(ThingsError):
        read_animation(_reader(_animation(0, "Wobble", [])))


def test_animations8():
    data = (
        bytes([2])
        + _animation(1, "OneShot", [_ref_ind(5)])
        + _animation(2, "Random", [])
    )
    anims = read_animations8(_reader(data))
    assert [a.kind for a in anims] == [AnimationKind.ONE_SHOT, AnimationKind.RANDOM]
    assert anims[0].frames == [ImageRef(ind=5)]
    r = _reader(data)
    skip_animations8(r)
    assert r.offset() == len(data)


def _images_section():
    img1 = _string8("Single") + bytes([1]) + _ref_ind(55)
    img2 = _string8("Anim") + bytes([2]) + _animation(0, "Loop", [_ref_ind(1), _ref_ind(2)])
    return struct.pack("<I", 2) + img1 + img2


def test_read_images():
    images = read_images(_reader(_images_section()))
    assert images == [
        Image(name="Single", img=ImageRef(ind=55)),
        Image(
            name="Anim",
            ani=Animation(field=0, kind=AnimationKind.LOOP, frames=[ImageRef(ind=1), ImageRef(ind=2)]),
        ),
    ]


def test_skip_images_consumes_section():
    data = _images_section()
    r = _reader(data)
    skip_images(r)
    assert r.offset() == len(data)


def test_read_image_invalid_type():
    data = _string8("Broken") + bytes([3])
    with pytest.raises(ThingsError, match="invalid image type"):
        read_image(_reader(data))
    with pytest.raises(ThingsError, match="invalid image type"):
        skip_images(_reader(struct.pack("<I", 1) + data))


def test_read_images_truncated():
    data = struct.pack("<I", 2) + _string8("Single") + bytes([1]) + _ref_ind(55)
    with pytest.raises(UnexpectedEOFError):
        read_images(_reader(data))