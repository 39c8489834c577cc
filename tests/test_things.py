import io
import struct

import pytest

from noxthings.binreader import BinaryReader, ThingsError
from noxthings.draw import StaticDraw
from noxthings.geometry import Point
from noxthings.images import ImageRef
from noxthings.things import (
    RGB,
    Box,
    Center,
    Circle,
    ProcFunc,
    Thing,
    ZSize,
    fix_thing_attrs,
    parse_thing_attr,
    read_thing,
    skip_thing,
)


class _Buf:
    def __init__(self):
        self.data = bytearray()

    def u8(self, v):
        self.data += struct.pack("<B", v)
        return self

    def i32(self, v):
        self.data += struct.pack("<i", v)
        return self

    def str8(self, s):
        raw = s.encode("latin-1")
        self.u8(len(raw))
        self.data += raw
        return self

    def u64_aligned(self, v):
        self.data += bytes(-len(self.data) % 8)
        self.data += struct.pack("<Q", v)
        return self


def _thing(name, *attrs):
    b = _Buf()
    b.str8(name)
    for attr in attrs:
        if callable(attr):
            attr(b)
        else:
            b.str8(attr)
    b.u8(0)
    return bytes(b.data)


def _reader(data):
    return BinaryReader(io.BytesIO(data))


def test_fix_thing_attrs():
    assert fix_thing_attrs("MASS = 6  DESTROY = DefaultDestroy") == [
        "MASS = 6",
        "DESTROY = DefaultDestroy",
    ]


def test_fix_thing_attrs_single_pair():
    assert fix_thing_attrs(" HEALTH = 10 ") == ["HEALTH = 10"]


def test_read_thing_simple_attrs():
    data = _thing(
        "Apple",
        "HEALTH = 30",
        "mass = .5",
        "CLASS = weapon + missile",
        "EXTENT = CIRCLE 10",
        "SIZE = 5 6",
        "ZSIZE = 0 20",
        "LIGHTCOLOR = 1 2 3",
        "UPDATE = Func a b",
        "WORTH = 100",
        "PRETTYNAME = thing:Apple",
    )
    r = _reader(data)
    th = read_thing(r)
    assert r.offset() == len(data)
    assert th.name == "Apple"
    assert th.health == 30
    assert th.mass == 0.5
    assert th.class_ == ["WEAPON", "MISSILE"]
    assert th.extent == Circle(r=10)
    assert th.size == Point(5, 6)
    assert th.zsize == ZSize(bottom=0, top=20)
    assert th.light_color == RGB(1, 2, 3)
    assert th.on_update == ProcFunc(name="Func", args=["a", "b"])
    assert th.price == 100
    assert th.pretty_name == "thing:Apple"
    assert th.speed is None


def test_read_thing_extents():
    assert read_thing(_reader(_thing("A", "EXTENT = box 3 4"))).extent == Box(w=3, h=4)
    assert read_thing(_reader(_thing("A", "EXTENT = CENTER"))).extent == Center()


def test_read_thing_fixes_combined_attrs():
    th = read_thing(_reader(_thing("Rock", "MASS = 6  DESTROY = DefaultDestroy")))
    assert th.mass == 6.0
    assert th.on_destroy == ProcFunc(name="DefaultDestroy", args=[])


def test_read_thing_menu_icon_and_draw():
    def menu(b):
        b.str8("MENUICON").i32(7)

    def image(b):
        b.str8("PRETTYIMAGE").i32(-1).u8(2).str8("pretty")

    def draw(b):
        b.str8("DRAW").str8("StaticDraw").u64_aligned(0).i32(5)

    data = _thing("Chest", menu, image, draw)
    r = _reader(data)
    th = read_thing(r)
    assert r.offset() == len(data)
    assert th.menu == ImageRef(ind=7)
    assert th.image == ImageRef(ind2=2, name="pretty")
    assert th.draw == StaticDraw(img=ImageRef(ind=5))


def test_skip_thing_consumes_whole_thing():
    def menu(b):
        b.str8("MENUICON").i32(-1).u8(1).str8("icon")

    def draw(b):
        b.str8("DRAW").str8("StaticDraw").u64_aligned(0).i32(5)

    data = _thing("Chest", "HEALTH = 3", menu, draw, "MASS = 2")
    r = _reader(data)
    skip_thing(r)
    assert r.offset() == len(data)


@pytest.mark.parametrize(
    "attr, message",
    [
        ("BOGUS = 1", "unsupported thing attr"),
        ("HEALTH = abc", "cannot parse"),
        ("MENUICON = 3", "unexpected value"),
        ("EXTENT = TRIANGLE 1", "unsupported extent type"),
        ("EXTENT = CIRCLE", "expected one element"),
        ("SIZE = 1", "expected two element"),
        ("LIGHTCOLOR = 1 2 256", "error parsing"),
        ("LIGHTCOLOR = 1 2", "expected three element"),
    ],
)
def test_read_thing_errors(attr, message):
    with pytest.raises(ThingsError, match=message):
        read_thing(_reader(_thing("Bad", attr)))


def test_parse_thing_attr():
    th = Thing(name="x")
    assert parse_thing_attr(th, "WORTH", "100") is True
    assert th.price == 100
    assert parse_thing_attr(th, "FLAGS", " a+ b ") is True
    assert th.flags == ["A", "B"]
    assert parse_thing_attr(th, "NOPE", "1") is False


def test_parse_thing_attr_errors():
    th = Thing(name="x")
    with pytest.raises(ThingsError):
        parse_thing_attr(th, "HEALTH", "1.5")
    with pytest.raises(ThingsError):
        parse_thing_attr(th, "MASS", "heavy")
    with pytest.raises(ThingsError):
        parse_thing_attr(th, "MENUICON", "1")
    with pytest.raises(ThingsError):
        parse_thing_attr(th, "UPDATE", "")