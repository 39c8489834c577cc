# noxthings

A library that reads the **decrypted** `thing.bin` data of the game Nox.
The data is a sequence of four-byte tagged sections: `FLOR`, `EDGE`, `WALL`,
`AUD `, `AVNT`, `SPEL`, `ABIL`, `IMAG` and `THNG`. The library decodes images,
spells, walls and thing (object) definitions. It steps over the other
sections without decoding them.

## Installation

```
pip install noxthings
```

## Reading data

`noxthings.reader.Reader` takes either a seekable binary stream or a file
path. When it is given a path it opens the file itself, and `close()` (or
leaving the `with` block) closes it again.

```python
from noxthings.reader import Reader

with Reader("thing.dec") as r:
    data = r.read_all()
    print(len(data.images), len(data.things), len(data.spells), len(data.walls))

    for spell in r.read_spells():
        print(spell.id, spell.mana_cost, spell.flags)

    for thing in r.read_things():
        print(thing.name, thing.health, thing.draw)
```

`read_all()` returns a `Data` object with `images`, `things`, `spells` and
`walls`. It stops at the end of the data or at a zero padding tag.
`read_images()`, `read_spells()`, `read_things()` and `read_walls()` each
scan from the start and skip every other section. `read_spells()` returns
only the spells of the first `SPEL` section.

Malformed data raises `noxthings.binreader.ThingsError`. Data that ends in
the middle of a value raises `noxthings.binreader.UnexpectedEOFError`, a
subclass of both `ThingsError` and `EOFError`.

The section-level functions can also be used directly on a
`noxthings.binreader.BinaryReader`. Examples are `images.read_images`,
`spells.read_spells`, `walls.read_walls`, `things.read_thing` and
`draw.read_thing_draw`, together with their `skip_*` counterparts.
`spells.read_spells_section(stream)` and `spells.skip_spells_section(stream)`
work on a stream that holds a bare `SPEL` body.

## Things

A `Thing` holds the attributes found in its `THNG` section. These include
the pretty name, classes, flags, health, size, extent (`Circle`, `Box` or
`Center`), light colour (`RGB`), handler functions (`ProcFunc`), and so on.
`things.fix_thing_attrs` splits a line that holds several `KEY = VALUE`
pairs:

```python
from noxthings.things import fix_thing_attrs

fix_thing_attrs("MASS = 6  DESTROY = DefaultDestroy")
# ['MASS = 6', 'DESTROY = DefaultDestroy']
```

Several draw kinds are decoded into classes from `noxthings.draw`, such as
`StaticDraw`, `DoorDraw`, `AnimateDraw` and `ConditionalAnimateDraw`. The
following kinds are skipped, so `thing.draw` is `None` for them:
`AnimateStateDraw`, `VectorAnimateDraw`, `ReleasedSoulDraw`, `MonsterDraw`,
`MaidenDraw`, `PlayerDraw`, `SlaveDraw`, `BoulderDraw`, `ArrowDraw`,
`WeakArrowDraw` and `HarpoonDraw`.

## Spells

```python
from noxthings.spells import read_spells_yaml, write_spells_yaml
from noxthings.spell_ids import SpellFlags, Phoneme, parse_spell_id

spells = read_spells_yaml("spells.yml")
write_spells_yaml("spells-out.yml", spells)

flags = SpellFlags.from_json(["TARGETED", "OFFENSIVE"])
print(flags.to_json(), flags.has(SpellFlags.OFFENSIVE))  # ['TARGETED', 'OFFENSIVE'] True
print(Phoneme.parse("cha"), parse_spell_id("SPELL_FIREBALL"))  # cha SPELL_FIREBALL
```

`read_spells_yaml` accepts two layouts: a single YAML list, or one spell per
YAML document. `write_spells_yaml` writes one document per spell.
`SpellFlags.parse` also accepts the legacy flag names, such as `TARGET_FOE`
and `WIS_USE`. `parse_spell_id` returns `SpellID.INVALID` for unknown names.

The settings of a missile spell live in `noxthings.missiles`.
`MissilesSpellConf.level(lvl)` returns the effective `MissilesSpell` for a
level, with the defaults filled in. `missiles_for_level(None, lvl)` returns
the defaults alone.

## Geometry helpers

`noxthings.geometry` provides `Point`, `Pointf`, `Rect` and `Rectf`. It also
provides `point2f`, `rect_from_pointsf` and `intersect_rects`;
`intersect_rects` returns `None` when the two rectangles do not overlap.

## What it does not do

- It does not decrypt files. The input must already be decrypted section data.
- It only reads the binary data. It cannot write `thing.bin` data back.
  Writing is available only for spells, and only as YAML.
- The `FLOR`, `EDGE`, `AUD `, `AVNT` and `ABIL` sections are skipped and not decoded.
- There is no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```