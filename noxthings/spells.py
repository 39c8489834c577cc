"""Spell definitions: the binary SPEL section and the YAML spell lists."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, BinaryIO, Iterable, Mapping

import yaml

from .binreader import BinaryReader, ThingsError
from .images import ImageRef, read_image_ref, skip_image_ref
from .missiles import MissilesSpellConf
from .spell_ids import PHONEME_MAX, Phoneme, SpellFlags

_NULL_SOUND = "NULL"


class _FlowList(list):
    """A list written in YAML flow style."""


class _SpellDumper(yaml.SafeDumper):
    pass


_SpellDumper.add_representer(
    _FlowList,
    lambda dumper, data: dumper.represent_sequence(
        "tag:yaml.org,2002:seq", list(data), flow_style=True
    ),
)


def _image_ref_to_dict(ref: ImageRef) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if ref.ind:
        out["ind"] = ref.ind
    if ref.ind2:
        out["ind_2"] = ref.ind2
    if ref.name:
        out["name"] = ref.name
    return out


def _image_ref_from_dict(value: Any) -> ImageRef:
    if isinstance(value, int) and not isinstance(value, bool):
        return ImageRef(ind=value)
    if not isinstance(value, Mapping):
        raise ThingsError(f"invalid image reference: {value!r}")
    return ImageRef(
        ind=int(value.get("ind", 0) or 0),
        ind2=int(value.get("ind_2", 0) or 0),
        name=str(value.get("name", "") or ""),
    )


@dataclass
class Spell:
    """A spell definition."""

    id: str = ""
    effect: str = ""
    icon: ImageRef | None = None
    icon_enabled: ImageRef | None = None
    mana_cost: int = 0
    price: int = 0
    flags: SpellFlags = SpellFlags(0)
    phonemes: list[Phoneme] = field(default_factory=list)
    title: str = ""
    desc: str = ""
    cast_sound: str = ""
    on_sound: str = ""
    off_sound: str = ""
    missiles: MissilesSpellConf | None = None

    def to_dict(self) -> dict[str, Any]:
        """Mapping in the layout of the spell YAML files; empty fields are left out."""
        out: dict[str, Any] = {"name": self.id}
        if self.effect:
            out["effect"] = self.effect
        if self.icon is not None:
            out["icon"] = _image_ref_to_dict(self.icon)
        if self.icon_enabled is not None:
            out["icon_enabled"] = _image_ref_to_dict(self.icon_enabled)
        out["mana_cost"] = self.mana_cost
        out["price"] = self.price
        out["flags"] = SpellFlags(self.flags).to_json()
        if self.phonemes:
            out["phonemes"] = [Phoneme(p).to_json() for p in self.phonemes]
        for key in ("title", "desc", "cast_sound", "on_sound", "off_sound"):
            value = getattr(self, key)
            if value:
                out[key] = value
        if self.missiles is not None:
            out["missiles"] = self.missiles.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Spell:
        if not isinstance(data, Mapping):
            raise ThingsError(f"invalid spell definition: {data!r}")
        icon = data.get("icon")
        icon_enabled = data.get("icon_enabled")
        missiles = data.get("missiles")
        return cls(
            id=str(data.get("name", "") or ""),
            effect=str(data.get("effect", "") or ""),
            icon=_image_ref_from_dict(icon) if icon is not None else None,
            icon_enabled=(
                _image_ref_from_dict(icon_enabled) if icon_enabled is not None else None
            ),
            mana_cost=int(data.get("mana_cost", 0) or 0),
            price=int(data.get("price", 0) or 0),
            flags=SpellFlags.from_json(data.get("flags", 0) or 0),
            phonemes=[Phoneme.from_json(p) for p in data.get("phonemes") or []],
            title=str(data.get("title", "") or ""),
            desc=str(data.get("desc", "") or ""),
            cast_sound=str(data.get("cast_sound", "") or ""),
            on_sound=str(data.get("on_sound", "") or ""),
            off_sound=str(data.get("off_sound", "") or ""),
            missiles=MissilesSpellConf.from_dict(missiles) if missiles is not None else None,
        )


def _sound(value: str) -> str:
    return "" if value == _NULL_SOUND else value


def _read_spell(r: BinaryReader) -> Spell:
    spell_id = r.read_string8()
    mana = r.read_u8()
    price = r.read_u16()
    phonemes = []
    for _ in range(r.read_u8()):
        code = r.read_u8()
        if code >= PHONEME_MAX:
            raise ThingsError(f"invalid phoneme: {code}")
        phonemes.append(Phoneme(code))
    icon = read_image_ref(r)
    icon_enabled = read_image_ref(r)
    flags = SpellFlags(r.read_u32())
    title = r.read_string8()
    desc = r.read_string16()
    cast = _sound(r.read_string8())
    on = _sound(r.read_string8())
    off = _sound(r.read_string8())
    return Spell(
        id=spell_id,
        icon=icon,
        icon_enabled=icon_enabled,
        mana_cost=mana,
        price=price,
        flags=flags,
        phonemes=phonemes,
        title=title,
        desc=desc,
        cast_sound=cast,
        on_sound=on,
        off_sound=off,
    )


def read_spells(r: BinaryReader) -> list[Spell]:
    """Read the body of a SPEL section; it has no END tag."""
    return [_read_spell(r) for _ in range(r.read_u32())]


def skip_spells(r: BinaryReader) -> None:
    """Skip the body of a SPEL section, still checking phoneme codes."""
    for _ in range(r.read_u32()):
        r.skip_bytes8()
        r.skip(1 + 2)
        for _ in range(r.read_u8()):
            code = r.read_u8()
            if code >= PHONEME_MAX:
                raise ThingsError(f"invalid spell code: {code}")
        skip_image_ref(r)
        skip_image_ref(r)
        r.skip(4)
        r.skip_bytes8()
        r.skip_bytes16()
        r.skip_bytes8()
        r.skip_bytes8()
        r.skip_bytes8()


def read_spells_section(stream: BinaryIO) -> list[Spell]:
    """Read a SPEL section body from an unencrypted stream."""
    return read_spells(BinaryReader(stream))


def skip_spells_section(stream: BinaryIO) -> None:
    """Skip a SPEL section body in an unencrypted stream."""
    skip_spells(BinaryReader(stream))


def read_spells_yaml(path: str | os.PathLike[str]) -> list[Spell]:
    """Load spells from a YAML list or from a stream of YAML documents."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError:
        doc = None
        single = False
    else:
        single = True
    if single and doc is None:
        return []
    if single and isinstance(doc, list):
        return [Spell.from_dict(item) for item in doc]
    return [Spell.from_dict(item) for item in yaml.safe_load_all(text) if item is not None]


def _yaml_doc(spell: Spell) -> dict[str, Any]:
    doc = spell.to_dict()
    if "phonemes" in doc:
        doc["phonemes"] = _FlowList(doc["phonemes"])
    return doc


def write_spells_yaml(path: str | os.PathLike[str], spells: Iterable[Spell]) -> None:
    """Write spells as a stream of YAML documents, one per spell."""
    docs = [_yaml_doc(sp) for sp in spells]
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump_all(
            docs,
            f,
            Dumper=_SpellDumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )