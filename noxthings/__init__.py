"""Reader for decrypted Nox thing.bin data: images, spells, walls and thing definitions."""

__version__ = "0.1.0"
__all__ = [
    "binreader",
    "draw",
    "geometry",
    "images",
    "missiles",
    "reader",
    "sections",
    "spell_ids",
    "spells",
    "things",
    "walls",
]