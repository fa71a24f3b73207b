"""Parser for libretro RDB game databases."""

import logging
from dataclasses import dataclass, replace

import msgpack

logger = logging.getLogger(__name__)

MAGIC = b"RARCHDB\x00"
HEADER_SIZE = 16  # magic + uint64 metadata offset

# RDB key -> Game attribute, for keys stored as text
_TEXT_FIELDS = {
    "name": "name",
    "description": "description",
    "genre": "genre",
    "developer": "developer",
    "publisher": "publisher",
    "franchise": "franchise",
    "origin": "origin",
    "esrb_rating": "esrb_rating",
    "rom_name": "rom_name",
    "serial": "serial",
}

_INT_FIELDS = {
    "releasemonth": "release_month",
    "releaseyear": "release_year",
    "users": "users",
    "size": "size",
}

# Checksums are stored as raw bytes and rendered as hex
_HASH_FIELDS = {
    "crc": "crc32",
    "md5": "md5",
    "sha1": "sha1",
}


@dataclass(frozen=True)
class Game:
    name: str = ""
    description: str = ""
    genre: str = ""
    developer: str = ""
    publisher: str = ""
    franchise: str = ""
    origin: str = ""
    esrb_rating: str = ""
    release_month: int = 0
    release_year: int = 0
    users: int = 0
    serial: str = ""
    rom_name: str = ""
    size: int = 0
    crc32: str = ""
    md5: str = ""
    sha1: str = ""
    system: str = ""


def with_system(game: Game, system: str) -> Game:
    """Return a copy of game stamped with the system it was loaded from."""
    return replace(game, system=system)


def _text(value) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace").strip()
    if value is None:
        return ""
    return str(value).strip()


def _game_from_record(record: dict) -> Game:
    fields = {}
    for key, value in record.items():
        if isinstance(key, bytes):
            key = key.decode("utf-8", errors="replace")
        if key in _TEXT_FIELDS:
            fields[_TEXT_FIELDS[key]] = _text(value)
        elif key in _INT_FIELDS and isinstance(value, int):
            fields[_INT_FIELDS[key]] = value
        elif key in _HASH_FIELDS and isinstance(value, bytes):
            fields[_HASH_FIELDS[key]] = value.hex()
    return Game(**fields)


def parse(system: str, data: bytes) -> list[Game]:
    """Decode every game record in an RDB file, in file order.

    An empty payload is an empty database. A bad header or a corrupt record
    stream is logged and whatever decoded cleanly before it is returned.
    """
    if not data:
        return []
    if data[: len(MAGIC)] != MAGIC:
        logger.warning("%s: not an RDB file (bad magic), skipping", system)
        return []

    unpacker = msgpack.Unpacker(raw=False, strict_map_key=False, unicode_errors="replace")
    unpacker.feed(data[HEADER_SIZE:])

    games = []
    try:
        for record in unpacker:
            # nil terminates the record stream; metadata follows it
            if not isinstance(record, dict):
                break
            games.append(_game_from_record(record))
    except ValueError as exc:
        logger.warning("%s: corrupt record after %d games: %s", system, len(games), exc)
    return games
