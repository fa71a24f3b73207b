"""Load every per-system RDB file in a directory into one database."""

import logging
import os
from dataclasses import dataclass, field

import rdb
from errors import DatabaseError

logger = logging.getLogger(__name__)

DB_MARKER = ".rdb"

Database = dict[str, list[rdb.Game]]


@dataclass
class FileOutcome:
    """What happened to one database file during loading."""

    path: str
    system: str
    count: int = 0
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LoadResult:
    database: Database = field(default_factory=dict)
    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def failed(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]


def system_name(filename: str) -> str:
    """'Nintendo - Game Boy.rdb' -> 'Nintendo - Game Boy'"""
    return filename[: len(filename) - 4]


def _read_bytes(path: str) -> tuple[bytes, OSError | None]:
    try:
        with open(path, "rb") as f:
            return f.read(), None
    except OSError as exc:
        return b"", exc


def load(directory: str, reverse: bool) -> LoadResult:
    """Parse each RDB file in directory, keyed by system name.

    A file that cannot be read is recorded in the outcomes and loaded as an
    empty system rather than aborting the run. reverse flips each parsed
    collection, which decides which games land on which listing page.
    """
    try:
        entries = sorted(os.scandir(directory), key=lambda e: e.name)
    except OSError as exc:
        raise DatabaseError(f"Cannot list database directory {directory}: {exc}") from exc

    result = LoadResult()
    for entry in entries:
        if DB_MARKER not in entry.name or not entry.is_file():
            continue
        system = system_name(entry.name)
        data, error = _read_bytes(entry.path)
        if error is not None:
            logger.warning("Could not read %s, treating as empty: %s", entry.path, error)

        games = rdb.parse(system, data)
        if reverse:
            games.reverse()
        result.database[system] = games
        result.outcomes.append(FileOutcome(entry.path, system, len(games), error))
    return result
