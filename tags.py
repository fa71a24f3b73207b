"""Cross-system indices of games grouped by a classification field."""

from rdb import Game, with_system

TAG_DIMENSIONS = ("franchise", "developer", "publisher", "genre", "origin")

TagIndex = dict[str, list[Game]]


def index_by_tag(database: dict[str, list[Game]], dimension: str) -> TagIndex:
    """Group every game that has a value for dimension under that value.

    Games are stamped with their system on the way in; the database itself
    is left untouched. Games with an empty value are left out entirely.
    """
    if dimension not in TAG_DIMENSIONS:
        raise ValueError(f"Unknown tag dimension {dimension!r}, expected one of {TAG_DIMENSIONS}")

    index: TagIndex = {}
    for system, games in database.items():
        for game in games:
            value = getattr(game, dimension)
            if not value:
                continue
            index.setdefault(value, []).append(with_system(game, system))
    return index


def index_all(database: dict[str, list[Game]]) -> dict[str, TagIndex]:
    return {dimension: index_by_tag(database, dimension) for dimension in TAG_DIMENSIONS}
