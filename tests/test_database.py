import builtins

import pytest

import database
from errors import DatabaseError


@pytest.fixture
def populated(tmp_path, write_rdb):
    write_rdb("Nintendo - Game Boy", [{"name": "A"}, {"name": "B"}, {"name": "C"}])
    write_rdb("Sega - Game Gear", [{"name": "X"}])
    (tmp_path / "database" / "README.txt").write_text("not a database")
    (tmp_path / "database" / "stale.rdb").mkdir()
    return tmp_path / "database"


def test_system_name_strips_extension():
    assert database.system_name("Nintendo - Game Boy.rdb") == "Nintendo - Game Boy"


def test_load_keeps_parser_order(populated):
    result = database.load(str(populated), reverse=False)
    assert set(result.database) == {"Nintendo - Game Boy", "Sega - Game Gear"}
    assert [g.name for g in result.database["Nintendo - Game Boy"]] == ["A", "B", "C"]
    assert all(o.ok for o in result.outcomes)
    assert {o.system: o.count for o in result.outcomes} == {
        "Nintendo - Game Boy": 3,
        "Sega - Game Gear": 1,
    }


def test_load_reverse_policy(populated):
    result = database.load(str(populated), reverse=True)
    assert [g.name for g in result.database["Nintendo - Game Boy"]] == ["C", "B", "A"]


def test_unreadable_file_becomes_empty_system(populated, monkeypatch):
    real_open = builtins.open
    locked = str(populated / "Sega - Game Gear.rdb")

    def fake_open(path, *args, **kwargs):
        if str(path) == locked:
            raise PermissionError(13, "Permission denied", path)
        return real_open(path, *args, **kwargs)

    monkeypatch.setattr(database, "open", fake_open, raising=False)
    result = database.load(str(populated), reverse=False)

    assert result.database["Sega - Game Gear"] == []
    assert len(result.database["Nintendo - Game Boy"]) == 3
    [failed] = result.failed
    assert failed.system == "Sega - Game Gear"
    assert isinstance(failed.error, PermissionError)


def test_missing_directory_is_fatal(tmp_path):
    with pytest.raises(DatabaseError):
        database.load(str(tmp_path / "nope"), reverse=False)
