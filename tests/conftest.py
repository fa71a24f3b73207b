import struct
from pathlib import Path

import msgpack
import pytest

from config import SiteConfig
from rdb import MAGIC

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
BROKEN_IMAGE = Path(__file__).resolve().parents[1] / "img-broken.png"


def rdb_bytes(records: list[dict]) -> bytes:
    body = b"".join(msgpack.packb(r) for r in records) + msgpack.packb(None)
    header = MAGIC + struct.pack(">Q", len(MAGIC) + 8 + len(body))
    return header + body + msgpack.packb({"count": len(records)})


@pytest.fixture
def write_rdb(tmp_path: Path):
    db_dir = tmp_path / "database"
    db_dir.mkdir(exist_ok=True)

    def _write(system: str, records: list[dict]) -> Path:
        path = db_dir / f"{system}.rdb"
        path.write_bytes(rdb_bytes(records))
        return path

    return _write


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    return SiteConfig(
        output_dir=str(tmp_path / "build"),
        database_dir=str(tmp_path / "database"),
        templates_dir=str(TEMPLATES_DIR),
        broken_image=str(BROKEN_IMAGE),
        per_page=2,
        reverse_order=False,
    )
