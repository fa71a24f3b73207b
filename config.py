"""Build settings for rdbsite."""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def _env_int(name: str, default: int | None) -> int | None:
    value = os.environ.get(name)
    if not value:
        return default
    return int(value)


@dataclass(frozen=True)
class SiteConfig:
    """Everything a run needs to know, fixed before any page is written.

    Paths are relative to the working directory the site is built from.
    reverse_order flips each parsed collection before it is stored, which
    changes which games land on which listing page.
    """

    output_dir: str = "build"
    database_dir: str = "database"
    templates_dir: str = "templates"
    broken_image: str = "img-broken.png"
    per_page: int = 24
    port: int = 3003
    reverse_order: bool = True
    paginate: bool = True
    max_workers: int | None = None

    def __post_init__(self):
        if self.per_page < 1:
            raise ValueError(f"per_page must be positive, got {self.per_page}")

    @classmethod
    def from_env(cls) -> "SiteConfig":
        defaults = cls()
        return cls(
            output_dir=os.environ.get("RDBSITE_OUTPUT_DIR", defaults.output_dir),
            database_dir=os.environ.get("RDBSITE_DATABASE_DIR", defaults.database_dir),
            templates_dir=os.environ.get("RDBSITE_TEMPLATES_DIR", defaults.templates_dir),
            broken_image=os.environ.get("RDBSITE_BROKEN_IMAGE", defaults.broken_image),
            per_page=_env_int("RDBSITE_PER_PAGE", defaults.per_page),
            port=_env_int("PORT", defaults.port),
            reverse_order=_env_bool("RDBSITE_REVERSE", defaults.reverse_order),
            paginate=_env_bool("RDBSITE_PAGINATE", defaults.paginate),
            max_workers=_env_int("RDBSITE_WORKERS", defaults.max_workers),
        )
