"""Render and write every page of the site."""

import logging
import os
import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

import database as database_mod
from config import SiteConfig
from database import Database, FileOutcome
from errors import BuildError, OutputError, RenderError, TemplateLoadError
from naming import extract_tags, sanitize, tags, without_tags
from pagination import plan
from rdb import Game
from tags import TAG_DIMENSIONS, TagIndex, index_all

logger = logging.getLogger(__name__)

HOME_TEMPLATE = "home.html"
SYSTEM_TEMPLATE = "systempage.html"
GAME_TEMPLATE = "game.html"
TAG_INDEX_TEMPLATE = "tags.html"
TAG_TEMPLATE = "tag.html"
REQUIRED_TEMPLATES = (HOME_TEMPLATE, SYSTEM_TEMPLATE, GAME_TEMPLATE, TAG_INDEX_TEMPLATE, TAG_TEMPLATE)

PAGE_PREFIX = "index-"
PAGE_EXT = ".html"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

class Templates:
    """Compiled template set, shared read-only by every worker thread."""

    def __init__(self, env: Environment):
        self.env = env
        self._compiled = {}
        for name in sorted(set(env.list_templates(extensions=["html"])) | set(REQUIRED_TEMPLATES)):
            try:
                self._compiled[name] = env.get_template(name)
            except TemplateError as exc:
                raise TemplateLoadError(f"Cannot load template {name}: {exc}") from exc

    def render(self, template: str, /, **context) -> str:
        try:
            return self._compiled[template].render(**context)
        except TemplateError as exc:
            raise RenderError(f"Error rendering {template}: {exc}") from exc


def load_templates(directory: str) -> Templates:
    if not os.path.isdir(directory):
        raise TemplateLoadError(f"Template directory not found: {directory}")
    env = Environment(
        loader=FileSystemLoader(directory),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["clean"] = sanitize
    env.filters["tags"] = tags
    env.filters["without_tags"] = without_tags
    return Templates(env)


# ---------------------------------------------------------------------------
# File output
# ---------------------------------------------------------------------------

def _makedirs(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except (OSError, ValueError) as exc:
        raise OutputError(path, exc) from exc


def _write(path: str, content: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except (OSError, ValueError) as exc:
        raise OutputError(path, exc) from exc


def _link_asset(src: str, out_dir: str) -> None:
    dst = os.path.join(out_dir, os.path.basename(src))
    if os.path.exists(dst):
        return
    if not os.path.isfile(src):
        logger.warning("Broken-image asset %s not found, pages will show no fallback image", src)
        return
    try:
        os.link(src, dst)
    except OSError:
        # Hard links fail across devices; a plain copy serves the same purpose
        try:
            shutil.copy2(src, dst)
        except OSError as exc:
            raise OutputError(dst, exc) from exc


def system_index_name(config: SiteConfig) -> str:
    """File name of the first listing page for a system."""
    if config.paginate:
        return f"{PAGE_PREFIX}0{PAGE_EXT}"
    return "index.html"


def game_filename(game: Game) -> str:
    return sanitize(game.name) + PAGE_EXT


# ---------------------------------------------------------------------------
# Page builders
# ---------------------------------------------------------------------------

def build_home(config: SiteConfig, templates: Templates, db: Database) -> None:
    _makedirs(config.output_dir)
    _link_asset(config.broken_image, config.output_dir)
    content = templates.render(
        HOME_TEMPLATE,
        db=db,
        dimensions=TAG_DIMENSIONS,
        system_index=system_index_name(config),
    )
    _write(os.path.join(config.output_dir, "index.html"), content)


def build_system_pages(config: SiteConfig, templates: Templates, system: str, games: list[Game]) -> int:
    """Write the listing page(s) for one system. Returns the number written."""
    system_dir = os.path.join(config.output_dir, system)
    _makedirs(system_dir)

    if not config.paginate:
        pages = plan(games, max(1, len(games)))
    else:
        pages = plan(games, config.per_page)

    for page in pages:
        if config.paginate:
            filename = f"{PAGE_PREFIX}{page.page}{PAGE_EXT}"
        else:
            filename = "index.html"
        content = templates.render(
            SYSTEM_TEMPLATE,
            system=system,
            games=page.games,
            total=len(games),
            page=page.page,
            last_page=page.last_page,
            page_plan=page,
            paginate=config.paginate,
        )
        _write(os.path.join(system_dir, filename), content)
    return len(pages)


def build_game(config: SiteConfig, templates: Templates, system: str, game: Game) -> None:
    name, game_tags = extract_tags(game.name)
    content = templates.render(
        GAME_TEMPLATE,
        system=system,
        game=game,
        name=name,
        tags=game_tags,
        dimensions=TAG_DIMENSIONS,
        system_index=system_index_name(config),
    )
    _write(os.path.join(config.output_dir, system, game_filename(game)), content)


def build_system_games(config: SiteConfig, templates: Templates, system: str, games: list[Game]) -> int:
    """Write one detail page per game of a system. Runs on a worker thread."""
    _makedirs(os.path.join(config.output_dir, system))
    for game in games:
        build_game(config, templates, system, game)
    return len(games)


def build_tag_index(config: SiteConfig, templates: Templates, dimension: str, index: TagIndex) -> None:
    tag_dir = os.path.join(config.output_dir, dimension)
    _makedirs(tag_dir)
    content = templates.render(TAG_INDEX_TEMPLATE, dimension=dimension, index=index)
    _write(os.path.join(tag_dir, "index.html"), content)


def build_tag_page(config: SiteConfig, templates: Templates, dimension: str, tag: str, games: list[Game]) -> None:
    content = templates.render(
        TAG_TEMPLATE,
        dimension=dimension,
        tag=tag,
        games=games,
        system_index=system_index_name(config),
    )
    _write(os.path.join(config.output_dir, dimension, sanitize(tag) + PAGE_EXT), content)


def build_tag_pages(config: SiteConfig, templates: Templates, db: Database) -> int:
    """Write the index and detail pages for every tag dimension."""
    written = 0
    for dimension, index in index_all(db).items():
        build_tag_index(config, templates, dimension, index)
        for tag, games in index.items():
            build_tag_page(config, templates, dimension, tag, games)
        written += len(index) + 1
    return written


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

@dataclass
class BuildReport:
    systems: int = 0
    index_pages: int = 0
    game_pages: int = 0
    tag_pages: int = 0
    outcomes: list[FileOutcome] = field(default_factory=list)

    @property
    def unreadable(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]


def build(config: SiteConfig) -> BuildReport:
    """Generate the whole site under config.output_dir.

    Listing pages for a system are written before its detail pages are
    handed to a worker, so each worker only ever touches its own system
    directory. Tag pages are written on this thread while the workers run.
    Worker failures are gathered once every worker has finished.
    """
    templates = load_templates(config.templates_dir)

    loaded = database_mod.load(config.database_dir, reverse=config.reverse_order)
    db = loaded.database
    report = BuildReport(systems=len(db), outcomes=loaded.outcomes)
    print(f"  Loaded {len(db)} systems, {sum(len(g) for g in db.values()):,} games")
    for outcome in loaded.failed:
        print(f"  WARNING: {outcome.path} unreadable, built as empty")

    build_home(config, templates, db)

    errors = {}
    workers = config.max_workers or max(1, len(db))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="rdbsite") as executor:
        futures = {}
        for system in sorted(db):
            games = db[system]
            report.index_pages += build_system_pages(config, templates, system, games)
            futures[executor.submit(build_system_games, config, templates, system, games)] = system

        report.tag_pages = build_tag_pages(config, templates, db)

        for future in as_completed(futures):
            system = futures[future]
            try:
                report.game_pages += future.result()
            except Exception as exc:
                logger.error("%s: %s", system, exc)
                errors[system] = exc

    if errors:
        raise BuildError(errors)
    return report
