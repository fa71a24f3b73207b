import pytest

from config import SiteConfig


def test_defaults():
    config = SiteConfig()
    assert config.output_dir == "build"
    assert config.per_page == 24
    assert config.port == 3003
    assert config.reverse_order is True


def test_from_env(monkeypatch):
    monkeypatch.setenv("RDBSITE_OUTPUT_DIR", "/tmp/site")
    monkeypatch.setenv("RDBSITE_PER_PAGE", "10")
    monkeypatch.setenv("RDBSITE_REVERSE", "0")
    monkeypatch.setenv("RDBSITE_PAGINATE", "false")
    monkeypatch.setenv("PORT", "8080")
    config = SiteConfig.from_env()
    assert config.output_dir == "/tmp/site"
    assert config.per_page == 10
    assert config.reverse_order is False
    assert config.paginate is False
    assert config.port == 8080


def test_config_is_frozen():
    config = SiteConfig()
    with pytest.raises(AttributeError):
        config.per_page = 5


def test_per_page_must_be_positive():
    with pytest.raises(ValueError):
        SiteConfig(per_page=0)


def test_default_paths_are_relative_to_working_directory():
    config = SiteConfig()
    assert config.templates_dir == "templates"
    assert config.broken_image == "img-broken.png"
    assert config.database_dir == "database"
