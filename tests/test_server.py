import threading
from dataclasses import replace
from pathlib import Path

import pytest
import requests

import server
from errors import SiteError


@pytest.fixture
def running(site_config):
    out = Path(site_config.output_dir)
    (out / "Sega - Saturn").mkdir(parents=True)
    (out / "index.html").write_text("<h1>Home</h1>", encoding="utf-8")
    (out / "Sega - Saturn" / "index.html").write_text("<h1>Saturn</h1>", encoding="utf-8")

    httpd = server.make_server(replace(site_config, port=0), host="127.0.0.1")
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()
    thread.join(timeout=5)


def test_serves_root_index(running):
    resp = requests.get(f"{running}/", timeout=5)
    assert resp.status_code == 200
    assert "Home" in resp.text
    assert resp.headers["Cache-Control"] == "no-cache, max-age=0"


def test_directory_resolves_to_index(running):
    resp = requests.get(f"{running}/Sega%20-%20Saturn/", timeout=5)
    assert resp.status_code == 200
    assert "Saturn" in resp.text


def test_missing_file_is_404(running):
    resp = requests.get(f"{running}/nope.html", timeout=5)
    assert resp.status_code == 404


def test_refuses_to_serve_missing_output(site_config):
    with pytest.raises(SiteError):
        server.make_server(site_config)
