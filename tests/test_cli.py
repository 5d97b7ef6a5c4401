from __future__ import annotations

import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

from cli import doctor
from cli import main as cli_main
from cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _wide_console(monkeypatch):
    # Las tablas Rich no deben truncar celdas en la salida capturada.
    monkeypatch.setattr(cli_main, "_console", Console(width=200))
    monkeypatch.setattr(doctor, "_console", Console(width=200))


def _fragment(tmp_path, name: str = "index", body: str = "<h1>Hola mundo</h1><p>post</p>"):
    path = tmp_path / f"{name}.html"
    path.write_text(body, encoding="utf-8")
    return path


def test_render_single_page_to_stdout(tmp_path):
    result = runner.invoke(app, ["render", str(_fragment(tmp_path))])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("<!DOCTYPE html>")
    assert "<title>Hola mundo</title>" in result.output
    assert result.output.count('href="/feed.xml"') == 1


def test_render_many_pages_needs_out_dir(tmp_path):
    pages = [str(_fragment(tmp_path, "a")), str(_fragment(tmp_path, "b"))]
    result = runner.invoke(app, ["render", *pages])
    assert result.exit_code != 0


def test_render_to_out_dir_then_verify(tmp_path):
    pages = [str(_fragment(tmp_path, "index")), str(_fragment(tmp_path, "about", "<p>About</p>"))]
    out_dir = tmp_path / "site"

    result = runner.invoke(app, ["render", *pages, "--out-dir", str(out_dir), "--title", "Fixed"])
    assert result.exit_code == 0, result.output
    about = (out_dir / "about.html").read_text(encoding="utf-8")
    assert "<title>Fixed</title>" in about
    assert 'data-path="/about"' in about

    verified = runner.invoke(app, ["verify", str(out_dir / "index.html")])
    assert verified.exit_code == 0, verified.output
    assert "All checks passed." in verified.output


def test_render_rejects_empty_fragment(tmp_path):
    result = runner.invoke(app, ["render", str(_fragment(tmp_path, body="   "))])
    assert result.exit_code != 0


def test_verify_fails_on_bare_document(tmp_path):
    page = tmp_path / "bare.html"
    page.write_text("<!DOCTYPE html><html lang='en'><head></head><body></body></html>", encoding="utf-8")

    result = runner.invoke(app, ["verify", str(page)])
    assert result.exit_code == 1
    assert "check(s) failed" in result.output


def test_head_json_manifest(tmp_path):
    out = tmp_path / "head.json"
    result = runner.invoke(app, ["head", "--json", str(out)])
    assert result.exit_code == 0, result.output

    manifest = json.loads(out.read_text(encoding="utf-8"))
    assert manifest["lang"] == "en"
    assert len(manifest["meta_tags"]) == 11
    assert manifest["analytics"] == [
        {"provider": "tag_manager", "tracking_id": "GTM-5C2PVP7"},
        {"provider": "measurement", "tracking_id": "G-76T38NTY0G"},
    ]
    assert manifest["head_links"][1]["as"] == "font"


def test_head_table():
    result = runner.invoke(app, ["head", "--no-banner"])
    assert result.exit_code == 0, result.output
    assert "GTM-5C2PVP7" in result.output


def test_invalid_configuration_exits_with_code_2(monkeypatch):
    monkeypatch.setenv("BLOGSHELL_GTM_ID", "not-an-id")
    result = runner.invoke(app, ["head"])
    assert result.exit_code == 2


def test_doctor_offline(tmp_path, monkeypatch):
    monkeypatch.setenv("BLOGSHELL_PUBLIC_DIR", str(tmp_path))
    (tmp_path / "feed.xml").write_text("<rss/>", encoding="utf-8")

    result = runner.invoke(app, ["doctor", "run", "--offline"])
    assert result.exit_code == 0, result.output
    assert "MISSING" in result.output


def test_render_nested_index_pages_keep_their_routes(tmp_path):
    (tmp_path / "posts").mkdir()
    (tmp_path / "about").mkdir()
    pages = [
        str(_fragment(tmp_path / "posts", "index", "<h1>Posts</h1>")),
        str(_fragment(tmp_path / "about", "index", "<h1>About</h1>")),
    ]
    out_dir = tmp_path / "site"

    result = runner.invoke(app, ["render", *pages, "--out-dir", str(out_dir)])
    assert result.exit_code == 0, result.output

    posts = (out_dir / "posts" / "index.html").read_text(encoding="utf-8")
    about = (out_dir / "about" / "index.html").read_text(encoding="utf-8")
    assert 'data-path="/posts"' in posts
    assert 'data-path="/about"' in about
    assert not (out_dir / "index.html").exists()


def test_render_rejects_pages_with_the_same_output(tmp_path):
    first = _fragment(tmp_path, "about")
    second = tmp_path / "about.htm"
    second.write_text("<h1>Otra</h1>", encoding="utf-8")
    out_dir = tmp_path / "site"

    result = runner.invoke(app, ["render", str(first), str(second), "--out-dir", str(out_dir)])
    assert result.exit_code == 2
    assert not out_dir.exists()


def test_doctor_setup_writes_user_env(tmp_path):
    result = runner.invoke(app, ["doctor", "setup"], input="GTM-ABC123\nG-XYZ789\n")
    assert result.exit_code == 0, result.output

    env_file = tmp_path / "user-config" / ".env"
    lines = env_file.read_text(encoding="utf-8").splitlines()
    assert "BLOGSHELL_GTM_ID=GTM-ABC123" in lines
    assert "BLOGSHELL_GA_MEASUREMENT_ID=G-XYZ789" in lines

    # La siguiente carga de settings lee el .env de usuario.
    head = runner.invoke(app, ["head", "--no-banner"])
    assert "GTM-ABC123" in head.output


def test_doctor_setup_rejects_malformed_id(tmp_path):
    result = runner.invoke(app, ["doctor", "setup"], input="bad\nG-XYZ789\n")
    assert result.exit_code == 2
    assert not (tmp_path / "user-config" / ".env").exists()
