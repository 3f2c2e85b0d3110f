import json
import re

import pytest
import requests

from pokeapi_pipeline import cli
from pokeapi_pipeline.data import fetch_pokeapi
from pokeapi_pipeline.data.fetch_pokeapi import fetch, pokemon_url
from pokeapi_pipeline.errors import HttpStatusError, InvalidJsonError, NetworkError

URL = "https://pokeapi.co/api/v2/pokemon/pikachu"
BODY = json.dumps({"name": "pikachu", "height": 4, "weight": 60}).encode()
LOG_LINE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} ERROR: .+$")


class FakeResponse:
    def __init__(self, status_code=200, content=BODY):
        self.status_code = status_code
        self.content = content


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get; returns the list of URLs requested."""
    calls = []

    def install(response=None, exc=None):
        def _get(url, **kwargs):
            calls.append(url)
            if exc is not None:
                raise exc
            return response
        monkeypatch.setattr(fetch_pokeapi.requests, "get", _get)
        return calls

    return install


# --- fetch() ---

def test_fetch_returns_body_verbatim(fake_get):
    calls = fake_get(FakeResponse(200, BODY))
    assert fetch(URL) == BODY
    assert calls == [URL]


def test_fetch_single_attempt_on_http_error(fake_get):
    calls = fake_get(FakeResponse(503, b"busy"))
    with pytest.raises(HttpStatusError) as exc:
        fetch(URL)
    assert exc.value.code == 503
    assert len(calls) == 1


def test_fetch_network_error(fake_get):
    fake_get(exc=requests.ConnectionError("connection refused"))
    with pytest.raises(NetworkError):
        fetch(URL)


def test_fetch_invalid_json(fake_get):
    fake_get(FakeResponse(200, b"<html>not json</html>"))
    with pytest.raises(InvalidJsonError):
        fetch(URL)


def test_fetch_skips_validation_with_warning(fake_get, caplog):
    fake_get(FakeResponse(200, b"not json"))
    with caplog.at_level("WARNING", logger="pokeapi_pipeline.data.fetch_pokeapi"):
        assert fetch(URL, validate=False) == b"not json"
    assert any("validation disabled" in r.getMessage() for r in caplog.records)


def test_fetch_uses_session_when_given():
    class Session:
        def __init__(self):
            self.urls = []

        def get(self, url, **kwargs):
            self.urls.append(url)
            return FakeResponse(200, BODY)

    session = Session()
    assert fetch(URL, session=session) == BODY
    assert session.urls == [URL]


# --- url building ---

def test_pokemon_url_normalises_name():
    assert pokemon_url("  Pikachu ", base_url="https://pokeapi.co/api/v2/") == URL


def test_pokemon_url_accepts_id():
    assert pokemon_url(25, base_url="https://pokeapi.co/api/v2") == \
        "https://pokeapi.co/api/v2/pokemon/25"


def test_pokemon_url_rejects_empty_name():
    with pytest.raises(ValueError):
        pokemon_url("   ")


# --- main(): side files ---

def test_main_writes_output_file(fake_get, tmp_path):
    fake_get(FakeResponse(200, BODY))
    out = tmp_path / "out" / "data.json"
    err_log = tmp_path / "errors.log"

    fetch_pokeapi.main(url=URL, out=out, error_log=err_log)

    assert out.read_bytes() == BODY
    assert not err_log.exists()


def test_main_404_writes_no_data_and_one_log_line(fake_get, tmp_path):
    fake_get(FakeResponse(404, b"Not Found"))
    out = tmp_path / "data.json"
    err_log = tmp_path / "errors.log"

    with pytest.raises(HttpStatusError):
        fetch_pokeapi.main(url=URL, out=out, error_log=err_log)

    assert not out.exists()
    lines = err_log.read_text().splitlines()
    assert len(lines) == 1
    assert LOG_LINE.match(lines[0])
    assert "404" in lines[0]


def test_main_appends_to_existing_log(fake_get, tmp_path):
    fake_get(FakeResponse(500, b""))
    err_log = tmp_path / "errors.log"
    err_log.write_text("2024-01-01 00:00:00 ERROR: earlier failure\n")

    with pytest.raises(HttpStatusError):
        fetch_pokeapi.main(url=URL, out=tmp_path / "data.json", error_log=err_log)

    lines = err_log.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("earlier failure")


# --- CLI exit codes ---

def test_cli_fetch_404_exits_1(fake_get, tmp_path):
    fake_get(FakeResponse(404, b"Not Found"))
    out = tmp_path / "data.json"
    err_log = tmp_path / "errors.log"

    code = cli.main(["fetch", "--url", URL, "--out", str(out), "--error-log", str(err_log)])

    assert code == 1
    assert not out.exists()
    assert len(err_log.read_text().splitlines()) == 1


def test_cli_fetch_invalid_json_exits_1(fake_get, tmp_path):
    fake_get(FakeResponse(200, b"definitely { not json"))
    out = tmp_path / "data.json"
    err_log = tmp_path / "errors.log"

    code = cli.main(["fetch", "--url", URL, "--out", str(out), "--error-log", str(err_log)])

    assert code == 1
    assert not out.exists()
    assert "not valid JSON" in err_log.read_text()


def test_cli_fetch_success_exits_0(fake_get, tmp_path):
    calls = fake_get(FakeResponse(200, BODY))
    out = tmp_path / "data.json"

    code = cli.main(["fetch", "--name", "Pikachu", "--out", str(out),
                     "--error-log", str(tmp_path / "errors.log")])

    assert code == 0
    assert out.read_bytes() == BODY
    assert calls[0].endswith("/pokemon/pikachu")


def test_cli_fetch_deeply_nested_body_exits_1(fake_get, tmp_path):
    fake_get(FakeResponse(200, b"[" * 200000))
    out = tmp_path / "data.json"
    err_log = tmp_path / "errors.log"

    code = cli.main(["fetch", "--url", URL, "--out", str(out), "--error-log", str(err_log)])

    assert code == 1
    assert not out.exists()
    lines = err_log.read_text().splitlines()
    assert len(lines) == 1
    assert "not valid JSON" in lines[0]


def test_fetch_deeply_nested_body_is_invalid_json(fake_get):
    fake_get(FakeResponse(200, b"[" * 200000))
    with pytest.raises(InvalidJsonError):
        fetch(URL)


# --- no flags: fixed default paths ---

def test_cli_fetch_without_flags_uses_default_paths(fake_get, default_settings):
    calls = fake_get(FakeResponse(200, BODY))

    assert cli.main(["fetch"]) == 0

    assert calls == ["https://pokeapi.co/api/v2/pokemon/pikachu"]
    assert (default_settings / "data.json").read_bytes() == BODY
    assert not (default_settings / "errors.log").exists()


def test_cli_fetch_without_flags_logs_to_default_error_log(fake_get, default_settings):
    fake_get(FakeResponse(404, b"Not Found"))

    assert cli.main(["fetch"]) == 1

    assert not (default_settings / "data.json").exists()
    assert len((default_settings / "errors.log").read_text().splitlines()) == 1
