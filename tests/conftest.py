import os

import pytest

from pokeapi_pipeline import settings

CACHED = [
    settings.base_url, settings.pokemon_name, settings.fetch_out, settings.error_log,
    settings.validate_json, settings.input_dir, settings.report_out,
]


@pytest.fixture
def default_settings(monkeypatch, tmp_path):
    """Run from an empty tmp_path with no POKEAPI_* overrides, so the built-in defaults apply."""
    for key in list(os.environ):
        if key.startswith("POKEAPI_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    for fn in CACHED:
        fn.cache_clear()
    yield tmp_path
    for fn in CACHED:
        fn.cache_clear()
