"""
Fetch one Pokémon resource from PokeAPI and save the raw JSON body.

Example
-------
python -m pokeapi_pipeline.data.fetch_pokeapi --name pikachu --out data.json
"""
from __future__ import annotations
import argparse, json, logging
from pathlib import Path

import requests
from pokeapi_pipeline import settings
from pokeapi_pipeline.errors import FetchError, HttpStatusError, InvalidJsonError, NetworkError
from pokeapi_pipeline.utils.errorlog import append_error

# ────────────────────────────── constants ─────────────────────────────
REQ_TIMEOUT = 60
LOG         = logging.getLogger(__name__)

# ─────────────────────────── helpers ────────────────────────────────
def pokemon_url(name: str, base_url: str | None = None) -> str:
    """`{base}/pokemon/{name}` with the name normalised the way PokeAPI expects."""
    base = (base_url or settings.base_url()).rstrip("/")
    slug = str(name).strip().lower()
    if not slug:
        raise ValueError("pokemon name must not be empty")
    return f"{base}/pokemon/{slug}"

def validate_json(body: bytes, url: str) -> None:
    """Raise InvalidJsonError unless *body* parses as JSON."""
    try:
        json.loads(body)
    except (UnicodeDecodeError, ValueError) as err:
        raise InvalidJsonError(url, str(err)) from err
    except RecursionError as err:
        raise InvalidJsonError(url, "nested too deeply to decode") from err

# ───────────────────────────── core logic ───────────────────────────
def fetch(url: str, *, session: requests.Session | None = None, validate: bool = True) -> bytes:
    """Single GET; return the body untouched or raise a FetchError subclass."""
    getter = session.get if session is not None else requests.get
    try:
        resp = getter(url, timeout=REQ_TIMEOUT)
    except requests.RequestException as err:
        raise NetworkError(url, err) from err

    if resp.status_code != 200:
        raise HttpStatusError(url, resp.status_code)

    body = resp.content
    if validate:
        validate_json(body, url)
    else:
        LOG.warning("⚠️  JSON validation disabled – saving %s unchecked", url)
    return body

def main(name: str | None = None, url: str | None = None,
         out: str | Path | None = None, error_log: str | Path | None = None) -> Path:
    """Fetch *url* (or the pokemon *name*) into *out*; log failures to *error_log*."""
    url       = url or pokemon_url(name or settings.pokemon_name())
    out_path  = Path(out) if out else settings.fetch_out()
    log_path  = Path(error_log) if error_log else settings.error_log()

    LOG.info("Fetching %s", url)
    try:
        body = fetch(url, validate=settings.validate_json())
    except FetchError as err:
        append_error(log_path, err)
        LOG.info("error appended to %s", log_path)
        raise

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(body)
    LOG.info("✓ saved %s (%s bytes)", out_path, len(body))
    return out_path

# ─────────────────────────── CLI entry-point ────────────────────────
if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--name", help="Pokémon name or id, e.g. pikachu")
    parser.add_argument("--url",  help="full resource URL (overrides --name)")
    parser.add_argument("--out",  help="where to write the JSON body")
    parser.add_argument("--error-log", dest="error_log", help="append-only error log")
    args = parser.parse_args()
    try:
        main(args.name, args.url, args.out, args.error_log)
    except FetchError as err:
        LOG.error("✗ %s", err)
        raise SystemExit(1)
