#!/usr/bin/env python3
"""
PokeAPI pipeline – unified CLI
==============================

Run either step like so:

    # 1. Pull one Pokémon from PokeAPI into data.json
    python -m pokeapi_pipeline.cli fetch

    # 2. Summarise pokemon_data/*.json into pokemon_report.csv
    python -m pokeapi_pipeline.cli summarize

Both steps work without flags; the defaults come from `.env` / the
environment (see `pokeapi_pipeline.settings`).
"""
from __future__ import annotations

import argparse
import importlib
import importlib.util
import logging
from typing import Callable, Mapping

from pokeapi_pipeline.errors import MissingToolError, PipelineError

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 1.  Registry helpers
# ---------------------------------------------------------------------------

# Each CLI sub-command maps to "module_path:function_name"
COMMAND_TABLE: Mapping[str, str] = {
    "fetch": "pokeapi_pipeline.data.fetch_pokeapi:main",
    "summarize": "pokeapi_pipeline.data.summarize:main",
}

# Importable modules each step needs before it can do any work
REQUIRES: Mapping[str, tuple[str, ...]] = {
    "fetch": ("requests",),
    "summarize": ("pandas", "tqdm"),
}


def check_requirements(command: str) -> None:
    """Raise MissingToolError if a module *command* depends on is not importable."""
    missing = [
        name for name in REQUIRES.get(command, ())
        if importlib.util.find_spec(name) is None
    ]
    if missing:
        raise MissingToolError(command, missing)


def _resolve_callable(dotted: str) -> Callable[..., object]:
    """Import the `module:function` specified in dotted path and return it."""
    module_path, func_name = dotted.split(":")
    module = importlib.import_module(module_path)
    return getattr(module, func_name)


# ---------------------------------------------------------------------------
# 2.  Argparse scaffold
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokeapi-pipeline",
        description="Fetch Pokémon from PokeAPI and summarise saved records.",
    )
    subs = parser.add_subparsers(dest="command", required=True, metavar="<step>")

    # ── fetch ────────────────────────────────────────────────────────────────
    fetch = subs.add_parser("fetch", help="Download one Pokémon as JSON")
    fetch.add_argument("--name", help="Pokémon name or id (default: settings)")
    fetch.add_argument("--url", help="Full resource URL, overrides --name")
    fetch.add_argument("--out", help="Where to write the JSON body")
    fetch.add_argument("--error-log", dest="error_log", help="Append-only error log")
    fetch.set_defaults(_entry=COMMAND_TABLE["fetch"])

    # ── summarize ────────────────────────────────────────────────────────────
    summ = subs.add_parser("summarize", help="JSON records ➜ CSV report with averages")
    summ.add_argument("--input-dir", dest="input_dir", help="Directory of *.json records")
    summ.add_argument("--out", help="CSV report path")
    summ.set_defaults(_entry=COMMAND_TABLE["summarize"])

    return parser


# ---------------------------------------------------------------------------
# 3.  Top-level dispatcher
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Forward the *remaining* Namespace entries to the target
    kwargs = {
        k: v
        for k, v in vars(args).items()
        if k not in {"command", "_entry"} and v is not None
    }

    try:
        check_requirements(args.command)
        target_fn = _resolve_callable(getattr(args, "_entry"))
        target_fn(**kwargs)
    except PipelineError as err:
        log.error("✗ %s: %s", args.command, err)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
