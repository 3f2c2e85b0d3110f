from functools import lru_cache
from pathlib import Path
from dotenv import load_dotenv
import os

load_dotenv(Path(".env"))

@lru_cache
def base_url() -> str:
    return os.getenv("POKEAPI_BASE_URL", "https://pokeapi.co/api/v2").rstrip("/")

@lru_cache
def pokemon_name() -> str:
    return os.getenv("POKEAPI_POKEMON", "pikachu")

@lru_cache
def fetch_out() -> Path:
    return Path(os.getenv("POKEAPI_FETCH_OUT", "data.json"))

@lru_cache
def error_log() -> Path:
    return Path(os.getenv("POKEAPI_ERROR_LOG", "errors.log"))

@lru_cache
def validate_json() -> bool:
    return os.getenv("POKEAPI_VALIDATE_JSON", "1").strip().lower() not in {"0", "false", "no", "off"}

@lru_cache
def input_dir() -> Path:
    return Path(os.getenv("POKEAPI_INPUT_DIR", "pokemon_data"))

@lru_cache
def report_out() -> Path:
    return Path(os.getenv("POKEAPI_REPORT_OUT", "pokemon_report.csv"))
