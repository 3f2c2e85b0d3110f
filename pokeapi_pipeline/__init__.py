"""Package root: wires up logging at import time."""
from pathlib import Path
import logging
import logging.config
import yaml

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "logging.yaml"

if CONFIG_PATH.exists():
    logging.config.dictConfig(yaml.safe_load(CONFIG_PATH.read_text()))
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
