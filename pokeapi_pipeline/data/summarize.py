"""
Summarise a directory of saved PokeAPI JSON files into a CSV report.

Each `*.json` file holds one Pokémon; height (decimetres) and weight
(hectograms) are converted to metres / kilograms, written one row per file,
and averaged across the batch.

Example
-------
python -m pokeapi_pipeline.data.summarize --input-dir pokemon_data --out pokemon_report.csv
"""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

import pandas as pd
from tqdm import tqdm

from pokeapi_pipeline import settings
from pokeapi_pipeline.errors import NoInputError, NoValidDataError, SummaryError

log = logging.getLogger(__name__)

# ─────────────────────────── record → report row ──────────────────────────
FIELDS  = ["name", "height", "weight"]
COLUMNS = {
    "name"  : "Name",
    "height": "Height (m)",
    "weight": "Weight (kg)",
}
UNIT_DIVISOR = 10


@dataclass(frozen=True)
class PokemonRecord:
    name:   str | None
    height: int | None
    weight: int | None


@dataclass(frozen=True)
class RecordOutcome:
    """What happened to one input file: a record, or the reason it was skipped."""
    path:   Path
    record: PokemonRecord | None = None
    error:  str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass
class Report:
    rows:       pd.DataFrame
    avg_height: float | None
    avg_weight: float | None
    skipped:    list[RecordOutcome] = field(default_factory=list)

    def to_csv(self) -> str:
        return render_csv(self.rows)


def list_input_files(input_dir: Path) -> list[Path]:
    """Every `*.json` file directly under *input_dir*, sorted by name."""
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise NoInputError(input_dir)
    files = sorted(p for p in input_dir.glob("*.json") if p.is_file())
    if not files:
        raise NoInputError(input_dir)
    return files


def read_record(path: Path) -> PokemonRecord:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except RecursionError as err:
        raise ValueError("JSON nested too deeply to decode") from err
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    return PokemonRecord(*(payload.get(k) for k in FIELDS))


def collect_records(paths: list[Path]) -> list[RecordOutcome]:
    """Read every file; a file that can't be read is logged and kept as a failed outcome."""
    outcomes = []
    for path in tqdm(paths, desc="records", leave=False):
        try:
            outcomes.append(RecordOutcome(path, record=read_record(path)))
        except (OSError, ValueError) as err:
            log.warning("⚠️  %s – skipped (%s)", path.name, err)
            outcomes.append(RecordOutcome(path, error=str(err)))
    return outcomes


def build_rows(records: list[PokemonRecord]) -> pd.DataFrame:
    df = pd.DataFrame([asdict(r) for r in records], columns=FIELDS)

    df["name"] = (
        df["name"]
          .astype("string")
          .str.capitalize()
    )
    for col in ("height", "weight"):
        # booleans would otherwise coerce to 1/0
        keep    = df[col].map(lambda v: pd.api.types.is_scalar(v) and not isinstance(v, bool))
        values  = df[col].where(keep, None)
        df[col] = pd.to_numeric(values, errors="coerce").astype("float64") / UNIT_DIVISOR

    return df.rename(columns=COLUMNS)


def column_mean(series: pd.Series) -> float | None:
    """Mean over the non-missing cells, or None when there are none."""
    if series.count() == 0:
        return None
    return float(series.mean())


def render_csv(rows: pd.DataFrame) -> str:
    return rows.to_csv(index=False, float_format="%.1f", na_rep="", lineterminator="\n")


def format_average(label: str, value: float | None, unit: str) -> str:
    if value is None:
        return f"Average {label}: no data"
    return f"Average {label}: {value:.2f} {unit}"

# ───────────────────────────── core logic ─────────────────────────────────
def summarize(input_dir: Path) -> Report:
    """Build the report for *input_dir*; raise SummaryError if nothing usable is found."""
    input_dir = Path(input_dir)
    outcomes  = collect_records(list_input_files(input_dir))
    records   = [o.record for o in outcomes if o.ok]
    skipped   = [o for o in outcomes if not o.ok]
    if not records:
        raise NoValidDataError(input_dir, len(skipped))

    rows = build_rows(records)
    return Report(
        rows=rows,
        avg_height=column_mean(rows[COLUMNS["height"]]),
        avg_weight=column_mean(rows[COLUMNS["weight"]]),
        skipped=skipped,
    )


def print_report(report: Report) -> None:
    print(report.to_csv(), end="")
    print()
    print(format_average("height", report.avg_height, "m"))
    print(format_average("weight", report.avg_weight, "kg"))
    for outcome in report.skipped:
        print(f"Skipped {outcome.path.name}: {outcome.error}")


def main(input_dir: str | Path | None = None, out: str | Path | None = None) -> Report:
    input_dir = Path(input_dir) if input_dir else settings.input_dir()
    out_path  = Path(out) if out else settings.report_out()

    log.info("Summarising %s", input_dir)
    report = summarize(input_dir)
    print_report(report)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(report.to_csv(), encoding="utf-8")
    log.info(" → %d rows (%d skipped) → %s", len(report.rows), len(report.skipped), out_path)
    return report


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--input-dir", dest="input_dir", help="directory of *.json records")
    parser.add_argument("--out", help="CSV report path")
    args = parser.parse_args()
    try:
        main(args.input_dir, args.out)
    except SummaryError as err:
        log.error("✗ %s", err)
        raise SystemExit(1)
