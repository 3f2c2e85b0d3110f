"""
Exception hierarchy shared by the fetch and summarize steps.

Every step raises a subclass of `PipelineError`; the CLI turns any of them
into exit code 1.
"""
from __future__ import annotations

from pathlib import Path


class PipelineError(Exception):
    """Base class for every failure the pipeline reports to the user."""


class MissingToolError(PipelineError):
    """A library a step depends on cannot be imported."""

    def __init__(self, step: str, missing: list[str]):
        self.step = step
        self.missing = list(missing)
        super().__init__(f"{step}: required package(s) not installed: {', '.join(self.missing)}")


# ─────────────────────────────── fetch ────────────────────────────────
class FetchError(PipelineError):
    """The single GET against the API did not yield usable JSON."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)


class NetworkError(FetchError):
    def __init__(self, url: str, cause: Exception):
        self.cause = cause
        super().__init__(f"request to {url} failed: {cause}", url)


class HttpStatusError(FetchError):
    def __init__(self, url: str, code: int):
        self.code = code
        super().__init__(f"{url} returned HTTP {code}", url)


class InvalidJsonError(FetchError):
    def __init__(self, url: str, detail: str):
        super().__init__(f"{url} returned a body that is not valid JSON ({detail})", url)


# ───────────────────────────── summarize ──────────────────────────────
class SummaryError(PipelineError):
    """The summarizer could not build a report."""


class NoInputError(SummaryError):
    def __init__(self, input_dir: Path):
        self.input_dir = input_dir
        super().__init__(f"no JSON files found in {input_dir}")


class NoValidDataError(SummaryError):
    def __init__(self, input_dir: Path, skipped: int):
        self.input_dir = input_dir
        self.skipped = skipped
        super().__init__(f"no usable records in {input_dir} ({skipped} file(s) skipped)")
