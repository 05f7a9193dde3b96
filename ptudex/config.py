"""Configuration helpers for the extraction pipeline."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

# environment variable -> setting name
_FLAG_VARS = {
    "SAVE_TO_JSON_FILE": "save_to_json",
    "SAVE_TO_DATABASE": "save_to_database",
    "SKIP_PROCESSING": "skip_processing",
    "SHOW_PROCESSING_LOGS": "show_processing_logs",
}
_VALUE_VARS = {
    "START_AT_PAGE_INDEX": "start_page_index",
    "END_AT_PAGE_INDEX": "end_page_index",
    "STARTING_PAGE_OFFSET": "starting_page_offset",
    "PDF_PATH": "pdf_path",
    "DATABASE_PATH": "database_path",
}


class PipelineSettings(BaseModel):
    """Settings for a PDF to database run."""

    model_config = ConfigDict(extra="ignore")

    pdf_path: Path = Path("pdfs") / "Gen 9 Homebrew - Pokemon Only.pdf"
    json_dir: Path = Path("json")
    database_path: Path = Path("json") / "pokemon.db"
    start_page_index: int = 0
    end_page_index: Optional[int] = None
    starting_page_offset: int = 0
    save_to_json: bool = True
    save_to_database: bool = False
    skip_processing: bool = False
    show_processing_logs: bool = True
    review_changes: bool = False
    model: str = "gpt-4o-mini"


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from *path* if it exists.

    Parameters
    ----------
    path:
        Optional path to a JSON configuration file. When omitted the function
        looks for ``config.json`` in the repository root. A missing or
        unreadable file results in an empty config dictionary.
    """

    cfg_path = path or DEFAULT_CONFIG_PATH
    try:
        with open(cfg_path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def settings_from_config(
    config: Mapping[str, Any],
    environ: Optional[Mapping[str, str]] = None,
) -> PipelineSettings:
    """Build :class:`PipelineSettings` from *config*, overridden by *environ*.

    Flag variables are enabled only by the exact value ``"true"``.
    """

    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = dict(config.get("pipeline", {}))
    for var, name in _FLAG_VARS.items():
        if var in environ:
            values[name] = environ[var] == "true"
    for var, name in _VALUE_VARS.items():
        if environ.get(var):
            values[name] = environ[var]
    return PipelineSettings.model_validate(values)
