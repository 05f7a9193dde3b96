"""Command line interface for ptudex."""

from __future__ import annotations

import argparse
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .checkpoint import load_checkpoint
from .config import PipelineSettings, load_config, settings_from_config
from .extraction import dump_schema
from .models import CanonicalRecord
from .pipeline import build_pipeline
from .reporting import diff_report, export_summary_csv

logger = logging.getLogger(__name__)
RUN_LOG_NAME = "run_log.jsonl"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _log_run(settings: PipelineSettings, entry: dict) -> None:
    settings.json_dir.mkdir(parents=True, exist_ok=True)
    with (settings.json_dir / RUN_LOG_NAME).open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(entry) + "\n")


def _apply_args(settings: PipelineSettings, args: argparse.Namespace) -> PipelineSettings:
    overrides = {
        "pdf_path": args.pdf,
        "start_page_index": args.start_page,
        "end_page_index": args.end_page,
        "starting_page_offset": args.page_offset,
        "json_dir": args.json_dir,
        "database_path": args.db_path,
    }
    updates = {k: v for k, v in overrides.items() if v is not None}
    if args.skip_processing:
        updates["skip_processing"] = True
    if args.no_json:
        updates["save_to_json"] = False
    if args.save_to_database:
        updates["save_to_database"] = True
    if args.review:
        updates["review_changes"] = True
    return PipelineSettings.model_validate({**settings.model_dump(), **updates})


def _run(settings: PipelineSettings, summary_csv: Optional[str] = None) -> None:
    run_id = uuid.uuid4().hex
    _log_run(settings, {"run_id": run_id, "status": "started", "start_time": _now()})
    pipeline = build_pipeline(settings)
    try:
        pipeline.convert_pdf_to_json()
        translated = pipeline.translate_json_for_database()
        if settings.review_changes:
            print(diff_report(pipeline.review_changes(translated or None)))
        inserted = pipeline.save_json_to_database()
        if summary_csv:
            records = translated or load_checkpoint(pipeline.translated_data_path, CanonicalRecord)
            export_summary_csv(records, filename=summary_csv)
        _log_run(
            settings,
            {
                "run_id": run_id,
                "status": "success",
                "translated": len(translated),
                "inserted": inserted,
                "end_time": _now(),
            },
        )
    except Exception as e:  # pragma: no cover - logging side effect
        _log_run(
            settings,
            {"run_id": run_id, "status": "error", "error": str(e), "end_time": _now()},
        )
        logger.error("Error during execution: %s", e)
        raise


def main(argv: Optional[list[str]] = None) -> None:  # pragma: no cover - thin wrapper
    parser = argparse.ArgumentParser(description="Extract PTU Pokémon stat blocks from a rulebook PDF")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON config file")
    parser.add_argument("--pdf", type=str, default=None, help="Rulebook PDF to parse")
    parser.add_argument("--start-page", type=int, default=None, help="First page index to parse")
    parser.add_argument("--end-page", type=int, default=None, help="Page index to stop before")
    parser.add_argument(
        "--page-offset", type=int, default=None, help="Offset added to computed rulebook page numbers"
    )
    parser.add_argument("--json-dir", type=str, default=None, help="Directory for JSON checkpoints")
    parser.add_argument("--db-path", type=str, default=None, help="SQLite database path")
    parser.add_argument(
        "--skip-processing", action="store_true", help="Reuse the parsed-data checkpoint instead of the PDF"
    )
    parser.add_argument("--no-json", action="store_true", help="Disable JSON checkpoint stages")
    parser.add_argument("--save-to-database", action="store_true", help="Insert translated records")
    parser.add_argument("--review", action="store_true", help="Diff translated records against stored ones")
    parser.add_argument("--summary-csv", type=str, default=None, help="Write a CSV summary of translated records")
    parser.add_argument("--print-schema", action="store_true", help="Print the extraction JSON schema and exit")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    if args.print_schema:
        print(dump_schema())
        return

    settings = _apply_args(settings_from_config(load_config(args.config)), args)
    _run(settings, summary_csv=args.summary_csv)


if __name__ == "__main__":  # pragma: no cover
    main()
