import logging
import os
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from .models import CanonicalRecord

logger = logging.getLogger(__name__)


def records_to_frame(records: Sequence[CanonicalRecord]) -> pd.DataFrame:
    rows = []
    for record in records:
        breeding = record.breeding_information
        rows.append(
            {
                "Page": record.metadata.page,
                "Dex_Number": record.metadata.dex_number,
                "Name": record.name,
                "Types": ", ".join(t.value for t in record.types),
                "Egg_Groups": ", ".join(g for g in breeding.egg_groups if g) or None,
                "Average_Hatch_Rate": breeding.average_hatch_rate,
            }
        )
    return pd.DataFrame(
        rows,
        columns=["Page", "Dex_Number", "Name", "Types", "Egg_Groups", "Average_Hatch_Rate"],
    )


def export_summary_csv(
    records: Sequence[CanonicalRecord],
    filename: str = "translated_summary.csv",
    output_dir: Optional[str] = None,
) -> str:
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        filename = os.path.join(output_dir, filename)
    logger.info("Exporting summary of %d records to %s...", len(records), filename)
    records_to_frame(records).to_csv(filename, index=False, encoding="utf-8")
    return filename


def diff_report(changes: List[Dict[str, Any]]) -> str:
    """Return a short text summary of review diffs."""
    lines = ["CHANGE REVIEW"]
    if not changes:
        lines.append("No changes against stored records")
    for change in changes:
        fields = sorted(k for k in change if k != "name")
        lines.append(f"{change['name']}: {', '.join(fields)}")
    return "\n".join(lines)
