"""JSON checkpoints between pipeline stages.

Each save overwrites the file with the complete list accumulated so far, so
after a crash the file holds every record finished before it.
"""

import json
import logging
from pathlib import Path
from typing import List, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter

from .errors import MissingCheckpointError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

PARSED_DATA_FILE = "parsed-data.json"
TRANSLATED_DATA_FILE = "translated-data.json"


def save_checkpoint(path: Union[str, Path], records: Sequence[BaseModel]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = [r.model_dump(mode="json", by_alias=True, exclude_none=True) for r in records]
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Saved %d records to %s", len(data), path)


def load_checkpoint(path: Union[str, Path], model: Type[ModelT]) -> List[ModelT]:
    """Read a checkpoint back as a list of *model*.

    Raises :class:`MissingCheckpointError` if the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise MissingCheckpointError(path)
    adapter = TypeAdapter(List[model])
    return adapter.validate_json(path.read_bytes())
