"""LLM-backed extraction of stat blocks from rulebook page text."""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from pydantic import ValidationError

from .errors import ExtractionError
from .models import RawRecord

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"

SYSTEM_INSTRUCTIONS = """You are an assistant that extracts structured data from unstructured Pokémon stat blocks formatted as continuous text. The input will be a raw string containing various categories of information about a Pokémon. Your task is to parse this input and return a JSON object that conforms to a structured output.

## Parsing Rules
- Recognize headers like "Base Stats", "Basic Information", "Evolution", "Size Information", "Breeding Information", "Capability List", "Skill List" and "Move List" to categorize data correctly.
- Convert stat values and numerical fields to integers where applicable.
- Extract move levels properly, ensuring move names and types are correctly mapped. Moves learned on evolution use the level "Evo".
- Parse evolution information by recognizing stage numbers, Pokémon names, and level requirements.
- Capabilities not listed for the Pokémon are 0 or omitted; anything besides the numbered movement capabilities goes under "other".
- Genderless Pokémon use {"none": true} as their gender ratio.
- Handle spacing and irregular formatting to ensure correct data extraction.

Return only the structured JSON output without extra commentary."""


class Extractor(Protocol):
    def extract(self, text: str) -> RawRecord:
        ...


def parse_raw_record(payload: Any) -> RawRecord:
    """Validate extraction output against the :class:`RawRecord` schema."""
    try:
        if isinstance(payload, (str, bytes)):
            return RawRecord.model_validate_json(payload)
        return RawRecord.model_validate(payload)
    except ValidationError as e:
        raise ExtractionError(f"Extraction output failed schema validation: {e}") from e


class OpenAIExtractor:
    """Extract a :class:`RawRecord` from page text with OpenAI structured output."""

    def __init__(self, client=None, model: str = DEFAULT_MODEL):
        if client is None:
            from openai import OpenAI

            # Reads OPENAI_API_KEY from the environment.
            client = OpenAI()
        self.client = client
        self.model = model
        self.schema: Dict[str, Any] = RawRecord.model_json_schema(by_alias=True)

    def extract(self, text: str) -> RawRecord:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_INSTRUCTIONS},
                {"role": "user", "content": text},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {"name": "pokemon_stat_block", "schema": self.schema, "strict": False},
            },
        )
        content = response.choices[0].message.content
        if not content:
            raise ExtractionError("Extraction returned an empty response")
        record = parse_raw_record(content)
        logger.debug("Extracted %s", record.name)
        return record


class StaticExtractor:
    """Serve pre-extracted records keyed by page text.

    Useful for dry runs and tests where no LLM should be called.
    """

    def __init__(self, records: Mapping[str, Any]):
        self.records = {text: parse_raw_record(payload) for text, payload in records.items()}

    def extract(self, text: str) -> RawRecord:
        try:
            return self.records[text]
        except KeyError:
            raise ExtractionError(f"No record for page text: {text[:40]!r}") from None


def dump_schema() -> str:
    return json.dumps(RawRecord.model_json_schema(by_alias=True), indent=2)
