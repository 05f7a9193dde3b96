import json

import pytest

from ptudex.checkpoint import load_checkpoint, save_checkpoint
from ptudex.errors import MissingCheckpointError
from ptudex.models import RawRecord


def test_save_overwrites_with_full_list(tmp_path, make_raw_record):
    path = tmp_path / "json" / "parsed-data.json"
    records = [make_raw_record()]
    save_checkpoint(path, records)
    records.append(make_raw_record(name="raichu"))
    save_checkpoint(path, records)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert [entry["name"] for entry in data] == ["pikachu", "raichu"]
    assert "baseStats" in data[0]


def test_load_returns_typed_records(tmp_path, make_raw_record):
    path = tmp_path / "parsed-data.json"
    original = [make_raw_record(genderless=True)]
    save_checkpoint(path, original)

    loaded = load_checkpoint(path, RawRecord)

    assert loaded == original


def test_missing_checkpoint_raises(tmp_path):
    with pytest.raises(MissingCheckpointError, match="does not exist"):
        load_checkpoint(tmp_path / "translated-data.json", RawRecord)
