import pytest
from pydantic import ValidationError

from ptudex.models import (
    CanonicalRecord,
    Genderless,
    GenderSplit,
    PokemonType,
    RawGenderless,
    RawRecord,
)


def test_raw_record_uses_wire_names(payloads):
    record = RawRecord.model_validate(payloads.raw())
    assert record.base_stats.special_attack == 5
    assert record.move_list.tm_hm[0] == "Thunderbolt"
    assert record.types == [PokemonType.electric]


def test_raw_gender_ratio_variants(payloads):
    split = RawRecord.model_validate(payloads.raw())
    genderless = RawRecord.model_validate(payloads.raw(genderless=True))
    assert isinstance(split.breeding_information.gender_ratio, GenderSplit)
    assert isinstance(genderless.breeding_information.gender_ratio, RawGenderless)


def test_level_up_accepts_evo(payloads):
    payload = payloads.raw()
    payload["moveList"]["levelUp"][0]["level"] = "Evo"
    record = RawRecord.model_validate(payload)
    assert record.move_list.level_up[0].level == "Evo"


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p.update(types=[]),
        lambda p: p.update(types=["Electric", "Steel", "Fairy"]),
        lambda p: p.update(types=["Sound"]),
        lambda p: p.update(name=""),
        lambda p: p["sizeInformation"]["height"].update(ptu="Tiny"),
        lambda p: p["moveList"]["levelUp"][0].update(level="Start"),
        lambda p: p.update(unexpected=True),
        lambda p: p.pop("skills"),
    ],
)
def test_raw_record_is_strict(payloads, mutate):
    payload = payloads.raw()
    mutate(payload)
    with pytest.raises(ValidationError):
        RawRecord.model_validate(payload)


def test_canonical_gender_ratio_round_trip(fake_client, make_raw_record):
    from ptudex.sources.pokeapi import ReferenceDataFetcher
    from ptudex.translator import RecordTranslator

    [record] = RecordTranslator(ReferenceDataFetcher(fake_client)).translate(
        [make_raw_record(genderless=True)]
    )
    restored = CanonicalRecord.model_validate_json(record.model_dump_json(by_alias=True))
    assert restored.breeding_information.gender_ratio == Genderless()
    assert restored == record


def test_canonical_genderless_must_be_true():
    with pytest.raises(ValidationError):
        Genderless(none=False)
