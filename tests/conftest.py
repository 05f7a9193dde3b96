from typing import Any, Dict, Iterable, List, Optional

import pytest

from ptudex.models import EggGroupRecord, RawRecord, SpeciesRecord
from ptudex.sources.pokeapi import ReferenceData

DEFAULT_CAPABILITIES = {"overland": 7, "highJump": 2, "lowJump": 2, "power": 2}


def raw_payload(
    name: str = "pikachu",
    capabilities: Optional[Dict[str, Any]] = None,
    male_ratio: int = 50,
    female_ratio: int = 50,
    genderless: bool = False,
) -> Dict[str, Any]:
    """A complete extraction payload in wire (camelCase) form."""
    return {
        "name": name,
        "types": ["Electric"],
        "baseStats": {
            "hp": 4,
            "attack": 6,
            "defense": 4,
            "specialAttack": 5,
            "specialDefense": 5,
            "speed": 9,
        },
        "abilities": {
            "basicAbilities": ["Static", "Cute Charm"],
            "advancedAbilities": ["Lightning Rod", "Sprint"],
            "highAbility": "Sequence",
        },
        "evolution": [
            {"name": "Pichu", "level": 1, "stage": 1},
            {"name": "Pikachu", "level": 10, "stage": 2},
            {"name": "Raichu Thunderstone", "level": 20, "stage": 3},
        ],
        "capabilities": {**DEFAULT_CAPABILITIES, **(capabilities or {})},
        "sizeInformation": {
            "height": {"imperial": "1'4\"", "metric": "0.4m", "ptu": "Small"},
            "weight": {"imperial": "13.2lbs", "metric": "6.0kg", "ptu": 1},
        },
        "breedingInformation": {
            "genderRatio": {"none": True}
            if genderless
            else {"male": male_ratio, "female": female_ratio},
        },
        "diets": ["Herbivore"],
        "habitats": ["Forest", "Urban", "Urban"],
        "skills": {
            "acrobatics": "3d6+1",
            "athletics": "3d6",
            "combat": "2d6",
            "focus": "3d6+2",
            "perception": "2d6+1",
            "stealth": "3d6+1",
        },
        "moveList": {
            "levelUp": [
                {"level": 5, "move": "Tail Whip", "type": "Normal"},
                {"level": 13, "move": "Electro Ball", "type": "Electric"},
                {"level": 26, "move": "Spark", "type": "Electric"},
                {"level": 42, "move": "Thunderbolt", "type": "Electric"},
                {"level": 58, "move": "Thunder", "type": "Electric"},
            ],
            "tmHm": ["Thunderbolt", "Thunder", "Charge Beam", "Wild Charge"],
        },
    }


def species_payload(
    name: str = "pikachu",
    hatch_counter: Optional[int] = 10,
    pokedex_name: str = "national",
    entry_number: int = 25,
    egg_groups: Iterable[str] = ("field",),
) -> Dict[str, Any]:
    return {
        "name": name,
        "egg_groups": [{"name": g, "url": f"https://pokeapi.co/api/v2/egg-group/{g}/"} for g in egg_groups],
        "hatch_counter": hatch_counter,
        "pokedex_numbers": [{"pokedex": {"name": pokedex_name}, "entry_number": entry_number}],
        "capture_rate": 190,
    }


def egg_group_payload(name: str, display: str, language: str = "en") -> Dict[str, Any]:
    return {"name": name, "names": [{"name": display, "language": {"name": language}}]}


class FakePokeApiClient:
    """In-memory stand-in for :class:`ptudex.sources.pokeapi.PokeApiClient`."""

    def __init__(
        self,
        species: Optional[Dict[str, Dict[str, Any]]] = None,
        egg_groups: Optional[List[Dict[str, Any]]] = None,
        fail_species: bool = False,
        fail_egg_groups: bool = False,
    ):
        self.species = {"pikachu": species_payload()} if species is None else species
        self.egg_groups = [egg_group_payload("field", "Field")] if egg_groups is None else egg_groups
        self.fail_species = fail_species
        self.fail_egg_groups = fail_egg_groups
        self.species_requests: List[List[str]] = []
        self.egg_group_requests = 0

    def get_species_by_names(self, names):
        self.species_requests.append(list(names))
        if self.fail_species or any(n not in self.species for n in names):
            return None
        return [SpeciesRecord.model_validate(self.species[n]) for n in names]

    def get_egg_groups(self):
        self.egg_group_requests += 1
        if self.fail_egg_groups:
            return None
        return [EggGroupRecord.model_validate(g) for g in self.egg_groups]


@pytest.fixture
def make_raw_record():
    def _make(**kwargs) -> RawRecord:
        return RawRecord.model_validate(raw_payload(**kwargs))

    return _make


@pytest.fixture
def make_reference_data():
    def _make(**kwargs) -> ReferenceData:
        species = SpeciesRecord.model_validate(species_payload(**kwargs))
        return ReferenceData(
            name_to_species={"pikachu": species},
            group_display_names={"field": "Field"},
        )

    return _make


@pytest.fixture
def fake_client():
    return FakePokeApiClient()


@pytest.fixture
def fake_client_factory():
    return FakePokeApiClient


@pytest.fixture
def payloads():
    """Builders for raw, species and egg group payloads."""

    class Payloads:
        raw = staticmethod(raw_payload)
        species = staticmethod(species_payload)
        egg_group = staticmethod(egg_group_payload)

    return Payloads
