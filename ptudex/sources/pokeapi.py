import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional

import requests
from pydantic import BaseModel, ValidationError

from ..errors import ReferenceDataError
from ..helpers import safe_request
from ..models import EggGroupRecord, SpeciesRecord
from ..naming import NameNormalizer

logger = logging.getLogger(__name__)

POKEAPI_URL = "https://pokeapi.co/api/v2"
ENGLISH = "en"
NATIONAL_POKEDEX = "national"


class PokeApiClient:
    """Thin PokeAPI client for the two batch lookups translation needs.

    Both methods return ``None`` instead of raising when any request in the
    batch fails; the caller decides whether that is fatal.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: str = POKEAPI_URL,
        metrics: Optional[Dict[str, Any]] = None,
    ):
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.metrics = metrics

    def _get_json(self, url: str) -> Any:
        response = safe_request(url, session=self.session, metrics=self.metrics)
        return response.json()

    def get_species_by_names(self, names: List[str]) -> Optional[List[SpeciesRecord]]:
        """Fetch ``pokemon-species`` records for *names*, preserving order."""
        try:
            return [
                SpeciesRecord.model_validate(
                    self._get_json(f"{self.base_url}/pokemon-species/{name}")
                )
                for name in names
            ]
        except (requests.RequestException, ValueError, ValidationError) as e:
            logger.error(
                "Failed to get Pokémon by name from PokeApi: names=%s error=%s",
                names,
                e,
            )
            return None

    def get_egg_groups(self) -> Optional[List[EggGroupRecord]]:
        """Fetch the full egg group catalogue."""
        try:
            listing = self._get_json(f"{self.base_url}/egg-group/?limit=100")
            group_names = [entry["name"] for entry in listing.get("results", [])]
            return [
                EggGroupRecord.model_validate(
                    self._get_json(f"{self.base_url}/egg-group/{name}")
                )
                for name in group_names
            ]
        except (requests.RequestException, ValueError, KeyError, ValidationError) as e:
            logger.error("Failed to get egg groups from PokeApi: %s", e)
            return None


class ReferenceData(BaseModel):
    """Reference lookups shared by every record in a translation batch."""

    name_to_species: Dict[str, SpeciesRecord]
    group_display_names: Dict[str, str]

    def species_for(self, lookup_key: Optional[str]) -> Optional[SpeciesRecord]:
        if not lookup_key:
            return None
        return self.name_to_species.get(lookup_key.lower())


def english_display_names(egg_groups: Iterable[EggGroupRecord]) -> Dict[str, str]:
    """Map each egg group id to its English name.

    Raises :class:`ReferenceDataError` naming the first group without one.
    """
    display_names: Dict[str, str] = {}
    for group in egg_groups:
        english = next(
            (entry.name for entry in group.names if entry.language.name == ENGLISH),
            None,
        )
        if english is None:
            raise ReferenceDataError(
                f"Failed to find English name for egg group {group.name}"
            )
        display_names[group.name] = english
    return display_names


class ReferenceDataFetcher:
    """Resolve species and egg group reference data for a batch of names."""

    def __init__(self, client: PokeApiClient, normalizer: Optional[NameNormalizer] = None):
        self.client = client
        self.normalizer = normalizer or NameNormalizer()

    def fetch(self, names: Iterable[str]) -> ReferenceData:
        # Several pages can share one species entry; request each key once.
        keys = list(dict.fromkeys(self.normalizer.normalize_all(names)))
        logger.info("Fetching reference data for %d species", len(keys))

        with ThreadPoolExecutor(max_workers=2) as executor:
            species_future = executor.submit(self.client.get_species_by_names, keys)
            groups_future = executor.submit(self.client.get_egg_groups)
            species = species_future.result()
            egg_groups = groups_future.result()

        if species is None:
            raise ReferenceDataError("Failed to get Pokémon species from PokeApi")
        if egg_groups is None:
            raise ReferenceDataError("Failed to get egg groups from PokeApi")

        name_to_species: Dict[str, SpeciesRecord] = {}
        for key, record in zip(keys, species):
            name_to_species[key.lower()] = record
            name_to_species.setdefault(record.name.lower(), record)

        return ReferenceData(
            name_to_species=name_to_species,
            group_display_names=english_display_names(egg_groups),
        )
