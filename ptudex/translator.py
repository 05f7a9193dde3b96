"""Translate extracted stat blocks into canonical, reference-enriched records.

Translation is all-or-nothing: reference data is fetched once for the whole
batch and the first record that cannot be resolved aborts the batch.
"""

import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

from .capabilities import CapabilityFormatter
from .errors import UnresolvedIdentityError
from .hatching import HatchRateMapper
from .models import (
    BreedingInformation,
    Capabilities,
    CanonicalRecord,
    Genderless,
    GenderSplit,
    Height,
    Metadata,
    MoveList,
    RawGenderRatio,
    RawMoveList,
    RawRecord,
    RawSizeInformation,
    SizeInformation,
    Weight,
)
from .naming import NameNormalizer
from .sources.pokeapi import NATIONAL_POKEDEX, ReferenceData, ReferenceDataFetcher

logger = logging.getLogger(__name__)

SOURCE = "Paldea Dex"
# Page of the first Pokémon stat block in the Paldea Dex rulebook.
FIRST_POKEMON_PAGE = 48
# Species whose male and female forms share one PokeAPI entry but are printed
# as separate stat blocks.
GENDERED_SPECIES: Tuple[str, ...] = ("oinkologne",)
OPTIONAL_MOVEMENT = ("swim", "sky", "levitate", "burrow")


class ReferenceFields(NamedTuple):
    egg_groups: List[Optional[str]]
    national_pokedex_number: Optional[int]
    average_hatch_rate: Optional[int]


def resolve_gender_ratio(ratio: RawGenderRatio) -> Union[GenderSplit, Genderless]:
    """Keep a male/female split only when it accounts for every Pokémon."""
    if isinstance(ratio, GenderSplit) and ratio.male + ratio.female == 100:
        return GenderSplit(male=ratio.male, female=ratio.female)
    return Genderless()


def convert_size_information(size: RawSizeInformation) -> SizeInformation:
    return SizeInformation(
        height=Height(
            ptu=size.height.ptu,
            freedom=size.height.imperial,
            metric=size.height.metric,
        ),
        weight=Weight(
            ptu=size.weight.ptu,
            freedom=size.weight.imperial,
            metric=size.weight.metric,
        ),
    )


def convert_move_list(move_list: RawMoveList) -> MoveList:
    # No separate tutor data exists for this generation; tutor moves mirror TM/HM.
    return MoveList(
        level_up=[move.model_copy() for move in move_list.level_up],
        tm_hm=list(move_list.tm_hm),
        tutor_moves=list(move_list.tm_hm),
        egg_moves=[],
    )


class RecordTranslator:
    def __init__(
        self,
        fetcher: ReferenceDataFetcher,
        normalizer: Optional[NameNormalizer] = None,
        formatter: Optional[CapabilityFormatter] = None,
        hatch_mapper: Optional[HatchRateMapper] = None,
        starting_page_offset: int = 0,
        source: str = SOURCE,
        first_page: int = FIRST_POKEMON_PAGE,
        gendered_species: Sequence[str] = GENDERED_SPECIES,
    ):
        self.fetcher = fetcher
        self.normalizer = normalizer or NameNormalizer()
        self.formatter = formatter or CapabilityFormatter()
        self.hatch_mapper = hatch_mapper or HatchRateMapper()
        self.starting_page_offset = starting_page_offset
        self.source = source
        self.first_page = first_page
        self.gendered_species = tuple(s.lower() for s in gendered_species)

    def translate(self, records: Sequence[RawRecord]) -> List[CanonicalRecord]:
        """Translate *records* in order, failing the batch on the first error."""
        if not records:
            return []

        reference = self.fetcher.fetch([record.name.lower() for record in records])
        translated = [
            self.translate_record(record, index, reference)
            for index, record in enumerate(records)
        ]
        logger.info("Translated %d records", len(translated))
        return translated

    def derive_reference_fields(self, record: RawRecord, reference: ReferenceData) -> ReferenceFields:
        """Egg groups, national number and hatch rate for *record*."""
        species = reference.species_for(self.normalizer.normalize(record.name.lower()))
        if species is None:
            return ReferenceFields([], None, None)

        egg_groups = [
            reference.group_display_names.get(group.name) for group in species.egg_groups
        ]
        national_number = next(
            (
                entry.entry_number
                for entry in species.pokedex_numbers
                if entry.pokedex.name == NATIONAL_POKEDEX
            ),
            None,
        )
        return ReferenceFields(
            egg_groups=egg_groups,
            national_pokedex_number=national_number,
            average_hatch_rate=self.hatch_mapper.map_hatch_counter(species.hatch_counter),
        )

    def filter_capabilities(self, capabilities: Capabilities) -> Capabilities:
        """Drop optional capabilities that are zero or empty in the source."""
        optional = {
            field: getattr(capabilities, field)
            for field in OPTIONAL_MOVEMENT
            if getattr(capabilities, field)
        }
        other = self.formatter.format(capabilities.other) if capabilities.other else None
        return Capabilities(
            overland=capabilities.overland,
            high_jump=capabilities.high_jump,
            low_jump=capabilities.low_jump,
            power=capabilities.power,
            other=other,
            **optional,
        )

    def display_name(self, name: str) -> str:
        lowered = name.lower()
        for species in self.gendered_species:
            if species not in lowered:
                continue
            if "female" in lowered:
                return f"{species.capitalize()} (Female)"
            if "male" in lowered:
                return f"{species.capitalize()} (Male)"
        return name

    def page_for(self, index: int) -> str:
        return f"p.{self.first_page + index + self.starting_page_offset}"

    def translate_record(self, record: RawRecord, index: int, reference: ReferenceData) -> CanonicalRecord:
        fields = self.derive_reference_fields(record, reference)
        if fields.national_pokedex_number is None:
            raise UnresolvedIdentityError(record.name)

        logger.debug("Translating %s (#%d)", record.name, fields.national_pokedex_number)
        return CanonicalRecord(
            name=self.display_name(record.name),
            types=list(record.types),
            base_stats=record.base_stats.model_copy(),
            abilities=record.abilities.model_copy(deep=True),
            evolution=[stage.model_copy() for stage in record.evolution],
            size_information=convert_size_information(record.size_information),
            breeding_information=BreedingInformation(
                gender_ratio=resolve_gender_ratio(record.breeding_information.gender_ratio),
                egg_groups=fields.egg_groups,
                average_hatch_rate=HatchRateMapper.format_rate(fields.average_hatch_rate),
            ),
            diets=list(record.diets),
            habitats=list(record.habitats),
            capabilities=self.filter_capabilities(record.capabilities),
            skills=record.skills.model_copy(),
            move_list=convert_move_list(record.move_list),
            metadata=Metadata(
                source=self.source,
                page=self.page_for(index),
                dex_number=f"#{fields.national_pokedex_number}",
            ),
        )
