from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag
from pydantic.alias_generators import to_camel


class PokemonType(str, Enum):
    """The eighteen elemental types."""

    bug = "Bug"
    dark = "Dark"
    dragon = "Dragon"
    electric = "Electric"
    fairy = "Fairy"
    fighting = "Fighting"
    fire = "Fire"
    flying = "Flying"
    ghost = "Ghost"
    grass = "Grass"
    ground = "Ground"
    ice = "Ice"
    normal = "Normal"
    poison = "Poison"
    psychic = "Psychic"
    rock = "Rock"
    steel = "Steel"
    water = "Water"


class SizeClass(str, Enum):
    """PTU height classes."""

    small = "Small"
    medium = "Medium"
    large = "Large"
    huge = "Huge"
    gigantic = "Gigantic"


class RecordModel(BaseModel):
    """Base for stat block models.

    Attributes are snake_case in Python and camelCase on the wire, so the JSON
    checkpoints and stored payloads keep names such as ``baseStats``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Shared sub-structures
# ---------------------------------------------------------------------------


class BaseStats(RecordModel):
    hp: int
    attack: int
    defense: int
    special_attack: int
    special_defense: int
    speed: int


class Abilities(RecordModel):
    basic_abilities: List[str]
    advanced_abilities: List[str]
    high_ability: str


class EvolutionStage(RecordModel):
    name: str
    level: int
    stage: int


class Capabilities(RecordModel):
    """Movement capabilities; optional movement modes are ``None`` when absent."""

    overland: int
    swim: Optional[int] = None
    sky: Optional[int] = None
    levitate: Optional[int] = None
    burrow: Optional[int] = None
    high_jump: int
    low_jump: int
    power: int
    other: Optional[List[str]] = None


class Skills(RecordModel):
    athletics: str
    acrobatics: str
    combat: str
    stealth: str
    perception: str
    focus: str


class LevelUpMove(RecordModel):
    move: str
    level: Union[int, Literal["Evo"]]
    type: PokemonType


# ---------------------------------------------------------------------------
# Gender ratio
# ---------------------------------------------------------------------------


class GenderSplit(RecordModel):
    male: int
    female: int


class Genderless(RecordModel):
    none: Literal[True] = True


class RawGenderless(RecordModel):
    none: bool


def _gender_ratio_tag(value: Any) -> str:
    if isinstance(value, dict):
        return "split" if "male" in value or "female" in value else "none"
    return "split" if isinstance(value, GenderSplit) else "none"


GenderRatio = Annotated[
    Union[
        Annotated[GenderSplit, Tag("split")],
        Annotated[Genderless, Tag("none")],
    ],
    Discriminator(_gender_ratio_tag),
]

RawGenderRatio = Annotated[
    Union[
        Annotated[GenderSplit, Tag("split")],
        Annotated[RawGenderless, Tag("none")],
    ],
    Discriminator(_gender_ratio_tag),
]


# ---------------------------------------------------------------------------
# Extraction output
# ---------------------------------------------------------------------------


class RawHeight(RecordModel):
    ptu: SizeClass
    imperial: str
    metric: str


class RawWeight(RecordModel):
    ptu: int
    imperial: str
    metric: str


class RawSizeInformation(RecordModel):
    height: RawHeight
    weight: RawWeight


class RawBreedingInformation(RecordModel):
    gender_ratio: RawGenderRatio


class RawMoveList(RecordModel):
    level_up: List[LevelUpMove]
    tm_hm: List[str]


class RawRecord(RecordModel):
    """A stat block as returned by the extraction step."""

    name: str = Field(min_length=1)
    types: List[PokemonType] = Field(min_length=1, max_length=2)
    base_stats: BaseStats
    abilities: Abilities
    evolution: List[EvolutionStage]
    capabilities: Capabilities
    size_information: RawSizeInformation
    breeding_information: RawBreedingInformation
    diets: List[str]
    habitats: List[str]
    skills: Skills
    move_list: RawMoveList


# ---------------------------------------------------------------------------
# Canonical (persisted) record
# ---------------------------------------------------------------------------


class Height(RecordModel):
    ptu: SizeClass
    freedom: str
    metric: str


class Weight(RecordModel):
    ptu: int
    freedom: str
    metric: str


class SizeInformation(RecordModel):
    height: Height
    weight: Weight


class BreedingInformation(RecordModel):
    gender_ratio: GenderRatio
    egg_groups: List[Optional[str]] = Field(default_factory=list)
    average_hatch_rate: Optional[str] = None


class MoveList(RecordModel):
    level_up: List[LevelUpMove]
    tm_hm: List[str]
    egg_moves: List[str] = Field(default_factory=list)
    tutor_moves: List[str] = Field(default_factory=list)
    zygarde_cube_moves: Optional[List[str]] = None


class MegaEvolutionStats(RecordModel):
    hp: Optional[str] = None
    attack: Optional[str] = None
    defense: Optional[str] = None
    special_attack: Optional[str] = None
    special_defense: Optional[str] = None
    speed: Optional[str] = None


class MegaEvolution(RecordModel):
    name: str
    types: List[PokemonType]
    ability: str
    # Necrozma's Ultra Burst
    ability_shift: Optional[str] = None
    capabilities: Optional[List[str]] = None
    stats: MegaEvolutionStats


class Extra(RecordModel):
    name: str
    value: str


class Metadata(RecordModel):
    source: str
    page: Optional[str] = None
    dex_number: Optional[str] = None


class CanonicalRecord(RecordModel):
    """Normalized, reference-enriched record ready for persistence."""

    name: str = Field(min_length=1)
    types: List[PokemonType]
    base_stats: BaseStats
    abilities: Abilities
    evolution: List[EvolutionStage]
    size_information: SizeInformation
    breeding_information: BreedingInformation
    diets: List[str]
    habitats: List[str]
    capabilities: Capabilities
    skills: Skills
    move_list: MoveList
    mega_evolutions: Optional[List[MegaEvolution]] = None
    metadata: Metadata
    extras: Optional[List[Extra]] = None


# ---------------------------------------------------------------------------
# PokeAPI payloads
# ---------------------------------------------------------------------------


class ApiModel(BaseModel):
    """PokeAPI resources; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class NamedResource(ApiModel):
    name: str
    url: Optional[str] = None


class PokedexNumber(ApiModel):
    entry_number: int
    pokedex: NamedResource


class LocalizedName(ApiModel):
    name: str
    language: NamedResource


class SpeciesRecord(ApiModel):
    name: str
    egg_groups: List[NamedResource] = Field(default_factory=list)
    hatch_counter: Optional[int] = None
    pokedex_numbers: List[PokedexNumber] = Field(default_factory=list)


class EggGroupRecord(ApiModel):
    name: str
    names: List[LocalizedName] = Field(default_factory=list)
