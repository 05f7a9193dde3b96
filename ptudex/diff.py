"""Field-wise equality and minimal diffs between canonical records.

Used to review a freshly translated record against one that is already
stored before it gets overwritten. Database identifiers are not part of
:class:`~ptudex.models.CanonicalRecord`, so they never take part in a
comparison.

Each top-level field has one comparison rule, shared by :func:`is_equal` and
:func:`diff`:

* lists of scalars (types, abilities, egg groups, diets, habitats, TM/tutor/
  egg moves) compare as unordered collections of the same length;
* evolution stages match by name, then level and stage;
* level-up moves match on the (move, level, type) triple;
* mega evolutions match by name together with all of their details;
* everything else compares by value.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .models import (
    Abilities,
    BreedingInformation,
    Capabilities,
    CanonicalRecord,
    EvolutionStage,
    Extra,
    MegaEvolution,
    MoveList,
)

Comparator = Callable[[Any, Any], bool]


def same_members(a: Optional[Sequence[Any]], b: Optional[Sequence[Any]]) -> bool:
    a = list(a or [])
    b = list(b or [])
    return len(a) == len(b) and all(item in b for item in a)


def _same_value(a: Any, b: Any) -> bool:
    return a == b


def _same_abilities(a: Abilities, b: Abilities) -> bool:
    return (
        same_members(a.basic_abilities, b.basic_abilities)
        and same_members(a.advanced_abilities, b.advanced_abilities)
        and a.high_ability == b.high_ability
    )


def _same_evolution(a: List[EvolutionStage], b: List[EvolutionStage]) -> bool:
    # A length change alone counts as a difference.
    if len(a) != len(b):
        return False
    for stage in a:
        match = next((other for other in b if other.name == stage.name), None)
        if match is None or match.level != stage.level or match.stage != stage.stage:
            return False
    return True


def _same_breeding(a: BreedingInformation, b: BreedingInformation) -> bool:
    return (
        a.gender_ratio == b.gender_ratio
        and same_members(a.egg_groups, b.egg_groups)
        and a.average_hatch_rate == b.average_hatch_rate
    )


def _same_capabilities(a: Capabilities, b: Capabilities) -> bool:
    scalars = ("overland", "swim", "sky", "levitate", "burrow", "high_jump", "low_jump", "power")
    return all(getattr(a, f) == getattr(b, f) for f in scalars) and same_members(a.other, b.other)


def _same_move_list(a: MoveList, b: MoveList) -> bool:
    level_up_matches = len(a.level_up) == len(b.level_up) and all(
        any(
            move.move == other.move and move.level == other.level and move.type == other.type
            for other in b.level_up
        )
        for move in a.level_up
    )
    return (
        level_up_matches
        and same_members(a.tm_hm, b.tm_hm)
        and same_members(a.egg_moves, b.egg_moves)
        and same_members(a.tutor_moves, b.tutor_moves)
        and same_members(a.zygarde_cube_moves, b.zygarde_cube_moves)
    )


def _same_mega_evolutions(
    a: Optional[List[MegaEvolution]], b: Optional[List[MegaEvolution]]
) -> bool:
    a = a or []
    b = b or []
    if len(a) != len(b):
        return False
    return all(
        any(mega.name == other.name and mega == other for other in b) for mega in a
    )


def _same_extras(a: Optional[List[Extra]], b: Optional[List[Extra]]) -> bool:
    return (a or []) == (b or [])


FIELD_COMPARATORS: Tuple[Tuple[str, Comparator], ...] = (
    ("name", _same_value),
    ("types", same_members),
    ("base_stats", _same_value),
    ("abilities", _same_abilities),
    ("evolution", _same_evolution),
    ("size_information", _same_value),
    ("breeding_information", _same_breeding),
    ("diets", same_members),
    ("habitats", same_members),
    ("capabilities", _same_capabilities),
    ("skills", _same_value),
    ("move_list", _same_move_list),
    ("mega_evolutions", _same_mega_evolutions),
    ("metadata", _same_value),
    ("extras", _same_extras),
)


def changed_fields(a: CanonicalRecord, b: CanonicalRecord) -> List[str]:
    """Names of the top-level fields that differ between *a* and *b*."""
    return [
        field
        for field, compare in FIELD_COMPARATORS
        if not compare(getattr(a, field), getattr(b, field))
    ]


def is_equal(a: CanonicalRecord, b: CanonicalRecord) -> bool:
    return not changed_fields(a, b)


def diff(a: CanonicalRecord, b: CanonicalRecord) -> Dict[str, Any]:
    """Return *b*'s values for every field that differs from *a*.

    The result is keyed by wire (camelCase) names and always contains
    ``name`` so the change can be attributed.
    """
    dumped = b.to_json_dict()
    output: Dict[str, Any] = {"name": b.name}
    for field in changed_fields(a, b):
        if field == "name":
            continue
        alias = CanonicalRecord.model_fields[field].alias or field
        output[alias] = dumped.get(alias)
    return output
