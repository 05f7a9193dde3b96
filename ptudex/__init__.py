"""ptudex package."""

from .capabilities import CapabilityFormatter
from .checkpoint import load_checkpoint, save_checkpoint
from .diff import diff, is_equal
from .errors import (
    ExtractionError,
    MissingCheckpointError,
    PtudexError,
    ReferenceDataError,
    UnresolvedIdentityError,
)
from .hatching import HatchRateMapper
from .models import CanonicalRecord, Genderless, GenderSplit, RawRecord
from .naming import NameNormalizer
from .sources.pokeapi import PokeApiClient, ReferenceData, ReferenceDataFetcher
from .timing import PerformanceMetricTracker
from .translator import RecordTranslator

__all__ = [
    "CapabilityFormatter",
    "load_checkpoint",
    "save_checkpoint",
    "diff",
    "is_equal",
    "ExtractionError",
    "MissingCheckpointError",
    "PtudexError",
    "ReferenceDataError",
    "UnresolvedIdentityError",
    "HatchRateMapper",
    "CanonicalRecord",
    "Genderless",
    "GenderSplit",
    "RawRecord",
    "NameNormalizer",
    "PokeApiClient",
    "ReferenceData",
    "ReferenceDataFetcher",
    "PerformanceMetricTracker",
    "RecordTranslator",
]
