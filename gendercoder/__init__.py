from gendercoder.gender_names import (
    Gender,
    GenderCoderConfig,
    GenderNameLookup,
    LookupResult,
    NameDictionary,
    NameEntry,
    NameTier,
    NameTiers,
    NormalizationService,
)
from gendercoder.processor import (
    BatchSession,
    GenderCodingInput,
    GenderCodingResult,
    GenderProcessor,
    explain_name,
    get_gender,
    get_gender_results,
    reset_global_processor,
)

__all__ = [
    "Gender",
    "GenderCoderConfig",
    "GenderNameLookup",
    "LookupResult",
    "NameDictionary",
    "NameEntry",
    "NameTier",
    "NameTiers",
    "NormalizationService",
    "BatchSession",
    "GenderCodingInput",
    "GenderCodingResult",
    "GenderProcessor",
    "explain_name",
    "get_gender",
    "get_gender_results",
    "reset_global_processor",
]
