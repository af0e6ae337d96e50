"""
Tests for name normalization and the tiered lookup.

Covers:
- Initial stripping ("Robert J. Smith", "J. Robert", "John Q.")
- Wildcard key building for compound and hyphenated names
- Tier routing: wildcard keys never consult the US-only tier
- Foreign fallback with "+" removed from dictionary patterns
- Han names retried as pinyin only after the plain key misses
- Totality: every input maps to one of the five classifications
"""

import sys
from pathlib import Path
import pytest

# Add the parent directory to path to import gendercoder
sys.path.insert(0, str(Path(__file__).parent.parent))

from gendercoder.gender_names import (
    Gender,
    GenderCoderConfig,
    GenderNameLookup,
    NameDictionary,
    NormalizationService,
)


@pytest.fixture(scope="module")
def config():
    return GenderCoderConfig.create_default().with_data_dir(None)


@pytest.fixture(scope="module")
def normalizer(config):
    return NormalizationService(config)


@pytest.fixture(scope="module")
def example_lookup(config):
    dictionary = NameDictionary.from_entries(
        us=[("john", "M")],
        wildcard=[("mary+jane", "F")],
        foreign=[("liu", "?F")],
        config=config,
    )
    return GenderNameLookup(dictionary.snapshot(), config=config)


# (input, expected key) pairs for the normalization pipeline
KEY_TEST_CASES = [
    ("John", "John"),
    ("  John  ", "John"),
    ("John Q.", "John"),
    ("J. Robert", "Robert"),
    ("J.Robert", "Robert"),
    ("Robert J. Smith", "Robert++Smith"),
    ("A. B. Carl", "Carl"),
    ("Mary-Jane", "Mary+Jane"),
    ("Mary Jane", "Mary+Jane"),
    ("Jean-Luc Paul", "Jean+Luc+Paul"),
    (".", ""),
    ("J.", ""),
    ("   ", ""),
    ("", ""),
]


def test_lookup_keys(normalizer):
    failed = 0
    for raw, expected in KEY_TEST_CASES:
        key = normalizer.lookup_key(raw)
        if key != expected:
            failed += 1
            print(f"FAILED: '{raw}': expected key '{expected}', got '{key}'")

    assert failed == 0, f"Key tests: {failed} failures out of {len(KEY_TEST_CASES)} tests"


def test_strip_initials_leaves_no_periods(normalizer):
    for raw in ("Robert J. Smith", "J. Robert", "P.Y. Huang", "Dr. J. R. R. Tolkien", "..."):
        assert "." not in normalizer.strip_initials(raw)


def test_normalization_is_idempotent_on_keys(normalizer):
    for raw in ("John", "Mary+Jane", "xiuying", "Jean+Luc+Paul"):
        assert normalizer.lookup_key(raw) == raw
        assert normalizer.lookup_key(normalizer.lookup_key(raw)) == raw


def test_han_characters_are_romanized(normalizer):
    assert normalizer.romanize("秀英") == "xiuying"
    assert normalizer.romanize("John") == "John"


def test_romanization_can_be_disabled(config):
    normalizer = NormalizationService(config.with_romanization(False))
    assert normalizer.romanize("秀英") == "秀英"


def test_lookup_key_romanizes_only_on_request(normalizer):
    assert normalizer.lookup_key("秀英") == "秀英"
    assert normalizer.lookup_key("秀英", romanize=True) == "xiuying"
    assert normalizer.lookup_key("J. 秀英", romanize=True) == "xiuying"


def test_han_dictionary_entries_match_before_romanization(config):
    dictionary = NameDictionary.from_entries(us=[("秀英", "F")], foreign=[("明", "M")], config=config)
    lookup = GenderNameLookup(dictionary.snapshot(), config=config)

    result = lookup.lookup("秀英")
    assert result.gender is Gender.FEMALE
    assert result.tier == "us"
    assert result.key == "秀英"

    result = lookup.lookup("明")
    assert result.gender is Gender.MALE
    assert result.tier == "foreign"
    assert result.key == "明"


def test_romanized_key_is_a_fallback(config):
    dictionary = NameDictionary.from_entries(
        us=[("秀英", "?F")], foreign=[("xiu+ying", "F"), ("ming", "M")], config=config
    )
    lookup = GenderNameLookup(dictionary.snapshot(), config=config)

    # plain key wins when both spellings are in the dictionary
    assert lookup.lookup("秀英").gender is Gender.MOSTLY_FEMALE

    result = lookup.lookup("明")
    assert result.gender is Gender.MALE
    assert result.key == "ming"

    unmatched = lookup.lookup("芳")
    assert unmatched.gender is Gender.UNKNOWN
    assert unmatched.key == "芳"


def test_romanized_fallback_can_be_disabled(config):
    no_pinyin = config.with_romanization(False)
    dictionary = NameDictionary.from_entries(us=[("秀英", "F")], foreign=[("ming", "M")], config=no_pinyin)
    lookup = GenderNameLookup(dictionary.snapshot(), config=no_pinyin)

    assert lookup.classify("秀英") is Gender.FEMALE
    assert lookup.classify("明") is Gender.UNKNOWN


def test_example_batch_of_four(example_lookup):
    names = ["John Q.", "Mary-Jane", "Liu", "Zzyzx"]
    genders = [example_lookup.classify(name) for name in names]
    assert genders == [Gender.MALE, Gender.FEMALE, Gender.MOSTLY_FEMALE, Gender.UNKNOWN]


def test_lookup_is_case_insensitive(example_lookup):
    assert example_lookup.classify("JOHN") is Gender.MALE
    assert example_lookup.classify("mary JANE") is Gender.FEMALE
    assert example_lookup.classify("lIU") is Gender.MOSTLY_FEMALE


def test_lookup_casefolds_non_ascii_names(config):
    dictionary = NameDictionary.from_entries(
        us=[("Joß", "M")], foreign=[("strauß", "M"), ("ΣΟΦΙΑ", "F")], config=config
    )
    lookup = GenderNameLookup(dictionary.snapshot(), config=config)

    assert lookup.classify("JOSS") is Gender.MALE
    assert lookup.classify("Strauss") is Gender.MALE
    assert lookup.classify("σοφια") is Gender.FEMALE


def test_lookup_reports_matching_tier(example_lookup):
    assert example_lookup.lookup("John").tier == "us"
    assert example_lookup.lookup("Mary Jane").tier == "wildcard"
    assert example_lookup.lookup("Liu").tier == "foreign"

    unmatched = example_lookup.lookup("Zzyzx")
    assert unmatched.tier is None
    assert not unmatched.matched
    assert unmatched.key == "Zzyzx"


def test_wildcard_key_never_consults_us_tier(config):
    # "mary+jane" only exists in the US tier, so a compound input must miss it
    dictionary = NameDictionary.from_entries(us=[("mary+jane", "F"), ("mary", "F")], config=config)
    lookup = GenderNameLookup(dictionary.snapshot(), config=config)

    assert lookup.classify("Mary-Jane") is Gender.UNKNOWN
    assert lookup.classify("Mary") is Gender.FEMALE


def test_plain_key_never_consults_wildcard_tier(config):
    dictionary = NameDictionary.from_entries(wildcard=[("jo+ann", "F")], config=config)
    lookup = GenderNameLookup(dictionary.snapshot(), config=config)

    assert lookup.classify("Jo Ann") is Gender.FEMALE
    assert lookup.classify("Joann") is Gender.UNKNOWN


def test_wildcard_miss_falls_through_to_foreign(config):
    dictionary = NameDictionary.from_entries(foreign=[("mary+jane", "?F")], config=config)
    lookup = GenderNameLookup(dictionary.snapshot(), config=config)

    # foreign patterns lose their "+", the input key keeps it
    assert lookup.classify("Maryjane") is Gender.MOSTLY_FEMALE
    assert lookup.classify("Mary-Jane") is Gender.UNKNOWN


def test_us_miss_falls_through_to_foreign(config):
    dictionary = NameDictionary.from_entries(us=[("john", "M")], foreign=[("giovanni", "M")], config=config)
    lookup = GenderNameLookup(dictionary.snapshot(), config=config)

    result = lookup.lookup("Giovanni")
    assert result.gender is Gender.MALE
    assert result.tier == "foreign"


def test_first_entry_wins_within_tier(config):
    dictionary = NameDictionary.from_entries(us=[("jordan", "?M"), ("JORDAN", "F")], config=config)
    lookup = GenderNameLookup(dictionary.snapshot(), config=config)
    assert lookup.classify("Jordan") is Gender.MOSTLY_MALE


def test_empty_dictionary_degrades_to_unknown(config):
    lookup = GenderNameLookup(config=config)
    for name in ("John", "Mary-Jane", "Liu", ""):
        assert lookup.classify(name) is Gender.UNKNOWN


@pytest.mark.parametrize(
    "raw",
    ["", " ", ".", "..", "-", "+", "- -", "J. .", "\t", "名", "👍", "O'Brien", "x" * 500, None],
)
def test_lookup_is_total(example_lookup, raw):
    assert example_lookup.classify(raw) in set(Gender)


def test_gender_codes():
    assert Gender.from_code("M") is Gender.MALE
    assert Gender.from_code("f") is Gender.FEMALE
    assert Gender.from_code("?M") is Gender.MOSTLY_MALE
    assert Gender.from_code(" ?f ") is Gender.MOSTLY_FEMALE
    assert Gender.from_code("?") is Gender.UNKNOWN
    assert Gender.from_code("mostly_male") is Gender.MOSTLY_MALE
    assert Gender.from_code("nonsense") is Gender.UNKNOWN
    assert Gender.from_code("") is Gender.UNKNOWN
    assert Gender.from_code(None) is Gender.UNKNOWN


def test_invalid_config_values_are_rejected():
    default = GenderCoderConfig.create_default()
    with pytest.raises(ValueError):
        default.with_poll_interval(0)
    with pytest.raises(ValueError):
        default.with_workers(0)


def test_effective_worker_count():
    default = GenderCoderConfig.create_default()
    assert default.effective_worker_count(8) == 10
    assert default.effective_worker_count(None) == 2
    assert default.with_workers(3).effective_worker_count(8) == 3
