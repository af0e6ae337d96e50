"""
First-Name Gender Lookup Module

This module maps a raw first-name string to one of five gender classifications using
curated name dictionaries organised into priority tiers.

## Overview

The core functionality is provided by the `GenderNameLookup` class, which runs a short,
deterministic pipeline over each name:

1. **Initial Stripping**: Initials such as "J." or "Q." are removed ("Robert J. Smith" → "Robert  Smith")
2. **Key Building**: Spaces and hyphens become the "+" wildcard token ("Mary-Jane" → "Mary+Jane")
3. **Tier Selection**: Wildcard keys go to the Wildcard tier, plain keys to the US-only tier
4. **Foreign Fallback**: Foreign patterns are compared with their own "+" tokens removed
5. **Romanization**: If nothing matched and the name contains Han characters, steps 1-4 run
   again with the Han runs converted to toneless pinyin ("秀英" → "xiuying")

Anything that falls through every tier is classified as `Gender.UNKNOWN`.

## Architecture

- **GenderCoderConfig**: Immutable configuration (paths, wildcard token, polling, workers)
- **NormalizationService**: Pure string normalization, no dictionary access
- **NameDictionary**: Loads and refreshes the four name tables (All, US-only, Foreign, Wildcard)
- **NameTiers**: Immutable snapshot of the three tiers consulted at lookup time
- **GenderNameLookup**: The tiered lookup itself, bound to one snapshot

## Usage Examples

```python
from gendercoder.gender_names import GenderNameLookup, NameDictionary, Gender

dictionary = NameDictionary.from_entries(
    us=[("john", "M")],
    wildcard=[("mary+jane", "F")],
    foreign=[("liu", "?F")],
)
lookup = GenderNameLookup(dictionary.snapshot())

lookup.classify("John Q.")    # Gender.MALE
lookup.classify("Mary-Jane")  # Gender.FEMALE
lookup.classify("Liu")        # Gender.MOSTLY_FEMALE
lookup.classify("Zzyzx")      # Gender.UNKNOWN

lookup.lookup("Mary Jane")
# LookupResult(raw='Mary Jane', key='Mary+Jane', gender=<Gender.FEMALE>, tier='wildcard')
```

## Dictionary Files

Each table is a CSV file with a `name,gender` header, read from `GenderCoderConfig.data_dir`:

- **all_names.csv**: Every known name (kept for inspection, never consulted by lookup)
- **us_names.csv**: US-only names
- **foreign_names.csv**: International names
- **wildcard_names.csv**: Compound names containing "+"

Gender codes are `M`, `F`, `?M` (mostly male), `?F` (mostly female) and `?` (unknown).
A missing file falls back to the bundled seed table in `gender_names_data`.

## Thread Safety

Lookup is a pure function of the input string and an immutable `NameTiers` snapshot.
A `GenderNameLookup` can be shared by any number of threads without locking.
Refreshing a `NameDictionary` replaces whole tiers; snapshots taken earlier are unaffected.
"""

from __future__ import annotations
import csv
import re
import logging
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union
from functools import lru_cache
from dataclasses import dataclass, replace

import pypinyin
from gendercoder.gender_names_data import SEED_TABLES


# ════════════════════════════════════════════════════════════════════════════════
# CLASSIFICATION VALUES
# ════════════════════════════════════════════════════════════════════════════════


class Gender(Enum):
    """Five-valued gender classification."""

    UNKNOWN = "unknown"
    MALE = "male"
    MOSTLY_MALE = "mostly_male"
    FEMALE = "female"
    MOSTLY_FEMALE = "mostly_female"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "Gender":
        """Parse a dictionary gender code ("M", "?F", ...) or enum name. Unrecognised codes are UNKNOWN."""
        if not code:
            return cls.UNKNOWN
        normalized = code.strip().upper()
        if normalized in _GENDER_CODES:
            return _GENDER_CODES[normalized]
        try:
            return cls[normalized]
        except KeyError:
            return cls.UNKNOWN


_GENDER_CODES = MappingProxyType(
    {
        "M": Gender.MALE,
        "F": Gender.FEMALE,
        "?M": Gender.MOSTLY_MALE,
        "?F": Gender.MOSTLY_FEMALE,
        "?": Gender.UNKNOWN,
        "U": Gender.UNKNOWN,
    }
)


# ════════════════════════════════════════════════════════════════════════════════
# DICTIONARY DATA STRUCTURES
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class NameEntry:
    """One dictionary record. `pattern` may contain the wildcard token."""

    pattern: str
    gender: Gender


EntryLike = Union[NameEntry, Tuple[str, Union[Gender, str]]]


def _coerce_entry(entry: EntryLike) -> NameEntry:
    if isinstance(entry, NameEntry):
        return entry
    pattern, gender = entry
    if not isinstance(gender, Gender):
        gender = Gender.from_code(gender)
    return NameEntry(pattern=pattern.strip(), gender=gender)


@dataclass(frozen=True)
class NameTier:
    """
    Immutable tier of name entries with a casefolded index.

    The index keeps the first entry seen for each key, so iteration order of
    `entries` decides ties. When `strip_token` is set, the token is removed
    from each pattern before indexing (loose matching for the Foreign tier).
    """

    name: str
    entries: Tuple[NameEntry, ...]
    index: Mapping[str, Gender]

    @classmethod
    def build(cls, name: str, entries: Iterable[NameEntry], strip_token: Optional[str] = None) -> "NameTier":
        frozen_entries = tuple(entries)
        index: Dict[str, Gender] = {}
        for entry in frozen_entries:
            key = entry.pattern.casefold()
            if strip_token:
                key = key.replace(strip_token, "")
            index.setdefault(key, entry.gender)
        return cls(name=name, entries=frozen_entries, index=MappingProxyType(index))

    def match(self, key: str) -> Optional[Gender]:
        """Return the gender of the first entry equal to `key` ignoring case (casefolded), or None."""
        return self.index.get(key.casefold())

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class NameTiers:
    """Read-only snapshot of the three tiers consulted at lookup time."""

    us: NameTier
    foreign: NameTier
    wildcard: NameTier

    @classmethod
    def empty(cls) -> "NameTiers":
        return cls(
            us=NameTier.build("us", ()),
            foreign=NameTier.build("foreign", ()),
            wildcard=NameTier.build("wildcard", ()),
        )


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a single lookup, with the normalized key and the tier that matched."""

    raw: Optional[str]
    key: str
    gender: Gender
    tier: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.tier is not None


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION
# ════════════════════════════════════════════════════════════════════════════════

DEFAULT_TABLE_FILES = MappingProxyType(
    {
        "all": "all_names.csv",
        "us": "us_names.csv",
        "foreign": "foreign_names.csv",
        "wildcard": "wildcard_names.csv",
    }
)


@dataclass(frozen=True)
class GenderCoderConfig:
    """Immutable configuration for dictionary loading, normalization and batch dispatch."""

    # Dictionary location; None means bundled seed tables only
    data_dir: Optional[Path]
    table_files: Mapping[str, str]

    # Normalization
    wildcard_token: str
    romanize_han: bool
    han_pattern: re.Pattern[str]

    # Batch dispatch
    poll_interval: float
    worker_count: Optional[int]
    parallel: bool

    def __post_init__(self) -> None:
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.worker_count is not None and self.worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {self.worker_count}")
        if len(self.wildcard_token) != 1:
            raise ValueError(f"wildcard_token must be a single character, got {self.wildcard_token!r}")

    @classmethod
    def create_default(cls) -> "GenderCoderConfig":
        """Factory method for the default configuration."""
        return cls(
            data_dir=Path.home() / ".cache" / "gendercoder",
            table_files=DEFAULT_TABLE_FILES,
            wildcard_token="+",
            romanize_han=True,
            han_pattern=re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff]+"),
            poll_interval=2.0,
            worker_count=None,
            parallel=True,
        )

    def with_data_dir(self, data_dir: Optional[Path]) -> "GenderCoderConfig":
        return replace(self, data_dir=data_dir)

    def with_poll_interval(self, poll_interval: float) -> "GenderCoderConfig":
        return replace(self, poll_interval=poll_interval)

    def with_workers(self, worker_count: Optional[int], parallel: bool = True) -> "GenderCoderConfig":
        return replace(self, worker_count=worker_count, parallel=parallel)

    def with_romanization(self, enabled: bool) -> "GenderCoderConfig":
        return replace(self, romanize_han=enabled)

    def effective_worker_count(self, cpu_count: Optional[int] = None) -> int:
        """Pool size: explicit worker_count, else processing units + 2, never below 1."""
        if self.worker_count is not None:
            return self.worker_count
        return max(1, (cpu_count or 0) + 2)


# ════════════════════════════════════════════════════════════════════════════════
# NORMALIZATION SERVICE
# ════════════════════════════════════════════════════════════════════════════════


@lru_cache(maxsize=4096)
def _han_to_pinyin(han_str: str) -> str:
    return "".join(pypinyin.lazy_pinyin(han_str, style=pypinyin.Style.NORMAL))


class NormalizationService:
    """Pure normalization: raw name → lookup key. Never touches a dictionary."""

    def __init__(self, config: Optional[GenderCoderConfig] = None):
        self._config = config or GenderCoderConfig.create_default()

    def romanize(self, text: str) -> str:
        """Replace each run of Han characters with its concatenated toneless pinyin."""
        if not self._config.romanize_han or not self._config.han_pattern.search(text):
            return text
        try:
            return self._config.han_pattern.sub(lambda m: _han_to_pinyin(m.group(0)), text)
        except (AttributeError, ValueError, TypeError) as e:
            logging.warning(f"Pypinyin failed for '{text}': {e}")
            return text

    @staticmethod
    def strip_initials(text: str) -> str:
        """
        Remove initials such as "J." from a name.

        For each period, the span from the nearest preceding space (or the
        start of the string) through the period is dropped, then the result
        is re-trimmed. Repeats until no period remains.
        """
        working = text.strip()
        while "." in working:
            dot_index = working.index(".")
            start = working.rfind(" ", 0, dot_index) + 1
            working = (working[:start] + working[dot_index + 1 :]).strip()
        return working

    def to_key(self, text: str) -> str:
        """Replace spaces and hyphens with the wildcard token."""
        token = self._config.wildcard_token
        return text.strip().replace(" ", token).replace("-", token)

    def lookup_key(self, raw_name: Optional[str], romanize: bool = False) -> str:
        """
        Full pipeline. Returns "" when nothing usable remains.

        With `romanize=True` Han runs are converted to pinyin before the
        initials are stripped. Lookup uses that key only when the plain key
        matched nothing.
        """
        if not raw_name:
            return ""
        working = self.strip_initials(self.romanize(raw_name) if romanize else raw_name)
        if not working:
            return ""
        return self.to_key(working)


# ════════════════════════════════════════════════════════════════════════════════
# NAME DICTIONARY (four refreshable tables)
# ════════════════════════════════════════════════════════════════════════════════


class NameDictionary:
    """
    Holds the All, US-only, Foreign and Wildcard tables.

    Each table can be refreshed independently. Refreshing swaps in a new
    immutable `NameTier`, so snapshots already handed to a lookup keep the
    data they were taken with.
    """

    TABLES: Tuple[str, ...] = ("all", "us", "foreign", "wildcard")

    def __init__(self, config: Optional[GenderCoderConfig] = None, load: bool = True):
        self._config = config or GenderCoderConfig.create_default()
        self._tables: Dict[str, NameTier] = {table: NameTier.build(table, ()) for table in self.TABLES}
        if load:
            self.refresh_all()

    @classmethod
    def from_entries(
        cls,
        us: Iterable[EntryLike] = (),
        foreign: Iterable[EntryLike] = (),
        wildcard: Iterable[EntryLike] = (),
        all_names: Optional[Iterable[EntryLike]] = None,
        config: Optional[GenderCoderConfig] = None,
    ) -> "NameDictionary":
        """Build a dictionary from in-memory entries instead of files."""
        dictionary = cls(config=config, load=False)
        us_entries = tuple(_coerce_entry(e) for e in us)
        foreign_entries = tuple(_coerce_entry(e) for e in foreign)
        wildcard_entries = tuple(_coerce_entry(e) for e in wildcard)
        if all_names is None:
            all_entries = us_entries + wildcard_entries + foreign_entries
        else:
            all_entries = tuple(_coerce_entry(e) for e in all_names)

        for table, entries in (
            ("all", all_entries),
            ("us", us_entries),
            ("foreign", foreign_entries),
            ("wildcard", wildcard_entries),
        ):
            dictionary._tables[table] = dictionary._build_tier(table, entries)
        return dictionary

    @property
    def config(self) -> GenderCoderConfig:
        return self._config

    def tier(self, table: str) -> NameTier:
        if table not in self._tables:
            raise ValueError(f"Unknown name table '{table}', expected one of {self.TABLES}")
        return self._tables[table]

    @property
    def all_names(self) -> NameTier:
        return self._tables["all"]

    @property
    def us_names(self) -> NameTier:
        return self._tables["us"]

    @property
    def foreign_names(self) -> NameTier:
        return self._tables["foreign"]

    @property
    def wildcard_names(self) -> NameTier:
        return self._tables["wildcard"]

    def snapshot(self) -> NameTiers:
        """Immutable view of the three lookup tiers as they are right now."""
        return NameTiers(us=self.us_names, foreign=self.foreign_names, wildcard=self.wildcard_names)

    def refresh_all(self) -> None:
        for table in self.TABLES:
            self.refresh(table)

    def refresh(self, table: str) -> NameTier:
        """Reload one table from its CSV file (or the bundled seed table) and swap it in."""
        if table not in self.TABLES:
            raise ValueError(f"Unknown name table '{table}', expected one of {self.TABLES}")
        tier = self._build_tier(table, self._load_entries(table))
        self._tables[table] = tier
        logging.info(f"Loaded {len(tier)} {table} names")
        return tier

    def _build_tier(self, table: str, entries: Tuple[NameEntry, ...]) -> NameTier:
        token = self._config.wildcard_token
        if table == "wildcard":
            kept = tuple(e for e in entries if token in e.pattern)
            if len(kept) != len(entries):
                logging.warning(f"Dropped {len(entries) - len(kept)} wildcard names without '{token}'")
            entries = kept
        return NameTier.build(table, entries, strip_token=token if table == "foreign" else None)

    def _table_path(self, table: str) -> Optional[Path]:
        if self._config.data_dir is None:
            return None
        filename = self._config.table_files.get(table)
        if not filename:
            return None
        return Path(self._config.data_dir) / filename

    def _load_entries(self, table: str) -> Tuple[NameEntry, ...]:
        file_path = self._table_path(table)
        if file_path is None or not file_path.exists():
            return tuple(_coerce_entry(e) for e in SEED_TABLES[table])

        try:
            return self._read_csv(file_path)
        except (OSError, csv.Error, KeyError, ValueError) as e:
            logging.warning(f"Failed to load {table} names from {file_path}: {e}. Using an empty table.")
            return ()

    @staticmethod
    def _read_csv(file_path: Path) -> Tuple[NameEntry, ...]:
        entries = []
        with file_path.open(encoding="utf-8-sig", newline="") as f:
            for row in csv.DictReader(f):
                pattern = (row["name"] or "").strip()
                if not pattern:
                    continue
                entries.append(NameEntry(pattern=pattern, gender=Gender.from_code(row["gender"])))
        return tuple(entries)


# ════════════════════════════════════════════════════════════════════════════════
# TIERED LOOKUP
# ════════════════════════════════════════════════════════════════════════════════


class GenderNameLookup:
    """Tiered lookup bound to one immutable tier snapshot. Safe to share across threads."""

    def __init__(
        self,
        tiers: Optional[NameTiers] = None,
        normalizer: Optional[NormalizationService] = None,
        config: Optional[GenderCoderConfig] = None,
    ):
        self._config = config or GenderCoderConfig.create_default()
        self._tiers = tiers or NameTiers.empty()
        self._normalizer = normalizer or NormalizationService(self._config)

    @property
    def tiers(self) -> NameTiers:
        return self._tiers

    def classify(self, raw_name: Optional[str]) -> Gender:
        return self.lookup(raw_name).gender

    def lookup(self, raw_name: Optional[str]) -> LookupResult:
        """
        Main API method: classify one raw name.

        Never raises; empty, unmatched or malformed input yields Gender.UNKNOWN.
        """
        key = self._normalizer.lookup_key(raw_name)
        if not key:
            return LookupResult(raw=raw_name, key=key, gender=Gender.UNKNOWN)

        result = self._match_tiers(raw_name, key)
        if result.matched or not self._config.romanize_han:
            return result

        # Han names missing from every tier get a second try as pinyin
        romanized = self._normalizer.lookup_key(raw_name, romanize=True)
        if romanized and romanized != key:
            romanized_result = self._match_tiers(raw_name, romanized)
            if romanized_result.matched:
                return romanized_result
        return result

    def _match_tiers(self, raw_name: Optional[str], key: str) -> LookupResult:
        # Compound keys only consult the Wildcard tier before the fallback
        primary = self._tiers.wildcard if self._config.wildcard_token in key else self._tiers.us
        gender = primary.match(key)
        if gender is not None:
            return LookupResult(raw=raw_name, key=key, gender=gender, tier=primary.name)

        gender = self._tiers.foreign.match(key)
        if gender is not None:
            return LookupResult(raw=raw_name, key=key, gender=gender, tier=self._tiers.foreign.name)

        return LookupResult(raw=raw_name, key=key, gender=Gender.UNKNOWN)
