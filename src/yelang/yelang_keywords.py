"""
Provides the `KeywordTable` class: the immutable spelling-to-kind map used by the lexer.

The yelang surface uses Hindustani keywords (`ye`, `bol`, `agar`, ...). The table
that maps those words to token kinds is plain configuration: it is built once,
passed into the lexer, and never mutated. Extra spellings can be layered on top
of the defaults, either from a dict or from a JSON file, which returns a new
table.

Classes:
    - KeywordTable: Immutable mapping of keyword spellings to keyword token kinds.

Features:
    - Default table with the standard yelang keywords
    - Alias groups (str, list, tuple, set) mapped to one keyword kind
    - Collision detection that reports every conflicting alias at once
    - JSON loading with comma-separated alias groups
    - Sorted text report of the active spellings

Usage:
    >>> table = KeywordTable.default().with_aliases({("print", "likho"): "PRINT"})
    >>> table.lookup("likho")
    'PRINT'
"""

import json
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from yelang.yelang_constants import DEFAULT_KEYWORDS, KEYWORD_KINDS
from yelang.yelang_errors import KeywordTableError

logger = logging.getLogger(__name__)


class KeywordTable(Mapping[str, str]):
    """Immutable mapping from keyword spelling to keyword token kind.

    Attributes:
        entries (MappingProxyType[str, str]): Read-only view of spelling → kind.
    """

    __slots__ = ("entries",)

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        valid = set(KEYWORD_KINDS)
        for word, kind in (entries or {}).items():
            if kind not in valid:
                raise KeywordTableError(f"Unknown keyword kind: {kind} (for {word!r})")
            if not _is_word(word):
                raise KeywordTableError(f"Keyword spelling must be a word: {word!r}")
        self.entries: MappingProxyType[str, str] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, word: str) -> str:
        return self.entries[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"KeywordTable({dict(self.entries)!r})"

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def lookup(self, word: str) -> str | None:
        """Returns the keyword kind for `word`, or None if it is an ordinary identifier."""
        return self.entries.get(word)

    @classmethod
    def default(cls) -> "KeywordTable":
        """Returns the standard keyword table (`ye`, `bol`, `agar`, ...)."""
        return cls(DEFAULT_KEYWORDS)

    def with_aliases(self, cfg: Mapping[Any, str]) -> "KeywordTable":
        """Returns a new table with extra spellings added on top of this one.

        Args:
            cfg: Maps an alias or an alias group (str, list, tuple, set) to a
                keyword kind such as ``"PRINT"``.

        Returns:
            A new `KeywordTable`; this one is left untouched.

        Raises:
            KeywordTableError: If a kind is unknown, or if any alias would map to
                two different kinds. All collisions are reported together.
        """
        if not isinstance(cfg, Mapping):
            raise KeywordTableError("Keyword configuration must be a mapping")

        valid = set(KEYWORD_KINDS)
        merged: dict[str, str] = dict(self.entries)
        added: dict[str, str] = {}
        conflicts: list[str] = []

        for alias_group, kind in cfg.items():
            if kind not in valid:
                raise KeywordTableError(f"Unknown keyword kind: {kind}")
            for alias in _extract_aliases(alias_group):
                previous = added.get(alias, merged.get(alias))
                if previous is not None and previous != kind:
                    conflicts.append(f"'{alias}' → conflict between {previous} and {kind}")
                else:
                    added[alias] = kind

        if conflicts:
            raise KeywordTableError("Alias collision(s) detected", conflicts)

        merged.update(added)
        logger.debug("Keyword table extended with %d alias(es)", len(added))
        return KeywordTable(merged)

    @classmethod
    def from_json(cls, path: str) -> "KeywordTable":
        """Loads extra spellings from a JSON file and applies them to the defaults.

        The file holds an object whose keys are comma-separated alias groups and
        whose values are keyword kinds:

            {
                "likho,print": "PRINT",
                "jab": "WHILE"
            }

        Raises:
            KeywordTableError: If the file cannot be read or the configuration is invalid.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw_cfg = json.load(f)
            if not isinstance(raw_cfg, dict):
                raise KeywordTableError("Keyword file must hold a JSON object")

            parsed_cfg: dict[tuple[str, ...], str] = {}
            for key, value in raw_cfg.items():
                aliases = tuple(alias.strip() for alias in key.split(",") if alias.strip())
                parsed_cfg[aliases] = value

            return cls.default().with_aliases(parsed_cfg)
        except KeywordTableError:
            raise
        except (OSError, ValueError) as e:
            raise KeywordTableError(f"Failed to load keyword file: {e}") from e

    def report(self) -> str:
        """Returns a newline-separated `alias → KIND` listing sorted by alias."""
        return "\n".join(f"{alias:>12} → {kind}" for alias, kind in sorted(self.entries.items()))


def _is_word(word: Any) -> bool:
    return (
        isinstance(word, str)
        and bool(word)
        and word[0].isascii()
        and word[0].isalpha()
        and all(ch.isascii() and ch.isalnum() for ch in word)
    )


def _extract_aliases(entry: Any) -> list[str]:
    if entry is None:
        return []
    if isinstance(entry, str):
        return [entry]
    if isinstance(entry, (list, tuple, set, frozenset)):
        aliases: list[str] = []
        for item in entry:
            aliases.extend(_extract_aliases(item))
        return aliases
    return [str(entry)]
