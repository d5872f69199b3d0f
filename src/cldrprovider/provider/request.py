"""Locale request model.

DataLocale is the structured "for which locale" half of a data request. It
holds a language identifier plus the unicode extension keywords that select
data variants (``-u-ca-japanese`` picks the Japanese calendar).

Parsing happens at the boundary via DataLocale.parse(); everything inside
the package works with the structured value. Values are frozen, hashable,
and totally ordered so they can key lookup tables.

Python 3.13+. Babel is required only for DataLocale.parse().
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace

from cldrprovider.constants import ROOT_LANGUAGE
from cldrprovider.locale_utils import split_language_identifier

__all__ = [
    "DataLocale",
    "DataRequest",
    "DataRequestMetadata",
    "LanguageIdentifier",
]

_KEYWORD_KEY = re.compile(r"[a-z0-9][a-z]")
_KEYWORD_VALUE = re.compile(r"[a-z0-9]{3,8}")

type Keywords = tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True, order=True)
class LanguageIdentifier:
    """Language, script, region and variants of a locale.

    Empty strings mean "absent". ``und`` is the root language.
    """

    language: str = ROOT_LANGUAGE
    script: str = ""
    region: str = ""
    variants: tuple[str, ...] = ()

    def is_root(self) -> bool:
        """Check whether this is the bare root identifier."""
        return self.language == ROOT_LANGUAGE and not (self.script or self.region or self.variants)

    def subtags(self) -> list[str]:
        """Return the non-empty subtags in BCP-47 order."""
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        parts.extend(self.variants)
        return parts

    def __str__(self) -> str:
        """Return the BCP-47 form, e.g. ``zh-Hant-TW``."""
        return "-".join(self.subtags())


def _normalize_keywords(keywords: Keywords) -> Keywords:
    seen: dict[str, str] = {}
    for key, value in keywords:
        if not _KEYWORD_KEY.fullmatch(key):
            msg = f"Invalid unicode extension key: {key!r}"
            raise ValueError(msg)
        for part in value.split("-"):
            if not _KEYWORD_VALUE.fullmatch(part):
                msg = f"Invalid unicode extension value for {key!r}: {value!r}"
                raise ValueError(msg)
        seen[key] = value
    return tuple(sorted(seen.items()))


@dataclass(frozen=True, slots=True, order=True)
class DataLocale:
    """Locale half of a data request.

    Attributes:
        langid: Language identifier
        keywords: Unicode extension keywords as sorted (key, value) pairs

    Example:
        >>> loc = DataLocale.parse("ja-JP-u-ca-japanese")
        >>> loc.get_unicode_ext("ca")
        'japanese'
        >>> str(loc.without_keywords())
        'ja-JP'
    """

    langid: LanguageIdentifier = field(default_factory=LanguageIdentifier)
    keywords: Keywords = ()

    def __post_init__(self) -> None:
        """Sort and validate keywords.

        Raises:
            ValueError: If a keyword key or value is malformed
        """
        if self.keywords:
            object.__setattr__(self, "keywords", _normalize_keywords(self.keywords))

    @classmethod
    def root(cls) -> DataLocale:
        """Return the root locale (``und``, no keywords)."""
        return cls()

    @classmethod
    def from_parts(
        cls,
        language: str = ROOT_LANGUAGE,
        script: str = "",
        region: str = "",
        variants: tuple[str, ...] = (),
        keywords: Keywords = (),
    ) -> DataLocale:
        """Build a locale from already-validated subtags."""
        return cls(LanguageIdentifier(language, script, region, variants), keywords)

    @classmethod
    def parse(cls, tag: str) -> DataLocale:
        """Parse a BCP-47 (``ja-JP-u-ca-japanese``) or POSIX (``ja_JP``) tag.

        Only the ``-u-`` extension is retained; other extensions and private
        use subtags are rejected.

        Raises:
            ValueError: If the tag is malformed
            BabelImportError: If Babel is not installed
        """
        text = tag.strip().replace("_", "-")
        if not text:
            msg = "Locale tag cannot be empty"
            raise ValueError(msg)
        subtags = text.split("-")
        lowered = [s.lower() for s in subtags]
        keywords: list[tuple[str, str]] = []
        if "u" in lowered:
            split_at = lowered.index("u")
            ext = lowered[split_at + 1 :]
            subtags = subtags[:split_at]
            keywords = _parse_unicode_extension(ext, tag)
        if any(len(s) == 1 for s in subtags):
            msg = f"Unsupported extension in locale tag: {tag!r}"
            raise ValueError(msg)
        language, script, region, variants = split_language_identifier("-".join(subtags))
        return cls.from_parts(language, script, region, variants, tuple(keywords))

    @property
    def language(self) -> str:
        """Language subtag (``und`` for root)."""
        return self.langid.language

    @property
    def script(self) -> str:
        """Script subtag, or empty string."""
        return self.langid.script

    @property
    def region(self) -> str:
        """Region subtag, or empty string."""
        return self.langid.region

    def is_root(self) -> bool:
        """Check whether this is the root locale with no keywords."""
        return self.langid.is_root() and not self.keywords

    def is_langid_root(self) -> bool:
        """Check whether the language identifier is root, ignoring keywords."""
        return self.langid.is_root()

    def get_unicode_ext(self, key: str) -> str | None:
        """Return the value of unicode extension keyword ``key``, if set."""
        for k, value in self.keywords:
            if k == key:
                return value
        return None

    def with_unicode_ext(self, key: str, value: str) -> DataLocale:
        """Return a copy with keyword ``key`` set to ``value``."""
        updated = dict(self.keywords)
        updated[key] = value
        return replace(self, keywords=tuple(updated.items()))

    def without_unicode_ext(self, key: str) -> DataLocale:
        """Return a copy without keyword ``key``."""
        return replace(self, keywords=tuple((k, v) for k, v in self.keywords if k != key))

    def without_keywords(self) -> DataLocale:
        """Return a copy with all keywords removed."""
        return replace(self, keywords=())

    def with_langid(self, langid: LanguageIdentifier) -> DataLocale:
        """Return a copy with a different language identifier, keeping keywords."""
        return replace(self, langid=langid)

    def __str__(self) -> str:
        """Return the BCP-47 form."""
        text = str(self.langid)
        if self.keywords:
            ext = "-".join(f"{k}-{v}" for k, v in self.keywords)
            text = f"{text}-u-{ext}"
        return text


def _parse_unicode_extension(subtags: list[str], tag: str) -> list[tuple[str, str]]:
    keywords: list[tuple[str, str]] = []
    key: str | None = None
    values: list[str] = []
    for subtag in subtags:
        if _KEYWORD_KEY.fullmatch(subtag):
            if key is not None:
                keywords.append((key, "-".join(values) or "true"))
            key = subtag
            values = []
        elif key is not None and _KEYWORD_VALUE.fullmatch(subtag):
            values.append(subtag)
        else:
            msg = f"Invalid unicode extension subtag {subtag!r} in {tag!r}"
            raise ValueError(msg)
    if key is None:
        msg = f"Empty unicode extension in {tag!r}"
        raise ValueError(msg)
    keywords.append((key, "-".join(values) or "true"))
    return keywords


@dataclass(frozen=True, slots=True)
class DataRequestMetadata:
    """Request options that do not affect which data is selected.

    Attributes:
        silent: Do not log misses for this request (probing lookups)
    """

    silent: bool = False


@dataclass(frozen=True, slots=True)
class DataRequest:
    """A request for data: which locale, plus request options."""

    locale: DataLocale = field(default_factory=DataLocale)
    metadata: DataRequestMetadata = field(default_factory=DataRequestMetadata)

    @classmethod
    def for_locale(cls, locale: DataLocale | str, *, silent: bool = False) -> DataRequest:
        """Build a request, parsing ``locale`` when given as a string."""
        if isinstance(locale, str):
            locale = DataLocale.parse(locale)
        return cls(locale, DataRequestMetadata(silent=silent))
