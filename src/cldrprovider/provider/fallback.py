"""Locale fallback chains.

Given a requested locale and a key's fallback metadata, produce the ordered
sequence of locales a provider should try. Every chain ends at root.

    language priority:  ja-Hant-JP-u-ca-japanese-nu-latn
                        -> ja-Hant-JP-u-ca-japanese (only "ca" kept)
                        -> ja-Hant-u-ca-japanese -> ja-u-ca-japanese
                        -> und-u-ca-japanese -> und
    region priority:    en-GB -> und-GB -> und

Only the key's own extension keyword survives the first step; it is
dropped last.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from cldrprovider.constants import ROOT_LANGUAGE
from cldrprovider.enums import FallbackPriority

from .request import DataLocale, LanguageIdentifier

if TYPE_CHECKING:
    from .key import DataKeyMetadata

__all__ = ["fallback_chain"]

logger = logging.getLogger(__name__)


def _language_steps(langid: LanguageIdentifier) -> Iterator[LanguageIdentifier]:
    current = langid
    yield current
    if current.variants:
        current = LanguageIdentifier(current.language, current.script, current.region)
        yield current
    if current.region:
        current = LanguageIdentifier(current.language, current.script)
        yield current
    if current.script:
        current = LanguageIdentifier(current.language)
        yield current
    if current.language != ROOT_LANGUAGE:
        yield LanguageIdentifier()


def _region_steps(langid: LanguageIdentifier) -> Iterator[LanguageIdentifier]:
    yield langid
    if langid.region:
        yield LanguageIdentifier(ROOT_LANGUAGE, "", langid.region)
    yield LanguageIdentifier()


def fallback_chain(locale: DataLocale, metadata: DataKeyMetadata) -> Iterator[DataLocale]:
    """Yield candidate locales for ``locale``, most specific first.

    The requested locale itself is always the first candidate and
    ``DataLocale.root()`` always the last. Duplicates are skipped.

    Args:
        locale: Requested locale
        metadata: Fallback metadata of the key being loaded

    Yields:
        Candidate locales in lookup order
    """
    seen: set[DataLocale] = set()

    def fresh(candidate: DataLocale) -> bool:
        if candidate in seen:
            return False
        seen.add(candidate)
        return True

    if fresh(locale):
        yield locale

    retained: tuple[tuple[str, str], ...] = ()
    if metadata.extension_key is not None:
        value = locale.get_unicode_ext(metadata.extension_key)
        if value is not None:
            retained = ((metadata.extension_key, value),)

    if metadata.fallback_priority is FallbackPriority.REGION:
        steps = _region_steps(locale.langid)
    else:
        # Collation uses the language chain; supplemental rules are not modelled.
        steps = _language_steps(locale.langid)

    for langid in steps:
        candidate = DataLocale(langid, retained)
        if fresh(candidate):
            logger.debug("Fallback %s -> %s", locale, candidate)
            yield candidate

    root = DataLocale.root()
    if fresh(root):
        yield root
