"""Hypothesis strategies for locale requests.

All strategies build DataLocale values from parts, so they do not need
Babel; locale_tags produces strings for DataLocale.parse().
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st
from hypothesis.strategies import composite

from cldrprovider.provider import DataLocale

if TYPE_CHECKING:
    from hypothesis.strategies import SearchStrategy

# ============================================================================
# SUBTAGS
# ============================================================================

languages: SearchStrategy[str] = st.sampled_from(
    ["en", "de", "fr", "ja", "zh", "th", "ar", "sv", "lv", "und"]
)

scripts: SearchStrategy[str] = st.sampled_from(["", "", "Latn", "Hant", "Arab"])

regions: SearchStrategy[str] = st.sampled_from(["", "", "US", "GB", "DE", "JP", "TW", "EG"])

calendar_values: SearchStrategy[str] = st.sampled_from(
    ["gregory", "buddhist", "japanese", "japanext", "coptic", "ethiopic", "ethioaa", "iso"]
)

keyword_pairs: SearchStrategy[tuple[str, str]] = st.one_of(
    st.tuples(st.just("ca"), calendar_values),
    st.tuples(st.just("nu"), st.sampled_from(["latn", "arab", "thai"])),
    st.tuples(st.just("hc"), st.sampled_from(["h12", "h23"])),
)


# ============================================================================
# LOCALES
# ============================================================================


@composite
def data_locales(draw: st.DrawFn) -> DataLocale:
    """Generate a DataLocale from parts.

    Events emitted:
    - locale_shape={root|language|script|region|full}
    - locale_keywords={0|1|2+}
    """
    language = draw(languages)
    script = draw(scripts)
    region = draw(regions)
    keywords = draw(st.lists(keyword_pairs, max_size=3, unique_by=lambda kv: kv[0]))
    locale = DataLocale.from_parts(language, script, region, keywords=tuple(keywords))

    if locale.is_langid_root():
        shape = "root"
    elif script and region:
        shape = "full"
    elif script:
        shape = "script"
    elif region:
        shape = "region"
    else:
        shape = "language"
    event(f"locale_shape={shape}")
    event(f"locale_keywords={len(keywords) if len(keywords) < 2 else '2+'}")
    return locale


@composite
def locale_tags(draw: st.DrawFn) -> str:
    """Generate a BCP-47 tag (language, optional region, optional -u- keywords).

    Events emitted:
    - locale_tag_separator={bcp47|posix}
    """
    language = draw(st.sampled_from(["en", "de", "fr", "ja", "th", "sv"]))
    region = draw(st.sampled_from(["", "US", "GB", "JP", "TH"]))
    posix = draw(st.booleans())
    event(f"locale_tag_separator={'posix' if posix else 'bcp47'}")
    sep = "_" if posix else "-"
    tag = f"{language}{sep}{region}" if region else language
    if not posix:
        keywords = draw(st.lists(keyword_pairs, max_size=2, unique_by=lambda kv: kv[0]))
        if keywords:
            tag += "-u-" + "-".join(f"{k}-{v}" for k, v in keywords)
    return tag
