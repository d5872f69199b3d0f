"""Tests for RegistryDataProvider and FilterDataProvider."""

import logging

import pytest
from hypothesis import event, given

from cldrprovider.diagnostics import DataError, DataErrorKind
from cldrprovider.enums import IsoWeekday
from cldrprovider.provider import (
    DataLocale,
    DataPayload,
    DataRequest,
    FilterDataProvider,
    RegistryDataProvider,
    StaticRef,
)
from tests.helpers.markers import (
    BorrowedText,
    CalendarGreetingV1Marker,
    CountV1Marker,
    Greeting,
    GreetingAliasV1Marker,
    GreetingV1Marker,
    RegionGreetingV1Marker,
    WeekdayV1Marker,
)
from tests.strategies import data_locales


@pytest.fixture
def provider() -> RegistryDataProvider:
    """Registry with greetings for root, en and en-GB, plus a singleton."""
    registry = RegistryDataProvider("test")
    registry.register_static(GreetingV1Marker, DataLocale.root(), Greeting("hello"))
    registry.register_owned(GreetingV1Marker, DataLocale.from_parts("en"), Greeting("hi"))
    registry.register_owned(
        GreetingV1Marker, DataLocale.from_parts("en", region="GB"), Greeting("hiya")
    )
    registry.register_empty(GreetingV1Marker, DataLocale.from_parts("fr"))
    registry.register_static(WeekdayV1Marker, DataLocale.root(), IsoWeekday.MONDAY)
    return registry


def _req(language: str = "und", region: str = "", *, silent: bool = False) -> DataRequest:
    return DataRequest.for_locale(DataLocale.from_parts(language, region=region), silent=silent)


class TestRegistryLoad:
    """Test successful loads and locale resolution."""

    def test_exact_match_has_no_locale_metadata(self, provider: RegistryDataProvider) -> None:
        """An exact hit leaves metadata.locale unset."""
        response = provider.load(GreetingV1Marker, _req("en", "GB"))
        assert response.take_payload().get() == Greeting("hiya")
        assert response.metadata.locale is None

    def test_fallback_reports_matched_locale(self, provider: RegistryDataProvider) -> None:
        """A fallback hit reports where the data came from."""
        response = provider.load(GreetingV1Marker, _req("en", "US"))
        assert response.take_payload().get() == Greeting("hi")
        assert response.metadata.locale == DataLocale.from_parts("en")

    def test_fallback_to_root_warns(
        self, provider: RegistryDataProvider, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Falling back to root data logs a warning."""
        with caplog.at_level(logging.WARNING, logger="cldrprovider"):
            response = provider.load(GreetingV1Marker, _req("de"))
        assert response.take_payload().get() == Greeting("hello")
        assert response.metadata.locale == DataLocale.root()
        assert "Falling back to root" in caplog.text

    def test_silent_fallback_does_not_warn(
        self, provider: RegistryDataProvider, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Silent requests do not log fallbacks."""
        with caplog.at_level(logging.WARNING, logger="cldrprovider"):
            provider.load(GreetingV1Marker, _req("de", silent=True))
        assert caplog.text == ""

    def test_successful_load_logs_debug(
        self, provider: RegistryDataProvider, caplog_debug: pytest.LogCaptureFixture
    ) -> None:
        """Loads are logged at DEBUG level."""
        provider.load(GreetingV1Marker, _req("en"))
        assert "Loaded test/greeting@1" in caplog_debug.text

    def test_empty_entry_yields_no_payload(self, provider: RegistryDataProvider) -> None:
        """A registered-as-empty locale answers with no payload."""
        response = provider.load(GreetingV1Marker, _req("fr", "CA"))
        assert response.payload is None
        assert response.metadata.locale == DataLocale.from_parts("fr")

    def test_static_entry_stays_static(self, provider: RegistryDataProvider) -> None:
        """Static registrations load as static payloads."""
        payload = provider.load(GreetingV1Marker, _req()).take_payload()
        assert payload.is_static()

    def test_owned_buffer_entries_share_cart(self) -> None:
        """Every load of a buffer entry shares one cart."""
        registry = RegistryDataProvider()

        def build(buf: memoryview) -> Greeting:
            return BorrowedText(buf).to_owned()

        registry.register_owned_buffer(GreetingAliasV1Marker, DataLocale.root(), b"moin", build)
        first = registry.load(GreetingAliasV1Marker, _req()).take_payload()
        second = registry.load(GreetingAliasV1Marker, _req()).take_payload()
        assert first.get() == Greeting("moin")
        assert first.cart is not None
        assert first.cart is second.cart

    def test_factory_receives_matched_locale(self) -> None:
        """Factories are called with the candidate that matched."""
        seen: list[DataLocale] = []

        def factory(locale: DataLocale) -> DataPayload[GreetingV1Marker]:
            seen.append(locale)
            return DataPayload.from_owned(GreetingV1Marker, Greeting(str(locale)))

        registry = RegistryDataProvider()
        registry.register_factory(GreetingV1Marker, DataLocale.from_parts("de"), factory)
        response = registry.load(GreetingV1Marker, _req("de", "AT"))
        assert response.take_payload().get() == Greeting("de")
        assert seen == [DataLocale.from_parts("de")]

    def test_factory_data_error_gets_key(self) -> None:
        """DataErrors raised by a factory are attributed to the key."""

        def factory(_locale: DataLocale) -> DataPayload[GreetingV1Marker]:
            raise DataError.custom("generator failed")

        registry = RegistryDataProvider()
        registry.register_factory(GreetingV1Marker, DataLocale.root(), factory)
        with pytest.raises(DataError) as exc_info:
            registry.load(GreetingV1Marker, _req())
        assert exc_info.value.kind is DataErrorKind.CUSTOM
        assert exc_info.value.key == GreetingV1Marker.KEY

    def test_extension_keyword_selects_variant(self) -> None:
        """Keys with an extension key resolve on the keyword."""
        registry = RegistryDataProvider()
        japanese = DataLocale.from_parts(keywords=(("ca", "japanese"),))
        registry.register_static(CalendarGreetingV1Marker, DataLocale.root(), Greeting("plain"))
        registry.register_static(CalendarGreetingV1Marker, japanese, Greeting("wareki"))
        req = DataRequest(DataLocale.from_parts("ja", region="JP", keywords=(("ca", "japanese"),)))
        assert registry.load(CalendarGreetingV1Marker, req).take_payload().get() == Greeting(
            "wareki"
        )

    def test_region_priority(self) -> None:
        """Region keys resolve und-REGION before the language."""
        registry = RegistryDataProvider()
        registry.register_static(RegionGreetingV1Marker, DataLocale.root(), Greeting("world"))
        registry.register_static(
            RegionGreetingV1Marker, DataLocale.from_parts(region="GB"), Greeting("britain")
        )
        response = registry.load(RegionGreetingV1Marker, _req("cy", "GB"))
        assert response.take_payload().get() == Greeting("britain")

    @given(loc=data_locales())
    def test_root_data_answers_every_locale(self, loc: DataLocale) -> None:
        """With root data registered, non-root requests always succeed."""
        registry = RegistryDataProvider()
        registry.register_static(GreetingV1Marker, DataLocale.root(), Greeting("root"))
        response = registry.load(GreetingV1Marker, DataRequest.for_locale(loc, silent=True))
        event(f"fell_back={response.metadata.locale is not None}")
        assert response.take_payload().get() == Greeting("root")


class TestRegistryErrors:
    """Test each error signal of the registry."""

    def test_unknown_key(self, provider: RegistryDataProvider) -> None:
        """Unregistered keys raise MISSING_DATA_KEY."""
        with pytest.raises(DataError) as exc_info:
            provider.load(CountV1Marker, _req())
        assert exc_info.value.kind is DataErrorKind.MISSING_DATA_KEY
        assert exc_info.value.key == CountV1Marker.KEY

    def test_unknown_key_warns_unless_silent(
        self, provider: RegistryDataProvider, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Misses log a warning for non-silent requests only."""
        with caplog.at_level(logging.WARNING, logger="cldrprovider"):
            with pytest.raises(DataError):
                provider.load(CountV1Marker, _req(silent=True))
            assert caplog.text == ""
            with pytest.raises(DataError):
                provider.load(CountV1Marker, _req())
        assert "test/count@1" in caplog.text

    def test_singleton_with_locale(self, provider: RegistryDataProvider) -> None:
        """Singleton keys reject non-root locales."""
        with pytest.raises(DataError) as exc_info:
            provider.load(WeekdayV1Marker, _req("en"))
        assert exc_info.value.kind is DataErrorKind.EXTRANEOUS_LOCALE
        assert exc_info.value.str_context == "en"

    def test_singleton_with_root(self, provider: RegistryDataProvider) -> None:
        """Singleton keys load with the root locale."""
        assert provider.load(WeekdayV1Marker, _req()).take_payload().get() is IsoWeekday.MONDAY

    def test_needs_locale(self) -> None:
        """Root requests for locale data without root data raise NEEDS_LOCALE."""
        registry = RegistryDataProvider()
        registry.register_static(GreetingV1Marker, DataLocale.from_parts("en"), Greeting("hi"))
        with pytest.raises(DataError) as exc_info:
            registry.load(GreetingV1Marker, _req())
        assert exc_info.value.kind is DataErrorKind.NEEDS_LOCALE

    def test_missing_locale(self) -> None:
        """No candidate in the chain raises MISSING_LOCALE naming the locale."""
        registry = RegistryDataProvider()
        registry.register_static(GreetingV1Marker, DataLocale.from_parts("en"), Greeting("hi"))
        with pytest.raises(DataError) as exc_info:
            registry.load(GreetingV1Marker, _req("de", "CH"))
        assert exc_info.value.kind is DataErrorKind.MISSING_LOCALE
        assert exc_info.value.str_context == "de-CH"

    def test_mismatched_marker(self) -> None:
        """Loading a key with a marker other than the registered one fails."""

        class ImpostorMarker(GreetingV1Marker):
            data_type = int

        registry = RegistryDataProvider()
        registry.register_static(GreetingV1Marker, DataLocale.root(), Greeting("x"))
        with pytest.raises(DataError) as exc_info:
            registry.load(ImpostorMarker, _req())
        assert exc_info.value.kind is DataErrorKind.MISMATCHED_TYPE
        assert exc_info.value.str_context == "GreetingV1Marker"

    def test_register_key_for_second_marker_rejected(self) -> None:
        """One key cannot be registered under two markers."""

        class ImpostorMarker(GreetingV1Marker):
            pass

        registry = RegistryDataProvider()
        registry.register_static(GreetingV1Marker, DataLocale.root(), Greeting("x"))
        with pytest.raises(ValueError, match="already registered"):
            registry.register_static(ImpostorMarker, DataLocale.root(), Greeting("y"))


class TestRegistryIntrospection:
    """Test keys(), supported_locales() and load_any()."""

    def test_keys_sorted(self, provider: RegistryDataProvider) -> None:
        """keys() lists registered keys sorted by path."""
        assert [k.path for k in provider.keys()] == ["test/greeting@1", "test/weekday@1"]

    def test_supported_locales(self, provider: RegistryDataProvider) -> None:
        """supported_locales() lists a marker's locales, sorted."""
        locales = [str(loc) for loc in provider.supported_locales(GreetingV1Marker)]
        assert sorted(locales) == ["en", "en-GB", "fr", "und"]
        assert provider.supported_locales(CountV1Marker) == []

    def test_load_any_static(self, provider: RegistryDataProvider) -> None:
        """load_any erases static data into a StaticRef."""
        response = provider.load_any(GreetingV1Marker.KEY, _req())
        assert response.payload is not None
        assert isinstance(response.payload.inner, StaticRef)
        assert response.downcast(GreetingV1Marker).take_payload().get() == Greeting("hello")

    def test_load_any_unknown_key(self, provider: RegistryDataProvider) -> None:
        """load_any on an unknown key raises MISSING_DATA_KEY."""
        with pytest.raises(DataError) as exc_info:
            provider.load_any(CountV1Marker.KEY, _req())
        assert exc_info.value.kind is DataErrorKind.MISSING_DATA_KEY

    def test_repr(self, provider: RegistryDataProvider) -> None:
        """repr names the provider and key count."""
        assert repr(provider) == "RegistryDataProvider('test', keys=2)"


class TestFilterDataProvider:
    """Test request filtering."""

    def test_allowed_language_passes(self, provider: RegistryDataProvider) -> None:
        """Requests for allowed languages reach the inner provider."""
        filtered = FilterDataProvider.allow_languages(provider, ["en"])
        assert filtered.load(GreetingV1Marker, _req("en")).take_payload().get() == Greeting("hi")

    def test_root_always_passes(self, provider: RegistryDataProvider) -> None:
        """Root requests are never filtered by language."""
        filtered = FilterDataProvider.allow_languages(provider, ["en"])
        assert filtered.load(WeekdayV1Marker, _req()).payload is not None

    def test_rejected_language(self, provider: RegistryDataProvider) -> None:
        """Other languages raise FILTERED_RESOURCE with the filter description."""
        filtered = FilterDataProvider.allow_languages(provider, ["en"])
        with pytest.raises(DataError) as exc_info:
            filtered.load(GreetingV1Marker, _req("de"))
        error = exc_info.value
        assert error.kind is DataErrorKind.FILTERED_RESOURCE
        assert error.key == GreetingV1Marker.KEY
        assert error.str_context == "languages ['en']"

    def test_custom_predicate_and_load_any(self, provider: RegistryDataProvider) -> None:
        """load_any honours the predicate and delegates to the inner provider."""
        filtered = FilterDataProvider(provider, lambda req: req.metadata.silent, "silent only")
        with pytest.raises(DataError):
            filtered.load_any(GreetingV1Marker.KEY, _req())
        response = filtered.load_any(GreetingV1Marker.KEY, _req(silent=True))
        assert response.payload is not None

    def test_load_any_requires_any_provider(self) -> None:
        """Inner providers without load_any raise MISSING_DATA_KEY."""

        class TypedOnly:
            def load(self, marker: object, req: DataRequest) -> None:
                raise AssertionError

        filtered = FilterDataProvider(TypedOnly(), lambda _req: True)
        with pytest.raises(DataError) as exc_info:
            filtered.load_any(GreetingV1Marker.KEY, _req())
        assert exc_info.value.kind is DataErrorKind.MISSING_DATA_KEY
