"""Tests for the baked data provider."""

import pytest

from cldrprovider.calendar import (
    JapaneseErasV1Marker,
    JapaneseExtendedErasV1Marker,
    WeekDataV1,
    WeekDataV1Marker,
    baked_provider,
)
from cldrprovider.calendar.baked import JAPANESE_ERAS, JAPANESE_EXTENDED_ERAS, WEEK_DATA
from cldrprovider.calendar.data import GregorianDateSymbolsV1Marker
from cldrprovider.calendar.types import EraStartDate
from cldrprovider.diagnostics import DataError, DataErrorKind
from cldrprovider.enums import IsoWeekday
from cldrprovider.provider import DataLocale, DataRequest, StaticRef


class TestBakedProvider:
    """Test the process-wide baked provider."""

    def test_built_once(self) -> None:
        """The provider is created on first use and reused."""
        assert baked_provider() is baked_provider()

    def test_registered_keys(self) -> None:
        """Eras, week data, and three calendars' symbols and lengths are baked."""
        paths = [key.path for key in baked_provider().keys()]
        assert paths == sorted(paths)
        assert "calendar/japanese@1" in paths
        assert "calendar/japanext@1" in paths
        assert "datetime/week_data@1" in paths
        assert "datetime/gregory/datesymbols@1" in paths
        assert len(paths) == 9
        assert repr(baked_provider()) == "RegistryDataProvider('baked', keys=9)"

    def test_week_data_locales(self) -> None:
        """Week data is registered per region plus the world default."""
        locales = baked_provider().supported_locales(WeekDataV1Marker)
        assert len(locales) == len(WEEK_DATA)
        assert DataLocale.root() in locales
        assert DataLocale.from_parts(region="GB") in locales


class TestBakedEras:
    """Test the baked Japanese era tables."""

    def test_modern_table(self) -> None:
        """Modern eras run from Meiji to Reiwa."""
        codes = [code for _, code in JAPANESE_ERAS.dates_to_eras]
        assert codes == ["meiji", "taisho", "showa", "heisei", "reiwa"]

    def test_extended_table(self) -> None:
        """The extended table prepends late Edo-period eras."""
        table = JAPANESE_EXTENDED_ERAS.dates_to_eras
        assert len(table) == 8
        assert table[0] == (EraStartDate(1861, 3, 29), "bunkyu-1861")
        assert list(table[3:]) == list(JAPANESE_ERAS.dates_to_eras)

    def test_loads_are_static(self) -> None:
        """Baked payloads wrap the module-level data itself."""
        payload = baked_provider().load(JapaneseErasV1Marker, DataRequest()).take_payload()
        assert payload.is_static()
        assert payload.cart is None
        assert payload.get() is JAPANESE_ERAS

    def test_erased_static_data_is_static_ref(self) -> None:
        """Erasing baked data yields a StaticRef that downcasts by data type."""
        response = baked_provider().load_any(JapaneseErasV1Marker.KEY, DataRequest())
        assert response.payload is not None
        assert isinstance(response.payload.inner, StaticRef)
        recovered = response.downcast(JapaneseExtendedErasV1Marker).take_payload()
        assert recovered.marker is JapaneseExtendedErasV1Marker
        assert recovered.get() is JAPANESE_ERAS

    def test_singleton_rejects_locale(self) -> None:
        """Era data is locale-independent."""
        req = DataRequest(DataLocale.from_parts("ja"))
        with pytest.raises(DataError) as exc_info:
            baked_provider().load(JapaneseErasV1Marker, req)
        assert exc_info.value.kind is DataErrorKind.EXTRANEOUS_LOCALE


class TestBakedLocaleData:
    """Test baked week rules and symbols."""

    def test_root_week_data(self) -> None:
        """The world default is Monday-first with one-day minimum."""
        data = baked_provider().load(WeekDataV1Marker, DataRequest()).take_payload().get()
        assert data == WeekDataV1(IsoWeekday.MONDAY, 1)

    def test_region_week_data_reports_match(self) -> None:
        """Region fallback reports the und-<region> entry it used."""
        req = DataRequest(DataLocale.from_parts("en", region="GB"))
        response = baked_provider().load(WeekDataV1Marker, req)
        assert response.metadata.locale == DataLocale.from_parts(region="GB")
        assert response.take_payload().get().min_week_days == 4

    def test_symbols_language_fallback(self) -> None:
        """English variants fall back to English symbols."""
        req = DataRequest(DataLocale.from_parts("en", region="AU"))
        response = baked_provider().load(GregorianDateSymbolsV1Marker, req)
        assert response.metadata.locale == DataLocale.from_parts("en")
        assert response.take_payload().get().month_name(12) == "December"

    def test_debug_logging(self, caplog_debug: pytest.LogCaptureFixture) -> None:
        """Each load logs the provider name and matched locale."""
        req = DataRequest(DataLocale.from_parts("en", region="US"))
        baked_provider().load(WeekDataV1Marker, req)
        assert "[baked] Loaded datetime/week_data@1" in caplog_debug.text
