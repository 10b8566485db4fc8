"""Unit tests for device and location enrichers.

Tests cover:
- User agent parsing with the real user-agents parser
- Blank and unknown agents
- IP geolocation with a patched GeoIP2 reader
- Private IPs, missing database and lookup errors (fail-open)
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import geoip2.errors
import pytest

from src.domain.protocols.session_enricher_protocol import LocationEnrichmentResult
from src.infrastructure.enrichers import IPLocationEnricher, UserAgentDeviceEnricher
from tests.utils.factories import CHROME_MAC, FIREFOX_WINDOWS, SAFARI_IPHONE

GOOGLEBOT = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"


@pytest.mark.unit
class TestUserAgentDeviceEnricher:
    @pytest.fixture
    def enricher(self, mock_logger):
        return UserAgentDeviceEnricher(logger=mock_logger)

    def test_desktop_chrome(self, enricher):
        result = enricher.enrich(CHROME_MAC)

        assert result.browser_name == "Chrome"
        assert result.browser_version.startswith("120")
        assert result.os_name == "Mac OS X"
        assert result.device_type == "desktop"
        assert result.is_mobile is False

    def test_windows_firefox(self, enricher):
        result = enricher.enrich(FIREFOX_WINDOWS)

        assert result.browser_name == "Firefox"
        assert result.os_name == "Windows"

    def test_iphone_is_mobile(self, enricher):
        result = enricher.enrich(SAFARI_IPHONE)

        assert result.browser_name == "Mobile Safari"
        assert result.os_name == "iOS"
        assert result.device_type == "mobile"
        assert result.is_mobile is True

    def test_bot(self, enricher):
        assert enricher.enrich(GOOGLEBOT).device_type == "bot"

    def test_blank_agent_returns_empty_result(self, enricher):
        result = enricher.enrich("")

        assert result.browser_name is None
        assert result.os_name is None
        assert result.device_type is None
        assert result.is_mobile is False

    def test_unrecognised_agent_maps_other_to_none(self, enricher):
        result = enricher.enrich("lms-sync-agent")

        assert result.browser_name is None
        assert result.os_name is None


def _city_response():
    return SimpleNamespace(
        city=SimpleNamespace(name="Lagos"),
        country=SimpleNamespace(name="Nigeria", iso_code="NG"),
        subdivisions=SimpleNamespace(most_specific=SimpleNamespace(name="Lagos")),
        location=SimpleNamespace(latitude=6.4541, longitude=3.3947),
    )


@pytest.mark.unit
class TestIPLocationEnricher:
    @pytest.fixture
    def db_file(self, tmp_path):
        path = tmp_path / "GeoLite2-City.mmdb"
        path.write_bytes(b"")
        return path

    @pytest.fixture
    def reader(self, monkeypatch):
        reader = MagicMock()
        reader.city.return_value = _city_response()
        monkeypatch.setattr(
            "src.infrastructure.enrichers.location_enricher.geoip2.database.Reader",
            MagicMock(return_value=reader),
        )
        return reader

    async def test_resolves_public_ip(self, mock_logger, db_file, reader):
        enricher = IPLocationEnricher(logger=mock_logger, db_path=str(db_file))

        result = await enricher.enrich("102.89.33.4")

        assert result.location == "Lagos, Nigeria"
        assert result.city == "Lagos"
        assert result.country_code == "NG"
        assert result.latitude == pytest.approx(6.4541)
        reader.city.assert_called_once_with("102.89.33.4")

    async def test_reader_opened_once(self, mock_logger, db_file, reader):
        enricher = IPLocationEnricher(logger=mock_logger, db_path=str(db_file))

        await enricher.enrich("102.89.33.4")
        await enricher.enrich("102.89.33.5")

        assert reader.city.call_count == 2
        mock_logger.info.assert_called_once()

    @pytest.mark.parametrize(
        "ip_address",
        ["10.0.0.8", "192.168.1.20", "127.0.0.1", "::1", "not-an-ip", ""],
    )
    async def test_private_or_invalid_ip_returns_empty(
        self, mock_logger, db_file, reader, ip_address
    ):
        enricher = IPLocationEnricher(logger=mock_logger, db_path=str(db_file))

        result = await enricher.enrich(ip_address)

        assert result.location is None
        reader.city.assert_not_called()

    async def test_no_database_configured(self, mock_logger):
        enricher = IPLocationEnricher(logger=mock_logger)

        result = await enricher.enrich("102.89.33.4")

        assert result.location is None
        mock_logger.warning.assert_not_called()

    async def test_missing_database_file_warns_once(self, mock_logger, tmp_path):
        enricher = IPLocationEnricher(
            logger=mock_logger,
            db_path=str(tmp_path / "missing.mmdb"),
        )

        await enricher.enrich("102.89.33.4")
        result = await enricher.enrich("102.89.33.4")

        assert result.location is None
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[0] == "geoip_database_missing"

    async def test_address_not_found(self, mock_logger, db_file, reader):
        reader.city.side_effect = geoip2.errors.AddressNotFoundError("not found")
        enricher = IPLocationEnricher(logger=mock_logger, db_path=str(db_file))

        result = await enricher.enrich("102.89.33.4")

        assert result.location is None
        mock_logger.debug.assert_called_once()

    async def test_lookup_error_is_fail_open(self, mock_logger, db_file, reader):
        reader.city.side_effect = RuntimeError("corrupt database")
        enricher = IPLocationEnricher(logger=mock_logger, db_path=str(db_file))

        result = await enricher.enrich("102.89.33.4")

        assert result.location is None
        assert mock_logger.warning.call_args.args[0] == "geoip_lookup_failed"

    async def test_close_releases_reader(self, mock_logger, db_file, reader):
        enricher = IPLocationEnricher(logger=mock_logger, db_path=str(db_file))
        await enricher.enrich("102.89.33.4")

        enricher.close()

        reader.close.assert_called_once()


@pytest.mark.unit
class TestLocationEnrichmentResult:
    def test_label_from_city_and_country(self):
        result = LocationEnrichmentResult(city="Kisumu", country="Kenya")

        assert result.location == "Kisumu, Kenya"

    def test_label_with_country_only(self):
        assert LocationEnrichmentResult(country="Ghana").location == "Ghana"

    def test_empty_result(self):
        assert LocationEnrichmentResult().location is None
