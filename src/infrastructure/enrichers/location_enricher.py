"""Location enricher implementation for IP geolocation.

Resolves IP addresses to locations using a MaxMind GeoIP2 City database.
Geolocation is best-effort: without a configured database every lookup
returns an empty result and sessions keep whatever location the caller
supplied.
"""

import ipaddress
from pathlib import Path

import geoip2.database
import geoip2.errors

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_enricher_protocol import LocationEnrichmentResult


class IPLocationEnricher:
    """Location enricher using MaxMind GeoIP2.

    Implements LocationEnricher protocol (structural typing).

    Behavior:
        - Fail-open: Returns empty result on errors (never blocks login)
        - Private IPs: Always return empty
        - Lazy loading: Database reader opened on first lookup

    Args:
        logger: Structured logger.
        db_path: Path to GeoLite2-City.mmdb. None disables geolocation.
    """

    def __init__(
        self,
        logger: LoggerProtocol,
        db_path: str | None = None,
    ) -> None:
        self._logger = logger
        self._db_path = db_path
        self._reader: geoip2.database.Reader | None = None
        self._reader_failed = False

    async def enrich(self, ip_address: str) -> LocationEnrichmentResult:
        """Resolve IP address to geographic location.

        Args:
            ip_address: Client IP address (IPv4 or IPv6).

        Returns:
            LocationEnrichmentResult; empty for private IPs, unknown IPs,
            a missing database, or any lookup error.
        """
        if not ip_address or self._is_private_ip(ip_address):
            return LocationEnrichmentResult()

        reader = self._get_reader()
        if reader is None:
            return LocationEnrichmentResult()

        try:
            response = reader.city(ip_address)
        except geoip2.errors.AddressNotFoundError:
            self._logger.debug("geoip_address_not_found", ip_address=ip_address)
            return LocationEnrichmentResult()
        except Exception as e:
            self._logger.warning(
                "geoip_lookup_failed",
                ip_address=ip_address,
                error=e,
            )
            return LocationEnrichmentResult()

        return LocationEnrichmentResult(
            city=response.city.name or None,
            region=response.subdivisions.most_specific.name or None,
            country=response.country.name or None,
            country_code=response.country.iso_code or None,
            latitude=response.location.latitude,
            longitude=response.location.longitude,
        )

    def _get_reader(self) -> geoip2.database.Reader | None:
        """Open the database on first use; remember failures."""
        if self._reader is not None or self._reader_failed or not self._db_path:
            return self._reader

        db_file = Path(self._db_path)
        if not db_file.exists():
            self._logger.warning("geoip_database_missing", db_path=self._db_path)
            self._reader_failed = True
            return None

        try:
            self._reader = geoip2.database.Reader(str(db_file))
        except Exception as e:
            self._logger.warning(
                "geoip_database_open_failed",
                db_path=self._db_path,
                error=e,
            )
            self._reader_failed = True
            return None

        self._logger.info("geoip_database_loaded", db_path=self._db_path)
        return self._reader

    def close(self) -> None:
        """Close the database reader, if open."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    @staticmethod
    def _is_private_ip(ip_address: str) -> bool:
        """True for private, reserved or malformed addresses."""
        try:
            ip = ipaddress.ip_address(ip_address)
        except ValueError:
            return True
        return (
            ip.is_private
            or ip.is_loopback
            or ip.is_reserved
            or ip.is_link_local
            or ip.is_multicast
        )
