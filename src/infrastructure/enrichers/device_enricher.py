"""Device enricher implementation using the user-agents library.

Splits a raw user agent into browser, OS and form-factor fields stored on
the session. The raw string itself stays the device fingerprint the
detector compares.
"""

from user_agents import parse as parse_user_agent  # type: ignore[import-untyped]
from user_agents.parsers import UserAgent  # type: ignore[import-untyped]

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.session_enricher_protocol import DeviceEnrichmentResult


class UserAgentDeviceEnricher:
    """Device enricher using the user-agents library.

    Implements DeviceEnricher protocol (structural typing).

    Behavior:
        - Fail-open: Returns empty result on parse errors
        - "Other" families from the parser are reported as None
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    def enrich(self, user_agent: str) -> DeviceEnrichmentResult:
        """Parse user agent string to extract device information.

        Args:
            user_agent: Raw user agent string from HTTP header.

        Returns:
            DeviceEnrichmentResult; empty when the agent is blank or
            unparseable.
        """
        if not user_agent:
            return DeviceEnrichmentResult()

        try:
            ua: UserAgent = parse_user_agent(user_agent)
        except Exception as e:
            self._logger.warning(
                "user_agent_parse_failed",
                user_agent=user_agent[:100],
                error=e,
            )
            return DeviceEnrichmentResult()

        return DeviceEnrichmentResult(
            browser_name=self._known(ua.browser.family),
            browser_version=ua.browser.version_string or None,
            os_name=self._known(ua.os.family),
            os_version=ua.os.version_string or None,
            device_type=self._device_type(ua),
            is_mobile=bool(ua.is_mobile or ua.is_tablet),
        )

    @staticmethod
    def _known(family: str | None) -> str | None:
        if not family or family == "Other":
            return None
        return family

    @staticmethod
    def _device_type(ua: UserAgent) -> str:
        """Classify as "bot", "mobile", "tablet", "desktop" or "other"."""
        if ua.is_bot:
            return "bot"
        if ua.is_mobile:
            return "mobile"
        if ua.is_tablet:
            return "tablet"
        if ua.is_pc:
            return "desktop"
        return "other"
