from dataclasses import dataclass
from typing import Optional

DEFAULT_DATADOG_SITE = "datadoghq.com"

DEFAULT_TIMEOUT = 60


@dataclass(frozen=True)
class DatadogProviderConfig:
    """
    Everything needed to talk to the Datadog API.

    Built once per program and handed to whatever needs it. Dynamic providers run outside the Pulumi runtime,
    so they receive this object explicitly instead of reading configuration themselves.
    """

    api_key: str

    app_key: str

    site: str = DEFAULT_DATADOG_SITE

    api_url: Optional[str] = None
    """Overrides the URL derived from ``site``, e.g. ``https://api.datadoghq.eu``"""

    timeout: float = DEFAULT_TIMEOUT
    """Seconds to wait for each HTTP exchange"""

    @property
    def base_url(self) -> str:
        if self.api_url:
            return self.api_url.rstrip("/")
        return f"https://api.{self.site}"

    def __repr__(self):
        # keep the keys out of logs and tracebacks
        return f"DatadogProviderConfig(site={self.site!r}, api_url={self.api_url!r}, timeout={self.timeout!r})"


@dataclass
class DatadogConfig:
    api_key: Optional[str] = None
    """API Key if you want to use a different one than the one stored in SSM."""

    app_key: Optional[str] = None
    """App Key if you want to use a different one than the one stored in SSM."""

    datadog_site: Optional[str] = None
    """
    The Datadog site hosting the organization.
    Set to 'datadoghq.com' for the US1 site.
    Set to 'datadoghq.eu' for the EU site.
    Set to 'us3.datadoghq.com' for the US3 site.
    Set to 'us5.datadoghq.com' for the US5 site.
    Set to 'ap1.datadoghq.com' for the AP1 site.
    Set to 'ddog-gov.com' for the US1-FED site.
    Falls back to `datadog_site` from Thunder.common.yaml, then to 'datadoghq.com'.
    """

    timeout: Optional[float] = DEFAULT_TIMEOUT
    """Seconds to wait for each Datadog API call"""
