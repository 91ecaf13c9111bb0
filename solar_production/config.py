"""Site configuration for the SolarEdge monitoring API.

Credentials are never held as process-wide state: build a SiteConfig
and pass it to the ingestion functions.
"""

import os
from dataclasses import dataclass

from solar_production.errors import SolarProductionError


SOLAREDGE_API_URL = "https://monitoringapi.solaredge.com"
DEFAULT_TIMEOUT = 30  # seconds

ENV_SITE_ID = "SOLAREDGE_SITE_ID"
ENV_API_KEY = "SOLAREDGE_API_KEY"
ENV_TIMEOUT = "SOLAREDGE_TIMEOUT"


@dataclass(frozen=True)
class SiteConfig:
    """One monitored installation: site id + API key."""
    site_id: str
    api_key: str
    base_url: str = SOLAREDGE_API_URL
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        # keep the key out of tracebacks and console output
        return f"SiteConfig(site_id={self.site_id!r}, base_url={self.base_url!r})"

    @classmethod
    def from_env(cls, environ=None) -> "SiteConfig":
        """Build a config from SOLAREDGE_* environment variables."""
        environ = os.environ if environ is None else environ
        site_id = environ.get(ENV_SITE_ID, "").strip()
        api_key = environ.get(ENV_API_KEY, "").strip()
        missing = [name for name, value in ((ENV_SITE_ID, site_id), (ENV_API_KEY, api_key))
                   if not value]
        if missing:
            raise SolarProductionError(
                f"Missing environment variable(s): {', '.join(missing)}")

        timeout = DEFAULT_TIMEOUT
        raw_timeout = environ.get(ENV_TIMEOUT, "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise SolarProductionError(
                    f"{ENV_TIMEOUT} must be a number of seconds, got '{raw_timeout}'")

        return cls(site_id=site_id, api_key=api_key, timeout=timeout)
