"""Generator configuration, built once at the process boundary."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

USER_ENV = "TESTRAIL_API_USER"
API_KEY_ENV = "TESTRAIL_API_KEY"

# Seconds to wait on the TestRail API before giving up
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ServiceCoordinates:
    """Where the target TestRail API lives, as Swagger wants it."""

    host: str
    scheme: str
    base_path: str


@dataclass(frozen=True)
class GeneratorConfig:
    base_url: str
    user: str = ""
    api_key: str = ""
    timeout: float = DEFAULT_TIMEOUT

    def endpoint(self, method: str) -> str:
        """URL for a TestRail API method.

        Plain concatenation: TestRail routes on the query string
        (``index.php?/api/v2/get_case_fields``), so a URL join would drop it.
        """
        return f"{self.base_url.rstrip('/')}/{method}"


def parse_service_coordinates(base_url: str) -> ServiceCoordinates:
    """Split the base URL into host, scheme and base path."""
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        raise ValueError(f"Invalid base URL {base_url!r}: {exc}") from exc
    if not url.scheme or not url.host:
        raise ValueError(f"Base URL must include a scheme and host, got {base_url!r}")

    host = url.host
    if ":" in host:
        host = f"[{host}]"
    if url.port is not None:
        host = f"{host}:{url.port}"

    # trailing slashes are dropped, as in GeneratorConfig.endpoint
    base_path = url.path
    query = url.query.decode("ascii").rstrip("/")
    if query:
        base_path = f"{base_path}?{query}"
    else:
        base_path = base_path.rstrip("/") or "/"

    return ServiceCoordinates(host=host, scheme=url.scheme, base_path=base_path)


def load_config(
    base_url: str,
    *,
    environ: Mapping[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> GeneratorConfig:
    """Build the configuration from the base URL and credential variables."""
    env = os.environ if environ is None else environ
    parse_service_coordinates(base_url)

    user = env.get(USER_ENV, "")
    api_key = env.get(API_KEY_ENV, "")
    for name, value in ((USER_ENV, user), (API_KEY_ENV, api_key)):
        if not value:
            logger.warning("%s is not set; TestRail will likely reject the request", name)

    return GeneratorConfig(base_url=base_url, user=user, api_key=api_key, timeout=timeout)
