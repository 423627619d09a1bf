import logging
from typing import Any, Optional

import requests

from .config import DatadogProviderConfig

logger = logging.getLogger(__name__)


class DatadogClient:
    """
    Thin wrapper around a ``requests.Session`` authenticated against the Datadog API.

    Every call is a single request/response exchange. Retries and connection handling belong to the session,
    errors from ``requests`` are raised as-is. Interpreting status codes is left to the caller.
    """

    def __init__(self, config: DatadogProviderConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "DD-API-KEY": config.api_key,
                "DD-APPLICATION-KEY": config.app_key,
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

    def url(self, path: str) -> str:
        return f"{self.config.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, payload: Optional[Any] = None) -> requests.Response:
        """Send one request to the Datadog API

        :param method: HTTP method
        :param path: API path, e.g. ``/api/v2/logs/config/archives``
        :param payload: JSON body, if any
        :return: The raw response, whatever its status
        """
        url = self.url(path)

        logger.debug("%s %s", method, url)

        response = self.session.request(method, url, json=payload, timeout=self.config.timeout)

        logger.debug("%s %s returned HTTP %s", method, url, response.status_code)

        return response
