"""HTTP transport for the ksqlDB REST API, via requests."""

from __future__ import annotations

import logging

import requests

from ksqlrest.client._base import KSQL_CONTENT_TYPE, Envelope, ServerConfig

logger = logging.getLogger(__name__)

_HEADERS = {
    "Content-Type": KSQL_CONTENT_TYPE,
    "Accept": KSQL_CONTENT_TYPE,
    "Cache-Control": "no-cache",
}


def _decode(response: requests.Response) -> Envelope:
    try:
        body: object = response.json()
    except ValueError:
        # Proxies and some 5xx pages answer with plain text.
        body = response.text or None
    envelope = Envelope(status=response.status_code, status_text=response.reason or "", body=body)
    logger.debug("status: %s, statusText: %s", envelope.status, envelope.status_text)
    logger.debug("body: %s", envelope.body)
    return envelope


class KsqlTransport:
    """Issues one blocking HTTP call per method.

    Non-2xx responses are returned, not raised; the caller decides what is a
    fault. Connection-level failures (requests.RequestException) propagate.
    """

    def __init__(self, config: ServerConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    @property
    def config(self) -> ServerConfig:
        return self._config

    def post_statement(self, statement: str, properties: dict[str, str] | None = None) -> Envelope:
        url = f"{self._config.base_url}/ksql"
        payload = {"ksql": statement, "streamsProperties": properties or {}}
        logger.debug("POST %s %s", url, payload)
        response = self._session.post(
            url,
            json=payload,
            headers=_HEADERS,
            auth=self._config.auth,
            timeout=self._config.request_timeout,
        )
        return _decode(response)

    def get_status(self, command_id: str) -> Envelope:
        url = f"{self._config.base_url}/status/{command_id}"
        logger.debug("GET %s", url)
        response = self._session.get(
            url,
            headers=_HEADERS,
            auth=self._config.auth,
            timeout=self._config.request_timeout,
        )
        return _decode(response)

    def close(self) -> None:
        self._session.close()
