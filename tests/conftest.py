"""Root conftest — a fake HTTP session and canned ksqlDB responses."""

from __future__ import annotations

import pytest

from ksqlrest.client import KsqlClient, ServerConfig

_NO_JSON = object()


class FakeResponse:
    def __init__(self, status_code: int = 200, body: object = None, reason: str = "OK",
                 text: str | None = None) -> None:
        self.status_code = status_code
        self.reason = reason
        self._body = body
        self.text = text if text is not None else ""

    def json(self) -> object:
        if self._body is _NO_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body


class FakeSession:
    """Stands in for requests.Session. The last queued response repeats."""

    def __init__(self) -> None:
        self.post_queue: list[object] = []
        self.get_queue: list[object] = []
        self.post_calls: list[tuple[str, dict]] = []
        self.get_calls: list[tuple[str, dict]] = []
        self.closed = False

    def queue_post(self, *responses: object) -> FakeSession:
        self.post_queue.extend(responses)
        return self

    def queue_status(self, *responses: object) -> FakeSession:
        self.get_queue.extend(responses)
        return self

    @staticmethod
    def _next(queue: list[object]) -> FakeResponse:
        assert queue, "no response queued"
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, BaseException):
            raise item
        return item

    def post(self, url: str, **kwargs) -> FakeResponse:
        self.post_calls.append((url, kwargs))
        return self._next(self.post_queue)

    def get(self, url: str, **kwargs) -> FakeResponse:
        self.get_calls.append((url, kwargs))
        return self._next(self.get_queue)

    def close(self) -> None:
        self.closed = True

    @property
    def posted_statements(self) -> list[str]:
        return [kwargs["json"]["ksql"] for _, kwargs in self.post_calls]


class Replies:
    """Builders for the response shapes the ksqlDB REST API returns."""

    @staticmethod
    def command(command_id: str = "stream/`CLICKS`/create", status: str = "SUCCESS",
                message: str = "Stream created", statement: str = "") -> FakeResponse:
        return FakeResponse(200, [{
            "@type": "currentStatus",
            "statementText": statement,
            "commandId": command_id,
            "commandStatus": {"status": status, "message": message},
            "commandSequenceNumber": 2,
        }])

    @staticmethod
    def error(message: str, error_code: int = 40001, status: int = 400) -> FakeResponse:
        return FakeResponse(status, {
            "@type": "statement_error",
            "error_code": error_code,
            "message": message,
            "statementText": "",
        }, reason="Bad Request")

    @staticmethod
    def entity(**fields: object) -> FakeResponse:
        return FakeResponse(200, [fields])

    @staticmethod
    def empty() -> FakeResponse:
        return FakeResponse(200, [])

    @staticmethod
    def status(status: str, message: str = "") -> FakeResponse:
        return FakeResponse(200, {"status": status, "message": message})

    @staticmethod
    def not_json(status_code: int = 502, text: str = "Bad Gateway") -> FakeResponse:
        return FakeResponse(status_code, _NO_JSON, reason="Bad Gateway", text=text)


@pytest.fixture
def replies() -> type[Replies]:
    return Replies


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def server_config() -> ServerConfig:
    return ServerConfig(name="test", url="http://ksql.test:8088/")


@pytest.fixture
def client(server_config, session, sleeps) -> KsqlClient:
    return KsqlClient(server_config, session=session, sleep=sleeps.append, clock=lambda: 0.0)
