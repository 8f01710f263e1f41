from __future__ import annotations

import asyncio
from typing import Any

from fastapi.testclient import TestClient

from figbridge.server import create_app
from figbridge.state import RuntimeDeps
from figbridge.daemon import SessionManager
from figbridge.errors import NotFoundError, EvaluationError

from tests.utils.stub_canvas import StubCanvas
from tests.utils.fake_session import FakeSession
from tests.utils.session_factory import SessionFactoryStub
from tests.utils.settings import make_settings, make_daemon_settings


def _client(factory: SessionFactoryStub, **daemon: Any) -> TestClient:
    settings = make_settings(daemon=make_daemon_settings(**daemon))

    async def build() -> RuntimeDeps:
        return RuntimeDeps(manager=SessionManager(settings, session_factory=factory), settings=settings)

    return TestClient(create_app(build_deps=build))


def _with_evaluator(evaluator) -> SessionFactoryStub:
    return SessionFactoryStub(make=lambda n: FakeSession(title=f"Doc {n}", evaluator=evaluator))


def test_health_without_session() -> None:
    factory = SessionFactoryStub()
    with _client(factory) as client:
        resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "connected": False, "healthy": False}
    assert factory.calls == 0


def test_health_after_connect() -> None:
    factory = SessionFactoryStub()
    with _client(factory) as client:
        client.post("/exec", json={"action": "eval", "code": "1"})
        resp = client.get("/health")
    assert resp.json() == {"status": "ok", "connected": True, "healthy": True}


def test_exec_eval_returns_result() -> None:
    async def evaluator(code: str) -> Any:
        return {"echo": code}

    with _client(_with_evaluator(evaluator)) as client:
        resp = client.post("/exec", json={"action": "eval", "code": "figma.root.name"})
    assert resp.status_code == 200
    assert resp.json() == {"result": {"echo": "figma.root.name"}}


def test_exec_render_creates_frame() -> None:
    canvas = StubCanvas()

    async def evaluator(script: str) -> Any:
        return canvas.run(script)

    markup = '<Frame name="Card" w={240}><Text weight="bold">Hi</Text></Frame>'
    with _client(_with_evaluator(evaluator)) as client:
        resp = client.post("/exec", json={"action": "render", "jsx": markup})
    assert resp.status_code == 200
    assert resp.json()["result"]["name"] == "Card"
    assert canvas.frames[0]["children"][0]["characters"] == "Hi"


def test_exec_render_batch() -> None:
    canvas = StubCanvas()

    async def evaluator(script: str) -> Any:
        return canvas.run(script)

    markups = ['<Frame name="A"></Frame>', '<Frame name="B"></Frame>']
    with _client(_with_evaluator(evaluator)) as client:
        resp = client.post("/exec", json={"action": "render-batch", "jsxArray": markups})
    assert resp.status_code == 200
    assert [r["name"] for r in resp.json()["result"]] == ["A", "B"]


def test_unknown_action_is_bad_request() -> None:
    with _client(SessionFactoryStub()) as client:
        resp = client.post("/exec", json={"action": "paint"})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "invalid_request"
    assert error["message"] == "Unknown action: paint"


def test_markup_error_never_connects() -> None:
    factory = SessionFactoryStub()
    with _client(factory) as client:
        resp = client.post("/exec", json={"action": "render", "jsx": "<Text>Hi</Text>"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "markup_syntax_error"
    assert factory.calls == 0


def test_oversized_size_is_bad_request() -> None:
    factory = SessionFactoryStub()
    with _client(factory) as client:
        resp = client.post("/exec", json={"action": "render", "jsx": "<Frame w={99999999999999999999}></Frame>"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "markup_syntax_error"
    assert factory.calls == 0


def test_evaluation_error_keeps_remote_message() -> None:
    async def evaluator(code: str) -> Any:
        raise EvaluationError("Error: node not found")

    with _client(_with_evaluator(evaluator), max_retries=0) as client:
        resp = client.post("/exec", json={"action": "eval", "code": "x"})
    assert resp.status_code == 500
    assert resp.json()["error"]["message"] == "Error: node not found"
    assert resp.json()["error"]["code"] == "evaluation_error"


def test_connection_error_is_unavailable() -> None:
    factory = SessionFactoryStub(errors=[NotFoundError("No design file open.")])
    with _client(factory, max_retries=0) as client:
        resp = client.post("/exec", json={"action": "eval", "code": "1"})
    assert resp.status_code == 503
    assert resp.json()["error"] == {"code": "not_found", "message": "No design file open.", "details": {}}


def test_execution_timeout_status() -> None:
    async def evaluator(code: str) -> Any:
        await asyncio.sleep(10)

    with _client(_with_evaluator(evaluator), exec_timeout_s=0.05, max_retries=0) as client:
        resp = client.post("/exec", json={"action": "eval", "code": "spin()"})
    assert resp.status_code == 504
    assert resp.json()["error"]["code"] == "execution_timeout"


def test_batch_failure_details() -> None:
    async def evaluator(script: str) -> Any:
        if '"B"' in script:
            raise EvaluationError("Error: bad font")
        return "ok"

    markups = ['<Frame name="A"></Frame>', '<Frame name="B"></Frame>', '<Frame name="C"></Frame>']
    with _client(_with_evaluator(evaluator), max_retries=0) as client:
        resp = client.post("/exec", json={"action": "render-batch", "jsxArray": markups})
    assert resp.status_code == 500
    error = resp.json()["error"]
    assert error["code"] == "batch_failed"
    assert error["message"] == "Error: bad font"
    assert error["details"] == {"results": ["ok"], "failed_index": 1, "cause": "evaluation_error"}


def test_reconnect_reports_title() -> None:
    factory = SessionFactoryStub()
    with _client(factory) as client:
        first = client.get("/reconnect")
        second = client.get("/reconnect")
    assert first.json() == {"status": "reconnected", "title": "Doc 1"}
    assert second.json() == {"status": "reconnected", "title": "Doc 2"}
    assert factory.sessions[0].closed


def test_reconnect_failure() -> None:
    factory = SessionFactoryStub(errors=[NotFoundError("No design file open.")])
    with _client(factory) as client:
        resp = client.get("/reconnect")
    assert resp.status_code == 503
    assert resp.json()["error"]["message"] == "No design file open."


def test_shutdown_closes_session() -> None:
    factory = SessionFactoryStub()
    with _client(factory) as client:
        client.post("/exec", json={"action": "eval", "code": "1"})
    assert factory.sessions[0].closed
