from __future__ import annotations

import asyncio

import pytest

from figbridge.state import HealthStatus
from figbridge.daemon import SessionManager
from figbridge.daemon.health import probe_health
from figbridge.daemon.actions import EvalAction, RenderAction, RenderBatchAction
from figbridge.errors import (
    NotFoundError,
    EvaluationError,
    BatchExecutionError,
    ExecutionTimeoutError,
)

from tests.utils.fake_session import FakeSession
from tests.utils.session_factory import SessionFactoryStub
from tests.utils.settings import make_settings, make_daemon_settings


def _manager(factory: SessionFactoryStub, **daemon) -> SessionManager:
    return SessionManager(make_settings(daemon=make_daemon_settings(**daemon)), session_factory=factory)


@pytest.mark.asyncio
async def test_concurrent_ensure_connects_once() -> None:
    factory = SessionFactoryStub(delay_s=0.01)
    manager = _manager(factory)

    first, second = await asyncio.gather(manager.ensure_session(), manager.ensure_session())

    assert factory.calls == 1
    assert first is second is manager.current_session
    assert not manager.connection_in_flight


@pytest.mark.asyncio
async def test_concurrent_ensure_shares_failure() -> None:
    factory = SessionFactoryStub(delay_s=0.01, errors=[NotFoundError("No design file open.")])
    manager = _manager(factory)

    results = await asyncio.gather(manager.ensure_session(), manager.ensure_session(), return_exceptions=True)

    assert factory.calls == 1
    assert all(isinstance(r, NotFoundError) for r in results)
    assert manager.current_session is None
    assert not manager.connection_in_flight


@pytest.mark.asyncio
async def test_healthy_session_is_reused() -> None:
    factory = SessionFactoryStub()
    manager = _manager(factory)
    first = await manager.ensure_session()
    assert await manager.ensure_session() is first
    assert factory.calls == 1


@pytest.mark.asyncio
async def test_stale_session_is_discarded_before_reconnect() -> None:
    factory = SessionFactoryStub()
    manager = _manager(factory)
    stale = await manager.ensure_session()
    stale.healthy = False

    fresh = await manager.ensure_session()

    assert fresh is not stale
    assert stale.closed
    assert factory.calls == 2


@pytest.mark.asyncio
async def test_health_never_connects() -> None:
    factory = SessionFactoryStub()
    manager = _manager(factory)
    status = await manager.health()
    assert (status.connected, status.healthy) == (False, False)
    assert factory.calls == 0


@pytest.mark.asyncio
async def test_present_but_unusable_session_is_unhealthy() -> None:
    factory = SessionFactoryStub(make=lambda n: FakeSession(healthy=False))
    manager = _manager(factory)
    await manager.ensure_session()

    status = await manager.health()
    assert status.connected is True
    assert status.healthy is False


@pytest.mark.asyncio
async def test_lost_context_is_unhealthy() -> None:
    factory = SessionFactoryStub()
    manager = _manager(factory)
    session = await manager.ensure_session()
    session.context_lost = True

    status = await manager.health()
    assert (status.connected, status.healthy) == (True, False)


@pytest.mark.asyncio
async def test_reconnect_replaces_session() -> None:
    factory = SessionFactoryStub()
    manager = _manager(factory)
    old = await manager.ensure_session()
    new = await manager.reconnect()
    assert new is not old
    assert old.closed
    assert new.title == "Doc 2"


@pytest.mark.asyncio
async def test_execute_retries_with_forced_reconnects() -> None:
    calls = 0

    async def flaky(expression: str) -> str:
        nonlocal calls
        calls += 1
        if calls <= 2:
            raise EvaluationError(f"failure {calls}")
        return "done"

    factory = SessionFactoryStub(make=lambda n: FakeSession(title=f"Doc {n}", evaluator=flaky))
    manager = _manager(factory)

    assert await manager.execute(EvalAction(code="x()"), max_retries=2) == "done"
    assert factory.calls == 3
    assert [s.close_calls for s in factory.sessions] == [1, 1, 0]


@pytest.mark.asyncio
async def test_execute_surfaces_last_error() -> None:
    calls = 0

    async def broken(expression: str) -> None:
        nonlocal calls
        calls += 1
        raise EvaluationError(f"attempt {calls - 1}")

    factory = SessionFactoryStub(make=lambda n: FakeSession(evaluator=broken))
    manager = _manager(factory)

    with pytest.raises(EvaluationError, match="attempt 2"):
        await manager.execute(EvalAction(code="x()"), max_retries=2)
    assert calls == 3


@pytest.mark.asyncio
async def test_connect_failures_are_retried() -> None:
    factory = SessionFactoryStub(errors=[NotFoundError("No design file open.")])
    manager = _manager(factory)
    assert await manager.execute(EvalAction(code="1")) is None
    assert factory.calls == 2


@pytest.mark.asyncio
async def test_execution_timeout() -> None:
    async def slow(expression: str) -> None:
        await asyncio.sleep(10)

    factory = SessionFactoryStub(make=lambda n: FakeSession(evaluator=slow))
    manager = _manager(factory, exec_timeout_s=0.05)

    with pytest.raises(ExecutionTimeoutError):
        await manager.execute(EvalAction(code="spin()"), max_retries=0)


@pytest.mark.asyncio
async def test_render_evaluates_compiled_script() -> None:
    factory = SessionFactoryStub()
    manager = _manager(factory)
    action = RenderAction.from_markup('<Frame name="Card"></Frame>')

    await manager.execute(action)
    assert factory.sessions[0].evaluated == [action.script]


@pytest.mark.asyncio
async def test_batch_resumes_at_failed_unit() -> None:
    failed_once = False

    async def evaluator(script: str) -> str:
        nonlocal failed_once
        if '"B"' in script and not failed_once:
            failed_once = True
            raise EvaluationError("context destroyed")
        return script

    factory = SessionFactoryStub(make=lambda n: FakeSession(evaluator=evaluator))
    manager = _manager(factory)
    action = RenderBatchAction.from_markups(
        ['<Frame name="A"></Frame>', '<Frame name="B"></Frame>', '<Frame name="C"></Frame>']
    )

    results = await manager.execute(action)

    assert results == list(action.scripts)
    evaluated = [s for session in factory.sessions for s in session.evaluated]
    assert evaluated == [action.scripts[0], action.scripts[1], action.scripts[1], action.scripts[2]]


@pytest.mark.asyncio
async def test_batch_failure_carries_completed_results() -> None:
    async def evaluator(script: str) -> str:
        if '"B"' in script:
            raise EvaluationError("Error: font missing")
        return "ok"

    factory = SessionFactoryStub(make=lambda n: FakeSession(evaluator=evaluator))
    manager = _manager(factory, max_retries=1)
    action = RenderBatchAction.from_markups(['<Frame name="A"></Frame>', '<Frame name="B"></Frame>'])

    with pytest.raises(BatchExecutionError) as exc:
        await manager.execute(action)
    assert exc.value.message == "Error: font missing"
    assert exc.value.results == ["ok"]
    assert exc.value.failed_index == 1
    assert isinstance(exc.value.__cause__, EvaluationError)


@pytest.mark.asyncio
async def test_close_cancels_in_flight_connect() -> None:
    factory = SessionFactoryStub(delay_s=10)
    manager = _manager(factory)
    waiter = asyncio.create_task(manager.ensure_session())
    while not manager.connection_in_flight:
        await asyncio.sleep(0)

    await manager.close()

    with pytest.raises(asyncio.CancelledError):
        await waiter
    assert not manager.connection_in_flight
    assert manager.current_session is None


@pytest.mark.asyncio
async def test_hung_health_check_is_bounded_by_health_timeout() -> None:
    factory = SessionFactoryStub(make=lambda n: FakeSession(title=f"Doc {n}", probe_delay_s=30.0 if n == 1 else 0.0))
    manager = _manager(factory, health_timeout_s=0.05)
    # The first connect skips the health check, so the hung session becomes current.
    hung = await manager.ensure_session()

    loop = asyncio.get_running_loop()
    started = loop.time()
    status = await manager.health()
    assert loop.time() - started < 1.0
    assert (status.connected, status.healthy) == (True, False)

    fresh = await manager.ensure_session()
    assert fresh is not hung
    assert hung.closed
    assert manager.current_session is fresh
    assert factory.calls == 2


@pytest.mark.asyncio
async def test_health_check_timeout_reports_unhealthy() -> None:
    status = await probe_health(FakeSession(probe_delay_s=30.0), timeout_s=0.01)
    assert (status.connected, status.healthy) == (True, False)
    assert await probe_health(None) == HealthStatus(connected=False, healthy=False)
