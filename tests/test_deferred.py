"""Tests for DeferredK operations."""

import asyncio
import threading

import pytest
from kungfu import Error, Ok

from deferk import ContextClosedError, DeferredK, Left, Promise, Right, RuntimeConfig, ThreadPoolContext

from .helpers import Boom, error_value, ok_value


class Wrapped(Exception):
    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"wrapped {cause!r}")


# ============================================================================
# Construction
# ============================================================================


@pytest.mark.asyncio
async def test_pure_is_already_completed():
    deferred = DeferredK.pure(1)

    assert deferred.is_completed
    assert ok_value(await deferred) == 1


@pytest.mark.asyncio
async def test_raise_error_is_already_failed():
    err = Boom("failed")
    deferred = DeferredK.raise_error(err)

    assert deferred.is_completed
    assert error_value(await deferred) is err


@pytest.mark.asyncio
async def test_from_result():
    assert ok_value(await DeferredK.from_result(Ok("a"))) == "a"
    assert isinstance(error_value(await DeferredK.from_result(Error(Boom()))), Boom)


@pytest.mark.asyncio
async def test_invoke_is_lazy_and_memoized():
    calls = 0

    def thunk():
        nonlocal calls
        calls += 1
        return calls

    deferred = DeferredK.invoke(thunk)
    assert calls == 0
    assert not deferred.is_completed

    first = await deferred
    second = await deferred
    more = await asyncio.gather(deferred(), deferred(), deferred())

    assert calls == 1
    assert deferred.is_completed
    assert [ok_value(o) for o in (first, second, *more)] == [1] * 5


@pytest.mark.asyncio
async def test_concurrent_observers_share_one_run():
    calls = 0

    async def run():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return Ok("shared")

    deferred = DeferredK(run)
    outcomes = await asyncio.gather(deferred(), deferred(), deferred())

    assert calls == 1
    assert [ok_value(o) for o in outcomes] == ["shared"] * 3


@pytest.mark.asyncio
async def test_invoke_captures_exception():
    def explode():
        raise Boom("thunk")

    assert str(error_value(await DeferredK.invoke(explode))) == "thunk"


@pytest.mark.asyncio
async def test_invoke_normalises_with_catch():
    def explode():
        raise Boom("raw")

    err = error_value(await DeferredK.invoke(explode, catch=Wrapped))

    assert isinstance(err, Wrapped)
    assert isinstance(err.cause, Boom)


@pytest.mark.asyncio
async def test_invoke_on_context(pool):
    name = await DeferredK.invoke(lambda: threading.current_thread().name, context=pool)

    assert ok_value(name).startswith("test-pool")


@pytest.mark.asyncio
async def test_invoke_on_closed_context():
    ctx = ThreadPoolContext(RuntimeConfig(max_workers=1))
    ctx.shutdown()

    err = error_value(await DeferredK.invoke(lambda: 1, context=ctx))

    assert isinstance(err, ContextClosedError)


@pytest.mark.asyncio
async def test_defer_delays_construction():
    built = []

    def build():
        built.append(True)
        return DeferredK.pure("x")

    deferred = DeferredK.defer(build)
    assert built == []

    assert ok_value(await deferred) == "x"
    await deferred
    assert built == [True]


@pytest.mark.asyncio
async def test_defer_normalises_thunk_exception():
    def build():
        raise Boom("while building")

    err = error_value(await DeferredK.defer(build, catch=Wrapped))

    assert isinstance(err, Wrapped)


# ============================================================================
# async_
# ============================================================================


@pytest.mark.asyncio
async def test_async_completes_on_callback():
    def proc(cb):
        cb(Ok("called back"))

    assert ok_value(await DeferredK.async_(proc)) == "called back"


@pytest.mark.asyncio
async def test_async_keeps_only_first_callback():
    def proc(cb):
        cb(Ok(1))
        cb(Ok(2))
        cb(Error(Boom()))

    deferred = DeferredK.async_(proc)

    assert ok_value(await deferred) == 1
    assert ok_value(await deferred) == 1


@pytest.mark.asyncio
async def test_async_callback_from_other_thread():
    def proc(cb):
        threading.Timer(0.01, cb, args=(Ok("late"),)).start()

    outcome = await asyncio.wait_for(DeferredK.async_(proc)(), timeout=1.0)

    assert ok_value(outcome) == "late"


@pytest.mark.asyncio
async def test_async_failure_callback():
    err = Boom("producer failed")

    def proc(cb):
        cb(Error(err))

    assert error_value(await DeferredK.async_(proc)) is err


@pytest.mark.asyncio
async def test_async_producer_raising():
    def proc(cb):
        raise Boom("before callback")

    err = error_value(await DeferredK.async_(proc, catch=Wrapped))

    assert isinstance(err, Wrapped)


@pytest.mark.asyncio
async def test_async_registers_producer_lazily():
    registered = []

    def proc(cb):
        registered.append(cb)
        cb(Ok(None))

    deferred = DeferredK.async_(proc)
    assert registered == []

    await deferred
    await deferred
    assert len(registered) == 1


@pytest.mark.asyncio
async def test_cancelled_driver_fails_other_observers():
    deferred = DeferredK.never()
    driver = asyncio.ensure_future(deferred())
    await asyncio.sleep(0)
    other = asyncio.ensure_future(deferred())
    await asyncio.sleep(0)

    driver.cancel()
    with pytest.raises(asyncio.CancelledError):
        await driver

    assert isinstance(error_value(await other), asyncio.CancelledError)


class Fatal(BaseException):
    pass


@pytest.mark.asyncio
async def test_fatal_error_propagates_and_completes_value():
    calls = []

    def explode(_):
        calls.append(1)
        raise Fatal("fatal")

    deferred = DeferredK.pure(1).map(explode)

    with pytest.raises(Fatal):
        await deferred

    assert deferred.is_completed
    outcome = await asyncio.wait_for(deferred(), timeout=1.0)
    assert isinstance(error_value(outcome), Fatal)
    assert calls == [1]


# ============================================================================
# Functor / Applicative / Monad
# ============================================================================


@pytest.mark.asyncio
async def test_map():
    assert ok_value(await DeferredK.pure(2).map(lambda x: x * 10)) == 20


@pytest.mark.asyncio
async def test_map_exception_becomes_failure():
    outcome = await DeferredK.pure(1).map(lambda _: 1 / 0)

    assert isinstance(error_value(outcome), ZeroDivisionError)


@pytest.mark.asyncio
async def test_map_skips_failure():
    seen = []
    err = Boom()

    outcome = await DeferredK.raise_error(err).map(seen.append)

    assert error_value(outcome) is err
    assert seen == []


@pytest.mark.asyncio
async def test_ap():
    outcome = await DeferredK.pure(3).ap(DeferredK.pure(lambda x: x + 1))

    assert ok_value(outcome) == 4


@pytest.mark.asyncio
async def test_ap_has_no_ordering_dependency():
    gate = asyncio.Event()

    async def value():
        await gate.wait()
        return Ok(20)

    async def function():
        gate.set()
        return Ok(lambda x: x + 1)

    outcome = await asyncio.wait_for(DeferredK(value).ap(DeferredK(function))(), timeout=1.0)

    assert ok_value(outcome) == 21


@pytest.mark.asyncio
async def test_ap_reports_value_failure_first():
    first, second = Boom("value"), Boom("function")

    outcome = await DeferredK.raise_error(first).ap(DeferredK.raise_error(second))

    assert error_value(outcome) is first


@pytest.mark.asyncio
async def test_ap_reports_function_failure():
    err = Boom("function")

    outcome = await DeferredK.pure(1).ap(DeferredK.raise_error(err))

    assert error_value(outcome) is err


@pytest.mark.asyncio
async def test_flat_map_sequences():
    order = []

    def first():
        order.append("first")
        return 1

    def then(x):
        order.append("then")
        return DeferredK.invoke(lambda: x + 1)

    outcome = await DeferredK.invoke(first).flat_map(then)

    assert ok_value(outcome) == 2
    assert order == ["first", "then"]


@pytest.mark.asyncio
async def test_flat_map_short_circuits():
    calls = []
    err = Boom("boom")

    outcome = await DeferredK.raise_error(err).flat_map(lambda x: calls.append(x) or DeferredK.pure(x))

    assert error_value(outcome) is err
    assert calls == []


@pytest.mark.asyncio
async def test_flat_map_function_raising():
    def explode(_):
        raise Boom("in bind")

    outcome = await DeferredK.pure(1).flat_map(explode)

    assert str(error_value(outcome)) == "in bind"


@pytest.mark.asyncio
async def test_flat_map_in_runs_continuation_on_context(pool):
    threads = []

    def step(x):
        threads.append(threading.current_thread().name)
        return DeferredK.pure(x + 1)

    outcome = await DeferredK.pure(1).flat_map_in(pool, step)

    assert ok_value(outcome) == 2
    assert threads[0].startswith("test-pool")
    assert threads[0] != threading.current_thread().name


@pytest.mark.asyncio
async def test_flat_map_in_short_circuits(pool):
    calls = []
    err = Boom()

    outcome = await DeferredK.raise_error(err).flat_map_in(pool, lambda x: calls.append(x) or DeferredK.pure(x))

    assert error_value(outcome) is err
    assert calls == []


@pytest.mark.asyncio
async def test_flat_map_in_function_raising(pool):
    def explode(_):
        raise Boom("on pool")

    assert str(error_value(await DeferredK.pure(1).flat_map_in(pool, explode))) == "on pool"


@pytest.mark.asyncio
async def test_tail_rec_m_is_stack_safe():
    def step(n):
        return DeferredK.invoke(lambda: Left(n + 1) if n < 100_000 else Right(n))

    outcome = await DeferredK.tail_rec_m(0, step)

    assert ok_value(outcome) == 100_000


@pytest.mark.asyncio
async def test_tail_rec_m_stops_on_failure():
    visited = []
    err = Boom("stop")

    def step(n):
        visited.append(n)
        if n == 3:
            return DeferredK.raise_error(err)
        return DeferredK.pure(Left(n + 1))

    outcome = await DeferredK.tail_rec_m(0, step)

    assert error_value(outcome) is err
    assert visited == [0, 1, 2, 3]


@pytest.mark.asyncio
async def test_tail_rec_m_rejects_step_without_either():
    calls = []

    def step(n):
        calls.append(n)
        return DeferredK.pure(42)

    outcome = await asyncio.wait_for(DeferredK.tail_rec_m(0, step)(), timeout=1.0)

    err = error_value(outcome)
    assert isinstance(err, TypeError)
    assert "got 42" in str(err)
    assert calls == [0]


# ============================================================================
# Errors
# ============================================================================


@pytest.mark.asyncio
async def test_handle_error_with_recovers_once():
    err = Boom()
    calls = []

    def recover(e):
        calls.append(e)
        return DeferredK.pure("recovered")

    deferred = DeferredK.raise_error(err).handle_error_with(recover)

    assert ok_value(await deferred) == "recovered"
    assert ok_value(await deferred) == "recovered"
    assert calls == [err]


@pytest.mark.asyncio
async def test_handle_error_with_passes_success_through():
    calls = []

    outcome = await DeferredK.pure("fine").handle_error_with(lambda e: calls.append(e) or DeferredK.pure("no"))

    assert ok_value(outcome) == "fine"
    assert calls == []


@pytest.mark.asyncio
async def test_handle_error_with_handler_raising():
    def recover(_):
        raise Wrapped("handler")

    outcome = await DeferredK.raise_error(Boom()).handle_error_with(recover)

    assert isinstance(error_value(outcome), Wrapped)


@pytest.mark.asyncio
async def test_handle_error():
    outcome = await DeferredK.raise_error(Boom("x")).handle_error(lambda e: f"saw {e}")

    assert ok_value(outcome) == "saw x"


@pytest.mark.asyncio
async def test_attempt():
    err = Boom()

    assert ok_value(ok_value(await DeferredK.pure(1).attempt())) == 1
    assert error_value(ok_value(await DeferredK.raise_error(err).attempt())) is err


@pytest.mark.asyncio
async def test_ensure():
    def positive(v):
        return v > 0

    def negative(v):
        return Boom(f"{v} is not positive")

    assert ok_value(await DeferredK.pure(5).ensure(positive, negative)) == 5
    assert str(error_value(await DeferredK.pure(-1).ensure(positive, negative))) == "-1 is not positive"


# ============================================================================
# Running
# ============================================================================


@pytest.mark.asyncio
async def test_run_async_reports_failure_once():
    calls = []
    called = asyncio.Event()

    def cb(outcome):
        calls.append(outcome)
        called.set()
        return DeferredK.pure(None)

    scheduled = DeferredK.raise_error(Boom("boom")).run_async(cb)
    assert calls == []

    assert ok_value(await scheduled) is None
    await asyncio.wait_for(called.wait(), timeout=1.0)
    await asyncio.sleep(0.01)

    assert len(calls) == 1
    assert str(error_value(calls[0])) == "boom"


@pytest.mark.asyncio
async def test_run_async_does_not_wait_for_callback():
    release = asyncio.Event()
    finished = asyncio.Event()

    def cb(outcome):
        async def run():
            await release.wait()
            finished.set()
            return Ok(None)

        return DeferredK(run)

    await DeferredK.pure(1).run_async(cb)
    await asyncio.sleep(0)
    assert not finished.is_set()

    release.set()
    await asyncio.wait_for(finished.wait(), timeout=1.0)


@pytest.mark.asyncio
async def test_run_async_logs_failing_callback(caplog):
    done = asyncio.Event()

    def cb(outcome):
        done.set()
        return DeferredK.raise_error(Boom("cleanup failed"))

    with caplog.at_level("WARNING", logger="deferk.deferred"):
        await DeferredK.pure(1).run_async(cb)
        await asyncio.wait_for(done.wait(), timeout=1.0)
        await asyncio.sleep(0.01)

    assert "run_async callback failed" in caplog.text


@pytest.mark.asyncio
async def test_unsafe_run_async():
    got = Promise()

    DeferredK.invoke(lambda: 7).unsafe_run_async(got.complete)

    assert ok_value(await asyncio.wait_for(got.get(), timeout=1.0)) == 7


@pytest.mark.asyncio
async def test_unwrap():
    assert await DeferredK.pure(1).unwrap() == 1

    with pytest.raises(Boom):
        await DeferredK.raise_error(Boom()).unwrap()


def test_unsafe_run_sync():
    assert DeferredK.invoke(lambda: 3).unsafe_run_sync() == 3


def test_unsafe_run_sync_raises():
    with pytest.raises(Boom, match="sync"):
        DeferredK.raise_error(Boom("sync")).unsafe_run_sync()


def test_repr_pending():
    assert repr(DeferredK.invoke(lambda: 1)) == "DeferredK(Promise(pending))"
