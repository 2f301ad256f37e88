from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass

from kungfu import Error, Ok

from deferk import DeferredK, ThreadPoolContext, instances, timeout


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str


def load_user_blocking(user_id: int) -> DeferredK[User]:
    # Blocking I/O stand-in; runs on the pool thread via flat_map_in.
    time.sleep(0.01)
    return DeferredK.pure(User(id=user_id, name=f"user:{user_id}@{threading.current_thread().name}"))


def notify(outcome) -> DeferredK[None]:
    match outcome:
        case Ok(user):
            print(f"notified about {user.name}")
        case Error(err):
            print(f"notification failed: {err!r}")
    return DeferredK.pure(None)


async def main() -> None:
    print("\n== 01_quickstart: flat_map_in + handle_error_with + run_async ==")
    M = instances.effect()

    with ThreadPoolContext() as pool:
        pipeline = (
            M.flat_map_in(pool, M.pure(42), load_user_blocking)
            .map(lambda user: f"hello, {user.name}")
            .handle_error_with(lambda err: M.pure(f"fallback after {err!r}"))
        )
        match await timeout(pipeline, seconds=1.0):
            case Ok(message):
                print(message)
            case Error(err):
                print(f"error: {err!r}")

        await M.run_async(M.raise_error(RuntimeError("boom")), notify)
        await asyncio.sleep(0.01)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
