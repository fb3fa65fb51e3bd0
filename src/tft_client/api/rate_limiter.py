"""
Dual-window rate limiting for the Riot API.

Riot enforces two quotas at once on every key, e.g. for development keys
20 requests every 1 second AND 100 requests every 2 minutes. Each quota is a
token bucket; a request may only go out once every bucket can spare a token.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Optional

from ..config import RiotAPIConfig
from ..exceptions import RateLimitCancelled
from ..logging_config import get_logger

logger = get_logger(__name__)

Clock = Callable[[], float]


async def wait_or_cancel(
    aw: Awaitable,
    cancel: Optional[asyncio.Event] = None,
    deadline: Optional[float] = None,
    clock: Clock = time.monotonic,
    undo: Optional[Callable[[object], None]] = None,
) -> Optional[asyncio.Future]:
    """
    Await `aw` until it finishes, `cancel` is set or `deadline` passes.

    Returns the finished task (call .result() on it) or None if the wait was
    given up, in which case `aw` has been cancelled. `undo` receives the result
    of an awaitable that finished but whose result is being thrown away
    because the calling task itself was cancelled.
    """
    task = asyncio.ensure_future(aw)
    if cancel is None and deadline is None:
        await task
        return task

    pending = {task}
    watcher = None
    if cancel is not None:
        watcher = asyncio.ensure_future(cancel.wait())
        pending.add(watcher)
    timeout = None if deadline is None else max(0.0, deadline - clock())

    try:
        done, _ = await asyncio.wait(pending, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        if task.done():
            if undo is not None and not task.cancelled() and task.exception() is None:
                undo(task.result())
        else:
            task.cancel()
        raise
    finally:
        if watcher is not None:
            watcher.cancel()

    if task in done:
        return task

    task.cancel()
    await asyncio.wait({task})
    # finished between the cancel request and now: completion wins
    return None if task.cancelled() else task


@dataclass
class TokenBucket:
    """
    Holds up to `capacity` tokens, refilled continuously so that an empty
    bucket is full again after `period` seconds.
    """
    capacity: int
    period: float

    tokens: float = field(init=False)
    updated_at: Optional[float] = field(default=None, init=False)

    def __post_init__(self):
        if self.capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {self.capacity}")
        if self.period <= 0:
            raise ValueError(f"period must be positive, got {self.period}")
        self.tokens = float(self.capacity)

    @property
    def rate(self) -> float:
        """Tokens regained per second"""
        return self.capacity / self.period

    def refill(self, now: float) -> None:
        if self.updated_at is not None and now > self.updated_at:
            self.tokens = min(float(self.capacity), self.tokens + (now - self.updated_at) * self.rate)
        if self.updated_at is None or now > self.updated_at:
            self.updated_at = now

    def time_until_available(self, now: float) -> float:
        """Seconds until one whole token is available (0 if one is now)"""
        self.refill(now)
        if self.tokens >= 1:
            return 0.0
        return (1 - self.tokens) / self.rate

    def take(self) -> None:
        if self.tokens < 1:
            raise RuntimeError("take() on an empty bucket")
        self.tokens -= 1


class RateLimiter:
    """
    Grants permits only when every bucket has a token, then takes one from each.

    Callers queue on an asyncio.Lock, which wakes waiters in FIFO order; only the
    caller at the head of the queue sleeps for tokens, so nobody is starved.
    Token state is only touched between awaits while holding the lock.

    Usage:
        limiter = RateLimiter.for_dev_key()
        await limiter.acquire()
    """

    def __init__(self, buckets: Iterable[TokenBucket], clock: Clock = time.monotonic):
        self._buckets = tuple(buckets)
        if not self._buckets:
            raise ValueError("RateLimiter needs at least one bucket")
        self._clock = clock
        self._lock = asyncio.Lock()
        self.granted = 0

    @classmethod
    def dual_window(cls, requests_per_second: int, requests_per_two_minutes: int, clock: Clock = time.monotonic) -> "RateLimiter":
        return cls(
            [TokenBucket(requests_per_second, 1.0), TokenBucket(requests_per_two_minutes, 120.0)],
            clock=clock,
        )

    @classmethod
    def for_dev_key(cls) -> "RateLimiter":
        """Quotas of a Riot development key: 20 / 1s and 100 / 2min"""
        return cls.dual_window(20, 100)

    @classmethod
    def from_config(cls, config: RiotAPIConfig) -> "RateLimiter":
        return cls.dual_window(config.requests_per_second, config.requests_per_two_minutes)

    @property
    def buckets(self) -> tuple[TokenBucket, ...]:
        return self._buckets

    def available(self) -> tuple[int, ...]:
        """Whole tokens currently available in each bucket"""
        now = self._clock()
        for bucket in self._buckets:
            bucket.refill(now)
        return tuple(int(bucket.tokens) for bucket in self._buckets)

    async def acquire(self, cancel: Optional[asyncio.Event] = None, timeout: Optional[float] = None) -> None:
        """
        Wait until a permit is available and take it.

        Args:
            cancel: Event that abandons the wait once set
            timeout: Maximum seconds to wait for the permit

        Raises:
            RateLimitCancelled: `cancel` was set or `timeout` elapsed first.
                No token is consumed in that case.
        """
        if cancel is not None and cancel.is_set():
            raise RateLimitCancelled()

        deadline = None if timeout is None else self._clock() + timeout

        # an unlocked lock can still have woken waiters ahead of us, so a
        # cancellable caller always queues through wait_or_cancel
        if cancel is None and deadline is None:
            await self._lock.acquire()
        else:
            turn = await wait_or_cancel(
                self._lock.acquire(), cancel, deadline, self._clock,
                undo=lambda _: self._lock.release(),
            )
            if turn is None:
                raise RateLimitCancelled()

        try:
            while True:
                if cancel is not None and cancel.is_set():
                    raise RateLimitCancelled()

                now = self._clock()
                wait = max(bucket.time_until_available(now) for bucket in self._buckets)
                if wait <= 0:
                    for bucket in self._buckets:
                        bucket.take()
                    self.granted += 1
                    return

                if deadline is not None and now + wait > deadline:
                    raise RateLimitCancelled()

                logger.debug(f"Rate limit reached, waiting {wait:.2f}s")
                slept = await wait_or_cancel(asyncio.sleep(wait), cancel, deadline, self._clock)
                if slept is None:
                    raise RateLimitCancelled()
        finally:
            self._lock.release()
