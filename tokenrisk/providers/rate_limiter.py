import asyncio

from loguru import logger

# Waits shorter than this are routine spacing, not throttling
_LOG_WAIT_SEC = 1.0


class RateLimiter:
    """Spaces requests to one provider at least ``1 / max_rps`` seconds apart.

    One instance per client; the CoinGecko client is shared by the contract,
    native and symbol-search paths, so they all draw from the same budget.
    ``max_rps <= 0`` disables spacing.
    """

    def __init__(self, max_rps: float, name: str = "provider") -> None:
        self._name = name
        self._min_interval = 1.0 / max_rps if max_rps > 0 else 0.0
        self._next_slot = 0.0
        self._lock = asyncio.Lock()

    @property
    def min_interval(self) -> float:
        return self._min_interval

    async def acquire(self) -> None:
        if self._min_interval == 0.0:
            return
        async with self._lock:
            now = asyncio.get_running_loop().time()
            wait = self._next_slot - now
            if wait > 0:
                if wait >= _LOG_WAIT_SEC:
                    logger.debug(f"[RATE] {self._name} throttled {wait:.1f}s")
                await asyncio.sleep(wait)
                now = self._next_slot
            self._next_slot = now + self._min_interval
