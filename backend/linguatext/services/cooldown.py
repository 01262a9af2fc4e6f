import time
from typing import Callable, Hashable


class KeyedCooldown:
    """Allow an action at most once per cooldown window for each key.

    The clock is injected so callers (and tests) control time; the store of
    last-allowed timestamps lives on the instance.
    """

    def __init__(self, cooldown_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._last_seen: dict[Hashable, float] = {}

    def try_acquire(self, key: Hashable) -> bool:
        """Return True and start a new window if the key is not cooling down."""
        now = self._clock()
        self._prune(now)
        if key in self._last_seen:
            return False
        self._last_seen[key] = now
        return True

    def _prune(self, now: float) -> None:
        """Forget keys whose window has run out."""
        expired = [k for k, seen in self._last_seen.items() if now - seen >= self.cooldown_seconds]
        for k in expired:
            del self._last_seen[k]

    def __len__(self) -> int:
        return len(self._last_seen)

    def reset(self, key: Hashable) -> None:
        self._last_seen.pop(key, None)
