# clock.py - elapsed play time, independent of the rules
import time
from typing import Callable, Optional


class GameClock:
    """
    Counts whole seconds of play. Starts on the first player action and
    freezes when stopped (e.g. on a win). ``now`` returns seconds as a float;
    hosts may inject their own time source.
    """

    def __init__(self, now: Callable[[], float] = time.monotonic):
        self._now = now
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    @property
    def started(self) -> bool:
        return self._started_at is not None

    def start(self):
        if self._started_at is None:
            self._started_at = self._now()

    def stop(self):
        if self.running:
            self._stopped_at = self._now()

    def reset(self):
        self._started_at = None
        self._stopped_at = None

    @property
    def elapsed(self) -> int:
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._now()
        return max(0, int(end - self._started_at))


def format_elapsed(seconds: int) -> str:
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"
