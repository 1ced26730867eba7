import threading


class HitCounter:
    """Process-wide file server hit count."""

    def __init__(self):
        self._lock = threading.Lock()
        self._hits = 0

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._hits


def get_hit_counter(app) -> HitCounter:
    return app.extensions["fileserver_hits"]
