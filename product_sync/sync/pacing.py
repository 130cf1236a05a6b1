import time


class Pacer:
    """Decides how long to wait between two batch items."""

    def wait(self) -> None:
        raise NotImplementedError


class NoDelayPacer(Pacer):
    def wait(self) -> None:
        return None


class FixedDelayPacer(Pacer):
    """Unconditional sleep between items. No backoff, no rate-limit detection."""

    def __init__(self, delay_seconds: float = 0.8, sleep=time.sleep):
        if delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def wait(self) -> None:
        if self.delay_seconds:
            self._sleep(self.delay_seconds)


def pacer_from_config(config) -> Pacer:
    delay_ms = int(config.get("BATCH_DELAY_MS", 800))
    if delay_ms <= 0:
        return NoDelayPacer()
    return FixedDelayPacer(delay_ms / 1000.0)
