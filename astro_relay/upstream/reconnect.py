"""Reconnect backoff policy for the upstream session."""

from __future__ import annotations


class ReconnectPolicy:
    """Track reconnect attempts and compute the delay before the next one.

    With ``multiplier=1.0`` (the default) every attempt waits ``delay_s``.
    ``max_attempts <= 0`` retries forever.
    """

    def __init__(
        self,
        *,
        delay_s: float,
        multiplier: float = 1.0,
        max_delay_s: float = 0.0,
        max_attempts: int = 0,
    ) -> None:
        self.delay_s = max(0.0, float(delay_s))
        self.multiplier = max(1.0, float(multiplier))
        self.max_delay_s = max(0.0, float(max_delay_s))
        self.max_attempts = max(0, int(max_attempts))
        self.attempts = 0

    def next_delay(self) -> float | None:
        """Consume one attempt; ``None`` once attempts are exhausted."""
        if self.max_attempts > 0 and self.attempts >= self.max_attempts:
            return None
        delay = self.delay_s * (self.multiplier**self.attempts)
        if self.max_delay_s > 0 and self.multiplier > 1.0:
            delay = min(delay, self.max_delay_s)
        self.attempts += 1
        return delay

    def reset(self) -> None:
        self.attempts = 0


__all__ = ["ReconnectPolicy"]
