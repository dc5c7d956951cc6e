from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Countdown:
    """Seconds-until-next-refresh display value.

    Purely cosmetic: nothing reads it to decide when to refresh.
    """

    start: int = 15
    remaining: int = field(init=False)

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Invalid countdown start: {self.start}")
        self.remaining = self.start

    def reset(self) -> int:
        self.remaining = self.start
        return self.remaining

    def tick(self) -> int:
        # Stops at zero when a cycle runs long.
        if self.remaining > 0:
            self.remaining -= 1
        return self.remaining
