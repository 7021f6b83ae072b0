"""Step progress records and the fire-and-forget channel they travel on."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from levelgen.logging_utils import get_logger

log = get_logger("levelgen.dungeon.progress")


@dataclass(frozen=True)
class Step:
    id: str
    description: str


@dataclass(frozen=True)
class StepProgress:
    step_name: str
    current_step: int
    step_count: int

    def is_done(self) -> bool:
        return self.current_step >= self.step_count

    def to_dict(self):
        return {"step_name": self.step_name, "current_step": self.current_step, "step_count": self.step_count}


class MultiStepProgress:
    """Tracks which of a fixed list of steps is running; starts before the first step."""

    def __init__(self, steps: List[Step]):
        self.steps = list(steps)
        self.current_step_index: Optional[int] = None

    def step_count(self) -> int:
        return len(self.steps)

    def get_current_step(self) -> Optional[Step]:
        if self.current_step_index is None:
            return None
        return self.steps[self.current_step_index]

    def get_current_step_number(self) -> Optional[int]:
        if self.current_step_index is None:
            return None
        return self.current_step_index + 1

    def next_step(self) -> bool:
        if self.current_step_index is None:
            if not self.steps:
                return False
            self.current_step_index = 0
            return True
        if self.current_step_index + 1 >= len(self.steps):
            log.error(event="progress_overrun", index=self.current_step_index, steps=len(self.steps))
            return False
        self.current_step_index += 1
        return True

    def is_done(self) -> bool:
        return self.current_step_index is not None and self.current_step_index == len(self.steps) - 1

    def get_progress_percentage(self) -> int:
        if self.current_step_index is None:
            return 0
        return (100 // len(self.steps)) * (self.current_step_index + 1)

    def snapshot(self) -> StepProgress:
        step = self.get_current_step()
        return StepProgress(step.id if step else "", self.get_current_step_number() or 0, self.step_count())


def send_progress(channel, progress: StepProgress) -> bool:
    """Deliver ``progress`` without blocking; receiver failures are logged and dropped.

    ``channel`` may be a queue-like object with ``put_nowait`` or a plain callable.
    """
    if channel is None:
        return False
    try:
        if hasattr(channel, "put_nowait"):
            channel.put_nowait(progress)
        else:
            channel(progress)
    except Exception as exc:  # receiver side is not ours to fail on
        log.debug(event="progress_dropped", step=progress.step_name, error=type(exc).__name__)
        return False
    return True


__all__ = ["Step", "StepProgress", "MultiStepProgress", "send_progress"]
