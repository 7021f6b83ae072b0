"""Exceptions raised by the generation pipeline.

Most shortfalls (quota misses, missing doors, unreachable rooms) are not
errors and only show up in metrics. These cover the cases that stop a run.
"""


class GenerationError(Exception):
    """Base class for generation failures."""


class ConfigError(GenerationError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class EntryExitSelectionError(GenerationError):
    """No room yielded a free interior tile within the attempt budget."""

    def __init__(self, attempts: int, room_count: int):
        super().__init__(f"no entry/exit candidate after {attempts} room draws over {room_count} rooms")
        self.attempts = attempts
        self.room_count = room_count


__all__ = ["GenerationError", "ConfigError", "EntryExitSelectionError"]
