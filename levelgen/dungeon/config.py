"""Generator configuration.

Values resolve in layers, lowest precedence first: dataclass defaults, a
``.env`` file, ``LEVELGEN_*`` environment variables, then the active Flask
app config when called inside an application context.
"""
import os
from dataclasses import dataclass, fields
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

ENV_PREFIX = "LEVELGEN_"


@dataclass
class GeneratorConfig:
    min_room_size: int = 3
    max_room_size: int = 6
    room_area_quota_percentage: int = 30
    max_door_count: int = 4
    room_size_attempts: int = 2
    max_chests_per_room: int = 2
    max_entry_exit_attempts: int = 256
    max_regenerations: int = 3
    seed: Optional[int] = None
    enable_metrics: bool = True

    @classmethod
    def from_env(cls, **overrides) -> "GeneratorConfig":
        load_dotenv()
        cfg = cls()
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            if key in os.environ:
                setattr(cfg, f.name, _coerce(f.name, os.environ[key]))
        try:
            from flask import current_app, has_app_context

            if has_app_context():
                app_cfg = current_app.config
                for f in fields(cls):
                    key = ENV_PREFIX + f.name.upper()
                    if key in app_cfg:
                        setattr(cfg, f.name, _coerce(f.name, app_cfg[key]))
        except ImportError:
            pass
        for name, value in overrides.items():
            if value is not None:
                setattr(cfg, name, value)
        return cfg

    def validate(self) -> "GeneratorConfig":
        if self.min_room_size < 1:
            raise ConfigError("min_room_size", "must be at least 1")
        if self.max_room_size < self.min_room_size:
            raise ConfigError("max_room_size", "must not be smaller than min_room_size")
        if not 0 <= self.room_area_quota_percentage <= 100:
            raise ConfigError("room_area_quota_percentage", "must be within 0..100")
        if self.max_door_count < 1:
            raise ConfigError("max_door_count", "must be at least 1")
        if self.room_size_attempts < 1:
            raise ConfigError("room_size_attempts", "must be at least 1")
        if self.max_chests_per_room < 0:
            raise ConfigError("max_chests_per_room", "must not be negative")
        if self.max_entry_exit_attempts < 1:
            raise ConfigError("max_entry_exit_attempts", "must be at least 1")
        if self.max_regenerations < 0:
            raise ConfigError("max_regenerations", "must not be negative")
        return self


def _coerce(name: str, value):
    if name == "enable_metrics":
        if isinstance(value, str):
            return value.lower() not in {"0", "false", "no", ""}
        return bool(value)
    if value is None or value == "":
        return None if name == "seed" else value
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(name, f"expected an integer, got {value!r}") from None


__all__ = ["GeneratorConfig", "ENV_PREFIX"]
