"""Telemetry and configuration shared by every engine layer."""

from . import telemetry
from .config import EngineConfig

__all__ = ["EngineConfig", "telemetry"]
