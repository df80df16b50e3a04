"""Pydantic schemas for configuration files"""

from .preset import AnimationConfigSchema, TransitionPresetSchema, PresetFileSchema

__all__ = [
    "AnimationConfigSchema",
    "TransitionPresetSchema",
    "PresetFileSchema",
]
