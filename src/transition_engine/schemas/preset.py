"""
Preset schemas - Pydantic models for transition presets loaded from YAML
"""

import math
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from transition_engine.models.animation import AnimationConfig, EASING_FUNCTIONS
from transition_engine.models.enums import EasingID
from transition_engine.models.props import TransitionProps
from transition_engine.utils.enum_helper import EnumHelper


class AnimationConfigSchema(BaseModel):
    """Timing of a preset's animations"""
    duration_ms: float = Field(300, ge=0, description="Animation duration in milliseconds")
    steps: int = Field(10, ge=1, description="Number of interpolation steps")
    easing: EasingID = Field(EasingID.LINEAR, description="Easing curve name (e.g. 'out_quad')")

    @field_validator("easing", mode="before")
    @classmethod
    def parse_easing(cls, value):
        return EnumHelper.to_enum(EasingID, value)

    def to_config(self) -> AnimationConfig:
        return AnimationConfig(
            duration_ms=self.duration_ms,
            steps=self.steps,
            ease_function=EASING_FUNCTIONS[self.easing],
        )


class TransitionPresetSchema(BaseModel):
    """One named transition preset"""
    model_config = ConfigDict(populate_by_name=True)

    reset: bool = False
    trail: float = Field(0, ge=0, description="Stagger delay per item (ms)")
    expires: Optional[float] = Field(
        None, ge=0, description="Delay before dismissing a left item (ms, null = never)"
    )
    initial: Optional[Dict[str, Any]] = None
    enter: Optional[Dict[str, Any]] = None
    update: Optional[Dict[str, Any]] = None
    leave: Optional[Dict[str, Any]] = None
    from_: Optional[Dict[str, Any]] = Field(None, alias="from")
    animation: AnimationConfigSchema = Field(default_factory=AnimationConfigSchema, alias="config")
    manual: bool = False

    def to_props(self, **overrides) -> TransitionProps:
        """Build TransitionProps; overrides replace preset fields (e.g. callables)"""
        props = TransitionProps(
            reset=self.reset,
            trail=self.trail,
            expires=math.inf if self.expires is None else self.expires,
            initial=self.initial,
            enter=self.enter,
            update=self.update,
            leave=self.leave,
            from_=self.from_,
            config=self.animation.to_config(),
            manual=self.manual,
        )
        return props.merge(**overrides) if overrides else props


class PresetFileSchema(BaseModel):
    """Top-level layout of a presets YAML file"""
    presets: Dict[str, TransitionPresetSchema] = Field(default_factory=dict)
