"""
Config Manager

Loads named transition presets from YAML, validates them and builds
TransitionProps from them.
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from transition_engine.models.enums import LogCategory
from transition_engine.models.props import TransitionProps
from transition_engine.schemas.preset import PresetFileSchema, TransitionPresetSchema
from transition_engine.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

DEFAULTS_PATH = Path(__file__).parent.parent / "config" / "transitions.yaml"


class ConfigManager:
    """
    Transition preset manager

    Loads a presets YAML file and falls back to the packaged factory
    defaults when it is missing or invalid.

    Example:
        config = ConfigManager("my_presets.yaml")
        config.load()

        props = config.get_props("fade")
        props = config.get_props("stagger_slide", trail=120)
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        defaults_path: Union[str, Path] = DEFAULTS_PATH,
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Presets YAML (None = factory defaults only)
            defaults_path: Factory defaults fallback
        """
        self.config_path = Path(config_path) if config_path is not None else None
        self.defaults_path = Path(defaults_path)
        self.presets: Dict[str, TransitionPresetSchema] = {}

    def load(self) -> Dict[str, TransitionPresetSchema]:
        """
        Load and validate presets

        Process:
        1. Load config_path if given
        2. Fallback to factory defaults on any failure

        Returns:
            Preset name → validated preset
        """
        if self.config_path is not None:
            try:
                self.presets = self._load_file(self.config_path)
                log.info(f"Loaded {len(self.presets)} presets", path=str(self.config_path))
                return self.presets
            except (OSError, yaml.YAMLError, ValidationError) as ex:
                log.error("Failed to load presets", path=str(self.config_path), error_type=type(ex).__name__)
                log.warn("Falling back to factory defaults")

        self.presets = self._load_file(self.defaults_path)
        log.info(f"Loaded {len(self.presets)} factory presets")
        return self.presets

    def _load_file(self, path: Path) -> Dict[str, TransitionPresetSchema]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return PresetFileSchema.model_validate(data).presets

    def list_presets(self) -> List[str]:
        return list(self.presets.keys())

    def get_preset(self, name: str) -> TransitionPresetSchema:
        """Get a loaded preset (KeyError if unknown)"""
        if name not in self.presets:
            raise KeyError(f"Unknown transition preset: {name}")
        return self.presets[name]

    def get_props(self, name: str, **overrides) -> TransitionProps:
        """Build TransitionProps from a preset, with optional field overrides"""
        return self.get_preset(name).to_props(**overrides)
