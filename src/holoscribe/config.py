"""
Configuration management for holoscribe.

All geometric and styling constants live in these dataclasses so callers can
vary them per run. YAML files override the defaults key by key.
"""

import os
from dataclasses import asdict, dataclass, field
from typing import List

import yaml


@dataclass
class InterpolationConfig:
    """Configuration for mesh edge interpolation."""
    density: int = 1  # points per model unit along each edge


@dataclass
class ScriberConfig:
    """Configuration for composing a scribed drawing."""
    margin: float = 1.0  # absolute, in model units, added on every side
    min_extent: float = 1.0  # smallest viewBox width/height after margins
    canvas_width: float = 100.0
    canvas_height: float = 100.0
    units: str = "mm"
    strategy: str = "circle"  # "circle" or "diamond"
    draw_bounds: bool = False


@dataclass
class StrokeConfig:
    """Configuration for stroke rendering."""
    width: float = 0.05
    color: str = "black"


@dataclass
class DiamondConfig:
    """Depth-to-size remap for the diamond outline strategy."""
    plane_start: float = -1.0
    plane_end: float = 1.0
    min_size: float = 0.01
    max_size: float = 0.1


@dataclass
class CircleConfig:
    """Depth-to-radius scaling for the depth circle strategy."""
    z_scale: float = 1.0


@dataclass
class HologramConfig:
    """Configuration for reflection arcs and their animation."""
    half_cone_angle_deg: float = 3.5
    step_angle_deg: float = 3.5
    # stroke widths are fractions of the input drawing's viewBox width
    holo_stroke_width: float = 0.005
    circle_stroke_width: float = 0.0001
    default_width: float = 500.0
    default_height: float = 500.0
    duration_secs: float = 2.0
    animation_mode: str = "swept"  # "swept" or "two_frame"
    light_start: List[float] = field(default_factory=lambda: [300.0, -100.0])
    light_end: List[float] = field(default_factory=lambda: [400.0, -10.0])


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class HoloConfig:
    """Complete configuration."""
    interpolation: InterpolationConfig = field(default_factory=InterpolationConfig)
    scriber: ScriberConfig = field(default_factory=ScriberConfig)
    stroke: StrokeConfig = field(default_factory=StrokeConfig)
    diamond: DiamondConfig = field(default_factory=DiamondConfig)
    circle: CircleConfig = field(default_factory=CircleConfig)
    hologram: HologramConfig = field(default_factory=HologramConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


SECTIONS = ("interpolation", "scriber", "stroke", "diamond", "circle", "hologram", "tracing")


def load_config(config_path=None):
    """
    Load configuration from a YAML file.

    Missing files, sections and keys fall back to defaults; unknown keys are
    ignored.
    """
    config = HoloConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass."""
    for section_name in SECTIONS:
        values = yaml_data.get(section_name)
        if not isinstance(values, dict):
            continue
        section = getattr(config, section_name)
        for key, value in values.items():
            if hasattr(section, key):
                setattr(section, key, value)

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = asdict(HoloConfig())
    # file_path is a per-run choice, not a default worth recording
    yaml_data["tracing"].pop("file_path", None)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
