"""
Chime configuration
===================
Dataclasses holding every tunable constant of the chime: physical parameters
of the two oscillators, coupling, forcing, rest thresholds, pointer sampling
and lifecycle timing. Defaults reproduce the shipped widget.

Usage:
    from windchime.config import ChimeConfig
    config = ChimeConfig()
    config.scheduler.settle_grace_ms = 2000.0
    dynamics = config.build_dynamics()
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

GRAVITY = 9.81
FORCE_TIME_SCALE = 0.016
MAX_ANGULAR_VELOCITY = 8.0
MIN_DT = 1e-4
MAX_DT = 0.033


@dataclass
class OscillatorParams:
    mass: float = 1.0
    length: float = 0.03
    damping: float = 0.78
    max_angle: float = 0.6
    moment_of_inertia: Optional[float] = None
    max_angular_velocity: float = MAX_ANGULAR_VELOCITY

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> OscillatorParams:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


def _default_follower() -> OscillatorParams:
    return OscillatorParams(mass=0.6, length=0.024, damping=0.78, max_angle=0.45)


@dataclass
class CouplingParams:
    strength: float = 0.6
    damping: float = 1.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CouplingParams:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class ForceParams:
    decay_rate: float = 0.85
    time_scale: float = FORCE_TIME_SCALE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ForceParams:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class RestThresholds:
    velocity: float = 0.01
    angle: float = 0.002
    force: float = 0.01

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RestThresholds:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class ConnectorWeights:
    """Linear blends for the two connector angles."""

    connector1: float = 0.85
    follower: float = 0.7
    driver: float = 0.3

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ConnectorWeights:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class SamplerParams:
    sample_interval_ms: float = 16.0
    movement_threshold: float = 1.0
    speed_gain: float = 2.0
    offset_gain: float = 0.004
    force_cap: float = 3.0
    restoring_offset_threshold: float = 24.0
    restoring_gain: float = 0.002
    restoring_cap: float = 0.3

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SamplerParams:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class SchedulerParams:
    activation_threshold: float = 0.05
    settle_grace_ms: float = 1500.0
    frame_interval_ms: float = 1000.0 / 60.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SchedulerParams:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class ChimeConfig:
    driver: OscillatorParams = field(default_factory=OscillatorParams)
    follower: OscillatorParams = field(default_factory=_default_follower)
    coupling: CouplingParams = field(default_factory=CouplingParams)
    force: ForceParams = field(default_factory=ForceParams)
    rest: RestThresholds = field(default_factory=RestThresholds)
    connectors: ConnectorWeights = field(default_factory=ConnectorWeights)
    sampler: SamplerParams = field(default_factory=SamplerParams)
    scheduler: SchedulerParams = field(default_factory=SchedulerParams)
    gravity: float = GRAVITY
    jitter_amplitude: float = 0.0
    jitter_seed: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ChimeConfig:
        """Build a config from a (possibly partial) dictionary; missing keys keep defaults."""
        config = ChimeConfig()
        if "driver" in data:
            config.driver = OscillatorParams.from_dict(data["driver"])
        if "follower" in data:
            config.follower = OscillatorParams.from_dict(data["follower"])
        if "coupling" in data:
            config.coupling = CouplingParams.from_dict(data["coupling"])
        if "force" in data:
            config.force = ForceParams.from_dict(data["force"])
        if "rest" in data:
            config.rest = RestThresholds.from_dict(data["rest"])
        if "connectors" in data:
            config.connectors = ConnectorWeights.from_dict(data["connectors"])
        if "sampler" in data:
            config.sampler = SamplerParams.from_dict(data["sampler"])
        if "scheduler" in data:
            config.scheduler = SchedulerParams.from_dict(data["scheduler"])
        config.gravity = float(data.get("gravity", config.gravity))
        config.jitter_amplitude = float(data.get("jitter_amplitude", config.jitter_amplitude))
        config.jitter_seed = data.get("jitter_seed", config.jitter_seed)
        return config

    def build_dynamics(self) -> Any:
        """Construct a fresh ChimeDynamics from this configuration."""
        from windchime.physics.coupled import ChimeDynamics

        return ChimeDynamics.from_config(self)
