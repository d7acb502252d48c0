from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, auto

from config import (
    DEFAULT_COUPLED,
    DEFAULT_ADJUST_BY_SEMITONES,
    DEFAULT_PITCH_PERCENT,
    DEFAULT_SKIP_SILENCE,
    DEFAULT_STEP,
    DEFAULT_TEMPO,
)


@dataclass(frozen=True)
class SessionSnapshot:
    tempo: float
    pitch_percent: float
    skip_silence: bool


DEFAULT_SNAPSHOT = SessionSnapshot(
    tempo=DEFAULT_TEMPO,
    pitch_percent=DEFAULT_PITCH_PERCENT,
    skip_silence=DEFAULT_SKIP_SILENCE,
)


@dataclass
class ParameterState:
    tempo: float = DEFAULT_TEMPO
    pitch_percent: float = DEFAULT_PITCH_PERCENT
    step_size: float = DEFAULT_STEP
    skip_silence: bool = DEFAULT_SKIP_SILENCE
    hook: bool = DEFAULT_COUPLED
    semitone_mode: bool = DEFAULT_ADJUST_BY_SEMITONES

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            tempo=self.tempo,
            pitch_percent=self.pitch_percent,
            skip_silence=self.skip_silence,
        )

    def as_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ParameterState":
        return cls(
            tempo=float(data.get("tempo", DEFAULT_TEMPO)),
            pitch_percent=float(data.get("pitch_percent", DEFAULT_PITCH_PERCENT)),
            step_size=float(data.get("step_size", DEFAULT_STEP)),
            skip_silence=bool(data.get("skip_silence", DEFAULT_SKIP_SILENCE)),
            hook=bool(data.get("hook", DEFAULT_COUPLED)),
            semitone_mode=bool(data.get("semitone_mode", DEFAULT_ADJUST_BY_SEMITONES)),
        )


class SessionStatus(Enum):
    OPEN = auto()
    CANCELLED = auto()
    RESET = auto()
    ACCEPTED = auto()
