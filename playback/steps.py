from __future__ import annotations

from mappings import SEMITONE_MAPPING, SemitoneMapping
from playback.sync import SyncEngine


def _check_direction(direction: int) -> int:
    if direction not in (-1, 1):
        raise ValueError(f"direction must be -1 or +1, got {direction}")
    return int(direction)


class StepEngine:
    """Single-tap step buttons. Each step is routed through the SyncEngine setters."""

    def __init__(self, sync: SyncEngine, semitones: SemitoneMapping = SEMITONE_MAPPING):
        self._sync = sync
        self._semitones = semitones

    def step_tempo(self, direction: int) -> None:
        direction = _check_direction(direction)
        state = self._sync.state
        self._sync.set_tempo(state.tempo + direction * state.step_size)

    def step_pitch_percent(self, direction: int) -> None:
        direction = _check_direction(direction)
        state = self._sync.state
        self._sync.set_pitch(state.pitch_percent + direction * state.step_size)

    def step_semitone(self, direction: int) -> None:
        direction = _check_direction(direction)
        semitone = self._semitones.to_semitone(self._sync.state.pitch_percent)
        self._sync.set_pitch(self._semitones.to_percent(semitone + direction))
