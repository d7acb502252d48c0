"""
One open-to-close lifetime of the tempo/pitch control.

A session starts from the caller's current playback values, lets the user
adjust them through the SyncEngine / StepEngine, and ends with exactly one of:
- cancel: restore the values the session opened with
- reset: go back to the defaults (1.00, 1.00, no silence skipping)
- accept: keep the current values

Each ending fires the parameters callback once with the final triple.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from config import (
    DEFAULT_ADJUST_BY_SEMITONES,
    DEFAULT_COUPLED,
    DEFAULT_PITCH_PERCENT,
    DEFAULT_SKIP_SILENCE,
    DEFAULT_TEMPO,
    MAX_PLAYBACK_VALUE,
    MIN_PLAYBACK_VALUE,
    PREF_ADJUST_BY_SEMITONES,
    PREF_COUPLED,
)
from models import DEFAULT_SNAPSHOT, ParameterState, SessionSnapshot, SessionStatus
from playback.preferences import MemoryPreferences, PreferenceStore
from playback.steps import StepEngine
from playback.sync import ParametersCallback, SyncEngine
from utils import clamp

logger = logging.getLogger(__name__)


class SessionClosedError(RuntimeError):
    pass


def _ingest(value: float, default: float, name: str) -> float:
    value = float(value)
    if math.isnan(value):
        logger.warning("Initial %s is NaN, using %s", name, default)
        value = default
    return clamp(value, MIN_PLAYBACK_VALUE, MAX_PLAYBACK_VALUE)


class PlaybackSession:
    def __init__(
        self,
        tempo: float = DEFAULT_TEMPO,
        pitch_percent: float = DEFAULT_PITCH_PERCENT,
        skip_silence: bool = DEFAULT_SKIP_SILENCE,
        callback: Optional[ParametersCallback] = None,
        preferences: Optional[PreferenceStore] = None,
    ):
        self.preferences = preferences if preferences is not None else MemoryPreferences()
        self.initial = SessionSnapshot(
            tempo=_ingest(tempo, DEFAULT_TEMPO, "tempo"),
            pitch_percent=_ingest(pitch_percent, DEFAULT_PITCH_PERCENT, "pitch_percent"),
            skip_silence=bool(skip_silence),
        )
        self.state = ParameterState(
            tempo=self.initial.tempo,
            pitch_percent=self.initial.pitch_percent,
            skip_silence=self.initial.skip_silence,
            hook=self.preferences.get_bool(PREF_COUPLED, DEFAULT_COUPLED),
            semitone_mode=self.preferences.get_bool(PREF_ADJUST_BY_SEMITONES, DEFAULT_ADJUST_BY_SEMITONES),
        )
        self.sync = SyncEngine(self.state, callback)
        self.steps = StepEngine(self.sync)
        self.status = SessionStatus.OPEN

        if self.sync.normalize():
            self.sync.notify()

    @property
    def callback(self) -> Optional[ParametersCallback]:
        return self.sync.callback

    @callback.setter
    def callback(self, callback: Optional[ParametersCallback]) -> None:
        self.sync.callback = callback

    @property
    def is_open(self) -> bool:
        return self.status is SessionStatus.OPEN

    # Mutations
    # -----------------------------

    def set_tempo(self, value: float) -> None:
        self._ensure_open()
        self.sync.set_tempo(value)

    def set_pitch(self, value: float) -> None:
        self._ensure_open()
        self.sync.set_pitch(value)

    def set_step_size(self, value: float) -> None:
        self._ensure_open()
        self.sync.set_step_size(value)

    def set_skip_silence(self, enabled: bool) -> None:
        self._ensure_open()
        self.sync.set_skip_silence(enabled)

    def set_hook(self, enabled: bool) -> None:
        self._ensure_open()
        enabled = bool(enabled)
        if enabled != self.state.hook:
            self.preferences.set_bool(PREF_COUPLED, enabled)
        self.sync.set_hook(enabled)

    def set_semitone_mode(self, enabled: bool) -> None:
        self._ensure_open()
        enabled = bool(enabled)
        if enabled != self.state.semitone_mode:
            self.preferences.set_bool(PREF_ADJUST_BY_SEMITONES, enabled)
        self.sync.set_semitone_mode(enabled)

    def step_tempo(self, direction: int) -> None:
        self._ensure_open()
        self.steps.step_tempo(direction)

    def step_pitch_percent(self, direction: int) -> None:
        self._ensure_open()
        self.steps.step_pitch_percent(direction)

    def step_semitone(self, direction: int) -> None:
        self._ensure_open()
        self.steps.step_semitone(direction)

    # Terminal transitions
    # -----------------------------

    def cancel(self) -> None:
        self._ensure_open()
        self._apply(self.initial)
        self._close(SessionStatus.CANCELLED)

    def reset(self) -> None:
        self._ensure_open()
        self.sync.set_tempo(DEFAULT_SNAPSHOT.tempo, notify=False)
        self.sync.set_pitch(DEFAULT_SNAPSHOT.pitch_percent, notify=False)
        self.sync.set_skip_silence(DEFAULT_SNAPSHOT.skip_silence, notify=False)
        self._close(SessionStatus.RESET)

    def accept(self) -> None:
        self._ensure_open()
        self._close(SessionStatus.ACCEPTED)

    # Save / restore across a host suspend
    # -----------------------------

    def save_instance_state(self) -> dict:
        return {
            "initial": {
                "tempo": self.initial.tempo,
                "pitch_percent": self.initial.pitch_percent,
                "skip_silence": self.initial.skip_silence,
            },
            "state": self.state.as_dict(),
        }

    @classmethod
    def from_instance_state(
        cls,
        data: dict,
        callback: Optional[ParametersCallback] = None,
        preferences: Optional[PreferenceStore] = None,
    ) -> "PlaybackSession":
        initial = data.get("initial", {})
        session = cls(
            initial.get("tempo", DEFAULT_TEMPO),
            initial.get("pitch_percent", DEFAULT_PITCH_PERCENT),
            initial.get("skip_silence", DEFAULT_SKIP_SILENCE),
            preferences=preferences,
        )
        saved = ParameterState.from_dict(data.get("state", {}))
        session.sync.set_step_size(saved.step_size)
        session.state.hook = saved.hook
        session.state.semitone_mode = saved.semitone_mode
        session._apply(saved.snapshot())
        session.callback = callback
        return session

    def _apply(self, snapshot: SessionSnapshot) -> None:
        self.state.tempo = snapshot.tempo
        self.state.pitch_percent = snapshot.pitch_percent
        self.state.skip_silence = snapshot.skip_silence
        self.sync.normalize()

    def _close(self, status: SessionStatus) -> None:
        logger.debug("Closing playback session: %s", status.name)
        self.sync.notify()
        self.status = status

    def _ensure_open(self) -> None:
        if self.status is not SessionStatus.OPEN:
            raise SessionClosedError(f"playback session already closed ({self.status.name})")
