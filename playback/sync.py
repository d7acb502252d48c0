from __future__ import annotations

import logging
import math
from typing import Callable, Optional

import numpy as np

from config import MAX_PLAYBACK_VALUE, MIN_PLAYBACK_VALUE, STEP_SIZES
from mappings import SEMITONE_MAPPING, SemitoneMapping
from models import ParameterState
from utils import clamp

logger = logging.getLogger(__name__)

# tempo, pitch_percent, skip_silence
ParametersCallback = Callable[[np.float32, np.float32, bool], None]


class SyncEngine:
    """
    Keeps tempo, pitch percent and the semitone view of pitch consistent.

    Every mutation goes through here: values are clamped to the playback range,
    pitch is snapped to the nearest semitone while semitone mode is on, and
    while tempo and pitch are hooked together both fields always carry the same
    value. Mutations end with a call to `notify`, which hands the complete
    (tempo, pitch_percent, skip_silence) triple to the registered callback.
    """

    def __init__(
        self,
        state: ParameterState,
        callback: Optional[ParametersCallback] = None,
        semitones: SemitoneMapping = SEMITONE_MAPPING,
    ):
        self.state = state
        self.callback = callback
        self._semitones = semitones

    def valid_tempo(self, value: float) -> float:
        return clamp(float(value), MIN_PLAYBACK_VALUE, MAX_PLAYBACK_VALUE)

    def valid_pitch(self, value: float) -> float:
        pitch = clamp(float(value), MIN_PLAYBACK_VALUE, MAX_PLAYBACK_VALUE)
        if not self.state.semitone_mode:
            return pitch
        return self._semitones.quantize(pitch)

    def set_tempo(self, candidate: float, *, notify: bool = True) -> None:
        if not self._is_number(candidate, "tempo"):
            return
        if self.state.hook:
            self._set_coupled(candidate)
        else:
            self.state.tempo = self.valid_tempo(candidate)
        if notify:
            self.notify()

    def set_pitch(self, candidate: float, *, notify: bool = True) -> None:
        if not self._is_number(candidate, "pitch"):
            return
        if self.state.hook:
            self._set_coupled(candidate)
        else:
            self.state.pitch_percent = self.valid_pitch(candidate)
        if notify:
            self.notify()

    def set_hook(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self.state.hook:
            return
        self.state.hook = enabled
        if enabled:
            # re-coupling slides both back to the lower of the two
            self._set_coupled(min(self.state.tempo, self.state.pitch_percent))
            self.notify()

    def set_semitone_mode(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self.state.semitone_mode:
            return
        self.state.semitone_mode = enabled
        if not enabled:
            return

        new_pitch = self.valid_pitch(self.state.pitch_percent)
        if new_pitch != self.state.pitch_percent:
            logger.debug(
                "Bringing pitch_percent to corresponding semitone: current = %s, new = %s",
                self.state.pitch_percent,
                new_pitch,
            )
            self.set_pitch(new_pitch)

    def set_step_size(self, value: float) -> None:
        for step in STEP_SIZES:
            if math.isclose(float(value), step):
                self.state.step_size = step
                return
        raise ValueError(f"step size must be one of {STEP_SIZES}, got {value}")

    def set_skip_silence(self, enabled: bool, *, notify: bool = True) -> None:
        self.state.skip_silence = bool(enabled)
        if notify:
            self.notify()

    def normalize(self) -> bool:
        """Re-establish every invariant on the current values. Returns True if anything moved."""
        before = (self.state.tempo, self.state.pitch_percent)
        tempo = self.valid_tempo(self.state.tempo)
        pitch = self.valid_pitch(self.state.pitch_percent)
        if self.state.hook:
            tempo = pitch = self.valid_pitch(min(tempo, pitch))
        self.state.tempo = tempo
        self.state.pitch_percent = pitch
        return (tempo, pitch) != before

    def notify(self) -> None:
        if self.callback is None:
            return
        logger.debug(
            "Updating callback: tempo = %s, pitch_percent = %s, skip_silence = %s",
            self.state.tempo,
            self.state.pitch_percent,
            self.state.skip_silence,
        )
        self.callback(
            np.float32(self.state.tempo),
            np.float32(self.state.pitch_percent),
            bool(self.state.skip_silence),
        )

    def _set_coupled(self, value: float) -> None:
        value = self.valid_pitch(value)
        self.state.tempo = value
        self.state.pitch_percent = value

    @staticmethod
    def _is_number(value: float, name: str) -> bool:
        if math.isnan(float(value)):
            logger.warning("Ignoring NaN %s", name)
            return False
        return True
