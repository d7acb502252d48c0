from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6 import QtCore, QtWidgets

from config import (
    DEFAULT_PITCH_PERCENT,
    DEFAULT_SKIP_SILENCE,
    DEFAULT_TEMPO,
    MAX_PLAYBACK_VALUE,
    MIN_PLAYBACK_VALUE,
)
from mappings import QUADRATIC_MAPPING, SEMITONE_MAPPING
from playback.preferences import PreferenceStore, QSettingsPreferences
from playback.session import PlaybackSession
from ui.widgets import SeekStepRow, StepSizeBar
from utils import format_pitch, format_semitones, format_speed

logger = logging.getLogger(__name__)


class PlaybackParameterDialog(QtWidgets.QDialog):
    parametersChanged = QtCore.Signal(float, float, bool)  # tempo, pitch_percent, skip_silence

    def __init__(
        self,
        tempo: float = DEFAULT_TEMPO,
        pitch_percent: float = DEFAULT_PITCH_PERCENT,
        skip_silence: bool = DEFAULT_SKIP_SILENCE,
        callback: Optional[Callable[[float, float, bool], None]] = None,
        preferences: Optional[PreferenceStore] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Playback Speed Controls")

        if callback is not None:
            self.parametersChanged.connect(callback)
        if preferences is None:
            preferences = QSettingsPreferences()

        self.session = PlaybackSession(
            tempo,
            pitch_percent,
            skip_silence,
            callback=self._on_session_changed,
            preferences=preferences,
        )

        self.tempo_row = SeekStepRow(
            "Tempo",
            QUADRATIC_MAPPING,
            format_speed(MIN_PLAYBACK_VALUE),
            format_speed(MAX_PLAYBACK_VALUE),
        )
        self.pitch_percent_row = SeekStepRow(
            "Pitch",
            QUADRATIC_MAPPING,
            format_pitch(MIN_PLAYBACK_VALUE),
            format_pitch(MAX_PLAYBACK_VALUE),
        )
        self.pitch_semitone_row = SeekStepRow(
            "Pitch (semitones)",
            SEMITONE_MAPPING,
            format_semitones(-SEMITONE_MAPPING.semitone_range),
            format_semitones(SEMITONE_MAPPING.semitone_range),
        )
        self.pitch_semitone_row.set_step_texts("-1 st", "+1 st")
        self.step_bar = StepSizeBar()

        self.coupled_checkbox = QtWidgets.QCheckBox("Link tempo and pitch")
        self.coupled_checkbox.setToolTip("Change tempo and pitch together.")
        self.coupled_checkbox.setAccessibleName("Link tempo and pitch")
        self.skip_silence_checkbox = QtWidgets.QCheckBox("Fast-forward during silence")
        self.skip_silence_checkbox.setAccessibleName("Skip silence")
        self.semitones_checkbox = QtWidgets.QCheckBox("Adjust pitch by musical semitones")
        self.semitones_checkbox.setAccessibleName("Adjust by semitones")

        self.buttons = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Cancel
            | QtWidgets.QDialogButtonBox.StandardButton.Reset
            | QtWidgets.QDialogButtonBox.StandardButton.Ok
        )
        self.reset_btn = self.buttons.button(QtWidgets.QDialogButtonBox.StandardButton.Reset)
        self.reset_btn.setToolTip("Reset tempo and pitch to defaults.")

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self.tempo_row)
        layout.addWidget(self.pitch_percent_row)
        layout.addWidget(self.pitch_semitone_row)
        layout.addWidget(self.step_bar)
        layout.addWidget(self.coupled_checkbox)
        layout.addWidget(self.skip_silence_checkbox)
        layout.addWidget(self.semitones_checkbox)
        layout.addWidget(self.buttons)

        self.tempo_row.valueDragged.connect(lambda v: self._apply(self.session.set_tempo, v))
        self.tempo_row.stepClicked.connect(lambda d: self._apply(self.session.step_tempo, d))
        self.pitch_percent_row.valueDragged.connect(lambda v: self._apply(self.session.set_pitch, v))
        self.pitch_percent_row.stepClicked.connect(
            lambda d: self._apply(self.session.step_pitch_percent, d)
        )
        self.pitch_semitone_row.valueDragged.connect(lambda v: self._apply(self.session.set_pitch, v))
        self.pitch_semitone_row.stepClicked.connect(
            lambda d: self._apply(self.session.step_semitone, d)
        )
        self.step_bar.stepSizeSelected.connect(lambda s: self._apply(self.session.set_step_size, s))
        self.coupled_checkbox.toggled.connect(lambda on: self._apply(self.session.set_hook, on))
        self.skip_silence_checkbox.toggled.connect(
            lambda on: self._apply(self.session.set_skip_silence, on)
        )
        self.semitones_checkbox.toggled.connect(
            lambda on: self._apply(self.session.set_semitone_mode, on)
        )
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        self.reset_btn.clicked.connect(self._on_reset)

        self.refresh()

    def refresh(self) -> None:
        state = self.session.state

        self.tempo_row.set_value(state.tempo, format_speed(state.tempo))
        self.pitch_percent_row.set_value(
            state.pitch_percent,
            format_pitch(state.pitch_percent),
        )
        self.pitch_semitone_row.set_value(
            state.pitch_percent,
            format_semitones(SEMITONE_MAPPING.to_semitone(state.pitch_percent)),
        )

        down, up = StepSizeBar.step_texts(state.step_size)
        self.tempo_row.set_step_texts(down, up)
        self.pitch_percent_row.set_step_texts(down, up)
        self.step_bar.set_current(state.step_size)

        for checkbox, checked in (
            (self.coupled_checkbox, state.hook),
            (self.skip_silence_checkbox, state.skip_silence),
            (self.semitones_checkbox, state.semitone_mode),
        ):
            checkbox.blockSignals(True)
            checkbox.setChecked(checked)
            checkbox.blockSignals(False)

        self.pitch_percent_row.setVisible(not state.semitone_mode)
        self.pitch_semitone_row.setVisible(state.semitone_mode)

    def accept(self) -> None:
        if self.session.is_open:
            self.session.accept()
        super().accept()

    def reject(self) -> None:
        if self.session.is_open:
            self.session.cancel()
        super().reject()

    def _on_reset(self) -> None:
        self.session.reset()
        self.refresh()
        super().accept()

    def _apply(self, operation: Callable, value) -> None:
        if not self.session.is_open:
            return
        operation(value)
        self.refresh()

    def _on_session_changed(self, tempo, pitch_percent, skip_silence: bool) -> None:
        self.parametersChanged.emit(float(tempo), float(pitch_percent), bool(skip_silence))
