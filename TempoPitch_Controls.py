"""
PySide6 tempo/pitch playback controls.

Opens the playback parameter dialog standalone and logs every parameter update
the dialog reports. A host player would connect `parametersChanged` to its own
tempo/pitch setters instead.

Requirements:
  pip install PySide6 numpy

Env vars:
- TEMPOPITCH_TEMPO / TEMPOPITCH_PITCH = initial tempo and pitch multipliers (default 1.0)
- TEMPOPITCH_SKIP_SILENCE = "1" to start with silence skipping on
- TEMPOPITCH_LOG_LEVEL = logging level name (default INFO)
"""

from __future__ import annotations

import logging
import os
import sys

from PySide6 import QtWidgets

from config import DEFAULT_PITCH_PERCENT, DEFAULT_SKIP_SILENCE, DEFAULT_TEMPO
from playback.preferences import QSettingsPreferences
from ui.playback_dialog import PlaybackParameterDialog
from utils import env_flag, log_level, safe_float

logger = logging.getLogger(__name__)


def _log_parameters(tempo: float, pitch_percent: float, skip_silence: bool) -> None:
    logger.info(
        "Playback parameters: tempo = %.2f, pitch_percent = %.2f, skip_silence = %s",
        tempo,
        pitch_percent,
        skip_silence,
    )


def main():
    logging.basicConfig(
        level=log_level(os.environ.get("TEMPOPITCH_LOG_LEVEL", "INFO")),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QtWidgets.QApplication(sys.argv)
    dialog = PlaybackParameterDialog(
        tempo=safe_float(os.environ.get("TEMPOPITCH_TEMPO", ""), DEFAULT_TEMPO),
        pitch_percent=safe_float(os.environ.get("TEMPOPITCH_PITCH", ""), DEFAULT_PITCH_PERCENT),
        skip_silence=env_flag("TEMPOPITCH_SKIP_SILENCE", DEFAULT_SKIP_SILENCE),
        callback=_log_parameters,
        preferences=QSettingsPreferences(),
    )
    dialog.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
