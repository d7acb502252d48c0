from __future__ import annotations

# Playback value range shared by tempo and pitch percent
MIN_PLAYBACK_VALUE = 0.10
MAX_PLAYBACK_VALUE = 3.00

STEP_1_PERCENT_VALUE = 0.01
STEP_5_PERCENT_VALUE = 0.05
STEP_10_PERCENT_VALUE = 0.10
STEP_25_PERCENT_VALUE = 0.25
STEP_100_PERCENT_VALUE = 1.00

STEP_SIZES = (
    STEP_1_PERCENT_VALUE,
    STEP_5_PERCENT_VALUE,
    STEP_10_PERCENT_VALUE,
    STEP_25_PERCENT_VALUE,
    STEP_100_PERCENT_VALUE,
)

DEFAULT_TEMPO = 1.00
DEFAULT_PITCH_PERCENT = 1.00
DEFAULT_STEP = STEP_25_PERCENT_VALUE
DEFAULT_SKIP_SILENCE = False

# Seek bar resolution for the quadratic tempo/pitch sliders
QUADRATIC_RESOLUTION = 10_000
QUADRATIC_CENTER = 1.00

# Semitone offsets span [-SEMITONE_RANGE, +SEMITONE_RANGE]
SEMITONE_RANGE = 12
SEMITONES_PER_OCTAVE = 12

# Preference keys (QSettings style "group/key")
PREF_COUPLED = "playback/coupled"
PREF_ADJUST_BY_SEMITONES = "playback/adjust_by_semitones"
DEFAULT_COUPLED = True
DEFAULT_ADJUST_BY_SEMITONES = False

SETTINGS_ORGANIZATION = "TempoPitch"
SETTINGS_APPLICATION = "PlaybackControls"
