import math
import random

import numpy as np
import pytest

from config import MAX_PLAYBACK_VALUE, MIN_PLAYBACK_VALUE, STEP_SIZES
from mappings import SEMITONE_MAPPING
from models import ParameterState
from playback.sync import SyncEngine


def _engine(recorder=None, **state):
    return SyncEngine(ParameterState(**state), recorder)


@pytest.mark.parametrize("value", [-1e9, -3.0, 0.0, 0.05, 0.1, 1.0, 2.999, 3.0, 7.5, 1e9, math.inf, -math.inf])
@pytest.mark.parametrize("hook", [True, False])
@pytest.mark.parametrize("semitone_mode", [True, False])
def test_setters_always_store_values_in_range(value, hook, semitone_mode):
    engine = _engine(hook=hook, semitone_mode=semitone_mode)
    engine.set_tempo(value)
    assert MIN_PLAYBACK_VALUE <= engine.state.tempo <= MAX_PLAYBACK_VALUE
    engine.set_pitch(value)
    assert MIN_PLAYBACK_VALUE <= engine.state.pitch_percent <= MAX_PLAYBACK_VALUE


def test_nan_is_ignored(recorder):
    engine = _engine(recorder, tempo=1.5, pitch_percent=0.8, hook=False)
    engine.set_tempo(math.nan)
    engine.set_pitch(math.nan)
    assert engine.state.tempo == 1.5
    assert engine.state.pitch_percent == 0.8
    assert recorder.calls == []


def test_unhooked_setters_touch_one_field(recorder):
    engine = _engine(recorder, hook=False)
    engine.set_tempo(1.75)
    assert (engine.state.tempo, engine.state.pitch_percent) == (1.75, 1.0)
    engine.set_pitch(0.6)
    assert (engine.state.tempo, engine.state.pitch_percent) == (1.75, 0.6)


def test_hooked_setters_keep_tempo_and_pitch_equal():
    rng = random.Random(1234)
    engine = _engine(hook=True)
    for _ in range(500):
        value = rng.uniform(-1.0, 4.0)
        if rng.random() < 0.5:
            engine.set_tempo(value)
        else:
            engine.set_pitch(value)
        assert engine.state.tempo == engine.state.pitch_percent


def test_hooked_semitone_mode_quantizes_both_fields():
    engine = _engine(hook=True, semitone_mode=True)
    engine.set_tempo(1.03)
    expected = SEMITONE_MAPPING.to_percent(1)
    assert engine.state.tempo == expected
    assert engine.state.pitch_percent == expected


def test_semitone_mode_set_pitch_is_idempotent():
    engine = _engine(hook=False, semitone_mode=True)
    for value in (0.3, 0.93, 1.03, 1.41, 2.5):
        engine.set_pitch(value)
        once = engine.state.pitch_percent
        engine.set_pitch(value)
        assert engine.state.pitch_percent == once
        assert SEMITONE_MAPPING.quantize(once) == once


def test_semitone_mode_range_is_one_octave_each_way():
    engine = _engine(hook=False, semitone_mode=True)
    engine.set_pitch(3.0)
    assert engine.state.pitch_percent == pytest.approx(2.0)
    engine.set_pitch(0.1)
    assert engine.state.pitch_percent == pytest.approx(0.5)


def test_callback_receives_full_triple_as_float32():
    calls = []
    engine = _engine(lambda *args: calls.append(args), hook=False, skip_silence=True)
    engine.set_pitch(1.2)
    tempo, pitch, skip = calls[-1]
    assert isinstance(tempo, np.float32)
    assert isinstance(pitch, np.float32)
    assert tempo == pytest.approx(1.0)
    assert pitch == pytest.approx(1.2)
    assert skip is True


def test_notify_false_suppresses_callback(recorder):
    engine = _engine(recorder)
    engine.set_tempo(2.0, notify=False)
    engine.set_pitch(2.0, notify=False)
    engine.set_skip_silence(True, notify=False)
    assert recorder.calls == []


def test_missing_callback_is_noop():
    engine = _engine(None)
    engine.set_tempo(2.0)
    engine.notify()
    assert engine.state.tempo == 2.0


class TestHook:
    def test_recoupling_collapses_to_minimum(self, recorder):
        engine = _engine(recorder, tempo=1.5, pitch_percent=0.8, hook=False)
        engine.set_hook(True)
        assert engine.state.tempo == 0.8
        assert engine.state.pitch_percent == 0.8
        assert recorder.last == pytest.approx((0.8, 0.8, False))

    def test_recoupling_uses_tempo_when_lower(self):
        engine = _engine(tempo=0.7, pitch_percent=2.2, hook=False)
        engine.set_hook(True)
        assert (engine.state.tempo, engine.state.pitch_percent) == (0.7, 0.7)

    def test_recoupling_in_semitone_mode_quantizes(self):
        engine = _engine(tempo=0.95, pitch_percent=SEMITONE_MAPPING.to_percent(2), hook=False, semitone_mode=True)
        engine.set_hook(True)
        expected = SEMITONE_MAPPING.quantize(0.95)
        assert engine.state.tempo == engine.state.pitch_percent == expected

    def test_decoupling_changes_nothing(self, recorder):
        engine = _engine(recorder, tempo=1.3, pitch_percent=1.3, hook=True)
        engine.set_hook(False)
        assert (engine.state.tempo, engine.state.pitch_percent) == (1.3, 1.3)
        assert engine.state.hook is False
        assert recorder.calls == []

    def test_same_value_is_noop(self, recorder):
        engine = _engine(recorder, hook=True)
        engine.set_hook(True)
        assert recorder.calls == []


class TestSemitoneMode:
    def test_entering_quantizes_and_notifies(self, recorder):
        engine = _engine(recorder, pitch_percent=1.03, hook=False)
        engine.set_semitone_mode(True)
        assert engine.state.pitch_percent == pytest.approx(1.0595, abs=1e-4)
        assert engine.state.pitch_percent == SEMITONE_MAPPING.to_percent(1)
        assert recorder.last[1] == pytest.approx(2 ** (1 / 12), abs=1e-6)

    def test_entering_propagates_through_hook(self):
        engine = _engine(tempo=1.03, pitch_percent=1.03, hook=True)
        engine.set_semitone_mode(True)
        assert engine.state.tempo == engine.state.pitch_percent == SEMITONE_MAPPING.to_percent(1)

    def test_entering_on_valid_semitone_is_silent(self, recorder):
        engine = _engine(recorder, pitch_percent=1.0, hook=False)
        engine.set_semitone_mode(True)
        assert engine.state.semitone_mode is True
        assert recorder.calls == []

    def test_leaving_keeps_percent(self, recorder):
        engine = _engine(recorder, pitch_percent=SEMITONE_MAPPING.to_percent(3), hook=False, semitone_mode=True)
        engine.set_semitone_mode(False)
        assert engine.state.pitch_percent == SEMITONE_MAPPING.to_percent(3)
        assert recorder.calls == []
        engine.set_pitch(1.03)
        assert engine.state.pitch_percent == 1.03


class TestStepSizeAndSkipSilence:
    @pytest.mark.parametrize("step", STEP_SIZES)
    def test_step_size_is_pure_assignment(self, recorder, step):
        engine = _engine(recorder, tempo=1.4, pitch_percent=0.9, hook=False)
        engine.set_step_size(step)
        assert engine.state.step_size == step
        assert (engine.state.tempo, engine.state.pitch_percent) == (1.4, 0.9)
        assert recorder.calls == []

    def test_step_size_snaps_to_canonical_constant(self):
        engine = _engine()
        engine.set_step_size(0.1 + 1e-12)
        assert engine.state.step_size in STEP_SIZES

    @pytest.mark.parametrize("step", [0.0, 0.02, 0.5, 2.0, -0.25])
    def test_unknown_step_size_is_rejected(self, step):
        engine = _engine()
        with pytest.raises(ValueError):
            engine.set_step_size(step)
        assert engine.state.step_size == 0.25

    def test_skip_silence_always_notifies(self, recorder):
        engine = _engine(recorder)
        engine.set_skip_silence(True)
        engine.set_skip_silence(True)
        assert len(recorder.calls) == 2
        assert recorder.last == (1.0, 1.0, True)


class TestNormalize:
    def test_collapses_hooked_values(self):
        engine = _engine(tempo=2.0, pitch_percent=1.25, hook=True)
        assert engine.normalize() is True
        assert engine.state.tempo == engine.state.pitch_percent == 1.25

    def test_consistent_state_is_untouched(self):
        engine = _engine(tempo=2.0, pitch_percent=1.25, hook=False)
        assert engine.normalize() is False
        assert (engine.state.tempo, engine.state.pitch_percent) == (2.0, 1.25)
