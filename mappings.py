"""
Slider mappings between playback values and integer seek bar positions.

Two strategies share one protocol:
- QuadraticMapping: continuous tempo/pitch value <-> progress in [0, resolution],
  finer near the center value (1.00) and coarser towards the range limits.
- SemitoneMapping: pitch percent <-> signed semitone offset, presented on a
  seek bar as offset + range.
"""

from __future__ import annotations

import math
from typing import Protocol

from config import (
    MAX_PLAYBACK_VALUE,
    MIN_PLAYBACK_VALUE,
    QUADRATIC_CENTER,
    QUADRATIC_RESOLUTION,
    SEMITONE_RANGE,
    SEMITONES_PER_OCTAVE,
)
from utils import clamp


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class SliderMapping(Protocol):
    resolution: int

    def progress_of(self, value: float) -> int:
        ...

    def value_of(self, progress: int) -> float:
        ...


class QuadraticMapping:
    """
    Quadratic curve around a center value.

    The progress range is split at a center position placed proportionally to
    where `center` sits inside [minimum, maximum]. On each side:

        value = center +/- gap * (offset / side_span) ** 2

    With a proportional split the slope at both limits is
    2 * (maximum - minimum) / resolution, so a value -> progress -> value
    round trip is off by less than (maximum - minimum) / resolution.
    """

    def __init__(self, minimum: float, maximum: float, center: float, resolution: int):
        if not minimum < maximum:
            raise ValueError(f"minimum must be below maximum, got {minimum} >= {maximum}")
        if not minimum <= center <= maximum:
            raise ValueError(f"center {center} outside [{minimum}, {maximum}]")
        if resolution <= 0:
            raise ValueError(f"resolution must be positive, got {resolution}")

        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.center = float(center)
        self.resolution = int(resolution)

        self._left_gap = self.center - self.minimum
        self._right_gap = self.maximum - self.center
        self._center_progress = self.resolution * self._left_gap / (self.maximum - self.minimum)
        self._left_span = self._center_progress
        self._right_span = self.resolution - self._center_progress

    @property
    def center_progress(self) -> int:
        return self.progress_of(self.center)

    def progress_of(self, value: float) -> int:
        value = float(value)
        if math.isnan(value):
            value = self.center
        value = clamp(value, self.minimum, self.maximum)
        difference = value - self.center
        if difference >= 0.0:
            if self._right_gap <= 0.0:
                offset = 0.0
            else:
                offset = math.sqrt(difference / self._right_gap) * self._right_span
        else:
            offset = -math.sqrt(-difference / self._left_gap) * self._left_span
        progress = _round_half_up(self._center_progress + offset)
        return int(clamp(progress, 0, self.resolution))

    def value_of(self, progress: int) -> float:
        progress = clamp(int(progress), 0, self.resolution)
        offset = progress - self._center_progress
        if offset >= 0.0:
            if self._right_span <= 0.0:
                return self.center
            ratio = offset / self._right_span
            value = self.center + ratio * ratio * self._right_gap
        else:
            ratio = offset / self._left_span
            value = self.center - ratio * ratio * self._left_gap
        return clamp(value, self.minimum, self.maximum)


class SemitoneMapping:
    """Equal-tempered mapping between pitch percent and a signed semitone offset."""

    def __init__(self, semitone_range: int = SEMITONE_RANGE):
        if semitone_range <= 0:
            raise ValueError(f"semitone_range must be positive, got {semitone_range}")
        self.semitone_range = int(semitone_range)
        self.resolution = 2 * self.semitone_range

    def to_semitone(self, percent: float) -> int:
        if not percent > 0.0:
            return -self.semitone_range
        if math.isinf(percent):
            return self.semitone_range
        semitones = _round_half_up(SEMITONES_PER_OCTAVE * math.log2(percent))
        return int(clamp(semitones, -self.semitone_range, self.semitone_range))

    def to_percent(self, semitone: int) -> float:
        return float(2.0 ** (semitone / SEMITONES_PER_OCTAVE))

    def quantize(self, percent: float) -> float:
        return self.to_percent(self.to_semitone(percent))

    # Seek bar positions run 0..2*range with the unshifted pitch in the middle.
    def progress_of(self, value: float) -> int:
        return self.to_semitone(value) + self.semitone_range

    def value_of(self, progress: int) -> float:
        progress = int(clamp(int(progress), 0, self.resolution))
        return self.to_percent(progress - self.semitone_range)


QUADRATIC_MAPPING = QuadraticMapping(
    MIN_PLAYBACK_VALUE,
    MAX_PLAYBACK_VALUE,
    QUADRATIC_CENTER,
    QUADRATIC_RESOLUTION,
)
SEMITONE_MAPPING = SemitoneMapping()
