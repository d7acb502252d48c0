from __future__ import annotations

import logging
import os


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x

def safe_float(x: str, default: float = 0.0) -> float:
    try:
        return float(x)
    except (TypeError, ValueError):
        return default

def env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}

def log_level(name: str, default: int = logging.INFO) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


# Display formatting
# -----------------------------

def format_speed(speed: float) -> str:
    return f"{speed:.2f}×"

def format_pitch(percent: float) -> str:
    return f"{percent * 100.0:.0f}%"

def format_semitones(semitones: int) -> str:
    if semitones == 0:
        return "±0 st"
    return f"{semitones:+d} st"

def format_step(step: float, direction: int) -> str:
    sign = "+" if direction > 0 else "-"
    return sign + format_pitch(step)
