"""Conversion between ``HH:MM:SS`` strings and whole seconds."""


class DurationFormatError(ValueError):
    """Raised when a duration string is not ``HH:MM:SS``."""
    pass


def parse_duration(text: str) -> int:
    """Convert an ``HH:MM:SS`` string to total seconds."""
    parts = text.split(":")
    if len(parts) != 3:
        raise DurationFormatError(f"Invalid duration format: {text!r} (expected HH:MM:SS)")

    try:
        hours, minutes, seconds = (int(p) for p in parts)
    except ValueError as e:
        raise DurationFormatError(f"Invalid duration format: {text!r} ({e})") from e

    return hours * 3600 + minutes * 60 + seconds


def to_seconds(value: int | str) -> int:
    """Accept either integer seconds or an ``HH:MM:SS`` string."""
    if isinstance(value, bool):
        raise TypeError(f"Expected seconds or HH:MM:SS, got {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Time offset must not be negative: {value}")
        return value
    if isinstance(value, str):
        return parse_duration(value.strip())
    raise TypeError(f"Expected seconds or HH:MM:SS, got {type(value).__name__}")


def format_duration(seconds: float) -> str:
    s = int(seconds)
    return f"{s // 3600:02d}:{(s % 3600) // 60:02d}:{s % 60:02d}"
