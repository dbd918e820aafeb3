from __future__ import annotations


def _split(ms: int) -> tuple[int, int, int]:
    ms = max(int(ms), 0)
    m, rem = divmod(ms, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return m, s, ms2


def format_timestamp(ms: int) -> str:
    """mm:ss.mmm, minutes are not capped at 99."""
    m, s, ms2 = _split(ms)
    return f"{m:02d}:{s:02d}.{ms2:03d}"


def format_centis(ms: int) -> str:
    # truncates to centiseconds, no rounding
    m, s, ms2 = _split(ms)
    return f"{m:02d}:{s:02d}.{ms2 // 10:02d}"


def format_tag_time(ms: int) -> str:
    # Translation/romanization line heads keep the raw millisecond remainder
    # unpadded: 1000 -> "00:01.0", 61005 -> "01:01.5".
    m, s, ms2 = _split(ms)
    return f"{m:02d}:{s:02d}.{ms2}"


def parse_timestamp(m: str, s: str, frac: str | None) -> int:
    if frac is None or frac == "":
        ms = 0
    else:
        # "2" -> 200ms, "23" -> 230ms, "234" -> 234ms
        ms = int(frac.ljust(3, "0")[:3])
    return (int(m) * 60 + int(s)) * 1000 + ms
