"""Number formatting and track compression helpers for SVG output."""

from functools import lru_cache

_Sample = tuple[float, ...]


@lru_cache(maxsize=8192)
def _tl_num(value: float, digits: int = 6) -> str:
    """Shortest SVG number text: integers bare, no leading zero before the point."""
    if isinstance(value, int) or abs(value - round(value)) < 1e-9:
        return str(int(round(value)))
    text = f"{value:.{digits}f}".rstrip("0").rstrip(".")
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:]
    if text.startswith("0."):
        text = text[1:]
    return sign + text if text not in ("", "0") else "0"


def _tl_compress_track(
    times: list[float], samples: list[_Sample], eps: float = 1e-9
) -> tuple[list[float], list[_Sample]]:
    """
    Drop samples lying on the straight line between their neighbours.

    Tracks are sampled at tween boundaries and tweens are linear in frame
    time, so a sample is redundant when every component keeps its slope
    across it. The first and last samples are always kept.

    Args:
        times: Strictly increasing sample times
        samples: One tuple of component values per time (x/y pairs, scalars)
        eps: Slope tolerance

    Returns:
        Compressed (times, samples)
    """
    if len(samples) <= 2:
        return list(times), list(samples)

    kept_times = [times[0]]
    kept_samples = [samples[0]]
    for i in range(1, len(samples) - 1):
        before = times[i] - kept_times[-1]
        after = times[i + 1] - times[i]
        bends = any(
            abs((now - prev) / before - (nxt - now) / after) > eps
            for prev, now, nxt in zip(kept_samples[-1], samples[i], samples[i + 1])
        )
        if bends:
            kept_times.append(times[i])
            kept_samples.append(samples[i])
    kept_times.append(times[-1])
    kept_samples.append(samples[-1])
    return kept_times, kept_samples


def _tl_key_times(times: list[float], total_duration: float) -> str:
    if total_duration <= 0:
        return "0;1"
    return ";".join(_tl_num(time / total_duration, 5) for time in times)


def _tl_needs_key_times(times: list[float], total_duration: float) -> bool:
    # Two samples spanning the whole duration are SMIL's implicit keyTimes.
    return not (len(times) == 2 and times[0] == 0 and times[1] == total_duration)
