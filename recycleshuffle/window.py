import logging
import math
from numbers import Real

from .errors import InvalidParameter, InvalidPlaylist

logger = logging.getLogger(__name__)


def _is_finite_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_params(randomness: float, buffer: int, min_rec: float) -> None:
    if not _is_finite_number(randomness) or randomness <= 0:
        raise InvalidParameter(f"randomness must be positive, got {randomness}")
    if not _is_finite_number(buffer) or int(buffer) != buffer or buffer < 0:
        raise InvalidParameter(f"buffer must be a non-negative integer, got {buffer}")
    if not _is_finite_number(min_rec) or not 0 <= min_rec <= 1:
        raise InvalidParameter(f"min_rec must be within [0, 1], got {min_rec}")


def recycle_size(n: int, randomness: float = 0.05, buffer: int = 4, min_rec: float = 0.2) -> int:
    """
    Number of trailing playlist positions a just-played song may drop into.

    growth tends to 0 at n=1 and to 1 as n grows; randomness slows that down.
    buffer holds back an absolute number of recent songs, min_rec sets a
    proportional floor. The proportional floor is combined first, then
    clamped by the absolute exclusion.
    """
    if n < 1:
        raise InvalidPlaylist("playlist must contain at least one song")
    validate_params(randomness, buffer, min_rec)

    growth = 1 - math.exp(-randomness * math.log(n))
    proportional = round(n * max(min_rec, growth))
    recycle = min(max(1, n - buffer), proportional)
    # proportional can round to zero on tiny lists
    recycle = max(1, recycle)
    logger.debug("n=%s growth=%.4f proportional=%s recycle=%s", n, growth, proportional, recycle)
    return recycle


def window_start(n: int, recycle: int) -> int:
    """1-based rank where the recycle bin begins."""
    return max(1, n - recycle)


def check_window(n: int, recycle: int, start: int) -> None:
    """Raise unless recycle and start describe a valid window for n songs."""
    if not 1 <= recycle <= n:
        raise InvalidParameter(f"recycle window must be within [1, {n}], got {recycle}")
    if start != window_start(n, recycle):
        raise InvalidParameter(f"window start {start} does not match recycle window {recycle} for {n} songs")
