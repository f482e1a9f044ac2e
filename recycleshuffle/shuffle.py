import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Sequence, Tuple

from .errors import InvalidPlaylist
from .window import check_window, recycle_size, validate_params, window_start

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    playlist: Tuple[Hashable, ...]
    recycle: int
    start: int

    @property
    def size(self) -> int:
        return len(self.playlist)

    @property
    def now_playing(self) -> Hashable:
        return self.playlist[0]

    def to_dict(self) -> Dict[str, Any]:
        return {"playlist": list(self.playlist), "recycle": self.recycle, "start": self.start}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SessionState":
        playlist = tuple(raw["playlist"])
        check_items(playlist)
        recycle = int(raw["recycle"])
        start = int(raw.get("start", window_start(len(playlist), recycle)))
        check_window(len(playlist), recycle, start)
        return cls(playlist=playlist, recycle=recycle, start=start)


def check_items(items: Sequence[Hashable]) -> None:
    if not items:
        raise InvalidPlaylist("playlist must contain at least one song")
    if len(set(items)) != len(items):
        raise InvalidPlaylist("playlist contains duplicate songs")


def initial_shuffle(items: Sequence[Hashable], rng: random.Random) -> Tuple[Hashable, ...]:
    """Uniform random permutation of items; every ordering is equally likely."""
    order = list(items)
    rng.shuffle(order)
    return tuple(order)


def draw_rank(start: int, n: int, rng: random.Random) -> int:
    """
    Target rank for the song just played, uniform over [start, n].

    Rounds half-up (add 0.5 then truncate) so the lower bound of the
    window is not favoured.
    """
    u = rng.uniform(start, n)
    return min(n, max(start, int(u + 0.5)))


def reinsert(playlist: Sequence[Hashable], start: int, rng: random.Random) -> Tuple[Hashable, ...]:
    n = len(playlist)
    if n <= 1:
        return tuple(playlist)
    rank = draw_rank(start, n, rng)
    head, rest = playlist[0], list(playlist[1:])
    rest.insert(rank - 1, head)
    logger.debug("Reinserted %r at rank %s of %s", head, rank, n)
    return tuple(rest)


def setup(
    items: Sequence[Hashable],
    randomness: float = 0.05,
    buffer: int = 4,
    min_rec: float = 0.2,
    rng: random.Random | None = None,
) -> SessionState:
    check_items(items)
    validate_params(randomness, buffer, min_rec)
    rng = rng or random.Random()

    n = len(items)
    recycle = recycle_size(n, randomness=randomness, buffer=buffer, min_rec=min_rec)
    start = window_start(n, recycle)
    playlist = initial_shuffle(items, rng)
    logger.info("Session set up: %s songs, recycle window %s, start rank %s", n, recycle, start)
    return SessionState(playlist=playlist, recycle=recycle, start=start)


def advance(state: SessionState, rng: random.Random) -> Tuple[Hashable, SessionState]:
    played = state.now_playing
    if state.size == 1:
        return played, state
    playlist = reinsert(state.playlist, state.start, rng)
    return played, SessionState(playlist=playlist, recycle=state.recycle, start=state.start)
