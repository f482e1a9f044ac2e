import logging
import random
from typing import Callable, Hashable, List, Sequence

from .config import ShuffleConfig
from .errors import InvalidParameter, InvalidPlaylist
from .shuffle import SessionState, advance, check_items, setup
from .window import check_window

logger = logging.getLogger(__name__)

PlayCallback = Callable[[int, Hashable], None]


class ShuffleSession:
    """One listener's playback order, owning its own random source."""

    def __init__(
        self,
        items: Sequence[Hashable],
        randomness: float = 0.05,
        buffer: int = 4,
        min_rec: float = 0.2,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        self.items = tuple(items)
        self.randomness = randomness
        self.buffer = buffer
        self.min_rec = min_rec
        self.seed = seed
        self.random = rng or random.Random(seed)
        self.callbacks: List[PlayCallback] = []
        self.plays = 0
        self.state = setup(self.items, randomness=randomness, buffer=buffer, min_rec=min_rec, rng=self.random)
        self._initial_state = self.state

    @classmethod
    def from_config(cls, items: Sequence[Hashable], config: ShuffleConfig) -> "ShuffleSession":
        return cls(items, randomness=config.randomness, buffer=config.buffer, min_rec=config.min_rec, seed=config.seed)

    @property
    def recycle(self) -> int:
        return self.state.recycle

    @property
    def start(self) -> int:
        return self.state.start

    @property
    def playlist(self) -> tuple:
        return self.state.playlist

    def register_callback(self, callback: PlayCallback) -> None:
        self.callbacks.append(callback)

    def unregister_callback(self, callback: PlayCallback) -> None:
        self.callbacks.remove(callback)

    def reset(self) -> None:
        # Reseeding replays the same sequence only when a seed was given
        if self.seed is not None:
            self.random.seed(self.seed)
            self.state = setup(self.items, randomness=self.randomness, buffer=self.buffer, min_rec=self.min_rec, rng=self.random)
        else:
            self.state = self._initial_state
        self.plays = 0
        logger.debug("Session reset")

    def snapshot(self) -> SessionState:
        return self.state

    def restore(self, state: SessionState) -> None:
        check_items(state.playlist)
        if len(state.playlist) != len(self.items) or set(state.playlist) != set(self.items):
            raise InvalidPlaylist("snapshot does not hold this session's songs")
        check_window(len(state.playlist), state.recycle, state.start)
        if state.recycle != self.state.recycle:
            raise InvalidParameter(f"snapshot recycle window {state.recycle} differs from session window {self.state.recycle}")
        self.state = state

    def next_song(self) -> Hashable:
        played, self.state = advance(self.state, self.random)
        self.plays += 1
        for cb in self.callbacks:
            cb(self.plays, played)
        return played
