import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List


def gap_quantile(gaps: List[int], q: float) -> float:
    """Linearly interpolated quantile of the repeat gaps; 0.0 when nothing repeated."""
    if not gaps:
        return 0.0
    ordered = sorted(gaps)
    position = (len(ordered) - 1) * q
    below = math.floor(position)
    above = min(below + 1, len(ordered) - 1)
    return ordered[below] + (ordered[above] - ordered[below]) * (position - below)


@dataclass
class GapReport:
    plays: int
    counts: Dict[Hashable, int]
    gaps: List[int]

    @property
    def min_gap(self) -> int:
        return min(self.gaps) if self.gaps else 0

    @property
    def max_gap(self) -> int:
        return max(self.gaps) if self.gaps else 0

    @property
    def mean_gap(self) -> float:
        return sum(self.gaps) / len(self.gaps) if self.gaps else 0.0

    @property
    def gap_variance(self) -> float:
        if not self.gaps:
            return 0.0
        mean = self.mean_gap
        return sum((g - mean) ** 2 for g in self.gaps) / len(self.gaps)

    def quantile(self, q: float) -> float:
        return gap_quantile(self.gaps, q)

    def count_spread(self) -> int:
        """Difference between the most and least played song."""
        if not self.counts:
            return 0
        return max(self.counts.values()) - min(self.counts.values())


@dataclass
class PlayTally:
    """Play callback that counts plays and the gap since each song's last play."""

    counts: Counter = field(default_factory=Counter)
    gaps: List[int] = field(default_factory=list)
    last_played: Dict[Hashable, int] = field(default_factory=dict)
    plays: int = 0

    def __call__(self, play_index: int, item: Hashable) -> None:
        self.plays += 1
        self.counts[item] += 1
        previous = self.last_played.get(item)
        if previous is not None:
            self.gaps.append(play_index - previous)
        self.last_played[item] = play_index

    def report(self, items: Iterable[Hashable] = ()) -> GapReport:
        counts = {item: 0 for item in items}
        counts.update(self.counts)
        return GapReport(plays=self.plays, counts=counts, gaps=list(self.gaps))


def gap_report(sequence: Iterable[Hashable], items: Iterable[Hashable] = ()) -> GapReport:
    tally = PlayTally()
    for index, item in enumerate(sequence, start=1):
        tally(index, item)
    return tally.report(items)
