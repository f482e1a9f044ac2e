import logging
import random
from dataclasses import replace
from typing import Hashable, List, Sequence, Tuple

from .config import ShuffleConfig
from .errors import InvalidParameter
from .session import ShuffleSession
from .stats import GapReport, PlayTally

logger = logging.getLogger(__name__)


def check_count(name: str, value: int, minimum: int = 1) -> None:
    if value < minimum:
        raise InvalidParameter(f"{name} must be at least {minimum}, got {value}")


def true_random_params(config: ShuffleConfig) -> ShuffleConfig:
    """Baseline where the played song may land anywhere in the playlist."""
    return replace(config, buffer=0, min_rec=1.0)


def simulate(session: ShuffleSession, plays: int) -> Tuple[List[Hashable], GapReport]:
    check_count("plays", plays)
    tally = PlayTally()
    session.register_callback(tally)
    try:
        sequence = [session.next_song() for _ in range(plays)]
    finally:
        session.unregister_callback(tally)
    report = tally.report(session.items)
    logger.info(
        "Simulated %s plays of %s songs: gap min %s max %s mean %.2f",
        plays,
        len(session.items),
        report.min_gap,
        report.max_gap,
        report.mean_gap,
    )
    return sequence, report


def compare(items: Sequence[Hashable], config: ShuffleConfig, plays: int, seed: int | None = None) -> Tuple[GapReport, GapReport]:
    """Run the constrained shuffle and the true-random baseline from the same seed."""
    seed = config.seed if seed is None else seed
    constrained = ShuffleSession.from_config(items, replace(config, seed=seed))
    baseline = ShuffleSession.from_config(items, replace(true_random_params(config), seed=seed))
    _, report = simulate(constrained, plays)
    _, baseline_report = simulate(baseline, plays)
    return report, baseline_report


def run_repetitions(
    items: Sequence[Hashable],
    config: ShuffleConfig,
    plays: int,
    repetitions: int,
    seed: int | None = None,
) -> List[GapReport]:
    """Independent sessions, each with a generator drawn from one master seed."""
    check_count("repetitions", repetitions)
    master = random.Random(config.seed if seed is None else seed)
    reports = []
    for rep in range(repetitions):
        session_seed = master.getrandbits(64)
        session = ShuffleSession.from_config(items, replace(config, seed=session_seed))
        _, report = simulate(session, plays)
        logger.debug("Repetition %s done (seed %s)", rep + 1, session_seed)
        reports.append(report)
    return reports


def merge_reports(reports: Sequence[GapReport]) -> GapReport:
    counts: dict = {}
    gaps: List[int] = []
    plays = 0
    for report in reports:
        plays += report.plays
        gaps.extend(report.gaps)
        for item, count in report.counts.items():
            counts[item] = counts.get(item, 0) + count
    return GapReport(plays=plays, counts=counts, gaps=gaps)
