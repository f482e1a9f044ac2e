from recycleshuffle.config import ShuffleConfig
from recycleshuffle.session import ShuffleSession
from recycleshuffle.simulate import compare, merge_reports, run_repetitions, simulate, true_random_params
from recycleshuffle.stats import gap_quantile, gap_report


def test_gap_report_from_sequence():
    report = gap_report(["a", "b", "a", "c", "b", "a"], items=["a", "b", "c", "d"])
    assert report.plays == 6
    assert report.counts == {"a": 3, "b": 2, "c": 1, "d": 0}
    assert sorted(report.gaps) == [2, 3, 3]
    assert report.min_gap == 2
    assert report.max_gap == 3
    assert report.count_spread() == 3


def test_empty_report():
    report = gap_report([])
    assert report.mean_gap == 0.0
    assert report.gap_variance == 0.0
    assert report.quantile(0.5) == 0


def test_simulate_counts_are_near_uniform():
    session = ShuffleSession(range(1, 11), seed=12)
    sequence, report = simulate(session, 1000)
    assert len(sequence) == 1000
    assert sum(report.counts.values()) == 1000
    for count in report.counts.values():
        assert abs(count - 100) <= 15
    assert report.min_gap >= session.start


def test_gap_variance_below_true_random():
    report, baseline = compare(range(1, 11), ShuffleConfig(), plays=2000, seed=2024)
    assert report.gap_variance < baseline.gap_variance
    assert report.min_gap > baseline.min_gap


def test_true_random_params():
    params = true_random_params(ShuffleConfig(buffer=6, min_rec=0.3, seed=1))
    assert params.buffer == 0
    assert params.min_rec == 1.0
    assert params.seed == 1


def test_repetitions_are_reproducible_and_independent():
    config = ShuffleConfig(buffer=2)
    first = run_repetitions(range(6), config, plays=60, repetitions=3, seed=77)
    second = run_repetitions(range(6), config, plays=60, repetitions=3, seed=77)
    assert [r.gaps for r in first] == [r.gaps for r in second]
    merged = merge_reports(first)
    assert merged.plays == 180
    assert sum(merged.counts.values()) == 180


def test_simulate_twice_detaches_tally():
    session = ShuffleSession(range(8), buffer=2, seed=6)
    _, first = simulate(session, 100)
    _, second = simulate(session, 100)
    assert session.callbacks == []
    assert first.plays == 100
    assert second.plays == 100
    assert sum(second.counts.values()) == 100


def test_gap_quantile_interpolates():
    assert gap_quantile([4, 1, 3, 2], 0.5) == 2.5
    assert gap_quantile([4, 1, 3, 2], 0.0) == 1
    assert gap_quantile([4, 1, 3, 2], 1.0) == 4
    assert gap_quantile([], 0.9) == 0.0
