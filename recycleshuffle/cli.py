import argparse
import logging
import sys
from dataclasses import replace

from .config import Settings, load_settings
from .errors import InvalidParameter, ShuffleError
from .session import ShuffleSession
from .simulate import check_count, compare, merge_reports, run_repetitions, simulate
from .stats import GapReport
from .window import recycle_size, window_start


def _settings(args: argparse.Namespace) -> Settings:
    """Config file values, overridden by whatever was passed on the command line."""
    settings = load_settings(getattr(args, "config", None))
    shuffle = settings.shuffle
    for name in ("randomness", "buffer", "min_rec", "seed"):
        value = getattr(args, name, None)
        if value is not None:
            shuffle = replace(shuffle, **{name: value})
    simulation = settings.simulation
    for name in ("songs", "plays", "repetitions"):
        value = getattr(args, name, None)
        if value is not None:
            simulation = replace(simulation, **{name: value})
    return Settings(shuffle=shuffle, simulation=simulation)


def _songs(count: int) -> list[int]:
    check_count("songs", count)
    return list(range(1, count + 1))


def cmd_window(args: argparse.Namespace) -> int:
    settings = _settings(args)
    n = settings.simulation.songs
    check_count("songs", n)
    cfg = settings.shuffle
    recycle = recycle_size(n, randomness=cfg.randomness, buffer=cfg.buffer, min_rec=cfg.min_rec)
    print(f"Songs: {n}")
    print(f"Recycle window: {recycle}")
    print(f"Window start rank: {window_start(n, recycle)}")
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    settings = _settings(args)
    check_count("plays", settings.simulation.plays)
    session = ShuffleSession.from_config(_songs(settings.simulation.songs), settings.shuffle)
    for index in range(1, settings.simulation.plays + 1):
        print(f"{index}: {session.next_song()}")
    return 0


def _print_report(title: str, report: GapReport) -> None:
    print(title)
    print(f"  plays: {report.plays}")
    print(f"  gap min/max: {report.min_gap}/{report.max_gap}")
    print(f"  gap mean: {report.mean_gap:.2f} variance: {report.gap_variance:.2f}")
    print(f"  gap p10/p50/p90: {report.quantile(0.1):.1f}/{report.quantile(0.5):.1f}/{report.quantile(0.9):.1f}")
    print(f"  count spread: {report.count_spread()}")
    for item, count in sorted(report.counts.items()):
        print(f"    {item}: {count}")


def cmd_simulate(args: argparse.Namespace) -> int:
    settings = _settings(args)
    sim = settings.simulation
    songs = _songs(sim.songs)
    check_count("plays", sim.plays)
    check_count("repetitions", sim.repetitions)
    if args.baseline:
        if sim.repetitions > 1:
            raise InvalidParameter("--baseline compares a single session; drop --repetitions")
        report, baseline = compare(songs, settings.shuffle, sim.plays)
        _print_report("Recycle shuffle", report)
        _print_report("True random", baseline)
        return 0
    if sim.repetitions > 1:
        report = merge_reports(run_repetitions(songs, settings.shuffle, sim.plays, sim.repetitions))
    else:
        _, report = simulate(ShuffleSession.from_config(songs, settings.shuffle), sim.plays)
    _print_report("Recycle shuffle", report)
    return 0


def _add_shuffle_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", help="Path to YAML/JSON config file")
    p.add_argument("--songs", type=int, help="Number of songs in the playlist")
    p.add_argument("--randomness", type=float, help="Decay rate of the recycle window growth")
    p.add_argument("--buffer", type=int, help="Songs always held back from reinsertion")
    p.add_argument("--min-rec", dest="min_rec", type=float, help="Minimum recycle window as a fraction of the playlist")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Recycle-window shuffle for playlists")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    window_p = sub.add_parser("window", help="Show the recycle window for a playlist size")
    _add_shuffle_args(window_p)
    window_p.set_defaults(func=cmd_window)

    play_p = sub.add_parser("play", help="Print a shuffled play order")
    _add_shuffle_args(play_p)
    play_p.add_argument("--plays", type=int, help="Number of plays to print")
    play_p.add_argument("--seed", type=int, help="Random seed for a reproducible order")
    play_p.set_defaults(func=cmd_play)

    sim_p = sub.add_parser("simulate", help="Tally play counts and repeat gaps")
    _add_shuffle_args(sim_p)
    sim_p.add_argument("--plays", type=int, help="Plays per session")
    sim_p.add_argument("--repetitions", type=int, help="Independent sessions to run")
    sim_p.add_argument("--seed", type=int, help="Master random seed")
    sim_p.add_argument("--baseline", action="store_true", help="Also run the true-random baseline from the same seed")
    sim_p.set_defaults(func=cmd_simulate)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except ShuffleError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
