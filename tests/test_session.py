import pytest

from recycleshuffle.config import ShuffleConfig
from recycleshuffle.errors import InvalidParameter, InvalidPlaylist
from recycleshuffle.session import ShuffleSession
from recycleshuffle.shuffle import SessionState


def test_seeded_sessions_repeat_sequence():
    a = ShuffleSession(range(12), seed=99)
    b = ShuffleSession(range(12), seed=99)
    assert [a.next_song() for _ in range(40)] == [b.next_song() for _ in range(40)]


def test_reset_replays_from_start():
    session = ShuffleSession(range(8), buffer=2, seed=4)
    first = [session.next_song() for _ in range(20)]
    session.reset()
    assert session.plays == 0
    assert [session.next_song() for _ in range(20)] == first


def test_callbacks_receive_each_play():
    session = ShuffleSession("abcdef", buffer=1, seed=1)
    seen = []
    session.register_callback(lambda index, item: seen.append((index, item)))
    played = [session.next_song() for _ in range(5)]
    assert seen == list(zip(range(1, 6), played))


def test_no_repeat_within_buffer():
    session = ShuffleSession(range(20), buffer=4, min_rec=1.0, seed=8)
    assert session.start == 4
    last = {}
    for index in range(1, 1001):
        song = session.next_song()
        if song in last:
            assert index - last[song] >= 4
        last[song] = index


def test_snapshot_and_restore():
    session = ShuffleSession(range(10), seed=3)
    for _ in range(5):
        session.next_song()
    snap = session.snapshot()
    upcoming = [session.next_song() for _ in range(3)]
    session.restore(snap)
    assert session.playlist[0] == upcoming[0]


def test_restore_rejects_foreign_state():
    session = ShuffleSession(range(3), seed=3)
    with pytest.raises(InvalidPlaylist):
        session.restore(SessionState(playlist=(7, 8, 9), recycle=1, start=2))


def test_from_config():
    session = ShuffleSession.from_config(range(10), ShuffleConfig(buffer=0, min_rec=1.0, seed=5))
    assert session.recycle == 10
    assert session.start == 1


def test_restore_rejects_duplicate_songs():
    session = ShuffleSession(range(3), seed=3)
    with pytest.raises(InvalidPlaylist):
        session.restore(SessionState(playlist=(0, 0, 1, 2), recycle=1, start=3))
    assert sorted(session.playlist) == [0, 1, 2]


def test_restore_rejects_broken_window():
    session = ShuffleSession(range(10), seed=3)
    assert (session.recycle, session.start) == (2, 8)
    with pytest.raises(InvalidParameter):
        session.restore(SessionState(playlist=tuple(range(10)), recycle=2, start=1))
    with pytest.raises(InvalidParameter):
        session.restore(SessionState(playlist=tuple(range(10)), recycle=5, start=5))


def test_unregister_callback():
    session = ShuffleSession("abc", buffer=1, seed=2)
    seen = []
    callback = lambda index, item: seen.append(item)
    session.register_callback(callback)
    session.next_song()
    session.unregister_callback(callback)
    session.next_song()
    assert len(seen) == 1
