import random

from seedmerge.components.spawn_streak import SpawnStreak
from seedmerge.systems.spawn_selection import opposite_seed, select_spawn_value


def _longest_run(values):
    longest = current = 0
    previous = None
    for value in values:
        current = current + 1 if value == previous else 1
        previous = value
        longest = max(longest, current)
    return longest


def _realize(requests):
    streak = SpawnStreak()
    return [select_spawn_value(streak, requested) for requested in requests]


def test_opposite_seed():
    assert opposite_seed(2) == 3
    assert opposite_seed(3) == 2


def test_constant_requests_are_broken_after_three():
    realized = _realize([2] * 120)
    assert realized[:8] == [2, 2, 2, 3, 2, 2, 2, 3]
    assert _longest_run(realized) <= 3


def test_constant_threes_are_broken_after_three():
    realized = _realize([3] * 120)
    assert realized[:4] == [3, 3, 3, 2]
    assert _longest_run(realized) <= 3


def test_alternating_requests_pass_through():
    requests = [2, 3] * 20
    assert _realize(requests) == requests


def test_forced_value_does_not_extend_into_a_longer_run():
    # The forced 3 is followed by three requested 3s; the run must still stop at 3.
    realized = _realize([2, 2, 2, 2, 3, 3, 3, 3, 3])
    assert realized[:4] == [2, 2, 2, 3]
    assert _longest_run(realized) <= 3


def test_random_requests_never_exceed_three_in_a_row():
    rng = random.Random(5)
    requests = [rng.choice((2, 3)) for _ in range(2000)]
    realized = _realize(requests)
    assert _longest_run(realized) <= 3
    # Forcing only kicks in on streaks, so the mix stays close to even.
    share_of_twos = realized.count(2) / len(realized)
    assert 0.4 < share_of_twos < 0.6


def test_streak_bookkeeping():
    streak = SpawnStreak()
    select_spawn_value(streak, 2)
    assert (streak.last_value, streak.streak, streak.force_next) == (2, 1, False)
    select_spawn_value(streak, 2)
    select_spawn_value(streak, 2)
    assert (streak.last_value, streak.streak, streak.force_next) == (2, 0, True)
    assert select_spawn_value(streak, 2) == 3
    assert (streak.last_value, streak.streak, streak.force_next) == (3, 1, False)
