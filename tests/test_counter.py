import pytest

from stepup.models.counter_model import CounterPhase, CounterState
from stepup.models.posture_model import PostureState
from stepup.pipeline.counter_stage import RepCounter

UP = PostureState.UP
DOWN = PostureState.DOWN
TRANSITION = PostureState.TRANSITION
UNKNOWN = PostureState.UNKNOWN


def feed(states):
    counter = RepCounter()
    for s in states:
        counter.update(s)
    return counter


def test_initial_state():
    state = RepCounter().state
    assert state.committed_posture == UP
    assert state.armed is False
    assert state.rep_count == 0


def test_up_to_down_arms_without_counting():
    counter = RepCounter()
    assert counter.update(DOWN) is False
    assert counter.state.committed_posture == DOWN
    assert counter.state.armed is True
    assert counter.rep_count == 0


def test_down_to_up_counts_once():
    counter = feed([DOWN])
    assert counter.update(UP) is True
    assert counter.state.committed_posture == UP
    assert counter.state.armed is False
    assert counter.rep_count == 1


@pytest.mark.parametrize("noise", [TRANSITION, UNKNOWN])
@pytest.mark.parametrize("prefix", [[], [DOWN]])
def test_transition_and_unknown_are_noops(prefix, noise):
    counter = feed(prefix)
    before = counter.state
    assert counter.update(noise) is False
    assert counter.state == before


def test_repeated_extremes_are_noops():
    assert feed([UP, UP, UP]).state == CounterState()
    down = feed([DOWN, DOWN, DOWN])
    assert down.state.phase == CounterPhase.READY_TO_COUNT
    assert down.rep_count == 0


@pytest.mark.parametrize("states, expected", [
    # scenario A
    ([UP, DOWN, TRANSITION, TRANSITION, UP], 1),
    # scenario B
    ([UP, DOWN, UP, DOWN, UP], 2),
    # scenario C: never reaches DOWN
    ([UP, TRANSITION, UP, TRANSITION, UP], 0),
    # scenario D: UNKNOWN frames are transparent
    ([UNKNOWN, UP, UNKNOWN, DOWN, UNKNOWN, UP], 1),
    # never returns to UP
    ([UP, DOWN, TRANSITION, DOWN, TRANSITION], 0),
    # long pause at each extreme
    ([UP] * 20 + [DOWN] * 40 + [TRANSITION] * 7 + [UP] * 20, 1),
])
def test_scenarios(states, expected):
    assert feed(states).rep_count == expected


def test_oscillation_near_down_counts_single_rep():
    states = [UP, TRANSITION, DOWN, TRANSITION, DOWN, TRANSITION, DOWN, TRANSITION, UP]
    assert feed(states).rep_count == 1


def test_count_is_monotonic():
    counter = RepCounter()
    seen = []
    for s in [UP, DOWN, UP, TRANSITION, UNKNOWN, DOWN, DOWN, UP, UP, DOWN]:
        counter.update(s)
        seen.append(counter.rep_count)
    assert seen == sorted(seen)
    assert seen[-1] == 2


def test_armed_mirrors_committed_down():
    counter = RepCounter()
    for s in [UP, DOWN, TRANSITION, UP, UNKNOWN, DOWN, UP]:
        counter.update(s)
        st = counter.state
        assert st.armed == (st.committed_posture == DOWN)


def test_reset_is_idempotent():
    counter = feed([DOWN, UP, DOWN])
    counter.reset()
    first = counter.state
    counter.reset()
    assert counter.state == first == CounterState()
    assert first.committed_posture == UP
    assert first.armed is False
    assert first.rep_count == 0
