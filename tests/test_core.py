"""Recurrence regression tests anchored to the tinymt64 reference states."""

from tinymt.core import (
    MASK,
    init_state,
    init_state_by_array,
    next_state,
    period_certification,
    temper,
    temper_conv,
    temper_conv_open,
    uint64_to_double,
)
from tinymt.models import DEFAULT_PARAMS, MASK64, GeneratorState, TinyMTParams


def test_scalar_seed_matches_reference_state():
    state = init_state(GeneratorState(), 1, DEFAULT_PARAMS)

    assert (state.status0, state.status1) == (17237327196353383620, 8250946785199450552)


def test_array_seed_matches_reference_state():
    state = init_state_by_array(GeneratorState(), [1, 2, 3, 4, 5], DEFAULT_PARAMS)

    assert (state.status0, state.status1) == (18122247717767744628, 4385406221019727240)


def test_zero_seeds_leave_non_degenerate_state():
    scalar = init_state(GeneratorState(), 0, DEFAULT_PARAMS)
    array = init_state_by_array(GeneratorState(), [0], DEFAULT_PARAMS)

    assert (scalar.status0, scalar.status1) == (12287291891938566484, 12421269384809820354)
    assert (array.status0, array.status1) == (5374010011852553576, 18121580334148578196)
    for state in (scalar, array):
        assert not ((state.status0 & MASK) == 0 and state.status1 == 0)


def test_period_certification_rewrites_masked_zero_state():
    # only the top bit set: zero once masked
    state = period_certification(GeneratorState(1 << 63, 0))
    assert (state.status0, state.status1) == (ord("T"), ord("M"))

    untouched = period_certification(GeneratorState(0, 1))
    assert (untouched.status0, untouched.status1) == (0, 1)


def test_next_state_first_output_matches_reference():
    state = init_state(GeneratorState(), 1, DEFAULT_PARAMS)
    next_state(state, DEFAULT_PARAMS)

    assert temper(state, DEFAULT_PARAMS) == 15503804787016557143


def test_next_state_keeps_words_within_64_bits():
    params = TinyMTParams(0xFFFFFFFF, 0xFFFFFFFF, MASK64)
    state = GeneratorState(MASK64, MASK64)
    for _ in range(1000):
        next_state(state, params)
        assert 0 <= state.status0 <= MASK64
        assert 0 <= state.status1 <= MASK64
        assert 0 <= temper(state, params) <= MASK64


def test_temper_functions_do_not_advance_state():
    state = init_state(GeneratorState(), 7, DEFAULT_PARAMS)
    next_state(state, DEFAULT_PARAMS)
    snapshot = state.copy()

    first = temper(state, DEFAULT_PARAMS)
    temper_conv(state, DEFAULT_PARAMS)
    temper_conv_open(state, DEFAULT_PARAMS)

    assert state == snapshot
    assert temper(state, DEFAULT_PARAMS) == first


def test_conversions_land_in_their_intervals():
    state = init_state(GeneratorState(), 3, DEFAULT_PARAMS)
    for _ in range(2000):
        next_state(state, DEFAULT_PARAMS)
        assert 1.0 <= temper_conv(state, DEFAULT_PARAMS) < 2.0
        assert 1.0 < temper_conv_open(state, DEFAULT_PARAMS) < 2.0


def test_uint64_to_double_bounds():
    assert uint64_to_double(0) == 0.0
    assert uint64_to_double(MASK64) == 1.0 - 2.0 ** -53
    assert uint64_to_double(1 << 63) == 0.5
