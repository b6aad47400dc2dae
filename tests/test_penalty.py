import logging

import numpy as np
import pytest

from countnll.constants import NL_INF
from countnll.penalty import (
    draw_jitter,
    get_penalty_settings,
    guard,
    penalty,
    penalty_count,
    reject,
    seed_default_rng,
    set_penalty_settings,
)


def test_default_penalty_band():
    for _ in range(20):
        value = penalty()
        assert NL_INF <= value <= NL_INF + 1e9


def test_jitter_is_square_of_normal_draw(rng):
    draws = np.array([draw_jitter(rng) for _ in range(2000)])
    roots = np.sqrt(draws)
    assert roots.mean() == pytest.approx(10000.0, abs=2.0)
    assert roots.std() == pytest.approx(20.0, rel=0.1)


def test_repeated_penalties_differ_with_small_sentinel():
    set_penalty_settings(big=1e10)
    values = {penalty() for _ in range(10)}
    assert len(values) == 10
    assert all(v > 1e10 for v in values)


def test_explicit_generator_is_reproducible():
    a = penalty(np.random.default_rng(5))
    b = penalty(np.random.default_rng(5))
    assert a == b


def test_seeded_default_generator_is_reproducible():
    set_penalty_settings(big=1e10)
    seed_default_rng(11)
    first = [penalty() for _ in range(3)]
    seed_default_rng(11)
    assert [penalty() for _ in range(3)] == first


def test_zero_sd_gives_constant_jitter():
    set_penalty_settings(big=1.0, jitter_mean=3.0, jitter_sd=0.0)
    assert penalty() == 10.0


def test_negative_sd_rejected():
    with pytest.raises(ValueError):
        set_penalty_settings(jitter_sd=-1.0)
    assert get_penalty_settings().jitter_sd == 20.0


@pytest.mark.parametrize("value", [np.inf, -np.inf, np.nan])
def test_guard_replaces_non_finite(value):
    assert guard(value) >= NL_INF


def test_guard_passes_finite_values_through():
    assert guard(np.float64(12.5)) == 12.5
    assert isinstance(guard(np.float64(12.5)), float)


def test_reject_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="countnll.penalty"):
        value = reject([-1.0], label="nlogl_pois")
    assert value >= NL_INF
    assert "nlogl_pois" in caplog.text
    assert "infeasible" in caplog.text


def test_penalty_count_tracks_issued_penalties():
    before = penalty_count()
    guard(12.5)
    assert penalty_count() == before
    guard(np.inf)
    reject([-1.0])
    assert penalty_count() == before + 2
