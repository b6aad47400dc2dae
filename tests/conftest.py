import numpy as np
import pytest

from countnll.penalty import reset_penalty_settings


@pytest.fixture(autouse=True)
def _default_penalty_settings():
    """Restore the default penalty settings around every test."""
    reset_penalty_settings()
    yield
    reset_penalty_settings()


@pytest.fixture
def rng():
    return np.random.default_rng(20240501)


@pytest.fixture
def poisson_counts():
    """200 Poisson(11) counts."""
    return np.random.default_rng(1).poisson(11.0, size=200)


@pytest.fixture
def bimodal_counts():
    """A 70/30 mixture of Poisson(13) and Poisson(7)."""
    gen = np.random.default_rng(2)
    pick = gen.random(300) < 0.7
    return np.where(pick, gen.poisson(13.0, 300), gen.poisson(7.0, 300))


@pytest.fixture
def zero_heavy_counts():
    """Counts with 25% structural zeros on top of a 60/40 Poisson(2)/Poisson(9) mixture."""
    gen = np.random.default_rng(3)
    n = 400
    u = gen.random(n)
    body = np.where(u < 0.25 + 0.75 * 0.6, gen.poisson(2.0, n), gen.poisson(9.0, n))
    return np.where(u < 0.25, 0, body)
