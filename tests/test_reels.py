from collections import Counter

import pytest

from slot_machine.core.exceptions import ConfigurationError
from slot_machine.core.reels import (
    DEFAULT_WEIGHTS,
    NUM_REELS,
    ReelBank,
    build_population,
    make_reel_bank,
)
from slot_machine.core.rng import SeededRNG, TrueRNG, make_rng
from slot_machine.core.symbols import Symbol

from conftest import ScriptedRNG, SEVEN_STOP, LEMON_STOP, BAR_STOP


def test_population_layout():
    population = build_population()

    assert len(population) == 50
    assert population[:15] == (Symbol.CHERRY,) * 15
    assert population[15:27] == (Symbol.LEMON,) * 12
    assert population[27:37] == (Symbol.ORANGE,) * 10
    assert population[37:45] == (Symbol.BELL,) * 8
    assert population[45:49] == (Symbol.BAR,) * 4
    assert population[49] is Symbol.SEVEN


def test_population_layout_ignores_weight_order():
    reversed_weights = dict(reversed(list(DEFAULT_WEIGHTS.items())))
    assert build_population(reversed_weights) == build_population(DEFAULT_WEIGHTS)


@pytest.mark.parametrize(
    "weights",
    [
        {},
        {Symbol.CHERRY: 0, Symbol.SEVEN: 0},
        {Symbol.CHERRY: -1},
        {Symbol.CHERRY: 2.5},
        {Symbol.CHERRY: True},
        {"CHERRY": 10},
    ],
)
def test_malformed_population_rejected(weights):
    with pytest.raises(ConfigurationError):
        build_population(weights)


def test_reel_bank_rejects_bad_configuration():
    with pytest.raises(ConfigurationError):
        ReelBank(weights={})
    with pytest.raises(ConfigurationError):
        ReelBank(num_reels=0)


def test_draw_uses_full_population():
    rng = ScriptedRNG(LEMON_STOP)
    bank = ReelBank(rng=rng)

    assert bank.draw_reel(0) is Symbol.LEMON
    assert rng.calls == [(0, 49)]


def test_spin_returns_one_symbol_per_reel():
    rng = ScriptedRNG(0, LEMON_STOP, BAR_STOP)
    outcome = ReelBank(rng=rng).spin()

    assert outcome == (Symbol.CHERRY, Symbol.LEMON, Symbol.BAR)
    assert len(rng.calls) == NUM_REELS


def test_three_sevens_reachable():
    outcome = ReelBank(rng=ScriptedRNG(SEVEN_STOP)).spin()
    assert outcome == (Symbol.SEVEN,) * 3


def test_seeded_banks_are_reproducible():
    first = ReelBank(rng=SeededRNG(42))
    second = ReelBank(rng=SeededRNG(42))

    assert [first.spin() for _ in range(20)] == [second.spin() for _ in range(20)]


def test_draw_frequencies_match_weights():
    bank = ReelBank(rng=SeededRNG(1234))
    trials = 50_000

    counts = Counter(bank.draw_reel(0) for _ in range(trials))

    for symbol, weight in DEFAULT_WEIGHTS.items():
        observed = counts[symbol] / trials
        assert observed == pytest.approx(weight / 50, abs=0.01), symbol


def test_reels_are_independent():
    bank = ReelBank(rng=SeededRNG(7))
    spins = [bank.spin() for _ in range(20_000)]

    # Matching first two reels should be about as common as sum(p^2)
    expected = sum((w / 50) ** 2 for w in DEFAULT_WEIGHTS.values())
    observed = sum(1 for s in spins if s[0] is s[1]) / len(spins)
    assert observed == pytest.approx(expected, abs=0.015)


def test_probability_and_weights():
    bank = ReelBank()
    assert bank.probability(Symbol.CHERRY) == pytest.approx(0.30)
    assert bank.probability(Symbol.SEVEN) == pytest.approx(0.02)
    assert bank.weights() == DEFAULT_WEIGHTS


def test_make_reel_bank_picks_rng():
    assert isinstance(make_reel_bank().rng, TrueRNG)
    assert isinstance(make_reel_bank(5).rng, SeededRNG)
    assert isinstance(make_rng(None), TrueRNG)


def test_true_rng_bounds():
    rng = TrueRNG()
    values = {rng.random_int(0, 2) for _ in range(200)}
    assert values <= {0, 1, 2}
    with pytest.raises(ValueError):
        rng.random_int(3, 1)
