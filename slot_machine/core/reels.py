"""
Reel bank for the 3-reel slot machine.
Each reel is a flat weighted population of symbols; a draw is a uniform
index into that population, so each symbol shows up in proportion to its weight.
"""

from typing import Dict, List, Optional, Tuple

from slot_machine.core.exceptions import ConfigurationError
from slot_machine.core.logger import get_logger
from slot_machine.core.rng import make_rng, rng as default_rng
from slot_machine.core.symbols import Symbol

logger = get_logger("reels")

NUM_REELS = 3

# Symbol weights per reel (50 stops in total)
DEFAULT_WEIGHTS: Dict[Symbol, int] = {
    Symbol.CHERRY: 15,
    Symbol.LEMON: 12,
    Symbol.ORANGE: 10,
    Symbol.BELL: 8,
    Symbol.BAR: 4,
    Symbol.SEVEN: 1,
}

SpinOutcome = Tuple[Symbol, ...]


def build_population(weights: Dict[Symbol, int] = None) -> Tuple[Symbol, ...]:
    """
    Build the flat weighted population for one reel.

    Symbols are laid out in declaration order (all cherries first, sevens
    last) regardless of the order of `weights`, so seeded draws land on the
    same symbols every time.

    Args:
        weights: Symbol -> number of stops on the reel

    Returns:
        Tuple of symbols, one entry per reel stop

    Raises:
        ConfigurationError: if the weights are malformed or sum to zero
    """
    if weights is None:
        weights = DEFAULT_WEIGHTS

    for symbol, weight in weights.items():
        if not isinstance(symbol, Symbol):
            raise ConfigurationError(f"Unknown reel symbol: {symbol!r}")
        if isinstance(weight, bool) or not isinstance(weight, int) or weight < 0:
            raise ConfigurationError(
                f"Weight for {symbol.name} must be a non-negative integer, got {weight!r}"
            )

    population = []
    for symbol in Symbol:
        population.extend([symbol] * weights.get(symbol, 0))

    if not population:
        raise ConfigurationError("Reel population is empty")

    return tuple(population)


class ReelBank:
    """
    Holds one weighted population per reel and spins them independently.
    Every reel shares the same weight table.
    """

    def __init__(
        self,
        weights: Dict[Symbol, int] = None,
        num_reels: int = NUM_REELS,
        rng=None,
    ):
        if isinstance(num_reels, bool) or not isinstance(num_reels, int) or num_reels < 1:
            raise ConfigurationError(f"Reel count must be at least 1, got {num_reels!r}")

        population = build_population(weights)
        self._reels: List[Tuple[Symbol, ...]] = [population for _ in range(num_reels)]
        self.rng = rng if rng is not None else default_rng

        logger.debug(f"Reel bank ready: {num_reels} reels x {len(population)} stops")

    @property
    def num_reels(self) -> int:
        return len(self._reels)

    def draw_reel(self, reel_index: int) -> Symbol:
        """Spin a single reel and return the symbol."""
        pool = self._reels[reel_index]
        index = self.rng.random_int(0, len(pool) - 1)
        return pool[index]

    def spin(self) -> SpinOutcome:
        """Spin every reel once and return the symbols in reel order."""
        outcome = tuple(self.draw_reel(i) for i in range(self.num_reels))
        logger.debug(f"Spin: {' '.join(s.name for s in outcome)}")
        return outcome

    def probability(self, symbol: Symbol, reel_index: int = 0) -> float:
        """Chance of `symbol` showing on a reel."""
        pool = self._reels[reel_index]
        return pool.count(symbol) / len(pool)

    def weights(self, reel_index: int = 0) -> Dict[Symbol, int]:
        pool = self._reels[reel_index]
        return {symbol: pool.count(symbol) for symbol in Symbol if symbol in pool}


def make_reel_bank(seed: Optional[int] = None) -> ReelBank:
    """Build the default reel bank, seeded when a seed is given."""
    return ReelBank(rng=make_rng(seed))
