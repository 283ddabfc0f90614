"""
Win-line evaluation and payouts.
A line pays when every reel position it lists shows the same symbol.
Three sevens also pay a flat jackpot bonus on top of the line payout.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from slot_machine.core.exceptions import ConfigurationError
from slot_machine.core.logger import get_logger
from slot_machine.core.reels import NUM_REELS
from slot_machine.core.symbols import JACKPOT_SYMBOL, Symbol

logger = get_logger("payout")

# Jackpot bonus is bet * JACKPOT_MULTIPLIER
JACKPOT_MULTIPLIER = 50


@dataclass(frozen=True)
class WinLine:
    name: str
    positions: Tuple[int, ...]


@dataclass(frozen=True)
class LineWin:
    line_name: str
    symbol: Symbol
    line_winnings: int
    jackpot_bonus: int = 0

    @property
    def total(self) -> int:
        return self.line_winnings + self.jackpot_bonus

    def to_dict(self) -> Dict:
        return {
            "line": self.line_name,
            "symbol": self.symbol.name,
            "display": self.symbol.display,
            "line_winnings": self.line_winnings,
            "jackpot_bonus": self.jackpot_bonus,
        }


@dataclass(frozen=True)
class Evaluation:
    total_winnings: int
    matched_lines: Tuple[LineWin, ...] = field(default_factory=tuple)

    @property
    def win(self) -> bool:
        return self.total_winnings > 0

    @property
    def is_jackpot(self) -> bool:
        return any(line.jackpot_bonus > 0 for line in self.matched_lines)


# Only the straight line across all three reels pays
DEFAULT_WIN_LINES = (WinLine("Horizontal", (0, 1, 2)),)


class PayoutEngine:
    """
    Checks a spin against every win line and totals the winnings.
    Stateless once built: the same (outcome, bet) always gives the same result.
    """

    def __init__(
        self,
        win_lines: Sequence[WinLine] = DEFAULT_WIN_LINES,
        num_reels: int = NUM_REELS,
        jackpot_symbol: Symbol = JACKPOT_SYMBOL,
        jackpot_multiplier: int = JACKPOT_MULTIPLIER,
    ):
        for line in win_lines:
            if not line.positions:
                raise ConfigurationError(f"Win line '{line.name}' has no positions")
            for pos in line.positions:
                if not 0 <= pos < num_reels:
                    raise ConfigurationError(
                        f"Win line '{line.name}' references reel {pos}, "
                        f"machine has {num_reels} reels"
                    )

        self.win_lines: Tuple[WinLine, ...] = tuple(win_lines)
        self.num_reels = num_reels
        self.jackpot_symbol = jackpot_symbol
        self.jackpot_multiplier = jackpot_multiplier

    def _check_line(self, line: WinLine, outcome: Sequence[Symbol], bet: int):
        """Return a LineWin if every position on the line holds the same symbol."""
        candidate = outcome[line.positions[0]]
        if any(outcome[pos] is not candidate for pos in line.positions):
            return None

        jackpot = bet * self.jackpot_multiplier if candidate is self.jackpot_symbol else 0
        return LineWin(
            line_name=line.name,
            symbol=candidate,
            line_winnings=bet * candidate.multiplier,
            jackpot_bonus=jackpot,
        )

    def evaluate(self, outcome: Sequence[Symbol], bet: int) -> Evaluation:
        """
        Evaluate a spin for a given bet.

        Args:
            outcome: Symbols in reel order
            bet: Amount wagered (already validated by the caller)

        Returns:
            Evaluation with total winnings and the lines that paid
        """
        if len(outcome) != self.num_reels:
            raise ValueError(f"Expected {self.num_reels} symbols, got {len(outcome)}")

        matched: List[LineWin] = []
        for line in self.win_lines:
            line_win = self._check_line(line, outcome, bet)
            if line_win is not None:
                matched.append(line_win)

        total = sum(line.total for line in matched)
        logger.debug(
            f"Evaluated {' '.join(s.name for s in outcome)} bet={bet}: "
            f"{len(matched)} line(s), winnings={total}"
        )
        return Evaluation(total_winnings=total, matched_lines=tuple(matched))

    def paytable(self) -> Dict:
        """Describe symbols, lines and the jackpot rule for display."""
        return {
            "symbols": [
                {"symbol": s.name, "display": s.display, "multiplier": s.multiplier}
                for s in Symbol
            ],
            "win_lines": [
                {"name": line.name, "positions": list(line.positions)}
                for line in self.win_lines
            ],
            "jackpot": {
                "symbol": self.jackpot_symbol.name,
                "multiplier": self.jackpot_multiplier,
            },
        }


payout_engine = PayoutEngine()
