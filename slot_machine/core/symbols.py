"""
Reel symbols and their payout multipliers.
Declaration order runs from most common to rarest.
"""

from enum import Enum


class Symbol(Enum):
    CHERRY = ("🍒", 2)
    LEMON = ("🍋", 3)
    ORANGE = ("🍊", 4)
    BELL = ("🔔", 5)
    BAR = ("⭐", 10)
    SEVEN = ("7️⃣", 20)

    def __init__(self, display: str, multiplier: int):
        self.display = display
        self.multiplier = multiplier

    def __str__(self) -> str:
        return self.display


# Symbol that triggers the jackpot bonus on a full line
JACKPOT_SYMBOL = Symbol.SEVEN
