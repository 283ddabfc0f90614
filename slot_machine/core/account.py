from slot_machine.core.exceptions import InvalidBet
from slot_machine.core.logger import get_logger

logger = get_logger("account")

STARTING_CREDITS = 100


class PlayerAccount:
    """
    A player's credit balance.
    Bets are escrowed: accepting a bet debits the balance before the spin.
    """

    def __init__(self, name: str, credits: int = STARTING_CREDITS):
        if credits < 0:
            raise ValueError("Starting credits cannot be negative")
        self.name = name
        self.credits = credits
        self.current_bet = 0

    def place_bet(self, amount: int) -> int:
        """
        Escrow a bet.

        Raises:
            InvalidBet: if amount is not between 1 and the current balance.
                The balance is left untouched.
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidBet(amount, self.credits)
        if amount <= 0 or amount > self.credits:
            logger.warning(f"{self.name}: rejected bet {amount} (balance {self.credits})")
            raise InvalidBet(amount, self.credits)

        self.current_bet = amount
        self.credits -= amount
        return self.credits

    def add_winnings(self, amount: int) -> int:
        if amount < 0:
            raise ValueError("Winnings cannot be negative")
        self.credits += amount
        return self.credits

    def clear_bet(self):
        self.current_bet = 0

    def has_credits(self) -> bool:
        return self.credits > 0

    def to_dict(self) -> dict:
        return {"name": self.name, "credits": self.credits, "current_bet": self.current_bet}
