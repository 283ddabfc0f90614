class SlotMachineError(Exception):
    """Base class for slot machine errors."""


class ConfigurationError(SlotMachineError):
    """Raised when reels or win lines are set up with invalid data."""


class InvalidBet(SlotMachineError):
    def __init__(self, bet: int, balance: int):
        self.bet = bet
        self.balance = balance
        super().__init__(f"Invalid bet {bet}: must be between 1 and {balance}")


class SessionNotFound(SlotMachineError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")
