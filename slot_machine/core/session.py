"""
Game session: one player, one round at a time.
Place bet -> spin -> evaluate -> settle.
"""

import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from slot_machine.core.account import PlayerAccount, STARTING_CREDITS
from slot_machine.core.exceptions import ConfigurationError, SessionNotFound
from slot_machine.core.logger import get_logger
from slot_machine.core.payout import Evaluation, PayoutEngine, payout_engine
from slot_machine.core.reels import ReelBank, SpinOutcome, make_reel_bank

logger = get_logger("session")


@dataclass(frozen=True)
class RoundResult:
    bet: int
    outcome: SpinOutcome
    evaluation: Evaluation
    balance: int

    @property
    def winnings(self) -> int:
        return self.evaluation.total_winnings

    @property
    def net(self) -> int:
        return self.winnings - self.bet

    def to_dict(self) -> Dict:
        return {
            "bet": self.bet,
            "reels": [s.name for s in self.outcome],
            "display": [s.display for s in self.outcome],
            "win": self.evaluation.win,
            "is_jackpot": self.evaluation.is_jackpot,
            "winnings": self.winnings,
            "lines": [line.to_dict() for line in self.evaluation.matched_lines],
            "net": self.net,
            "balance": self.balance,
        }


class GameSession:
    """Drives rounds for a single player and keeps running totals."""

    def __init__(
        self,
        name: str,
        starting_credits: int = STARTING_CREDITS,
        reel_bank: Optional[ReelBank] = None,
        engine: Optional[PayoutEngine] = None,
    ):
        self.account = PlayerAccount(name, starting_credits)
        self.starting_credits = starting_credits
        self.reel_bank = reel_bank if reel_bank is not None else ReelBank()
        self.engine = engine if engine is not None else payout_engine

        if self.reel_bank.num_reels != self.engine.num_reels:
            raise ConfigurationError(
                f"Reel bank has {self.reel_bank.num_reels} reels, "
                f"payout engine expects {self.engine.num_reels}"
            )

        self.rounds_played = 0
        self.total_wagered = 0
        self.total_won = 0
        self.biggest_win = 0

    def play_round(self, bet: int) -> RoundResult:
        """
        Play one round.

        Args:
            bet: Amount wagered

        Returns:
            RoundResult with the spin, the evaluation and the new balance

        Raises:
            InvalidBet: if the bet is out of range; nothing is debited
        """
        self.account.place_bet(bet)

        outcome = self.reel_bank.spin()
        evaluation = self.engine.evaluate(outcome, bet)

        if evaluation.total_winnings > 0:
            self.account.add_winnings(evaluation.total_winnings)
        self.account.clear_bet()

        self.rounds_played += 1
        self.total_wagered += bet
        self.total_won += evaluation.total_winnings
        self.biggest_win = max(self.biggest_win, evaluation.total_winnings)

        if evaluation.is_jackpot:
            logger.info(f"{self.account.name}: JACKPOT! won {evaluation.total_winnings} on bet {bet}")
        elif evaluation.win:
            logger.info(f"{self.account.name}: won {evaluation.total_winnings} on bet {bet}")
        else:
            logger.debug(f"{self.account.name}: lost bet {bet}")

        return RoundResult(
            bet=bet,
            outcome=outcome,
            evaluation=evaluation,
            balance=self.account.credits,
        )

    @property
    def is_over(self) -> bool:
        return not self.account.has_credits()

    @property
    def result(self) -> str:
        """Profit, breakeven or loss relative to the starting balance."""
        if self.account.credits > self.starting_credits:
            return "profit"
        if self.account.credits == self.starting_credits:
            return "breakeven"
        return "loss"

    def summary(self) -> Dict:
        return {
            "name": self.account.name,
            "starting_credits": self.starting_credits,
            "balance": self.account.credits,
            "rounds_played": self.rounds_played,
            "total_wagered": self.total_wagered,
            "total_won": self.total_won,
            "biggest_win": self.biggest_win,
            "net": self.account.credits - self.starting_credits,
            "result": self.result,
        }


class SessionManager:
    """
    In-memory store of isolated sessions, keyed by session id.
    Nothing is shared between sessions and nothing survives a restart.
    Sessions idle for longer than `ttl_seconds` are dropped.
    """

    def __init__(
        self,
        starting_credits: int = STARTING_CREDITS,
        rng_seed: Optional[int] = None,
        ttl_seconds: float = 1800,
        clock: Callable[[], float] = time.time,
    ):
        self.starting_credits = starting_credits
        self.rng_seed = rng_seed
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, GameSession] = {}
        self._last_seen: Dict[str, float] = {}
        self._created = 0

    def _next_seed(self) -> Optional[int]:
        # Each session gets its own reel sequence, still reproducible per run
        if self.rng_seed is None:
            return None
        return self.rng_seed + self._created

    def create(self, name: str) -> str:
        self.prune()

        session_id = uuid.uuid4().hex
        self._sessions[session_id] = GameSession(
            name,
            starting_credits=self.starting_credits,
            reel_bank=make_reel_bank(self._next_seed()),
        )
        self._last_seen[session_id] = self._clock()
        self._created += 1
        logger.info(f"Session {session_id} started for {name}")
        return session_id

    def get(self, session_id: str) -> GameSession:
        self.prune()

        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        self._last_seen[session_id] = self._clock()
        return session

    def close(self, session_id: str) -> Dict:
        session = self.get(session_id)
        del self._sessions[session_id]
        del self._last_seen[session_id]
        summary = session.summary()
        logger.info(f"Session {session_id} closed: {summary['result']} ({summary['net']:+d})")
        return summary

    def prune(self) -> List[str]:
        """Drop sessions that have been idle past the TTL; returns their ids."""
        cutoff = self._clock() - self.ttl_seconds
        expired = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for session_id in expired:
            del self._sessions[session_id]
            del self._last_seen[session_id]
            logger.info(f"Session {session_id} expired")
        return expired

    def __len__(self) -> int:
        return len(self._sessions)
