"""
Console front end for the slot machine.
Reads the player's name and bets, animates the spin and prints results.
All game rules live in slot_machine.core; this module only talks to the player.
"""

import argparse
import sys
import time
from typing import Callable, Optional

from slot_machine.config import settings
from slot_machine.core.exceptions import InvalidBet
from slot_machine.core.logger import init_logging, get_logger
from slot_machine.core.payout import JACKPOT_MULTIPLIER
from slot_machine.core.reels import make_reel_bank
from slot_machine.core.session import GameSession, RoundResult
from slot_machine.core.symbols import JACKPOT_SYMBOL, Symbol

logger = get_logger("cli")

RULE = "=" * 50


class ConsoleGame:
    """Interactive round loop on stdin/stdout."""

    def __init__(
        self,
        starting_credits: int = 100,
        seed: Optional[int] = None,
        spin_delay: float = 0.5,
        spin_frames: int = 3,
        input_func: Callable[[str], str] = input,
        output_func: Callable[..., None] = print,
        sleep_func: Callable[[float], None] = time.sleep,
    ):
        self.starting_credits = starting_credits
        self.seed = seed
        self.spin_delay = spin_delay
        self.spin_frames = spin_frames
        self._input = input_func
        self._print = output_func
        self._sleep = sleep_func
        self.session: Optional[GameSession] = None

    # ==================== Input ====================

    def _ask(self, prompt: str) -> Optional[str]:
        """Prompt for a line; None when input is closed."""
        try:
            return self._input(prompt)
        except EOFError:
            return None

    def _read_bet(self) -> Optional[int]:
        """
        Keep asking until the player enters a valid bet or quits.
        Returns None when the player quits.
        """
        account = self.session.account
        while True:
            raw = self._ask(f"Enter your bet (1-{account.credits}) or 0 to quit: ")
            if raw is None:
                return None

            try:
                bet = int(raw.strip())
            except ValueError:
                self._print("❌ Please enter a valid number.")
                continue

            if bet == 0:
                return None
            if 0 < bet <= account.credits:
                return bet
            self._print("❌ Invalid bet amount. Please try again.")

    def _play_again(self) -> bool:
        if self.session.is_over:
            self._print("\n💸 You're out of credits! Game Over!")
            return False

        choice = self._ask("\nPlay again? (y/n): ")
        return choice is not None and choice.strip().lower() in ("y", "yes")

    # ==================== Output ====================

    def show_welcome(self):
        self._print("╔══════════════════════════════════════════════╗")
        self._print("║            🎰 SLOT MACHINE GAME 🎰            ║")
        self._print("╠══════════════════════════════════════════════╣")
        self._print("║ Symbols and Multipliers:")
        for symbol in Symbol:
            extra = " (+Jackpot!)" if symbol is JACKPOT_SYMBOL else ""
            self._print(f"║   {symbol.display} {symbol.name.title():<7} x{symbol.multiplier}{extra}")
        self._print(f"║ Three {JACKPOT_SYMBOL.display} also pay a {JACKPOT_MULTIPLIER}x bet jackpot bonus")
        self._print("╚══════════════════════════════════════════════╝")

    def animate_spin(self):
        self._print("\n🎰 Spinning the reels... 🎰")
        for _ in range(self.spin_frames):
            if self.spin_delay > 0:
                self._sleep(self.spin_delay)
            self._print(".", end="", flush=True)
        self._print("\n")

    def show_result(self, result: RoundResult):
        reels = "    ".join(s.display for s in result.outcome)
        self._print("╔═══════════════════════════════╗")
        self._print("║         SLOT MACHINE          ║")
        self._print("╠═══════════════════════════════╣")
        self._print(f"║      {reels}")
        self._print("╚═══════════════════════════════╝")

        for line in result.evaluation.matched_lines:
            self._print(
                f"🎉 WINNER! {line.line_name} line - {line.symbol.display} x{len(result.outcome)}"
            )
            self._print(f"💰 Line winnings: {line.line_winnings} credits")
            if line.jackpot_bonus:
                self._print(f"🏆 JACKPOT BONUS! +{line.jackpot_bonus} credits!")

        if result.evaluation.win:
            self._print(f"🎊 Total winnings: {result.winnings} credits!")
        else:
            self._print("😞 No winning combinations. Better luck next time!")

    def show_stats(self):
        account = self.session.account
        self._print(f"Player: {account.name} | Credits: {account.credits}")

    def show_summary(self):
        self._print("\n" + RULE)
        self._print("🎰 Thanks for playing! 🎰")
        self.show_stats()

        summary = self.session.summary()
        self._print(
            f"Rounds: {summary['rounds_played']} | Wagered: {summary['total_wagered']} "
            f"| Won: {summary['total_won']}"
        )
        if summary["result"] == "profit":
            self._print("🎉 Congratulations! You finished with a profit!")
        elif summary["result"] == "breakeven":
            self._print("😊 You broke even! Not bad!")
        else:
            self._print("😅 Better luck next time!")
        self._print("Come back soon!")

    # ==================== Game Loop ====================

    def run(self) -> dict:
        """Play a full session and return its summary."""
        self.show_welcome()

        name = (self._ask("\nEnter your name: ") or "").strip() or "Player"
        self.session = GameSession(
            name,
            starting_credits=self.starting_credits,
            reel_bank=make_reel_bank(self.seed),
        )
        self._print(f"Welcome, {name}! You start with {self.starting_credits} credits.")

        while not self.session.is_over:
            self._print("\n" + RULE)
            self.show_stats()

            bet = self._read_bet()
            if bet is None:
                break

            try:
                result = self.session.play_round(bet)
            except InvalidBet as e:
                self._print(f"❌ {e}")
                continue

            self._print(f"Bet placed: {bet} credits")
            self.animate_spin()
            self.show_result(result)

            if not self._play_again():
                break

        self.show_summary()
        return self.session.summary()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Console slot machine")
    parser.add_argument(
        "--credits", type=int, default=settings.game.starting_credits,
        help="Starting credit balance",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.game.rng_seed,
        help="Seed the reels for a reproducible game",
    )
    parser.add_argument(
        "--no-animation", action="store_true",
        help="Skip the spin delay",
    )
    args = parser.parse_args(argv)

    if args.credits < 1:
        parser.error("--credits must be at least 1")

    init_logging(
        level=settings.logging.level,
        log_to_file=settings.logging.log_to_file,
        formatter=settings.logging.formatter,
        log_file_path=settings.paths.get_log_path(),
    )

    game = ConsoleGame(
        starting_credits=args.credits,
        seed=args.seed,
        spin_delay=0 if args.no_animation else settings.game.spin_delay_seconds,
        spin_frames=settings.game.spin_frames,
    )
    try:
        game.run()
    except KeyboardInterrupt:
        print("\nGoodbye!")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
