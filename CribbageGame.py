# CribbageGame.py  – two-player game loop: cut, deal, discard, starter, play, show
# -------------------------------------------------------------------------------
import logging
import random
import sys
from typing import List, Optional

from Cards import Card, Deck, Rank
from Controllers import IoController, RandomController
from CribbageErrors import ControllerError, GameStateError
from CribbageScorer import total
from Pegging import PlayStack
from Player import Player

logger = logging.getLogger(__name__)

# ---------- Constants ----------
GAME_END       = 121
HAND_SIZE      = 6
DISCARDS       = 2
HEELS_POINTS   = 2
MAX_PLAY_TURNS = 100
MAX_ROUNDS     = 1000
LOG_LEVEL      = logging.WARNING


# ---------- Table display ----------
class Display:
    """Console view of the table. A disabled display stays quiet."""

    def __init__(self, enabled: bool = True, output_fn=print):
        self.enabled = enabled
        self.output_fn = output_fn

    def show(self, message: str) -> None:
        if self.enabled:
            self.output_fn(message)

    def cut(self, dealer: Player, dealer_card: Card, pone: Player,
            pone_card: Card, dealer_won: bool) -> None:
        winner = dealer if dealer_won else pone
        self.show(f"✂️ Cut: {dealer.name} {dealer_card}  {pone.name} {pone_card}"
                  f" → {winner.name} deals")

    def table(self, dealer: Player, pone: Player, starter: Optional[Card] = None) -> None:
        self.show(f"🟥 Starter: {starter if starter else '[??]'}")
        self.show(f"   {dealer.name} (dealer, {dealer.points}): {dealer.hand}  crib: {dealer.crib}")
        self.show(f"   {pone.name} (pone, {pone.points}): {pone.hand}")

    def points(self, player: Player, delta: int, reason: str) -> None:
        self.show(f"🔔 {player.name}: +{delta} for {reason}, total {player.points}")

    def winner(self, player: Player) -> None:
        self.show(f"🥳 Game over! {player.name} wins with {player.points}.")


class CribbageGame:
    """
    A game between two players. `player_1` starts as dealer until the cut
    says otherwise; the deck is shuffled on creation unless one is given.
    """

    def __init__(self, player_1: Player, player_2: Player,
                 deck: Optional[Deck] = None, rng: Optional[random.Random] = None,
                 display: Optional[Display] = None):
        self.dealer = player_1
        self.pone = player_2
        self.rng = rng
        self.display = display if display is not None else Display(enabled=False)
        if deck is None:
            deck = Deck()
            deck.shuffle(self.rng)
        self.deck = deck
        self.score_history: List[dict] = []

    def _record(self, phase: str, player: Player, delta: int) -> None:
        self.score_history.append({'phase': phase, 'player': player.name,
                                   'delta': delta, 'total': player.points})
        logger.debug("%s: %s +%d (total %d)", phase, player.name, delta, player.points)
        self.display.points(player, delta, phase)

    # ---------- Game loop ----------
    def play(self, reset_with_deck: Optional[Deck] = None) -> Player:
        """Play to GAME_END and return the winner."""
        self.choose_dealer()

        for round_number in range(1, MAX_ROUNDS + 1):
            logger.debug("round %d: %s deals", round_number, self.dealer.name)
            self.run_deal_and_discard_round()

            starter = self.get_starter()
            if self.player_has_won():
                break

            self.run_play_round()
            if self.player_has_won():
                break

            self.run_counting_round(starter)
            if self.player_has_won():
                break

            if reset_with_deck is not None:
                self.reset_deck_with(reset_with_deck.copy())
            else:
                self.reset_deck(starter)
                self.shuffle_deck()
            self.swap_dealer_and_pone()
        else:
            raise GameStateError(f"No winner after {MAX_ROUNDS} rounds")

        winner = self.winner()
        self.display.winner(winner)
        return winner

    def player_has_won(self) -> bool:
        return self.dealer.points >= GAME_END or self.pone.points >= GAME_END

    def winner(self) -> Optional[Player]:
        for player in (self.dealer, self.pone):
            if player.points >= GAME_END:
                return player
        return None

    # ---------- Cut for deal ----------
    def choose_dealer(self) -> None:
        """Both players cut from a copy of the deck; the higher card deals."""
        temp_deck = self.deck.copy()

        dealer_card = self.dealer.choose_card_for_cut(temp_deck)
        pone_card = self.pone.choose_card_for_cut(temp_deck)
        if dealer_card is None or pone_card is None:
            raise ControllerError("Both players must cut for deal")

        dealer_won = dealer_card > pone_card
        self.display.cut(self.dealer, dealer_card, self.pone, pone_card, dealer_won)
        if not dealer_won:
            self.swap_dealer_and_pone()

    # ---------- Deal & discard ----------
    def run_deal_and_discard_round(self) -> None:
        for _ in range(HAND_SIZE):
            dealer_card, pone_card = self.deck.deal(), self.deck.deal()
            if dealer_card is None or pone_card is None:
                raise GameStateError("There are not enough cards to deal")
            self.dealer.add_card(dealer_card)
            self.pone.add_card(pone_card)

        discards = []
        for _ in range(DISCARDS):
            self.display.table(self.dealer, self.pone)
            for player in (self.pone, self.dealer):
                card = player.remove_card()
                if card is None:
                    raise ControllerError(f"{player.name} has no card to discard to the crib")
                discards.append(card)

        self.dealer.crib.clear()
        for card in discards:
            self.dealer.crib.add_card(card)
        self.display.table(self.dealer, self.pone)

    def get_starter(self) -> Card:
        starter = self.deck.deal()
        if starter is None:
            raise GameStateError("Could not get starter from an empty deck")

        self.display.show(f"🟥 Cut card: {starter.name}")
        if starter.rank == Rank.JACK:
            self.dealer.add_points(HEELS_POINTS)
            self._record('heels', self.dealer, HEELS_POINTS)
        return starter

    # ---------- Pegging ----------
    def run_play_round(self) -> None:
        """Pone leads. After a reset the player who just went goes again."""
        turn = 0
        play_stack = PlayStack()

        while self.dealer.has_cards_in_hand() or self.pone.has_cards_in_hand():
            player, opponent = (self.pone, self.dealer) if turn % 2 == 0 else (self.dealer, self.pone)
            points = play_stack.play_once(player, opponent)
            if points:
                self._record('pegging', player, points)

            if self.player_has_won():
                break

            if not play_stack.reset_if_needed(self.dealer, self.pone):
                turn += 1
            else:
                self.display.show("🔁 Nobody can go! Resetting count…")

            if turn > MAX_PLAY_TURNS:
                raise GameStateError(
                    f"Too many turns ({turn}) with {play_stack!r}, "
                    f"dealer {self.dealer!r}, pone {self.pone!r}")

        self.dealer.gather_played()
        self.pone.gather_played()

    # ---------- Show ----------
    def run_counting_round(self, starter: Card) -> None:
        """Pone counts first and can win before the dealer counts."""
        points = total(self.pone.hand.as_list(), starter)
        self.pone.add_points(points)
        self._record('hand', self.pone, points)
        if self.pone.points >= GAME_END:
            return

        points = total(self.dealer.hand.as_list(), starter)
        self.dealer.add_points(points)
        self._record('hand', self.dealer, points)

        points = total(self.dealer.crib.as_list(), starter, is_crib=True)
        self.dealer.add_points(points)
        self._record('crib', self.dealer, points)

    # ---------- Between rounds ----------
    def reset_deck(self, starter: Card) -> None:
        """Collect every card back into the deck: stock, both players, starter."""
        cards = self.deck.as_list()
        cards.extend(self.dealer.remove_all())
        cards.extend(self.pone.remove_all())
        cards.append(starter)
        self.deck = Deck(cards)

    def reset_deck_with(self, deck: Deck) -> None:
        self.deck = deck
        self.dealer.reset()
        self.pone.reset()

    def shuffle_deck(self) -> None:
        self.deck.shuffle(self.rng)

    def swap_dealer_and_pone(self) -> None:
        self.dealer, self.pone = self.pone, self.dealer


# ---------- Command line ----------
def choose_mode() -> str:
    print("Select opponent type:")
    print("  1) Random AI")
    print("  h) Human (hotseat)")
    while True:
        sel = input("Opponent? [1/h] > ").strip().lower()
        if sel == "1": return "ai_random"
        if sel == "h": return "human"
        print("Please choose 1 or h.")


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    seed = None
    if "--seed" in args:
        position = args.index("--seed")
        if position + 1 < len(args) and args[position + 1].isdigit():
            seed = int(args[position + 1])
    level = logging.DEBUG if "--verbose" in args else LOG_LEVEL
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if "--auto" in args:
        mode = "auto"
    else:
        mode = choose_mode()

    rng = random.Random(seed)
    if mode == "auto":
        player_1 = Player("AI 1", RandomController(rng.randrange(2 ** 32)))
    else:
        player_1 = Player("Player 1", IoController())
    if mode == "human":
        player_2 = Player("Player 2", IoController())
    else:
        player_2 = Player("AI", RandomController(rng.randrange(2 ** 32)))

    game = CribbageGame(player_1, player_2, rng=rng, display=Display())
    try:
        game.play()
    except KeyboardInterrupt:
        print("\n[INFO] Terminated by user.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
