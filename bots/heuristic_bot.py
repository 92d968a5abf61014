"""Rule-of-thumb bot: count honours to bid, lead long suits, follow cheaply."""

from __future__ import annotations

from collections import Counter
from typing import List, Sequence

from spades.actions import Bid, Play
from spades.cards import STANDARD_SUITS, TRUMP_SUIT, Card, Rank, card_strength, is_trump
from spades.deck import parse_card
from spades.observation import Observation
from spades.scoring import MAX_BID

from .base import BotStrategy

# Trump length beyond this many cards is counted as extra tricks.
LONG_TRUMP = 4


def _cards(card_ids: Sequence[str]) -> List[Card]:
    cards = [parse_card(card_id) for card_id in card_ids]
    return [card for card in cards if card is not None]


def _highest(cards: Sequence[Card]) -> Card:
    return max(cards, key=card_strength)


def _lowest(cards: Sequence[Card]) -> Card:
    return min(cards, key=card_strength)


def estimate_tricks(hand: Sequence[Card]) -> float:
    suit_lengths = Counter(card.suit for card in hand)
    trump_length = sum(1 for card in hand if is_trump(card))

    expected = 0.0
    for card in hand:
        if card.rank in (Rank.ACE, Rank.KING, Rank.BIG, Rank.LITTLE):
            expected += 1
        elif card.rank is Rank.QUEEN and suit_lengths[card.suit] >= 2:
            expected += 0.5

    if trump_length > LONG_TRUMP:
        expected += trump_length - LONG_TRUMP
    return expected


class HeuristicBot(BotStrategy):
    name = "Heuristic"

    def bid(self, observation: Observation) -> Bid:
        hand = _cards(observation.hand)
        expected = estimate_tricks(hand)

        value = min(MAX_BID, max(1, int(expected + 0.5)))
        has_high_trump = any(is_trump(card) and card_strength(card) > 8 for card in hand)
        if expected <= 0 and not has_high_trump:
            value = 0

        return Bid(value=value, reasoning=f"Heuristic evaluation: {expected} expected tricks.")

    def play(self, observation: Observation) -> Play:
        context = observation.playing_context
        if context is None or not context.legal_plays:
            raise RuntimeError("No legal plays available for bot.")
        legal = _cards(context.legal_plays)

        if not context.current_trick:
            chosen = self._lead(legal)
        else:
            led = parse_card(context.current_trick[0].card)
            assert led is not None
            led_suit = TRUMP_SUIT if is_trump(led) else led.suit
            chosen = self._follow(legal, led_suit)

        return Play(card=chosen.id, reasoning="Heuristic play logic applied.")

    def _lead(self, legal: List[Card]) -> Card:
        side_cards = [card for card in legal if not is_trump(card)]
        if not side_cards:
            return _highest(legal)
        lengths = Counter(card.suit for card in side_cards)
        longest = max(
            (suit for suit in STANDARD_SUITS if lengths[suit]),
            key=lambda suit: lengths[suit],
        )
        return _highest([card for card in side_cards if card.suit is longest])

    def _follow(self, legal: List[Card], led_suit) -> Card:
        if led_suit is TRUMP_SUIT:
            following = [card for card in legal if is_trump(card)]
        else:
            following = [card for card in legal if card.suit is led_suit]
        if following:
            return _lowest(following)

        trumps = [card for card in legal if is_trump(card)]
        if trumps:
            return _lowest(trumps)
        return _lowest(legal)
