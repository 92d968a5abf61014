from spades.cards import Card, Rank, Suit
from spades.deck import Variant, build_deck
from spades.mechanics import legal_plays

BIG = Card(Rank.BIG, Suit.JOKER)
LITTLE = Card(Rank.LITTLE, Suit.JOKER)


def test_cannot_lead_trump_before_it_is_broken():
    hand = [Card(Rank.ACE, Suit.SPADES), Card(Rank.TWO, Suit.HEARTS), BIG]
    assert legal_plays(hand, None, trump_broken=False) == [Card(Rank.TWO, Suit.HEARTS)]


def test_may_lead_trump_once_broken():
    hand = [Card(Rank.ACE, Suit.SPADES), Card(Rank.TWO, Suit.HEARTS)]
    assert legal_plays(hand, None, trump_broken=True) == hand


def test_may_lead_trump_when_holding_only_trump():
    hand = [Card(Rank.FOUR, Suit.SPADES), LITTLE]
    assert legal_plays(hand, None, trump_broken=False) == hand


def test_must_follow_led_suit():
    hand = [
        Card(Rank.KING, Suit.CLUBS),
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.THREE, Suit.CLUBS),
        Card(Rank.NINE, Suit.HEARTS),
    ]
    assert legal_plays(hand, Suit.CLUBS, trump_broken=False) == [
        Card(Rank.KING, Suit.CLUBS),
        Card(Rank.THREE, Suit.CLUBS),
    ]


def test_jokers_follow_a_trump_lead():
    hand = [BIG, Card(Rank.NINE, Suit.HEARTS), Card(Rank.TWO, Suit.SPADES)]
    assert legal_plays(hand, Suit.SPADES, trump_broken=True) == [BIG, Card(Rank.TWO, Suit.SPADES)]


def test_jokers_alone_satisfy_a_trump_lead():
    hand = [Card(Rank.NINE, Suit.HEARTS), LITTLE]
    assert legal_plays(hand, Suit.SPADES, trump_broken=True) == [LITTLE]


def test_jokers_do_not_follow_a_plain_suit():
    hand = [BIG, Card(Rank.NINE, Suit.HEARTS)]
    assert legal_plays(hand, Suit.HEARTS, trump_broken=False) == [Card(Rank.NINE, Suit.HEARTS)]


def test_void_hand_may_play_anything():
    hand = [BIG, Card(Rank.ACE, Suit.SPADES), Card(Rank.NINE, Suit.HEARTS)]
    assert legal_plays(hand, Suit.DIAMONDS, trump_broken=False) == hand


def test_empty_hand_has_no_plays():
    assert legal_plays([], None, trump_broken=False) == []


def test_legal_plays_never_empty_for_non_empty_hands():
    for variant in Variant:
        deck = build_deck(variant)
        for start in range(0, len(deck), 5):
            hand = deck[start : start + 7]
            for led in (None, Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS):
                for broken in (False, True):
                    legal = legal_plays(hand, led, broken)
                    assert legal
                    assert all(card in hand for card in legal)
