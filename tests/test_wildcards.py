from typing import Any

import pytest

from deckledger.analysis.wildcards import (
    Collection,
    WildcardCost,
    WildcardShortfall,
    estimate_booster_count,
    missing_wildcard_count,
)
from deckledger.models.deck import Deck
from deckledger.services.card_database import CardDatabase
from tests.card_ids import BOLAS_MED, BOLAS_WAR, BOLT, COUNTERSPELL, MOUNTAIN, SHEOLDRED


def _deck(
    main: list[tuple[int, int]], side: list[tuple[int, int]] | None = None
) -> dict[str, Any]:
    return {
        "mainDeck": [{"id": card_id, "quantity": qty} for card_id, qty in main],
        "sideboard": [{"id": card_id, "quantity": qty} for card_id, qty in side or []],
    }


class TestCollection:
    def test_empty_collection(self) -> None:
        collection = Collection()
        assert collection.total_cards() == 0
        assert collection.get_quantity(BOLT) == 0

    def test_add_card_stacks(self) -> None:
        collection = Collection()
        collection.add_card(BOLT, 2)
        collection.add_card(BOLT, 2)
        assert collection.get_quantity(BOLT) == 4


class TestMissingWildcardCount:
    def test_nothing_owned(self, card_db: CardDatabase) -> None:
        deck = _deck([(BOLT, 4)])
        assert missing_wildcard_count(deck, BOLT, False, Collection(), card_db) == 4

    def test_partly_owned(self, card_db: CardDatabase) -> None:
        deck = _deck([(SHEOLDRED, 4)])
        collection = Collection({SHEOLDRED: 1})
        assert missing_wildcard_count(deck, SHEOLDRED, False, collection, card_db) == 3

    def test_owning_more_than_needed(self, card_db: CardDatabase) -> None:
        deck = _deck([(BOLT, 2)])
        collection = Collection({BOLT: 4})
        assert missing_wildcard_count(deck, BOLT, False, collection, card_db) == 0

    def test_need_capped_at_four(self, card_db: CardDatabase) -> None:
        deck = _deck([(BOLT, 7)])
        assert missing_wildcard_count(deck, BOLT, False, Collection(), card_db) == 4

    def test_basic_lands_need_nothing(self, card_db: CardDatabase) -> None:
        deck = _deck([(MOUNTAIN, 20)])
        assert missing_wildcard_count(deck, MOUNTAIN, False, Collection(), card_db) == 0

    def test_unknown_card_needs_nothing(self, card_db: CardDatabase) -> None:
        deck = _deck([(999999, 4)])
        assert missing_wildcard_count(deck, 999999, False, Collection(), card_db) == 0

    def test_reprints_count_as_owned(self, card_db: CardDatabase) -> None:
        deck = _deck([(BOLAS_MED, 2)])
        collection = Collection({BOLAS_WAR: 1})
        assert missing_wildcard_count(deck, BOLAS_MED, False, collection, card_db) == 1

    def test_sideboard_after_mainboard(self, card_db: CardDatabase) -> None:
        deck = _deck([(COUNTERSPELL, 2)], [(COUNTERSPELL, 3)])
        collection = Collection({COUNTERSPELL: 4})

        assert missing_wildcard_count(deck, COUNTERSPELL, False, collection, card_db) == 0
        assert missing_wildcard_count(deck, COUNTERSPELL, True, collection, card_db) == 1

    def test_accepts_live_deck_snapshot(self, card_db: CardDatabase) -> None:
        deck = Deck(_deck([(BOLT, 3)]), card_db=card_db)
        snapshot = deck.get_save_raw()
        assert missing_wildcard_count(snapshot, BOLT, False, Collection(), card_db) == 3


class TestDeckWildcards:
    def test_deck_missing_wildcards(
        self, internal_record: dict[str, Any], card_db: CardDatabase
    ) -> None:
        deck = Deck(internal_record, card_db=card_db)
        shortfall = WildcardShortfall(Collection({BOLT: 2}), card_db)

        missing = deck.get_missing_wildcards(shortfall)

        assert missing == {
            "rare": 0,
            "common": 2,
            "uncommon": 3,
            "mythic": 2,
            "token": 0,
            "land": 0,
        }

    def test_wildcard_cost_from_missing(
        self, internal_record: dict[str, Any], card_db: CardDatabase
    ) -> None:
        deck = Deck(internal_record, card_db=card_db)
        missing = deck.get_missing_wildcards(WildcardShortfall(Collection(), card_db))

        cost = WildcardCost.from_missing(missing)

        assert cost == WildcardCost(common=4, uncommon=3, rare=0, mythic=2)
        assert cost.total() == 9


class TestWildcardCost:
    def test_total(self) -> None:
        cost = WildcardCost(common=4, uncommon=8, rare=12, mythic=2)
        assert cost.total() == 26

    def test_remaining_spends_owned_wildcards(self) -> None:
        cost = WildcardCost(common=4, rare=3, mythic=1)

        remaining = cost.remaining({"rare": 1, "mythic": 5})

        assert remaining == WildcardCost(common=4, rare=2, mythic=0)

    def test_boosters(self) -> None:
        assert WildcardCost(rare=2).boosters() == pytest.approx(11.44)

    def test_boosters_with_collection_wildcards(self) -> None:
        collection = Collection(wildcards={"rare": 1})
        assert WildcardCost(rare=2).boosters(collection.wildcards) == pytest.approx(5.72)


class TestEstimateBoosterCount:
    def test_slowest_rarity_wins(self) -> None:
        assert estimate_booster_count({"rare": 4, "mythic": 1}) == pytest.approx(22.88)

    def test_short_keys(self) -> None:
        assert estimate_booster_count({"m": 2}) == pytest.approx(26.48)

    def test_owned_wildcards_lower_estimate(self) -> None:
        missing = {"rare": 4, "mythic": 1}

        estimate = estimate_booster_count(missing, {"rare": 2})

        assert estimate == pytest.approx(13.24)
        assert estimate < estimate_booster_count(missing)

    def test_excess_owned_wildcards_clamp_to_zero(self) -> None:
        assert estimate_booster_count({"rare": 2, "c": 3}, {"rare": 10, "c": 5}) == 0.0

    def test_nothing_missing(self) -> None:
        assert estimate_booster_count({}) == 0.0
        assert estimate_booster_count({"token": 3, "land": 2}) == 0.0
