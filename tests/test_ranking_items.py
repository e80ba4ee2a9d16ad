"""Tests for saving ranking items and the recalculations they trigger."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from app.core.errors import (
    ConflictError,
    PartialRecalculationError,
    TransportError,
    ValidationError,
)
from app.repositories.gateway import ItemUpsert, RankingGateway
from app.schemas.ranking_item import RankingItemSave
from app.services.ranking import RecalculationResult
from app.services.ranking_items import save_item, validate_item


def _payload(**overrides) -> RankingItemSave:
    data = {
        "id": "item-1",
        "category_id": "cat-a",
        "name": "Tonkotsu Ramen",
        "score": 4.5,
        "eaten_at": date(2026, 3, 1),
        "comment": "rich",
        "image_url": "https://images.example.com/x.jpg",
    }
    data.update(overrides)
    return RankingItemSave(**data)


@pytest.mark.parametrize(
    "overrides",
    [
        {"id": None},
        {"category_id": ""},
        {"name": "   "},
        {"score": None},
        {"eaten_at": None},
    ],
)
def test_incomplete_item_is_rejected_before_any_store_call(overrides):
    gateway = MagicMock(spec=RankingGateway)

    result = save_item(gateway, _payload(**overrides))

    assert result.success is False
    assert result.saved is False
    assert isinstance(result.error, ValidationError)
    gateway.upsert_item.assert_not_called()


@pytest.mark.parametrize("score", ["abc", "", "NaN", 5.01, -0.1, True, [4.5]])
def test_invalid_scores_are_rejected(score):
    with pytest.raises(ValidationError):
        validate_item(_payload(score=score))


def test_numeric_string_score_is_coerced():
    record = validate_item(_payload(score=" 4.25 "))
    assert record.score == 4.25


def test_empty_image_is_stored_as_none():
    record = validate_item(_payload(image_url="", comment=None))
    assert record.image_url is None
    assert record.comment == ""


def test_upsert_failure_skips_recalculation():
    gateway = MagicMock(spec=RankingGateway)
    gateway.upsert_item.side_effect = ConflictError("duplicate key value", code="23505")

    with patch("app.services.ranking_items.recalculate_category") as recalc:
        result = save_item(gateway, _payload(), previous_category_id="cat-b")

    assert result.success is False
    assert result.saved is False
    assert isinstance(result.error, ConflictError)
    recalc.assert_not_called()


def test_new_item_gets_rank_and_sets_category_image(gateway, make_category, make_item):
    make_category("cat-a")
    make_item("old", "cat-a", 4.0, image_url="old.jpg")

    result = save_item(gateway, _payload(score=4.7))

    assert result.success is True
    assert result.saved is True
    assert result.item.rank == 1
    assert [r.category_id for r in result.recalculations] == ["cat-a"]
    assert gateway.get_item("old").rank == 2
    assert gateway.get_category("cat-a").image_url == "https://images.example.com/x.jpg"


def test_update_in_same_category_recalculates_once(gateway, make_category, make_item):
    make_category("cat-a")
    make_item("item-1", "cat-a", 4.9)
    make_item("other", "cat-a", 4.0)

    result = save_item(gateway, _payload(score=3.0), previous_category_id="cat-a")

    assert result.success
    assert [r.category_id for r in result.recalculations] == ["cat-a"]
    assert gateway.get_item("item-1").rank == 2
    assert gateway.get_item("other").rank == 1


def test_moving_item_reranks_both_categories(gateway, make_category, make_item):
    """X (4.5) moves from A [4.8, 4.5, 4.2] to B [4.0]: A ranks [1, 2], B ranks [1, 2] with X first."""
    make_category("cat-a")
    make_category("cat-b")
    make_item("a1", "cat-a", 4.8, image_url="a1.jpg")
    make_item("x", "cat-a", 4.5, image_url="x.jpg")
    make_item("a2", "cat-a", 4.2)
    make_item("b1", "cat-b", 4.0, image_url="b1.jpg")

    result = save_item(
        gateway,
        _payload(id="x", category_id="cat-b", score=4.5, image_url="x.jpg"),
        previous_category_id="cat-a",
    )

    assert result.success
    assert [r.category_id for r in result.recalculations] == ["cat-a", "cat-b"]
    assert [(i.id, i.rank) for i in gateway.list_items_by_category("cat-a")] == [("a1", 1), ("a2", 2)]
    assert [(i.id, i.rank) for i in gateway.list_items_by_category("cat-b")] == [("x", 1), ("b1", 2)]
    assert gateway.get_category("cat-a").image_url == "a1.jpg"
    assert gateway.get_category("cat-b").image_url == "x.jpg"


def test_moving_last_item_out_clears_source_image(gateway, make_category, make_item):
    make_category("cat-a")
    make_category("cat-b")
    make_item("x", "cat-a", 4.5, image_url="x.jpg")
    gateway.set_category_representative_image("cat-a", "x.jpg")

    result = save_item(
        gateway,
        _payload(id="x", category_id="cat-b", image_url="x.jpg"),
        previous_category_id="cat-a",
    )

    assert result.success
    assert gateway.get_category("cat-a").image_url is None
    assert gateway.get_category("cat-b").image_url == "x.jpg"


def test_previous_category_from_payload_is_used(gateway, make_category, make_item):
    make_category("cat-a")
    make_category("cat-b")
    make_item("x", "cat-a", 4.5)

    result = save_item(gateway, _payload(id="x", category_id="cat-b", previous_category_id="cat-a"))

    assert [r.category_id for r in result.recalculations] == ["cat-a", "cat-b"]


def test_move_without_previous_category_still_reranks_source(gateway, make_category, make_item):
    """The source category comes from the stored row when the client leaves it out."""
    make_category("cat-a")
    make_category("cat-b")
    make_item("a1", "cat-a", 4.8, image_url="a1.jpg")
    make_item("x", "cat-a", 4.9, image_url="x.jpg")
    make_item("a2", "cat-a", 4.2)
    save_item(gateway, _payload(id="a1", category_id="cat-a", score=4.8, image_url="a1.jpg"))

    result = save_item(gateway, _payload(id="x", category_id="cat-b", score=4.9, image_url="x.jpg"))

    assert result.success
    assert [r.category_id for r in result.recalculations] == ["cat-a", "cat-b"]
    assert [(i.id, i.rank) for i in gateway.list_items_by_category("cat-a")] == [("a1", 1), ("a2", 2)]
    assert gateway.get_category("cat-a").image_url == "a1.jpg"
    assert gateway.get_category("cat-b").image_url == "x.jpg"


def test_stored_category_wins_over_a_stale_previous_category(gateway, make_category, make_item):
    make_category("cat-a")
    make_category("cat-b")
    make_category("cat-c")
    make_item("x", "cat-a", 4.5)

    result = save_item(gateway, _payload(id="x", category_id="cat-c"), previous_category_id="cat-b")

    assert [r.category_id for r in result.recalculations] == ["cat-a", "cat-c"]


def test_saving_into_missing_category_is_a_conflict(gateway):
    result = save_item(gateway, _payload(category_id="no-such-category"))

    assert result.saved is False
    assert isinstance(result.error, ConflictError)


def test_source_failure_still_recalculates_destination():
    """Both recalculations run; a failure is reported as partial, not as a failed save."""
    gateway = MagicMock(spec=RankingGateway)
    gateway.upsert_item.side_effect = lambda item: ItemUpsert(item=item)
    outcomes = {
        "cat-a": RecalculationResult(category_id="cat-a", status="failed", errors=[TransportError("down")]),
        "cat-b": RecalculationResult(category_id="cat-b"),
    }

    with patch(
        "app.services.ranking_items.recalculate_category",
        side_effect=lambda gw, category_id: outcomes[category_id],
    ) as recalc:
        result = save_item(gateway, _payload(category_id="cat-b"), previous_category_id="cat-a")

    assert [call.args[1] for call in recalc.call_args_list] == ["cat-a", "cat-b"]
    assert result.success is False
    assert result.saved is True
    assert isinstance(result.error, PartialRecalculationError)
    assert "cat-a" in str(result.error)
    assert len(result.error.failures) == 1
