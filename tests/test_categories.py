"""Tests for category lifecycle: create, rename, cascade delete."""

from fastapi import status

from app.core.errors import NotFoundError, ValidationError
from app.models.full_course_selection import FullCourseSelection
from app.services import categories as category_service
from app.services.full_course import FullCourseStore


def test_create_category_generates_id(gateway):
    result = category_service.create_category(gateway, "  Curry  ")

    assert result.success
    assert result.value.id
    assert result.value.name == "Curry"
    assert result.value.image_url is None


def test_create_category_requires_name(gateway):
    result = category_service.create_category(gateway, "   ")

    assert result.success is False
    assert isinstance(result.error, ValidationError)


def test_rename_missing_category(gateway):
    result = category_service.rename_category(gateway, "nope", "Udon")

    assert isinstance(result.error, NotFoundError)


def test_delete_cascades_items_and_clears_slots(gateway, make_category, make_item, db_session):
    make_category("cat-c")
    make_category("cat-keep")
    make_item("c1", "cat-c", 4.0)
    make_item("c2", "cat-c", 3.0)
    make_item("k1", "cat-keep", 4.5)
    store = FullCourseStore(gateway, "default")
    store.set_all_slots({"main": "c1", "dessert": "c2", "drink": "k1"})

    result = category_service.delete_category(gateway, "cat-c", "default")

    assert result.success
    assert sorted(result.value.deleted_item_ids) == ["c1", "c2"]
    assert result.value.cleared_slot_keys == ["dessert", "main"]
    assert gateway.get_category("cat-c") is None
    assert gateway.get_item("c1") is None
    assert gateway.get_item("c2") is None
    assert gateway.get_item("k1") is not None
    assignments = store.get_assignments().value
    assert assignments["main"] is None
    assert assignments["dessert"] is None
    assert assignments["drink"] == "k1"
    # Cleared slots keep their row, pointing at nothing
    assert db_session.query(FullCourseSelection).filter(FullCourseSelection.slot_key == "main").count() == 1


def test_delete_missing_category(gateway):
    result = category_service.delete_category(gateway, "nope", "default")

    assert isinstance(result.error, NotFoundError)


# --- endpoints ---


def test_create_and_list_categories(client):
    response = client.post("/api/v1/categories", json={"name": "Ramen"})
    assert response.status_code == status.HTTP_201_CREATED
    created = response.json()
    assert created["name"] == "Ramen"

    response = client.get("/api/v1/categories")
    assert response.status_code == status.HTTP_200_OK
    assert [c["id"] for c in response.json()] == [created["id"]]


def test_create_category_with_client_id(client):
    response = client.post("/api/v1/categories", json={"id": "cat-123", "name": "Soba"})
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["id"] == "cat-123"


def test_duplicate_category_id_is_conflict(client):
    client.post("/api/v1/categories", json={"id": "cat-123", "name": "Soba"})
    response = client.post("/api/v1/categories", json={"id": "cat-123", "name": "Soba again"})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"]["error_type"] == "conflict"


def test_rename_category_endpoint(seeded_client):
    response = seeded_client.patch("/api/v1/categories/cat-ramen", json={"name": "Noodles"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Noodles"


def test_rename_unknown_category_endpoint(client):
    response = client.patch("/api/v1/categories/nope", json={"name": "Noodles"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_category_endpoint(seeded_client):
    response = seeded_client.delete("/api/v1/categories/cat-ramen")
    assert response.status_code == status.HTTP_204_NO_CONTENT

    data = seeded_client.get("/api/v1/initial-data").json()
    assert "cat-ramen" not in [c["id"] for c in data["categories"]]
    assert not [i for i in data["items"] if i["category_id"] == "cat-ramen"]
    assert data["full_course"]["main"] is None
    assert data["full_course"]["dessert"] == "item-dessert-1"


def test_category_ranking_endpoint(seeded_client):
    response = seeded_client.get("/api/v1/categories/cat-ramen/ranking")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [i["score"] for i in data] == [4.92, 4.60, 4.40]
    assert [i["rank"] for i in data] == [1, 2, 3]


def test_category_ranking_unknown_category(client):
    response = client.get("/api/v1/categories/nope/ranking")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_recalculate_endpoint(seeded_client, seeded_db):
    from app.models.ranking_item import RankingItem

    seeded_db.query(RankingItem).filter(RankingItem.id == "item-sushi-2").update({"score": 4.99})
    seeded_db.commit()

    response = seeded_client.post("/api/v1/categories/cat-sushi/recalculate")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True
    assert data["status"] == "success"
    assert data["ranks"] == {"item-sushi-2": 1, "item-sushi-1": 2}
    assert data["image_url"] == "https://images.example.com/salmon.jpg"


def test_recalculate_endpoint_reports_error_type_of_failure(seeded_client):
    from unittest.mock import patch

    from app.core.errors import TransportError

    with patch(
        "app.repositories.sql_gateway.SqlRankingGateway.set_category_representative_image",
        side_effect=TransportError("timeout"),
    ):
        response = seeded_client.post("/api/v1/categories/cat-ramen/recalculate")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is False
    assert data["status"] == "partial"
    assert data["error_type"] == "transport"


def test_list_categories_does_not_load_items(seeded_client):
    from unittest.mock import patch

    with patch(
        "app.repositories.sql_gateway.SqlRankingGateway.list_all_categories_and_items"
    ) as bulk_read:
        response = seeded_client.get("/api/v1/categories")

    assert response.status_code == status.HTTP_200_OK
    assert {c["id"] for c in response.json()} == {"cat-ramen", "cat-sushi", "cat-dessert"}
    bulk_read.assert_not_called()
