from datetime import date
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.category import Category
from app.models.full_course_selection import FullCourseSelection
from app.models.ranking_item import RankingItem
from app.repositories.sql_gateway import SqlRankingGateway
from app.services.ranking import recalculate_category


def seed_db(db: Session) -> None:
    """Seed the database with sample data."""

    # Clear existing data (optional - comment out if you want to preserve data)
    db.query(FullCourseSelection).delete()
    db.query(RankingItem).delete()
    db.query(Category).delete()
    db.commit()

    # Create Categories
    ramen = Category(id="cat-ramen", name="Ramen")
    sushi = Category(id="cat-sushi", name="Sushi")
    dessert = Category(id="cat-dessert", name="Dessert")
    db.add_all([ramen, sushi, dessert])
    db.commit()

    # Create Ranking Items
    items = [
        RankingItem(
            id="item-ramen-1",
            category_id=ramen.id,
            name="Tonkotsu Ramen",
            score=4.92,
            eaten_at=date(2026, 1, 10),
            comment="Rich broth, thin noodles",
            image_url="https://images.example.com/tonkotsu.jpg",
        ),
        RankingItem(
            id="item-ramen-2",
            category_id=ramen.id,
            name="Shoyu Ramen",
            score=4.60,
            eaten_at=date(2026, 1, 12),
            comment="",
            image_url="https://images.example.com/shoyu.jpg",
        ),
        RankingItem(
            id="item-ramen-3",
            category_id=ramen.id,
            name="Miso Ramen",
            score=4.40,
            eaten_at=date(2026, 1, 12),
            comment="A bit too salty",
            image_url=None,
        ),
        RankingItem(
            id="item-sushi-1",
            category_id=sushi.id,
            name="Omakase",
            score=4.85,
            eaten_at=date(2026, 1, 20),
            comment="Counter seat",
            image_url=None,
        ),
        RankingItem(
            id="item-sushi-2",
            category_id=sushi.id,
            name="Salmon Nigiri",
            score=3.90,
            eaten_at=date(2026, 2, 2),
            comment="",
            image_url="https://images.example.com/salmon.jpg",
        ),
        RankingItem(
            id="item-dessert-1",
            category_id=dessert.id,
            name="Matcha Parfait",
            score=4.20,
            eaten_at=date(2026, 2, 2),
            comment="",
            image_url="https://images.example.com/parfait.jpg",
        ),
    ]
    db.add_all(items)
    db.commit()

    # Derive ranks and representative images
    gateway = SqlRankingGateway(db)
    for category_id in (ramen.id, sushi.id, dessert.id):
        recalculate_category(gateway, category_id)

    # Full course picks
    db.add_all([
        FullCourseSelection(owner_key=settings.full_course_owner_key, slot_key="main", ranking_item_id="item-ramen-1"),
        FullCourseSelection(owner_key=settings.full_course_owner_key, slot_key="dessert", ranking_item_id="item-dessert-1"),
    ])
    db.commit()
