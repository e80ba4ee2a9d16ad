"""
Seed the database with sample categories, items and full-course picks.
Run with: python seed_db.py
"""
from dotenv import load_dotenv

# Load environment variables before the settings object is built
load_dotenv()

from sqlalchemy.orm import Session  # noqa: E402

from app.db.session import SessionLocal, init_db  # noqa: E402
from app.models.category import Category  # noqa: E402
from app.models.ranking_item import RankingItem  # noqa: E402
from app.seed.seed_data import seed_db  # noqa: E402


def main():
    print("Creating tables...")
    init_db()

    db: Session = SessionLocal()
    try:
        seed_db(db)
        print(
            f"Seeded {db.query(Category).count()} categories and "
            f"{db.query(RankingItem).count()} ranking items."
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
