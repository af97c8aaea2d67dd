"""
Create missing tables and seed the default educations.
Usage: python -m app.scripts.seed_educations
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from app.database import SessionLocal, ensure_tables_exist
from app.repos.education_repo import seed_default_educations


def main():
    ensure_tables_exist()
    db = SessionLocal()
    try:
        educations, created = seed_default_educations(db)
        if created:
            print(f"Seeded {created} educations.")
        else:
            print(f"Educations already present ({len(educations)}); nothing seeded.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
