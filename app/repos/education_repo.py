from sqlalchemy.orm import Session

from app.models.education import Education

DEFAULT_EDUCATIONS = [
    ("EDU001", "Software Development"),
    ("EDU002", "Data Science & AI"),
    ("EDU003", "Creative Technologies"),
]


def create(db: Session, education_id: str, name: str) -> Education:
    education = Education(id=education_id, name=name)
    db.add(education)
    db.commit()
    db.refresh(education)
    return education


def get_all(db: Session) -> list[Education]:
    return db.query(Education).order_by(Education.name).all()


def get_by_id(db: Session, education_id: str) -> Education | None:
    return db.query(Education).filter(Education.id == education_id).first()


def seed_default_educations(db: Session) -> tuple[list[Education], int]:
    """
    Seed the default educations if the table is empty.
    Returns (list of educations, number_created). number_created is 0 if rows already existed.
    """
    existing = get_all(db)
    if existing:
        return existing, 0
    created = [create(db, education_id, name) for education_id, name in DEFAULT_EDUCATIONS]
    return created, len(created)
