import app.repos.education_repo as erepo
import app.repos.user_repo as urepo
from app.models.user import UserRole


def test_seed_default_educations_is_idempotent(db_session):
    educations, created = erepo.seed_default_educations(db_session)
    assert created == 0
    assert {e.name for e in educations} == {name for _, name in erepo.DEFAULT_EDUCATIONS}
    assert erepo.get_by_id(db_session, "EDU001").name == "Software Development"
    assert erepo.get_by_id(db_session, "missing") is None


def test_user_repo_create_always_admin(db_session):
    user = urepo.create(db_session, "someone", "s@example.com", "password123")
    assert user.role is UserRole.ADMIN
    assert user.password_hash != "password123"
    assert urepo.get_by_email(db_session, "s@example.com").id == user.id
    assert [u.id for u in urepo.get_all_users(db_session)] == [user.id]


def test_user_repo_set_password_hash_needs_commit(db_session):
    user = urepo.create(db_session, "someone", "s@example.com", "password123")
    urepo.set_password_hash(db_session, user, "new-hash")
    db_session.rollback()
    assert urepo.get_by_id(db_session, user.id).password_hash != "new-hash"


def test_user_email_lookup_ignores_case(db_session):
    user = urepo.create(db_session, "someone", "Some.One@Example.com", "password123")
    assert urepo.get_by_email(db_session, "some.one@example.com").id == user.id
    assert urepo.get_by_email(db_session, "SOME.ONE@EXAMPLE.COM").id == user.id
    assert urepo.get_by_email(db_session, "other@example.com") is None
