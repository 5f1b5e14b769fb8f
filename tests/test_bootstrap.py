from auth.bootstrap import seed_roles_and_admin
from auth.store import CredentialStore
from models.user import ROLE_ADMIN, ROLE_USER, Role, User


def test_seed_creates_roles_and_admin(db_session):
    admin = seed_roles_and_admin(db_session, "root@recipes.test", "admin123", "Root")

    assert admin is not None
    assert {r.name for r in db_session.query(Role).all()} == {ROLE_USER, ROLE_ADMIN}
    assert CredentialStore(db_session).roles_of(admin) == {ROLE_ADMIN}


def test_seed_is_idempotent(db_session):
    first = seed_roles_and_admin(db_session, "root@recipes.test", "admin123", "Root")
    first_id = first.id
    second = seed_roles_and_admin(db_session, "root@recipes.test", "different9", "Root")

    assert second.id == first_id
    assert db_session.query(User).count() == 1
    assert db_session.query(Role).count() == 2
    # The existing account is never overwritten
    store = CredentialStore(db_session)
    assert store.verify_password(second, "admin123")


def test_seed_without_configured_admin_only_ensures_roles(db_session):
    assert seed_roles_and_admin(db_session, "", "") is None
    assert db_session.query(Role).count() == 2
    assert db_session.query(User).count() == 0


def test_seed_rejects_weak_admin_password(db_session):
    assert seed_roles_and_admin(db_session, "root@recipes.test", "nodigits", "Root") is None
    assert db_session.query(User).count() == 0


def test_seed_promotes_existing_account(db_session):
    store = CredentialStore(db_session)
    user = store.create("root@recipes.test", "Root", "secret1")
    store.assign_role(user, ROLE_USER)

    admin = seed_roles_and_admin(db_session, "ROOT@recipes.test", "ignored1", "Root")

    assert admin.id == user.id
    assert store.roles_of(admin) == {ROLE_USER, ROLE_ADMIN}
