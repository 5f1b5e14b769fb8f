import pytest
from sqlalchemy.exc import SQLAlchemyError

from auth.store import CredentialStore
from core.security import Principal
from models.recipe import Recipe, Tag
from recipes.schemas import RecipeCreate
from recipes.service import RecipeService


@pytest.fixture
def cook(db_session):
    user = CredentialStore(db_session).create("cook@example.com", "Cook", "secret1")
    return Principal(user_id=user.id, email=user.email, is_admin=False)


def payload(**extra):
    body = {"title": "Soup"}
    body.update(extra)
    return RecipeCreate.model_validate(body)


def test_submit_commits_tags_and_recipe_together(db_session, cook, monkeypatch):
    commits = []
    real_commit = db_session.commit

    def counting_commit():
        commits.append(1)
        real_commit()

    monkeypatch.setattr(db_session, "commit", counting_commit)
    recipe = RecipeService(db_session).submit(payload(tags=["Vegan", "Quick"]), cook)

    assert len(commits) == 1
    assert recipe.tags == ["Vegan", "Quick"]


def test_failed_submit_leaves_no_orphan_tags(db_session, cook, monkeypatch):
    real_commit = db_session.commit

    def failing_commit():
        if any(isinstance(obj, Recipe) for obj in db_session.new):
            raise SQLAlchemyError("disk full")
        real_commit()

    monkeypatch.setattr(db_session, "commit", failing_commit)
    with pytest.raises(SQLAlchemyError):
        RecipeService(db_session).submit(payload(tags=["Vegan"]), cook)

    db_session.rollback()
    assert db_session.query(Tag).count() == 0
    assert db_session.query(Recipe).count() == 0


def test_submit_reuses_a_tag_created_concurrently(db_session, session_factory, cook, monkeypatch):
    other = session_factory()
    other.add(Tag(name="Vegan"))
    other.commit()
    other.close()

    service = RecipeService(db_session)
    real_find = service._find_tag
    misses = []

    def stale_find(name):
        # The first lookup happens before the other request's commit
        if not misses:
            misses.append(name)
            return None
        return real_find(name)

    monkeypatch.setattr(service, "_find_tag", stale_find)
    recipe = service.submit(payload(tags=["Vegan"]), cook)

    assert misses == ["Vegan"]
    assert recipe.tags == ["Vegan"]
    assert db_session.query(Tag).count() == 1
    assert db_session.query(Recipe).count() == 1


def test_multi_line_text_is_parsed(db_session, cook):
    recipe = RecipeService(db_session).submit(
        payload(ingredients="2 cups flour\n\nsalt\n", steps="Mix\n\n  Bake  \n"),
        cook,
    )

    assert [(i.quantity, i.unit, i.name) for i in recipe.ingredients] == [
        ("2", "cups", "flour"),
        (None, None, "salt"),
    ]
    assert [(s.step_number, s.description) for s in recipe.steps] == [(1, "Mix"), (2, "Bake")]
