"""Pytest fixtures shared by the newsdesk tests."""

import itertools
import os
from datetime import datetime

# Settings are read at import time, so the environment must be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient

from newsdesk.api.deps import get_db
from newsdesk.core.security import create_access_token, get_password_hash
from newsdesk.db.base_class import Base
from newsdesk.db.session import SessionLocal, engine
from newsdesk.models import AccountRole, Category, NewsArticle, NewsStatus, SystemAccount, Tag

DEFAULT_PASSWORD = "Secret#123"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    from main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_account(db):
    counter = itertools.count(1)

    def _make(role=AccountRole.STAFF, name=None, email=None, password=DEFAULT_PASSWORD):
        n = next(counter)
        account = SystemAccount(
            name=name or f"Account {n}",
            email=email or f"account{n}@example.com",
            hashed_password=get_password_hash(password),
            role=int(role),
        )
        db.add(account)
        db.commit()
        db.refresh(account)
        return account

    return _make


@pytest.fixture
def make_category(db):
    def _make(name, parent=None, is_active=True, description=None):
        category = Category(
            name=name,
            description=description,
            parent_id=parent.id if parent is not None else None,
            is_active=is_active,
        )
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make


@pytest.fixture
def make_tag(db):
    def _make(name, note=None):
        tag = Tag(name=name, note=note)
        db.add(tag)
        db.commit()
        db.refresh(tag)
        return tag

    return _make


@pytest.fixture
def make_article(db):
    counter = itertools.count(1)

    def _make(author, category, title=None, status=NewsStatus.ACTIVE, created_date=None, tags=(), **fields):
        n = next(counter)
        article = NewsArticle(
            title=title or f"Article {n}",
            content=fields.pop("content", f"Content of article {n}"),
            category_id=category.id,
            created_by_id=author.id,
            status=int(status),
            created_date=created_date or datetime(2024, 5, 1, 9, 0, n % 60),
            **fields,
        )
        article.tags = list(tags)
        db.add(article)
        db.commit()
        db.refresh(article)
        return article

    return _make


@pytest.fixture
def auth_headers():
    def _headers(account):
        token = create_access_token(account.id, AccountRole(account.role).label, email=account.email)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin(make_account):
    return make_account(role=AccountRole.ADMIN, name="Admin", email="admin@example.com")


@pytest.fixture
def staff(make_account):
    return make_account(role=AccountRole.STAFF, name="Staff", email="staff@example.com")
