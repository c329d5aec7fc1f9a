"""Shared helpers for API tests: isolated in-memory database and authenticated clients."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.core.security import get_token_issuer, hash_password
from app.main import app
from app.models import Base, Post, User
from app.models.user import ROLE_ADMIN, ROLE_USER

DEFAULT_PASSWORD = "secret1"


class ApiTestCase(unittest.TestCase):
    """
    Each test gets a fresh in-memory SQLite database wired into the app via
    dependency override. StaticPool keeps one connection so every session
    (test code and request handlers) sees the same data.
    """

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)
        self.prefix = "/api/v1"

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.engine.dispose()

    def url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    def db(self) -> Session:
        session = self.Session()
        self.addCleanup(session.close)
        return session

    def create_user(
        self,
        name: str = "Ann",
        email: str = "ann@x.com",
        password: str = DEFAULT_PASSWORD,
        role: str = ROLE_USER,
    ) -> str:
        """Insert a user directly and return its id."""
        with self.Session() as db:
            user = User(
                name=name,
                email=email.lower(),
                password_hash=hash_password(password),
                role=role,
            )
            db.add(user)
            db.commit()
            return user.id

    def create_admin(self, name: str = "Root", email: str = "root@x.com") -> str:
        return self.create_user(name=name, email=email, role=ROLE_ADMIN)

    def create_post(
        self,
        author_id: str,
        title: str = "Hello world",
        content: str = "Some long enough content.",
        published: bool = True,
        category: str = "Other",
    ) -> str:
        with self.Session() as db:
            post = Post(
                title=title,
                content=content,
                author_id=author_id,
                published=published,
                category=category,
            )
            db.add(post)
            db.commit()
            return post.id

    def headers_for(self, user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {get_token_issuer().issue(user_id)}"}
