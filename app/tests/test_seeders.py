import uuid

from app.core import settings
from app.database import SessionLocal
from app.database.seeders import seed_admin
from app.models import User


def test_seed_admin_is_idempotent():
    db = SessionLocal()
    try:
        first = seed_admin(db)
        second = seed_admin(db)
        assert first.user_id == second.user_id
        assert db.query(User).filter(User.user_email == settings.ADMIN_EMAIL).count() == 1
    finally:
        db.close()


def test_seed_admin_promotes_existing_user(client, monkeypatch):
    email = f"owner-{uuid.uuid4().hex[:10]}@fleet.io"
    assert client.post("/api/v1/auth/register", json={"email": email, "password": "password1"}).status_code == 201
    monkeypatch.setattr(settings, "ADMIN_EMAIL", email)

    db = SessionLocal()
    try:
        admin = seed_admin(db)
        assert admin.user_role == "ADMIN"
        assert db.query(User).filter(User.user_email == email).count() == 1
    finally:
        db.close()
