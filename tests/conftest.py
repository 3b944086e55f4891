# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase client for an in-memory fake
# - Signs test JWTs with the HS256 secret
# =============================================================================

import os
import time
import uuid

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("PUBLIC_BASE_URL", "https://carteira.example.com")
os.environ.setdefault("SLUG_CHECK_DEBOUNCE_MS", "50")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from jose import jwt

from lib.supabase_client import SupabaseClient
from tests.fakes import FakeSupabase


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """In-memory Supabase with the unique constraints the schema declares."""
    db = FakeSupabase(unique={"profiles": ["slug", "user_id"], "funcoes_liturgicas": ["nome"]})
    SupabaseClient._instance = db
    yield db
    SupabaseClient._instance = None


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
def other_user_id():
    return str(uuid.uuid4())


def make_token(user_id: str, expires_in: int = 3600, secret: str | None = None) -> str:
    now = int(time.time())
    return jwt.encode(
        {
            "sub": user_id,
            "email": "fiel@example.com",
            "aud": "authenticated",
            "iat": now,
            "exp": now + expires_in,
            "role": "authenticated",
        },
        secret or os.environ["SUPABASE_JWT_SECRET"],
        algorithm="HS256",
    )


@pytest.fixture
def token(user_id):
    return make_token(user_id)


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(fake_db):
    """TestClient wired to the fake database."""
    from fastapi.testclient import TestClient

    from app.main import app

    app.state.sharer = None
    return TestClient(app)


@pytest.fixture
def profile_row(user_id):
    """A stored profile row as PostgREST returns it."""
    return {
        "user_id": user_id,
        "slug": "sao-joao",
        "full_name": "João da Silva",
        "civil_status": "padre",
        "parish": "Paróquia São José",
        "pastorals": ["Liturgia"],
        "baptism_date": "1990-06-24",
        "priest_name": "Pe. Antônio",
        "patron_saint": "São João Batista",
        "saint_image_url": "",
        "inspiration_quote": "Fazei tudo o que Ele vos disser",
        "quote_author": "Maria",
        "bible_passage": "Jo 2,5",
        "sacraments": ["batismo", "crisma"],
        "profile_image_url": "",
        "cover_image_url": "",
        "primary_color": "#8B4513",
        "secondary_color": "#D4AF37",
        "background_type": "gradient",
        "background_value": "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
        "background_overlay_opacity": 0.3,
        "music_embeds": [
            {"type": "youtube", "url": "https://youtu.be/dQw4w9WgXcQ", "title": "Hino"},
            {"type": "spotify", "url": "https://example.com/nope", "title": "Quebrado"},
        ],
    }
