import os
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure `import jobboard.app...` works regardless of where pytest is run from.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Must be set before importing jobboard.app.config so a developer's .env is ignored.
os.environ["DISABLE_DOTENV"] = "1"

ADMIN_PASSWORD = "Testpass123!"


@pytest.fixture()
def settings(tmp_path: Path):
    from jobboard.app.config import Settings

    return Settings(
        environment="test",
        data_dir=str(tmp_path / "data"),
        secret_key="test-secret-key",
        admin_username="admin",
        admin_email="admin@example.com",
        admin_password=ADMIN_PASSWORD,
        # Minimum bcrypt cost keeps the suite fast.
        bcrypt_rounds=4,
    )


@pytest.fixture()
def app(settings) -> FastAPI:
    from jobboard.app.main import create_app

    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI):
    # Context manager so the lifespan hook creates the bootstrap admin.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def admin_token(client: TestClient) -> str:
    r = client.post("/api/admin/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest.fixture()
def user_token(app: FastAPI) -> str:
    return app.state.tokens.issue("user-1", "user", username="jobseeker")


@pytest.fixture()
def auth_headers():
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture()
def job_payload() -> dict:
    return {
        "title": "Backend Engineer",
        "company": "Acme Corp",
        "location": "Koramangala",
        "salary": "₹12-18 LPA",
        "type": "Full-time",
        "experience": "3-5 years",
        "description": "Build and run the services behind our job board.",
        "requirements": "Python\n\nFastAPI\n  \nPostgreSQL",
        "benefits": "Health insurance\nRemote Fridays",
        "applyLink": "https://acme.example.com/careers/backend",
    }
