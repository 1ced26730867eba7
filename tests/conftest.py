import os

# Select the testing config before anything reads APP_ENV
os.environ.setdefault("APP_ENV", "testing")

import pytest

from api import create_app
from models import storage


@pytest.fixture()
def app(tmp_path):
    # Each app gets a fresh in-memory database via storage.reload()
    app = create_app("testing")
    (tmp_path / "index.html").write_text("<html><body>Welcome to Chirpy</body></html>")
    app.config["FILESERVER_ROOT"] = str(tmp_path)
    with app.app_context():
        yield app
    storage.close()


@pytest.fixture()
def client(app):
    return app.test_client()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def create_user(client):
    def _create(email="walt@breakingbad.com", password="04234"):
        res = client.post("/api/users", json={"email": email, "password": password})
        assert res.status_code == 201, res.get_json()
        return res.get_json()

    return _create


@pytest.fixture()
def login(client):
    def _login(email="walt@breakingbad.com", password="04234"):
        res = client.post("/api/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.get_json()
        return res.get_json()

    return _login


@pytest.fixture()
def logged_in(create_user, login):
    """Create a user and log them in; returns the login payload."""
    def _logged_in(email="walt@breakingbad.com", password="04234"):
        create_user(email, password)
        return login(email, password)

    return _logged_in


@pytest.fixture()
def create_chirp(client):
    def _create(token, body="I'm the one who knocks!"):
        res = client.post("/api/chirps", json={"body": body}, headers=bearer(token))
        assert res.status_code == 201, res.get_json()
        return res.get_json()

    return _create
