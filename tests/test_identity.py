import pytest

from jobboard.app.config import DEV_ADMIN_PASSWORD
from jobboard.app.database import JsonFileStore
from jobboard.app.services.identity import IdentityService
from jobboard.app.utils import security
from jobboard.app.utils.error_handlers import AuthFailure


def _identity(store, password="s3cret-pass"):
    return IdentityService(
        store,
        admin_username="admin",
        admin_email="admin@example.com",
        admin_password=password,
        bcrypt_rounds=4,
    )


@pytest.fixture()
def store(tmp_path):
    return JsonFileStore(tmp_path)


def test_bootstrap_creates_single_admin(store):
    admin = _identity(store).ensure_bootstrap_admin()
    users = store.load("users")
    assert len(users) == 1
    assert users[0]["id"] == admin.id
    assert users[0]["role"] == "admin"
    assert users[0]["username"] == "admin"
    assert users[0]["createdAt"]


def test_bootstrap_stores_hash_not_plaintext(store):
    _identity(store).ensure_bootstrap_admin()
    stored = store.load("users")[0]["password"]
    assert stored != "s3cret-pass"
    assert stored.startswith("$2")


def test_bootstrap_first_run_writes_users_once(store, monkeypatch):
    writes = []
    real_write = store._write_atomic

    def recording_write(path, records, collection):
        writes.append(collection)
        real_write(path, records, collection)

    monkeypatch.setattr(store, "_write_atomic", recording_write)

    _identity(store).ensure_bootstrap_admin()
    assert writes == ["users"]


def test_bootstrap_is_idempotent(store, monkeypatch):
    identity = _identity(store)
    first = identity.ensure_bootstrap_admin()

    saves = []
    real_save = store.save
    monkeypatch.setattr(store, "save", lambda *args: saves.append(args) or real_save(*args))

    second = identity.ensure_bootstrap_admin()
    assert second.id == first.id
    assert saves == []
    assert [u["role"] for u in store.load("users")] == ["admin"]


def test_bootstrap_skips_when_any_admin_exists(store):
    store.save("users", [{
        "id": "existing",
        "username": "root",
        "email": "root@example.com",
        "password": "x",
        "role": "admin",
        "createdAt": "2024-01-01T00:00:00+00:00",
    }])
    admin = _identity(store).ensure_bootstrap_admin()
    assert admin.id == "existing"
    assert len(store.load("users")) == 1


def test_bootstrap_warns_on_dev_password(store, caplog):
    with caplog.at_level("WARNING"):
        _identity(store, password=DEV_ADMIN_PASSWORD).ensure_bootstrap_admin()
    assert "well-known development password" in caplog.text


def test_verify_credentials(store):
    identity = _identity(store)
    identity.ensure_bootstrap_admin()
    user = identity.verify_credentials("admin", "s3cret-pass")
    assert user.role == "admin"
    assert user.public() == {"username": "admin", "role": "admin"}


@pytest.mark.parametrize("username, password", [
    ("admin", "wrong"),
    ("ghost", "s3cret-pass"),
    ("", "s3cret-pass"),
    ("admin", ""),
])
def test_verify_credentials_failures_are_generic(store, username, password):
    identity = _identity(store)
    identity.ensure_bootstrap_admin()
    with pytest.raises(AuthFailure) as exc:
        identity.verify_credentials(username, password)
    assert exc.value.message == "Invalid credentials"
    assert exc.value.status_code == 400


def test_get_user(store):
    identity = _identity(store)
    admin = identity.ensure_bootstrap_admin()
    assert identity.get_user(admin.id).username == "admin"
    assert identity.get_user("missing") is None


@pytest.mark.parametrize("rounds", [4, 6])
def test_unknown_user_is_checked_at_the_configured_cost(store, monkeypatch, rounds):
    identity = IdentityService(
        store,
        admin_username="admin",
        admin_email="admin@example.com",
        admin_password="s3cret-pass",
        bcrypt_rounds=rounds,
    )
    admin_hash = identity.ensure_bootstrap_admin().password

    checked = []
    real_checkpw = security.bcrypt.checkpw

    def recording_checkpw(password, hashed):
        checked.append(hashed.decode("utf-8"))
        return real_checkpw(password, hashed)

    monkeypatch.setattr(security.bcrypt, "checkpw", recording_checkpw)

    for username in ("admin", "ghost"):
        with pytest.raises(AuthFailure):
            identity.verify_credentials(username, "wrong-password")

    # "$2b$NN$": same algorithm and cost for known and unknown usernames.
    assert len(checked) == 2
    assert checked[0] == admin_hash
    assert checked[1] != admin_hash
    assert checked[1][:7] == admin_hash[:7] == f"$2b${rounds:02d}$"
