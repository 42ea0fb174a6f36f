"""Session manager tests."""

import pytest

from accounts.exceptions import (
    AuthError,
    DuplicateUsername,
    InvalidPassword,
    NotFoundError,
    UnsupportedPassword,
    UserNotFound,
    ValidationError,
)
from accounts.models.user import User


def test_register_then_login(manager, tokens):
    """Test that a registered user can log in and the token names them."""
    user = manager.register("alice", "pw1", "Alice")

    token, logged_in = manager.login("alice", "pw1")

    assert logged_in.id == user.id
    claims = tokens.validate(token)
    assert claims["username"] == "alice"
    assert claims["id"] == user.id
    assert claims["name"] == "Alice"


def test_register_assigns_id_and_hashes_password(manager, hasher):
    """Test that the store assigns an id and only the hash is stored."""
    user = manager.register("alice", "pw1", "Alice")

    assert user.id
    assert user.password_hash != "pw1"
    assert hasher.verify("pw1", user.password_hash)


def test_register_without_name(manager):
    """Test that the display name is optional."""
    user = manager.register("bob", "pw1")
    assert user.name is None


def test_register_duplicate_username(manager, db):
    """Test that a taken username is rejected without touching the store."""
    original = manager.register("alice", "pw1", "Alice")

    with pytest.raises(DuplicateUsername) as exc_info:
        manager.register("alice", "pw2", "Alice2")

    assert isinstance(exc_info.value, ValidationError)
    users = db.query(User).all()
    assert len(users) == 1
    assert users[0].name == "Alice"
    assert users[0].password_hash == original.password_hash


def test_register_race_caught_by_unique_index(manager, db, hasher):
    """Test that an insert colliding on username still reports a duplicate."""
    manager.register("alice", "pw1", "Alice")

    with pytest.raises(DuplicateUsername):
        manager.users.insert("alice", hasher.hash("pw2"), "Other")

    assert db.query(User).count() == 1


def test_login_unknown_username(manager):
    """Test login with a username that was never registered."""
    with pytest.raises(UserNotFound) as exc_info:
        manager.login("nobody", "pw1")
    assert isinstance(exc_info.value, NotFoundError)


def test_login_wrong_password(manager):
    """Test login with a wrong password."""
    manager.register("alice", "pw1", "Alice")

    with pytest.raises(InvalidPassword) as exc_info:
        manager.login("alice", "wrong")
    assert isinstance(exc_info.value, AuthError)


def test_login_errors_are_distinguishable(manager):
    """Test that unknown user and wrong password produce different errors."""
    manager.register("alice", "pw1", "Alice")

    with pytest.raises(UserNotFound) as unknown:
        manager.login("alicia", "pw1")
    with pytest.raises(InvalidPassword) as wrong:
        manager.login("alice", "pw2")

    assert str(unknown.value) == "User not found"
    assert str(wrong.value) == "Invalid password"


def test_get_by_id(manager):
    """Test fetching a user by id."""
    user = manager.register("alice", "pw1", "Alice")
    assert manager.get_by_id(user.id).username == "alice"


def test_get_by_id_missing(manager):
    """Test fetching an unknown id."""
    with pytest.raises(UserNotFound):
        manager.get_by_id("does-not-exist")


def test_update_name_only(manager):
    """Test that updating the name leaves the username alone."""
    user = manager.register("alice", "pw1", "Alice")

    updated = manager.update_by_id(user.id, name="Alice Liddell")

    assert updated.name == "Alice Liddell"
    assert updated.username == "alice"


def test_update_username_only(manager):
    """Test that updating the username leaves the name alone."""
    user = manager.register("alice", "pw1", "Alice")

    updated = manager.update_by_id(user.id, username="alice2")

    assert updated.username == "alice2"
    assert updated.name == "Alice"


def test_update_nothing(manager):
    """Test that absent or empty fields leave the record unchanged."""
    user = manager.register("alice", "pw1", "Alice")

    unchanged = manager.update_by_id(user.id)
    assert (unchanged.username, unchanged.name) == ("alice", "Alice")

    unchanged = manager.update_by_id(user.id, username="", name="")
    assert (unchanged.username, unchanged.name) == ("alice", "Alice")


def test_update_keeps_password(manager):
    """Test that the password still works after a username change."""
    user = manager.register("alice", "pw1", "Alice")
    manager.update_by_id(user.id, username="alice2")

    token, _ = manager.login("alice2", "pw1")
    assert token


def test_update_missing(manager):
    """Test updating an unknown id."""
    with pytest.raises(UserNotFound):
        manager.update_by_id("does-not-exist", name="Ghost")


def test_update_to_taken_username(manager):
    """Test that renaming onto another user's username is rejected."""
    manager.register("alice", "pw1", "Alice")
    bob = manager.register("bob", "pw2", "Bob")

    with pytest.raises(DuplicateUsername):
        manager.update_by_id(bob.id, username="alice")

    assert manager.get_by_id(bob.id).username == "bob"


def test_delete_by_id(manager, db):
    """Test deleting a user."""
    user = manager.register("alice", "pw1", "Alice")

    manager.delete_by_id(user.id)

    assert db.query(User).count() == 0
    with pytest.raises(UserNotFound):
        manager.get_by_id(user.id)


def test_delete_missing(manager, db):
    """Test that deleting an unknown id changes nothing."""
    manager.register("alice", "pw1", "Alice")

    with pytest.raises(UserNotFound):
        manager.delete_by_id("does-not-exist")

    assert db.query(User).count() == 1


def test_list_all(manager):
    """Test listing every user."""
    assert manager.list_all() == []

    manager.register("alice", "pw1", "Alice")
    manager.register("bob", "pw2", "Bob")

    assert sorted(user.username for user in manager.list_all()) == ["alice", "bob"]


def test_register_password_too_long(manager, db):
    """Test that a password past bcrypt's limit is refused before storing anything."""
    with pytest.raises(UnsupportedPassword) as exc_info:
        manager.register("long", "x" * 72 + "A")

    assert isinstance(exc_info.value, ValidationError)
    assert db.query(User).count() == 0


def test_login_long_wrong_password(manager):
    """Test that only the exact password logs in, even past 72 bytes."""
    manager.register("long", "x" * 72)

    with pytest.raises(InvalidPassword):
        manager.login("long", "x" * 72 + "DIFFERENT")
