import pytest

from cafe.errors import PermissionDenied, ValidationError


def user_row(db, login):
    return db.execute_query_rows("SELECT password, phoneNum, favItems, type FROM USERS WHERE login=?;", (login,))[0]


def test_update_own_password_and_phone(profile, db, alice):
    profile.update_password(alice, password="n3w'pass")
    profile.update_phone(alice, phone="555-0000")
    assert user_row(db, "alice")[:2] == ["n3w'pass", "555-0000"]


def test_update_prompts_when_value_missing(profile, db, alice, feed):
    feed("typed")
    profile.update_password(alice)
    assert user_row(db, "alice")[0] == "typed"


def test_favorites_are_appended_verbatim(profile, db, alice, capsys):
    assert profile.update_favorites(alice, item="Latte") == ",Latte"
    assert profile.update_favorites(alice, item=" Latte ") == ",Latte, Latte "
    assert user_row(db, "alice")[2] == ",Latte, Latte "
    assert "updated favorite item(s), ,Latte, Latte " in capsys.readouterr().out


def test_customer_cannot_edit_someone_else(profile, db, alice, carol):
    with pytest.raises(PermissionDenied):
        profile.update_password(alice, "carol", "hacked")
    with pytest.raises(PermissionDenied):
        profile.update_favorites(alice, "carol", "Bagel")
    assert user_row(db, "carol")[0] == "pw"


def test_naming_yourself_is_allowed(profile, db, alice):
    profile.update_phone(alice, "alice", "1")
    assert user_row(db, "alice")[1] == "1"


def test_manager_edits_any_user(profile, db, manager, alice):
    profile.update_password(manager, "alice", "reset")
    profile.update_phone(manager, "alice", "555-1111")
    profile.update_favorites(manager, "alice", "Bagel")
    assert user_row(db, "alice")[:3] == ["reset", "555-1111", ",Bagel"]


def test_find_user(profile, manager, alice, capsys):
    assert profile.find_user(manager, "alice") == "alice"
    assert profile.find_user(manager, "nobody") is None
    assert "user not found" in capsys.readouterr().out


def test_find_user_requires_manager(profile, bob):
    with pytest.raises(PermissionDenied):
        profile.find_user(bob, "alice")


def test_reassign_role(profile, db, manager, alice):
    profile.reassign_role(manager, "alice", "Employee")
    assert user_row(db, "alice")[3] == "Employee"


@pytest.mark.parametrize("role", ["employee", "Admin", ""])
def test_reassign_role_rejects_unknown_roles(profile, db, manager, alice, role):
    with pytest.raises(ValidationError):
        profile.reassign_role(manager, "alice", role)
    assert user_row(db, "alice")[3] == "Customer"


@pytest.mark.parametrize("who", ["alice", "bob"])
def test_only_managers_reassign_roles(profile, db, request, carol, who):
    with pytest.raises(PermissionDenied):
        profile.reassign_role(request.getfixturevalue(who), "carol", "Manager")
    assert user_row(db, "carol")[3] == "Customer"
