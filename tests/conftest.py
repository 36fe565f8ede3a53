import pytest

from cafe.accounts import AccountManager, Role, Session
from cafe.catalog import MenuCatalog
from cafe.commands import Navigator
from cafe.database import DatabaseManager
from cafe.orders import OrderManager
from cafe.profile import ProfileManager


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    yield manager
    manager.close()


@pytest.fixture
def feed(monkeypatch):
    """replace input() with a fixed script of lines; running dry raises EOFError"""
    def _feed(*lines: str):
        script = iter(lines)

        def fake_input(prompt=""):
            try:
                return next(script)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)
    return _feed


@pytest.fixture
def accounts(db):
    return AccountManager(db)


def _user(accounts: AccountManager, login: str, role: Role) -> Session:
    accounts.register(login, "pw", "555-0100")
    if role is not Role.CUSTOMER:
        accounts.db.execute_statement("UPDATE USERS SET type=? WHERE login=?;", (role.value, login))
    return Session(login, role)


@pytest.fixture
def alice(accounts):
    return _user(accounts, "alice", Role.CUSTOMER)


@pytest.fixture
def carol(accounts):
    return _user(accounts, "carol", Role.CUSTOMER)


@pytest.fixture
def bob(accounts):
    return _user(accounts, "bob", Role.EMPLOYEE)


@pytest.fixture
def manager():
    # seeded default account
    return Session("admin", Role.MANAGER)


@pytest.fixture
def catalog(db):
    return MenuCatalog(db)


@pytest.fixture
def profile(db):
    return ProfileManager(db)


@pytest.fixture
def orders(db):
    return OrderManager(db)


@pytest.fixture
def navigator(accounts, catalog, profile, orders):
    return Navigator(accounts, catalog, profile, orders)
