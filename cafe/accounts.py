import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from termcolor import cprint, colored

from cafe.database import DatabaseManager
from cafe.errors import PermissionDenied, ValidationError
from cafe.helpers import ask

log = logging.getLogger(__name__)


class Role(Enum):
    """account type stored in USERS.type"""
    CUSTOMER = "Customer"
    EMPLOYEE = "Employee"
    MANAGER = "Manager"

    @classmethod
    def parse(cls, text: str) -> "Role":
        """exact (case sensitive) match against the three stored values"""
        try:
            return cls(text)
        except ValueError:
            raise ValidationError(f"invalid role {text!r} (expected Customer, Employee or Manager)") from None


STAFF = (Role.EMPLOYEE, Role.MANAGER)


@dataclass(frozen=True)
class Session:
    """the logged-in user; handed to every workflow call"""
    login: str
    role: Role

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF

    @property
    def is_manager(self) -> bool:
        return self.role is Role.MANAGER

    def require(self, *roles: Role):
        """guard for role-gated actions"""
        if self.role not in roles:
            allowed = "/".join(r.value.lower() for r in roles)
            raise PermissionDenied(f"{allowed} privileges required")


# credential checking
class CredentialVerifier(ABC):
    """compare a supplied password with what USERS.password holds"""

    @abstractmethod
    def verify(self, supplied: str, stored: str) -> bool: ...


class PlaintextVerifier(CredentialVerifier):
    """exact byte match; passwords are stored unhashed"""

    def verify(self, supplied: str, stored: str) -> bool:
        return supplied == stored


# accounts/auth
class AccountManager:
    """signup and login; produces Session objects, holds none itself"""

    def __init__(self, db: DatabaseManager, verifier: CredentialVerifier | None = None):
        self.db = db
        self.verifier = verifier or PlaintextVerifier()

    def user_exists(self, login: str) -> bool:
        """check if login exists"""
        return self.db.execute_query_count(
            "SELECT 1 FROM USERS WHERE login=?;",
            (login,)
        ) > 0

    def register(self, login: str, password: str, phone: str):
        """insert a new customer account"""
        if not login.strip():
            raise ValidationError("login must not be empty")
        self.db.execute_statement(
            "INSERT INTO USERS(phoneNum, login, password, favItems, type) VALUES(?,?,?,?,?);",
            (phone, login, password, "", Role.CUSTOMER.value)
        )
        log.info("created user %s", login)

    def create_user(self):
        """interactive signup (always a customer)"""
        cprint("*warning* user logins are final", "yellow")
        login = ask("enter user login: ")
        password = ask("enter user password: ")
        phone = ask("enter user phone: ")
        self.register(login, password, phone)
        cprint("user successfully created!", "green")

    def authenticate(self, login: str, password: str) -> Session | None:
        """return a session for matching credentials, none otherwise"""
        rows = self.db.execute_query_rows(
            "SELECT password, type FROM USERS WHERE login=?;",
            (login,)
        )
        if not rows or not self.verifier.verify(password, rows[0][0]):
            log.info("failed login for %s", login)
            return None
        return Session(login=login, role=Role.parse(rows[0][1].strip()))

    def login(self) -> Session | None:
        """interactive login"""
        login = ask("enter user login: ")
        password = ask("enter user password: ")
        session = self.authenticate(login, password)
        if session is None:
            cprint("invalid login or password", "red")
            return None
        prefix = f"{session.role.value.lower()}: " if session.role is not Role.CUSTOMER else ""
        cprint(f"logged in as {prefix}{colored(login, 'yellow', attrs=['bold'])}", "green")
        return session
