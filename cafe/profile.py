import logging

from termcolor import cprint

from cafe.accounts import Role, Session
from cafe.database import DatabaseManager
from cafe.helpers import ask

log = logging.getLogger(__name__)


class ProfileManager:
    """self-service profile edits, plus manager edits of any account"""

    def __init__(self, db: DatabaseManager):
        self.db = db

    def _target(self, session: Session, login: str | None) -> str:
        """own login by default; anyone else's requires a manager"""
        if login is None or login == session.login:
            return session.login
        session.require(Role.MANAGER)
        return login

    def find_user(self, session: Session, login: str | None = None) -> str | None:
        """manager lookup of another account; returns the login if it exists"""
        session.require(Role.MANAGER)
        if login is None:
            login = ask("please enter user you want to update: ")
        if self.db.execute_query_count("SELECT login FROM USERS WHERE login=?;", (login,)) == 0:
            cprint("user not found.", "red")
            return None
        return login

    def update_password(self, session: Session, login: str | None = None, password: str | None = None):
        target = self._target(session, login)
        if password is None:
            password = ask("please enter new password: ")
        self.db.execute_statement("UPDATE USERS SET password=? WHERE login=?;", (password, target))
        log.info("%s changed password of %s", session.login, target)
        cprint("successfully changed password!", "green")

    def update_phone(self, session: Session, login: str | None = None, phone: str | None = None):
        target = self._target(session, login)
        if phone is None:
            phone = ask("please enter new phone number: ")
        self.db.execute_statement("UPDATE USERS SET phoneNum=? WHERE login=?;", (phone, target))
        log.info("%s changed phone of %s", session.login, target)
        cprint("successfully changed phone number!", "green")

    def update_favorites(self, session: Session, login: str | None = None, item: str | None = None) -> str:
        """append one entry to the comma-joined favourites; returns the new value"""
        target = self._target(session, login)
        rows = self.db.execute_query_rows("SELECT favItems FROM USERS WHERE login=?;", (target,))
        old = rows[0][0] if rows else ""
        cprint("current favorite items:", "green")
        print(old)
        if item is None:
            item = ask("what item would you like to add?: ")
        favorites = f"{old},{item}"
        self.db.execute_statement("UPDATE USERS SET favItems=? WHERE login=?;", (favorites, target))
        cprint(f"updated favorite item(s), {favorites}", "green")
        return favorites

    def reassign_role(self, session: Session, login: str, role: str | None = None):
        """manager sets another user's role to one of the three valid values"""
        session.require(Role.MANAGER)
        if role is None:
            role = ask("please enter new role (Customer/Employee/Manager): ").strip()
        new_role = Role.parse(role)
        self.db.execute_statement("UPDATE USERS SET type=? WHERE login=?;", (new_role.value, login))
        log.info("%s set role of %s to %s", session.login, login, new_role.value)
        cprint(f"successfully changed role of {login} to {new_role.value}.", "green")
