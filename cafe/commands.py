import logging
from typing import Callable, Sequence

from termcolor import cprint

from cafe.accounts import STAFF, AccountManager, Role, Session
from cafe.catalog import MenuCatalog
from cafe.errors import CafeError
from cafe.helpers import read_choice
from cafe.orders import OrderManager
from cafe.profile import ProfileManager

log = logging.getLogger(__name__)

BACK = 9


# command infrastructure
class Option:
    """bind a numeric choice to a function, optionally restricted to some roles"""
    def __init__(self, key: int, label: str, function: Callable[[], object],
                 roles: Sequence[Role] | None = None, leave: bool = False):
        self.key = key
        self.label = label
        self._fn = function
        self.roles = tuple(roles) if roles else None
        self.leave = leave

    def visible_to(self, session: Session | None) -> bool:
        """unrestricted, or the session holds one of the roles"""
        if self.roles is None:
            return True
        return session is not None and session.role in self.roles

    def execute(self):
        """run the function; workflow errors are reported and swallowed here"""
        try:
            return self._fn()
        except CafeError as e:
            log.warning("%s failed: %s", self.label, e)
            cprint(str(e), "red")
            return None


class Screen:
    """one numbered menu; loops until the back choice or end of input"""
    def __init__(self, title: str, options: list[Option], session: Session | None = None,
                 back_label: str = "go back"):
        self.title = title
        self.options = options
        self.session = session
        self.back_label = back_label

    def visible(self) -> list[Option]:
        return [o for o in self.options if o.visible_to(self.session)]

    def show(self):
        cprint(self.title.upper(), "green", attrs=["bold"])
        cprint("-" * len(self.title), "green")
        for option in self.visible():
            print(f"{option.key}. {option.label}")
        print(f"{BACK}. < {self.back_label}")

    def run(self):
        """main screen loop"""
        while True:
            self.show()
            try:
                choice = read_choice()
                if choice == BACK:
                    return
                option = next((o for o in self.visible() if o.key == choice), None)
                if option is None:
                    cprint("unrecognized choice! please try again.\n", "red")
                    continue
                option.execute()
            except EOFError:
                print()
                return
            if option.leave:
                return


class Navigator:
    """build the screens for a session and dispatch into the workflows"""
    def __init__(self, accounts: AccountManager, catalog: MenuCatalog,
                 profile: ProfileManager, orders: OrderManager):
        self.accounts = accounts
        self.catalog = catalog
        self.profile = profile
        self.orders = orders

    def start(self):
        """signup / login loop; ends when the user exits"""
        Screen("main menu", [
            Option(1, "create user", self.accounts.create_user),
            Option(2, "log in", self.login),
        ], back_label="exit").run()

    def login(self):
        session = self.accounts.login()
        if session is not None:
            self.user_screen(session).run()
            cprint(f"logged out {session.login}", "green")

    def user_screen(self, session: Session) -> Screen:
        return Screen("main menu", [
            Option(1, "go to menu", lambda: self.menu_screen(session).run()),
            Option(2, "update profile", lambda: self.profile_screen(session).run()),
            Option(3, "place an order", lambda: self.order_screen(session).run()),
            Option(4, "update an order", lambda: self.update_order_screen(session).run()),
        ], session, back_label="log out")

    # menu catalog
    def menu_screen(self, session: Session) -> Screen:
        return Screen("viewing menu", [
            Option(1, "view drinks", lambda: self.catalog.list_category("Drinks")),
            Option(2, "view sweets", lambda: self.catalog.list_category("Sweets")),
            Option(3, "view soups", lambda: self.catalog.list_category("Soup")),
            Option(4, "view entire menu", self.catalog.show_menu),
            Option(5, "search by item name", self.catalog.search_by_name),
            Option(6, "search by item type", self.catalog.search_by_type),
            Option(7, "add/update/delete menu items", lambda: self.manage_menu_screen(session).run(),
                   roles=[Role.MANAGER]),
        ], session, back_label="return to main menu")

    def manage_menu_screen(self, session: Session) -> Screen:
        return Screen("manage menu", [
            Option(1, "add an item to the menu", lambda: self.catalog.add_item(session), leave=True),
            Option(2, "update an item on the menu", lambda: self.catalog.update_item(session), leave=True),
            Option(3, "delete an item from the menu", lambda: self.catalog.delete_item(session), leave=True),
        ], session)

    # profile
    def profile_screen(self, session: Session) -> Screen:
        return Screen("update profile", [
            Option(1, "update password", lambda: self.profile.update_password(session)),
            Option(2, "update phone number", lambda: self.profile.update_phone(session)),
            Option(3, "update favorite items", lambda: self.profile.update_favorites(session)),
            Option(4, "select user to update", lambda: self.select_user(session), roles=[Role.MANAGER]),
        ], session, back_label="cancel")

    def select_user(self, session: Session):
        login = self.profile.find_user(session)
        if login is not None:
            self.managed_user_screen(session, login).run()

    def managed_user_screen(self, session: Session, login: str) -> Screen:
        return Screen(f"updating {login}", [
            Option(1, "update password", lambda: self.profile.update_password(session, login)),
            Option(2, "update phone number", lambda: self.profile.update_phone(session, login)),
            Option(3, "update favorite items", lambda: self.profile.update_favorites(session, login)),
            Option(4, "update user type", lambda: self.profile.reassign_role(session, login)),
        ], session, back_label="cancel")

    # orders
    def order_screen(self, session: Session) -> Screen:
        return Screen("order", [
            Option(1, "place order(s)", lambda: self.orders.place_order(session)),
            Option(2, "view order history", lambda: self.orders.order_history(session)),
            Option(3, "view item status history", self.orders.item_status_history),
        ], session)

    def update_order_screen(self, session: Session) -> Screen:
        return Screen("update orders", [
            Option(1, "update a non-paid order (customers: own orders only)",
                   lambda: self.orders.cancel_order(session)),
            Option(2, "mark an order as paid", lambda: self.orders.mark_paid(session), roles=STAFF),
            Option(3, "update an order's item status", lambda: self.orders.set_item_status(session),
                   roles=STAFF),
        ], session, back_label="go back to menu")
