import logging

from termcolor import cprint

from cafe.accounts import Role, Session
from cafe.database import DatabaseManager
from cafe.errors import ValidationError
from cafe.helpers import ask, parse_price, read_choice

log = logging.getLogger(__name__)

# numeric choice -> MENU column for field-at-a-time updates
UPDATABLE_FIELDS = {1: "type", 2: "price", 3: "description"}


class MenuCatalog:
    """browse the menu (everyone) and maintain it (managers)"""

    def __init__(self, db: DatabaseManager):
        self.db = db

    # read side
    def item_exists(self, name: str) -> bool:
        return self.db.execute_query_count(
            "SELECT itemName FROM MENU WHERE itemName=?;",
            (name,)
        ) > 0

    def list_category(self, category: str) -> int:
        """print name / price / description of one category"""
        count = self.db.print_query(
            "SELECT itemName, price, description FROM MENU WHERE type=? ORDER BY itemName;",
            (category,)
        )
        if not count:
            cprint(f"no {category.lower()} on the menu", "yellow")
        return count

    def show_menu(self) -> int:
        """print the whole menu grouped by category"""
        rows = self.db.execute_query_rows(
            "SELECT type, itemName, price, description FROM MENU ORDER BY type, itemName;"
        )
        cprint("the café menu", None, attrs=["bold"])
        if not rows:
            cprint("menu empty", "red"); return 0
        current_type = None
        for item_type, name, price, description in rows:
            if item_type != current_type:
                current_type = item_type
                cprint(f"\n{item_type}:", "green", attrs=["bold"])
            cprint(f"{name}: ${float(price):.2f}", "green", end="")
            print(f"  {description}" if description else "")
        return len(rows)

    def _search(self, column: str, value: str | None, prompt: str) -> int:
        if value is None:
            value = ask(prompt)
        query = f"SELECT itemName, price, type, description FROM MENU WHERE {column}=? ORDER BY itemName;"
        if self.db.execute_query_count(query, (value,)) == 0:
            cprint("invalid input please try again", "red"); return 0
        return self.db.print_query(query, (value,))

    def search_by_name(self, name: str | None = None) -> int:
        """exact item name lookup"""
        return self._search("itemName", name, "please input an item's name: ")

    def search_by_type(self, item_type: str | None = None) -> int:
        """exact category lookup"""
        return self._search("type", item_type, "please input a type: ")

    # manager side
    def add_item(self, session: Session, name: str | None = None, item_type: str | None = None,
                 price: str | None = None, description: str | None = None):
        """add a menu item"""
        session.require(Role.MANAGER)
        if name is None:
            name = ask("please input an item's name: ").strip()
        if item_type is None:
            item_type = ask("please input an item's type: ").strip()
        if price is None:
            price = ask("please input an item's price: ").strip()
        p = parse_price(price)
        if description is None:
            description = ask("please input an item's description: ")
        if not name:
            raise ValidationError("item name must not be empty")
        self.db.execute_statement(
            "INSERT INTO MENU(itemName, type, price, description) VALUES(?,?,?,?);",
            (name, item_type, p, description)
        )
        log.info("%s added menu item %s", session.login, name)
        cprint("successfully added an item!", "green")

    def update_item(self, session: Session, name: str | None = None,
                    field: str | None = None, value: str | None = None):
        """change one of type / price / description of an existing item"""
        session.require(Role.MANAGER)
        if name is None:
            name = ask("which item would you like to update?: ")
        if not self.item_exists(name):
            cprint("unknown item. please try again.", "red"); return
        if field is None:
            print("1. update type")
            print("2. update price")
            print("3. update description")
            print("9. go back")
            while True:
                choice = read_choice()
                if choice == 9:
                    return
                if choice in UPDATABLE_FIELDS:
                    field = UPDATABLE_FIELDS[choice]
                    break
                cprint("unrecognized choice! please try again.", "red")
        if field not in UPDATABLE_FIELDS.values():
            raise ValidationError(f"cannot update field {field!r}")
        if value is None:
            value = ask(f"what would you like to update the {field} to?: ")
        new_value = parse_price(value) if field == "price" else value
        self.db.execute_statement(
            f"UPDATE MENU SET {field}=? WHERE itemName=?;",
            (new_value, name)
        )
        log.info("%s updated %s of %s", session.login, field, name)
        cprint(f"successfully updated {field}!", "green")

    def delete_item(self, session: Session, name: str | None = None):
        """delete a menu item that exists"""
        session.require(Role.MANAGER)
        if name is None:
            name = ask("please input an item's name: ")
        if not self.item_exists(name):
            raise ValidationError("invalid input please try again")
        self.db.execute_statement("DELETE FROM MENU WHERE itemName=?;", (name,))
        log.info("%s deleted menu item %s", session.login, name)
        cprint("successfully deleted item!", "green")
