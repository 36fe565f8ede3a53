"""order capture, receipts and post-placement order maintenance

An order is one ORDERS row plus one ITEMSTATUS row per line item (the same
item may appear more than once). Placement and cancellation each run as a
single transaction, so a failure part way through leaves nothing behind.
"""

import logging
from typing import Sequence

from termcolor import cprint

from cafe.accounts import STAFF, Role, Session
from cafe.database import DatabaseManager
from cafe.errors import QueryError, ValidationError
from cafe.helpers import ask, color_money, require_order_id

log = logging.getLogger(__name__)

NOT_STARTED = "Hasn't started"
ITEM_STATUSES = (NOT_STARTED, "Started", "Finished")
QUIT = "q"
CUSTOMER_HISTORY_LIMIT = 5
STATUS_HISTORY_LIMIT = 10


class OrderManager:
    """place, view, cancel and progress orders"""

    def __init__(self, db: DatabaseManager, item_attempts: int | None = None):
        self.db = db
        # consecutive unknown item names tolerated before collection stops; none = forever
        self.item_attempts = item_attempts

    # capture
    def item_on_menu(self, name: str) -> bool:
        """exactly one menu row must carry this name"""
        return self.db.execute_query_count(
            "SELECT itemName FROM MENU WHERE itemName=?;",
            (name,)
        ) == 1

    def collect_items(self) -> list[str]:
        """prompt for item names until the quit sentinel; unknown names are re-prompted"""
        items: list[str] = []
        message = f"what would you like to order? or type '{QUIT}' to quit: "
        misses = 0
        while True:
            name = ask(message)
            if name == QUIT:
                break
            if self.item_on_menu(name):
                items.append(name)
                misses = 0
                message = f"what more would you like to order? or type '{QUIT}' to quit: "
                continue
            cprint("item does not exist... please try again.", "red")
            misses += 1
            if self.item_attempts is not None and misses >= self.item_attempts:
                cprint(f"{misses} unknown items in a row, finishing order", "yellow")
                break
        return items

    def create_order(self, session: Session, items: Sequence[str]) -> int | None:
        """persist an order for `items` (input order kept); none if there is nothing to order"""
        if not items:
            return None
        with self.db.transaction():
            self.db.execute_statement(
                """--sql
                INSERT INTO ORDERS(login, paid, timeStampRecieved, total)
                VALUES(?, 0, datetime('now'), 0);
                """,
                (session.login,)
            )
            order_id = self.db.current_sequence_value("ORDERS")
            total = 0.0
            for name in items:
                rows = self.db.execute_query_rows("SELECT price FROM MENU WHERE itemName=?;", (name,))
                if not rows:
                    raise QueryError(f"menu item {name!r} no longer exists")
                total += float(rows[0][0])
                self.db.execute_statement(
                    """--sql
                    INSERT INTO ITEMSTATUS(orderid, itemName, lastUpdated, status, comments)
                    VALUES(?, ?, datetime('now'), ?, ?);
                    """,
                    (order_id, name, NOT_STARTED, "")
                )
            total = round(total, 2)
            self.db.execute_statement(
                "UPDATE ORDERS SET total=? WHERE orderid=?;",
                (total, order_id)
            )
        log.info("order #%s placed by %s: %d items, total %.2f", order_id, session.login, len(items), total)
        return order_id

    def print_receipt(self, order_id: int):
        """show the line items and the order row"""
        cprint("your following orders are:", "green")
        self.db.print_query("SELECT * FROM ITEMSTATUS WHERE orderid=?;", (order_id,))
        cprint("your receipt is:", "green")
        self.db.print_query("SELECT * FROM ORDERS WHERE orderid=?;", (order_id,))
        rows = self.db.execute_query_rows("SELECT total FROM ORDERS WHERE orderid=?;", (order_id,))
        if rows:
            print(f"total: {color_money(float(rows[0][0]))}")

    def place_order(self, session: Session) -> int | None:
        """interactive order capture"""
        items = self.collect_items()
        if not items:
            cprint("no orders placed.", "yellow")
            return None
        order_id = self.create_order(session, items)
        cprint(f"order #{order_id} placed!", "green")
        self.print_receipt(order_id)
        return order_id

    # viewing
    def order_history(self, session: Session) -> int:
        """customers: own last five orders; staff: every order from the last 24 hours"""
        if session.role is Role.CUSTOMER:
            count = self.db.print_query(
                "SELECT * FROM ORDERS WHERE login=? ORDER BY orderid DESC LIMIT ?;",
                (session.login, CUSTOMER_HISTORY_LIMIT)
            )
        else:
            count = self.db.print_query(
                """--sql
                SELECT * FROM ORDERS
                WHERE timeStampRecieved >= datetime('now', '-1 day')
                ORDER BY orderid DESC;
                """
            )
        if not count:
            cprint("no orders found", "yellow")
        return count

    def item_status_history(self) -> int:
        """ten most recent item status rows across all orders"""
        count = self.db.print_query(
            "SELECT * FROM ITEMSTATUS ORDER BY orderid DESC LIMIT ?;",
            (STATUS_HISTORY_LIMIT,)
        )
        if not count:
            cprint("no item statuses found", "yellow")
        return count

    # maintenance
    def order_exists(self, order_id: int) -> bool:
        return self.db.execute_query_count(
            "SELECT orderid FROM ORDERS WHERE orderid=?;",
            (order_id,)
        ) > 0

    def cancel_order(self, session: Session, order_id: str | int | None = None, reorder: bool = True) -> bool:
        """delete an unpaid order (customers: only their own), then offer a fresh order"""
        if order_id is None:
            whose = "your own " if session.role is Role.CUSTOMER else ""
            order_id = ask(f"please enter {whose}non-paid order id: ")
        oid = order_id if isinstance(order_id, int) else require_order_id(order_id)
        query = "SELECT * FROM ORDERS WHERE orderid=? AND paid=0"
        params: tuple = (oid,)
        if session.role is Role.CUSTOMER:
            query += " AND login=?"
            params += (session.login,)
        if self.db.execute_query_count(query, params) == 0:
            if session.role is Role.CUSTOMER:
                cprint("no unpaid order of yours with that id!", "red")
            else:
                cprint("unpaid order id not found!", "red")
            return False
        self.db.print_query(query, params)
        cprint("order id found! deleting old order...", "yellow")
        with self.db.transaction():
            # status rows reference the order, so they go first
            self.db.execute_statement("DELETE FROM ITEMSTATUS WHERE orderid=?;", (oid,))
            self.db.execute_statement("DELETE FROM ORDERS WHERE orderid=?;", (oid,))
        log.info("order #%s cancelled by %s", oid, session.login)
        cprint("order successfully deleted!", "green")
        if reorder:
            self.place_order(session)
        return True

    def mark_paid(self, session: Session, order_id: str | int | None = None) -> bool:
        """flag an order as paid (staff only, idempotent)"""
        session.require(*STAFF)
        if order_id is None:
            order_id = ask("please enter the order id you would like to change to paid: ")
        oid = order_id if isinstance(order_id, int) else require_order_id(order_id)
        if not self.order_exists(oid):
            cprint("order id not found!", "red")
            return False
        self.db.execute_statement("UPDATE ORDERS SET paid=1 WHERE orderid=?;", (oid,))
        log.info("order #%s marked paid by %s", oid, session.login)
        cprint("order updated successfully!", "green")
        return True

    def set_item_status(self, session: Session, order_id: str | int | None = None,
                        status: str | None = None) -> bool:
        """set every line item of an order to one status (staff only)"""
        session.require(*STAFF)
        if order_id is None:
            order_id = ask("please enter the order id you would like to update: ")
        oid = order_id if isinstance(order_id, int) else require_order_id(order_id)
        if not self.order_exists(oid):
            cprint("order id not found!", "red")
            return False
        if status is None:
            status = ask(f"update status to {', '.join(ITEM_STATUSES[1:])}, or {NOT_STARTED}?: ")
        if status not in ITEM_STATUSES:
            raise ValidationError(f"invalid status {status!r}, returning to order menu")
        self.db.execute_statement(
            "UPDATE ITEMSTATUS SET status=?, lastUpdated=datetime('now') WHERE orderid=?;",
            (status, oid)
        )
        log.info("order #%s items set to %r by %s", oid, status, session.login)
        cprint("order updated successfully!", "green")
        return True
