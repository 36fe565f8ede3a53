# --sql is used for syntax highlighting inline sql queries

import logging
import sqlite3
from contextlib import closing, contextmanager
from typing import Any, Iterator, Sequence

from cafe.errors import DatabaseConnectionError, QueryError
from cafe.helpers import print_table

log = logging.getLogger(__name__)

Params = Sequence[Any]


def _stringify(value: Any) -> str:
    """render a column value the way it is shown on screen"""
    return "" if value is None else str(value)


# database layer
class DatabaseManager:
    """own the single sqlite connection and run every statement the workflows issue"""

    def __init__(self, path: str = "cafe.db", seed: bool = True):
        self.conn = None
        try:
            self.conn = sqlite3.connect(path)
            self.conn.autocommit = True
            self.conn.execute("--sql\nPRAGMA foreign_keys=ON;")
            # a non-sqlite or locked file only fails once the schema is touched
            self._create_schema()
            if seed:
                self._seed_menu()
                self._seed_default_user()
        except sqlite3.Error as e:
            log.error("cannot open database %s: %s", path, e)
            if self.conn is not None:
                self.conn.close()
                self.conn = None
            raise DatabaseConnectionError(f"unable to connect to database {path!r}: {e}") from e
        self.path = path

    def _create_schema(self):
        """create tables / triggers if missing"""
        self.conn.executescript(
            """--sql
            CREATE TABLE IF NOT EXISTS USERS (
                login TEXT PRIMARY KEY,
                password TEXT NOT NULL, -- plaintext, see accounts.CredentialVerifier
                phoneNum TEXT NOT NULL DEFAULT '',
                favItems TEXT NOT NULL DEFAULT '',
                type TEXT NOT NULL DEFAULT 'Customer'
            );
            CREATE TABLE IF NOT EXISTS MENU (
                itemName TEXT PRIMARY KEY,
                type TEXT NOT NULL,
                price REAL NOT NULL,
                description TEXT NOT NULL DEFAULT ''
            );
            CREATE TABLE IF NOT EXISTS ORDERS (
                orderid INTEGER PRIMARY KEY AUTOINCREMENT,
                login TEXT NOT NULL REFERENCES USERS(login),
                paid INTEGER NOT NULL DEFAULT 0 CHECK (paid IN (0, 1)),
                timeStampRecieved TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                total REAL NOT NULL DEFAULT 0
            );
            CREATE TABLE IF NOT EXISTS ITEMSTATUS (
                orderid INTEGER NOT NULL REFERENCES ORDERS(orderid),
                itemName TEXT NOT NULL,
                lastUpdated TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                status TEXT NOT NULL DEFAULT 'Hasn''t started'
                    CHECK (status IN ('Hasn''t started', 'Started', 'Finished')),
                comments TEXT NOT NULL DEFAULT ''
            );
            CREATE TRIGGER IF NOT EXISTS trg_menu_price_insert
            BEFORE INSERT ON MENU
            WHEN NEW.price < 0
            BEGIN
                SELECT RAISE(ABORT, 'price must not be negative');
            END;
            CREATE TRIGGER IF NOT EXISTS trg_menu_price_update
            BEFORE UPDATE ON MENU
            WHEN NEW.price < 0
            BEGIN
                SELECT RAISE(ABORT, 'price must not be negative');
            END;
            """
        )

    def _seed_menu(self):
        """seed a starter menu once"""
        items = [
            ("Latte", "Drinks", 3.50, "espresso with steamed milk"),
            ("Americano", "Drinks", 2.75, "espresso topped with hot water"),
            ("Hot Chocolate", "Drinks", 3.00, "cocoa with whipped cream"),
            ("Bagel", "Sweets", 2.00, "plain bagel with cream cheese"),
            ("Blueberry Muffin", "Sweets", 2.50, "baked fresh every morning"),
            ("Tomato Soup", "Soup", 4.25, "served with a bread roll"),
            ("Clam Chowder", "Soup", 5.50, "new england style"),
        ]
        self.conn.executemany(
            """--sql
            INSERT OR IGNORE INTO MENU(itemName, type, price, description) VALUES(?, ?, ?, ?);
            """,
            items
        )

    def _seed_default_user(self):
        """create a default manager account if missing"""
        self.conn.execute(
            """--sql
            INSERT OR IGNORE INTO USERS(login, password, phoneNum, favItems, type)
            VALUES (?, ?, ?, ?, ?);
            """,
            ("admin", "admin", "", "", "Manager")
        )

    # statement execution
    @contextmanager
    def _cursor(self, sql: str, params: Params) -> Iterator[sqlite3.Cursor]:
        """one cursor per statement, always closed; sqlite errors become QueryError"""
        log.debug("sql=%r params=%r", sql, tuple(params))
        with closing(self.conn.cursor()) as cur:
            try:
                cur.execute(sql, tuple(params))
                yield cur
            except sqlite3.Error as e:
                raise QueryError(str(e), sql) from e

    def execute_statement(self, sql: str, params: Params = ()) -> int:
        """run a mutating statement; returns affected row count"""
        with self._cursor(sql, params) as cur:
            return cur.rowcount

    def execute_query_count(self, sql: str, params: Params = ()) -> int:
        """run a query and return how many rows it produced"""
        with self._cursor(sql, params) as cur:
            return sum(1 for _ in cur)

    def execute_query_table(self, sql: str, params: Params = ()) -> tuple[list[str], list[list[str]]]:
        """run a query and return (header, rows) with every value stringified"""
        with self._cursor(sql, params) as cur:
            rows = [[_stringify(v) for v in row] for row in cur.fetchall()]
            header = [d[0] for d in cur.description or ()]
        return header, rows

    def execute_query_rows(self, sql: str, params: Params = ()) -> list[list[str]]:
        """run a query and return its rows in projection order"""
        return self.execute_query_table(sql, params)[1]

    def print_query(self, sql: str, params: Params = ()) -> int:
        """run a query, print header + rows, return row count"""
        header, rows = self.execute_query_table(sql, params)
        return print_table(header, rows)

    def current_sequence_value(self, name: str) -> int | None:
        """latest key generated for an autoincrement table, none if it never generated one"""
        rows = self.execute_query_rows(
            "SELECT seq FROM sqlite_sequence WHERE lower(name)=lower(?);",
            (name,)
        )
        if not rows or not rows[0][0]:
            return None
        return int(rows[0][0])

    @contextmanager
    def transaction(self) -> Iterator["DatabaseManager"]:
        """group statements: commit all on success, roll back all on any failure"""
        try:
            self.conn.execute("BEGIN;")
        except sqlite3.Error as e:
            raise QueryError(str(e), "BEGIN;") from e
        try:
            yield self
        except BaseException:
            log.warning("rolling back transaction")
            self.conn.execute("ROLLBACK;")
            raise
        try:
            self.conn.execute("COMMIT;")
        except sqlite3.Error as e:
            self.conn.execute("ROLLBACK;")
            raise QueryError(str(e), "COMMIT;") from e

    def close(self):
        """close the connection (safe to call twice)"""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
