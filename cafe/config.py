"""configuration surface: positional args, flags and environment"""

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Sequence

from dotenv import load_dotenv

from cafe.errors import ValidationError

PASSWORD_ENV = "CAFE_DB_PASSWORD"
LOG_LEVEL_ENV = "CAFE_LOG_LEVEL"
ITEM_ATTEMPTS_ENV = "CAFE_ITEM_ATTEMPTS"


@dataclass(frozen=True)
class Settings:
    """everything needed to open the database and run a session"""
    dbname: str
    port: str
    user: str
    password: str = ""
    log_level: str = "WARNING"
    item_attempts: int | None = None

    @property
    def database_path(self) -> str:
        """sqlite file backing `dbname` (`:memory:` passes through)"""
        if self.dbname == ":memory:" or os.path.splitext(self.dbname)[1]:
            return self.dbname
        return f"{self.dbname}.db"

    @property
    def describe(self) -> str:
        """connection banner; never shows the password"""
        return f"sqlite://{self.user}@localhost:{self.port}/{self.database_path}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cafe",
        description="menu-driven front end for the café ordering database",
    )
    parser.add_argument("dbname", help="database name (sqlite file, .db appended if no suffix)")
    parser.add_argument("port", help="database port")
    parser.add_argument("user", help="database user")
    parser.add_argument(
        "--password",
        default=None,
        help=f"database password (defaults to ${PASSWORD_ENV}, then empty)",
    )
    return parser


def _parse_attempts(raw: str | None) -> int | None:
    """None / blank means unbounded; otherwise a positive int"""
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{ITEM_ATTEMPTS_ENV} must be a positive integer, got {raw!r}") from None
    if value < 1:
        raise ValidationError(f"{ITEM_ATTEMPTS_ENV} must be a positive integer, got {raw!r}")
    return value


def load_settings(argv: Sequence[str], environ: Mapping[str, str] | None = None) -> Settings:
    """parse argv and merge environment (a .env file is loaded when environ is not given)"""
    if environ is None:
        load_dotenv()
        environ = os.environ
    args = build_parser().parse_args(list(argv))
    password = args.password if args.password is not None else environ.get(PASSWORD_ENV, "")
    return Settings(
        dbname=args.dbname,
        port=args.port,
        user=args.user,
        password=password,
        log_level=environ.get(LOG_LEVEL_ENV, "WARNING"),
        item_attempts=_parse_attempts(environ.get(ITEM_ATTEMPTS_ENV)),
    )
