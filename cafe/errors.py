"""error taxonomy shared by every workflow"""


class CafeError(Exception):
    """base for anything a workflow may raise back to its menu"""


class DatabaseError(CafeError):
    """any failure talking to the database"""


class DatabaseConnectionError(DatabaseError):
    """database could not be opened; fatal at startup"""


class QueryError(DatabaseError):
    """a single statement failed (syntax, constraint, missing row...)"""

    def __init__(self, message: str, sql: str | None = None):
        super().__init__(message)
        self.sql = sql


class ValidationError(CafeError):
    """user supplied a value that fails a format / range / enum check"""


class PermissionDenied(CafeError):
    """current session's role may not perform the action"""
