import atexit
import logging
import signal
import sys

from termcolor import cprint
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

from cafe.accounts import AccountManager
from cafe.catalog import MenuCatalog
from cafe.commands import Navigator
from cafe.config import Settings, load_settings
from cafe.database import DatabaseManager
from cafe.errors import DatabaseConnectionError, ValidationError
from cafe.log import configure_logging
from cafe.orders import OrderManager
from cafe.profile import ProfileManager

# fix windows terminal misinterpreting ansi escape sequences
enable_windows_ansi_interpretation()

log = logging.getLogger(__name__)


# application wiring
class Application:
    """bootstrap objects & hand over to the menus"""
    def __init__(self, settings: Settings, db: DatabaseManager | None = None):
        self.settings = settings
        if db is None:
            print(f"connecting to database {settings.describe} ...")
            db = DatabaseManager(settings.database_path)
            cprint("done", "green")
        self.db = db
        log.info("session started against %s", settings.describe)
        atexit.register(self.db.close)
        self.accounts = AccountManager(self.db)
        self.catalog = MenuCatalog(self.db)
        self.profile = ProfileManager(self.db)
        self.orders = OrderManager(self.db, settings.item_attempts)
        self.navigator = Navigator(self.accounts, self.catalog, self.profile, self.orders)

    @staticmethod
    def greeting():
        cprint("""
*******************************************************
              café ordering system ☕
*******************************************************
""", "green", attrs=["bold"])

    def run(self):
        self.greeting()
        try:
            self.navigator.start()
        finally:
            print("disconnecting from database...")
            self.db.close()
            cprint("done\n\nbye!", "green")


# signal handler
class SignalHandler:
    """ctrl+c leaves without a traceback"""
    @staticmethod
    def sigint(_, __):
        """handle ctrl+c"""
        cprint("\nnext time, use the exit option!", "yellow")
        sys.exit(0)


# entry point
def main(argv: list[str] | None = None):
    """entrypoint wrapper"""
    try:
        settings = load_settings(sys.argv[1:] if argv is None else argv)
    except ValidationError as e:
        cprint(str(e), "red")
        sys.exit(2)
    configure_logging(settings.log_level)
    signal.signal(signal.SIGINT, SignalHandler.sigint)
    try:
        app = Application(settings)
    except DatabaseConnectionError as e:
        cprint(f"error - {e}", "red", file=sys.stderr)
        sys.exit(1)
    app.run()


if __name__ == "__main__":
    main()
