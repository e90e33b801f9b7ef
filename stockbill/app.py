"""Application wiring: storage, stores, identity and the invoice flow."""

import logging
from typing import Optional

from .auth import IdentityProvider, MockAuthenticator
from .cli.config import Config
from .db.session import SessionManager
from .notifications import LoggingNotifier, Notifier
from .processors.error_tracker import ErrorTracker
from .processors.invoice_flow import SubmissionResult, create_invoice_and_deduct_stock
from .processors.line_item_editor import LineItemEditor
from .storage import SqlStorage, Storage
from .stores import CatalogStore, InvoiceStore
from .utils import utcnow
from .utils.demo_data import demo_invoices, demo_products

class Application:
    """Creates the stores once and hands them to callers.

    Args:
        config: Settings; read from the environment when omitted
        storage: Backend to use instead of the configured database
        notifier: Outcome notifications, logged by default
        identity: Supplies the acting user, a demo authenticator by default
        error_tracker: Collects invoice-flow failures
        debug: Enable debug logging
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        storage: Optional[Storage] = None,
        notifier: Optional[Notifier] = None,
        identity: Optional[IdentityProvider] = None,
        error_tracker: Optional[ErrorTracker] = None,
        debug: bool = False
    ):
        self.config = config or Config.from_env()
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__name__)
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self.identity = identity if identity is not None else MockAuthenticator(notifier=self.notifier)
        self.error_tracker = error_tracker if error_tracker is not None else ErrorTracker()

        self.session_manager: Optional[SessionManager] = None
        if storage is None:
            if self.debug:
                self.logger.debug(f"Opening storage at {self.config.database_url}")
            self.session_manager = SessionManager(self.config.database_url)
            storage = SqlStorage(self.session_manager, debug=debug)
        self.storage = storage

        self._open_stores()

    def _open_stores(self) -> None:
        self.catalog = CatalogStore(self.storage, self.notifier, debug=self.debug)
        self.invoices = InvoiceStore(self.storage, self.notifier, debug=self.debug)

    def bootstrap(self) -> 'Application':
        """Seed demo data into empty storage when enabled by configuration."""
        if self.config.seed_demo_data:
            self.seed_demo_data()
        return self

    def seed_demo_data(self, replace: bool = False) -> bool:
        """Write the demo catalog and invoices.

        Args:
            replace: Overwrite existing records instead of only seeding storage
                that has never held any; the invoice sequence is kept

        Returns:
            True if demo data was written
        """
        if not replace and (self.catalog.products or self.invoices.invoices or self.invoices.highest_sequence):
            if self.debug:
                self.logger.debug("Storage already has data, not seeding")
            return False

        now = utcnow()
        self.storage.save_products(demo_products(now))
        self.storage.save_invoices(demo_invoices(now))
        self._open_stores()

        self.logger.info(
            f"Seeded {len(self.catalog.products)} demo products and {len(self.invoices.invoices)} demo invoices"
        )
        return True

    def new_editor(self) -> LineItemEditor:
        """Start composing an invoice against the current catalog."""
        return LineItemEditor(self.catalog.get, debug=self.debug)

    def submit(self, editor: LineItemEditor) -> SubmissionResult:
        """Create the invoice held by ``editor`` and deduct its stock."""
        return create_invoice_and_deduct_stock(
            editor,
            self.catalog,
            self.invoices,
            acting_user=self.identity.current_user(),
            notifier=self.notifier,
            error_tracker=self.error_tracker,
            logger=self.logger
        )

    def close(self) -> None:
        if self.session_manager is not None:
            self.session_manager.dispose()
