"""Acting-user identity.

The login here is a mock credential check against two demo accounts. It only
decides whose name is stamped on new invoices; nothing is enforced.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from .models import ActingUser
from .notifications import Notifier, send

@dataclass(frozen=True)
class DemoAccount:
    id: str
    name: str
    email: str
    password: str
    role: str  # admin | cashier

DEMO_ACCOUNTS = (
    DemoAccount('1', 'Admin User', 'admin@example.com', 'admin123', 'admin'),
    DemoAccount('2', 'Cashier User', 'cashier@example.com', 'cashier123', 'cashier'),
)

class IdentityProvider(ABC):
    """Supplies the user performing an operation."""

    @abstractmethod
    def current_user(self) -> Optional[ActingUser]:
        """Return the acting user, or None when nobody is signed in."""
        pass

class StaticIdentity(IdentityProvider):
    """Always reports the same user (or nobody)."""

    def __init__(self, user: Optional[ActingUser] = None):
        self.user = user

    def current_user(self) -> Optional[ActingUser]:
        return self.user

class MockAuthenticator(IdentityProvider):
    """Email/password check against a fixed list of demo accounts."""

    def __init__(self, accounts: Sequence[DemoAccount] = DEMO_ACCOUNTS, notifier: Optional[Notifier] = None):
        self.accounts = tuple(accounts)
        self.notifier = notifier
        self.account: Optional[DemoAccount] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def is_authenticated(self) -> bool:
        return self.account is not None

    def login(self, email: str, password: str) -> bool:
        """Sign in a demo account.

        Returns:
            True on a credential match
        """
        email = (email or '').strip().lower()
        for account in self.accounts:
            if account.email == email and account.password == password:
                self.account = account
                self.logger.info(f"Signed in as {account.name}")
                send(self.notifier, "Login successful", f"Welcome back, {account.name}!")
                return True

        self.logger.warning(f"Failed login for {email}")
        send(self.notifier, "Login failed", "Invalid email or password", 'destructive')
        return False

    def logout(self) -> None:
        self.account = None
        send(self.notifier, "Logged out", "You have been successfully logged out")

    def current_user(self) -> Optional[ActingUser]:
        if self.account is None:
            return None
        return ActingUser(id=self.account.id, name=self.account.name)
