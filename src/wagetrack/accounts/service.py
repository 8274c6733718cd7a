from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ValidationError
from .model import Account
from .repository import AccountRepository


@dataclass(frozen=True)
class SessionAccount:
    """What we store into Flask session after login."""

    account_id: int
    email: str


class AuthService:
    """Use cases: sign up and sign in an employer."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def register(self, email: str, password: str) -> SessionAccount:
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._accounts.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        account_id = self._accounts.create_account(email=email, password_hash=generate_password_hash(password))
        return SessionAccount(account_id=account_id, email=email)

    def authenticate(self, email: str, password: str) -> SessionAccount:
        account = self._accounts.get_by_email((email or "").strip().lower())
        if not account or not self._password_matches(account, password):
            raise AuthenticationError("Invalid email or password")

        return SessionAccount(account_id=account.account_id, email=account.email)

    @staticmethod
    def _password_matches(account: Account, password: str) -> bool:
        try:
            return check_password_hash(account.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            return False
