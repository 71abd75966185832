"""Account repository."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roombnb.exceptions import AlreadyExists, MissingParameter
from roombnb.models.account import Account
from roombnb.services.credentials import hash_password, new_salt, new_token

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("username", "email", "name", "description")


class AccountRepository:
    """Persistence for accounts and their owned-room back-reference.

    Methods stage changes on the session; the caller commits.
    """

    def __init__(self, db: Session):
        self.db = db

    def _flush(self) -> None:
        # Unique indexes catch what the read-before-write checks miss under concurrency
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Unique constraint violated: {e.orig}")
            raise AlreadyExists("This email or username already has an account") from e

    def find_by_id(self, account_id: int) -> Account | None:
        return self.db.get(Account, account_id)

    def find_by_email(self, email: str) -> Account | None:
        return self.db.query(Account).filter(Account.email == email).first()

    def find_by_username(self, username: str) -> Account | None:
        return self.db.query(Account).filter(Account.username == username).first()

    def find_by_token(self, token: str) -> Account | None:
        return self.db.query(Account).filter(Account.token == token).first()

    def ensure_available(
        self,
        email: str | None = None,
        username: str | None = None,
        exclude_id: int | None = None,
    ) -> None:
        """Raise AlreadyExists if another account uses this email or username."""
        if email is not None:
            existing = self.find_by_email(email)
            if existing and existing.id != exclude_id:
                raise AlreadyExists("This email already has an account")
        if username is not None:
            existing = self.find_by_username(username)
            if existing and existing.id != exclude_id:
                raise AlreadyExists("This username already has an account")

    def create(
        self,
        email: str,
        username: str,
        password: str,
        name: str | None = None,
        description: str | None = None,
    ) -> Account:
        """Create an account with a fresh salt and bearer token."""
        self.ensure_available(email=email, username=username)

        salt = new_salt()
        account = Account(
            email=email,
            username=username,
            name=name,
            description=description,
            token=new_token(),
            hash=hash_password(password, salt),
            salt=salt,
            room_ids=[],
        )
        self.db.add(account)
        self._flush()
        logger.info(f"Created account {account.id} ({username})")
        return account

    def update(self, account: Account, changes: dict[str, Any]) -> Account:
        """Apply the given profile changes; at least one field is required."""
        changes = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        if not changes:
            raise MissingParameter("You need to modify at least one element")

        self.ensure_available(
            email=changes.get("email"),
            username=changes.get("username"),
            exclude_id=account.id,
        )

        for key, value in changes.items():
            setattr(account, key, value)
        self._flush()
        return account

    def set_photo(self, account: Account, photo: dict[str, str] | None) -> Account:
        account.photo = photo
        self.db.flush()
        return account

    def append_room(self, account: Account, room_id: int) -> None:
        # JSON columns only detect reassignment, so build a new list
        account.room_ids = [*account.room_ids, room_id]
        self.db.flush()

    def remove_room(self, account: Account, room_id: int) -> None:
        room_ids = list(account.room_ids)
        if room_id in room_ids:
            room_ids.remove(room_id)
        account.room_ids = room_ids
        self.db.flush()

    def delete(self, account: Account) -> None:
        """Delete the account. Owned rooms must already be deleted."""
        self.db.delete(account)
        self.db.flush()
        logger.info(f"Deleted account {account.id}")
