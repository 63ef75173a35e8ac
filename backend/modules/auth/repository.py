"""
User repository for database access.

Supabase implementation of ICredentialStore over the ``users`` table.
Emails are stored lower-cased; callers lower-case before querying.
"""

from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository

from .exceptions import EmailAlreadyRegisteredError
from .models import CredentialRecord

# PostgreSQL unique_violation
UNIQUE_VIOLATION = "23505"


class UserRepository(BaseRepository[CredentialRecord]):
    """
    Repository for user account data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying user ownership.
    """

    def find_by_email(self, email: str) -> Optional[CredentialRecord]:
        result = self._db.table("users").select("*").eq("email", email).execute()
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def find_by_id(self, user_id: int) -> Optional[CredentialRecord]:
        result = self._db.table("users").select("*").eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def insert(
        self,
        name: str,
        email: str,
        password_hash: str,
        phone: Optional[str] = None,
    ) -> CredentialRecord:
        """
        Insert a new user row.

        Raises:
            EmailAlreadyRegisteredError: A concurrent registration won the
                unique index on ``email``.
        """
        data = {
            "name": name,
            "email": email,
            "password_hash": password_hash,
            "phone": phone,
        }
        try:
            result = self._db.table("users").insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise EmailAlreadyRegisteredError(email) from e
            raise
        return self._map_to_record(result.data[0])

    def update(
        self,
        user_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Optional[CredentialRecord]:
        """Update name and/or phone. Fields left as None are not touched."""
        data: dict[str, Any] = {"updated_at": self._now()}
        if name is not None:
            data["name"] = name
        if phone is not None:
            data["phone"] = phone

        result = self._db.table("users").update(data).eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def delete(self, user_id: int) -> bool:
        """Delete a user. Their orders are removed by ON DELETE CASCADE."""
        result = self._db.table("users").delete().eq("id", user_id).execute()
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_record(self, data: dict[str, Any]) -> CredentialRecord:
        return CredentialRecord(
            id=data["id"],
            email=data["email"],
            password_hash=data["password_hash"],
            name=data["name"],
            phone=data.get("phone"),
            created_at=data["created_at"],
            updated_at=data.get("updated_at"),
        )
