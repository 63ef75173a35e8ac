import pytest
from unittest.mock import MagicMock

from postgrest.exceptions import APIError

from modules.auth.exceptions import EmailAlreadyRegisteredError
from modules.auth.models import CredentialRecord
from modules.auth.repository import UserRepository


def make_user_row(**overrides) -> dict:
    row = {
        "id": 1,
        "name": "Ann",
        "email": "ann@example.com",
        "password_hash": "$2b$10$abcdefghijklmnopqrstuv",
        "phone": None,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


class TestUserRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return UserRepository(mock_db)

    def test_find_by_email(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            make_user_row()
        ]

        user = repo.find_by_email("ann@example.com")

        assert isinstance(user, CredentialRecord)
        assert user.id == 1
        mock_db.table.assert_called_with("users")
        mock_db.table.return_value.select.return_value.eq.assert_called_with("email", "ann@example.com")

    def test_find_by_email_not_found(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []
        assert repo.find_by_email("nobody@example.com") is None

    def test_find_by_id(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            make_user_row(id=7, phone="555-0100")
        ]

        user = repo.find_by_id(7)

        assert user.id == 7
        assert user.phone == "555-0100"
        mock_db.table.return_value.select.return_value.eq.assert_called_with("id", 7)

    def test_insert(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [make_user_row()]

        user = repo.insert(name="Ann", email="ann@example.com", password_hash="hash")

        assert user.email == "ann@example.com"
        inserted = mock_db.table.return_value.insert.call_args[0][0]
        assert inserted == {
            "name": "Ann",
            "email": "ann@example.com",
            "password_hash": "hash",
            "phone": None,
        }

    def test_insert_duplicate_email(self, repo, mock_db):
        """A unique violation from a concurrent registration maps to a conflict."""
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError({
            "code": "23505",
            "message": 'duplicate key value violates unique constraint "users_email_key"',
            "details": None,
            "hint": None,
        })

        with pytest.raises(EmailAlreadyRegisteredError):
            repo.insert(name="Ann", email="ann@example.com", password_hash="hash")

    def test_insert_other_database_error_propagates(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError({
            "code": "23502",
            "message": "null value in column",
            "details": None,
            "hint": None,
        })

        with pytest.raises(APIError):
            repo.insert(name="Ann", email="ann@example.com", password_hash="hash")

    def test_update_only_sends_given_fields(self, repo, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = [
            make_user_row(phone="555-0100")
        ]

        user = repo.update(1, phone="555-0100")

        assert user.phone == "555-0100"
        data = mock_db.table.return_value.update.call_args[0][0]
        assert data["phone"] == "555-0100"
        assert "name" not in data
        assert "updated_at" in data

    def test_update_missing_user(self, repo, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = []
        assert repo.update(99, name="Ann") is None

    def test_delete(self, repo, mock_db):
        mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = [
            make_user_row()
        ]
        assert repo.delete(1) is True
        mock_db.table.return_value.delete.return_value.eq.assert_called_with("id", 1)

    def test_delete_missing_user(self, repo, mock_db):
        mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = []
        assert repo.delete(99) is False
