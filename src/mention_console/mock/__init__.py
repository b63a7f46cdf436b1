"""Mock data for testing and development."""

from .data import MOCK_USERS, create_mock_directory, create_mock_users

__all__ = ["MOCK_USERS", "create_mock_directory", "create_mock_users"]
