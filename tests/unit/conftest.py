import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_catalog_repo():
    """Mock catalog repository"""
    return MagicMock()


@pytest.fixture
def mock_ledger_repo():
    """Mock ledger repository"""
    return MagicMock()


@pytest.fixture
def mock_account_repo():
    """Mock account repository"""
    return MagicMock()
