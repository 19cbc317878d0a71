"""Account Repository Interface

Account registry owned by user management: registration and lookup.
Balance mutations go through LedgerRepository.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.account import Account


class AccountRepository(ABC):
    """Repository interface for Account persistence"""

    @abstractmethod
    async def get_by_phone(self, phone_number: str) -> Optional[Account]:
        """
        Retrieve account by phone number

        Args:
            phone_number: Subscriber phone number

        Returns:
            Account if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, phone_number: str) -> bool:
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """
        Create a new account

        Args:
            account: Account entity to persist

        Returns:
            Created Account

        Raises:
            IntegrityError: If the phone number is already registered
        """
        pass
