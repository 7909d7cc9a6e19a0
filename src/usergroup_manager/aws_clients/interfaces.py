"""Interfaces for listing cache users from a remote API."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class CacheUser:
    """A cache user as returned by the remote API."""

    user_id: Optional[str]
    user_name: Optional[str] = None


class UserLister(ABC):
    """
    Interface for anything that can list cache users.

    The discovery step only depends on this interface, so tests can
    substitute an in-memory implementation for the AWS-backed one.
    """

    @abstractmethod
    def list_users(self) -> List[CacheUser]:
        """
        List all cache users visible to the caller.

        Returns:
            Users in the order the remote API returned them

        Raises:
            ListingError: If the remote call fails
        """
        pass
