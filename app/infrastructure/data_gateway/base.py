"""
Data Gateway Abstract Base Classes

Defines the contract consumed by the admin console against the hosted backend:
row storage on named collections, object storage for uploaded images and the
authentication service. Implementations wrap a concrete provider client.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

RowId = Union[int, str]
Row = Dict[str, Any]


@dataclass
class GatewayConfig:
    """Configuration for the hosted backend"""
    url: str
    anon_key: str
    bucket: str = "images"


@dataclass(frozen=True)
class Principal:
    """Authenticated identity of the current session"""
    id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class AuthSession:
    """Result of a password sign-in: the identity and the bearer token issued for it"""
    principal: Principal
    access_token: str


# 认证状态回调：(事件名, 当前身份或None)
AuthStateCallback = Callable[[str, Optional[Principal]], None]
Unsubscribe = Callable[[], None]


class AuthInterface(ABC):
    """
    Authentication sub-interface of the gateway
    """

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Sign in with email and password

        Returns:
            AuthSession carrying the access token for later requests

        Raises:
            AuthenticationError: credentials rejected or provider failure
        """
        pass

    @abstractmethod
    async def sign_out(self, access_token: Optional[str] = None) -> None:
        """
        Sign out

        Args:
            access_token: revoke this token only; None signs out the local session
        """
        pass

    @abstractmethod
    async def get_user(self) -> Optional[Principal]:
        """
        Get the principal of the current session

        Returns:
            Principal or None when there is no session
        """
        pass

    @abstractmethod
    async def get_user_for_token(self, access_token: str) -> Optional[Principal]:
        """
        Resolve the principal owning a bearer token

        Returns:
            Principal or None when the token is invalid or expired

        Raises:
            GatewayError: the auth service could not be reached
        """
        pass

    @abstractmethod
    def on_auth_state_change(self, callback: AuthStateCallback) -> Unsubscribe:
        """
        Subscribe to auth state changes

        Args:
            callback: invoked with (event, principal) on every change

        Returns:
            Callable releasing the subscription
        """
        pass


class DataGatewayInterface(ABC):
    """
    Abstract interface for the hosted data store

    All row operations raise GatewayError on provider failure.
    """

    @property
    @abstractmethod
    def auth(self) -> AuthInterface:
        pass

    @abstractmethod
    async def select(
        self,
        table: str,
        columns: str = "*",
        order_by: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Row]:
        """
        Select all rows of a collection

        Args:
            table: Collection name
            columns: Column list, may embed a joined collection
            order_by: Optional column to order by
            ascending: Order direction

        Returns:
            List of rows
        """
        pass

    @abstractmethod
    async def select_single(self, table: str, columns: str = "*") -> Optional[Row]:
        """
        Select the single row of a singleton collection

        Returns:
            The row, or None when the collection is empty
        """
        pass

    @abstractmethod
    async def insert(self, table: str, row: Row) -> Row:
        pass

    @abstractmethod
    async def update(self, table: str, row_id: RowId, values: Row) -> List[Row]:
        pass

    @abstractmethod
    async def delete(self, table: str, row_id: RowId) -> None:
        pass

    @abstractmethod
    async def count(self, table: str) -> int:
        """Exact row count of a collection"""
        pass

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> None:
        """
        Upload an object to storage

        Raises:
            GatewayError: upload rejected by the provider
        """
        pass

    @abstractmethod
    async def get_public_url(self, bucket: str, path: str) -> str:
        """Public URL of a previously uploaded object"""
        pass
