"""Application layer interfaces."""
from abc import ABC, abstractmethod

from core.domain.entities.order import OrderWithItems
from core.domain.value_objects import CallerIdentity


class IIdentityProvider(ABC):
    """
    Interface for bearer-token verification.

    The application layer only ever sees the resulting CallerIdentity;
    token format and signing are an infrastructure concern.
    """

    @abstractmethod
    def verify(self, token: str) -> CallerIdentity:
        """
        Verify a bearer token.

        Args:
            token: Raw token string (without the "Bearer " prefix)

        Returns:
            Identity of the caller

        Raises:
            AuthenticationRequired: token missing, invalid or expired
        """
        pass


class IIdCodec(ABC):
    """Interface for the reversible public id encoding."""

    @abstractmethod
    def encode(self, value: int) -> str:
        pass

    @abstractmethod
    def decode(self, value: str) -> int:
        """
        Raises:
            InvalidIdentifier: value is not a valid public id
        """
        pass


class IManifestRenderer(ABC):
    """Interface for rendering a packing manifest document."""

    @abstractmethod
    def render(self, order_with_items: OrderWithItems) -> str:
        """
        Render the manifest for one order.

        Returns:
            Document body (HTML)
        """
        pass


__all__ = ["IIdentityProvider", "IIdCodec", "IManifestRenderer"]
