"""
Base Service Interface

All services inherit from this base class.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for all services.

    Each service:
    - Has a defined input type
    - Has a defined output type
    - Can check its health
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Execute the service's main function.

        Args:
            input_data: Validated input conforming to InputT schema

        Returns:
            Output conforming to OutputT schema
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if service is healthy and can process requests."""
        pass


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")

    @property
    def kind(self) -> str:
        return type(self).__name__


class MarketDataError(ServiceError):
    """Any failure while retrieving market data upstream."""
    pass


class TransportError(MarketDataError):
    """Network unreachable, non-2xx status or undecodable body."""
    pass


class SchemaError(MarketDataError):
    """Upstream payload reported an error or lacks required numeric fields."""
    pass


class CredentialMissing(MarketDataError):
    """Provider requires an API key that was never set."""
    pass


class UnknownSymbol(ServiceError):
    """Symbol is not part of the configured universe."""
    pass
