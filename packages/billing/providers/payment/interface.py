"""
Interface for payment providers.

Abstracts billing operations on a user's account away from specific
platforms (Stripe, Paddle, etc.)
"""

from abc import ABC, abstractmethod
from typing import Optional


class PaymentProviderInterface(ABC):
    """Abstract interface for payment providers."""

    @abstractmethod
    async def connect_or_create_customer(self, email: str) -> str:
        """
        Find the customer registered with this email, creating one if needed.

        Args:
            email: Customer email

        Returns:
            customer_id: Payment provider customer ID
        """
        pass

    @abstractmethod
    async def update_subscription_quantity(
        self,
        customer_id: str,
        quantity: int,
    ) -> None:
        """
        Change the purchased quantity of the customer's active subscription.

        Args:
            customer_id: Payment provider customer ID
            quantity: New seat quantity

        Raises:
            BillingError: The customer has no active subscription
        """
        pass

    @abstractmethod
    async def create_billing_session(
        self,
        customer_id: str,
        return_url: Optional[str] = None,
    ) -> str:
        """
        Create a hosted billing session where the customer manages their plan.

        Args:
            customer_id: Payment provider customer ID
            return_url: Where to send the customer afterwards

        Returns:
            session_url: URL of the hosted session
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the payment backend is available and healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
