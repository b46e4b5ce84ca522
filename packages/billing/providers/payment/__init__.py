"""Payment providers - customers, subscriptions and billing sessions."""

from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.providers.payment.factory import get_payment_provider

__all__ = [
    "PaymentProviderInterface",
    "get_payment_provider",
]
