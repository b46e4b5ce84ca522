"""
Factory for getting payment provider instance.
"""

from functools import lru_cache

from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.providers.payment.stripe_payment import StripePaymentProvider


@lru_cache(maxsize=1)
def get_payment_provider() -> PaymentProviderInterface:
    """
    Get the payment provider instance.

    Stripe is the only provider; callers depend on PaymentProviderInterface
    so tests and future providers can substitute their own.
    """
    return StripePaymentProvider()
