"""
Stripe implementation of payment provider.
"""

from typing import Optional
import stripe

from common.core.config import settings
from common.core.exceptions import BillingError
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.billing.providers.payment.interface import PaymentProviderInterface

logger = get_logger(__name__)


class StripePaymentProvider(PaymentProviderInterface):
    """Stripe-based payment implementation."""

    def __init__(self):
        """Initialize Stripe with API credentials."""
        stripe.api_key = settings.stripe_secret_key

    @trace_span
    async def connect_or_create_customer(self, email: str) -> str:
        """Reuse the Stripe customer registered with this email or create one."""
        try:
            existing = stripe.Customer.list(email=email, limit=1)
            if existing.data:
                customer_id = existing.data[0].id
                logger.info(
                    "Reusing existing Stripe customer",
                    extra={"customer_id": customer_id},
                )
                return customer_id

            customer = stripe.Customer.create(email=email)
            logger.info(
                "Created new Stripe customer", extra={"customer_id": customer.id}
            )
            return customer.id

        except Exception as e:
            logger.error(
                f"Failed to connect Stripe customer: {str(e)}",
                extra={"error": str(e)},
            )
            raise

    @trace_span
    async def update_subscription_quantity(
        self,
        customer_id: str,
        quantity: int,
    ) -> None:
        """Set the quantity on the first item of the active subscription."""
        try:
            subscriptions = stripe.Subscription.list(
                customer=customer_id, status="active", limit=1
            )
            if not subscriptions.data:
                raise BillingError(
                    f"No active subscription found for customer {customer_id}"
                )

            subscription = subscriptions.data[0]
            item_id = subscription["items"]["data"][0]["id"]

            # Charge the added seats right away
            stripe.Subscription.modify(
                subscription.id,
                items=[{"id": item_id, "quantity": quantity}],
                proration_behavior="always_invoice",
            )

            logger.info(
                f"Updated Stripe subscription quantity to {quantity}",
                extra={
                    "customer_id": customer_id,
                    "subscription_id": subscription.id,
                    "quantity": quantity,
                },
            )

        except Exception as e:
            logger.error(
                f"Failed to update subscription quantity: {str(e)}",
                extra={"customer_id": customer_id, "error": str(e)},
            )
            raise

    @trace_span
    async def create_billing_session(
        self,
        customer_id: str,
        return_url: Optional[str] = None,
    ) -> str:
        """Create Stripe customer portal session."""
        try:
            session = stripe.billing_portal.Session.create(
                customer=customer_id,
                return_url=return_url or settings.billing_default_return_url,
            )

            logger.info(
                "Created Stripe portal session", extra={"customer_id": customer_id}
            )

            return session.url

        except Exception as e:
            logger.error(
                f"Failed to create portal session: {str(e)}",
                extra={"customer_id": customer_id, "error": str(e)},
            )
            raise

    @trace_span
    async def health_check(self) -> bool:
        """Check Stripe health."""
        try:
            # Try to retrieve account to verify API key works
            stripe.Account.retrieve()
            return True
        except Exception as e:
            logger.error(f"Payment health check failed: {e}")
            return False
