import pytest
from unittest.mock import AsyncMock, patch


@pytest.fixture
def mock_payment_provider():
    """Create a mock payment provider instance for testing."""
    provider = AsyncMock()
    provider.connect_or_create_customer = AsyncMock(return_value="cus_new123")
    provider.update_subscription_quantity = AsyncMock(return_value=None)
    provider.create_billing_session = AsyncMock(
        return_value="https://billing.stripe.com/session/test123"
    )
    provider.health_check = AsyncMock(return_value=True)
    return provider


@pytest.fixture(autouse=True)
def mock_get_payment_provider(mock_payment_provider):
    """Automatically mock get_payment_provider for all unit tests."""
    with patch(
        "packages.users.services.user_service.get_payment_provider",
        return_value=mock_payment_provider,
    ):
        yield
