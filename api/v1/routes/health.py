"""Liveness and dependency checks. None of these require authentication."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text

from common.core.config import settings
from common.db.session import get_db
from common.core.otel_axiom_exporter import get_logger
from common.providers.rate_limiter.limiter import limiter
from packages.billing.providers.payment.factory import get_payment_provider
from packages.billing.providers.payment.interface import PaymentProviderInterface

logger = get_logger(__name__)

router = APIRouter()


@router.get("/")
async def health_check(request: Request):
    # Not rate limited; probes call this every few seconds
    return {"status": "healthy", "service": settings.otel_service_name}


@router.get("/db")
@limiter.limit("100/minute")
async def db_check(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "unhealthy", "database": "disconnected"}
    return {"status": "healthy", "database": "connected"}


@router.get("/billing")
@limiter.limit("10/minute")
async def billing_check(
    request: Request,
    payment: PaymentProviderInterface = Depends(get_payment_provider),
):
    # Each call is a request against the Stripe API
    if await payment.health_check():
        return {"status": "healthy", "billing": "connected"}
    return {"status": "unhealthy", "billing": "unreachable"}
