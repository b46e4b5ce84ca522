import logging
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from common.core.constants import BASIC_PLAN_ID, DEFAULT_WORKSPACE_NAME
from common.core.otel_axiom_exporter import trace_span, get_logger, log_span_event
from common.db.context import transactional
from common.db.errors import is_unique_violation
from packages.billing.providers.payment import (
    PaymentProviderInterface,
    get_payment_provider,
)
from packages.plans.models.domain.plan import PlanConfig, effective_plan_config
from packages.plans.repositories.plan_repository import (
    PlanConfigRepository,
    UserPlanRepository,
)
from packages.users.models.domain.user import (
    ProviderInfo,
    SignupInput,
    User,
    UserCreateModel,
    UserCredentialCreateModel,
    UserUpdateModel,
)
from packages.users.repositories.user_repository import (
    UserCredentialRepository,
    UserRepository,
)
from packages.workspaces.models.domain.workspace import WorkspaceCreateModel
from packages.workspaces.repositories.workspace_repository import WorkspaceRepository


class UserService:
    """Service for user accounts, their plan and their billing.

    Collaborators default to the production implementations; pass fakes to
    run the business rules without a database or Stripe.
    """

    def __init__(
        self,
        user_repo: Optional[UserRepository] = None,
        credential_repo: Optional[UserCredentialRepository] = None,
        workspace_repo: Optional[WorkspaceRepository] = None,
        plan_config_repo: Optional[PlanConfigRepository] = None,
        user_plan_repo: Optional[UserPlanRepository] = None,
        payment: Optional[PaymentProviderInterface] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.user_repo = user_repo or UserRepository()
        self.credential_repo = credential_repo or UserCredentialRepository()
        self.workspace_repo = workspace_repo or WorkspaceRepository()
        self.plan_config_repo = plan_config_repo or PlanConfigRepository()
        self.user_plan_repo = user_plan_repo or UserPlanRepository()
        self.payment = payment or get_payment_provider()
        self.logger = logger or get_logger(__name__)

    @trace_span
    async def create_user(
        self, payload: SignupInput, provider_info: Optional[ProviderInfo] = None
    ) -> User:
        """
        Create a user with a billing customer and a default workspace.

        The user, workspace and credential rows commit together. A duplicate
        email is reported as 409.
        """
        self.logger.info(f"Creating user: {payload.email}")

        customer_id = await self.payment.connect_or_create_customer(payload.email)

        try:
            user = await self._insert_user(
                UserCreateModel(
                    **payload.model_dump(), stripe_customer_id=customer_id
                ),
                provider_info,
            )
        except IntegrityError as e:
            if is_unique_violation(e):
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"Email {payload.email} already used.",
                )
            self.logger.error(f"Failed to create user {payload.email}: {e}")
            raise

        self.logger.info(f"Created user with ID: {user.id}")
        return user

    @transactional
    async def _insert_user(
        self, user_data: UserCreateModel, provider_info: Optional[ProviderInfo]
    ) -> User:
        user = await self.user_repo.create(user_data)
        await self.workspace_repo.create(
            WorkspaceCreateModel(name=DEFAULT_WORKSPACE_NAME, owner_id=user.id)
        )
        if provider_info:
            await self.credential_repo.create(
                UserCredentialCreateModel(
                    user_id=user.id,
                    provider=provider_info.provider,
                    provider_user_id=provider_info.provider_user_id,
                )
            )
        return user

    @trace_span
    async def get_user(self, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        return await self.user_repo.get(user_id)

    @trace_span
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        return await self.user_repo.get_by_email(email)

    @trace_span
    async def get_user_by_stripe_customer_id(
        self, stripe_customer_id: str
    ) -> Optional[User]:
        """Get the user a Stripe customer belongs to."""
        return await self.user_repo.get_by_stripe_customer_id(stripe_customer_id)

    @trace_span
    async def update_user(
        self, user_id: int, user_update: UserUpdateModel
    ) -> Optional[User]:
        """Apply a partial update. Returns None if the user does not exist."""
        existing = await self.user_repo.get(user_id)
        if not existing:
            return None

        user = await self.user_repo.update(user_id, user_update)
        self.logger.info(f"Updated user {user_id}")
        return user

    @trace_span
    async def get_plan_config(self, user_id: int) -> Optional[PlanConfig]:
        """
        Resolve the plan that applies to a user.

        Users without a plan assignment get the basic plan as stored. Assigned
        users get their plan with the team member limit raised to the
        purchased quantity.
        """
        user_plan = await self.user_plan_repo.get_with_plan_config(user_id)

        if not user_plan:
            self.logger.warning(
                f"No plan config found for user ({user_id}). Falling back to basic."
            )
            return await self.plan_config_repo.get_config(BASIC_PLAN_ID)

        return effective_plan_config(user_plan)

    @trace_span
    async def update_allowed_team_member_count(self, user_id: int, quantity: int):
        """
        Change the number of team member seats a user pays for.

        Plans that do not allow more team members are left untouched; the
        call returns without error. Stripe is updated before the local plan,
        so a failure of the local write leaves the two out of sync.
        """
        user = await self._get_user_or_404(user_id)
        plan_config = await self.get_plan_config(user_id)

        if not plan_config or not plan_config.allow_more_team_members:
            plan_id = plan_config.id if plan_config else None
            self.logger.warning(
                f"Cannot update allowed team member count since allowMoreTeamMembers is not enabled for this plan config ({plan_id})"
            )
            return

        if not user.stripe_customer_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No billing customer found for this user",
            )

        await self.payment.update_subscription_quantity(
            user.stripe_customer_id, quantity
        )

        try:
            user_plan = await self.user_plan_repo.update_quantity(user_id, quantity)
        except Exception as e:
            self.logger.error(
                f"Billing quantity for user {user_id} is {quantity} but the local plan update failed: {e}",
                extra={
                    "user_id": user_id,
                    "stripe_customer_id": user.stripe_customer_id,
                    "quantity": quantity,
                },
            )
            raise

        if not user_plan:
            self.logger.error(
                f"Billing quantity for user {user_id} is {quantity} but the user has no plan to update",
                extra={"user_id": user_id, "quantity": quantity},
            )
            return

        log_span_event(
            f"Updated allowed team member count for user {user_id} to {quantity}",
            {"user_id": user_id, "quantity": quantity},
            logger=self.logger,
        )

    @trace_span
    async def get_billing_url(
        self, user_id: int, return_url: Optional[str] = None
    ) -> str:
        """URL of a hosted billing session, creating the Stripe customer if needed."""
        user = await self._get_user_or_404(user_id)
        customer_id = user.stripe_customer_id

        if not customer_id:
            customer_id = await self.payment.connect_or_create_customer(user.email)
            await self.user_repo.update(
                user_id, UserUpdateModel(stripe_customer_id=customer_id)
            )
            self.logger.info(
                f"Linked Stripe customer to user {user_id}",
                extra={"user_id": user_id, "customer_id": customer_id},
            )

        return await self.payment.create_billing_session(customer_id, return_url)

    async def _get_user_or_404(self, user_id: int) -> User:
        user = await self.user_repo.get(user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="User not found"
            )
        return user
