import pytest

from packages.plans.repositories.plan_repository import (
    PlanConfigRepository,
    UserPlanRepository,
)
from packages.plans.models.domain.plan import UserPlanCreateModel


class TestPlanConfigRepository:
    """Test PlanConfigRepository methods."""

    @pytest.fixture
    async def repository(self):
        return PlanConfigRepository()

    async def test_get_config(self, repository, basic_plan_config):
        """Test loading a plan config by its string id."""
        result = await repository.get_config("basic")

        assert result is not None
        assert result.id == "basic"
        assert result.max_query_count == 20
        assert result.allow_more_team_members is False

    async def test_get_config_not_exists(self, repository):
        """Test loading an unknown plan config."""
        assert await repository.get_config("enterprise") is None


class TestUserPlanRepository:
    """Test UserPlanRepository methods."""

    @pytest.fixture
    async def repository(self):
        return UserPlanRepository()

    async def test_create_and_get_by_user_id(
        self, repository, sample_user_entity, pro_plan_config
    ):
        """Test assigning a plan and reading it back."""
        created = await repository.create(
            UserPlanCreateModel(
                user_id=sample_user_entity.id, plan_config_id=pro_plan_config.id
            )
        )

        result = await repository.get_by_user_id(sample_user_entity.id)

        assert result.id == created.id
        assert result.plan_config_id == "pro"
        assert result.quantity == 1

    async def test_get_with_plan_config(self, repository, sample_user_plan):
        """Test the assignment comes back joined with its config."""
        result = await repository.get_with_plan_config(sample_user_plan.user_id)

        assert result is not None
        assert result.quantity == 1
        assert result.plan_config.id == "pro"
        assert result.plan_config.max_team_member_count == 5
        assert result.plan_config.allow_more_team_members is True

    async def test_get_with_plan_config_not_assigned(
        self, repository, sample_user_entity
    ):
        """Test users without an assignment get None."""
        assert await repository.get_with_plan_config(sample_user_entity.id) is None

    async def test_update_quantity(self, repository, sample_user_plan):
        """Test the purchased quantity is written."""
        result = await repository.update_quantity(sample_user_plan.user_id, 12)

        assert result is not None
        assert result.quantity == 12

    async def test_update_quantity_not_assigned(self, repository, sample_user_entity):
        """Test updating a user without a plan returns None."""
        assert await repository.update_quantity(sample_user_entity.id, 3) is None
