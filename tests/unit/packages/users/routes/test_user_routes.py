"""
Unit tests for user account API routes.

Tests API endpoints with mocked external providers.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from api.main import app
from packages.queries.services.query_service import QueryService
from packages.query_collections.services.collection_service import (
    QueryCollectionService,
)
from packages.teams.services.team_service import TeamService
from packages.users.dependencies import (
    get_collection_service,
    get_query_service,
    get_team_service,
)


def _counting_service(own: int, access: int):
    async def count(user_id, own_only):
        return own if own_only else access

    service = AsyncMock()
    service.count = AsyncMock(side_effect=count)
    return service


def _provide(service):
    def dependency():
        return service

    return dependency


class TestBillingRoute:
    """Tests for GET /api/v1/user/billing."""

    async def test_returns_portal_url(self, client, mock_payment_provider):
        response = await client.get(
            "/api/v1/user/billing",
            headers={"Referer": "https://app.example.com/settings"},
        )

        assert response.status_code == 200
        assert response.json() == {"url": "https://billing.stripe.com/session/test123"}
        mock_payment_provider.create_billing_session.assert_awaited_once_with(
            "cus_test123", "https://app.example.com/settings"
        )

    async def test_without_referer(self, client, mock_payment_provider):
        response = await client.get("/api/v1/user/billing")

        assert response.status_code == 200
        mock_payment_provider.create_billing_session.assert_awaited_once_with(
            "cus_test123", None
        )

    async def test_billing_failure(self, client, mock_payment_provider):
        mock_payment_provider.create_billing_session.side_effect = Exception(
            "Stripe down"
        )

        with pytest.raises(Exception):
            await client.get("/api/v1/user/billing")


class TestPlanRoute:
    """Tests for GET /api/v1/user/plan."""

    async def test_basic_plan(self, client, basic_plan_config):
        response = await client.get("/api/v1/user/plan")

        assert response.status_code == 200
        assert response.json() == {
            "max_query_count": 20,
            "max_team_count": 1,
            "max_team_member_count": 2,
        }

    async def test_assigned_plan_with_seats(self, client, sample_user_plan, test_db):
        sample_user_plan.quantity = 12
        await test_db.commit()

        response = await client.get("/api/v1/user/plan")

        assert response.status_code == 200
        assert response.json() == {
            "max_query_count": 1000,
            "max_team_count": 10,
            "max_team_member_count": 12,
        }

    async def test_no_plan_returns_zeros(self, client):
        response = await client.get("/api/v1/user/plan")

        assert response.status_code == 200
        assert response.json() == {
            "max_query_count": 0,
            "max_team_count": 0,
            "max_team_member_count": 0,
        }


class TestStatsRoute:
    """Tests for GET /api/v1/user/stats."""

    @pytest.fixture
    def counting_services(self):
        services = {
            get_query_service: _counting_service(own=3, access=4),
            get_collection_service: _counting_service(own=2, access=3),
            get_team_service: _counting_service(own=1, access=2),
        }
        for dependency, service in services.items():
            app.dependency_overrides[dependency] = _provide(service)
        return services

    async def test_stats(self, client, counting_services, test_user):
        response = await client.get("/api/v1/user/stats")

        assert response.status_code == 200
        assert response.json() == {
            "queries": {"own": 3, "access": 4},
            "collections": {"own": 2, "access": 3},
            "teams": {"own": 1, "access": 2},
        }
        for service in counting_services.values():
            assert service.count.await_count == 2
            awaited_users = {call.args[0] for call in service.count.await_args_list}
            assert awaited_users == {test_user.user_id}

    async def test_stats_failure_propagates(self, client, counting_services):
        counting_services[get_team_service].count.side_effect = Exception("db gone")

        with pytest.raises(Exception):
            await client.get("/api/v1/user/stats")


class _SerializedCounter:
    """Real counting service whose calls take turns on the shared test connection."""

    def __init__(self, service, lock: asyncio.Lock):
        self.service = service
        self.lock = lock

    async def count(self, user_id, own):
        async with self.lock:
            return await self.service.count(user_id, own)


class TestStatsRouteSeeded:
    """GET /api/v1/user/stats against seeded teams, collections and queries."""

    @pytest.fixture
    def real_counting_services(self):
        lock = asyncio.Lock()
        services = {
            get_query_service: QueryService(),
            get_collection_service: QueryCollectionService(),
            get_team_service: TeamService(),
        }
        for dependency, service in services.items():
            app.dependency_overrides[dependency] = _provide(
                _SerializedCounter(service, lock)
            )
        return services

    async def test_stats_match_counting_services(
        self, client, real_counting_services, sharing_world
    ):
        response = await client.get("/api/v1/user/stats")

        assert response.status_code == 200
        data = response.json()

        expected = {}
        for key, dependency in (
            ("queries", get_query_service),
            ("collections", get_collection_service),
            ("teams", get_team_service),
        ):
            service = real_counting_services[dependency]
            expected[key] = {
                "own": await service.count(sharing_world.id, True),
                "access": await service.count(sharing_world.id, False),
            }

        assert data == expected
        assert data == {
            "queries": {"own": 3, "access": 4},
            "collections": {"own": 2, "access": 3},
            "teams": {"own": 1, "access": 2},
        }
