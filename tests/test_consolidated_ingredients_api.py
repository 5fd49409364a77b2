"""
HTTP tests for the consolidated ingredients routes and the health endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeAIClient
from core.config import settings
from core.dependencies import get_aggregation_service, get_storage
from core.exceptions import ExternalServiceError
from main import app
from schemas.consolidation_schemas import RawIngredientLine
from schemas.meal_planning_schemas import MealPlanRecord, MealRecord
from services.ai_service import get_ai_service
from services.instacart_service import InstacartFormatService, get_instacart_service
from services.store_organization_service import StoreOrganizationService, get_store_organization_service

USER = {"X-User-ID": "user-1"}


@pytest.fixture
def ai_client():
    return FakeAIClient(error=ExternalServiceError("AI service request failed: connection refused"))


@pytest.fixture
def client(storage, aggregation_service, ai_client):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_aggregation_service] = lambda: aggregation_service
    app.dependency_overrides[get_store_organization_service] = (
        lambda: StoreOrganizationService(ai_client=ai_client, ai_enabled=True)
    )
    app.dependency_overrides[get_instacart_service] = (
        lambda: InstacartFormatService(ai_client=ai_client, ai_enabled=True)
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestAuthentication:

    def test_missing_user_header_is_rejected(self, client):
        response = client.get("/api/consolidated-ingredients/meal-plan/10")
        assert response.status_code == 401

    def test_blank_user_header_is_rejected(self, client):
        response = client.post(
            "/api/consolidated-ingredients/instacart-format",
            json={"ingredients": []},
            headers={"X-User-ID": "  "},
        )
        assert response.status_code == 401


class TestConsolidationRoutes:

    def test_meal_plan(self, client):
        response = client.get("/api/consolidated-ingredients/meal-plan/10", headers=USER)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "meal-plan-10"
        assert body["metadata"]["recipe_count"] == 2
        assert [ing["name"] for ing in body["ingredients"]] == ["Onion", "Crushed Tomatoes", "Chicken Breast"]

    def test_meal_plan_of_other_user_is_404(self, client):
        response = client.get("/api/consolidated-ingredients/meal-plan/10", headers={"X-User-ID": "user-2"})
        assert response.status_code == 404

    def test_group(self, client):
        response = client.get("/api/consolidated-ingredients/group/1", headers=USER)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Family Week - Consolidated Ingredients"
        assert body["total_cost"] == 8.0
        assert body["ingredients"][0]["used_in_plans"] == ["Adults", "Kids"]

    def test_unknown_group_is_404(self, client):
        response = client.get("/api/consolidated-ingredients/group/99", headers=USER)
        assert response.status_code == 404

    def test_group_optimization(self, client):
        response = client.get("/api/consolidated-ingredients/group/1/optimization", headers=USER)

        assert response.status_code == 200
        optimization = response.json()["optimization"]
        assert optimization["shared_ingredients"] == ["Onion"]
        assert optimization["overlap_percentage"] == 25
        assert optimization["waste_reduction_note"] == "25% waste reduction through ingredient sharing"

    def test_group_grocery_list(self, client):
        response = client.get("/api/consolidated-ingredients/group/1/grocery-list", headers=USER)

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Family Week - Consolidated Shopping List"
        assert body["items"][1]["aisle"] == "Pantry/Dry Goods"

    def test_nameless_ingredient_is_422(self, client, storage):
        storage.add_meal_plan(MealPlanRecord(id=20, user_id="user-1", name="Broken"))
        storage.add_meal(MealRecord(id=200, meal_plan_id=20, recipe_id=2000))
        storage.set_recipe_ingredients(2000, [RawIngredientLine(name=None, amount=1)])

        response = client.get("/api/consolidated-ingredients/meal-plan/20", headers=USER)

        assert response.status_code == 422


class TestShoppingRoutes:

    def test_organize_by_store_falls_back_to_categories(self, client):
        response = client.post(
            "/api/consolidated-ingredients/organize-by-store",
            json={
                "store": "Kroger",
                "ingredients": [
                    {"name": "Milk", "total_amount": 1, "unit": "gallon", "category": "dairy"},
                    {"name": "Widget", "total_amount": 1, "category": "unknown-category"},
                ],
            },
            headers=USER,
        )

        assert response.status_code == 200
        body = response.json()
        assert list(body) == ["Dairy", "Other"]
        assert body["Dairy"][0]["aisle"] == "Dairy"

    def test_organize_by_store_uses_ai_layout(self, client, ai_client):
        ai_client.error = None
        ai_client.response = '{"Dairy & Eggs": ["milk"]}'

        response = client.post(
            "/api/consolidated-ingredients/organize-by-store",
            json={"store": "Kroger", "ingredients": [{"name": "Milk", "total_amount": 1, "category": "dairy"}]},
            headers=USER,
        )

        assert response.json() == {
            "Dairy & Eggs": [{
                "name": "Milk",
                "total_amount": 1.0,
                "unit": "",
                "category": "dairy",
                "estimated_price": 0.0,
                "used_in_plans": [],
                "aisle": "Dairy & Eggs",
            }]
        }

    def test_organize_by_store_requires_store(self, client):
        response = client.post(
            "/api/consolidated-ingredients/organize-by-store",
            json={"store": "", "ingredients": []},
            headers=USER,
        )
        assert response.status_code == 422

    def test_instacart_format_fallback(self, client):
        response = client.post(
            "/api/consolidated-ingredients/instacart-format",
            json={"ingredients": [{"name": "Onion", "total_amount": 3, "unit": "each"}]},
            headers=USER,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["used_ai"] is False
        assert body["format"].startswith("Please add these items to my Instacart cart:\n- 3 each Onion\n")


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_liveness(self, client):
        assert client.get("/api/health/live").json() == {"status": "alive"}


class TestAIClientDependency:

    @pytest.fixture
    def ai_client_only(self, monkeypatch):
        monkeypatch.setattr(settings, "AI_ENHANCEMENT_ENABLED", True)
        fake = FakeAIClient(response="Please add these items to my Instacart cart:\n- 1 bag onions")
        app.dependency_overrides[get_ai_service] = lambda: fake
        with TestClient(app) as test_client:
            yield test_client, fake
        app.dependency_overrides.clear()

    def test_instacart_route_uses_injected_client(self, ai_client_only):
        client, fake = ai_client_only

        response = client.post(
            "/api/consolidated-ingredients/instacart-format",
            json={"ingredients": [{"name": "Onion", "total_amount": 3, "unit": "each"}]},
            headers=USER,
        )

        assert response.json() == {
            "format": "Please add these items to my Instacart cart:\n- 1 bag onions",
            "used_ai": True,
        }
        assert "Onion: 3 each" in fake.prompts[0]

    def test_store_route_uses_injected_client(self, ai_client_only):
        client, fake = ai_client_only
        fake.response = '{"Veg": ["onion"]}'

        response = client.post(
            "/api/consolidated-ingredients/organize-by-store",
            json={"store": "Aldi", "ingredients": [{"name": "Onion", "total_amount": 3, "category": "produce"}]},
            headers=USER,
        )

        assert list(response.json()) == ["Veg"]
        assert "Aldi" in fake.prompts[0]
