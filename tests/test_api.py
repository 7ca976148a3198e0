"""Tests for the stateless bill API."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.main import app


@pytest.fixture(scope="module")
def client():
    """Create a test client with proper lifespan handling."""
    with TestClient(app) as c:
        yield c


def _default_state(client: TestClient) -> dict:
    """Helper: fetch the default bill state."""
    response = client.get("/api/bill/default")
    assert response.status_code == 200
    return response.json()


class TestCalculate:
    """Tests for the calculation endpoint."""

    def test_worked_example(self, client: TestClient) -> None:
        """Test splitting the default bill."""
        response = client.post("/api/bill/calculate", json=_default_state(client))
        assert response.status_code == 200
        data = response.json()

        assert Decimal(data["total_used"]) == Decimal("49.18")
        assert Decimal(data["unaccounted"]) == Decimal("3.62")
        assert Decimal(data["unit_price"]) == Decimal("227.27")
        bills = [Decimal(r["bill"]) for r in data["results"]]
        assert bills == [Decimal("7020.45"), Decimal("4979.55")]
        assert Decimal(data["total_billed"]) == Decimal("12000")

    def test_zero_units(self, client: TestClient) -> None:
        """Test zero purchased units returns a null unit price."""
        response = client.post(
            "/api/bill/calculate",
            json={
                "tenants": [{"name": "Flat 1", "previous": "0", "current": "10"}],
                "parameters": {"total_units": "0", "total_amount": "500"},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["unit_price"] is None
        assert Decimal(data["results"][0]["bill"]) == Decimal("0")

    def test_empty_tenant_list_rejected(self, client: TestClient) -> None:
        """Test a bill without tenants is invalid."""
        response = client.post(
            "/api/bill/calculate",
            json={"tenants": [], "parameters": {"total_units": "10", "total_amount": "100"}},
        )
        assert response.status_code == 422

    def test_negative_totals_rejected(self, client: TestClient) -> None:
        """Test negative bill totals are invalid."""
        state = _default_state(client)
        state["parameters"]["total_units"] = "-1"
        response = client.post("/api/bill/calculate", json=state)
        assert response.status_code == 422

    @pytest.mark.parametrize(
        ("section", "field", "value"),
        [
            ("tenant", "current", "1e30"),
            ("parameters", "total_units", "1e-27"),
            ("parameters", "total_amount", "1e30"),
        ],
    )
    def test_out_of_range_values_rejected(
        self, client: TestClient, section: str, field: str, value: str
    ) -> None:
        """Test values that cannot be rounded to cents are invalid."""
        state = _default_state(client)
        target = state["tenants"][0] if section == "tenant" else state["parameters"]
        target[field] = value
        response = client.post("/api/bill/calculate", json=state)
        assert response.status_code == 422

    def test_duplicate_ids_rejected(self, client: TestClient) -> None:
        """Test tenant ids must be unique."""
        state = _default_state(client)
        state["tenants"][1]["id"] = state["tenants"][0]["id"]
        response = client.post("/api/bill/calculate", json=state)
        assert response.status_code == 422


class TestTenantEndpoints:
    """Tests for tenant edits through the API."""

    def test_add(self, client: TestClient) -> None:
        """Test adding a tenant returns the new state."""
        response = client.post("/api/bill/tenants", json=_default_state(client))
        assert response.status_code == 201
        tenants = response.json()["tenants"]
        assert len(tenants) == 3
        assert tenants[-1]["name"] == "Tenant C"

    def test_update(self, client: TestClient) -> None:
        """Test replacing a single field."""
        state = _default_state(client)
        tenant_id = state["tenants"][0]["id"]
        response = client.post(
            "/api/bill/tenants/update",
            json={"state": state, "tenant_id": tenant_id, "field": "current", "value": "130"},
        )
        assert response.status_code == 200
        assert Decimal(response.json()["tenants"][0]["current"]) == Decimal("130")

    def test_update_invalid_value(self, client: TestClient) -> None:
        """Test a non-numeric reading is rejected."""
        state = _default_state(client)
        response = client.post(
            "/api/bill/tenants/update",
            json={
                "state": state,
                "tenant_id": state["tenants"][0]["id"],
                "field": "previous",
                "value": "lots",
            },
        )
        assert response.status_code == 400

    def test_update_out_of_range_value(self, client: TestClient) -> None:
        """Test an oversized reading is rejected."""
        state = _default_state(client)
        response = client.post(
            "/api/bill/tenants/update",
            json={
                "state": state,
                "tenant_id": state["tenants"][0]["id"],
                "field": "current",
                "value": "1e30",
            },
        )
        assert response.status_code == 400
        assert "at most 8 digits" in response.json()["detail"]

    def test_remove(self, client: TestClient) -> None:
        """Test removing one of two tenants."""
        state = _default_state(client)
        response = client.post(
            "/api/bill/tenants/remove",
            json={"state": state, "tenant_id": state["tenants"][0]["id"]},
        )
        assert response.status_code == 200
        assert len(response.json()["tenants"]) == 1

    def test_remove_last_refused(self, client: TestClient) -> None:
        """Test removing the only tenant is refused."""
        state = _default_state(client)
        state["tenants"] = state["tenants"][:1]
        response = client.post(
            "/api/bill/tenants/remove",
            json={"state": state, "tenant_id": state["tenants"][0]["id"]},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "At least one tenant is required."

    def test_update_parameters(self, client: TestClient) -> None:
        """Test replacing the bill totals."""
        response = client.put(
            "/api/bill/parameters",
            json={
                "state": _default_state(client),
                "parameters": {"total_units": "60", "total_amount": "15000"},
            },
        )
        assert response.status_code == 200
        assert Decimal(response.json()["parameters"]["total_amount"]) == Decimal("15000")


class TestExportEndpoint:
    """Tests for report downloads through the API."""

    @pytest.mark.parametrize(
        ("export_format", "media_type", "magic"),
        [
            ("pdf", "application/pdf", b"%PDF"),
            ("xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", b"PK"),
            ("png", "image/png", b"\x89PNG"),
        ],
    )
    def test_export(
        self,
        client: TestClient,
        export_format: str,
        media_type: str,
        magic: bytes,
    ) -> None:
        """Test each format downloads as an attachment."""
        response = client.post(f"/api/bill/export/{export_format}", json=_default_state(client))
        assert response.status_code == 200
        assert response.headers["content-type"] == media_type
        assert (
            f'filename="electricity-bill-split.{export_format}"'
            in response.headers["content-disposition"]
        )
        assert response.content.startswith(magic)

    def test_unknown_format(self, client: TestClient) -> None:
        """Test an unsupported format is rejected."""
        response = client.post("/api/bill/export/docx", json=_default_state(client))
        assert response.status_code == 422
