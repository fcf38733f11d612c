"""
E2E tests for design routes
"""

from src.services.admin_api import UpstreamError, UpstreamNotFoundError
from tests.e2e.e2e_test_base import E2ETestBase


class TestDesigns(E2ETestBase):
    def test_list_designs_passes_upstream_body_through(self):
        self.admin_api.fetch_designs.return_value = [{"_id": "d1", "name": "Neon"}]

        response = self.client.get("/api/designs")

        assert response.status_code == 200
        assert response.json() == [{"_id": "d1", "name": "Neon"}]

    def test_list_designs_upstream_failure_is_500(self):
        self.admin_api.fetch_designs.side_effect = UpstreamError(
            "Failed to fetch designs: Bad Gateway", status_code=502
        )

        response = self.client.get("/api/designs")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch designs"}

    def test_create_design_returns_201(self):
        payload = {"name": "Retro", "styles": [{"styleName": "Bold"}]}
        self.admin_api.create_design.return_value = {"_id": "d2", **payload}

        response = self.client.post("/api/designs", json=payload)

        assert response.status_code == 201
        assert response.json()["_id"] == "d2"
        self.admin_api.create_design.assert_called_once_with(payload)

    def test_get_missing_design_is_404(self):
        self.admin_api.fetch_design.side_effect = UpstreamNotFoundError(
            "Failed to fetch design: not found", status_code=404
        )

        response = self.client.get("/api/designs/missing-id")

        assert response.status_code == 404
        assert response.json() == {"error": "Design not found"}

    def test_update_design_forwards_id_and_body(self):
        self.admin_api.update_design.return_value = {"_id": "d1", "name": "Renamed"}

        response = self.client.put("/api/designs/d1", json={"name": "Renamed"})

        assert response.status_code == 200
        self.admin_api.update_design.assert_called_once_with("d1", {"name": "Renamed"})

    def test_update_missing_design_is_404(self):
        self.admin_api.update_design.side_effect = UpstreamNotFoundError(
            "not found", status_code=404
        )

        response = self.client.put("/api/designs/missing-id", json={"name": "x"})

        assert response.status_code == 404
        assert response.json() == {"error": "Design not found"}

    def test_delete_design(self):
        self.admin_api.delete_design.return_value = None

        response = self.client.delete("/api/designs/d1")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Design deleted successfully",
        }
        self.admin_api.delete_design.assert_called_once_with("d1")

    def test_create_design_rejects_non_object_body(self):
        response = self.client.post("/api/designs", json=["not", "an", "object"])

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request")
        self.admin_api.create_design.assert_not_called()
