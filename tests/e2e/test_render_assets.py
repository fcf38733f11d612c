"""
E2E tests for render asset routes
"""

from tests.e2e.e2e_test_base import E2ETestBase


class TestRenderAssets(E2ETestBase):
    def test_get_asset_with_slashes_in_key(self):
        self.admin_api.fetch_render_asset.return_value = {"key": "psd/neon/main.psd"}

        response = self.client.get("/api/render-assets/psd%2Fneon%2Fmain.psd")

        assert response.status_code == 200
        self.admin_api.fetch_render_asset.assert_called_once_with("psd/neon/main.psd")

    def test_missing_asset_is_404(self):
        self.admin_api.fetch_render_asset.return_value = None

        response = self.client.get("/api/render-assets/psd/missing.psd")

        assert response.status_code == 404
        assert response.json() == {"error": "Render asset not found"}

    def test_create_asset_returns_201(self):
        self.admin_api.create_render_asset.return_value = {"key": "a.psd"}

        response = self.client.post("/api/render-assets", json={"key": "a.psd"})

        assert response.status_code == 201

    def test_upsert_asset(self):
        self.admin_api.upsert_render_asset.return_value = {"key": "a.psd", "v": 2}

        response = self.client.put("/api/render-assets", json={"key": "a.psd", "v": 2})

        assert response.status_code == 200
        self.admin_api.upsert_render_asset.assert_called_once_with({"key": "a.psd", "v": 2})

    def test_update_asset_by_key(self):
        self.admin_api.update_render_asset.return_value = {"key": "psd/a.psd"}

        self.client.put("/api/render-assets/psd/a.psd", json={"layers": 3})

        self.admin_api.update_render_asset.assert_called_once_with(
            "psd/a.psd", {"layers": 3}
        )

    def test_delete_asset_returns_204(self):
        response = self.client.delete("/api/render-assets/psd/a.psd")

        assert response.status_code == 204
        self.admin_api.delete_render_asset.assert_called_once_with("psd/a.psd")
