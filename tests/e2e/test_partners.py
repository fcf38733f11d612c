"""
E2E tests for partner routes
"""

from common import global_config
from src.services.admin_api import UpstreamError, UpstreamNotFoundError
from tests.e2e.e2e_test_base import E2ETestBase


def live_order(partner_id: str, price, created_at: str, **extra) -> dict:
    return {
        "affiliate_id": partner_id,
        "stripeSessionId": "cs_live_abc123",
        "status": "completed",
        "price": price,
        "createdAt": created_at,
        **extra,
    }


class TestPartners(E2ETestBase):
    def test_list_partners_adds_percentage(self):
        self.admin_api.fetch_partners.return_value = [
            {"_id": "acme", "revenueShare": 0.25},
            {"_id": "bare"},
        ]

        data = self.client.get("/api/partners").json()

        assert data[0]["revenueSharePercent"] == 25.0
        assert "revenueSharePercent" not in data[1]

    def test_create_partner_converts_percentage(self):
        self.admin_api.create_partner.side_effect = lambda partner: {
            "_id": "p1",
            **partner,
        }

        response = self.client.post(
            "/api/partners", json={"name": "Acme", "revenueSharePercent": 12.5}
        )

        assert response.status_code == 201
        sent = self.admin_api.create_partner.call_args.args[0]
        assert sent == {"name": "Acme", "revenueShare": 0.125}
        assert response.json()["revenueSharePercent"] == 12.5

    def test_create_partner_accepts_fraction(self):
        self.admin_api.create_partner.return_value = {"_id": "p1"}

        self.client.post("/api/partners", json={"name": "Acme", "revenueShare": 0.3})

        sent = self.admin_api.create_partner.call_args.args[0]
        assert sent == {"name": "Acme", "revenueShare": 0.3}

    def test_revenue_share_out_of_range_is_400(self):
        response = self.client.post(
            "/api/partners", json={"name": "Acme", "revenueShare": 1.5}
        )

        assert response.status_code == 400
        self.admin_api.create_partner.assert_not_called()

    def test_revenue_share_percentage_out_of_range_is_400(self):
        response = self.client.put(
            "/api/partners/p1", json={"revenueSharePercent": 150}
        )

        assert response.status_code == 400
        assert "between 0 and 100" in response.json()["error"]
        self.admin_api.update_partner.assert_not_called()

    def test_missing_partner_is_404(self):
        self.admin_api.fetch_partner.side_effect = UpstreamNotFoundError(
            "not found", status_code=404
        )

        response = self.client.get("/api/partners/ghost")

        assert response.status_code == 404
        assert response.json() == {"error": "Partner not found"}

    def test_delete_partner(self):
        self.admin_api.delete_partner.return_value = None

        response = self.client.delete("/api/partners/p1")

        assert response.status_code == 200
        assert response.json() == {"success": True}


class TestPartnerSales(E2ETestBase):
    def test_two_january_orders_make_one_bucket(self):
        self.admin_api.fetch_orders.return_value = {
            "items": [
                live_order("acme", 10.00, "2024-01-05T10:00:00Z"),
                live_order("acme", 15.50, "2024-01-20T18:30:00Z"),
            ]
        }

        response = self.client.get("/api/partners/acme/sales")

        assert response.status_code == 200
        assert response.json() == {
            "partnerId": "acme",
            "monthlySales": [
                {
                    "year": 2024,
                    "month": 1,
                    "monthName": "January 2024",
                    "totalSales": 25.5,
                    "orderCount": 2,
                }
            ],
            "totalSales": 25.5,
            "totalOrders": 2,
        }
        self.admin_api.fetch_orders.assert_called_once_with(
            0, global_config.orders.sales_fetch_limit
        )

    def test_test_mode_and_foreign_orders_are_ignored(self):
        self.admin_api.fetch_orders.return_value = {
            "items": [
                live_order("acme", 10, "2024-02-01T00:00:00Z"),
                live_order("other", 99, "2024-02-01T00:00:00Z"),
                live_order(
                    "acme", 50, "2024-02-02T00:00:00Z", stripeSessionId="cs_test_x"
                ),
                live_order("acme", 70, "2024-02-03T00:00:00Z", status="pending"),
            ]
        }

        data = self.client.get("/api/partners/acme/sales").json()

        assert data["totalSales"] == 10
        assert data["totalOrders"] == 1

    def test_non_finite_price_counts_as_zero(self):
        self.admin_api.fetch_orders.return_value = {
            "items": [
                live_order("acme", "Infinity", "2024-03-01T00:00:00Z"),
                live_order("acme", 12, "2024-03-02T00:00:00Z"),
            ]
        }

        response = self.client.get("/api/partners/acme/sales")

        assert response.status_code == 200
        assert response.json()["totalSales"] == 12
        assert response.json()["totalOrders"] == 2

    def test_sales_upstream_failure_is_500(self):
        self.admin_api.fetch_orders.side_effect = UpstreamError("boom", status_code=500)

        response = self.client.get("/api/partners/acme/sales")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch partner sales"}
