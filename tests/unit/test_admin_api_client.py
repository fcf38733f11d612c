import json
from unittest.mock import MagicMock

import pytest
import requests

from src.services.admin_api import (
    AdminApiClient,
    UpstreamConfigurationError,
    UpstreamError,
    UpstreamNotFoundError,
)
from tests.test_template import TestTemplate

ADMIN_URL = "https://admin.example.com/production"
COLLECTIONS_URL = "https://collections.example.com/production"


def make_response(status_code: int = 200, body=None, reason: str = "OK") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode()
    return response


class TestAdminApiClient(TestTemplate):
    @pytest.fixture()
    def session(self):
        return MagicMock(spec=requests.Session)

    @pytest.fixture()
    def client(self, session):
        return AdminApiClient(
            admin_base_url=f"{ADMIN_URL}/",
            collections_base_url=COLLECTIONS_URL,
            api_key="secret-key",
            timeout=5,
            session=session,
        )

    def test_admin_calls_carry_api_key(self, client, session):
        session.request.return_value = make_response(body=[{"_id": "d1"}])

        assert client.fetch_designs() == [{"_id": "d1"}]

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert (method, url) == ("GET", f"{ADMIN_URL}/admin/designs")
        assert kwargs["headers"] == {
            "x-api-key": "secret-key",
            "Content-Type": "application/json",
        }
        assert kwargs["timeout"] == 5

    def test_collections_api_gets_no_key(self, client, session):
        session.request.return_value = make_response(body=[])

        client.fetch_collections(include_inactive=True)

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert url == f"{COLLECTIONS_URL}/collections"
        assert "x-api-key" not in kwargs["headers"]
        assert kwargs["params"] == {"includeInactive": "true"}

    def test_fetch_orders_passes_skip_and_limit(self, client, session):
        session.request.return_value = make_response(body={"items": []})

        client.fetch_orders(0, 1000)

        assert session.request.call_args.kwargs["params"] == {"skip": 0, "limit": 1000}

    def test_complete_order_path(self, client, session):
        session.request.return_value = make_response(body={"status": "completed"})

        client.complete_order("o1")

        assert session.request.call_args.args == (
            "POST",
            f"{ADMIN_URL}/orders/admin/o1/complete",
        )

    def test_render_asset_key_is_one_path_segment(self, client, session):
        session.request.return_value = make_response(body={"key": "psd/a b.psd"})

        client.fetch_render_asset("psd/a b.psd")

        assert session.request.call_args.args[1] == (
            f"{ADMIN_URL}/admin/render-assets/psd%2Fa%20b.psd"
        )

    def test_missing_render_asset_is_none(self, client, session):
        session.request.return_value = make_response(404, b"", reason="Not Found")

        assert client.fetch_render_asset("nope.psd") is None

    def test_not_found_raises(self, client, session):
        session.request.return_value = make_response(404, b"missing", reason="Not Found")

        with pytest.raises(UpstreamNotFoundError) as exc_info:
            client.fetch_design("missing")

        assert exc_info.value.status_code == 404

    def test_non_2xx_raises_with_status_and_body(self, client, session):
        session.request.return_value = make_response(
            502, b"bad gateway", reason="Bad Gateway"
        )

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_partners()

        assert not isinstance(exc_info.value, UpstreamNotFoundError)
        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "bad gateway"

    @pytest.mark.parametrize(
        "status_code,reason",
        [(300, "Multiple Choices"), (302, "Found"), (304, "Not Modified")],
    )
    def test_redirect_status_raises(self, client, session, status_code, reason):
        session.request.return_value = make_response(status_code, reason=reason)

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_design("d1")

        assert exc_info.value.status_code == status_code

    def test_transport_error_raises(self, client, session):
        session.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(UpstreamError) as exc_info:
            client.fetch_designs()

        assert exc_info.value.status_code is None

    def test_empty_body_is_none(self, client, session):
        session.request.return_value = make_response(204)

        assert client.delete_design("d1") is None

    def test_invalid_json_raises(self, client, session):
        session.request.return_value = make_response(200, b"<html>")

        with pytest.raises(UpstreamError):
            client.fetch_designs()

    def test_missing_api_key_raises_before_calling(self, session):
        client = AdminApiClient(ADMIN_URL, COLLECTIONS_URL, api_key="", session=session)

        with pytest.raises(UpstreamConfigurationError):
            client.fetch_designs()

        session.request.assert_not_called()

    def test_prompt_test_payload(self, client, session):
        session.request.return_value = make_response(body={"success": True})

        client.test_prompt("Make it pop", ["uploads/a.png"])

        assert session.request.call_args.kwargs["json"] == {
            "prompt": "Make it pop",
            "imageKeys": ["uploads/a.png"],
        }

    def test_multipart_calls_let_requests_set_content_type(self, client, session):
        session.request.return_value = make_response(body={"_id": "pt1"})
        files = {"beforeImage": ("b.png", b"bytes", "image/png")}

        client.save_prompt_example("pt1", files, {"label": "x"})

        kwargs = session.request.call_args.kwargs
        assert kwargs["headers"] == {"x-api-key": "secret-key"}
        assert kwargs["files"] == files
        assert kwargs["data"] == {"label": "x"}
