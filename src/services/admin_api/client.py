"""HTTP client for the Lambda-backed admin API and the public collections API."""

from typing import Any
from urllib.parse import quote

import requests
from requests.exceptions import RequestException
from loguru import logger as log

from common import global_config
from src.services.admin_api.exceptions import (
    UpstreamConfigurationError,
    UpstreamError,
    UpstreamNotFoundError,
)
from src.utils.logging_config import setup_logging

setup_logging()

API_KEY_HEADER = "x-api-key"


class AdminApiClient:
    """Thin wrapper around the upstream admin API.

    One method per upstream operation. Every admin call carries the static
    API key header; the collections API is public and gets no key. Any
    non-2xx response raises UpstreamError (UpstreamNotFoundError for 404).
    Nothing is retried.
    """

    def __init__(
        self,
        admin_base_url: str,
        collections_base_url: str,
        api_key: str,
        timeout: float = 30,
        session: requests.Session | None = None,
    ):
        self.admin_base_url = admin_base_url.rstrip("/")
        self.collections_base_url = collections_base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> "AdminApiClient":
        return cls(
            admin_base_url=global_config.admin_api_base_url,
            collections_base_url=global_config.collections_api_base_url,
            api_key=global_config.ADMIN_API_KEY,
            timeout=global_config.admin_api.timeout_seconds,
        )

    def _admin_headers(self, json_body: bool = True) -> dict[str, str]:
        if not self.admin_base_url or not self.api_key:
            log.error(
                f"Admin API configuration missing "
                f"(has base url: {bool(self.admin_base_url)}, has api key: {bool(self.api_key)})"
            )
            raise UpstreamConfigurationError("Admin API configuration missing")

        headers = {API_KEY_HEADER: self.api_key}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _request(
        self,
        method: str,
        url: str,
        action: str,
        headers: dict[str, str],
        **kwargs: Any,
    ) -> Any:
        """Issue one upstream call and return the decoded JSON body (None if empty)."""
        log.debug(f"{method} {url} ({action})")
        try:
            response = self.session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except RequestException as e:
            log.error(f"Error trying to {action}: {str(e)}")
            raise UpstreamError(f"Failed to {action}: {str(e)}") from e

        if response.status_code == 404:
            log.warning(f"Upstream returned 404 trying to {action}: {url}")
            raise UpstreamNotFoundError(
                f"Failed to {action}: not found",
                status_code=404,
                body=response.text,
            )

        if not 200 <= response.status_code < 300:
            log.error(
                f"Upstream error trying to {action}: "
                f"{response.status_code} {response.reason} {response.text[:500]}"
            )
            raise UpstreamError(
                f"Failed to {action}: {response.reason or response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            log.error(f"Upstream returned invalid JSON trying to {action}: {str(e)}")
            raise UpstreamError(
                f"Failed to {action}: invalid JSON response",
                status_code=response.status_code,
                body=response.text,
            ) from e

    def _admin(
        self, method: str, path: str, action: str, json_body: bool = True, **kwargs: Any
    ) -> Any:
        return self._request(
            method,
            f"{self.admin_base_url}{path}",
            action,
            self._admin_headers(json_body=json_body),
            **kwargs,
        )

    # ==================== Designs ====================

    def fetch_designs(self) -> Any:
        return self._admin("GET", "/admin/designs", "fetch designs")

    def fetch_design(self, design_id: str) -> Any:
        return self._admin("GET", f"/admin/designs/{quote(design_id)}", "fetch design")

    def create_design(self, design: dict[str, Any]) -> Any:
        return self._admin("POST", "/admin/designs", "create design", json=design)

    def update_design(self, design_id: str, design: dict[str, Any]) -> Any:
        return self._admin(
            "PUT", f"/admin/designs/{quote(design_id)}", "update design", json=design
        )

    def delete_design(self, design_id: str) -> Any:
        return self._admin(
            "DELETE", f"/admin/designs/{quote(design_id)}", "delete design"
        )

    # ==================== Collections ====================

    def fetch_collections(self, include_inactive: bool = False) -> Any:
        params = {"includeInactive": "true"} if include_inactive else None
        return self._request(
            "GET",
            f"{self.collections_base_url}/collections",
            "fetch collections",
            {"Content-Type": "application/json"},
            params=params,
        )

    def fetch_collection(self, slug: str) -> Any:
        return self._request(
            "GET",
            f"{self.collections_base_url}/collections/{quote(slug)}",
            "fetch collection",
            {"Content-Type": "application/json"},
        )

    # ==================== Orders ====================

    def fetch_orders(self, skip: int = 0, limit: int = 100) -> Any:
        return self._admin(
            "GET",
            "/admin/orders",
            "fetch orders",
            params={"skip": skip, "limit": limit},
        )

    def fetch_order(self, order_id: str) -> Any:
        return self._admin("GET", f"/admin/orders/{quote(order_id)}", "fetch order")

    def complete_order(self, order_id: str) -> Any:
        # The completion endpoint lives under /orders, not /admin
        return self._admin(
            "POST", f"/orders/admin/{quote(order_id)}/complete", "complete order"
        )

    # ==================== Partners ====================

    def fetch_partners(self) -> Any:
        return self._admin("GET", "/admin/partners", "fetch partners")

    def fetch_partner(self, partner_id: str) -> Any:
        return self._admin(
            "GET", f"/admin/partners/{quote(partner_id)}", "fetch partner"
        )

    def create_partner(self, partner: dict[str, Any]) -> Any:
        return self._admin("POST", "/admin/partners", "create partner", json=partner)

    def update_partner(self, partner_id: str, partner: dict[str, Any]) -> Any:
        return self._admin(
            "PUT",
            f"/admin/partners/{quote(partner_id)}",
            "update partner",
            json=partner,
        )

    def delete_partner(self, partner_id: str) -> Any:
        return self._admin(
            "DELETE", f"/admin/partners/{quote(partner_id)}", "delete partner"
        )

    # ==================== Prompt templates ====================

    def fetch_prompt_templates(self) -> Any:
        return self._admin("GET", "/admin/prompt-templates", "fetch prompt templates")

    def fetch_prompt_template(self, prompt_id: str) -> Any:
        return self._admin(
            "GET",
            f"/admin/prompt-templates/{quote(prompt_id)}",
            "fetch prompt template",
        )

    def create_prompt_template(self, template: dict[str, Any]) -> Any:
        return self._admin(
            "POST",
            "/admin/prompt-templates",
            "create prompt template",
            json=template,
        )

    def update_prompt_template(self, prompt_id: str, template: dict[str, Any]) -> Any:
        return self._admin(
            "PUT",
            f"/admin/prompt-templates/{quote(prompt_id)}",
            "update prompt template",
            json=template,
        )

    def delete_prompt_template(self, prompt_id: str) -> None:
        self._admin(
            "DELETE",
            f"/admin/prompt-templates/{quote(prompt_id)}",
            "delete prompt template",
        )

    def test_prompt(self, prompt: str, image_keys: list[str]) -> Any:
        """Run a prompt against images already in object storage."""
        return self._admin(
            "POST",
            "/admin/prompt-templates/test",
            "test prompt",
            json={"prompt": prompt, "imageKeys": image_keys},
        )

    def save_prompt_example(
        self,
        prompt_id: str,
        files: dict[str, tuple[str, bytes, str]],
        data: dict[str, str] | None = None,
    ) -> Any:
        # Multipart body: requests sets the boundary content-type itself
        return self._admin(
            "PUT",
            f"/admin/prompt-templates/{quote(prompt_id)}/save-example",
            "save prompt example",
            json_body=False,
            files=files,
            data=data or {},
        )

    # ==================== Render assets ====================

    @staticmethod
    def _asset_path(key: str) -> str:
        # Keys are PSD paths; slashes must stay inside a single path segment
        return f"/admin/render-assets/{quote(key, safe='')}"

    def fetch_render_assets(self) -> Any:
        return self._admin("GET", "/admin/render-assets", "fetch render assets")

    def fetch_render_asset(self, key: str) -> Any | None:
        try:
            return self._admin("GET", self._asset_path(key), "fetch render asset")
        except UpstreamNotFoundError:
            return None

    def create_render_asset(self, asset: dict[str, Any]) -> Any:
        return self._admin(
            "POST", "/admin/render-assets", "create render asset", json=asset
        )

    def update_render_asset(self, key: str, asset: dict[str, Any]) -> Any:
        return self._admin(
            "PUT", self._asset_path(key), "update render asset", json=asset
        )

    def upsert_render_asset(self, asset: dict[str, Any]) -> Any:
        return self._admin(
            "PUT", "/admin/render-assets", "upsert render asset", json=asset
        )

    def delete_render_asset(self, key: str) -> None:
        self._admin("DELETE", self._asset_path(key), "delete render asset")

    # ==================== Files ====================

    def upload_file(
        self,
        files: dict[str, tuple[str, bytes, str]],
        data: dict[str, str],
    ) -> Any:
        return self._admin(
            "POST",
            "/admin/files/upload",
            "upload file",
            json_body=False,
            files=files,
            data=data,
        )
