"""
Typed HTTP client for the dashboard editor.

Wraps a synchronous ``httpx.Client`` (a FastAPI ``TestClient`` works too),
keeps the bearer token and the CSRF token, and retries a rejected mutation
once after fetching a fresh CSRF token.
"""

from typing import Any, Dict, List, Optional, Sequence

import httpx

from neropage.client.reorder import build_reorder_payload
from neropage.features.auth.schemas.auth import AuthResponse, MeResponse
from neropage.features.content_blocks.schemas.content_block import ContentBlockResponse
from neropage.features.link_groups.schemas.link_group import LinkGroupResponse
from neropage.features.links.schemas.link import SocialLinkResponse
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.logger import get_logger

logger = get_logger(__name__)

CSRF_HEADER = "csrf-token"
GENERIC_ERROR = "Something went wrong. Please try again."


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __repr__(self):
        return f"ApiError(status_code={self.status_code}, message={self.message!r})"


class CsrfTokenHolder:
    """Cached CSRF token shared by every request a client makes."""

    def __init__(self, token: Optional[str] = None):
        self.token = token

    def clear(self) -> None:
        self.token = None


class NeropageClient:
    def __init__(
        self,
        http: Optional[httpx.Client] = None,
        base_url: str = "http://localhost:8000",
        access_token: Optional[str] = None,
        csrf: Optional[CsrfTokenHolder] = None,
    ):
        self.http = http if http is not None else httpx.Client(base_url=base_url, timeout=10.0)
        self.access_token = access_token
        self.csrf = csrf if csrf is not None else CsrfTokenHolder()

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ── plumbing ───────────────────────────────

    def fetch_csrf_token(self) -> str:
        response = self.http.get("/api/csrf-token")
        self._raise_for_error(response)
        self.csrf.token = response.json()["csrfToken"]
        return self.csrf.token

    def _headers(self, with_csrf: bool) -> Dict[str, str]:
        headers = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if with_csrf:
            headers[CSRF_HEADER] = self.csrf.token or self.fetch_csrf_token()
        return headers

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        if response.is_success:
            return
        if response.status_code >= 500:
            raise ApiError(response.status_code, GENERIC_ERROR)
        try:
            message = response.json().get("error") or response.reason_phrase
        except ValueError:
            message = response.text or response.reason_phrase
        raise ApiError(response.status_code, message)

    def _request(self, method: str, path: str, *, json: Any = None, csrf: bool = False) -> httpx.Response:
        response = self.http.request(method, path, json=json, headers=self._headers(csrf))
        if csrf and response.status_code == 403:
            logger.info(f"{method} {path} rejected with 403, refreshing CSRF token and retrying")
            self.fetch_csrf_token()
            response = self.http.request(method, path, json=json, headers=self._headers(csrf))
        self._raise_for_error(response)
        return response

    # ── auth ───────────────────────────────────

    def _authenticate(self, path: str, username: str, password: str) -> AuthResponse:
        response = self._request("POST", path, json={"username": username, "password": password})
        auth = AuthResponse.model_validate(response.json())
        self.access_token = auth.access_token
        return auth

    def signup(self, username: str, password: str) -> AuthResponse:
        return self._authenticate("/api/auth/signup", username, password)

    def login(self, username: str, password: str) -> AuthResponse:
        return self._authenticate("/api/auth/login", username, password)

    def me(self) -> MeResponse:
        return MeResponse.model_validate(self._request("GET", "/api/auth/me").json())

    def logout(self) -> None:
        self._request("POST", "/api/auth/logout")
        self.access_token = None
        self.csrf.clear()

    # ── profile ────────────────────────────────

    def get_profile(self) -> ProfileResponse:
        return ProfileResponse.model_validate(self._request("GET", "/api/profiles/me").json())

    def update_profile(self, **changes: Any) -> ProfileResponse:
        response = self._request("PATCH", "/api/profiles/me", json=changes, csrf=True)
        return ProfileResponse.model_validate(response.json())

    def preview_template(self, template_html: str) -> str:
        response = self._request("POST", "/api/profiles/me/template-preview", json={"templateHTML": template_html})
        return response.json()["html"]

    # ── links ──────────────────────────────────

    def list_links(self) -> List[SocialLinkResponse]:
        return [SocialLinkResponse.model_validate(item) for item in self._request("GET", "/api/links").json()]

    def create_link(self, platform: str, url: str, **fields: Any) -> SocialLinkResponse:
        payload = {"platform": platform, "url": url, **fields}
        return SocialLinkResponse.model_validate(self._request("POST", "/api/links", json=payload, csrf=True).json())

    def update_link(self, link_id: str, **changes: Any) -> SocialLinkResponse:
        response = self._request("PATCH", f"/api/links/{link_id}", json=changes, csrf=True)
        return SocialLinkResponse.model_validate(response.json())

    def delete_link(self, link_id: str) -> None:
        self._request("DELETE", f"/api/links/{link_id}", csrf=True)

    def reorder_links(self, links: Sequence[Any]) -> List[SocialLinkResponse]:
        """Persist the given order, then re-fetch the server's view of it."""
        self._request("POST", "/api/links/reorder", json={"links": build_reorder_payload(links)}, csrf=True)
        return self.list_links()

    # ── link groups ────────────────────────────

    def list_link_groups(self) -> List[LinkGroupResponse]:
        return [LinkGroupResponse.model_validate(item) for item in self._request("GET", "/api/link-groups").json()]

    def create_link_group(self, name: str) -> LinkGroupResponse:
        response = self._request("POST", "/api/link-groups", json={"name": name}, csrf=True)
        return LinkGroupResponse.model_validate(response.json())

    def delete_link_group(self, group_id: str) -> None:
        self._request("DELETE", f"/api/link-groups/{group_id}", csrf=True)

    # ── content blocks ─────────────────────────

    def list_content_blocks(self) -> List[ContentBlockResponse]:
        response = self._request("GET", "/api/content-blocks")
        return [ContentBlockResponse.model_validate(item) for item in response.json()]

    def create_content_block(self, block_type: str, **fields: Any) -> ContentBlockResponse:
        response = self._request("POST", "/api/content-blocks", json={"type": block_type, **fields}, csrf=True)
        return ContentBlockResponse.model_validate(response.json())

    def update_content_block(self, block_id: str, **changes: Any) -> ContentBlockResponse:
        response = self._request("PATCH", f"/api/content-blocks/{block_id}", json=changes, csrf=True)
        return ContentBlockResponse.model_validate(response.json())

    def delete_content_block(self, block_id: str) -> None:
        self._request("DELETE", f"/api/content-blocks/{block_id}", csrf=True)

    def reorder_content_blocks(self, blocks: Sequence[Any]) -> List[ContentBlockResponse]:
        payload = {"blocks": build_reorder_payload(blocks)}
        self._request("POST", "/api/content-blocks/reorder", json=payload, csrf=True)
        return self.list_content_blocks()

    # ── analytics ──────────────────────────────

    def track_click(self, link_id: str) -> bool:
        """Best effort: a failed click never interrupts navigation."""
        try:
            self._request("POST", f"/api/links/{link_id}/click")
        except (ApiError, httpx.HTTPError) as e:
            logger.warning(f"Click tracking failed for link {link_id}: {e}")
            return False
        return True

    def track_view(self, username: str) -> bool:
        try:
            self._request("POST", f"/api/profiles/{username}/view")
        except (ApiError, httpx.HTTPError) as e:
            logger.warning(f"View tracking failed for {username}: {e}")
            return False
        return True
