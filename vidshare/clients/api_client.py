"""Async HTTP client for the video-sharing API."""
from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Any, BinaryIO, Callable, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config import get_settings
from ..schemas import (
    FollowResponse,
    Identity,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UnfollowResponse,
    UploadVideoRequest,
    UserProfile,
    Video,
    VideoStreamResponse,
    Visibility,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

TokenProvider = Callable[[], Union[str, None]]
UploadSource = Union[bytes, str, Path, BinaryIO]


class APIError(RuntimeError):
    """Raised when a call to the video-sharing API fails."""

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class UnauthorizedError(APIError):
    """Raised when the server rejects the bearer token or the login credentials."""


class NotFoundError(APIError):
    """Raised when the requested resource does not exist."""


class APIRequestError(APIError):
    """Raised for any other error status returned by the server."""


class APITransportError(APIError):
    """Raised when the server cannot be reached or does not answer in time."""


class APIResponseError(APIError):
    """Raised when the server answers with a body that cannot be understood."""


def _error_detail(response: httpx.Response) -> str:
    fallback = f"Request failed with status {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, str) and detail.strip():
        return detail.strip()
    if isinstance(detail, list):
        messages = [str(entry.get("msg")) for entry in detail if isinstance(entry, dict) and entry.get("msg")]
        if messages:
            return "; ".join(messages)
    return fallback


def _status_error(response: httpx.Response) -> APIError:
    detail = _error_detail(response)
    status_code = response.status_code
    if status_code == httpx.codes.UNAUTHORIZED:
        return UnauthorizedError(detail, status_code=status_code)
    if status_code == httpx.codes.NOT_FOUND:
        return NotFoundError(detail, status_code=status_code)
    return APIRequestError(detail, status_code=status_code)


def _upload_part(source: UploadSource, filename: str | None, content_type: str | None) -> tuple[str, Any, str]:
    if isinstance(source, (str, Path)):
        path = Path(source)
        name = filename or path.name
        payload: Any = path.read_bytes()
    else:
        name = filename or getattr(source, "name", None) or "upload.mp4"
        name = Path(str(name)).name
        payload = source
    guessed, _ = mimetypes.guess_type(name)
    return name, payload, content_type or guessed or "application/octet-stream"


class VidshareAPIClient:
    """Thin typed wrapper over the REST API used by the browser client.

    Every failure surfaces as an :class:`APIError` subclass; raw ``httpx`` and
    validation errors never escape. Protected calls send the bearer token
    returned by ``token_provider`` at call time, so the client always follows
    the current session without holding a copy of the credential.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.api_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.api_timeout
        self._token_provider = token_provider
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_token_provider(self, provider: TokenProvider | None) -> None:
        self._token_provider = provider

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "VidshareAPIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _bearer(self, explicit: str | None, authenticated: bool) -> dict[str, str]:
        token = explicit
        if token is None and authenticated and self._token_provider is not None:
            token = self._token_provider()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        authenticated: bool = True,
        **kwargs: Any,
    ) -> Any:
        headers = self._bearer(token, authenticated)
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning(
                "API timeout | method=%s path=%s timeout=%s error=%s",
                method,
                path,
                self._timeout,
                type(exc).__name__,
            )
            raise APITransportError("The server took too long to respond") from exc
        except httpx.HTTPError as exc:
            logger.warning("API transport error | method=%s path=%s error=%s", method, path, type(exc).__name__)
            raise APITransportError("Unable to reach the server") from exc

        if response.is_error:
            error = _status_error(response)
            logger.info("API error status | method=%s path=%s status=%s", method, path, response.status_code)
            raise error

        if response.status_code == httpx.codes.NO_CONTENT or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise APIResponseError("Server response was not valid JSON", status_code=response.status_code) from exc

    @staticmethod
    def _build(model: type[T], **fields: Any) -> T:
        try:
            return model(**fields)
        except ValidationError as exc:
            messages = [str(error.get("msg")) for error in exc.errors() if error.get("msg")]
            raise APIRequestError("; ".join(messages) or "Invalid request") from exc

    @staticmethod
    def _parse(schema: Any, payload: Any) -> Any:
        try:
            return TypeAdapter(schema).validate_python(payload)
        except ValidationError as exc:
            raise APIResponseError("Server response had an unexpected shape") from exc

    # --- authentication -------------------------------------------------

    async def verify_identity(self, token: str) -> Identity:
        """Return the identity the given bearer token belongs to."""

        payload = await self._request("GET", "/auth/me", token=token)
        return self._parse(Identity, payload)

    async def authenticate(self, username_or_email: str, password: str) -> TokenResponse:
        body = self._build(LoginRequest, username=username_or_email, password=password)
        payload = await self._request("POST", "/auth/login", authenticated=False, json=body.model_dump())
        return self._parse(TokenResponse, payload)

    async def register_account(self, username: str, email: str, password: str) -> Identity:
        """Create an account. The response carries no credential."""

        body = self._build(RegisterRequest, username=username, email=email, password=password)
        payload = await self._request(
            "POST", "/auth/register", authenticated=False, json=body.model_dump(mode="json")
        )
        return self._parse(Identity, payload)

    # --- videos -----------------------------------------------------------

    async def resolve_media_access(self, video_id: str) -> VideoStreamResponse:
        payload = await self._request("GET", f"/videos/{video_id}/stream")
        return self._parse(VideoStreamResponse, payload)

    async def list_videos(self) -> list[Video]:
        payload = await self._request("GET", "/videos")
        return self._parse(list[Video], payload)

    async def get_feed(self) -> list[Video]:
        payload = await self._request("GET", "/videos/feed")
        return self._parse(list[Video], payload)

    async def get_video(self, video_id: str) -> Video:
        payload = await self._request("GET", f"/videos/{video_id}")
        return self._parse(Video, payload)

    async def upload_video(
        self,
        *,
        title: str,
        file: UploadSource,
        filename: str | None = None,
        content_type: str | None = None,
        recipe: str | None = None,
        visibility: Visibility = "public",
    ) -> Video:
        form = self._build(UploadVideoRequest, title=title, recipe=recipe, visibility=visibility)
        data = {"title": form.title, "visibility": form.visibility}
        if form.recipe:
            data["recipe"] = form.recipe
        part = _upload_part(file, filename, content_type)
        payload = await self._request("POST", "/videos/upload", data=data, files={"file": part})
        return self._parse(Video, payload)

    # --- users & follows ------------------------------------------------------

    async def get_user_profile(self, user_id: str) -> UserProfile:
        payload = await self._request("GET", f"/users/{user_id}")
        return self._parse(UserProfile, payload)

    async def get_user_videos(self, user_id: str) -> list[Video]:
        payload = await self._request("GET", f"/users/{user_id}/videos")
        return self._parse(list[Video], payload)

    async def follow_user(self, user_id: str) -> FollowResponse:
        payload = await self._request("POST", f"/users/{user_id}/follow")
        return self._parse(FollowResponse, payload)

    async def unfollow_user(self, user_id: str) -> UnfollowResponse:
        payload = await self._request("DELETE", f"/users/{user_id}/follow")
        return self._parse(UnfollowResponse, payload)


__all__ = [
    "APIError",
    "APIRequestError",
    "APIResponseError",
    "APITransportError",
    "NotFoundError",
    "TokenProvider",
    "UnauthorizedError",
    "VidshareAPIClient",
]
