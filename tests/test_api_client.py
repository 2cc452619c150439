"""Tests for the typed API client against the in-process fake server."""
from __future__ import annotations

from typing import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from fake_api import FakeBackend, create_app
from vidshare.clients import (
    APIRequestError,
    APIResponseError,
    APITransportError,
    NotFoundError,
    UnauthorizedError,
    VidshareAPIClient,
)


@pytest_asyncio.fixture
async def client(backend: FakeBackend) -> AsyncIterator[VidshareAPIClient]:
    api = VidshareAPIClient("http://testserver", transport=httpx.ASGITransport(app=create_app(backend)))
    yield api
    await api.aclose()


@pytest.mark.asyncio
async def test_login_returns_token_and_identity(client, backend):
    user = backend.add_user("alice", "secret")

    token = await client.authenticate("alice", "secret")

    assert token.token_type == "bearer"
    assert token.user.id == user["id"]
    identity = await client.verify_identity(token.access_token)
    assert identity.username == "alice"


@pytest.mark.asyncio
async def test_login_accepts_email(client, backend):
    backend.add_user("alice", "secret", email="alice@x.com")

    token = await client.authenticate("alice@x.com", "secret")

    assert token.user.username == "alice"


@pytest.mark.asyncio
async def test_wrong_password_is_unauthorized(client, backend):
    backend.add_user("bob", "right")

    with pytest.raises(UnauthorizedError) as excinfo:
        await client.authenticate("bob", "wrongpass")

    assert excinfo.value.status_code == 401
    assert excinfo.value.detail == "Incorrect username or password"


@pytest.mark.asyncio
async def test_unknown_token_is_unauthorized(client):
    with pytest.raises(UnauthorizedError) as excinfo:
        await client.verify_identity("tok-unknown")

    assert excinfo.value.detail == "Invalid token"


@pytest.mark.asyncio
async def test_register_returns_identity_without_credential(client, backend):
    identity = await client.register_account("carol", "carol@x.com", "pw")

    assert identity.username == "carol"
    assert identity.id in backend.users
    assert backend.tokens == {}


@pytest.mark.asyncio
async def test_duplicate_registration_reports_server_detail(client, backend):
    backend.add_user("carol", "pw", email="carol@x.com")

    with pytest.raises(APIRequestError) as excinfo:
        await client.register_account("carol", "other@x.com", "pw")

    assert excinfo.value.status_code == 400
    assert excinfo.value.detail == "Username or email already registered"


@pytest.mark.asyncio
async def test_invalid_email_is_rejected_before_sending(client, backend):
    with pytest.raises(APIRequestError):
        await client.register_account("carol", "not-an-email", "pw")

    assert backend.requests == []


@pytest.mark.asyncio
async def test_protected_calls_use_current_token(client, backend):
    user = backend.add_user("alice", "secret")
    token = backend.issue_token(user["id"])
    current = {"token": token}
    client.set_token_provider(lambda: current["token"])
    backend.add_video(user["id"], "Pasta")

    videos = await client.list_videos()
    assert [video.title for video in videos] == ["Pasta"]
    assert backend.requests[-1] == ("GET", "/videos", f"Bearer {token}")

    current["token"] = None
    with pytest.raises(UnauthorizedError) as excinfo:
        await client.list_videos()
    assert excinfo.value.detail == "Not authenticated"
    assert backend.requests[-1] == ("GET", "/videos", None)


@pytest.mark.asyncio
async def test_resolve_media_access_returns_fresh_url(client, backend):
    user = backend.add_user("alice", "secret")
    client.set_token_provider(lambda: backend.issue_token(user["id"]))
    video = backend.add_video(user["id"], "Pasta")

    first = await client.resolve_media_access(video["id"])
    second = await client.resolve_media_access(video["id"])

    assert first.url and first.url.startswith(video["blob_url"])
    assert first.url != second.url


@pytest.mark.asyncio
async def test_missing_video_raises_not_found(client, backend):
    user = backend.add_user("alice", "secret")
    client.set_token_provider(lambda: backend.issue_token(user["id"]))

    with pytest.raises(NotFoundError):
        await client.get_video("missing")


@pytest.mark.asyncio
async def test_upload_sends_multipart_form(client, backend):
    user = backend.add_user("alice", "secret")
    client.set_token_provider(lambda: backend.issue_token(user["id"]))

    video = await client.upload_video(
        title="Soup",
        file=b"\x00\x00\x00\x18ftypmp42",
        filename="soup.mp4",
        recipe="Boil water",
        visibility="private",
    )

    assert video.title == "Soup"
    assert video.visibility == "private"
    assert video.recipe == "Boil water"
    assert video.user_id == user["id"]


@pytest.mark.asyncio
async def test_upload_reads_file_path(client, backend, tmp_path):
    user = backend.add_user("alice", "secret")
    client.set_token_provider(lambda: backend.issue_token(user["id"]))
    source = tmp_path / "clip.mp4"
    source.write_bytes(b"\x00\x00\x00\x18ftypmp42")

    video = await client.upload_video(title="Clip", file=source)

    assert video.title == "Clip"


@pytest.mark.asyncio
async def test_follow_and_unfollow(client, backend):
    viewer = backend.add_user("alice", "secret")
    other = backend.add_user("bob", "secret")
    client.set_token_provider(lambda: backend.issue_token(viewer["id"]))

    followed = await client.follow_user(other["id"])
    profile = await client.get_user_profile(other["id"])
    assert followed.follow is not None
    assert profile.is_following
    assert profile.follower_count == 1

    await client.unfollow_user(other["id"])
    profile = await client.get_user_profile(other["id"])
    assert not profile.is_following
    assert profile.follower_count == 0


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped():
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with VidshareAPIClient("http://testserver", transport=httpx.MockTransport(_refuse)) as api:
        with pytest.raises(APITransportError) as excinfo:
            await api.verify_identity("tok-123")

    assert excinfo.value.status_code is None


@pytest.mark.asyncio
async def test_non_json_body_is_a_response_error():
    def _html(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy page</html>")

    async with VidshareAPIClient("http://testserver", transport=httpx.MockTransport(_html)) as api:
        with pytest.raises(APIResponseError):
            await api.verify_identity("tok-123")


@pytest.mark.asyncio
async def test_unexpected_shape_is_a_response_error():
    def _partial(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"id": "u1"})

    async with VidshareAPIClient("http://testserver", transport=httpx.MockTransport(_partial)) as api:
        with pytest.raises(APIResponseError):
            await api.verify_identity("tok-123")


@pytest.mark.asyncio
async def test_validation_detail_list_is_joined():
    def _invalid(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            422,
            json={"detail": [{"msg": "field required"}, {"msg": "value too long"}]},
        )

    async with VidshareAPIClient("http://testserver", transport=httpx.MockTransport(_invalid)) as api:
        with pytest.raises(APIRequestError) as excinfo:
            await api.authenticate("alice", "secret")

    assert excinfo.value.status_code == 422
    assert excinfo.value.detail == "field required; value too long"
