import httpx
import pytest

from gitgrab.services.validation.github_client import GitHubAPIError, GitHubClient, GitHubNotFoundError


def _client(handler, token=None) -> GitHubClient:
    return GitHubClient(token=token, base="https://api.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_repo_returns_json_and_sends_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["accept"] = request.headers.get("accept")
        return httpx.Response(200, json={"full_name": "octocat/Hello-World", "private": False})

    data = await _client(handler, token="tok").get_repo("octocat", "Hello-World")

    assert data["full_name"] == "octocat/Hello-World"
    assert seen["url"] == "https://api.test/repos/octocat/Hello-World"
    assert seen["auth"] == "Bearer tok"
    assert seen["accept"] == "application/vnd.github+json"


@pytest.mark.asyncio
async def test_no_token_sends_no_auth(monkeypatch):
    from gitgrab.core.config import settings

    monkeypatch.setattr(settings, "GITHUB_TOKEN", None)
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={})

    await _client(handler).get_repo("a", "b")
    assert seen["auth"] is None


@pytest.mark.asyncio
async def test_404_raises_not_found():
    client = _client(lambda request: httpx.Response(404, json={"message": "Not Found"}))
    with pytest.raises(GitHubNotFoundError):
        await client.get_repo("octocat", "missing")


@pytest.mark.asyncio
async def test_rate_limit_reports_headers():
    def handler(request):
        return httpx.Response(
            403,
            headers={"x-ratelimit-remaining": "0", "x-ratelimit-reset": "1700000000"},
            json={"message": "API rate limit exceeded"},
        )

    with pytest.raises(GitHubAPIError) as exc:
        await _client(handler).get_repo("a", "b")

    assert not isinstance(exc.value, GitHubNotFoundError)
    assert "remaining=0" in str(exc.value)
    assert "reset=1700000000" in str(exc.value)


@pytest.mark.asyncio
async def test_server_error_raises():
    with pytest.raises(GitHubAPIError):
        await _client(lambda request: httpx.Response(502, text="bad gateway")).get_repo("a", "b")


@pytest.mark.asyncio
async def test_ping():
    assert await _client(lambda request: httpx.Response(200, text="Keep it logically awesome.")).ping()
    assert not await _client(lambda request: httpx.Response(503)).ping()
