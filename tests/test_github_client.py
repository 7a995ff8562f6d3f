"""
Tests for GitHub API client
"""

import httpx
import pytest
from src.services.github_client import GitHubClient, GitHubAPIError


def _transport(handler):
    return httpx.MockTransport(handler)


class TestGitHubClient:
    """Test cases for GitHub API client"""

    def test_client_initialization(self):
        """Test client initialization"""
        client = GitHubClient(token="test_token")

        assert client.token == "test_token"
        assert client.headers["Authorization"] == "token test_token"
        assert client.headers["User-Agent"] == "GitHub-Webhook-Relay/1.0"

    def test_client_without_token(self):
        """Test anonymous access sends no Authorization header"""
        client = GitHubClient()

        assert "Authorization" not in client.headers

    @pytest.mark.asyncio
    async def test_get_repository(self):
        """Test repository lookup hits /repos/{owner}/{repo}"""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"id": 1, "full_name": "org/repo"})

        async with GitHubClient(
            token="t", api_url="https://ghe.test/api/v3/", transport=_transport(handler)
        ) as client:
            data = await client.get_repository("org", "repo")

        assert data == {"id": 1, "full_name": "org/repo"}
        assert str(seen[0].url) == "https://ghe.test/api/v3/repos/org/repo"
        assert seen[0].headers["Authorization"] == "token t"

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        def handler(request):
            return httpx.Response(404, json={"message": "Not Found"})

        async with GitHubClient(transport=_transport(handler)) as client:
            with pytest.raises(GitHubAPIError) as exc_info:
                await client.get_repository("org", "missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.response_data == {"message": "Not Found"}

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with GitHubClient(transport=_transport(handler)) as client:
            with pytest.raises(GitHubAPIError, match="Request failed"):
                await client.get_repository("org", "repo")

    @pytest.mark.asyncio
    async def test_empty_body(self):
        def handler(request):
            return httpx.Response(204)

        async with GitHubClient(transport=_transport(handler)) as client:
            assert await client.get_repository("org", "repo") == {}

    @pytest.mark.asyncio
    async def test_non_json_success_raises(self):
        """Test a 2xx body that is not JSON surfaces as GitHubAPIError"""
        def handler(request):
            return httpx.Response(200, text="<html>rate limited</html>")

        async with GitHubClient(transport=_transport(handler)) as client:
            with pytest.raises(GitHubAPIError, match="invalid JSON") as exc_info:
                await client.get_repository("org", "repo")

        assert exc_info.value.status_code == 200
        assert exc_info.value.response_data == "<html>rate limited</html>"
