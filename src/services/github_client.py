"""
GitHub REST API client for repository lookups
"""

from typing import Any, Dict, Optional

import httpx
import structlog

logger = structlog.get_logger()

DEFAULT_API_URL = "https://api.github.com"


class GitHubAPIError(Exception):
    """Custom exception for GitHub API errors"""
    def __init__(self, message: str, status_code: int = None, response_data: dict = None):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)


class GitHubClient:
    """GitHub API client; the token is optional for public repositories"""

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.api_url = api_url.rstrip("/")

        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "GitHub-Webhook-Relay/1.0",
        }
        if self.token:
            self.headers["Authorization"] = f"token {self.token}"

        self.client = httpx.AsyncClient(
            headers=self.headers,
            timeout=httpx.Timeout(30.0),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _make_request(self, method: str, url: str, **kwargs) -> Dict[Any, Any]:
        """Make a request to the GitHub API with error handling"""
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error("GitHub API request failed", error=str(e), url=url)
            raise GitHubAPIError(f"Request failed: {str(e)}")

        if response.status_code >= 400:
            error_data = {}
            try:
                error_data = response.json()
            except ValueError:
                pass

            raise GitHubAPIError(
                f"GitHub API error: {response.status_code}",
                status_code=response.status_code,
                response_data=error_data,
            )

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            logger.error("GitHub API returned invalid JSON", error=str(e), url=url)
            raise GitHubAPIError(
                "GitHub API returned invalid JSON",
                status_code=response.status_code,
                response_data=response.text,
            ) from e

    async def get_repository(self, owner: str, repo: str) -> Dict[str, Any]:
        """Get repository information"""
        url = f"{self.api_url}/repos/{owner}/{repo}"
        return await self._make_request("GET", url)
