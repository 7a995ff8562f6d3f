"""
Tests for the event description and repository lookup executors
"""

import httpx
import pytest
from unittest.mock import AsyncMock, Mock

from src.models.github import GitHubRepoRef
from src.services.executors import GitHubExecutors, parse_repo_full_name
from src.services.github_client import GitHubAPIError, GitHubClient
from src.services.prompt_templates import (
    describe_event_prompt,
    format_context_chain,
    github_webhook_event_description_template,
)


class TestGitHubExecutors:
    """Test cases for executors"""

    @pytest.fixture
    def mock_github_client(self):
        client = Mock(spec=GitHubClient)
        client.get_repository = AsyncMock(return_value={"full_name": "org/repo"})
        return client

    @pytest.fixture
    def mock_generate_text(self):
        return AsyncMock(return_value="Alice opened a pull request fixing a bug.")

    @pytest.fixture
    def executors(self, mock_github_client, mock_generate_text):
        return GitHubExecutors(
            github_client=mock_github_client,
            generate_text=mock_generate_text,
            event_prompt="Keep it to two sentences.",
        )

    @pytest.mark.asyncio
    async def test_describe_event(self, executors, mock_generate_text):
        context_chain = [{"content": '{"event_kind": "pull_request", "author": "alice"}'}]

        result = await executors.describe_github_webhook_event(context_chain)

        assert result.success is True
        assert result.data["description"] == "Alice opened a pull request fixing a bug."
        prompt = mock_generate_text.await_args.args[0]
        assert "pull_request" in prompt
        assert "Keep it to two sentences." in prompt

    @pytest.mark.asyncio
    async def test_describe_event_failure(self, executors, mock_generate_text):
        mock_generate_text.side_effect = RuntimeError("capability unavailable")

        result = await executors.describe_github_webhook_event([])

        assert result.success is False
        assert result.error == "capability unavailable"

    @pytest.mark.asyncio
    async def test_get_repo_info(self, executors, mock_github_client):
        result = await executors.get_repo_info(GitHubRepoRef(owner="org", repo="repo"))

        assert result.success is True
        assert result.data["content"] == {"full_name": "org/repo"}
        mock_github_client.get_repository.assert_awaited_once_with("org", "repo")

    @pytest.mark.asyncio
    async def test_get_repo_info_from_full_name(self, executors, mock_github_client):
        result = await executors.get_repo_info("org/repo")

        assert result.success is True
        mock_github_client.get_repository.assert_awaited_once_with("org", "repo")

    @pytest.mark.asyncio
    async def test_get_repo_info_invalid_name(self, executors, mock_github_client):
        result = await executors.get_repo_info("not-a-repo")

        assert result.success is False
        mock_github_client.get_repository.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_repo_info_api_error(self, executors, mock_github_client):
        mock_github_client.get_repository.side_effect = GitHubAPIError(
            "GitHub API error: 404", status_code=404
        )

        result = await executors.get_repo_info("org/missing")

        assert result.success is False
        assert result.error == "GitHub API error: 404"

    @pytest.mark.asyncio
    async def test_get_repo_info_value_error(self, executors, mock_github_client):
        mock_github_client.get_repository.side_effect = ValueError("Expecting value")

        result = await executors.get_repo_info("org/repo")

        assert result.success is False
        assert result.error == "Expecting value"

    @pytest.mark.asyncio
    async def test_get_repo_info_non_json_response(self):
        """Test a non-JSON 2xx from the API yields a failed result"""
        def handler(request):
            return httpx.Response(200, text="<html></html>")

        async with GitHubClient(transport=httpx.MockTransport(handler)) as client:
            result = await GitHubExecutors(github_client=client).get_repo_info("org/repo")

        assert result.success is False
        assert result.error == "GitHub API returned invalid JSON"

    @pytest.mark.asyncio
    async def test_describe_event_without_generator(self, mock_github_client):
        executors = GitHubExecutors(github_client=mock_github_client)

        result = await executors.describe_github_webhook_event([])

        assert result.success is False
        assert result.error == "No text generation capability configured"


class TestParseRepoFullName:
    """Test cases for owner/repo parsing"""

    @pytest.mark.parametrize(
        "full_name,expected",
        [
            ("org/repo", GitHubRepoRef(owner="org", repo="repo")),
            ("org/", None),
            ("/repo", None),
            ("org/repo/extra", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse(self, full_name, expected):
        assert parse_repo_full_name(full_name) == expected


class TestPromptTemplates:
    """Test cases for prompt templates"""

    def test_template_includes_context(self):
        prompt = github_webhook_event_description_template('[{"ref": "refs/heads/main"}]')

        assert '[{"ref": "refs/heads/main"}]' in prompt
        assert "Do not explain how Github works" in prompt

    def test_describe_prompt_without_extra_instruction(self):
        assert describe_event_prompt("[]") == github_webhook_event_description_template("[]")

    def test_format_context_chain(self):
        assert format_context_chain(({"a": 1},)) == '[{"a": 1}]'
