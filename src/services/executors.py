"""
Executors offered alongside the webhook trigger: event description and
repository lookup
"""

from typing import Any, Awaitable, Callable, Optional, Sequence, Union

import structlog

from src.models.github import GitHubRepoRef, PluginResult
from src.services.github_client import GitHubAPIError, GitHubClient
from src.services.prompt_templates import describe_event_prompt, format_context_chain

logger = structlog.get_logger()

TextGenerator = Callable[[str], Awaitable[str]]


def parse_repo_full_name(full_name: Optional[str]) -> Optional[GitHubRepoRef]:
    """Split an 'owner/repo' string, None if it is not in that form"""
    if not full_name:
        return None
    owner, _, repo = full_name.partition("/")
    if not owner or not repo or "/" in repo:
        return None
    return GitHubRepoRef(owner=owner, repo=repo)


class GitHubExecutors:
    """Executors that delegate to the text-generation capability and the GitHub API"""

    def __init__(
        self,
        github_client: GitHubClient,
        generate_text: Optional[TextGenerator] = None,
        event_prompt: str = "",
    ):
        self.github_client = github_client
        self.generate_text = generate_text
        self.event_prompt = event_prompt

    async def describe_github_webhook_event(self, context_chain: Sequence[Any]) -> PluginResult:
        """Describe the most recent webhook event in a few sentences"""
        logger.info("Describing Github webhook event...")
        if self.generate_text is None:
            logger.warning("No text generation capability configured")
            return PluginResult(success=False, error="No text generation capability configured")

        try:
            description = await self.generate_text(
                describe_event_prompt(format_context_chain(context_chain), self.event_prompt)
            )
        except Exception as e:
            logger.error("Error describing Github webhook event", error=str(e))
            return PluginResult(success=False, error=str(e))

        logger.info("Described Github webhook event", description=description)
        return PluginResult(
            success=True,
            data={
                "description": description,
                "helpfulInstruction": "This describes a Github webhook event that was received",
            },
        )

    async def get_repo_info(self, repo: Union[GitHubRepoRef, str]) -> PluginResult:
        """Get information about a Github repository, given a ref or 'owner/repo'"""
        repo_ref = repo if isinstance(repo, GitHubRepoRef) else parse_repo_full_name(repo)
        if repo_ref is None:
            return PluginResult(success=False, error=f"Invalid repository name: {repo!r}")

        logger.info(
            "Getting information about a Github repository...",
            owner=repo_ref.owner,
            repo=repo_ref.repo,
        )
        try:
            data = await self.github_client.get_repository(repo_ref.owner, repo_ref.repo)
        except GitHubAPIError as e:
            logger.error(
                "Error getting information about a Github repository",
                error=e.message,
                status_code=e.status_code,
            )
            return PluginResult(success=False, error=e.message)
        except ValueError as e:
            logger.error("Error getting information about a Github repository", error=str(e))
            return PluginResult(success=False, error=str(e))

        return PluginResult(
            success=True,
            data={
                "content": data,
                "helpfulInstruction": "This is the information about the Github repository",
            },
        )
