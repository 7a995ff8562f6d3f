"""
GitHub API data models and executor results
"""

from typing import Any, Optional
from pydantic import BaseModel


class GitHubUser(BaseModel):
    """GitHub user model"""

    id: Optional[int] = None
    login: str
    html_url: Optional[str] = None
    type: Optional[str] = None

    class Config:
        extra = "allow"


class GitHubRepository(BaseModel):
    """GitHub repository model as returned by GET /repos/{owner}/{repo}"""

    id: int
    name: str
    full_name: str
    owner: GitHubUser
    private: bool = False
    html_url: Optional[str] = None
    description: Optional[str] = None
    default_branch: str = "main"

    class Config:
        extra = "allow"  # Allow additional fields from GitHub


class GitHubRepoRef(BaseModel):
    """Owner and name identifying a repository"""

    owner: str
    repo: str


class PluginResult(BaseModel):
    """Outcome of an executor run"""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
