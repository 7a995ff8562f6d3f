"""
Data models and schemas for the application
"""

from .events import (
    CommitSummary,
    EventKind,
    NormalizedEvent,
    PullRequestEvent,
    PushEvent,
    ReleaseEvent,
)
from .envelope import DeliveryEnvelope, ResponseHandler
from .github import GitHubRepoRef, GitHubRepository, GitHubUser, PluginResult

__all__ = [
    "CommitSummary",
    "EventKind",
    "NormalizedEvent",
    "PullRequestEvent",
    "PushEvent",
    "ReleaseEvent",
    "DeliveryEnvelope",
    "ResponseHandler",
    "GitHubRepoRef",
    "GitHubRepository",
    "GitHubUser",
    "PluginResult",
]
