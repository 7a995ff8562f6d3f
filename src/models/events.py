"""
Normalized GitHub webhook event models
"""

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel


class EventKind(str, Enum):
    """GitHub event kinds that are normalized and forwarded"""

    PULL_REQUEST = "pull_request"
    PUSH = "push"
    RELEASE = "release"


class NormalizedEventBase(BaseModel):
    """Common configuration for normalized records"""

    class Config:
        frozen = True


class PullRequestEvent(NormalizedEventBase):
    """Summary of a pull_request delivery"""

    event_kind: Literal["pull_request"] = "pull_request"
    action: Optional[str] = None
    number: Optional[int] = None
    title: Optional[str] = None
    body: Optional[str] = None
    author: Optional[str] = None
    merged: Optional[bool] = None
    repository: Optional[str] = None


class CommitSummary(NormalizedEventBase):
    """One commit of a push delivery"""

    id: Optional[str] = None
    message: Optional[str] = None
    author: Optional[str] = None


class PushEvent(NormalizedEventBase):
    """Summary of a push delivery"""

    event_kind: Literal["push"] = "push"
    ref: Optional[str] = None
    repository: Optional[str] = None
    pusher: Optional[str] = None
    commits: Optional[List[CommitSummary]] = None


class ReleaseEvent(NormalizedEventBase):
    """Summary of a release delivery"""

    event_kind: Literal["release"] = "release"
    action: Optional[str] = None
    tag_name: Optional[str] = None
    name: Optional[str] = None
    author: Optional[str] = None
    repository: Optional[str] = None
    body: Optional[str] = None


NormalizedEvent = Union[PullRequestEvent, PushEvent, ReleaseEvent]
