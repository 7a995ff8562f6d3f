"""
Normalization of GitHub webhook payloads into flat event records
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

import structlog

from src.models.events import (
    CommitSummary,
    EventKind,
    NormalizedEvent,
    PullRequestEvent,
    PushEvent,
    ReleaseEvent,
)

logger = structlog.get_logger()


def _dig(payload: Any, *path: str) -> Any:
    """Follow a chain of object keys, None as soon as a step is missing"""
    value = payload
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _get_str(payload: Any, *path: str) -> Optional[str]:
    value = _dig(payload, *path)
    return value if isinstance(value, str) else None


def _get_int(payload: Any, *path: str) -> Optional[int]:
    value = _dig(payload, *path)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _get_bool(payload: Any, *path: str) -> Optional[bool]:
    value = _dig(payload, *path)
    return value if isinstance(value, bool) else None


def _summarize_commits(commits: Any) -> Optional[List[CommitSummary]]:
    """Map a push's commits to summaries, keeping their order"""
    if commits is None or isinstance(commits, (str, bytes, Mapping)):
        return None
    if not isinstance(commits, Iterable):
        return None

    return [
        CommitSummary(
            id=_get_str(commit, "id"),
            message=_get_str(commit, "message"),
            author=_get_str(commit, "author", "name"),
        )
        for commit in commits
    ]


def normalize_pull_request(payload: Mapping[str, Any]) -> PullRequestEvent:
    """Build a pull request summary"""
    return PullRequestEvent(
        action=_get_str(payload, "action"),
        number=_get_int(payload, "number"),
        title=_get_str(payload, "pull_request", "title"),
        body=_get_str(payload, "pull_request", "body"),
        author=_get_str(payload, "pull_request", "user", "login"),
        merged=_get_bool(payload, "pull_request", "merged"),
        repository=_get_str(payload, "repository", "full_name"),
    )


def normalize_push(payload: Mapping[str, Any]) -> PushEvent:
    """Build a push summary"""
    return PushEvent(
        ref=_get_str(payload, "ref"),
        repository=_get_str(payload, "repository", "full_name"),
        pusher=_get_str(payload, "pusher", "name"),
        commits=_summarize_commits(_dig(payload, "commits")),
    )


def normalize_release(payload: Mapping[str, Any]) -> ReleaseEvent:
    """Build a release summary"""
    return ReleaseEvent(
        action=_get_str(payload, "action"),
        tag_name=_get_str(payload, "release", "tag_name"),
        name=_get_str(payload, "release", "name"),
        author=_get_str(payload, "release", "author", "login"),
        repository=_get_str(payload, "repository", "full_name"),
        body=_get_str(payload, "release", "body"),
    )


NORMALIZERS: Dict[EventKind, Callable[[Mapping[str, Any]], NormalizedEvent]] = {
    EventKind.PULL_REQUEST: normalize_pull_request,
    EventKind.PUSH: normalize_push,
    EventKind.RELEASE: normalize_release,
}


def parse_event_kind(event_kind: Optional[str]) -> Optional[EventKind]:
    """Map an X-GitHub-Event header value to a supported kind"""
    try:
        return EventKind(event_kind)
    except ValueError:
        return None


def is_supported_event(event_kind: Optional[str]) -> bool:
    """Check whether deliveries of this kind are normalized"""
    return parse_event_kind(event_kind) is not None


def normalize_event(event_kind: Optional[str], payload: Any) -> Optional[NormalizedEvent]:
    """
    Normalize a webhook payload according to its event kind header

    Args:
        event_kind: X-GitHub-Event header value
        payload: Decoded JSON body

    Returns:
        The normalized record, or None for unsupported event kinds
    """
    kind = parse_event_kind(event_kind)
    if kind is None:
        logger.debug("Unsupported event kind", event_type=event_kind)
        return None

    if not isinstance(payload, Mapping):
        payload = {}

    return NORMALIZERS[kind](payload)
