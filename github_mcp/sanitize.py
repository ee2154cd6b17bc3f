"""
Response Sanitizers

Project raw GitHub API objects down to the fields an agent actually needs.

One function per entity shape. Every function returns None for a None
source, so absence survives any amount of nesting. Fields missing from the
source are left out of the result rather than emitted as null.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .decode import TEXT_ENCODING, decode_content
from .errors import SanitizeError

logger = logging.getLogger(__name__)

Entity = Mapping[str, Any]

USER_FIELDS = ("login", "id", "type")
REPOSITORY_SEARCH_FIELDS = ("id", "name", "full_name", "private", "fork", "html_url")
CONTENT_FIELDS = ("type", "target", "size", "name", "path", "sha")
TEXT_MATCH_FIELDS = ("object_type", "property", "fragment")
CODE_RESULT_FIELDS = ("name", "path", "sha")
SEARCH_RESULT_FIELDS = ("total_count", "incomplete_results")


def _check(source: Any, what: str) -> Entity:
    if not isinstance(source, Mapping):
        raise SanitizeError(f"expected {what} object, got {type(source).__name__}")
    return source


def _pick(source: Entity, fields: Iterable[str]) -> Dict[str, Any]:
    return {key: source[key] for key in fields if source.get(key) is not None}


def _clean_list(
    items: Optional[Iterable[Any]],
    clean: Callable[[Any], Optional[Dict[str, Any]]],
) -> Optional[List[Optional[Dict[str, Any]]]]:
    """Sanitize each element in order; None elements stay None."""
    if items is None:
        return None
    return [clean(item) for item in items]


def clean_user(user: Optional[Entity]) -> Optional[Dict[str, Any]]:
    """Owner projection: login, id and account type."""
    if user is None:
        return None
    return _pick(_check(user, "user"), USER_FIELDS)


def clean_repository_for_search(repo: Optional[Entity]) -> Optional[Dict[str, Any]]:
    """Repository summary for search results; html_url is the only URL kept."""
    if repo is None:
        return None
    repo = _check(repo, "repository")

    cleaned = _pick(repo, REPOSITORY_SEARCH_FIELDS)
    owner = clean_user(repo.get("owner"))
    if owner is not None:
        cleaned["owner"] = owner
    return cleaned


def clean_repository_content(content: Optional[Entity]) -> Optional[Dict[str, Any]]:
    """
    File or directory entry without any API URLs.

    When the entry carries a body it is decoded to text if possible
    (encoding becomes "text"); otherwise the original body and encoding are
    passed through unchanged.
    """
    if content is None:
        return None
    content = _check(content, "content")

    cleaned = _pick(content, CONTENT_FIELDS)

    body = content.get("content")
    if body is not None:
        text, ok = decode_content(body, content.get("encoding"))
        if ok:
            cleaned["content"] = text
            cleaned["encoding"] = TEXT_ENCODING
        else:
            logger.debug(f"Returning {content.get('path')} in its original encoding")
            cleaned["content"] = body
            if content.get("encoding") is not None:
                cleaned["encoding"] = content["encoding"]

    return cleaned


def clean_repository_content_list(
    contents: Optional[Iterable[Optional[Entity]]],
) -> Optional[List[Optional[Dict[str, Any]]]]:
    return _clean_list(contents, clean_repository_content)


def clean_text_match(match: Optional[Entity]) -> Optional[Dict[str, Any]]:
    if match is None:
        return None
    match = _check(match, "text match")

    cleaned = _pick(match, TEXT_MATCH_FIELDS)
    if match.get("matches") is not None:
        cleaned["matches"] = match["matches"]
    return cleaned


def clean_code_result(result: Optional[Entity]) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    result = _check(result, "code result")

    cleaned = _pick(result, CODE_RESULT_FIELDS)

    repository = clean_repository_for_search(result.get("repository"))
    if repository is not None:
        cleaned["repository"] = repository

    text_matches = _clean_list(result.get("text_matches"), clean_text_match)
    if text_matches is not None:
        cleaned["text_matches"] = text_matches

    return cleaned


def clean_code_search_result(result: Optional[Entity]) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    result = _check(result, "code search result")

    cleaned = _pick(result, SEARCH_RESULT_FIELDS)
    items = _clean_list(result.get("items"), clean_code_result)
    if items is not None:
        cleaned["items"] = items
    return cleaned


def clean_repository_search_result(result: Optional[Entity]) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    result = _check(result, "repository search result")

    cleaned = _pick(result, SEARCH_RESULT_FIELDS)
    items = _clean_list(result.get("items"), clean_repository_for_search)
    if items is not None:
        cleaned["items"] = items
    return cleaned


def minimal_user(user: Optional[Entity]) -> Optional[Dict[str, Any]]:
    """
    Identity card for user search results.

    Narrower than the owner projection: login, id, profile and avatar URL.
    """
    if user is None:
        return None
    user = _check(user, "user")

    minimal: Dict[str, Any] = {"login": user.get("login") or ""}
    if user.get("id"):
        minimal["id"] = user["id"]
    if user.get("html_url"):
        minimal["profile_url"] = user["html_url"]
    if user.get("avatar_url"):
        minimal["avatar_url"] = user["avatar_url"]
    return minimal


def minimal_search_users_result(result: Optional[Entity]) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    result = _check(result, "user search result")

    return {
        "total_count": result.get("total_count") or 0,
        "incomplete_results": bool(result.get("incomplete_results")),
        "items": _clean_list(result.get("items") or [], minimal_user),
    }
