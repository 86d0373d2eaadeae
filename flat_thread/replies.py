"""
Reply counting, flattening and mention resolution for a comment forest.

All functions here are pure: they read a graph snapshot, never modify it and
never log. Traversals use an explicit stack so thread depth is not bounded by
the interpreter's recursion limit.
"""

import re
from datetime import datetime, timezone
from typing import Iterator, Mapping, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from flat_thread.models import Comment, MentionTarget

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_datetime_adapter: TypeAdapter = TypeAdapter(datetime)

# RFC3339Nano drops trailing zeros, so fractions carry 1 to 9 digits
_FRACTION = re.compile(r"(?<=\d{2}:\d{2}:\d{2})\.(\d+)")


def _microsecond_fraction(match: "re.Match[str]") -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_time(value: Optional[str]) -> datetime:
    """
    Parse a comment timestamp for ordering.

    Args:
        value: ISO-8601 / RFC 3339 timestamp with any number of fractional
               second digits

    Returns:
        An aware datetime. Missing or unparsable values give the epoch;
        naive values are taken as UTC.
    """
    if not value:
        return EPOCH

    text = _FRACTION.sub(_microsecond_fraction, value.strip(), count=1)

    try:
        parsed = _datetime_adapter.validate_python(text)
    except ValidationError:
        return EPOCH

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def iter_descendants(comment_id: str, child_index: Mapping[str, Sequence[str]]) -> Iterator[str]:
    """
    Yield every transitive descendant of a comment, depth-first.

    A child is yielded, then its own descendants, before its next sibling.
    Each id is yielded at most once and the starting id never is.
    """
    seen = {comment_id}
    stack = list(reversed(child_index.get(comment_id, ())))

    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        yield current
        stack.extend(reversed(child_index.get(current, ())))


def count_replies(comment_id: str, child_index: Mapping[str, Sequence[str]]) -> int:
    """
    Count all nested replies under a comment.

    Hidden replies are counted too; the comment itself is not.

    Args:
        comment_id: The comment whose replies to count
        child_index: Mapping of comment id to its immediate child ids

    Returns:
        The number of transitive descendants
    """
    return sum(1 for _ in iter_descendants(comment_id, child_index))


def flatten_replies(
    root_id: str,
    child_index: Mapping[str, Sequence[str]],
    all_comments: Mapping[str, Comment],
) -> list[str]:
    """
    Flatten a reply subtree into one chronological list.

    Descendants are collected depth-first and then sorted once, oldest first.
    The sort is stable, so replies sharing a timestamp keep their depth-first
    order. Hidden replies are included; dangling ids sort as the epoch.

    Args:
        root_id: The top-level comment id
        child_index: Mapping of comment id to its immediate child ids
        all_comments: Mapping of comment id to comment

    Returns:
        Descendant ids ordered by ascending time
    """
    collected = list(iter_descendants(root_id, child_index))

    def sort_key(reply_id: str) -> datetime:
        comment = all_comments.get(reply_id)
        return parse_time(comment.time if comment else None)

    collected.sort(key=sort_key)
    return collected


def resolve_mention(
    reply_id: str,
    root_id: str,
    all_comments: Mapping[str, Comment],
) -> Optional[MentionTarget]:
    """
    Find who a flattened reply was directed at.

    Only replies whose parent is another reply carry a mention; replies to
    the root comment do not.

    Args:
        reply_id: The flattened reply
        root_id: The top-level comment of the thread
        all_comments: Mapping of comment id to comment

    Returns:
        The parent's author, or None when there is nothing to mention
    """
    reply = all_comments.get(reply_id)
    if reply is None or reply.pid is None or reply.pid == root_id:
        return None

    parent = all_comments.get(reply.pid)
    if parent is None:
        return None

    return MentionTarget(
        author_name=parent.user.name,
        author_id=parent.user.id,
        author_picture=parent.user.picture,
    )
