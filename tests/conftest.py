"""
Pytest configuration and fixtures for flat-thread tests.
"""

import json
from typing import Any, Dict, List

import pytest

from flat_thread.context import ThreadContext
from flat_thread.expanded import ExpandedRepliesStore
from flat_thread.graph import CommentGraph
from flat_thread.models import Comment
from flat_thread.source import StaticCommentSource


def make_comment(comment_id: str, pid: str = None, time: str = None, hidden: bool = False, name: str = None) -> Comment:
    """Build a comment whose author is named after the comment."""
    name = name or f"user-{comment_id}"
    return Comment(
        id=comment_id,
        pid=pid,
        time=time,
        hidden=hidden,
        user={"id": f"id-{name}", "name": name, "picture": f"https://example.com/{name}.png"},
        text=f"text {comment_id}",
    )


class RecordingCollapse:
    """Collapse decider that collapses a fixed set of threads."""

    def __init__(self, collapsed_ids=()):
        self.collapsed_ids = set(collapsed_ids)
        self.calls: List[str] = []

    def is_collapsed(self, comment: Comment) -> bool:
        self.calls.append(comment.id)
        return comment.id in self.collapsed_ids


@pytest.fixture
def example_comments() -> List[Comment]:
    """A(root) with replies B and C, and D replying to C."""
    return [
        make_comment("A", time="1970-01-01T00:01:40Z", name="alice"),
        make_comment("B", pid="A", time="1970-01-01T00:05:00Z", name="bob"),
        make_comment("C", pid="A", time="1970-01-01T00:03:20Z", name="carol"),
        make_comment("D", pid="C", time="1970-01-01T00:06:40Z", name="dave"),
    ]


@pytest.fixture
def example_graph(example_comments) -> CommentGraph:
    return CommentGraph.from_comments(example_comments)


@pytest.fixture
def deep_graph() -> CommentGraph:
    """
    Two roots. R1 has a hidden reply, a reply to the hidden reply, and a
    child index entry pointing at a comment that is not in the store.
    """
    comments = [
        make_comment("R1", time="2024-01-01T10:00:00Z"),
        make_comment("R2", time="2024-01-01T11:00:00Z"),
        make_comment("r1", pid="R1", time="2024-01-01T10:05:00Z"),
        make_comment("h1", pid="R1", time="2024-01-01T10:10:00Z", hidden=True),
        make_comment("r2", pid="h1", time="2024-01-01T10:20:00Z"),
        make_comment("r3", pid="r1", time="2024-01-01T10:15:00Z"),
        make_comment("hidden-root", time="2024-01-01T12:00:00Z", hidden=True),
        make_comment("x1", pid="hidden-root", time="2024-01-01T12:01:00Z"),
    ]
    graph = CommentGraph.from_comments(comments)
    graph.child_index["r1"].append("ghost")
    return graph


@pytest.fixture
def store() -> ExpandedRepliesStore:
    return ExpandedRepliesStore()


@pytest.fixture
def context(example_graph, store) -> ThreadContext:
    return ThreadContext(source=StaticCommentSource(example_graph), expanded=store)


@pytest.fixture
def snapshot_payload(example_comments) -> List[Dict[str, Any]]:
    return [comment.model_dump() for comment in example_comments]


@pytest.fixture
def snapshot_path(tmp_path, snapshot_payload) -> str:
    """Write the example comments to a JSON snapshot file."""
    path = tmp_path / "comments.json"
    path.write_text(json.dumps({"comments": snapshot_payload}), encoding="utf-8")
    return str(path)


@pytest.fixture
def comment_factory():
    """Return the comment builder used by the graph fixtures."""
    return make_comment


@pytest.fixture
def collapse_factory():
    return RecordingCollapse
