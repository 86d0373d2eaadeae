"""
Thread composition: turns a graph snapshot and the expanded replies state into
what a renderer shows for each top-level comment.
"""

from typing import Optional

from pydantic import BaseModel

from flat_thread.context import ThreadContext
from flat_thread.expanded import set_expanded_replies, toggle_expanded_replies
from flat_thread.graph import CommentGraph
from flat_thread.models import Comment, MentionTarget
from flat_thread.replies import count_replies, flatten_replies, resolve_mention


class FlatReply(BaseModel):
    """A reply shown directly under its thread root."""

    comment: Comment
    mention: Optional[MentionTarget] = None
    level: int = 1


class ThreadView(BaseModel):
    """Everything a renderer needs for one top-level comment."""

    comment: Comment
    replies_count: int
    replies_label: str
    expanded: bool
    collapsed: bool
    replies: list[FlatReply] = []


class ThreadPresenter:
    """
    Combines reply counting, flattening and mention resolution for the
    threads of the current comment snapshot.
    """

    def __init__(self, context: ThreadContext):
        """
        Initialize the presenter with a context object.

        Args:
            context: The thread context containing all collaborators
        """
        self.context = context

    def present(self, root_id: str) -> Optional[ThreadView]:
        """
        Present one top-level comment.

        Counts are computed from the snapshot on every call. Replies are only
        flattened while the thread is expanded and has any; hidden and
        dangling replies are left out of the flattened list.

        Args:
            root_id: The top-level comment id

        Returns:
            The thread view, or None if the root is unknown or hidden
        """
        return self._present(self.context.source.snapshot(), root_id)

    def present_all(self) -> list[ThreadView]:
        """
        Present every visible top-level comment of the current snapshot.

        Returns:
            Thread views in root order
        """
        graph = self.context.source.snapshot()
        views = []
        for root_id in graph.roots:
            view = self._present(graph, root_id)
            if view is not None:
                views.append(view)
        return views

    def toggle_replies(self, root_id: str) -> bool:
        """Flip whether a thread's replies are shown and return the new value."""
        self.context.expanded.dispatch(toggle_expanded_replies(root_id))
        return self.context.expanded.is_expanded(root_id)

    def set_replies_expanded(self, root_id: str, expanded: bool) -> bool:
        self.context.expanded.dispatch(set_expanded_replies(root_id, expanded))
        return self.context.expanded.is_expanded(root_id)

    def _present(self, graph: CommentGraph, root_id: str) -> Optional[ThreadView]:
        comment = graph.get(root_id)
        if comment is None or comment.hidden:
            return None

        replies_count = count_replies(root_id, graph.child_index)
        expanded = self.context.expanded.is_expanded(root_id)

        replies: list[FlatReply] = []
        if expanded and replies_count > 0:
            replies = self._flat_replies(graph, root_id)

        return ThreadView(
            comment=comment,
            replies_count=replies_count,
            replies_label=self.context.formatter.format(replies_count),
            expanded=expanded,
            collapsed=self.context.collapse.is_collapsed(comment),
            replies=replies,
        )

    def _flat_replies(self, graph: CommentGraph, root_id: str) -> list[FlatReply]:
        replies = []
        for reply_id in flatten_replies(root_id, graph.child_index, graph.all_comments):
            reply = graph.get(reply_id)
            if reply is None or reply.hidden:
                continue
            replies.append(
                FlatReply(
                    comment=reply,
                    mention=resolve_mention(reply_id, root_id, graph.all_comments),
                )
            )
        return replies
