from typing import Any, Iterable, Mapping, Optional, Sequence

from flat_thread.models import Comment


class CommentGraph:
    """
    Read-only snapshot of a comment forest.

    Holds two views supplied by the comment store: every comment by id, and
    the ordered ids of each comment's immediate children. Both are treated as
    one atomic snapshot; nothing in this package mutates them.
    """

    def __init__(
        self,
        all_comments: Mapping[str, Comment],
        child_index: Mapping[str, Sequence[str]],
        roots: Optional[Sequence[str]] = None,
    ):
        """
        Initialize the snapshot.

        Args:
            all_comments: Mapping of comment id to comment
            child_index: Mapping of comment id to its ordered immediate child ids
            roots: Ordered top-level comment ids. Derived from all_comments
                   when not provided.
        """
        self.all_comments = all_comments
        self.child_index = child_index
        if roots is None:
            roots = [cid for cid, comment in all_comments.items() if comment.pid is None]
        self.roots = list(roots)

    def get(self, comment_id: str) -> Optional[Comment]:
        """Return the comment with the given id, or None for a dangling id."""
        return self.all_comments.get(comment_id)

    def children(self, comment_id: str) -> Sequence[str]:
        """Return the immediate child ids of a comment (empty when it has none)."""
        return self.child_index.get(comment_id, ())

    def __contains__(self, comment_id: object) -> bool:
        return comment_id in self.all_comments

    def __len__(self) -> int:
        return len(self.all_comments)

    @classmethod
    def empty(cls) -> "CommentGraph":
        return cls({}, {}, [])

    @classmethod
    def from_comments(cls, comments: Iterable[Comment]) -> "CommentGraph":
        """
        Build a snapshot from a flat sequence of comments.

        Siblings keep the order in which they appear in the input.

        Args:
            comments: Comments in store order

        Returns:
            A CommentGraph over the given comments
        """
        all_comments: dict[str, Comment] = {}
        child_index: dict[str, list[str]] = {}
        roots: list[str] = []

        for comment in comments:
            if comment.id in all_comments:
                continue
            all_comments[comment.id] = comment
            if comment.pid is None:
                roots.append(comment.id)
            else:
                child_index.setdefault(comment.pid, []).append(comment.id)

        return cls(all_comments, child_index, roots)

    @classmethod
    def from_tree(cls, nodes: Iterable[Mapping[str, Any]]) -> "CommentGraph":
        """
        Build a snapshot from remark42's nested tree format.

        Each node looks like ``{"comment": {...}, "replies": [<node>, ...]}``.
        The tree is walked with an explicit stack so deep threads do not hit
        the recursion limit.

        Args:
            nodes: Top-level tree nodes

        Returns:
            A CommentGraph over every comment in the tree
        """
        comments: list[Comment] = []
        stack = list(reversed(list(nodes)))

        while stack:
            node = stack.pop()
            comments.append(Comment.model_validate(node["comment"]))
            stack.extend(reversed(node.get("replies") or []))

        return cls.from_comments(comments)
