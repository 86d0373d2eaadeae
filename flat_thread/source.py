import json
from pathlib import Path
from typing import Any, Optional, Protocol, Union

import structlog
from pydantic import ValidationError

from flat_thread.errors import SnapshotError
from flat_thread.graph import CommentGraph
from flat_thread.models import Comment

logger = structlog.get_logger(__name__)


class CommentSource(Protocol):
    """Protocol for the comment store that supplies graph snapshots."""

    def snapshot(self) -> CommentGraph:
        """Return the current comment graph."""
        ...


class StaticCommentSource:
    """CommentSource over an in-memory graph that the host replaces as it changes."""

    def __init__(self, graph: Optional[CommentGraph] = None):
        self.graph = graph if graph is not None else CommentGraph.empty()

    def snapshot(self) -> CommentGraph:
        return self.graph

    def replace(self, graph: CommentGraph) -> None:
        self.graph = graph


def graph_from_payload(payload: Any) -> CommentGraph:
    """
    Build a graph from decoded snapshot JSON.

    Accepted shapes:
    - a list of flat comments
    - ``{"comments": [...]}`` holding flat comments
    - ``{"comments": [...]}`` holding remark42 tree nodes
      (``{"comment": {...}, "replies": [...]}``)

    Raises:
        SnapshotError: If the payload has none of these shapes or a comment
                       fails validation
    """
    items = payload.get("comments") if isinstance(payload, dict) else payload
    if not isinstance(items, list):
        raise SnapshotError("Snapshot must be a list of comments or an object with a 'comments' list")

    try:
        if items and isinstance(items[0], dict) and "comment" in items[0]:
            return CommentGraph.from_tree(items)
        return CommentGraph.from_comments(Comment.model_validate(item) for item in items)
    except (ValidationError, KeyError, TypeError) as e:
        raise SnapshotError(f"Invalid comment in snapshot: {e}") from e


class JsonFileCommentSource:
    """CommentSource reading a JSON dump of comments on every snapshot."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the source.

        Args:
            path: Path to the JSON snapshot file
        """
        self.path = Path(path)

    def snapshot(self) -> CommentGraph:
        """
        Read and parse the snapshot file.

        Returns:
            The comment graph stored in the file

        Raises:
            SnapshotError: If the file is missing, is not JSON, or holds
                           invalid comments
        """
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise SnapshotError(f"Snapshot file not found: {self.path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Could not read snapshot {self.path}: {e}") from e

        graph = graph_from_payload(payload)
        logger.debug("snapshot_loaded", path=str(self.path), comments=len(graph), roots=len(graph.roots))
        return graph
