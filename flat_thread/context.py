from typing import Any, Dict, Optional, Protocol

from flat_thread.config import load_config
from flat_thread.expanded import ExpandedRepliesStore
from flat_thread.models import Comment
from flat_thread.source import CommentSource, JsonFileCommentSource, StaticCommentSource


class CollapseDecider(Protocol):
    """Protocol for the thread collapse display decision made by the host."""

    def is_collapsed(self, comment: Comment) -> bool:
        """Return True if the thread anchored at this comment is collapsed."""
        ...


class RepliesLabelFormatter(Protocol):
    """Protocol for the pluralising replies count label."""

    def format(self, count: int) -> str:
        """Return the label for the given number of replies."""
        ...


class NeverCollapsed:
    """CollapseDecider that shows every thread."""

    def is_collapsed(self, comment: Comment) -> bool:
        return False


class PluralRepliesFormatter:
    """RepliesLabelFormatter with one singular and one plural template."""

    def __init__(self, one: str = "{count} reply", other: str = "{count} replies"):
        self.one = one
        self.other = other

    def format(self, count: int) -> str:
        template = self.one if count == 1 else self.other
        return template.format(count=count)


class ThreadContext:
    """
    Context object for presenting flattened threads.
    Contains all collaborators the presenter reads from and writes to.
    """

    def __init__(
        self,
        source: Optional[CommentSource] = None,
        expanded: Optional[ExpandedRepliesStore] = None,
        formatter: Optional[RepliesLabelFormatter] = None,
        collapse: Optional[CollapseDecider] = None,
    ):
        """
        Initialize the thread context.

        Args:
            source: Comment store supplying graph snapshots
            expanded: Expanded replies state of the session
            formatter: Replies count label formatter
            collapse: Thread collapse display decision
        """
        self.source = source if source is not None else StaticCommentSource()
        self.expanded = expanded if expanded is not None else ExpandedRepliesStore()
        self.formatter = formatter or PluralRepliesFormatter()
        self.collapse = collapse or NeverCollapsed()


class ThreadContextProvider:
    """
    Service locator/provider for thread contexts.
    Follows the patterns in "Architecture Patterns with Python".
    """

    @staticmethod
    def get_default_context(config_path: str = "", snapshot_path: str = "") -> ThreadContext:
        """
        Factory method to create a context from a configuration file.

        Args:
            config_path: Path to the configuration file. If not provided,
                         the function will search for a config file in standard locations.
            snapshot_path: Path to the JSON comment snapshot. Overrides the
                           configured path when given.

        Returns:
            A configured ThreadContext
        """
        return ThreadContextProvider.from_config(load_config(config_path), snapshot_path)

    @staticmethod
    def from_config(config: Dict[str, Dict[str, Any]], snapshot_path: str = "") -> ThreadContext:
        """
        Create a context from already loaded configuration.

        Args:
            config: Configuration as returned by load_config
            snapshot_path: Path to the JSON comment snapshot. Overrides the
                           configured path when given.

        Returns:
            A configured ThreadContext
        """
        path = snapshot_path or config["snapshot"]["path"]
        replies = config["replies"]

        return ThreadContext(
            source=JsonFileCommentSource(path),
            expanded=ExpandedRepliesStore(),
            formatter=PluralRepliesFormatter(
                one=replies["label_one"],
                other=replies["label_other"],
            ),
        )
