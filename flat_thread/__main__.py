#!/usr/bin/env python3
"""
Command-line viewer for flattened comment threads.
"""

import sys
from typing import Iterable, Union

import fire  # type: ignore

from flat_thread.config import load_config
from flat_thread.context import ThreadContextProvider
from flat_thread.errors import FlatThreadError
from flat_thread.logging import configure_logging
from flat_thread.thread import ThreadPresenter, ThreadView


def _expand_ids(expand: Union[str, Iterable[str]]) -> list[str]:
    # fire parses "a,b" into a tuple and numeric ids into ints
    if isinstance(expand, (list, tuple)):
        return [str(part) for part in expand]
    return [part.strip() for part in str(expand).split(",") if part.strip()]


def format_thread(view: ThreadView) -> list[str]:
    """
    Format one thread as plain text lines.

    Args:
        view: The presented thread

    Returns:
        The root line, the replies label when there are replies, and one
        indented line per shown reply
    """
    lines = [f"{view.comment.user.name}: {view.comment.text}"]
    if view.replies_count == 0:
        return lines

    marker = "▲" if view.expanded else "▼"
    lines.append(f"  {marker} {view.replies_label}")
    for reply in view.replies:
        mention = f"@{reply.mention.author_name} " if reply.mention else ""
        lines.append(f"    {reply.comment.user.name}: {mention}{reply.comment.text}")
    return lines


def show_threads(
    snapshot_path: str = "",
    config_path: str = "",
    expand: Union[str, Iterable[str]] = "",
    expand_all: bool = False,
) -> None:
    """
    Print the flattened threads of a comment snapshot.

    Args:
        snapshot_path: Path to the JSON comment snapshot
        config_path: Path to the TOML configuration file
        expand: Comma separated top-level comment ids whose replies to show
        expand_all: Show the replies of every thread
    """
    config = load_config(config_path)
    configure_logging(config["logging"]["level"], config["logging"]["format"])

    context = ThreadContextProvider.from_config(config, snapshot_path)
    presenter = ThreadPresenter(context)

    try:
        if expand_all or config["replies"]["expand_all"]:
            for root_id in context.source.snapshot().roots:
                presenter.set_replies_expanded(root_id, True)
        for root_id in _expand_ids(expand):
            presenter.set_replies_expanded(root_id, True)

        views = presenter.present_all()
    except FlatThreadError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        raise SystemExit(1) from e

    print(f"Found {len(views)} threads")
    for view in views:
        for line in format_thread(view):
            print(line)


def main() -> None:
    fire.Fire(show_threads)


if __name__ == "__main__":
    main()
