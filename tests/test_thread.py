"""
Tests for the thread module.
"""

from flat_thread.context import ThreadContext
from flat_thread.graph import CommentGraph
from flat_thread.source import StaticCommentSource
from flat_thread.thread import ThreadPresenter


class TestThreadPresenter:
    """Tests for the ThreadPresenter class."""

    def test_init(self, context):
        """Test initializing the presenter."""
        presenter = ThreadPresenter(context)
        assert presenter.context == context

    def test_collapsed_by_default(self, context):
        """Test that a fresh thread shows its count but no replies."""
        view = ThreadPresenter(context).present("A")

        assert view.comment.id == "A"
        assert view.replies_count == 3
        assert view.replies_label == "3 replies"
        assert view.expanded is False
        assert view.collapsed is False
        assert view.replies == []

    def test_expanded_example(self, context):
        """Test the flattened replies of the example thread."""
        presenter = ThreadPresenter(context)
        assert presenter.toggle_replies("A") is True

        view = presenter.present("A")

        assert view.expanded is True
        assert [reply.comment.id for reply in view.replies] == ["C", "B", "D"]
        assert [reply.level for reply in view.replies] == [1, 1, 1]
        assert view.replies[0].mention is None
        assert view.replies[1].mention is None
        assert view.replies[2].mention.author_name == "carol"
        assert view.replies[2].mention.author_id == "id-carol"

    def test_toggle_twice_collapses(self, context):
        """Test that toggling again hides the replies."""
        presenter = ThreadPresenter(context)
        presenter.toggle_replies("A")
        assert presenter.toggle_replies("A") is False
        assert presenter.present("A").replies == []

    def test_hidden_and_dangling_replies_dropped(self, deep_graph, store):
        """Test that hidden and missing replies are not shown but still counted."""
        context = ThreadContext(source=StaticCommentSource(deep_graph), expanded=store)
        presenter = ThreadPresenter(context)
        presenter.set_replies_expanded("R1", True)

        view = presenter.present("R1")

        assert view.replies_count == 5
        assert [reply.comment.id for reply in view.replies] == ["r1", "r3", "r2"]
        assert view.replies[0].mention is None
        assert view.replies[1].mention.author_name == "user-r1"
        # replies to a hidden comment still mention its author
        assert view.replies[2].mention.author_name == "user-h1"

    def test_hidden_or_unknown_root(self, deep_graph, store):
        """Test that hidden or unknown roots produce no view."""
        context = ThreadContext(source=StaticCommentSource(deep_graph), expanded=store)
        presenter = ThreadPresenter(context)

        assert presenter.present("hidden-root") is None
        assert presenter.present("nope") is None

    def test_expanded_without_replies(self, deep_graph, store):
        """Test that an expanded thread without replies shows nothing extra."""
        context = ThreadContext(source=StaticCommentSource(deep_graph), expanded=store)
        presenter = ThreadPresenter(context)
        presenter.set_replies_expanded("R2", True)

        view = presenter.present("R2")

        assert view.replies_count == 0
        assert view.replies_label == "0 replies"
        assert view.expanded is True
        assert view.replies == []

    def test_present_all(self, deep_graph, store):
        """Test that every visible root is presented in order."""
        context = ThreadContext(source=StaticCommentSource(deep_graph), expanded=store)
        views = ThreadPresenter(context).present_all()

        assert [view.comment.id for view in views] == ["R1", "R2"]

    def test_collapse_decision_is_separate(self, example_graph, store, collapse_factory):
        """Test that the collapse decision does not touch the expanded state."""
        collapse = collapse_factory(["A"])
        context = ThreadContext(
            source=StaticCommentSource(example_graph),
            expanded=store,
            collapse=collapse,
        )

        view = ThreadPresenter(context).present("A")

        assert view.collapsed is True
        assert view.expanded is False
        assert collapse.calls == ["A"]

    def test_counts_follow_new_snapshot(self, example_graph, comment_factory, store):
        """Test that counts are recomputed from the current snapshot."""
        source = StaticCommentSource(example_graph)
        presenter = ThreadPresenter(ThreadContext(source=source, expanded=store))
        assert presenter.present("A").replies_count == 3

        comments = list(example_graph.all_comments.values())
        comments.append(comment_factory("E", pid="D", time="1970-01-01T00:00:50Z", name="erin"))
        source.replace(CommentGraph.from_comments(comments))
        presenter.toggle_replies("A")

        view = presenter.present("A")
        assert view.replies_count == 4
        assert [reply.comment.id for reply in view.replies] == ["E", "C", "B", "D"]
        assert view.replies[0].mention.author_name == "dave"

    def test_silent_on_dangling_replies(self, deep_graph, store, capsys):
        """Test that skipping missing and hidden replies writes nothing."""
        context = ThreadContext(source=StaticCommentSource(deep_graph), expanded=store)
        presenter = ThreadPresenter(context)
        presenter.set_replies_expanded("R1", True)

        presenter.present_all()

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
