"""Tests for remote and branch metadata."""

import pytest

from gitpanel.git.metadata import (
    BRANCH_LIST_ARGS,
    CURRENT_BRANCH_ARGS,
    REMOTE_LIST_ARGS,
    SYMBOLIC_BRANCH_ARGS,
    RepositoryMetadata,
    get_current_branch,
    parse_branch_list,
    parse_remote_list,
    reconcile,
    reload_metadata,
)


def _selection(metadata: RepositoryMetadata) -> tuple:
    return (
        metadata.selected_remote_index,
        metadata.selected_branch_index,
        metadata.push_remote,
        metadata.push_branch,
    )


class TestParsing:
    """Tests for listing parsers."""

    def test_parse_remote_list(self):
        assert parse_remote_list("origin\nupstream\n") == ["origin", "upstream"]
        assert parse_remote_list("") == []
        assert parse_remote_list(None) == []

    def test_parse_branch_list_strips_marker(self):
        assert parse_branch_list("* main\n  feature/x\n") == ["main", "feature/x"]

    def test_parse_branch_list_short_names(self):
        assert parse_branch_list("main\ndev\n\n") == ["main", "dev"]


class TestReconcile:
    """Tests for reconcile function."""

    def test_no_remotes_synthesizes_default(self):
        metadata = reconcile([], ["main"], "main", push_remote="", push_branch="")

        assert metadata.remotes == ["origin"]
        assert metadata.selected_remote_index == 0
        assert metadata.push_remote == "origin"

    def test_custom_default_remote(self):
        metadata = reconcile([], [], "", push_remote="", push_branch="", default_remote="upstream")

        assert metadata.remotes == ["upstream"]
        assert metadata.push_remote == "upstream"

    def test_empty_branches_seeded_with_current(self):
        metadata = reconcile(["origin"], [], "main", push_remote="origin", push_branch="")

        assert metadata.local_branches == ["main"]
        assert metadata.selected_branch_index == 0
        assert metadata.push_branch == "main"

    def test_previous_remote_kept(self):
        metadata = reconcile(["origin", "upstream"], ["main"], "main", "upstream", "")

        assert metadata.selected_remote_index == 1
        assert metadata.push_remote == "upstream"

    def test_unknown_remote_falls_back_to_first(self):
        metadata = reconcile(["origin", "upstream"], ["main"], "main", "gone", "")

        assert metadata.selected_remote_index == 0
        assert metadata.push_remote == "origin"

    def test_branch_prefers_previous_choice(self):
        metadata = reconcile(["origin"], ["dev", "main"], "main", "origin", "dev")

        assert metadata.selected_branch_index == 0
        assert metadata.push_branch == "dev"

    def test_branch_falls_back_to_current(self):
        metadata = reconcile(["origin"], ["dev", "main"], "main", "origin", "")

        assert metadata.selected_branch_index == 1
        assert metadata.push_branch == "main"

    def test_branch_falls_back_to_first(self):
        metadata = reconcile(["origin"], ["dev", "main"], "", "origin", "")

        assert metadata.selected_branch_index == 0
        assert metadata.push_branch == "dev"

    def test_unlisted_push_branch_is_kept(self):
        """A typed branch name survives even if it is not local."""
        metadata = reconcile(["origin"], ["dev", "main"], "main", "origin", "release")

        assert metadata.selected_branch_index == 1
        assert metadata.push_branch == "release"

    def test_no_branches_clears_push_branch(self):
        metadata = reconcile(["origin"], [], "", "origin", "stale")

        assert metadata.local_branches == []
        assert metadata.push_branch == ""
        assert metadata.selected_branch_index == 0

    @pytest.mark.parametrize(
        "remotes,branches,current,push_remote,push_branch",
        [
            (["origin", "upstream"], ["dev", "main"], "main", "upstream", ""),
            ([], [], "main", "", ""),
            (["origin"], [], "", "missing", "stale"),
            (["a", "b", "c"], ["x", "y"], "", "c", "y"),
        ],
    )
    def test_idempotent(self, remotes, branches, current, push_remote, push_branch):
        """Reconciling twice gives the same selection."""
        first = reconcile(remotes, branches, current, push_remote, push_branch)
        second = reconcile(
            first.remotes,
            first.local_branches,
            first.current_branch,
            first.push_remote,
            first.push_branch,
        )

        assert _selection(second) == _selection(first)
        assert second == first


class TestRepositoryMetadata:
    """Tests for the RepositoryMetadata model."""

    def test_selected_branch_clamped(self):
        metadata = RepositoryMetadata(local_branches=["main", "dev"], selected_branch_index=7)
        assert metadata.selected_branch == "dev"

    def test_selected_branch_empty(self):
        assert RepositoryMetadata().selected_branch == ""

    def test_select_remote_sets_push_remote(self):
        metadata = RepositoryMetadata(remotes=["origin", "upstream"])
        metadata.select_remote(1)

        assert metadata.selected_remote_index == 1
        assert metadata.push_remote == "upstream"

    def test_select_branch_clamps(self):
        metadata = RepositoryMetadata(local_branches=["main", "dev"])
        metadata.select_branch(-3)

        assert metadata.selected_branch_index == 0
        assert metadata.push_branch == "main"

    def test_select_without_lists_is_noop(self):
        metadata = RepositoryMetadata(push_remote="origin")
        metadata.select_remote(2)
        metadata.select_branch(2)

        assert metadata.push_remote == "origin"
        assert metadata.push_branch == ""

    def test_push_target_label(self):
        assert RepositoryMetadata(push_remote="origin", push_branch="main").push_target_label() == "origin main"
        assert RepositoryMetadata(push_remote="", push_branch="").push_target_label() == (
            "(default remote) (tracking branch)"
        )


class TestGetCurrentBranch:
    """Tests for get_current_branch function."""

    def test_rev_parse(self, repo_dir, fake_executor):
        fake_executor.script(CURRENT_BRANCH_ARGS, stdout="main\n")

        assert get_current_branch(repo_dir, fake_executor) == "main"
        assert not fake_executor.called(SYMBOLIC_BRANCH_ARGS)

    def test_unborn_branch_uses_symbolic_ref(self, repo_dir, fake_executor):
        fake_executor.script(
            CURRENT_BRANCH_ARGS,
            stderr="fatal: ambiguous argument 'HEAD'",
            exit_code=128,
        )
        fake_executor.script(SYMBOLIC_BRANCH_ARGS, stdout="master\n")

        assert get_current_branch(repo_dir, fake_executor) == "master"

    def test_detached_head(self, repo_dir, fake_executor):
        fake_executor.script(CURRENT_BRANCH_ARGS, stdout="HEAD\n")

        assert get_current_branch(repo_dir, fake_executor) == ""


class TestReloadMetadata:
    """Tests for reload_metadata function."""

    def test_not_a_repository(self, tmp_path, fake_executor):
        previous = RepositoryMetadata(push_remote="upstream", push_branch="dev")

        metadata = reload_metadata(tmp_path, fake_executor, previous=previous)

        assert metadata.remotes == []
        assert metadata.local_branches == []
        assert metadata.current_branch == ""
        assert metadata.push_remote == "upstream"
        assert fake_executor.calls == []

    def test_missing_root(self, fake_executor):
        metadata = reload_metadata(None, fake_executor)

        assert metadata.is_empty
        assert fake_executor.calls == []

    def test_queries_git(self, repo_dir, fake_executor):
        fake_executor.script(REMOTE_LIST_ARGS, stdout="origin\nupstream\n")
        fake_executor.script(BRANCH_LIST_ARGS, stdout="dev\nmain\n")
        fake_executor.script(CURRENT_BRANCH_ARGS, stdout="main\n")

        metadata = reload_metadata(repo_dir, fake_executor)

        assert metadata.remotes == ["origin", "upstream"]
        assert metadata.local_branches == ["dev", "main"]
        assert metadata.current_branch == "main"
        assert metadata.push_remote == "origin"
        assert metadata.push_branch == "main"
        assert metadata.selected_branch_index == 1

    def test_previous_selection_survives(self, repo_dir, fake_executor):
        fake_executor.script(REMOTE_LIST_ARGS, stdout="origin\nupstream\n")
        fake_executor.script(BRANCH_LIST_ARGS, stdout="dev\nmain\n")
        fake_executor.script(CURRENT_BRANCH_ARGS, stdout="main\n")
        previous = RepositoryMetadata(push_remote="upstream", push_branch="dev")

        metadata = reload_metadata(repo_dir, fake_executor, previous=previous)

        assert metadata.selected_remote_index == 1
        assert metadata.selected_branch_index == 0
        assert metadata.push_remote == "upstream"
        assert metadata.push_branch == "dev"

    def test_reload_twice_is_stable(self, repo_dir, fake_executor):
        fake_executor.script(REMOTE_LIST_ARGS, stdout="origin\n")
        fake_executor.script(BRANCH_LIST_ARGS, stdout="main\nwip\n")
        fake_executor.script(CURRENT_BRANCH_ARGS, stdout="wip\n")

        first = reload_metadata(repo_dir, fake_executor)
        second = reload_metadata(repo_dir, fake_executor, previous=first)

        assert _selection(second) == _selection(first)

    def test_failed_listing_treated_as_empty(self, repo_dir, fake_executor):
        fake_executor.script(REMOTE_LIST_ARGS, stderr="fatal: bad config", exit_code=128)
        fake_executor.script(CURRENT_BRANCH_ARGS, stdout="main\n")

        metadata = reload_metadata(repo_dir, fake_executor)

        assert metadata.remotes == ["origin"]
        assert metadata.local_branches == ["main"]
