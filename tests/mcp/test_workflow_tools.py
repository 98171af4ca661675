"""Tests for workflow actions dispatched against an Issue Store."""

import pytest

from orchestration_server.mcp.errors import IssueNotFoundError, IssueStoreError
from orchestration_server.mcp.workflow import NO_ACTIONABLE_TASKS


class TestGetNextTask:
    """Test get_next_task."""

    @pytest.mark.asyncio
    async def test_queries_open_tasks(self, dispatcher, store):
        await dispatcher.dispatch("get_next_task", {})
        assert store.calls == [("list_issues", "open", ["task"])]

    @pytest.mark.asyncio
    async def test_no_actionable_tasks(self, dispatcher, store):
        store.seed("Busy", ["task", "status:in-progress"])
        store.seed("Stuck", ["task", "status:blocked"])
        store.seed("Waiting", ["task", "status:review"])

        result = await dispatcher.dispatch("get_next_task")

        assert result.display_text == NO_ACTIONABLE_TASKS
        assert "Recommended Agent" not in result.display_text

    @pytest.mark.asyncio
    async def test_skips_busy_and_non_task_issues(self, dispatcher, store):
        store.seed("Epic", ["epic"])
        store.seed("Busy", ["task", "status:in-progress"])
        store.seed("Designed", ["task", "status:designed"], body="Build it")

        result = await dispatcher.dispatch("get_next_task")

        assert "**Next Task:** #3 - Designed" in result.display_text
        assert "**Recommended Agent:** developer" in result.display_text
        assert "**Description:** Build it" in result.display_text

    @pytest.mark.asyncio
    async def test_recommends_architect(self, dispatcher, store):
        store.seed("Raw", ["task"])

        result = await dispatcher.dispatch("get_next_task")

        assert "**Recommended Agent:** architect" in result.display_text

    @pytest.mark.asyncio
    async def test_closed_tasks_ignored(self, dispatcher, store):
        store.seed("Done", ["task", "status:approved"], state="closed")

        result = await dispatcher.dispatch("get_next_task")

        assert result.display_text == NO_ACTIONABLE_TASKS


class TestTaskTransitions:
    """Test label replacement and audit comments for each transition."""

    @pytest.fixture
    def task(self, store):
        for number in range(1, 42):
            store.seed(f"Filler {number}", ["epic"])
        return store.seed("Setup JWT Middleware", ["task"])

    @pytest.mark.asyncio
    async def test_start_task(self, dispatcher, store, task):
        assert task.number == 42

        result = await dispatcher.dispatch("start_task", {"taskId": 42, "agentRole": "developer"})

        issue = await store.get_issue(42)
        assert set(issue.labels) == {"task", "status:in-progress"}
        comments = store.comments_for(42)
        assert len(comments) == 1
        assert comments[0] == "Started by **developer** at 2026-01-31T12:30:45.123Z"
        assert result.display_text == "Task #42 is now in progress. Assigned to: developer"

    @pytest.mark.asyncio
    async def test_update_happens_before_comment(self, dispatcher, store, task):
        await dispatcher.dispatch("start_task", {"task_id": 42, "agent_role": "architect"})

        operations = [call[0] for call in store.calls]
        assert operations == ["update_issue", "add_comment"]

    @pytest.mark.asyncio
    async def test_request_review(self, dispatcher, store, task):
        result = await dispatcher.dispatch(
            "request_review", {"task_id": 42, "reviewer_role": "tech-lead", "notes": "Ready"}
        )

        assert store.issues[42].labels == ["task", "status:review"]
        assert store.comments_for(42) == [
            "**Review Requested**\n\nReviewer: **tech-lead**\n\nNotes: Ready"
        ]
        assert result.display_text == "Review requested from tech-lead for Task #42"

    @pytest.mark.asyncio
    async def test_approve_task(self, dispatcher, store):
        for number in range(1, 7):
            store.seed(f"Filler {number}", ["bug"])
        store.seed("Reviewed task", ["task", "status:review"])

        result = await dispatcher.dispatch("approve_task", {"taskId": 7, "approverRole": "qa"})

        issue = store.issues[7]
        assert issue.state == "closed"
        assert set(issue.labels) == {"task", "status:approved"}
        assert "Approved by qa" in store.comments_for(7)[0]
        assert result.display_text == "Task #7 approved and closed by qa"

    @pytest.mark.asyncio
    async def test_reject_task(self, dispatcher, store):
        for number in range(1, 7):
            store.seed(f"Filler {number}", ["bug"])
        store.seed("Reviewed task", ["task", "status:review"])

        result = await dispatcher.dispatch(
            "reject_task",
            {"taskId": 7, "reviewerRole": "architect", "reason": "missing tests"},
        )

        issue = store.issues[7]
        assert set(issue.labels) == {"task", "status:in-progress", "needs-changes"}
        assert issue.state == "open"
        assert store.comments_for(7) == ["❌ **Changes Requested by architect**\n\nmissing tests"]
        assert result.display_text == "Task #7 rejected. Changes requested by architect"

    @pytest.mark.asyncio
    async def test_block_task(self, dispatcher, store, task):
        result = await dispatcher.dispatch(
            "block_task",
            {"task_id": 42, "reason": "Waiting for API key", "blocked_by": "Vendor"},
        )

        assert store.issues[42].labels == ["task", "status:blocked"]
        assert "Reason: Waiting for API key" in store.comments_for(42)[0]
        assert "Blocked by: Vendor" in store.comments_for(42)[0]
        assert result.display_text == "Task #42 marked as blocked"

    @pytest.mark.asyncio
    async def test_transition_replaces_foreign_labels(self, dispatcher, store):
        """Labels are replaced wholesale, not merged."""
        store.seed("Task", ["task", "status:review", "status:designed", "frontend"])

        await dispatcher.dispatch("start_task", {"task_id": 1, "agent_role": "developer"})

        assert store.issues[1].labels == ["task", "status:in-progress"]

    @pytest.mark.asyncio
    async def test_repeated_transition_is_idempotent_on_labels(self, dispatcher, store, task):
        """Applying the same transition twice does not accumulate labels."""
        args = {"task_id": 42, "reason": "Waiting"}
        await dispatcher.dispatch("block_task", args)
        first = list(store.issues[42].labels)
        await dispatcher.dispatch("block_task", args)

        assert store.issues[42].labels == first
        # Comments are not deduplicated
        assert len(store.comments_for(42)) == 2

    @pytest.mark.asyncio
    async def test_restart_after_rejection_clears_needs_changes(self, dispatcher, store, task):
        await dispatcher.dispatch(
            "reject_task", {"task_id": 42, "reviewer_role": "qa", "reason": "flaky"}
        )
        await dispatcher.dispatch("start_task", {"task_id": 42, "agent_role": "developer"})

        assert store.issues[42].labels == ["task", "status:in-progress"]

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, dispatcher, store):
        """unstarted -> in-progress -> review -> rejected -> review -> approved."""
        store.seed("Feature", ["task"])

        await dispatcher.dispatch("start_task", {"task_id": 1, "agent_role": "developer"})
        assert "No actionable" in (await dispatcher.dispatch("get_next_task")).display_text
        await dispatcher.dispatch("request_review", {"task_id": 1, "reviewer_role": "qa"})
        await dispatcher.dispatch(
            "reject_task", {"task_id": 1, "reviewer_role": "qa", "reason": "typo"}
        )
        await dispatcher.dispatch("request_review", {"task_id": 1, "reviewer_role": "qa"})
        await dispatcher.dispatch("approve_task", {"task_id": 1, "approver_role": "tech-lead"})

        issue = store.issues[1]
        assert issue.state == "closed"
        assert issue.labels == ["task", "status:approved"]
        assert len(store.comments_for(1)) == 5

    @pytest.mark.asyncio
    async def test_missing_task_propagates_not_found(self, dispatcher, store):
        with pytest.raises(IssueNotFoundError):
            await dispatcher.dispatch("start_task", {"task_id": 99, "agent_role": "developer"})

    @pytest.mark.asyncio
    async def test_comment_failure_leaves_label_update_applied(self, dispatcher, store, task):
        """The two steps are not atomic and nothing is rolled back."""
        store.fail_on = "add_comment"

        with pytest.raises(IssueStoreError):
            await dispatcher.dispatch("start_task", {"task_id": 42, "agent_role": "developer"})

        assert store.issues[42].labels == ["task", "status:in-progress"]
        assert store.comments_for(42) == []
