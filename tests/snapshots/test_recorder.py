"""Tests for the snapshot recorder."""

import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock

from auto_commit.config.loader import Config
from auto_commit.snapshots.recorder import SnapshotRecorder, format_timestamp
from auto_commit.synthesis.change_model import ChangeRecord
from auto_commit.vcs.git_client import DiffSummary, GitClient, GitError, StatusResult


def make_client(status=None, summaries=None):
    client = Mock(spec=GitClient)
    client.status.return_value = status or StatusResult()
    summaries = summaries or {}

    def diff_summary(path):
        value = summaries.get(path)
        if isinstance(value, Exception):
            raise value
        return value

    client.diff_summary.side_effect = diff_summary
    return client


def make_config(**overrides):
    return Config(repo_root=Path("/repo"), **overrides)


class TestCollectChanges(unittest.TestCase):
    def test_uses_numstat_counts(self):
        client = make_client(summaries={"src/app.js": DiffSummary("src/app.js", 4, 2)})
        records = SnapshotRecorder(client, make_config()).collect_changes(["src/app.js"])
        self.assertEqual(records, [ChangeRecord("src/app.js", 4, 2)])

    def test_binary_files(self):
        client = make_client(summaries={"logo.png": DiffSummary("logo.png", 0, 0, binary=True)})
        records = SnapshotRecorder(client, make_config()).collect_changes(["logo.png"])
        self.assertEqual(records, [ChangeRecord("logo.png", 0, 0, is_binary=True)])

    def test_undiffable_files_count_as_one_line_addition(self):
        client = make_client(
            summaries={
                "untracked.js": None,
                "fresh.js": GitError("ambiguous argument 'HEAD'"),
                "mode-only.sh": DiffSummary("mode-only.sh", 0, 0),
            }
        )
        records = SnapshotRecorder(client, make_config()).collect_changes(
            ["untracked.js", "fresh.js", "mode-only.sh"]
        )
        self.assertEqual(
            records,
            [
                ChangeRecord("untracked.js", 1, 0),
                ChangeRecord("fresh.js", 1, 0),
                ChangeRecord("mode-only.sh", 1, 0),
            ],
        )


class TestRecordSnapshot(unittest.TestCase):
    def test_nothing_to_commit(self):
        client = make_client()
        recorder = SnapshotRecorder(client, make_config())
        with self.assertLogs("auto_commit.snapshots.recorder", level="INFO") as logs:
            self.assertFalse(recorder.record_snapshot())
        self.assertIn("No changes to commit", logs.output[0])
        client.add.assert_not_called()
        client.commit.assert_not_called()

    def test_commits_with_generated_message(self):
        client = make_client(
            status=StatusResult(not_added=["src/a.test.js"]),
            summaries={"src/a.test.js": None},
        )
        recorder = SnapshotRecorder(client, make_config())

        self.assertTrue(recorder.record_snapshot())

        client.add.assert_called_once_with(["src/a.test.js"])
        client.commit.assert_called_once_with("WIP: test(src): add 1 new file")
        client.push.assert_not_called()

    def test_explicit_paths_skip_status(self):
        client = make_client(
            summaries={
                "src/utils/a.js": DiffSummary("src/utils/a.js", 3, 1),
                "src/utils/b.js": DiffSummary("src/utils/b.js", 1, 1),
            }
        )
        recorder = SnapshotRecorder(client, make_config(auto_commit_prefix="[auto]"))

        self.assertTrue(recorder.record_snapshot(["src/utils/a.js", "src/utils/b.js"]))

        client.status.assert_not_called()
        client.commit.assert_called_once_with("[auto] fix(utils): update 2 files")

    def test_fallback_template_with_timestamp(self):
        client = make_client(status=StatusResult(modified=["notes.md"]))
        clock = lambda: datetime(2024, 5, 1, 10, 20, 30, 123456, tzinfo=timezone.utc)
        recorder = SnapshotRecorder(
            client,
            make_config(auto_generate_messages=False, commit_message="Auto-saved changes"),
            clock=clock,
        )

        self.assertTrue(recorder.record_snapshot())

        client.commit.assert_called_once_with("WIP: Auto-saved changes [2024-05-01T10-20-30-123Z]")

    def test_pushes_when_enabled(self):
        client = make_client(status=StatusResult(modified=["a.js"]))
        recorder = SnapshotRecorder(client, make_config(push=True, remote="upstream", branch="dev"))

        self.assertTrue(recorder.record_snapshot())

        client.push.assert_called_once_with("upstream", "dev")

    def test_push_failure_is_not_fatal(self):
        client = make_client(status=StatusResult(modified=["a.js"]))
        client.push.side_effect = GitError("rejected")
        recorder = SnapshotRecorder(client, make_config(push=True))

        with self.assertLogs("auto_commit.snapshots.recorder", level="WARNING") as logs:
            self.assertTrue(recorder.record_snapshot())
        self.assertTrue(any("Failed to push changes" in line for line in logs.output))
        client.commit.assert_called_once()

    def test_commit_failure_returns_false(self):
        client = make_client(status=StatusResult(modified=["a.js"]))
        client.commit.side_effect = GitError("index.lock exists")
        recorder = SnapshotRecorder(client, make_config(push=True))

        with self.assertLogs("auto_commit.snapshots.recorder", level="ERROR"):
            self.assertFalse(recorder.record_snapshot())
        client.push.assert_not_called()

    def test_stage_failure_returns_false(self):
        client = make_client(status=StatusResult(modified=["a.js"]))
        client.add.side_effect = GitError("pathspec did not match")
        recorder = SnapshotRecorder(client, make_config())

        with self.assertLogs("auto_commit.snapshots.recorder", level="ERROR"):
            self.assertFalse(recorder.record_snapshot())
        client.commit.assert_not_called()

    def test_status_failure_returns_false(self):
        client = make_client()
        client.status.side_effect = GitError("not a git repository")
        recorder = SnapshotRecorder(client, make_config())

        with self.assertLogs("auto_commit.snapshots.recorder", level="ERROR"):
            self.assertFalse(recorder.record_snapshot())


class TestFormatTimestamp(unittest.TestCase):
    def test_replaces_separators(self):
        moment = datetime(2023, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)
        self.assertEqual(format_timestamp(moment), "2023-12-31T23-59-59-999Z")


if __name__ == "__main__":
    unittest.main()
