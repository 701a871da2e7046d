import os
import tempfile
import unittest
from unittest import mock

from errors import ConfigurationError
from reference_resolver import ReferenceResolver


def _write(path: str, content: str):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


class TestReferenceResolver(unittest.TestCase):

    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.git_dir = tmp.name
        _write(os.path.join(self.git_dir, "refs", "heads", "develop"), "def456\n")

    def test_rejects_empty_and_missing_root(self):
        with self.assertRaises(ConfigurationError):
            ReferenceResolver("")
        with self.assertRaises(ConfigurationError):
            ReferenceResolver(os.path.join(self.git_dir, "no-such-dir"))

    def test_resolve_head_reference_path(self):
        _write(os.path.join(self.git_dir, "HEAD"), "ref: refs/heads/develop\n")
        resolver = ReferenceResolver(self.git_dir)
        path = resolver.resolve_head_reference_path()
        self.assertEqual(path, os.path.join(self.git_dir, "refs", "heads", "develop"))

    def test_head_token_is_case_insensitive_and_backslashes_normalized(self):
        _write(os.path.join(self.git_dir, "HEAD"), "REF: refs\\heads\\develop\r\n")
        path = ReferenceResolver(self.git_dir).resolve_head_reference_path()
        self.assertIsNotNone(path)
        self.assertTrue(path.endswith(os.path.join("refs", "heads", "develop")))

    def test_only_first_ref_token_is_used(self):
        _write(
            os.path.join(self.git_dir, "HEAD"),
            "ref: refs/heads/develop\nref: refs/heads/other\n",
        )
        path = ReferenceResolver(self.git_dir).resolve_head_reference_path()
        self.assertTrue(path.endswith(os.path.join("heads", "develop")))

    def test_head_not_found_cases(self):
        resolver = ReferenceResolver(self.git_dir)
        # HEAD 不存在
        self.assertIsNone(resolver.resolve_head_reference_path())

        # 分离头指针，没有 ref:
        _write(os.path.join(self.git_dir, "HEAD"), "def456\n")
        self.assertIsNone(resolver.resolve_head_reference_path())

        # ref 文件不存在
        _write(os.path.join(self.git_dir, "HEAD"), "ref: refs/heads/missing\n")
        self.assertIsNone(resolver.resolve_head_reference_path())

    def test_accepts_working_tree_root(self):
        with tempfile.TemporaryDirectory() as work_tree:
            dot_git = os.path.join(work_tree, ".git")
            _write(os.path.join(dot_git, "HEAD"), "ref: refs/heads/main\n")
            _write(os.path.join(dot_git, "refs", "heads", "main"), "cafe01\n")
            resolver = ReferenceResolver(work_tree)
            self.assertEqual(resolver.git_dir, dot_git)
            self.assertEqual(resolver.resolve_head_hash(), "cafe01")

    def test_resolve_latest_hash(self):
        resolver = ReferenceResolver(self.git_dir)
        ref_path = os.path.join(self.git_dir, "refs", "heads", "develop")
        self.assertEqual(resolver.resolve_latest_hash(ref_path), "def456")
        self.assertIsNone(resolver.resolve_latest_hash(ref_path + "-missing"))

    def test_latest_hash_is_not_validated(self):
        ref_path = os.path.join(self.git_dir, "refs", "heads", "odd")
        _write(ref_path, "not a hash\r\n")
        resolver = ReferenceResolver(self.git_dir)
        self.assertEqual(resolver.resolve_latest_hash(ref_path), "not a hash")

    def test_list_branch_history(self):
        _write(
            os.path.join(self.git_dir, "logs", "refs", "heads", "develop"),
            "abc123 def456 Tenny tenny@example.com 1600000000\n"
            "too short line\n"
            "\n"
            "def456 aaa999 Tenny <tenny@example.com> notanumber +0800\tcommit: fix\n"
            "aaa999 bbb000 Tenny <tenny@example.com> 1600000100 +0800\tcommit: add\n",
        )
        records = ReferenceResolver(self.git_dir).list_branch_history("develop")

        self.assertEqual([r.commit_hash for r in records], ["def456", "aaa999", "bbb000"])
        first = records[0]
        self.assertEqual(first.parent_hash, "abc123")
        self.assertEqual(first.author, "Tenny")
        self.assertEqual(first.author_email, "tenny@example.com")
        self.assertEqual(first.timestamp, 1600000000)
        self.assertEqual(first.message, "")
        self.assertEqual(records[1].timestamp, 0)
        self.assertEqual(records[2].timestamp, 1600000100)

    def test_list_branch_history_missing_file(self):
        resolver = ReferenceResolver(self.git_dir)
        self.assertEqual(resolver.list_branch_history("feature/none"), [])

    def test_list_branch_history_nested_branch_name(self):
        _write(
            os.path.join(self.git_dir, "logs", "refs", "heads", "feature", "x"),
            "0 1 a b 2\n",
        )
        records = ReferenceResolver(self.git_dir).list_branch_history("feature/x")
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].commit_hash, "1")

    def test_unreadable_head_is_logged_not_raised(self):
        os.makedirs(os.path.join(self.git_dir, "HEAD"))
        resolver = ReferenceResolver(self.git_dir)
        with self.assertLogs("reference_resolver", level="ERROR") as logs:
            self.assertIsNone(resolver.resolve_head_reference_path())
        self.assertIn("HEAD", logs.output[0])

    def test_unreadable_ref_file_is_logged_not_raised(self):
        resolver = ReferenceResolver(self.git_dir)
        ref_path = os.path.join(self.git_dir, "refs", "heads", "develop")
        with mock.patch("builtins.open", side_effect=PermissionError("denied")):
            with self.assertLogs("reference_resolver", level="ERROR") as logs:
                self.assertIsNone(resolver.resolve_latest_hash(ref_path))
        self.assertIn("denied", logs.output[0])

    def test_unreadable_history_is_logged_not_raised(self):
        os.makedirs(os.path.join(self.git_dir, "logs", "refs", "heads", "develop"))
        resolver = ReferenceResolver(self.git_dir)
        with self.assertLogs("reference_resolver", level="ERROR") as logs:
            self.assertEqual(resolver.list_branch_history("develop"), [])
        self.assertIn("reflog", logs.output[0])


if __name__ == "__main__":
    unittest.main()
