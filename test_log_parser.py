import unittest

from log_parser import (
    parse_commit_object,
    parse_git_log,
    parse_history_line,
    parse_history_lines,
)


class TestParseGitLog(unittest.TestCase):

    def test_single_record(self):
        records = parse_git_log("abc123★Tenny★1600000000★Version 1.0\n- fix\n⛔")
        self.assertEqual(len(records), 1)
        record = records[0]
        self.assertEqual(record.commit_hash, "abc123")
        self.assertEqual(record.author, "Tenny")
        self.assertEqual(record.timestamp, 1600000000)
        self.assertEqual(record.message, "Version 1.0\n- fix\n")
        self.assertEqual(record.parent_hash, "")
        self.assertEqual(record.author_email, "")

    def test_extra_field_separator_truncates_message(self):
        records = parse_git_log("abc★Tenny★1600000000★part1★part2⛔")
        self.assertEqual(records[0].message, "part1")
        self.assertEqual(records[0].commit_hash, "abc")

    def test_empty_output(self):
        self.assertEqual(parse_git_log(""), [])
        self.assertEqual(parse_git_log(None), [])
        self.assertEqual(parse_git_log("⛔"), [])
        self.assertEqual(parse_git_log("⛔\n⛔"), [])

    def test_short_records_are_dropped(self):
        output = "abc★Tenny★1600000000⛔def★Amy★1600000001★ok⛔"
        records = parse_git_log(output)
        self.assertEqual([r.commit_hash for r in records], ["def"])

    def test_bad_timestamp_defaults_to_zero(self):
        records = parse_git_log("abc★Tenny★yesterday★msg⛔")
        self.assertEqual(records[0].timestamp, 0)

    def test_newline_between_records(self):
        # git log --pretty=format: 在记录之间插入换行
        output = "aaa★Tenny★1★first\n⛔\nbbb★Tenny★2★second\n⛔"
        records = parse_git_log(output)
        self.assertEqual([r.commit_hash for r in records], ["aaa", "bbb"])
        self.assertEqual(records[1].message, "second\n")

    def test_custom_separators(self):
        records = parse_git_log("a|b|3|c\x1e", record_separator="\x1e", field_separator="|")
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].message, "c")


class TestParseHistoryLine(unittest.TestCase):

    def test_example_line(self):
        record = parse_history_line("abc123 def456 Tenny tenny@example.com 1600000000")
        self.assertEqual(record.parent_hash, "abc123")
        self.assertEqual(record.commit_hash, "def456")
        self.assertEqual(record.timestamp, 1600000000)

    def test_short_lines_are_skipped(self):
        for line in ["", "a", "a b c d", "a b c d\n"]:
            self.assertIsNone(parse_history_line(line))

    def test_parse_history_lines_keeps_order(self):
        records = parse_history_lines(["0 1 a b 10", "bad", "1 2 a b 20"])
        self.assertEqual([r.commit_hash for r in records], ["1", "2"])


class TestParseCommitObject(unittest.TestCase):

    def test_commit_object(self):
        text = (
            "tree 4b825dc642cb6eb9a060e54bf8d69288fbee4904\n"
            "parent 1111111111111111111111111111111111111111\n"
            "parent 2222222222222222222222222222222222222222\n"
            "author Tenny Lin <tenny@example.com> 1600000000 +0800\n"
            "committer Tenny Lin <tenny@example.com> 1600000001 +0800\n"
            "\n"
            "Version 1.0.0.0\n- ADD：增加設定檔\n"
        )
        record = parse_commit_object("abc", text)
        self.assertEqual(record.commit_hash, "abc")
        self.assertEqual(record.parent_hash, "1" * 40)
        self.assertEqual(record.author, "Tenny Lin")
        self.assertEqual(record.author_email, "tenny@example.com")
        self.assertEqual(record.timestamp, 1600000000)
        self.assertEqual(record.message, "Version 1.0.0.0\n- ADD：增加設定檔\n")

    def test_empty_input(self):
        self.assertIsNone(parse_commit_object("abc", ""))
        self.assertIsNone(parse_commit_object("", "tree x\n\nmsg"))


if __name__ == "__main__":
    unittest.main()
