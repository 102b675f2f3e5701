import os
import tempfile
import unittest
from pathlib import Path

from ytrecon.errors import DirectoryNameError, ScanError
from ytrecon.scan import looks_like_video_id, parse_directory_name, scan_directories


class TestParseDirectoryName(unittest.TestCase):
    def test_second_field_is_the_id(self):
        e = parse_directory_name("[20200101] [abc123] Some Title")
        self.assertEqual(e.id, "abc123")
        self.assertEqual(e.fields, ("[20200101]", "[abc123]", "Some", "Title"))

    def test_unbracketed_and_extra_whitespace(self):
        self.assertEqual(parse_directory_name("20200101   abc123").id, "abc123")
        self.assertEqual(parse_directory_name("[x]\t[abc]").id, "abc")

    def test_only_one_bracket_layer_is_trimmed(self):
        self.assertEqual(parse_directory_name("[d] [[abc]] t").id, "[abc]")

    def test_malformed_names(self):
        for name in ("[20200101]", "", "   ", "[20200101] [] title"):
            with self.assertRaises(DirectoryNameError):
                parse_directory_name(name)


class TestScan(unittest.TestCase):
    def test_scan_ignores_files_and_orders_by_name(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "[20200202] [bbb] B").mkdir()
            (root / "[20200101] [aaa] A").mkdir()
            (root / "[20200303] [ccc] C.mp4").write_bytes(b"x")

            res = scan_directories(root)
            self.assertEqual(res.ids, ["aaa", "bbb"])
            self.assertEqual(res.malformed, ())

    def test_malformed_entries_are_reported_and_scan_continues(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "loose").mkdir()
            (root / "[20200101] [aaa] A").mkdir()

            res = scan_directories(root)
            self.assertEqual(res.ids, ["aaa"])
            self.assertEqual([m.name for m in res.malformed], ["loose"])

    def test_duplicate_ids_on_disk(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "[20200101] [aaa] first").mkdir()
            (root / "[20200101] [aaa] second").mkdir()

            res = scan_directories(root)
            self.assertEqual(res.ids, ["aaa", "aaa"])
            self.assertEqual(res.duplicate_ids, ["aaa"])

    def test_check_ids_flags_suspicious_but_keeps_them(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "[20200101] [dQw4w9WgXcQ] ok").mkdir()
            (root / "[20200101] [short] odd").mkdir()

            res = scan_directories(root, check_ids=True)
            self.assertEqual(sorted(res.ids), ["dQw4w9WgXcQ", "short"])
            self.assertEqual([e.id for e in res.suspicious], ["short"])

            self.assertEqual(scan_directories(root).suspicious, ())

    def test_symlinked_folders_are_not_counted(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            real = root / "[20200101] [aaa] A"
            real.mkdir()
            (root / "[20200101] [bbb] link").symlink_to(real, target_is_directory=True)

            self.assertEqual(scan_directories(root).ids, ["aaa"])

    @unittest.skipIf(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        "permission bits are not enforced for root",
    )
    def test_unreadable_root_is_fatal(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td) / "videos"
            (root / "[20200101] [aaa] A").mkdir(parents=True)
            root.chmod(0o000)
            try:
                with self.assertRaises(ScanError):
                    scan_directories(root)
            finally:
                root.chmod(0o755)

    def test_fatal_root_errors(self):
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            with self.assertRaises(ScanError):
                scan_directories(root / "missing")
            f = root / "file.txt"
            f.write_text("x", encoding="utf-8")
            with self.assertRaises(ScanError):
                scan_directories(f)


class TestVideoIdShape(unittest.TestCase):
    def test_shape(self):
        self.assertTrue(looks_like_video_id("dQw4w9WgXcQ"))
        self.assertTrue(looks_like_video_id("a-b_c-d_e-f"))
        self.assertFalse(looks_like_video_id("dQw4w9WgXc"))
        self.assertFalse(looks_like_video_id("dQw4w9WgXcQQ"))
        self.assertFalse(looks_like_video_id("dQw4w9WgX!Q"))
