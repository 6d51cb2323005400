import os
import stat
import shutil
import tempfile
import unittest
from pathlib import Path

from libtarinfo import OperationFailedError


class FileSystem_test(unittest.TestCase):

    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_create_directory(self):
        from util import FileSystem

        fs = FileSystem()
        path = self.tmpdir / "a" / "b" / "c"
        fs.create_directory(path)
        self.assertTrue(path.is_dir())

        # 已经存在时不报错
        fs.create_directory(path)
        self.assertTrue(path.is_dir())

    def test_create_directory_over_file(self):
        from util import FileSystem

        path = self.tmpdir / "file"
        path.write_text("x")
        with self.assertRaises(OperationFailedError) as cm:
            FileSystem().create_directory(path)
        self.assertEqual(cm.exception.reason, "create directory")
        self.assertEqual(cm.exception.target, path)

    def test_create_file(self):
        from util import FileSystem

        path = self.tmpdir / "data.bin"
        FileSystem().create_file(path, memoryview(b"0123456789")[2:5])
        self.assertEqual(path.read_bytes(), b"234")

    def test_create_file_missing_parent(self):
        from util import FileSystem

        path = self.tmpdir / "missing" / "data.bin"
        with self.assertRaises(OperationFailedError) as cm:
            FileSystem().create_file(path, b"x")
        self.assertIsInstance(cm.exception.__cause__, FileNotFoundError)
        self.assertFalse(path.parent.exists())

    def test_write_empty_file(self):
        from util import FileSystem

        path = self.tmpdir / "empty"
        path.write_text("not empty")
        FileSystem().write_empty_file(path)
        self.assertEqual(path.read_bytes(), b"")
        # 不留下临时文件
        self.assertEqual(list(self.tmpdir.iterdir()), [path])

    def test_empty_and_non_empty_file_mode(self):
        from util import FileSystem

        fs = FileSystem()
        old = os.umask(0o022)
        try:
            fs.create_file(self.tmpdir / "a.txt", b"hi")
            fs.write_empty_file(self.tmpdir / "b.txt")
        finally:
            os.umask(old)

        mode_a = stat.S_IMODE((self.tmpdir / "a.txt").stat().st_mode)
        mode_b = stat.S_IMODE((self.tmpdir / "b.txt").stat().st_mode)
        self.assertEqual(mode_b, mode_a)
        self.assertEqual(mode_b, 0o644)

    def test_write_empty_file_missing_parent(self):
        from util import FileSystem

        with self.assertRaises(OperationFailedError):
            FileSystem().write_empty_file(self.tmpdir / "missing" / "empty")


class Util_test(unittest.TestCase):

    def test_order_bad_path(self):
        from util import order_bad_path

        self.assertEqual(order_bad_path("../../dir1/file1"), Path("dir1/file1"))
        self.assertEqual(order_bad_path("dir1/../file1"), Path("dir1/file1"))
        self.assertEqual(order_bad_path("/dir1/file1"), Path("dir1/file1"))
        self.assertEqual(order_bad_path("dir1/"), Path("dir1"))
        self.assertEqual(order_bad_path(".."), Path())

    def test_read_archive(self):
        from util import read_archive

        tmpdir = Path(tempfile.mkdtemp())
        try:
            path = tmpdir / "a.tar"
            path.write_bytes(b"\0" * 1024)
            self.assertEqual(read_archive(path), b"\0" * 1024)

            with self.assertRaises(OperationFailedError):
                read_archive(tmpdir / "missing.tar")
        finally:
            shutil.rmtree(tmpdir)


if __name__ == "__main__":
    unittest.main()
