#!/usr/bin/env python3
# coding=utf-8
# author calllivecn <calllivecn@outlook.com>


import io
import os
import sys
import shutil
import tarfile
import tempfile
import unittest
import subprocess
from pathlib import Path

import version


UNTAR_SCRIPT = os.path.abspath(os.path.join(os.path.dirname(__file__), "untar.py"))


class MainTestCase(unittest.TestCase):
    def test_version(self):
        self.assertTrue(hasattr(version, "VERSION"), True)


class UntarFunctionalTest(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.archive = Path(self.tmpdir) / "test.tar"

        # 用 tarfile 创建测试包
        with tarfile.open(self.archive, mode="w", format=tarfile.USTAR_FORMAT) as tar:
            self._add(tar, "src", None)
            self._add(tar, "src/file1.txt", b"hello world\n")
            self._add(tar, "src/empty.txt", b"")
            self._add(tar, "src/subdir", None)
            self._add(tar, "src/subdir/file3.txt", b"subdir file\n")

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _add(self, tar, name, data):
        tarinfo = tarfile.TarInfo(name)
        if data is None:
            tarinfo.type = tarfile.DIRTYPE
            tar.addfile(tarinfo)
        else:
            tarinfo.size = len(data)
            tar.addfile(tarinfo, io.BytesIO(data))

    def run_untar(self, args, input=None):
        cmd = [sys.executable, UNTAR_SCRIPT] + args
        result = subprocess.run(
            cmd,
            input=input,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=self.tmpdir,
        )
        return result

    def test_extract(self):
        extract_dir = Path(self.tmpdir) / "extract"
        result = self.run_untar(["-xf", str(self.archive), "-C", str(extract_dir)])
        self.assertEqual(result.returncode, 0, msg=result.stderr)

        self.assertEqual((extract_dir / "src" / "file1.txt").read_text(), "hello world\n")
        self.assertEqual((extract_dir / "src" / "empty.txt").read_bytes(), b"")
        self.assertEqual(
            (extract_dir / "src" / "subdir" / "file3.txt").read_text(), "subdir file\n"
        )

    def test_extract_stdin_verbose(self):
        extract_dir = Path(self.tmpdir) / "extract_stdin"
        result = self.run_untar(["-xv", "-C", str(extract_dir)], input=self.archive.read_bytes())
        self.assertEqual(result.returncode, 0, msg=result.stderr)

        self.assertTrue((extract_dir / "src" / "file1.txt").exists())
        self.assertIn(b"src/subdir/file3.txt", result.stderr)

    def test_list(self):
        result = self.run_untar(["-tf", str(self.archive)])
        self.assertEqual(result.returncode, 0, msg=result.stderr)
        self.assertIn(b"src/file1.txt", result.stdout)
        self.assertIn(b"src/subdir/", result.stdout)

    def test_corrupt_archive(self):
        data = bytearray(self.archive.read_bytes())
        data[156] = ord("Z")
        corrupt = Path(self.tmpdir) / "corrupt.tar"
        corrupt.write_bytes(bytes(data))

        result = self.run_untar(["-xf", str(corrupt), "-C", str(Path(self.tmpdir) / "out")])
        self.assertEqual(result.returncode, 1)
        self.assertIn(b"Invalid block type", result.stderr)

    def test_no_action(self):
        result = self.run_untar(["-f", str(self.archive)])
        self.assertEqual(result.returncode, 1)


if __name__ == "__main__":
    unittest.main()
