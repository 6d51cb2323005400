#!/usr/bin/env python3
# coding=utf-8
# author calllivecn <calllivecn@outlook.com>


import os
import sys
import tempfile
from pathlib import Path
from contextlib import contextmanager

from protocols import (
    cast,
    ReadWrite,
)
from libtarinfo import OperationFailedError

from logs import logger


@contextmanager
def open_stream(path: Path|str|None, mode: str):
    """
    通用打开流：path 为 "-" 时返回标准输入/输出的 buffer，否则打开文件。
    只在实际打开文件时负责关闭流；标准流不关闭。
    """
    if path == "-" or path is None:
        if "r" in mode:
            yield cast(ReadWrite, sys.stdin.buffer)
        elif "w" in mode:
            yield cast(ReadWrite, sys.stdout.buffer)
        else:
            raise ValueError("unsupported mode for std stream")
    else:
        f = open(path, mode+"b")
        try:
            yield cast(ReadWrite, f)
        finally:
            f.close()


def read_archive(path: Path|str|None) -> bytes:
    """整个 archive 读进内存。"""
    try:
        with open_stream(path, "r") as f:
            data = f.read()
    except OSError as e:
        raise OperationFailedError("read archive", path) from e

    logger.debug(f"读取 archive: {path} {len(data)} bytes")
    return data


def order_bad_path(name: str) -> Path:
    """
    处理掉不安全 tar 成员路径(这样有可能会产生冲突而覆盖文件):
    ../../dir1/file1 --> dir1/file1
    /dir1/file1 --> dir1/file1
    """
    path = Path(name)
    cwd = Path()
    for part in path.parts:
        if part == ".." or part == path.anchor:
            continue
        else:
            cwd = cwd / part

    return cwd


##################
# 文件系统操作
##################

def _umask() -> int:
    # 只能先设置再还原才能读到当前 umask
    mask = os.umask(0o022)
    os.umask(mask)
    return mask


class FileSystem:
    """
    默认的文件系统实现, OSError 都转换成 OperationFailedError。
    不检查已经存在的文件, 不设置权限和时间。
    """

    def create_directory(self, path: Path, parents: bool = True):
        try:
            Path(path).mkdir(parents=parents, exist_ok=True)
        except OSError as e:
            raise OperationFailedError("create directory", path) from e

    def create_file(self, path: Path, contents):
        # 不创建父目录
        try:
            with open(path, "wb") as f:
                f.write(contents)
        except OSError as e:
            raise OperationFailedError("create file", path) from e

    def write_empty_file(self, path: Path):
        """先写临时文件再 os.replace(), 不会留下写了一半的文件。"""
        path = Path(path)
        try:
            fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        except OSError as e:
            raise OperationFailedError("create file", path) from e

        try:
            os.close(fd)
            # mkstemp() 总是 0600, 改成和 open() 一样的 umask 默认权限
            os.chmod(tmp, 0o666 & ~_umask())
            os.replace(tmp, path)
        except OSError as e:
            Path(tmp).unlink(missing_ok=True)
            raise OperationFailedError("create file", path) from e
