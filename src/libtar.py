#!/usr/bin/env python3
# coding=utf-8
# https://github.com/calllivecn

"""
按 512B 块顺序扫描内存里的 tar 数据, 每次处理一个成员:
    解码头部 --> 按类型分派 --> 游标前进 blocks * BLOCKSIZE
游标只会向前走, 到达(或超过)声明的大小时结束。
"""

from pathlib import Path

import util
from protocols import Materializer
from libtarinfo import (
    BLOCKSIZE,
    EntryKind,
    CorruptBlockError,
    OperationFailedError,
    classify,
    blocks,
    header_type,
    header_name,
    header_size,
)

from logs import logger, logger_print


class Entry:
    """一次迭代产生的成员, 不会保存到下一次迭代。"""

    def __init__(self, kind: EntryKind, type: bytes, offset: int, blocks: int, name=None, size=0):
        self.kind = kind
        self.type = type
        self.offset = offset
        self.blocks = blocks    # 包括头部块
        self.name = name
        self.size = size

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.kind.name} {self.name!r} offset={self.offset} size={self.size}>"

    @property
    def content_range(self):
        """文件内容在 archive 里的 [start, end), 只有文件才有。"""
        if self.kind != EntryKind.FILE:
            return None
        start = self.offset + BLOCKSIZE
        return start, start + self.size

    def isfile(self):
        return self.kind == EntryKind.FILE

    def isdir(self):
        return self.kind == EntryKind.DIRECTORY


class Untar:

    def __init__(self, archive, size=None):
        """
        archive: bytes-like, 全部在内存里。
        size: 声明的 archive 大小, 默认是 len(archive)。
        """
        self.archive = memoryview(archive)
        if size is None:
            size = len(self.archive)
        self.size = size
        self.position = 0

    def __iter__(self):
        return self.entries()

    def entries(self):
        """
        从头开始逐个产生 Entry。遇到未知类型时抛出 CorruptBlockError, 游标停在这个块上。
        """
        self.position = 0
        while self.position < self.size:
            entry = self._entry(self.position)
            logger.debug(f"{entry!r} blocks={entry.blocks}")
            yield entry
            self.position += entry.blocks * BLOCKSIZE

    def _entry(self, offset: int) -> Entry:
        type = header_type(self.archive, offset)
        kind = classify(type)

        if kind == EntryKind.FILE:
            name = header_name(self.archive, offset)
            size = header_size(self.archive, offset)
            if offset + BLOCKSIZE + size > len(self.archive):
                raise OperationFailedError("truncated archive", name)
            # size == 0 时只有头部块
            return Entry(kind, type, offset, 1 + blocks(size), name, size)

        elif kind == EntryKind.DIRECTORY:
            name = header_name(self.archive, offset)
            return Entry(kind, type, offset, 1, name)

        elif kind == EntryKind.NULL_BLOCK:
            return Entry(kind, type, offset, 1)

        elif kind in (EntryKind.EXTENDED_HEADER, EntryKind.OTHER):
            # pax 头部也按它自己的 size 跳过, 不只是多跳一个块
            size = header_size(self.archive, offset)
            return Entry(kind, type, offset, 1 + blocks(size), size=size)

        else:
            raise CorruptBlockError(type, offset)

    def extract(self, path, verbose=False, safe_extract=False, fs: Materializer | None = None):
        """
        解压到 path 下。出错时立即停止, 已经写出的文件保留。
        """
        if fs is None:
            fs = util.FileSystem()

        root = Path(path)
        fs.create_directory(root, parents=True)

        for entry in self.entries():
            if not (entry.isfile() or entry.isdir()):
                continue

            member = self._member_path(entry.name, safe_extract)
            if member is None:
                continue

            if verbose:
                logger_print.info(f"{entry.name}")

            target = root / member
            if entry.isdir():
                fs.create_directory(target, parents=True)

            elif entry.size == 0:
                fs.write_empty_file(target)

            else:
                start, end = entry.content_range
                fs.create_file(target, self.archive[start:end])

    def _member_path(self, name: str, safe_extract: bool):
        if ".." in Path(name).parts:
            if safe_extract:
                logger.info(f"成员路径包含 `..' 不提取: {name}")
                return None
            path = util.order_bad_path(name)
            logger.info(f"成员路径包含 `..' 提取为: {path}")
            return path
        return util.order_bad_path(name)

    def list(self, verbose=False):
        """
        输出 tar 中的文件和目录, 不写文件系统。
        """
        for entry in self.entries():
            if entry.isfile():
                ftype = "-"
            elif entry.isdir():
                ftype = "d"
            else:
                continue

            if verbose:
                self.print_verbose(entry, ftype)
            else:
                self.print_name(entry)

    def print_verbose(self, entry: Entry, ftype: str):
        print(f"{ftype} {entry.size:>20d} {entry.name}")

    def print_name(self, entry: Entry):
        print(entry.name)


def extract(archive, path, verbose=False, safe_extract=False, fs: Materializer | None = None):
    """创建目录 path, 并把 archive 解压到里面。"""
    Untar(archive).extract(path, verbose, safe_extract, fs)
