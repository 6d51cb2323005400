#!/usr/bin/env python3
# coding=utf-8
# https://github.com/calllivecn

"""
tar 头部块(512B)的解码。

只取解压需要的三个字段：
    0   ~ 99  name  以 NUL 结束的文件名
    124 ~ 135 size  12B 八进制 ASCII
    156       type  类型标志
所有字段都是 (buf, offset) 的纯函数，不做结构体映射。
"""

import enum


#---------------------------------------------------------
# tar constants
#---------------------------------------------------------
NUL = b"\0"                     # the null character
BLOCKSIZE = 512                 # length of processing blocks

NAME_POSITION = 0
LENGTH_NAME = 100               # maximum length of a filename
SIZE_POSITION = 124
LENGTH_SIZE = 12
TYPE_POSITION = 156

OCTDIGITS = "01234567"

REGTYPE = b"0"                  # regular file
NULTYPE = b"\0"                 # null block (tar 结尾的填充块)
LNKTYPE = b"1"                  # link (inside tarfile)
SYMTYPE = b"2"                  # symbolic link
CHRTYPE = b"3"                  # character special device
BLKTYPE = b"4"                  # block special device
DIRTYPE = b"5"                  # directory
FIFOTYPE = b"6"                 # fifo special device
CONTTYPE = b"7"                 # contiguous file

XHDTYPE = b"x"                  # POSIX.1-2001 extended header
XGLTYPE = b"g"                  # POSIX.1-2001 global header

# 不创建任何东西, 只按 size 跳过的类型
OTHER_TYPES = (XGLTYPE, LNKTYPE, SYMTYPE, CHRTYPE,
               BLKTYPE, FIFOTYPE, CONTTYPE)


#---------------------------------------------------------
# exceptions
#---------------------------------------------------------
class UntarError(Exception):
    """Base exception."""
    pass


class CorruptBlockError(UntarError):
    """Exception for blocks whose type marker is not a tar type."""

    def __init__(self, type: bytes, offset: int):
        self.type = type
        self.offset = offset
        super().__init__(f"Invalid block type {type!r} found at offset {offset}")


class OperationFailedError(UntarError):
    """Exception for undecodable fields and failed filesystem operations."""

    def __init__(self, reason: str, target=None):
        self.reason = reason
        self.target = target
        if target is None:
            super().__init__(reason)
        else:
            super().__init__(f"{reason}: {target}")


@enum.unique
class EntryKind(enum.IntEnum):
    FILE = enum.auto()
    DIRECTORY = enum.auto()
    EXTENDED_HEADER = enum.auto()
    NULL_BLOCK = enum.auto()
    OTHER = enum.auto()
    UNKNOWN = enum.auto()


def classify(type: bytes) -> EntryKind:
    if type == REGTYPE:
        return EntryKind.FILE
    elif type == DIRTYPE:
        return EntryKind.DIRECTORY
    elif type == NULTYPE:
        return EntryKind.NULL_BLOCK
    elif type == XHDTYPE:
        return EntryKind.EXTENDED_HEADER
    elif type in OTHER_TYPES:
        return EntryKind.OTHER
    else:
        return EntryKind.UNKNOWN


#---------------------------------------------------------
# Some useful functions
#---------------------------------------------------------

def nts(s, encoding, errors):
    """Convert a null-terminated bytes object to a string.
    """
    p = s.find(NUL)
    if p != -1:
        s = s[:p]
    return s.decode(encoding, errors)


def nti(s):
    """Convert a octal size field to a python number.
    """
    # 整个字段都必须是 ASCII, NUL 之后的字节也一样
    s = bytes(s)
    try:
        s.decode("ascii", "strict")
    except UnicodeDecodeError:
        raise OperationFailedError("bad size", s)

    s = nts(s, "ascii", "strict").strip()
    # int() 还接受 "_" "0o" "+" 这些写法, 只允许八进制数字
    if s.strip(OCTDIGITS) != "":
        raise OperationFailedError("bad size", s)
    return int(s or "0", 8)


def blocks(size: int) -> int:
    """Number of BLOCKSIZE blocks needed to hold size bytes,
       e.g. blocks(834) => 2.
    """
    count, remainder = divmod(size, BLOCKSIZE)
    if remainder:
        count += 1
    return count


def _field(buf, offset: int, position: int, length: int):
    start = offset + position
    end = start + length
    if offset < 0 or end > len(buf):
        raise OperationFailedError("truncated archive", f"offset {offset}")
    return buf[start:end]


def header_type(buf, offset: int) -> bytes:
    """类型标志, 原样返回 1B, 由调用方分类。"""
    return bytes(_field(buf, offset, TYPE_POSITION, 1))


def header_name(buf, offset: int) -> str:
    """
    name 字段 100B, 找到第一个 NUL 为止, 没有 NUL 时使用全部 100B。
    然后整段按 UTF-8 解码。
    """
    field = bytes(_field(buf, offset, NAME_POSITION, LENGTH_NAME))
    try:
        return nts(field, "utf-8", "strict")
    except UnicodeDecodeError:
        raise OperationFailedError("bad name", f"offset {offset}")


def header_size(buf, offset: int) -> int:
    return nti(_field(buf, offset, SIZE_POSITION, LENGTH_SIZE))
