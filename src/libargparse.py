#!/usr/bin/env python3
# coding=utf-8
# https://github.com/calllivecn


import argparse
from argparse import (
    Namespace,
)
from pathlib import Path

import version


class Argument(argparse.ArgumentParser):

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        self._positionals = self.add_argument_group("位置参数")
        self._optionals = self.add_argument_group("通用选项")


def archive_exists(filename):
    if filename == "-":
        return filename

    p = Path(filename)
    if p.is_file():
        return p
    else:
        raise argparse.ArgumentTypeError(f"{p} 不存在或者不是文件")


Description='''\
解压未压缩的 USTAR tar 文件, 整个 archive 读入内存后顺序扫描。
只创建普通文件和目录, 链接、设备等成员会被跳过。

例子:
    %(prog)s -xf archive.tar                 # 解压 archive.tar 全部文件到当前目录。
    %(prog)s -xf archive.tar -C out          # 解压到 out 目录, 不存在时会创建。
    %(prog)s -tvf archive.tar                # 列出 archive.tar 里面的文件，-v 选项，列出详细信息。
    cat archive.tar | %(prog)s -x            # 从标准输入读取。

'''

def parse_args(argv=None) -> tuple[Argument, Namespace]:

    parse = Argument(
        usage="%(prog)s [option]",
        description=Description,
        epilog=f"Version: {version.VERSION}",
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        )

    parse.add_argument("-h", "--help", action="store_true", help="输出帮助信息")

    parse.add_argument("-f", type=archive_exists, default="-", help="archive 文件, 没有这参数时，默认使用标准输入。")
    parse.add_argument("-C", type=Path, default=Path("."), help="解压输出目录(default: .)")

    group1 = parse.add_mutually_exclusive_group()
    group1.add_argument("-x", action="store_true", help="解压tar文件")
    group1.add_argument("-t", "--list", action="store_true", help="输出tar文件内容")

    parse.add_argument("--safe-extract", dest="safe_extract", action="store_true", help="解压时跳过包含 `..' 的成员路径")
    parse.add_argument("-v", "--verbose", action="count", default=0, help="输出详情")
    parse.add_argument("-d", "--debug", action="count", default=0, help="输出debug详情信息")

    parse.add_argument("--parse", action="store_true", help=argparse.SUPPRESS)

    return parse, parse.parse_args(argv)
