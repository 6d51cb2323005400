#!/usr/bin/env python3
# coding=utf-8
# https://github.com/calllivecn


import sys

import logs
import util
from libtar import Untar
from libtarinfo import UntarError
from libargparse import parse_args
from logs import logger_print


def extract(args):
    """
    解压：从文件或者标准输入读取, 输出只能是路径。
    """
    data = util.read_archive(args.f)
    Untar(data).extract(args.C, args.verbose, args.safe_extract)


def tarlist(args):
    data = util.read_archive(args.f)
    Untar(data).list(args.verbose)


def main(argv=None):
    parse, args = parse_args(argv)

    if args.help:
        parse.print_help()
        sys.exit(0)

    if args.parse:
        logger_print.info(args)
        sys.exit(0)

    logs.set_debug(args.debug)

    try:
        if args.x:
            extract(args)

        elif args.list:
            tarlist(args)

        else:
            logger_print.info("-x|-t 参数之一是必须的")
            sys.exit(1)

    except UntarError as e:
        logger_print.info(f"{args.f}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
