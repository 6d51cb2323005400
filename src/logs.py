# -*- coding: utf-8 -*-

import sys
import logging


LOGGER_NAME = "untar"


def getlogger(level=logging.WARNING):
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(filename)s:%(lineno)d %(message)s", datefmt="%Y-%m-%d-%H:%M:%S")
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(fmt)
    logger = logging.getLogger(LOGGER_NAME)
    # 防止重复添加 handler 和向上传播
    logger.setLevel(level)
    if not logger.handlers:
        logger.addHandler(stream)
    logger.propagate = False
    return logger


def getlogger_print():
    """用户可见的输出(-v 的成员名, 错误提示), 只有消息本身。"""
    fmt2 = logging.Formatter("%(message)s")
    stream2 = logging.StreamHandler(sys.stderr)
    stream2.setFormatter(fmt2)
    logger_print = logging.getLogger(f"{LOGGER_NAME}.print")
    logger_print.setLevel(logging.INFO)
    if not logger_print.handlers:
        logger_print.addHandler(stream2)
    logger_print.propagate = False
    return logger_print


def set_debug(count: int):
    """-d: INFO, -dd 及以上: DEBUG, 默认 WARNING。"""
    if count <= 0:
        level = logging.WARNING
    elif count == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logger.setLevel(level)
    return level


logger = getlogger()

logger_print = getlogger_print()
