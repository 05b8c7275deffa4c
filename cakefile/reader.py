"""
Line Reader - loads a Cakefile into an ordered list of lines.
行读取器 —— 将 Cakefile 读取为有序的行列表。

Only the line terminator is removed; leading tabs are significant to the
parser and must survive.
只去除行尾换行符；行首的制表符对解析器有意义，必须保留。
"""

from __future__ import annotations

import logging
import os

from errors import CakefileReadError

logger = logging.getLogger(__name__)


def read_lines(path: str | os.PathLike[str]) -> list[str]:
    """
    Read `path` as UTF-8 and return its lines without terminators.
    以 UTF-8 读取 `path`，返回去掉换行符的行列表。

    Raises CakefileReadError if the file is missing or unreadable.
    文件不存在或不可读时抛出 CakefileReadError。
    """
    try:
        with open(path, encoding="utf-8") as f:
            # 文本模式下 \r\n 已被统一为 \n
            lines = [line.rstrip("\n") for line in f]
    except (OSError, UnicodeDecodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise CakefileReadError(os.fspath(path), reason) from exc

    logger.debug("[Reader] %s: %d lines", path, len(lines))
    return lines
