# -*- coding: utf-8 -*-
"""附件落盘工具。

- 存储名 = ``<毫秒时间戳>-<随机数>-<清洗后的原始名>``，避免冲突与路径穿越。
- 原始文件名不在这里处理，由调用方原样入库用于展示 / 下载。
- 所有路径都必须落在存储根目录之内。
"""

from __future__ import annotations

import logging
import os
import re
import secrets
import time
from typing import BinaryIO, Iterable, Optional

logger = logging.getLogger(__name__)

UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")
STORED_NAME_SEPARATOR = "-"


def file_extension(filename: str) -> str:
    """返回小写扩展名（不含点），没有扩展名时返回空串。"""
    base = os.path.basename(filename or "")
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[1].lower()


def is_allowed_extension(filename: str, allowed: Iterable[str]) -> bool:
    ext = file_extension(filename)
    return bool(ext) and ext in {a.lower() for a in allowed}


def sanitize_filename(filename: str) -> str:
    """把 [A-Za-z0-9._-] 以外的字符全部替换为下划线。"""
    cleaned = UNSAFE_CHARS_RE.sub("_", filename or "")
    # 纯点号的名字（"." / ".."）没有意义，统一兜底
    if not cleaned.strip("."):
        cleaned = "file"
    return cleaned


def build_stored_filename(original_name: str, now: Optional[float] = None) -> str:
    millis = int((now if now is not None else time.time()) * 1000)
    nonce = secrets.randbelow(10 ** 9)
    return STORED_NAME_SEPARATOR.join([str(millis), str(nonce), sanitize_filename(original_name)])


def safe_join(root: str, filename: str) -> Optional[str]:
    root_abs = os.path.abspath(root)
    target = os.path.abspath(os.path.join(root_abs, filename))
    if not target.startswith(root_abs + os.sep):
        return None
    return target


def stream_size(stream: BinaryIO) -> Optional[int]:
    """可 seek 的流返回剩余字节数并复位；不可 seek 时返回 None。"""
    try:
        pos = stream.tell()
        stream.seek(0, os.SEEK_END)
        end = stream.tell()
        stream.seek(pos)
    except (AttributeError, OSError, ValueError):
        return None
    return end - pos


def write_stream(root: str, stored_name: str, stream: BinaryIO, chunk_size: int = 64 * 1024) -> int:
    """写入文件并返回实际字节数；失败时抛出 OSError。"""
    os.makedirs(root, exist_ok=True)
    path = safe_join(root, stored_name)
    if path is None:
        raise OSError(f"Refusing to write outside storage root: {stored_name}")
    written = 0
    with open(path, "wb") as fh:
        for chunk in iter(lambda: stream.read(chunk_size), b""):
            fh.write(chunk)
            written += len(chunk)
    return written


def remove_file(root: str, stored_name: str) -> bool:
    """
    删除存储文件。
    - 文件已不存在：记录 warning，返回 False（文件系统与数据库可能漂移）
    - 其他 OSError：记录 warning，返回 False，不中断后续清理
    """
    path = safe_join(root, stored_name)
    if path is None:
        logger.warning("Attachment path escapes storage root, skipped: %s", stored_name)
        return False
    try:
        os.remove(path)
        return True
    except FileNotFoundError:
        logger.warning("Attachment file already missing: %s", stored_name)
        return False
    except OSError as exc:
        logger.warning("Attachment file cleanup error %s: %s", stored_name, exc)
        return False
