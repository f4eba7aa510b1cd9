"""
键值存储 - 草稿内容与格式配置的持久化协作方

引擎只依赖 get(key) / set(key, text) 协议，不绑定具体存储
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ..interfaces import ConfigError

logger = logging.getLogger(__name__)

# 固定存储键
DRAFT_KEY = "paperdoc-draft"
FORMAT_CONFIG_KEY = "paperdoc-format-config"

_KEY_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


class InMemoryStore:
    """内存存储（测试与单次会话使用）"""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileStore:
    """文件存储：每个键对应目录下的一个 <key>.json 文件"""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ConfigError(f"非法的存储键: {key}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)
        logger.debug(f"已写入存储: {path}")
