"""
运行期配置 - 读取 config/paperdoc.yaml

职责：
- 加载长度上限/存储目录/导出选项/日志参数
- 提供环境变量覆盖机制（PAPERDOC_ 前缀）
- 类型安全的配置访问
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from ..interfaces import ConfigError
from ..validation import LimitsConfig

DEFAULT_CONFIG_PATH = Path("config/paperdoc.yaml")


class ExportConfig(BaseModel):
    """导出配置"""

    file_extension: str = ".docx"
    page_margin_mm: float = 25.4


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"
    log_to_file: bool = False
    log_file: str = "paperdoc.log"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    # 基础路径
    storage_dir: Path = Path("storage")
    output_dir: Path = Path("output")

    # 各子配置
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "PAPERDOC_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"运行期配置解析失败: {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"运行期配置必须是映射: {path}")

        runtime_opts = data.get("runtime_options") or {}

        # 只传入文件中出现的项，其余字段仍可由环境变量提供
        kwargs: dict[str, Any] = cls._extract(runtime_opts, "paths")
        for key in ("limits", "export", "logging"):
            section = cls._extract(runtime_opts, key)
            if section:
                kwargs[key] = section

        config = cls(**kwargs)

        config._resolve_paths(base_dir=path.parent)
        return config

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result

    def _resolve_paths(self, base_dir: Path) -> None:
        """解析相对路径配置为绝对路径（基于配置文件所在目录）"""
        if not self.storage_dir.is_absolute():
            self.storage_dir = (base_dir / self.storage_dir).resolve()
        if not self.output_dir.is_absolute():
            self.output_dir = (base_dir / self.output_dir).resolve()

    def ensure_dirs(self) -> None:
        """确保必要目录存在"""
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)


def setup_logging(config: LoggingConfig) -> None:
    """配置根日志记录器（控制台 + 可选文件）"""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_to_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=handlers,
        force=True,
    )


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = RuntimeConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    _config = RuntimeConfig.from_yaml(yaml_path or DEFAULT_CONFIG_PATH)
    return _config
