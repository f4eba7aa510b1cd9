"""
格式配置仓库 - 配置的导出/导入与显式持久化

职责：
1. 导出：未设置的节与字段先由默认值补全，再输出缩进2格的 JSON 文本
2. 导入：校验 JSON 结构后整体替换当前配置（不做部分合并）
3. 草稿与配置通过键值存储显式保存，修改配置本身不触发持久化

测试要点：
- test_export_import_roundtrip: 导出后再导入得到相同配置
- test_import_rejects_invalid: 非法文本/缺少必需节
- test_load_falls_back_to_default: 存储缺失或损坏时使用默认配置
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from ..interfaces import KeyValueStore
from ..models import FormatConfig, PaperContent, complete_format_config, default_format_config
from ..validation import ConfigCheck, LimitsConfig, validate_config_json
from .storage import DRAFT_KEY, FORMAT_CONFIG_KEY

logger = logging.getLogger(__name__)


def export_format_config(config: FormatConfig) -> str:
    """导出完整格式配置（camelCase 键）"""
    data = complete_format_config(config).model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, ensure_ascii=False, indent=2)


def import_format_config(
    json_text: str,
    limits: LimitsConfig | None = None,
) -> tuple[FormatConfig | None, ConfigCheck]:
    """导入格式配置；失败时返回 (None, 错误信息)"""
    check = validate_config_json(json_text, limits)
    if not check.is_valid:
        return None, check

    try:
        config = FormatConfig.model_validate_json(json_text)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return None, ConfigCheck(is_valid=False, error=f"配置结构无效: {location} {first['msg']}")

    return config, check


class FormatConfigRepository:
    """格式配置仓库"""

    def __init__(self, store: KeyValueStore, limits: LimitsConfig | None = None):
        self.store = store
        self.limits = limits

    def load(self) -> FormatConfig:
        """读取已保存配置；缺失或损坏时返回内置默认配置"""
        text = self.store.get(FORMAT_CONFIG_KEY)
        if text is None:
            return default_format_config()

        config, check = import_format_config(text, self.limits)
        if config is None:
            logger.warning(f"已保存的格式配置无效，使用默认配置: {check.error}")
            return default_format_config()
        return config

    def save(self, config: FormatConfig) -> None:
        self.store.set(FORMAT_CONFIG_KEY, export_format_config(config))

    def reset(self) -> FormatConfig:
        """重置为默认配置并保存"""
        config = default_format_config()
        self.save(config)
        return config

    def import_text(self, json_text: str) -> tuple[FormatConfig | None, ConfigCheck]:
        """导入并整体替换已保存配置"""
        config, check = import_format_config(json_text, self.limits)
        if config is not None:
            self.save(config)
            logger.info("格式配置导入成功")
        else:
            logger.warning(f"格式配置导入失败: {check.error}")
        return config, check

    def export_text(self) -> str:
        return export_format_config(self.load())


class DraftRepository:
    """草稿仓库（论文内容 + 脚注）"""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self) -> PaperContent:
        """读取草稿；缺失或损坏时返回空内容"""
        text = self.store.get(DRAFT_KEY)
        if text is None:
            return PaperContent()

        try:
            return PaperContent.model_validate_json(text)
        except ValidationError as e:
            logger.warning(f"草稿数据无效，已忽略: {e.error_count()} 处错误")
            return PaperContent()

    def save(self, content: PaperContent) -> None:
        data = content.model_dump(mode="json", by_alias=True)
        self.store.set(DRAFT_KEY, json.dumps(data, ensure_ascii=False, indent=2))
