"""
结构校验 - 个人信息/脚注引用/脚注表/导入配置

校验失败以数据形式返回（错误列表），从不抛出异常。

测试要点：
- test_personal_info_missing_label: 缺少标签
- test_personal_info_label_too_long: 标签过长
- test_footnote_refs_invalid: 悬空脚注引用
- test_config_json_invalid: 非法JSON / 非对象 / 缺少必需节
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .limits import LIMITS, LimitsConfig

FOOTNOTE_REF_RE = re.compile(r"\[([0-9]+)\]")

# 导入配置必须包含的顶层节
REQUIRED_CONFIG_SECTIONS = ("title", "personalInfo", "abstractTitle", "abstractContent")


@dataclass
class ValidationResult:
    """校验结果"""
    is_valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class FootnoteCheck:
    """脚注引用检查结果"""
    is_valid: bool
    invalid_refs: list[int] = field(default_factory=list)


@dataclass
class ConfigCheck:
    """配置校验结果"""
    is_valid: bool
    error: str | None = None


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def validate_personal_info(
    items: Any,
    limits: LimitsConfig | None = None,
) -> ValidationResult:
    """校验个人信息项（标签与内容必填且不超长）"""
    limits = limits or LIMITS
    errors: list[str] = []

    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        return ValidationResult(is_valid=False, errors=["个人信息必须是数组"])

    seen_ids: set[str] = set()
    for index, item in enumerate(items, start=1):
        if item is None or isinstance(item, (str, bytes, int, float)):
            errors.append(f"个人信息项 {index} 格式无效")
            continue

        label = _field(item, "label")
        value = _field(item, "value")

        if not label or not isinstance(label, str):
            errors.append(f"个人信息项 {index} 缺少标签")
        elif len(label) > limits.personal_info_label_max_length:
            errors.append(f"个人信息项 {index} 标签过长")

        if not value or not isinstance(value, str):
            errors.append(f"个人信息项 {index} 缺少内容")
        elif len(value) > limits.personal_info_value_max_length:
            errors.append(f"个人信息项 {index} 内容过长")

        item_id = _field(item, "id")
        if item_id:
            if item_id in seen_ids:
                errors.append(f"个人信息项 {index} 标识重复")
            seen_ids.add(item_id)

    return ValidationResult(is_valid=not errors, errors=errors)


def extract_reference_ids(text: str) -> list[int]:
    """按出现顺序提取 [n] 标记中的 n"""
    if not isinstance(text, str):
        return []
    return [int(m.group(1)) for m in FOOTNOTE_REF_RE.finditer(text)]


def validate_footnote_references(text: str, footnotes: Sequence[Any]) -> FootnoteCheck:
    """检查文本中的脚注引用是否都有对应脚注（仅告警，不阻断生成）"""
    valid_ids = {_field(f, "id") for f in footnotes}
    invalid_refs = [ref for ref in extract_reference_ids(text) if ref not in valid_ids]
    return FootnoteCheck(is_valid=not invalid_refs, invalid_refs=invalid_refs)


def validate_footnotes(
    footnotes: Sequence[Any],
    limits: LimitsConfig | None = None,
) -> ValidationResult:
    """校验脚注表（id为正整数且唯一，内容不超长）"""
    limits = limits or LIMITS
    errors: list[str] = []
    seen: set[int] = set()

    for footnote in footnotes:
        footnote_id = _field(footnote, "id")
        content = _field(footnote, "content") or ""

        if not isinstance(footnote_id, int) or isinstance(footnote_id, bool) or footnote_id <= 0:
            errors.append(f"脚注编号无效: {footnote_id}")
            continue
        if footnote_id in seen:
            errors.append(f"脚注编号重复: {footnote_id}")
        seen.add(footnote_id)

        if len(content) > limits.footnote_max_length:
            errors.append(f"脚注 {footnote_id} 内容过长")

    return ValidationResult(is_valid=not errors, errors=errors)


def validate_config_json(json_text: Any, limits: LimitsConfig | None = None) -> ConfigCheck:
    """校验外部导入的格式配置文本"""
    limits = limits or LIMITS

    if not isinstance(json_text, str):
        return ConfigCheck(is_valid=False, error="配置必须是文本")
    if len(json_text) > limits.config_text_max_length:
        return ConfigCheck(is_valid=False, error="配置文本过长")

    try:
        config = json.loads(json_text)
    except json.JSONDecodeError as e:
        return ConfigCheck(is_valid=False, error=f"JSON格式错误: {e.msg}")

    if not isinstance(config, dict):
        return ConfigCheck(is_valid=False, error="配置必须是一个对象")

    for section in REQUIRED_CONFIG_SECTIONS:
        if not config.get(section):
            return ConfigCheck(is_valid=False, error=f"缺少必需的配置节: {section}")

    return ConfigCheck(is_valid=True)
