"""
清洗与校验层 - 守护进入引擎或被持久化的每个值

子模块：
- limits: 长度上限
- sanitize: 文本/文件名清洗
- validators: 个人信息、脚注引用、导入配置的结构校验
"""

from .limits import LIMITS, LimitsConfig
from .sanitize import (
    sanitize_file_name,
    sanitize_multiline,
    sanitize_paper_content,
    sanitize_text,
)
from .validators import (
    FOOTNOTE_REF_RE,
    REQUIRED_CONFIG_SECTIONS,
    ConfigCheck,
    FootnoteCheck,
    ValidationResult,
    extract_reference_ids,
    validate_config_json,
    validate_footnote_references,
    validate_footnotes,
    validate_personal_info,
)

__all__ = [
    "LIMITS",
    "LimitsConfig",
    "sanitize_text",
    "sanitize_multiline",
    "sanitize_file_name",
    "sanitize_paper_content",
    "FOOTNOTE_REF_RE",
    "REQUIRED_CONFIG_SECTIONS",
    "ValidationResult",
    "FootnoteCheck",
    "ConfigCheck",
    "extract_reference_ids",
    "validate_personal_info",
    "validate_footnote_references",
    "validate_footnotes",
    "validate_config_json",
]
