"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- PaperContent: 论文内容（标题/个人信息/各章节/脚注）
- FormatConfig: 各章节格式配置
- Segment / NumberingPattern: 行级派生结构
- ExportJob: 导出任务状态与产物
"""

from .format import (
    DEFAULT_FORMAT_CONFIG,
    FormatConfig,
    NumberingIndents,
    SectionFormat,
    StyleFormat,
    complete_format_config,
    default_format_config,
)
from .job import ExportJob, JobProgress, JobStatus
from .paper import Footnote, PaperContent, PersonalInfoItem
from .text import NumberingLevel, NumberingPattern, ScriptKind, Segment, SegmentKind

__all__ = [
    "PaperContent",
    "PersonalInfoItem",
    "Footnote",
    "FormatConfig",
    "StyleFormat",
    "SectionFormat",
    "NumberingIndents",
    "DEFAULT_FORMAT_CONFIG",
    "default_format_config",
    "complete_format_config",
    "ScriptKind",
    "NumberingLevel",
    "NumberingPattern",
    "Segment",
    "SegmentKind",
    "ExportJob",
    "JobStatus",
    "JobProgress",
]
