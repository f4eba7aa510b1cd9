"""
格式配置模型 - 各章节的字体/段落格式

所有字段均可缺省：缺失的字段由格式解析器回退到内置默认值，
因此导入的配置即使不完整也总能解析出具体样式。
JSON 键名使用 camelCase（与导出文件一致），未知键忽略。
导出前用 complete_format_config 补全，保证导出文本总是完整配置。
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StyleFormat(_CamelModel):
    """字体格式 + 段落格式"""

    family: str | None = None
    size: str | None = None          # 中文字号名，如 小四
    bold: bool | None = None
    italic: bool | None = None
    alignment: str | None = None     # left / center / right / justify
    line_spacing: float | None = None  # 1.0 / 1.15 / 1.5 / 2.0


class SectionFormat(_CamelModel):
    """带标题的章节格式"""

    title: StyleFormat | None = None
    content: StyleFormat | None = None


class NumberingIndents(_CamelModel):
    """1-5级编号的首行缩进覆盖值（em）"""

    level1: float | None = None
    level2: float | None = None
    level3: float | None = None
    level4: float | None = None
    level5: float | None = None

    def as_mapping(self) -> dict[int, float]:
        """已配置的级别 → 缩进"""
        values = {
            1: self.level1,
            2: self.level2,
            3: self.level3,
            4: self.level4,
            5: self.level5,
        }
        return {k: v for k, v in values.items() if v is not None}


class FormatConfig(_CamelModel):
    """格式配置（调用方持有，每次导出时传入）"""

    title: StyleFormat | None = None
    personal_info: StyleFormat | None = None
    abstract_title: StyleFormat | None = None
    abstract_content: StyleFormat | None = None
    keywords: StyleFormat | None = None
    introduction: SectionFormat | None = None
    conclusion: SectionFormat | None = None
    references: SectionFormat | None = None
    content_chinese: StyleFormat | None = None
    content_english: StyleFormat | None = None
    footnote_chinese: StyleFormat | None = None
    footnote_english: StyleFormat | None = None
    numbering_indents: NumberingIndents | None = None


def _section(title: StyleFormat, content: StyleFormat) -> SectionFormat:
    return SectionFormat(title=title, content=content)


DEFAULT_FORMAT_CONFIG = FormatConfig(
    title=StyleFormat(family="宋体", size="三号", bold=True, alignment="center"),
    personal_info=StyleFormat(family="宋体", size="五号", alignment="center"),
    abstract_title=StyleFormat(family="黑体", size="四号", alignment="center"),
    abstract_content=StyleFormat(family="宋体", size="小四", alignment="justify"),
    keywords=StyleFormat(family="黑体", size="小四", bold=True, alignment="left"),
    introduction=_section(
        StyleFormat(family="黑体", size="小四", bold=True, alignment="left"),
        StyleFormat(family="宋体", size="小四", alignment="justify", line_spacing=1.5),
    ),
    conclusion=_section(
        StyleFormat(family="黑体", size="小四", bold=True, alignment="left"),
        StyleFormat(family="宋体", size="小四", alignment="justify", line_spacing=1.5),
    ),
    references=_section(
        StyleFormat(family="黑体", size="小四", bold=True, alignment="left"),
        StyleFormat(family="宋体", size="小四", alignment="left", line_spacing=1.5),
    ),
    content_chinese=StyleFormat(family="宋体", size="小四", alignment="justify", line_spacing=1.5),
    content_english=StyleFormat(
        family="Times New Roman", size="小四", alignment="justify", line_spacing=1.5
    ),
    footnote_chinese=StyleFormat(family="宋体", size="小五"),
    footnote_english=StyleFormat(family="Times New Roman", size="小五"),
)


def default_format_config() -> FormatConfig:
    """内置默认配置的独立副本"""
    return DEFAULT_FORMAT_CONFIG.model_copy(deep=True)


def _overlay(base: BaseModel | None, explicit: BaseModel | None) -> BaseModel | None:
    """逐字段合并：显式值优先，未设置的字段取 base"""
    if explicit is None:
        return base.model_copy(deep=True) if base is not None else None
    if base is None:
        return explicit.model_copy(deep=True)

    values = {}
    for name in type(explicit).model_fields:
        base_value = getattr(base, name)
        value = getattr(explicit, name)
        if isinstance(value, BaseModel) or isinstance(base_value, BaseModel):
            values[name] = _overlay(base_value, value)
        else:
            values[name] = base_value if value is None else value
    return type(explicit)(**values)


def complete_format_config(config: FormatConfig | None) -> FormatConfig:
    """补全格式配置：未设置的节与字段由内置默认值填充"""
    return _overlay(DEFAULT_FORMAT_CONFIG, config or FormatConfig())
