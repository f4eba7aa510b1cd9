"""
论文内容模型 - 文档装配引擎的语义输入

编辑端构造，导出时按值传入引擎；引擎从不修改它
"""

from __future__ import annotations

import uuid

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PositiveInt
from pydantic.alias_generators import to_camel


class PersonalInfoItem(BaseModel):
    """个人信息项（显示顺序 = 序列顺序）"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    label: str = ""
    value: str = ""


class Footnote(BaseModel):
    """脚注（id为正整数，不要求连续但必须唯一）"""

    id: PositiveInt  # 0 与 -1 为 docx 分隔符脚注保留
    content: str = ""


class PaperContent(BaseModel):
    """论文内容"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = ""
    personal_info: list[PersonalInfoItem] = Field(default_factory=list)
    abstract: str = ""
    keywords: str = ""
    introduction: str = ""
    # 旧版草稿使用 content 作为正文键名
    body: str = Field("", validation_alias=AliasChoices("body", "content"))
    conclusion: str = ""
    references: str = ""
    footnotes: list[Footnote] = Field(default_factory=list)

    def footnote_table(self) -> dict[int, str]:
        """脚注表 {id: content}"""
        return {f.id: f.content for f in self.footnotes}

    def personal_info_line(self) -> str:
        """个人信息行：标签：内容，两个空格分隔"""
        return "  ".join(f"{item.label}：{item.value}" for item in self.personal_info)
