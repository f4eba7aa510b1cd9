"""
输入长度上限（字符数）
"""

from __future__ import annotations

from pydantic import BaseModel


class LimitsConfig(BaseModel):
    """长度上限配置"""

    title_max_length: int = 200
    abstract_max_length: int = 1000
    keywords_max_length: int = 500
    content_max_length: int = 50000
    personal_info_label_max_length: int = 50
    personal_info_value_max_length: int = 200
    footnote_max_length: int = 2000
    config_text_max_length: int = 10000
    file_name_max_length: int = 100


LIMITS = LimitsConfig()
