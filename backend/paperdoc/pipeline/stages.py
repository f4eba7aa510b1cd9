"""
导出流水线阶段定义

职责：
1. 定义各阶段的名称与进度区间
2. 校验阶段失败阻断导出，脚注检查仅告警
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StageEnum(str, Enum):
    """流水线阶段枚举"""
    SANITIZE = "SANITIZE"
    VALIDATE = "VALIDATE"
    CHECK_FOOTNOTES = "CHECK_FOOTNOTES"
    ASSEMBLE = "ASSEMBLE"
    SERIALIZE = "SERIALIZE"


@dataclass(frozen=True)
class PipelineStage:
    """流水线阶段"""
    name: str
    progress_start: int  # 进度起点（0-100）
    progress_end: int    # 进度终点


# 导出流水线各阶段配置
EXPORT_STAGES: list[PipelineStage] = [
    PipelineStage(StageEnum.SANITIZE.value, 0, 10),
    PipelineStage(StageEnum.VALIDATE.value, 10, 25),
    PipelineStage(StageEnum.CHECK_FOOTNOTES.value, 25, 35),
    PipelineStage(StageEnum.ASSEMBLE.value, 35, 70),
    PipelineStage(StageEnum.SERIALIZE.value, 70, 100),
]
