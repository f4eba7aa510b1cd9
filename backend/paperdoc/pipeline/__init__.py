"""
流水线模块 - 导出编排

子模块：
- stages: 流水线各阶段定义
- executor: 流水线执行器
"""

from .executor import ExportPipeline
from .stages import EXPORT_STAGES, PipelineStage, StageEnum

__all__ = [
    "PipelineStage",
    "StageEnum",
    "EXPORT_STAGES",
    "ExportPipeline",
]
