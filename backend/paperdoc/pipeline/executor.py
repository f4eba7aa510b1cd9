"""
导出流水线执行器 - 编排各阶段执行

职责：
1. 清洗论文内容，校验必填项与个人信息（失败则阻断导出，错误以列表返回）
2. 检查悬空脚注引用（仅告警，不阻断）
3. 装配段落并序列化为docx
4. 格式/序列化错误记录日志后向调用方抛出，任务标记失败且不保留部分产物

测试要点：
- test_export_success: 完整导出
- test_export_requires_title: 题目必填
- test_export_dangling_footnote_warns: 悬空脚注告警
- test_export_format_error: 未知字号致命错误
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..config import RuntimeConfig, get_config
from ..doc_gen import DocumentAssembler, DocxRenderer, build_file_name
from ..interfaces import IExportPipeline, PaperDocError
from ..models import ExportJob, FormatConfig, JobStatus, PaperContent
from ..validation import (
    sanitize_paper_content,
    validate_footnote_references,
    validate_footnotes,
    validate_personal_info,
)
from .stages import EXPORT_STAGES, PipelineStage, StageEnum

logger = logging.getLogger(__name__)


class ExportPipeline(IExportPipeline):
    """导出流水线"""

    def __init__(
        self,
        config: RuntimeConfig | None = None,
        assembler: DocumentAssembler | None = None,
        renderer: DocxRenderer | None = None,
    ):
        self.config = config or get_config()
        self.assembler = assembler or DocumentAssembler()
        self.renderer = renderer or DocxRenderer(margin_mm=self.config.export.page_margin_mm)

    def export(self, content: PaperContent, format_config: FormatConfig | None = None) -> ExportJob:
        """执行导出"""
        job = ExportJob()
        job.mark_running()

        context: dict[str, Any] = {
            "content": content,
            "format_config": format_config,
        }

        try:
            for stage in EXPORT_STAGES:
                self._execute_stage(job, stage, context)
                if job.status == JobStatus.FAILED:
                    logger.warning(f"[{job.job_id}] 导出被阻断: {'; '.join(job.errors)}")
                    return job

            job.mark_succeeded()
            job.progress.message = "文档生成成功"

        except PaperDocError as e:
            logger.exception(f"导出失败: {job.job_id}")
            job.mark_failed(f"文档生成失败: {e}")
            job.progress.message = "文档生成失败"
            raise

        return job

    def export_to_file(
        self,
        content: PaperContent,
        output_dir: Path | None = None,
        format_config: FormatConfig | None = None,
    ) -> tuple[ExportJob, Path | None]:
        """导出并写入输出目录"""
        job = self.export(content, format_config)
        if not job.succeeded or job.output is None:
            return job, None

        output_dir = output_dir or self.config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / job.file_name
        output_path.write_bytes(job.output)
        logger.info(f"[{job.job_id}] 已写入: {output_path}")
        return job, output_path

    def _execute_stage(self, job: ExportJob, stage: PipelineStage, context: dict) -> None:
        """执行单个阶段"""
        job.progress.stage = stage.name
        job.progress.percent = stage.progress_start
        logger.debug(f"[{job.job_id}] 开始阶段: {stage.name}")

        if stage.name == StageEnum.SANITIZE.value:
            self._stage_sanitize(job, context)

        elif stage.name == StageEnum.VALIDATE.value:
            self._stage_validate(job, context)

        elif stage.name == StageEnum.CHECK_FOOTNOTES.value:
            self._stage_check_footnotes(job, context)

        elif stage.name == StageEnum.ASSEMBLE.value:
            self._stage_assemble(job, context)

        elif stage.name == StageEnum.SERIALIZE.value:
            self._stage_serialize(job, context)

        if job.status != JobStatus.FAILED:
            job.progress.percent = stage.progress_end

    def _stage_sanitize(self, job: ExportJob, context: dict) -> None:
        context["content"] = sanitize_paper_content(context["content"], self.config.limits)

    def _stage_validate(self, job: ExportJob, context: dict) -> None:
        content: PaperContent = context["content"]
        errors: list[str] = []

        if not content.title:
            errors.append("请填写 题目")

        errors.extend(validate_personal_info(content.personal_info, self.config.limits).errors)
        errors.extend(validate_footnotes(content.footnotes, self.config.limits).errors)

        if errors:
            job.errors.extend(errors)
            job.mark_failed()

    def _stage_check_footnotes(self, job: ExportJob, context: dict) -> None:
        content: PaperContent = context["content"]
        missing: list[int] = []

        for text in (content.introduction, content.body, content.conclusion):
            check = validate_footnote_references(text, content.footnotes)
            missing.extend(ref for ref in check.invalid_refs if ref not in missing)

        if missing:
            refs = ", ".join(str(ref) for ref in missing)
            job.add_flag(f"正文中引用的脚注 [{refs}] 不存在，请检查")

    def _stage_assemble(self, job: ExportJob, context: dict) -> None:
        context["document"] = self.assembler.assemble(context["content"], context["format_config"])

    def _stage_serialize(self, job: ExportJob, context: dict) -> None:
        content: PaperContent = context["content"]
        job.output = self.renderer.render(context["document"])
        job.file_name = build_file_name(content.title, self.config.export.file_extension)
