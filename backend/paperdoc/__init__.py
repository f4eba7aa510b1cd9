"""
paperdoc - 论文文档装配引擎

模块：
- models: 数据模型
- validation: 清洗与校验
- classify: 文字类型与编号层级识别
- doc_gen: 格式解析、脚注拆分、文档装配与docx渲染
- pipeline: 导出流水线
- config: 运行期配置与持久化
- cli: 命令行入口
"""

__version__ = "0.1.0"
