"""
Claude Confirm 导出 - 截图/分页/命名流水线

模块结构：
- config/      运行期配置加载
- models/      数据模型定义
- naming/      文件名净化与组合
- capture/     区域截图（浏览器渲染器 + 克隆截图）
- pagination/  长图分页计算
- encoders/    产物编码（PNG/PDF/Markdown）
- pipeline/    导出编排与落盘
- cli          命令行入口
"""

__version__ = "0.1.0"
