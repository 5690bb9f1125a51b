"""
模型包初始化文件。

导入所有模型类，使其可以通过 backoffice.models.ModelName 的方式被访问，
同时保证 Flask-Migrate 能看到所有表。
"""
from .category import Category, category_tools
from .tool import Tool, ToolStatus
from .license import License
from .alternative import Alternative, alternative_tools
from .topic import Topic, tool_topics
from .stack import Stack, StackType, stack_tools
from .feedback import Like, Report, ReportType

__all__ = [
    'Category',
    'category_tools',
    'Tool',
    'ToolStatus',
    'License',
    'Alternative',
    'alternative_tools',
    'Topic',
    'tool_topics',
    'Stack',
    'StackType',
    'stack_tools',
    'Report',
    'ReportType',
    'Like',
]
