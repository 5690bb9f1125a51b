"""
工具 (Tool) 的只读查询，作为分类编辑器关联选择器的数据源。
"""
from sqlalchemy import or_

from backoffice.models import Tool


def find_tool_list(limit=None, offset=0, query=None):
    """
    获取工具列表，支持按名称 / slug 模糊搜索和分页

    参数:
        limit (int, optional): 每页数量，None 表示返回全部
        offset (int): 偏移量
        query (str, optional): 搜索关键字

    返回:
        dict: {'tools': [...], 'total': int, 'offset': int, 'limit': int | None}
    """
    tool_query = Tool.query

    if query:
        pattern = f"%{query.strip()}%"
        tool_query = tool_query.filter(or_(Tool.name.ilike(pattern), Tool.slug.ilike(pattern)))

    tool_query = tool_query.order_by(Tool.name.asc(), Tool.id.asc())

    total = tool_query.count()
    if offset:
        tool_query = tool_query.offset(offset)
    if limit is not None:
        tool_query = tool_query.limit(limit)

    return {
        'tools': [tool.to_relation() for tool in tool_query.all()],
        'total': total,
        'offset': offset,
        'limit': limit,
    }
