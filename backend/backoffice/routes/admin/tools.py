"""
工具 (Tool) 数据源端点，供分类编辑器的关联选择器使用。
"""
from flask import jsonify, request, current_app

from backoffice.services.tool_service import find_tool_list
from . import admin_bp


@admin_bp.route('/tools', methods=['GET'])
def get_tools():
    """获取工具列表，?limit=&offset=&q= ，不带 limit 时使用默认分页大小，limit=0 返回全部"""
    default_limit = current_app.config['TOOL_LIST_DEFAULT_LIMIT']
    max_limit = current_app.config['TOOL_LIST_MAX_LIMIT']

    limit = request.args.get('limit', default_limit, type=int)
    offset = request.args.get('offset', 0, type=int)
    query = request.args.get('q', type=str)

    if limit is None or limit < 0 or offset is None or offset < 0:
        return jsonify({'error': 'invalid_pagination', 'message': 'limit and offset must be non-negative integers'}), 400

    limit = None if limit == 0 else min(limit, max_limit)
    return jsonify(find_tool_list(limit=limit, offset=offset, query=query)), 200
