"""
管理员API路由
(在 backoffice/__init__.py 中以 /api/admin 前缀注册)

- categories.py: 分类编辑器 (列表、表单数据、创建、更新、删除、计算字段预览)
- tools.py: 工具列表数据源
- 本文件: 错误统计
"""

from flask import Blueprint, jsonify, current_app

admin_bp = Blueprint('admin_bp', __name__)


@admin_bp.route('/errors', methods=['GET'])
def get_error_stats():
    """获取错误统计信息"""
    from backoffice.utils.error_handler import ErrorHandler
    return jsonify(ErrorHandler.get_error_stats()), 200


@admin_bp.route('/errors', methods=['DELETE'])
def reset_error_stats():
    """重置错误统计"""
    from backoffice.utils.error_handler import ErrorHandler
    current_app.logger.info("错误统计已被重置")
    return jsonify(ErrorHandler.reset_stats()), 200


from . import categories, tools  # noqa: E402,F401
