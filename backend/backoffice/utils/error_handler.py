"""
错误处理模块

提供全站错误处理功能，包括：
- 所有错误统一返回 JSON
- 404 错误按路径模式 (分类、工具) 给出更具体的提示
- 错误计数与最近错误记录，供管理员错误监控接口使用
"""

from flask import jsonify, request, current_app
from werkzeug.exceptions import HTTPException
import re
import time
import threading
from collections import defaultdict, Counter
from datetime import datetime

MAX_RECENT_ERRORS = 100

# 定义URL模式及错误提示
URL_PATTERNS = [
    (re.compile(r'/api/admin/categories/([^/]+)'), "Category not found"),
    (re.compile(r'/api/admin/tools/([^/]+)'), "Tool not found"),
    (re.compile(r'/api/admin/'), "Admin endpoint not found"),
]

ERROR_MESSAGES = {
    400: "Bad request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "The requested resource does not exist",
    405: "Method not allowed",
    409: "Conflict",
    415: "Unsupported media type",
    429: "Too many requests",
    500: "Internal server error, please try again later",
}


def _new_stats():
    return {
        'last_reset': time.time(),
        'total_count': 0,
        'by_code': defaultdict(int),  # 按状态码统计
        'by_endpoint': defaultdict(int),  # 按端点统计
        'by_pattern': defaultdict(int),  # 按URL模式统计
        'recent_errors': [],  # 最近的错误列表
        'ip_count': Counter(),  # IP计数器
    }


_error_lock = threading.Lock()
_error_stats = _new_stats()


class ErrorHandler:
    """错误处理器"""

    @staticmethod
    def register_handlers(app):
        """注册所有错误处理器"""

        @app.errorhandler(404)
        def handle_not_found(e):
            path = request.path
            error_msg = ERROR_MESSAGES[404]
            matched_pattern = None

            # 根据URL模式提供个性化响应
            for pattern, msg in URL_PATTERNS:
                if pattern.search(path):
                    error_msg = msg
                    matched_pattern = pattern.pattern
                    break

            ErrorHandler._record_error(404, path, request.method, request.remote_addr, error_msg, matched_pattern)

            return jsonify({
                'error': 'not_found',
                'message': error_msg,
                'status': 404,
                'path': path,
            }), 404

        @app.errorhandler(500)
        def handle_server_error(e):
            path = request.path
            original = getattr(e, 'original_exception', None) or e

            # 记录完整错误到日志
            current_app.logger.error(f"服务器错误: {request.method} {path} - {original}", exc_info=original)
            ErrorHandler._record_error(500, path, request.method, request.remote_addr, str(original))

            # 出错的请求可能留下未完成的事务
            from backoffice import db
            db.session.rollback()

            return jsonify({
                'error': 'server_error',
                'message': ERROR_MESSAGES[500],
                'status': 500,
            }), 500

        # 注册其他常见错误代码
        for code in [400, 401, 403, 405, 409, 415, 429]:
            app.register_error_handler(code, ErrorHandler._create_error_handler(code))

    @staticmethod
    def _create_error_handler(status_code):
        """创建特定状态码的错误处理器"""
        def handler(e):
            error_msg = ERROR_MESSAGES.get(status_code, "Request failed")
            if isinstance(e, HTTPException) and e.description and e.description != type(e).description:
                error_msg = e.description

            ErrorHandler._record_error(status_code, request.path, request.method, request.remote_addr, error_msg)

            return jsonify({
                'error': f'error_{status_code}',
                'message': error_msg,
                'status': status_code,
            }), status_code

        return handler

    @staticmethod
    def _record_error(status_code, path, method, client_ip, error_msg, pattern=None):
        """记录错误统计信息"""
        with _error_lock:
            _error_stats['total_count'] += 1
            _error_stats['by_code'][status_code] += 1
            _error_stats['by_endpoint'][ErrorHandler._simplify_path(path)] += 1
            if pattern:
                _error_stats['by_pattern'][pattern] += 1
            _error_stats['ip_count'][client_ip] += 1

            _error_stats['recent_errors'].append({
                'timestamp': datetime.now().isoformat(),
                'status_code': status_code,
                'path': path,
                'method': method,
                'client_ip': client_ip,
                'message': error_msg,
            })

            # 如果超过最大数量，移除最早的错误
            if len(_error_stats['recent_errors']) > MAX_RECENT_ERRORS:
                _error_stats['recent_errors'] = _error_stats['recent_errors'][-MAX_RECENT_ERRORS:]

    @staticmethod
    def _simplify_path(path):
        """简化路径，替换ID为占位符"""
        path = re.sub(r'/\d+(?=/|$)', '/{id}', path)
        # 分类 / 工具的 slug
        path = re.sub(r'^(/api/admin/(?:categories|tools))/(?!new$|computed-fields$)[^/]+', r'\1/{slug}', path)
        return path

    @staticmethod
    def get_error_stats():
        """获取错误统计信息"""
        with _error_lock:
            # 创建副本避免线程安全问题
            return {
                'total_count': _error_stats['total_count'],
                'by_code': dict(_error_stats['by_code']),
                'by_endpoint': dict(_error_stats['by_endpoint']),
                'by_pattern': dict(_error_stats['by_pattern']),
                'recent_errors': _error_stats['recent_errors'][-20:],  # 最近20条
                'top_ips': dict(_error_stats['ip_count'].most_common(10)),  # 前10个IP
                'last_reset': _error_stats['last_reset'],
            }

    @staticmethod
    def reset_stats():
        """重置错误统计"""
        with _error_lock:
            _error_stats.clear()
            _error_stats.update(_new_stats())

        return {"success": True, "message": "Error statistics reset"}
