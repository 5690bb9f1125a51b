"""
此模块定义了后台分类编辑器 (Category Editor) 的 API 端点。

主要功能:
- 分类列表 (父分类选择器数据源)。
- 新建 / 编辑表单数据：默认值、两级分类树、工具列表、父分类是否锁定。
- 提交新建 (POST) 与更新 (PUT)，响应中携带提示信息 message 与跳转地址 redirect。
- 删除分类。
- 计算字段预览：新建分类时由名称生成 slug 与 label。

依赖模型: Category, Tool
服务: category_service, category_editor, tool_service
使用 Flask 蓝图: admin_bp (在 admin/__init__.py 中定义)

注意: 如果新增、删除或修改功能，必须在这开头的注释中同步修改，如发现功能与注释描述不同，也可以在确定后修改。
"""
from flask import jsonify, request, current_app, abort
from pydantic import ValidationError

from backoffice.schemas.category import ComputedFieldsRequest, format_validation_errors
from backoffice.services.category_editor import CategoryEditor, CategoryForm
from backoffice.services.category_service import (
    UpsertError,
    delete_category,
    find_category_by_slug,
    find_category_list,
    upsert_category,
)
from backoffice.services.tool_service import find_tool_list
from . import admin_bp


def _build_editor(category=None):
    """两个数据源 (工具列表、分类列表) 都加载完成后才构建编辑器"""
    tools = find_tool_list()['tools']
    categories = find_category_list()
    return CategoryEditor(
        category,
        tools=tools,
        categories=categories,
        upsert=upsert_category,
        base_path=current_app.config['ADMIN_CATEGORIES_PATH'],
    )


def _get_category_or_404(slug):
    category = find_category_by_slug(slug)
    if category is None:
        abort(404)
    return category


def _submit(editor):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({
            'success': False,
            'message': 'Request body must be a JSON object',
            'data': None,
            'redirect': None,
            'errors': {},
        }), 400

    editor.form.set_values(data)
    result = editor.submit()
    return jsonify(result.to_dict()), result.status_code


@admin_bp.route('/categories', methods=['GET'])
def get_categories():
    """获取所有分类摘要"""
    return jsonify(find_category_list()), 200


@admin_bp.route('/categories/new', methods=['GET'])
def new_category_form():
    """新建分类的表单数据"""
    return jsonify(_build_editor().to_dict()), 200


@admin_bp.route('/categories/<string:slug>', methods=['GET'])
def edit_category_form(slug):
    """编辑分类的表单数据"""
    category = _get_category_or_404(slug)
    return jsonify(_build_editor(category).to_dict()), 200


@admin_bp.route('/categories', methods=['POST'])
def create_category():
    """创建新分类"""
    return _submit(_build_editor())


@admin_bp.route('/categories/<string:slug>', methods=['PUT'])
def update_category(slug):
    """更新分类"""
    category = _get_category_or_404(slug)
    return _submit(_build_editor(category))


@admin_bp.route('/categories/<string:slug>', methods=['DELETE'])
def remove_category(slug):
    """删除分类 (子分类提升为顶级分类)"""
    category = _get_category_or_404(slug)
    try:
        delete_category(category)
    except UpsertError as e:
        return jsonify({'success': False, 'message': e.message}), e.status_code

    return jsonify({
        'success': True,
        'message': 'Category successfully deleted',
        'redirect': current_app.config['ADMIN_CATEGORIES_PATH'],
    }), 200


@admin_bp.route('/categories/computed-fields', methods=['POST'])
def preview_computed_fields():
    """根据名称预览自动生成的 slug / label (编辑已有分类时保持原值)"""
    try:
        payload = ComputedFieldsRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({'success': False, 'errors': format_validation_errors(e)}), 400

    category = _get_category_or_404(payload.category_slug) if payload.category_slug else None
    form = CategoryForm(category)
    form.set_value('name', payload.name)

    return jsonify({
        'name': form.values['name'],
        'slug': form.values['slug'],
        'label': form.values['label'],
        'computed': form.is_new,
    }), 200
