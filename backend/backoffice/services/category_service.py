"""
分类 (Category) 的查询与写入服务。

主要功能:
- 分类列表 / 按 slug 查询 (分类编辑器的数据源)。
- upsert: 无 id 时创建，有 id 时更新；自动生成唯一 slug、维护 full_path 及子孙分类路径、替换关联工具。
- 删除分类：子分类提升为顶级分类并重写路径。

依赖模型: Category, Tool
"""
import logging

from sqlalchemy.exc import IntegrityError

from backoffice import db
from backoffice.models import Category, Tool
from backoffice.models.category import FULL_PATH_SEPARATOR
from backoffice.utils.slug_generator import RESERVED_SLUGS, generate_unique_slug

logger = logging.getLogger(__name__)


class UpsertError(Exception):
    """upsert / 删除失败，message 可直接展示给用户"""

    def __init__(self, message, status_code=400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def find_category_list():
    """全部分类的摘要列表 (按名称排序)"""
    categories = Category.query.order_by(Category.name.asc(), Category.id.asc()).all()
    return [category.to_summary() for category in categories]


def find_category_by_slug(slug):
    return Category.query.filter_by(slug=slug).first()


def build_full_path(parent, slug):
    if parent is None:
        return slug
    return f"{parent.full_path}{FULL_PATH_SEPARATOR}{slug}"


def _rewrite_descendant_paths(category):
    """递归重写子孙分类的 full_path，返回被修改的分类数量"""
    count = 0
    for child in category.subcategories:
        child.full_path = build_full_path(category, child.slug)
        count += 1 + _rewrite_descendant_paths(child)
    return count


def _resolve_parent(category, parent_id):
    if parent_id is None:
        return None

    parent = db.session.get(Category, parent_id)
    if parent is None:
        raise UpsertError(f"Parent category {parent_id} does not exist", 404)

    # 有子分类的分类不能改父分类 (见 upsert_category)，因此只需排除自身
    if category is not None and parent.id == category.id:
        raise UpsertError("A category cannot be its own parent")

    return parent


def _resolve_tools(tool_ids):
    if not tool_ids:
        return []

    tools = Tool.query.filter(Tool.id.in_(tool_ids)).all()
    found = {tool.id: tool for tool in tools}
    missing = [tool_id for tool_id in tool_ids if tool_id not in found]
    if missing:
        raise UpsertError(f"Unknown tool ids: {', '.join(str(tool_id) for tool_id in missing)}", 404)
    return [found[tool_id] for tool_id in tool_ids]


def upsert_category(data):
    """
    创建或更新分类

    参数:
        data (dict): id (可选), name, slug, label, description, parent_id, tools

    返回:
        dict: 保存后的分类 (Category.to_dict())

    异常:
        UpsertError: 校验或数据库约束失败
    """
    category_id = data.get('id')
    category = None
    if category_id is not None:
        category = db.session.get(Category, category_id)
        if category is None:
            raise UpsertError(f"Category {category_id} does not exist", 404)

    parent_id = data.get('parent_id')
    if category is not None and category.parent_id != parent_id and category.has_subcategories:
        raise UpsertError("Cannot change the parent of a category that has subcategories")

    try:
        parent = _resolve_parent(category, parent_id)
        tools = _resolve_tools(data.get('tools') or [])

        slug = (data.get('slug') or '').strip()
        if slug in RESERVED_SLUGS:
            raise UpsertError(f'Slug "{slug}" is reserved')
        if slug:
            conflict = Category.query.filter(Category.slug == slug)
            if category is not None:
                conflict = conflict.filter(Category.id != category.id)
            if conflict.first() is not None:
                raise UpsertError(f'Slug "{slug}" is already in use by another category', 409)
        else:
            slug = generate_unique_slug(data['name'], Category, exclude_id=category.id if category else None)

        is_new = category is None
        if is_new:
            category = Category()
            db.session.add(category)

        previous_path = category.full_path
        category.name = data['name']
        category.slug = slug
        category.label = data.get('label') or None
        category.description = data.get('description') or None
        category.parent = parent
        category.parent_id = parent.id if parent else None
        category.full_path = build_full_path(parent, slug)
        category.tools = tools

        if not is_new and previous_path != category.full_path:
            rewritten = _rewrite_descendant_paths(category)
            logger.info("分类路径变更 %s -> %s，重写子孙分类 %d 个", previous_path, category.full_path, rewritten)

        db.session.commit()
    except UpsertError:
        db.session.rollback()
        raise
    except IntegrityError as e:
        db.session.rollback()
        logger.error(f"保存分类时违反数据库约束: {e}")
        raise UpsertError("A category with the same slug or path already exists", 409)

    logger.info("分类已%s: id=%s slug=%s", "创建" if is_new else "更新", category.id, category.slug)
    return category.to_dict()


def delete_category(category):
    """删除分类，子分类提升为顶级分类"""
    slug = category.slug
    try:
        for child in category.subcategories.all():
            child.parent = None
            child.parent_id = None
            child.full_path = child.slug
            _rewrite_descendant_paths(child)

        db.session.delete(category)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.error(f"删除分类失败: {e}")
        raise UpsertError("Category could not be deleted", 409)

    logger.info("分类已删除: slug=%s", slug)
