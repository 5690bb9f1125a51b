"""
分类编辑器 (Category Editor)。

把一次"新建 / 编辑分类"的表单交互建模为与 Web 框架无关的对象:
- CategoryForm: 表单取值、默认值、计算字段 (name -> slug / label) 以及基于 CategorySchema 的校验；
- CategoryEditor: 持有已加载的工具列表与分类树，提交时调用外部 upsert，
  通过 notify / navigate 回调反馈结果，同一时间只允许一个提交在进行中。

路由层 (routes/admin/categories.py) 负责加载数据源并把回调结果写入 JSON 响应。
"""
import logging
import threading
from collections import namedtuple

from pydantic import ValidationError

from backoffice.schemas.category import CategorySchema, format_validation_errors
from backoffice.services.category_service import UpsertError
from backoffice.utils.category_tree import build_category_tree
from backoffice.utils.slug_generator import slugify

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = '/admin/categories'
SUBMIT_PENDING_MESSAGE = 'A submission is already in progress'

Notification = namedtuple('Notification', ['level', 'message'])


def derive_label(name):
    return f"{name} Tools" if name else ""


class ComputedField:
    """源字段变化时，用 callback 重新计算目标字段 (enabled 为 False 时不生效)"""

    def __init__(self, source_field, computed_field, callback, enabled=True):
        self.source_field = source_field
        self.computed_field = computed_field
        self.callback = callback
        self.enabled = enabled

    def apply(self, values, changed_field):
        if not self.enabled or changed_field != self.source_field:
            return False
        values[self.computed_field] = self.callback(values.get(self.source_field) or "")
        return True


class CategoryForm:
    FIELDS = ('name', 'slug', 'label', 'description', 'parent_id', 'tools')

    def __init__(self, category=None):
        self.category = category
        self.values = self.default_values(category)
        self.errors = {}
        self.data = None

        # 只有新建分类时才根据名称自动生成 slug 和 label，编辑时保留人工修改过的值
        self.computed_fields = [
            ComputedField('name', 'slug', slugify, enabled=self.is_new),
            ComputedField('name', 'label', derive_label, enabled=self.is_new),
        ]

    @property
    def is_new(self):
        return self.category is None

    @staticmethod
    def default_values(category=None):
        if category is None:
            return {
                'name': '',
                'slug': '',
                'label': '',
                'description': '',
                'parent_id': None,
                'tools': [],
            }
        return {
            'name': category.name or '',
            'slug': category.slug or '',
            'label': category.label or '',
            'description': category.description or '',
            'parent_id': category.parent_id,
            'tools': [tool.id for tool in category.tools],
        }

    def set_value(self, field, value):
        if field not in self.FIELDS:
            raise KeyError(f"Unknown category field: {field}")
        self.values[field] = value
        for computed in self.computed_fields:
            computed.apply(self.values, field)

    def set_values(self, values):
        """批量赋值；先写 name，使随后显式提交的 slug / label 覆盖自动计算的值"""
        if 'name' in values:
            self.set_value('name', values['name'])
        for field in self.FIELDS:
            if field != 'name' and field in values:
                self.set_value(field, values[field])

    def validate(self):
        try:
            self.data = CategorySchema.model_validate(self.values).model_dump()
        except ValidationError as e:
            self.data = None
            self.errors = format_validation_errors(e)
            return False
        self.errors = {}
        return True


class SubmitResult:
    def __init__(self, success, message=None, data=None, redirect=None, errors=None, status_code=None):
        self.success = success
        self.message = message
        self.data = data
        self.redirect = redirect
        self.errors = errors or {}
        self.status_code = status_code

    def to_dict(self):
        return {
            'success': self.success,
            'message': self.message,
            'data': self.data,
            'redirect': self.redirect,
            'errors': self.errors,
        }

    def __repr__(self):
        return f'<SubmitResult success={self.success} redirect={self.redirect}>'


class CategoryEditor:
    """
    分类编辑器

    参数:
        category: 正在编辑的分类 (新建时为 None)，需提供 id / slug / name / label /
            description / parent_id / tools / has_subcategories
        tools (list[dict]): 已加载的工具列表 (关联选择器数据源)
        categories (list[dict]): 已加载的分类摘要 (含 id / parent_id / full_path)
        upsert (callable): 接收表单数据 dict，返回保存后的记录 dict，失败时抛出 UpsertError
        notify (callable, optional): notify(level, message)
        navigate (callable, optional): navigate(url)
    """

    def __init__(self, category, tools, categories, upsert, notify=None, navigate=None,
                 base_path=DEFAULT_BASE_PATH):
        self.category = category
        self.tools = list(tools)
        self.form = CategoryForm(category)
        self.base_path = base_path.rstrip('/')
        self.notifications = []
        self.navigated_to = None

        # 提交后 ORM 对象会刷新，提前记录原始 id / slug 用于比较
        self._category_id = category.id if category is not None else None
        self._original_slug = category.slug if category is not None else None

        # 编辑时不允许把分类自身选为父分类
        options = [c for c in categories if self._category_id is None or c['id'] != self._category_id]
        self.category_tree = build_category_tree(options)

        self._upsert = upsert
        self._notify = notify
        self._navigate = navigate
        self._submit_lock = threading.Lock()

    @property
    def is_new(self):
        return self.category is None

    @property
    def parent_locked(self):
        """已有子分类的分类不能修改或清除父分类"""
        return self.category is not None and bool(self.category.has_subcategories)

    @property
    def is_pending(self):
        return self._submit_lock.locked()

    def notify(self, level, message):
        self.notifications.append(Notification(level, message))
        if self._notify is not None:
            self._notify(level, message)

    def navigate(self, url):
        self.navigated_to = url
        if self._navigate is not None:
            self._navigate(url)

    def url_for_slug(self, slug):
        return f"{self.base_path}/{slug}"

    def to_dict(self):
        """表单初始数据：取值、分类树、工具列表"""
        return {
            'category': self.category.to_dict() if hasattr(self.category, 'to_dict') else None,
            'values': dict(self.form.values),
            'category_tree': self.category_tree,
            'tools': self.tools,
            'parent_locked': self.parent_locked,
            'is_new': self.is_new,
        }

    def submit(self):
        if not self.form.validate():
            logger.info("分类表单校验失败: %s", self.form.errors)
            return SubmitResult(False, message='Please fix the highlighted fields', errors=self.form.errors,
                                status_code=400)

        if not self._submit_lock.acquire(blocking=False):
            return SubmitResult(False, message=SUBMIT_PENDING_MESSAGE, status_code=409)

        try:
            payload = {'id': self._category_id, **self.form.data}
            if self.parent_locked:
                payload['parent_id'] = self.category.parent_id

            try:
                record = self._upsert(payload)
            except UpsertError as e:
                logger.warning("分类保存失败: %s", e.message)
                self.notify('error', e.message)
                return SubmitResult(False, message=e.message, status_code=e.status_code)

            message = f"Category successfully {'created' if self.is_new else 'updated'}"
            self.notify('success', message)

            redirect = None
            # 新建，或 slug 发生变化时跳转到新的地址
            if self.is_new or record['slug'] != self._original_slug:
                redirect = self.url_for_slug(record['slug'])
                self.navigate(redirect)

            return SubmitResult(True, message=message, data=record, redirect=redirect,
                                status_code=201 if self.is_new else 200)
        finally:
            self._submit_lock.release()
