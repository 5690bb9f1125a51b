# backend/backoffice/models/category.py
"""
定义分类模型 (Category) 及分类与工具的多对多关联表。
支持两级展示的层级结构 (parent_id 自引用)，full_path 保存由祖先 slug 组成的路径。

注意: 如果新增、删除或修改功能，必须在这开头的注释中同步修改，如发现功能与注释描述不同，也可以在确定后修改。
"""
from backoffice import db
from datetime import datetime

FULL_PATH_SEPARATOR = '/'

category_tools = db.Table(
    'category_tools',
    db.Column('category_id', db.Integer, db.ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True),
    db.Column('tool_id', db.Integer, db.ForeignKey('tools.id', ondelete='CASCADE'), primary_key=True, index=True),
)


class Category(db.Model):
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    full_path = db.Column(db.String(1024), nullable=False, unique=True, default='')
    label = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    parent_id = db.Column(db.Integer, db.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 关系
    parent = db.relationship('Category', remote_side=[id], backref=db.backref('subcategories', lazy='dynamic'))
    tools = db.relationship('Tool', secondary=category_tools, backref=db.backref('categories', lazy='dynamic'),
                            order_by='Tool.name')

    @property
    def has_subcategories(self):
        return self.subcategories.first() is not None

    def to_summary(self):
        """分类列表 / 分类树使用的精简结构"""
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'parent_id': self.parent_id,
            'full_path': self.full_path,
            'has_subcategories': self.has_subcategories,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'full_path': self.full_path,
            'label': self.label,
            'description': self.description,
            'parent_id': self.parent_id,
            'tools': [{'id': tool.id, 'name': tool.name, 'slug': tool.slug} for tool in self.tools],
            'subcategories': [child.to_summary() for child in self.subcategories.order_by(Category.name)],
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Category {self.full_path or self.name}>'
