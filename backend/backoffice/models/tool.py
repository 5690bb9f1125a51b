# backend/backoffice/models/tool.py
"""
定义工具模型 (Tool)。
目录中收录的工具条目，后台分类编辑器通过多对多关系 (category_tools) 为分类关联工具；
工具还关联许可证、替代品、话题、技术栈，并接收用户的报告与点赞。

注意: 如果新增、删除或修改功能，必须在这开头的注释中同步修改，如发现功能与注释描述不同，也可以在确定后修改。
"""
from backoffice import db
from datetime import datetime
import enum


class ToolStatus(enum.Enum):
    DRAFT = 'Draft'
    SCHEDULED = 'Scheduled'
    PUBLISHED = 'Published'


class Tool(db.Model):
    __tablename__ = 'tools'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    website_url = db.Column(db.String(512), nullable=True)
    tagline = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(db.Enum(ToolStatus, values_callable=lambda e: [m.value for m in e], name='tool_status'),
                       default=ToolStatus.DRAFT, nullable=False, index=True)
    is_featured = db.Column(db.Boolean, default=False, nullable=False)
    published_at = db.Column(db.DateTime, nullable=True)
    license_id = db.Column(db.Integer, db.ForeignKey('licenses.id', ondelete='SET NULL'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # categories / alternatives / topics / stacks / reports / likes / license 关系
    # 均通过对应模型中的 backref 建立

    def to_relation(self):
        """关联选择器 (relation selector) 使用的精简结构"""
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
        }

    def __repr__(self):
        return f'<Tool {self.name}>'
