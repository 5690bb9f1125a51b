# backend/backoffice/models/alternative.py
"""
定义替代品模型 (Alternative) 及替代品与工具的多对多关联表。
Alternative 是被开源工具替代的商业产品，工具通过 backref='alternatives' 访问。

注意: 如果新增、删除或修改功能，必须在这开头的注释中同步修改，如发现功能与注释描述不同，也可以在确定后修改。
"""
from backoffice import db
from datetime import datetime

alternative_tools = db.Table(
    'alternative_tools',
    db.Column('alternative_id', db.Integer, db.ForeignKey('alternatives.id', ondelete='CASCADE'), primary_key=True),
    db.Column('tool_id', db.Integer, db.ForeignKey('tools.id', ondelete='CASCADE'), primary_key=True, index=True),
)


class Alternative(db.Model):
    __tablename__ = 'alternatives'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    description = db.Column(db.Text, nullable=True)
    website_url = db.Column(db.String(512), nullable=False, unique=True)
    favicon_url = db.Column(db.String(512), nullable=True)
    discount_code = db.Column(db.String(255), nullable=True)
    discount_amount = db.Column(db.String(255), nullable=True)
    pageviews = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tools = db.relationship('Tool', secondary=alternative_tools, backref=db.backref('alternatives', lazy='dynamic'),
                            order_by='Tool.name')

    def __repr__(self):
        return f'<Alternative {self.name}>'
