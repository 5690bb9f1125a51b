# backend/backoffice/models/stack.py
"""
定义技术栈模型 (Stack) 及技术栈与工具的多对多关联表。
"""
from backoffice import db
from datetime import datetime
import enum

stack_tools = db.Table(
    'stack_tools',
    db.Column('stack_id', db.Integer, db.ForeignKey('stacks.id', ondelete='CASCADE'), primary_key=True),
    db.Column('tool_id', db.Integer, db.ForeignKey('tools.id', ondelete='CASCADE'), primary_key=True, index=True),
)


class StackType(enum.Enum):
    TOOL = 'Tool'
    SAAS = 'SaaS'
    CLOUD = 'Cloud'
    ETL = 'ETL'
    ANALYTICS = 'Analytics'
    LANGUAGE = 'Language'
    DB = 'DB'
    CI = 'CI'
    FRAMEWORK = 'Framework'
    HOSTING = 'Hosting'
    API = 'API'
    STORAGE = 'Storage'
    MONITORING = 'Monitoring'
    MESSAGING = 'Messaging'
    APP = 'App'
    NETWORK = 'Network'


class Stack(db.Model):
    __tablename__ = 'stacks'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    type = db.Column(db.Enum(StackType, values_callable=lambda e: [m.value for m in e], name='stack_type'),
                     default=StackType.LANGUAGE, nullable=False)
    description = db.Column(db.Text, nullable=True)
    website = db.Column(db.String(512), nullable=True)
    favicon_url = db.Column(db.String(512), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tools = db.relationship('Tool', secondary=stack_tools, backref=db.backref('stacks', lazy='dynamic'))

    def __repr__(self):
        return f'<Stack {self.name} ({self.type.value if self.type else None})>'
