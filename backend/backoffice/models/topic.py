# backend/backoffice/models/topic.py
"""
定义话题模型 (Topic) 及工具与话题的多对多关联表。
话题以 slug 作为主键 (例如仓库的 topics 标签)。
"""
from backoffice import db
from datetime import datetime

tool_topics = db.Table(
    'tool_topics',
    db.Column('tool_id', db.Integer, db.ForeignKey('tools.id', ondelete='CASCADE'), primary_key=True),
    db.Column('topic_slug', db.String(255), db.ForeignKey('topics.slug', ondelete='CASCADE'), primary_key=True, index=True),
)


class Topic(db.Model):
    __tablename__ = 'topics'

    slug = db.Column(db.String(255), primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tools = db.relationship('Tool', secondary=tool_topics, backref=db.backref('topics', lazy='dynamic'))

    def __repr__(self):
        return f'<Topic {self.slug}>'
