# backend/backoffice/models/feedback.py
"""
定义用户对工具的反馈：问题报告 (Report) 与点赞 (Like)。

用户账号由外部认证系统管理，这里只保存其标识 user_id (不建外键)。
删除工具时级联删除其报告与点赞；同一用户对同一工具只能点赞一次。

注意: 如果新增、删除或修改功能，必须在这开头的注释中同步修改，如发现功能与注释描述不同，也可以在确定后修改。
"""
from backoffice import db
from datetime import datetime
import enum


class ReportType(enum.Enum):
    BROKEN_LINK = 'BrokenLink'
    WRONG_CATEGORY = 'WrongCategory'
    WRONG_ALTERNATIVE = 'WrongAlternative'
    OUTDATED = 'Outdated'
    OTHER = 'Other'


class Report(db.Model):
    __tablename__ = 'reports'

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.Enum(ReportType, values_callable=lambda e: [m.value for m in e], name='report_type'),
                     nullable=False)
    message = db.Column(db.Text, nullable=True)
    user_id = db.Column(db.String(255), nullable=True, index=True)
    tool_id = db.Column(db.Integer, db.ForeignKey('tools.id', ondelete='CASCADE'), nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tool = db.relationship('Tool', backref=db.backref('reports', cascade='all, delete-orphan'))

    def __repr__(self):
        return f'<Report {self.type.value if self.type else None} tool={self.tool_id}>'


class Like(db.Model):
    __tablename__ = 'likes'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'tool_id', name='uq_likes_user_tool'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(255), nullable=False, index=True)
    tool_id = db.Column(db.Integer, db.ForeignKey('tools.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    tool = db.relationship('Tool', backref=db.backref('likes', cascade='all, delete-orphan'))

    def __repr__(self):
        return f'<Like user={self.user_id} tool={self.tool_id}>'
