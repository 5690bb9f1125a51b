# backend/backoffice/models/license.py
"""
定义开源许可证模型 (License)。
每个工具最多关联一个许可证 (Tool.license_id)，删除许可证时工具的 license_id 置空。

注意: 如果新增、删除或修改功能，必须在这开头的注释中同步修改，如发现功能与注释描述不同，也可以在确定后修改。
"""
from backoffice import db
from datetime import datetime


class License(db.Model):
    __tablename__ = 'licenses'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, unique=True)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 关系
    tools = db.relationship('Tool', backref='license', lazy='dynamic')

    def __repr__(self):
        return f'<License {self.name}>'
