from backoffice import db
from backoffice.models import Category
from backoffice.services.category_service import build_full_path
from backoffice.utils.slug_generator import slugify

# (名称, 描述, 子分类名称)
STARTER_CATEGORIES = [
    ("Analytics", "Product, web and data analytics", ["Web Analytics", "Product Analytics"]),
    ("Communication", "Chat, email and video conferencing", ["Team Chat", "Video Conferencing"]),
    ("Content Management", "CMS, blogging and documentation", ["Headless CMS", "Documentation"]),
    ("Developer Tools", "Tooling for building software", ["CI/CD", "Monitoring"]),
    ("Productivity", "Notes, tasks and project management", ["Note Taking", "Project Management"]),
    ("Security", "Password managers, auth and secrets", ["Password Managers", "Authentication"]),
]


def _make_category(name, description=None, parent=None):
    slug = slugify(name)
    category = Category(
        name=name,
        slug=slug,
        label=f"{name} Tools",
        description=description,
        parent=parent,
        full_path=build_full_path(parent, slug),
    )
    db.session.add(category)
    return category


def init_categories():
    """初始化分类数据，已有数据时不做任何事，返回新增的分类数量"""
    if Category.query.first() is not None:
        return 0

    count = 0
    for name, description, children in STARTER_CATEGORIES:
        parent = _make_category(name, description)
        count += 1
        for child_name in children:
            _make_category(child_name, parent=parent)
            count += 1

    db.session.commit()
    return count
