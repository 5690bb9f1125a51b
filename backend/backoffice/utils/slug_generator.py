"""
生成唯一 slug 的工具函数。

为模型生成友好的 URL 标识符，支持中文转拼音，并确保生成的 slug 在特定模型的表中唯一。
"""
import re
import time
import unicodedata
from sqlalchemy import inspect
from pypinyin import lazy_pinyin

SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')

# 与后台固定路由 (/categories/new、/categories/computed-fields) 冲突的 slug
RESERVED_SLUGS = frozenset({'new', 'computed-fields'})


def slugify(text):
    """
    将文本转换为 URL 友好的 slug 格式

    参数:
        text (str): 要转换的文本

    返回:
        str: 小写、以连字符分隔的 slug，空输入返回空字符串
    """
    if not text:
        return ''
    text = str(text)

    # 如果是中文，先转为拼音
    if any('\u4e00' <= char <= '\u9fff' for char in text):
        text = '-'.join(lazy_pinyin(text))

    # 标准化 Unicode 字符
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    text = text.lower()
    # 移除除字母数字、空白、连字符、下划线外的字符
    text = re.sub(r'[^\w\s-]', '', text)
    # 空白、下划线和连续连字符统一为单个连字符
    text = re.sub(r'[-\s_]+', '-', text)

    return text.strip('-')


def generate_unique_slug(text, model, exclude_id=None, reserved=RESERVED_SLUGS):
    """
    生成唯一的 slug，如果已存在则添加后缀

    参数:
        text (str): 要转换为 slug 的文本
        model (db.Model): 需要检查唯一性的 SQLAlchemy 模型
        exclude_id (int, optional): 更新时排除的 ID
        reserved (iterable, optional): 即使表中不存在也不能使用的 slug

    返回:
        str: 唯一的 slug
    """
    base_slug = slugify(text) or model.__tablename__.rstrip('s')
    slug = base_slug
    counter = 1

    # 获取模型的主键名称
    pk_name = inspect(model).primary_key[0].name

    while True:
        query = model.query.filter(model.slug == slug)

        if exclude_id is not None:
            query = query.filter(getattr(model, pk_name) != exclude_id)

        if slug not in reserved and query.first() is None:
            break

        # 如果已存在或为保留字，添加数字后缀
        slug = f"{base_slug}-{counter}"
        counter += 1

        # 防止无限循环，超过一定次数后使用时间戳
        if counter > 100:
            slug = f"{base_slug}-{int(time.time())}"
            break

    return slug
