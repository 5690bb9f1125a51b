"""
把扁平的分类列表组装成两级分类树，供父分类下拉框分组展示。

超过两级的分类 (full_path 段数 >= 3) 不再嵌套，而是作为根节点平铺；
父分类不在输入中的分类同样作为根节点。
"""
from backoffice.models.category import FULL_PATH_SEPARATOR

MAX_TREE_PATH_SEGMENTS = 2


def path_depth(full_path):
    return len((full_path or '').split(FULL_PATH_SEPARATOR))


def build_category_tree(categories):
    """
    单次遍历构建分类树。

    参数:
        categories (iterable[dict]): 含 id、parent_id、full_path 的分类摘要，保持原有顺序

    返回:
        list[dict]: 根节点列表，每个节点为原记录的副本并带有 children 列表
    """
    nodes = [{**category, 'children': []} for category in categories]
    node_map = {node['id']: node for node in nodes}
    tree = []

    for node in nodes:
        parent = node_map.get(node.get('parent_id')) if node.get('parent_id') is not None else None

        if parent is not None and parent is not node and path_depth(node.get('full_path')) <= MAX_TREE_PATH_SEGMENTS:
            parent['children'].append(node)
        else:
            tree.append(node)

    return tree
