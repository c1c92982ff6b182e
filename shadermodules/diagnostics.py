import numpy as np
from .resolver import _resolve, _lookup


def group_by_level(depth_map: dict) -> list:
    """
    Groups module names by level. Index i of the result holds the modules at
    level i, so the most foundational modules end up in the last group.
    """
    if not depth_map:
        return []
    groups = [[] for _ in range(max(depth_map.values()) + 1)]
    for name, level in depth_map.items():
        groups[level].append(name)
    return groups

def dependency_matrix(modules, registry=None):
    """
    Builds the adjacency matrix of the graph reachable from `modules`.

    Returns (names, matrix) where `names` is the resolved order and
    matrix[i, j] == 1 when names[i] depends directly on names[j]. Since
    dependencies precede dependents, the matrix is strictly lower-triangular.
    """
    ordered = _resolve(modules, registry)
    names = [module.name for module in ordered]
    index = {name: i for i, name in enumerate(names)}
    matrix = np.zeros((len(names), len(names)), dtype=np.int8)
    for module in ordered:
        for dep in module.dependencies:
            matrix[index[module.name], index[_lookup(dep, registry).name]] = 1
    return names, matrix

def format_tree(modules, registry=None, indent: str = "  ") -> str:
    """Renders the dependency hierarchy as indented text, one module per line."""
    # Resolving first rejects cyclic graphs before walking them.
    _resolve(modules, registry)

    lines = []
    printed = set()
    stack = [(root, 0) for root in reversed(list(modules))]
    while stack:
        item, depth = stack.pop()
        module = _lookup(item, registry)
        if module.name in printed:
            # Subtree already shown above
            lines.append(f"{indent * depth}{module.name} (*)")
            continue
        printed.add(module.name)
        lines.append(f"{indent * depth}{module.name}")
        stack.extend((dep, depth + 1) for dep in reversed(module.dependencies))
    return "\n".join(lines)
