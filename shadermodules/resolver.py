"""
Dependency resolution for shader modules.

Both traversals walk the module graph depth-first, following each module's
dependencies in declaration order. Inputs are ordered sequences: the order of
the requested modules, and of each module's dependencies, decides where
independent modules land in the output.

The walks keep an explicit stack of frames instead of recursing, so chain
length is not bounded by the interpreter's recursion limit.
"""
from .module import ShaderModule
from .errors import ShaderModuleCycleError, UnknownShaderModuleError


def _lookup(module_or_name, registry):
    if isinstance(module_or_name, ShaderModule):
        return module_or_name
    if registry is None:
        raise UnknownShaderModuleError(module_or_name)
    return registry.get(module_or_name)

def _check_cycle(name: str, in_progress: dict):
    # in_progress is insertion-ordered, so its keys are the current path
    if name in in_progress:
        path = list(in_progress)
        raise ShaderModuleCycleError(path[path.index(name):] + [name])


def resolve_modules(modules, registry=None) -> list:
    """
    Flattens `modules` and their transitive dependencies into a list of
    names in which every module comes after all the modules it depends on.

    Each name appears once. A module shared by several branches is placed
    where the traversal first reaches it; later encounters are ignored.

    Args:
        modules (sequence): Requested ShaderModule objects (or registered
                            names), in priority order. May contain duplicates.
        registry (ShaderModuleRegistry, optional): Used to look up modules
                                                   and dependencies given by name.

    Raises:
        ShaderModuleCycleError: If the dependency graph contains a cycle.
        UnknownShaderModuleError: If a name cannot be looked up.
    """
    return [module.name for module in _resolve(modules, registry)]

def _resolve(modules, registry) -> list:
    """Same traversal as resolve_modules, returning the module objects."""
    added = set()
    result = []
    in_progress = {}
    stack = [(None, iter(modules))]
    while stack:
        owner, items = stack[-1]
        for item in items:
            module = _lookup(item, registry)
            if module.name in added:
                continue
            _check_cycle(module.name, in_progress)
            in_progress[module.name] = None
            stack.append((module, iter(module.dependencies)))
            break
        else:
            stack.pop()
            if owner is not None:
                del in_progress[owner.name]
                added.add(owner.name)
                result.append(owner)
    return result


def get_dependency_graph(modules, level: int = 0, result: dict = None, registry=None) -> dict:
    """
    Records in `result` the depth of every module reachable from `modules`.

    `modules` sit at `level`, their direct dependencies at `level + 1`, and so
    on. A module reached along several paths keeps the deepest level it was
    seen at: existing entries in `result` are raised, never lowered.

    Returns `result` (a new dict if none was given).
    """
    if level < 0:
        raise ValueError(f"Base level must be non-negative, got {level}.")
    if result is None:
        result = {}
    _assign_levels(modules, level, result, registry)
    return result

def _assign_levels(modules, level: int, result: dict, registry):
    expanded = {}
    in_progress = {}
    stack = [(None, iter(modules), level)]
    while stack:
        owner, items, item_level = stack[-1]
        for item in items:
            module = _lookup(item, registry)
            name = module.name
            _check_cycle(name, in_progress)
            if name not in result or result[name] < item_level:
                result[name] = item_level
            # A subtree already walked from this depth or deeper cannot raise any level.
            if expanded.get(name, -1) >= item_level:
                continue
            expanded[name] = item_level
            in_progress[name] = None
            stack.append((name, iter(module.dependencies), item_level + 1))
            break
        else:
            stack.pop()
            if owner is not None:
                del in_progress[owner]

def compute_depth_map(modules, base_level: int = 0, registry=None) -> dict:
    """Returns a fresh {name: level} map for `modules`, see get_dependency_graph."""
    return get_dependency_graph(modules, level=base_level, result={}, registry=registry)
