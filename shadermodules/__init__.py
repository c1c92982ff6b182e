from .module import ShaderModule
from .registry import (
    ShaderModuleRegistry, default_registry, register_shader_modules, get_shader_module
)
from .resolver import resolve_modules, get_dependency_graph, compute_depth_map
from .errors import (
    ShaderModuleError, ShaderModuleCycleError, UnknownShaderModuleError, DuplicateShaderModuleError
)
from .loader import load_library, reload_library, get_glsl_definitions, assemble_source
from .diagnostics import group_by_level, dependency_matrix, format_tree
from .watcher import LibraryWatcher
