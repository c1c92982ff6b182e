from .module import ShaderModule
from .errors import UnknownShaderModuleError, DuplicateShaderModuleError


class ShaderModuleRegistry:
    """Maps module names to ShaderModule objects, in registration order."""
    def __init__(self, modules=None):
        self._modules = {}
        if modules:
            self.register_all(modules)

    def register(self, module: ShaderModule, ignore_duplicates: bool = False) -> ShaderModule:
        """
        Registers a module under its name and returns the registered module.

        Registering the same object twice is a no-op. A different module under
        an existing name raises DuplicateShaderModuleError, unless
        `ignore_duplicates` is set, in which case the first one is kept.
        """
        if not isinstance(module, ShaderModule):
            raise TypeError(f"Expected a ShaderModule, got {type(module).__name__}.")
        existing = self._modules.get(module.name)
        if existing is not None and existing is not module:
            if ignore_duplicates:
                return existing
            raise DuplicateShaderModuleError(module.name)
        self._modules[module.name] = module
        return module

    def register_all(self, modules, ignore_duplicates: bool = False):
        for module in modules:
            self.register(module, ignore_duplicates=ignore_duplicates)

    def get(self, module_or_name) -> ShaderModule:
        """Returns a ShaderModule unchanged, or looks a name up."""
        if isinstance(module_or_name, ShaderModule):
            return module_or_name
        try:
            return self._modules[module_or_name]
        except KeyError:
            raise UnknownShaderModuleError(module_or_name) from None

    def names(self) -> list:
        return list(self._modules)

    def clear(self):
        self._modules.clear()

    def __contains__(self, name):
        if isinstance(name, ShaderModule):
            name = name.name
        return name in self._modules

    def __len__(self):
        return len(self._modules)

    def __iter__(self):
        return iter(list(self._modules.values()))

    def __repr__(self):
        return f"ShaderModuleRegistry({self.names()!r})"


# Process-wide registry used by the module-level helpers below.
default_registry = ShaderModuleRegistry()

def register_shader_modules(modules, ignore_duplicates: bool = False):
    """Registers modules with the default registry."""
    default_registry.register_all(modules, ignore_duplicates=ignore_duplicates)

def get_shader_module(module_or_name) -> ShaderModule:
    """Looks a module up in the default registry."""
    return default_registry.get(module_or_name)
