class ShaderModuleError(Exception):
    """Base class for errors raised while resolving shader modules."""


class ShaderModuleCycleError(ShaderModuleError, ValueError):
    """
    Raised when a module is reached again while its own dependencies are
    still being visited.

    The `cycle` attribute holds the module names along the loop, starting and
    ending with the offending module (e.g. ['a', 'b', 'a']).
    """
    def __init__(self, cycle):
        self.cycle = list(cycle)
        self.module_name = self.cycle[-1]
        if len(self.cycle) == 2:
            msg = f"Shader module '{self.module_name}' depends on itself."
        else:
            msg = (f"Dependency cycle detected at shader module '{self.module_name}': "
                   f"{' -> '.join(self.cycle)}")
        super().__init__(msg)


class UnknownShaderModuleError(ShaderModuleError, KeyError):
    """Raised when a module referenced by name is not registered."""
    def __init__(self, name):
        self.module_name = name
        super().__init__(name)

    def __str__(self):
        return f"Unknown shader module '{self.module_name}'."


class DuplicateShaderModuleError(ShaderModuleError, ValueError):
    """Raised when a different module is registered under an existing name."""
    def __init__(self, name):
        self.module_name = name
        super().__init__(f"Shader module '{name}' is already registered.")
