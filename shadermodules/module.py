from pathlib import Path


class ShaderModule:
    """
    A named block of GLSL source with an ordered list of dependencies.
    """
    def __init__(self, name: str, dependencies=None, source: str = "", path=None):
        """
        Initializes the module.

        Args:
            name (str): Unique module name, e.g. 'fp32'.
            dependencies (list, optional): Ordered modules this one depends
                                           on. Items are ShaderModule objects
                                           or names to be looked up in a
                                           ShaderModuleRegistry. Defaults to
                                           no dependencies.
            source (str, optional): The GLSL code of the module.
            path (str or Path, optional): File the module was loaded from.
        """
        if not isinstance(name, str):
            raise TypeError(f"Shader module name must be a string, got {type(name).__name__}.")
        if not name:
            raise ValueError("Shader module name cannot be empty.")
        if isinstance(dependencies, str):
            raise TypeError(
                f"Dependencies of '{name}' must be a list of modules or names, not a string."
            )
        deps = tuple(dependencies or ())
        for dep in deps:
            if not isinstance(dep, (ShaderModule, str)):
                raise TypeError(
                    f"Dependency of '{name}' must be a ShaderModule or a module name, "
                    f"got {type(dep).__name__}."
                )
        self._name = name
        self._dependencies = deps
        self.source = source
        self.path = Path(path) if path is not None else None

    @property
    def name(self) -> str:
        return self._name

    @property
    def dependencies(self) -> tuple:
        """The declared dependencies, in declaration order."""
        return self._dependencies

    @property
    def dependency_names(self) -> list:
        return [dep if isinstance(dep, str) else dep.name for dep in self._dependencies]

    def __repr__(self):
        if not self._dependencies:
            return f"ShaderModule({self._name!r})"
        return f"ShaderModule({self._name!r}, dependencies={self.dependency_names!r})"
