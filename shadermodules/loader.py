import os
import re
import sys
import threading
from pathlib import Path
from functools import lru_cache
from .module import ShaderModule
from .registry import ShaderModuleRegistry
from .resolver import _resolve

# Directory holding the bundled .glsl modules.
GLSL_DIR = Path(__file__).parent / 'glsl'

# Extra library directories, separated by os.pathsep. Searched after GLSL_DIR.
PATH_ENV_VAR = 'SHADERMODULES_PATH'

# Dependencies a file has without declaring them: key implies values.
IMPLICIT_DEPENDENCIES = {
    'project64': ['fp64'],
}

_PRAGMA_PATTERN = re.compile(r"^[ \t]*#pragma[ \t]+depends[ \t]*\(([^)\n]*)\)[ \t]*\r?\n?", re.MULTILINE)

# Registry of the loaded library, built on first use
_library = None
_library_lock = threading.RLock()

def parse_dependencies(source: str) -> list:
    """Returns the names listed in `#pragma depends(...)` lines, in order."""
    names = []
    for match in _PRAGMA_PATTERN.finditer(source):
        for name in match.group(1).split(','):
            name = name.strip()
            if name and name not in names:
                names.append(name)
    return names

def strip_pragmas(source: str) -> str:
    """Removes `#pragma depends(...)` lines, which are not valid GLSL."""
    return _PRAGMA_PATTERN.sub("", source)

def library_directories() -> list:
    """GLSL_DIR followed by the directories listed in SHADERMODULES_PATH."""
    dirs = [GLSL_DIR]
    extra = os.environ.get(PATH_ENV_VAR, "")
    dirs.extend(Path(p) for p in extra.split(os.pathsep) if p)
    return dirs

def load_modules(directories, verbose: bool = False) -> ShaderModuleRegistry:
    """
    Loads every .glsl file found in `directories` as a ShaderModule.

    The module name is the file stem. A file in a later directory replaces a
    file with the same stem from an earlier one. Dependencies are wired by
    name, so they may live in any of the directories.
    """
    files = {}
    for directory in directories:
        directory = Path(directory)
        if not directory.is_dir():
            if verbose:
                print(f"WARNING: Shader library directory '{directory}' not found.", file=sys.stderr)
            continue
        for glsl_file in sorted(directory.glob('*.glsl')):
            if verbose and glsl_file.stem in files:
                print(f"INFO: '{glsl_file}' overrides '{files[glsl_file.stem]}'.", file=sys.stderr)
            files[glsl_file.stem] = glsl_file

    registry = ShaderModuleRegistry()
    for stem, glsl_file in files.items():
        with open(glsl_file, 'r') as f:
            source = f.read()
        dependencies = parse_dependencies(source)
        for implicit in IMPLICIT_DEPENDENCIES.get(stem, ()):
            if implicit not in dependencies:
                dependencies.append(implicit)
        registry.register(ShaderModule(stem, dependencies, source=strip_pragmas(source), path=glsl_file))

    if verbose:
        print(f"INFO: Loaded {len(registry)} shader modules.", file=sys.stderr)
    return registry

def load_library(verbose: bool = False) -> ShaderModuleRegistry:
    """Returns the registry of library modules, loading it on first use."""
    global _library
    with _library_lock:
        if _library is None:
            _library = load_modules(library_directories(), verbose=verbose)
        return _library

def reload_library(verbose: bool = False) -> ShaderModuleRegistry:
    """Drops cached sources and definitions and loads the library again."""
    global _library
    with _library_lock:
        _library = None
        _library_definitions.cache_clear()
        return load_library(verbose=verbose)

def assemble_source(modules, registry=None) -> str:
    """
    Concatenates the sources of `modules` and all their dependencies,
    dependencies first.

    ShaderModule objects contribute their own source; the registry (the
    loaded library by default) is only used for modules given by name.
    """
    registry = registry if registry is not None else load_library()
    return "\n\n".join(module.source.strip() for module in _resolve(modules, registry))

@lru_cache(maxsize=None)
def _library_definitions(required_names: frozenset, library: ShaderModuleRegistry) -> str:
    # Keyed on the registry too: a result computed against a library that
    # was reloaded meanwhile is never served for the new one.
    # Sorted so that equal sets always produce the same source.
    return assemble_source(sorted(required_names), registry=library)

def get_glsl_definitions(required_names: frozenset) -> str:
    """
    Given a set of required module names, returns a single string
    containing all necessary GLSL code blocks in dependency order.
    """
    return _library_definitions(frozenset(required_names), load_library())
