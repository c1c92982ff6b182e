import os
import shutil
import subprocess
import tempfile
import pytest
from shadermodules import ShaderModule
from shadermodules import loader

GLSL_VALIDATOR = shutil.which("glslangValidator")
SKIP_GLSL = os.environ.get("SKIP_GLSL", "") == "1"


@pytest.fixture
def graph():
    """The fp32/fp64/project/project64 example graph."""
    fp32 = ShaderModule('fp32')
    fp64 = ShaderModule('fp64')
    project = ShaderModule('project', [fp32])
    project64 = ShaderModule('project64', [project, fp64])
    return {'fp32': fp32, 'fp64': fp64, 'project': project, 'project64': project64}

@pytest.fixture
def fresh_library(monkeypatch):
    """Clears the loaded library before and after a test."""
    monkeypatch.delenv(loader.PATH_ENV_VAR, raising=False)
    loader.reload_library()
    yield
    monkeypatch.undo()
    loader.reload_library()

@pytest.fixture
def glsl_dir(tmp_path):
    """A directory of small .glsl modules: noise <- transforms <- primitives."""
    files = {
        'noise.glsl': "float hash(float n) { return fract(sin(n) * 43758.5453); }\n",
        'transforms.glsl': "#pragma depends(noise)\nvec3 jitter(vec3 p) { return p + hash(p.x); }\n",
        'primitives.glsl': (
            "#pragma depends(transforms, noise)\n"
            "float sdSphere(vec3 p, float r) { return length(jitter(p)) - r; }\n"
        ),
    }
    for name, content in files.items():
        (tmp_path / name).write_text(content)
    return tmp_path

@pytest.fixture(scope="session")
def validate_glsl():
    if not GLSL_VALIDATOR or SKIP_GLSL:
        pytest.skip("Requires glslangValidator.")

    def _validator(library_code: str):
        shader = f"""#version 330 core
out vec4 f_color;
{library_code}
void main() {{
    f_color = vec4(1.0);
}}
"""
        with tempfile.NamedTemporaryFile(suffix=".frag", mode="w", delete=False) as f:
            f.write(shader)
            path = f.name
        try:
            result = subprocess.run([GLSL_VALIDATOR, "-S", "frag", path], capture_output=True, text=True)
        finally:
            os.remove(path)
        if result.returncode != 0:
            raise AssertionError(f"GLSL Validation Failed:\n{result.stdout}{result.stderr}\nSOURCE:\n{library_code}")
    return _validator
