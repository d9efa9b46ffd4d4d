"""Tests for project initialisation (cpp_starter.scaffolder.generator).

Covers:
- Skeleton directories and starter main.cpp
- Per-library folders and generated implementation files
- Conflict resolution before the config is saved
- "." project name
- Re-initialisation semantics
- InitRequest validation
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from cpp_starter.config import CONFIG_FILENAME, load_project_config
from cpp_starter.resolver.models import Platform
from cpp_starter.scaffolder.generator import InitRequest, ProjectGenerator

pytestmark = pytest.mark.unit


def _generator(platform: Platform = Platform.POSIX, **fields) -> ProjectGenerator:
    request = InitRequest(**{"project_name": "demo", **fields})
    return ProjectGenerator(request, platform)


class TestInitRequest:
    def test_defaults(self):
        request = InitRequest(project_name="demo")
        assert request.cpp_standard == "c++17"
        assert request.compiler == "g++"
        assert request.libs == ""

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            InitRequest(project_name="")


class TestGenerate:
    async def test_skeleton(self, tmp_path: Path):
        result = await _generator().generate(tmp_path)
        root = tmp_path / "demo"
        assert result.project_root == root
        for name in ("src", "include", "lib", ".vscode"):
            assert (root / name).is_dir()
        assert (root / "src" / "main.cpp").is_file()
        assert (root / ".vscode" / "tasks.json").is_file()
        assert (root / ".vscode" / "c_cpp_properties.json").is_file()
        assert result.config_path == root / CONFIG_FILENAME

    async def test_config_saved_with_resolved_libraries(self, tmp_path: Path):
        result = await _generator(libs="GLFW, glew, glad,glfw").generate(tmp_path)
        assert result.config.libs == ["glfw", "glad"]
        assert len(result.selection.notices) == 1
        assert load_project_config(result.project_root) == result.config

    async def test_output_name_per_platform(self, tmp_path: Path):
        posix = await _generator().generate(tmp_path / "p")
        windows = await _generator(Platform.WINDOWS).generate(tmp_path / "w")
        assert posix.config.output_name == "demo"
        assert windows.config.output_name == "demo.exe"

    async def test_library_folders_created(self, tmp_path: Path):
        await _generator(libs="glad,glm,stb,tinyobj,glew").generate(tmp_path)
        root = tmp_path / "demo" / "include"
        for rel in ("glad", "KHR", "glm", "stb", "tinyobjloader"):
            assert (root / rel).is_dir()
        # glew lost to glad, so its folder is not created
        assert not (root / "GL").exists()

    async def test_generated_sources_rendered(self, tmp_path: Path):
        await _generator(libs="tinyobj,stb").generate(tmp_path)
        src = tmp_path / "demo" / "src"
        tinyobj = (src / "tinyobjloader_impl.cpp").read_text(encoding="utf-8")
        assert "#define TINYOBJLOADER_IMPLEMENTATION" in tinyobj
        assert (src / "stb_image_impl.cpp").is_file()
        # glad.c is supplied by the user, never generated
        assert not (src / "glad.c").exists()

    async def test_hints_for_manual_steps(self, tmp_path: Path):
        result = await _generator(libs="glad").generate(tmp_path)
        assert any("glad.h" in hint for hint in result.hints)

    async def test_unknown_library_kept(self, tmp_path: Path):
        result = await _generator(libs="vulkan,glm").generate(tmp_path)
        assert result.config.libs == ["vulkan", "glm"]

    async def test_dot_uses_base_dir(self, tmp_path: Path):
        base = tmp_path / "mygame"
        base.mkdir()
        result = await _generator(project_name=".").generate(base)
        assert result.project_root == base
        assert result.config.output_name == "mygame"
        assert (base / "src" / "main.cpp").is_file()

    async def test_name_sanitised_for_directory_and_output(self, tmp_path: Path):
        result = await _generator(project_name="  My Game (v2) ").generate(tmp_path)
        assert result.project_root == tmp_path / "My_Game_v2"
        assert result.config.output_name == "My_Game_v2"

    def test_unusable_name_rejected(self):
        with pytest.raises(ValueError, match="no usable characters"):
            _generator(project_name="***")

    async def test_reinit_keeps_main_and_overwrites_config(self, tmp_path: Path):
        await _generator(libs="glfw").generate(tmp_path)
        main_cpp = tmp_path / "demo" / "src" / "main.cpp"
        main_cpp.write_text("// user code\n", encoding="utf-8")

        result = await _generator(libs="glm", compiler="clang++").generate(tmp_path)

        assert main_cpp.read_text(encoding="utf-8") == "// user code\n"
        config = load_project_config(tmp_path / "demo")
        assert config == result.config
        assert config.libs == ["glm"]
        assert config.compiler == "clang++"
        assert main_cpp not in result.written
