"""cpp-starter scaffolder -- generates C++ project skeletons.

Quick usage::

    from cpp_starter.resolver import Platform
    from cpp_starter.scaffolder import InitRequest, ProjectGenerator

    request = InitRequest(project_name="demo", libs="glfw,glad,glm")
    generator = ProjectGenerator(request, Platform.POSIX)
    result = await generator.generate("/tmp")
"""

from cpp_starter.scaffolder.generator import InitRequest, ProjectGenerator, ScaffoldResult
from cpp_starter.scaffolder.templates import TemplateRenderer
from cpp_starter.scaffolder.vscode_gen import EditorConfigGenerator

__all__ = [
    "EditorConfigGenerator",
    "InitRequest",
    "ProjectGenerator",
    "ScaffoldResult",
    "TemplateRenderer",
]
