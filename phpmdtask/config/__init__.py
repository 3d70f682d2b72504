from .fileset import FileList, FileSet
from .loader import load_project
from .types import (
    BuildError,
    ConfigurationError,
    Formatter,
    ProjectConfig,
    RuleSet,
    TaskConfig,
)

__all__ = [
    "load_project",
    "ProjectConfig",
    "TaskConfig",
    "Formatter",
    "RuleSet",
    "FileSet",
    "FileList",
    "BuildError",
    "ConfigurationError",
]
