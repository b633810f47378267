"""flg scaffolder -- renders and writes Clean Architecture Dart sources.

Every generator takes the project ``FlgConfig``, the project root and the
per-invocation ``RunOptions``; it plans its files, then reports them (dry
run) or writes them in domain, data, presentation order.

Quick usage::

    from flg.config import FlgConfig, RunOptions
    from flg.scaffolder import FeatureGenerator

    config = FlgConfig(project_name="shop_app", state_management="bloc")
    generator = FeatureGenerator(config, "/path/to/shop_app", options=RunOptions())
    result = await generator.generate("product")
"""

from flg.scaffolder.base import (
    BaseGenerator,
    GenerationResult,
    GenerationStatus,
    GenerationTarget,
)
from flg.scaffolder.feature_gen import FeatureGenerator
from flg.scaffolder.generator import (
    ProjectGenerator,
    SetupGenerator,
    merge_pubspec_dependencies,
    read_project_name,
)
from flg.scaffolder.provider_gen import ProviderGenerator
from flg.scaffolder.renderers import WidgetType
from flg.scaffolder.repository_gen import RepositoryGenerator
from flg.scaffolder.screen_gen import ScreenGenerator
from flg.scaffolder.templates import TemplateRenderer
from flg.scaffolder.tools import ToolResult, ToolRunner
from flg.scaffolder.usecase_gen import UseCaseGenerator
from flg.scaffolder.widget_gen import WidgetGenerator

__all__ = [
    "BaseGenerator",
    "FeatureGenerator",
    "GenerationResult",
    "GenerationStatus",
    "GenerationTarget",
    "ProjectGenerator",
    "ProviderGenerator",
    "RepositoryGenerator",
    "ScreenGenerator",
    "SetupGenerator",
    "TemplateRenderer",
    "ToolResult",
    "ToolRunner",
    "UseCaseGenerator",
    "WidgetGenerator",
    "WidgetType",
    "merge_pubspec_dependencies",
    "read_project_name",
]
