"""Repository and data-source generation inside an existing feature."""

from __future__ import annotations

from ..naming import ComponentNames
from . import renderers
from .base import BaseGenerator, GenerationResult, GenerationTarget
from .generator import declared_dependencies
from .paths import ComponentKind, derive_path

LOCAL_STORAGE_PACKAGE = "shared_preferences"


class RepositoryGenerator(BaseGenerator):
    kind = "repository"

    async def generate(
        self, name: str, feature: str, *, with_datasource: bool = True
    ) -> GenerationResult:
        """Write the abstract repository and its implementation.

        With *with_datasource* the remote data source the implementation
        delegates to is written as well.
        """
        failed = self.require_feature(feature, name)
        if failed is not None:
            return failed

        names = ComponentNames.from_name(name)
        config, r = self.config, self.renderer
        targets = [
            GenerationTarget(
                derive_path(feature, ComponentKind.REPOSITORY, name),
                renderers.render_repository(names, config, renderer=r),
            ),
            GenerationTarget(
                derive_path(feature, ComponentKind.REPOSITORY_IMPL, name),
                renderers.render_repository_impl(names, config, renderer=r),
            ),
        ]
        if with_datasource:
            targets.append(
                GenerationTarget(
                    derive_path(feature, ComponentKind.REMOTE_DATASOURCE, name),
                    renderers.render_remote_datasource(names, config, renderer=r),
                )
            )
        self.reporter.detail(f"Generating repository: {names.pascal}")
        return await self.emit(name, targets)

    async def generate_local_datasource(self, name: str, feature: str) -> GenerationResult:
        """Write a SharedPreferences-backed local data source stub."""
        failed = self.require_feature(feature, name)
        if failed is not None:
            return failed

        names = ComponentNames.from_name(name)
        target = GenerationTarget(
            derive_path(feature, ComponentKind.LOCAL_DATASOURCE, name),
            renderers.render_local_datasource(names, self.config, renderer=self.renderer),
        )
        warnings = []
        if LOCAL_STORAGE_PACKAGE not in declared_dependencies(self.project_root):
            warnings.append(
                f"{LOCAL_STORAGE_PACKAGE} is not declared in pubspec.yaml; "
                f'run "flutter pub add {LOCAL_STORAGE_PACKAGE}".'
            )
        self.reporter.detail(f"Generating local data source: {names.pascal}")
        return await self.emit(name, [target], warnings=warnings)

