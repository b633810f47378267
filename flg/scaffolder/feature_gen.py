"""Full feature scaffolding.

Generates, under ``lib/features/<feature>/``:
- the nine layer directories (domain, data, presentation)
- ``domain``: entity and abstract repository
- ``data``: model, repository implementation and remote data source
- ``presentation``: screen, the provider files of the configured state
  management and a card widget for the entity
"""

from __future__ import annotations

from ..naming import ComponentNames
from . import renderers
from .base import BaseGenerator, GenerationResult, GenerationTarget
from .paths import ComponentKind, derive_path, feature_directories
from .renderers import WidgetType


class FeatureGenerator(BaseGenerator):
    """Writes a complete Clean Architecture feature."""

    kind = "feature"

    def plan(self, feature: str) -> list[GenerationTarget]:
        """Ordered targets for *feature*: domain, then data, then presentation."""
        names = ComponentNames.from_name(feature)
        config, r = self.config, self.renderer

        def target(kind: ComponentKind, content: str) -> GenerationTarget:
            return GenerationTarget(derive_path(feature, kind, feature), content)

        targets = [
            target(ComponentKind.ENTITY, renderers.render_entity(names, config, renderer=r)),
            target(ComponentKind.REPOSITORY, renderers.render_repository(names, config, renderer=r)),
            target(ComponentKind.MODEL, renderers.render_model(names, config, renderer=r)),
            target(
                ComponentKind.REPOSITORY_IMPL,
                renderers.render_repository_impl(names, config, renderer=r),
            ),
            target(
                ComponentKind.REMOTE_DATASOURCE,
                renderers.render_remote_datasource(names, config, renderer=r),
            ),
            target(ComponentKind.SCREEN, renderers.render_screen(names, config, renderer=r)),
        ]
        targets.extend(
            target(kind, content)
            for kind, content in renderers.render_provider_files(names, config, renderer=r)
        )
        targets.append(
            target(
                ComponentKind.CARD,
                renderers.render_widget(names, config, widget_type=WidgetType.CARD, renderer=r),
            )
        )
        return targets

    async def generate(self, feature: str) -> GenerationResult:
        """Scaffold *feature*; existing files are overwritten."""
        self.reporter.detail(f"Generating feature: {feature}")
        return await self.emit(
            feature,
            self.plan(feature),
            directories=feature_directories(feature),
        )
