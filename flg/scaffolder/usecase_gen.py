"""Use-case generation inside an existing feature."""

from __future__ import annotations

from ..naming import ComponentNames
from . import renderers
from .base import BaseGenerator, GenerationResult, GenerationTarget
from .paths import ComponentKind, derive_path


class UseCaseGenerator(BaseGenerator):
    kind = "usecase"

    def _target(self, action: str, entity: str, feature: str) -> GenerationTarget:
        names = ComponentNames.from_name(entity)
        return GenerationTarget(
            derive_path(feature, ComponentKind.USECASE, entity, action=action),
            renderers.render_usecase(names, self.config, action=action, renderer=self.renderer),
        )

    async def generate(self, action: str, entity: str, feature: str) -> GenerationResult:
        """Write ``<action>_<entity>_usecase.dart``.

        Recognised actions map onto the repository interface; anything else
        is passed through as ``<action>(params)`` with a warning.
        """
        failed = self.require_feature(feature, entity)
        if failed is not None:
            return failed

        warnings = []
        if not renderers.is_known_action(action):
            warnings.append(
                f'Unknown use case action "{action}"; '
                f'the repository call is generated as "{action}(params)".'
            )
        self.reporter.detail(
            f"Generating use case: {ComponentNames.from_name(action).pascal}"
            f"{ComponentNames.from_name(entity).pascal}"
        )
        return await self.emit(
            entity, [self._target(action, entity, feature)], warnings=warnings
        )

    async def generate_common(
        self, feature: str, *, entity: str | None = None
    ) -> GenerationResult:
        """Write get, getAll, create, update and delete use cases.

        The feature precondition is checked once for the whole batch.
        *entity* defaults to the feature name.
        """
        entity = entity or feature
        failed = self.require_feature(feature, entity)
        if failed is not None:
            return failed

        self.reporter.detail(f"Generating common use cases for: {feature}")
        targets = [
            self._target(action, entity, feature)
            for action in renderers.COMMON_USECASE_ACTIONS
        ]
        return await self.emit(entity, targets)
