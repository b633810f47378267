"""State-management file generation inside an existing feature."""

from __future__ import annotations

from ..naming import ComponentNames
from . import renderers
from .base import BaseGenerator, GenerationResult, GenerationTarget
from .paths import derive_path


class ProviderGenerator(BaseGenerator):
    """Writes the provider family of the configured state management.

    Riverpod produces ``<name>_notifier.dart`` and ``<name>_state.dart``,
    BLoC ``<name>_bloc.dart``, ``<name>_event.dart`` and ``<name>_state.dart``,
    Provider a single ``<name>_provider.dart``.
    """

    kind = "provider"

    async def generate(self, provider: str, feature: str) -> GenerationResult:
        failed = self.require_feature(feature, provider)
        if failed is not None:
            return failed

        names = ComponentNames.from_name(provider)
        targets = [
            GenerationTarget(derive_path(feature, kind, provider), content)
            for kind, content in renderers.render_provider_files(
                names, self.config, renderer=self.renderer
            )
        ]
        self.reporter.detail(
            f"Generating {self.config.state_management.value} provider: {names.pascal}"
        )
        return await self.emit(provider, targets)
