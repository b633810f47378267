"""Screen generation inside an existing feature."""

from __future__ import annotations

from collections.abc import Iterable

from ..naming import ComponentNames
from . import renderers
from .base import BaseGenerator, GenerationResult, GenerationStatus, GenerationTarget
from .paths import ComponentKind, CoreFile, core_path, derive_path


class ScreenGenerator(BaseGenerator):
    """Writes ``<screen>_screen.dart`` and prints the matching route entry.

    Stateful screens bind to the provider family of the owning feature, so
    ``flg g screen product_detail --feature product`` watches the ``product``
    notifier / bloc / change notifier.
    """

    kind = "screen"

    async def generate(
        self, screen: str, feature: str, *, simple: bool = False
    ) -> GenerationResult:
        failed = self.require_feature(feature, screen)
        if failed is not None:
            return failed

        names = ComponentNames.from_name(screen)
        feature_names = ComponentNames.from_name(feature)
        if simple:
            content = renderers.render_simple_screen(names, self.config, renderer=self.renderer)
        else:
            content = renderers.render_screen(
                names, self.config, feature=feature_names, renderer=self.renderer
            )

        self.reporter.detail(f"Generating screen: {names.pascal} in feature: {feature}")
        result = await self.emit(
            screen,
            [GenerationTarget(derive_path(feature, ComponentKind.SCREEN, screen), content)],
        )

        if result.status is GenerationStatus.SUCCESS:
            snippet = renderers.render_route_snippet(
                names, self.config, feature=feature_names, renderer=self.renderer
            )
            self.reporter.info("")
            self.reporter.info(f"Add this route to {core_path(CoreFile.ROUTER)}:")
            self.reporter.code(snippet.rstrip())
        return result

    async def generate_multiple(
        self, screens: Iterable[str], feature: str, *, simple: bool = False
    ) -> list[GenerationResult]:
        results = []
        for screen in screens:
            results.append(await self.generate(screen, feature, simple=simple))
        return results
