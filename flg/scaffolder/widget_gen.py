"""Widget generation inside an existing feature."""

from __future__ import annotations

from collections.abc import Iterable

from ..naming import ComponentNames
from . import renderers
from .base import BaseGenerator, GenerationResult, GenerationTarget
from .paths import derive_path
from .renderers import WidgetType


class WidgetGenerator(BaseGenerator):
    kind = "widget"

    async def generate(
        self,
        widget: str,
        feature: str,
        *,
        widget_type: WidgetType | str = WidgetType.STATELESS,
        entity: str | None = None,
    ) -> GenerationResult:
        """Write one widget file.

        Card, list tile and form widgets display an entity; *entity* names it
        and defaults to *widget* itself.
        """
        failed = self.require_feature(feature, widget)
        if failed is not None:
            return failed

        widget_type = WidgetType(widget_type)
        names = ComponentNames.from_name(widget)
        content = renderers.render_widget(
            names,
            self.config,
            widget_type=widget_type,
            entity=ComponentNames.from_name(entity) if entity else None,
            renderer=self.renderer,
        )
        path = derive_path(feature, renderers.widget_kind(widget_type), widget)
        self.reporter.detail(f"Generating {widget_type.value} widget: {names.pascal}")
        return await self.emit(widget, [GenerationTarget(path, content)])

    async def generate_multiple(
        self,
        widgets: Iterable[str],
        feature: str,
        *,
        widget_type: WidgetType | str = WidgetType.STATELESS,
    ) -> list[GenerationResult]:
        results = []
        for widget in widgets:
            results.append(await self.generate(widget, feature, widget_type=widget_type))
        return results
