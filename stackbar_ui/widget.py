from __future__ import annotations

import dataclasses
from typing import Any, Callable, Mapping, Sequence

from stackbar_plot.api import prepare_inputs
from stackbar_plot.config import ChartConfig, DEFAULT_CONFIG
from stackbar_plot.fonts import FontProvider
from stackbar_plot.rows import target_value_from_column
from stackbar_plot.spec import ChartSpecification, build_chart_specification

from .hit_test import CategoryClick, HitTester, LiveChartState, RenderSurface


PLACEHOLDER_MESSAGE = "Configure the data source and columns in the editor panel."


class StackedBarWidget:
    """Embeddable chart: rebuilds its ChartSpecification wholesale on every update
    and keeps exactly one click listener alive while mounted and interactive."""

    def __init__(
        self,
        *,
        font_provider: FontProvider | None = None,
        on_category_click: Callable[[CategoryClick], None] | None = None,
    ) -> None:
        self._font_provider = font_provider
        self._state = LiveChartState(on_category_click=on_category_click)
        self._hit_tester = HitTester(self._state)
        self._config: ChartConfig = DEFAULT_CONFIG
        self._names: tuple[str, ...] = ()
        self._spec: ChartSpecification | None = None

    @property
    def specification(self) -> ChartSpecification | None:
        return self._spec

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def series_names(self) -> tuple[str, ...]:
        return self._names

    @property
    def hit_tester(self) -> HitTester:
        return self._hit_tester

    @property
    def placeholder_message(self) -> str | None:
        return PLACEHOLDER_MESSAGE if self._spec is None else None

    def update(
        self,
        data: Any,
        *,
        category_column: str | None,
        value_columns: Sequence[str] | str | None,
        column_names: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | ChartConfig | None = None,
        target_column: str | None = None,
    ) -> ChartSpecification | None:
        inputs = prepare_inputs(
            data,
            category_column=category_column,
            value_columns=value_columns,
            column_names=column_names,
            options=options,
        )
        config = inputs.config
        if target_column is not None:
            config = dataclasses.replace(config, target_line_value=target_value_from_column(data, target_column))
        spec = build_chart_specification(inputs.rows, inputs.names, config, font_provider=self._font_provider)

        self._config = config
        self._names = inputs.names
        self._spec = spec
        self._state.rows = inputs.rows
        self._state.interactive = config.interactive
        self._hit_tester.sync()
        return spec

    def set_click_handler(self, handler: Callable[[CategoryClick], None] | None) -> None:
        self._state.on_category_click = handler

    def mount(self, surface: RenderSurface) -> None:
        self._hit_tester.attach(surface)

    def reinitialize(self, surface: RenderSurface) -> None:
        # Renderer recreated its surface: the old listener goes before the new one binds.
        self._hit_tester.attach(surface)

    def unmount(self) -> None:
        self._hit_tester.detach()
