from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

import pandas as pd

from stackbar_plot import ChartDataError, compile_echarts_option, resolve_plot_rect
from stackbar_ui import CategoryClick, HeadlessSurface, StackedBarWidget


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="stackbar")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    spec = sub.add_parser("spec", help="Print the ECharts option for a CSV/JSON data source.")
    _add_source_arguments(spec)
    spec.add_argument("--out", type=Path, default=None, help="Write JSON here instead of stdout.")
    spec.add_argument("--indent", type=int, default=2)

    hit = sub.add_parser("hit", help="Resolve a click at (x, y) to a category.")
    _add_source_arguments(hit)
    hit.add_argument("--width", type=int, required=True)
    hit.add_argument("--height", type=int, required=True)
    hit.add_argument("--x", type=float, required=True)
    hit.add_argument("--y", type=float, required=True)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    clicks: list[CategoryClick] = []
    widget = StackedBarWidget(on_category_click=clicks.append)
    chart = widget.update(
        _load_data(args.data),
        category_column=args.category,
        value_columns=_split_values(args.values),
        column_names=_load_json(args.names) if args.names else None,
        options=_load_json(args.config) if args.config else None,
        target_column=args.target_column,
    )
    if chart is None:
        print(widget.placeholder_message, file=sys.stderr)
        return 1

    if args.command == "spec":
        payload = json.dumps(compile_echarts_option(chart), indent=args.indent)
        if args.out is not None:
            args.out.write_text(payload + "\n", encoding="utf-8")
        else:
            print(payload)
        return 0

    if args.command == "hit":
        try:
            rect = resolve_plot_rect(
                chart.geometry,
                args.width,
                args.height,
                categories=chart.category_axis.categories,
                show_x_axis=widget.config.show_x_axis,
                show_y_axis=widget.config.show_y_axis,
                font_family=chart.font_family,
                font_size=widget.config.font_size,
            )
        except ChartDataError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        surface = HeadlessSurface(rect)
        widget.mount(surface)
        try:
            surface.dispatch("click", {"offsetX": args.x, "offsetY": args.y})
        finally:
            widget.unmount()
        if not clicks:
            return 1
        print(json.dumps({"category": clicks[0].category, "index": clicks[0].index}))
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data", type=Path, required=True, help="CSV file, or JSON mapping of column -> values.")
    parser.add_argument("--category", required=True, help="Category column id.")
    parser.add_argument("--values", required=True, action="append", help="Value column id(s); repeat or comma-separate.")
    parser.add_argument("--names", type=Path, default=None, help="JSON mapping of column id -> display name.")
    parser.add_argument("--config", type=Path, default=None, help="JSON chart options.")
    parser.add_argument("--target-column", default=None)


def _split_values(raw: list[str]) -> list[str]:
    out: list[str] = []
    for item in raw:
        out.extend(part.strip() for part in item.split(",") if part.strip())
    return out


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _load_data(path: Path) -> Any:
    if path.suffix.lower() == ".json":
        return _load_json(path)
    return pd.read_csv(path)


if __name__ == "__main__":
    raise SystemExit(main())
