import json
import unittest

from stackbar_plot import build_chart_specification, compile_echarts_option
from stackbar_plot.compile.echarts import TARGET_CARRIER_NAME, gradient_to_echarts
from stackbar_plot.config import ChartConfig
from stackbar_plot.rows import make_row
from stackbar_plot.series import GradientStop, LinearGradient


ROWS = (make_row("A", [10, 20]), make_row("B", [5, 5]), make_row("C", [0, 0]))
NAMES = ("Revenue", "Cost")


def _compile(config: ChartConfig, **kwargs) -> dict:
    return compile_echarts_option(build_chart_specification(ROWS, NAMES, config), **kwargs)


class EChartsCompileTests(unittest.TestCase):
    def test_option_is_json_serializable(self) -> None:
        option = _compile(ChartConfig(title="T", label_style="first_over_total", stacking_mode="gradient_pill"))
        json.dumps(option)

    def test_grid_and_axes(self) -> None:
        option = _compile(ChartConfig(show_x_axis=False))
        self.assertEqual(option["grid"], {"top": 16, "bottom": 48, "left": 16, "right": 16, "containLabel": True})
        self.assertFalse(option["xAxis"]["show"])
        self.assertEqual(option["yAxis"]["data"], ["A", "B", "C"])
        self.assertFalse(option["yAxis"]["inverse"])
        self.assertNotIn("title", option)

    def test_segmented_series_shape(self) -> None:
        option = _compile(ChartConfig(corner_radius=8, label_style="first_only", show_tooltip=False))
        first, last = option["series"]
        self.assertEqual(first["stack"], "total")
        self.assertEqual(first["itemStyle"]["borderRadius"], [8, 0, 0, 8])
        self.assertEqual(first["data"], [10.0, 5.0, 0.0])
        self.assertEqual(last["data"][0], {"value": 20.0, "label": {"formatter": "10"}})
        self.assertTrue(last["label"]["show"])

    def test_gradient_pill_data_and_stubs(self) -> None:
        option = _compile(ChartConfig(stacking_mode="gradient_pill"))
        pill = option["series"][0]
        self.assertEqual(pill["data"][0]["itemStyle"]["color"]["type"], "linear")
        self.assertEqual(len(pill["data"][0]["itemStyle"]["color"]["colorStops"]), 4)
        self.assertEqual(pill["data"][2]["itemStyle"]["color"], ChartConfig().colors[0])
        stubs = option["series"][1:]
        self.assertEqual([s["name"] for s in stubs], list(NAMES))
        self.assertTrue(all(s["data"] == [] and s["barWidth"] == 0 for s in stubs))
        self.assertEqual(option["legend"]["data"], list(NAMES))

    def test_full_height_target_line_uses_shorthand(self) -> None:
        option = _compile(ChartConfig(show_target_line=True, target_line_value=25.0, target_line_color="#FF0000"))
        mark = option["series"][-1]["markLine"]
        self.assertEqual(mark["data"], [{"xAxis": 25.0}])
        self.assertEqual(mark["lineStyle"]["color"], "#FF0000")
        self.assertTrue(mark["silent"])

    def test_partial_unit_axis_target_line(self) -> None:
        option = _compile(ChartConfig(show_target_line=True, target_line_value=25.0, target_line_height=50))
        self.assertIsInstance(option["yAxis"], list)
        self.assertEqual(option["yAxis"][1]["min"], 0.0)
        self.assertEqual(option["yAxis"][1]["max"], 1.0)
        carrier = option["series"][-1]
        self.assertEqual(carrier["name"], TARGET_CARRIER_NAME)
        self.assertEqual(carrier["yAxisIndex"], 1)
        self.assertEqual(carrier["markLine"]["data"], [[{"coord": [25.0, 0.25]}, {"coord": [25.0, 0.75]}]])
        self.assertTrue(all("markLine" not in s for s in option["series"][:-1]))

    def test_category_band_target_line(self) -> None:
        option = _compile(
            ChartConfig(
                show_target_line=True,
                target_line_value=5.0,
                target_line_height=50,
                target_line_anchor="category_band",
            )
        )
        mark = option["series"][-1]["markLine"]
        self.assertEqual(mark["data"], [[{"coord": [5.0, 0.5]}, {"coord": [5.0, 1.5]}]])

    def test_tooltip_formatter_hook(self) -> None:
        seen = []

        def factory(rows):
            seen.append(rows)
            return "formatter"

        option = _compile(ChartConfig(), tooltip_formatter=factory)
        self.assertEqual(option["tooltip"]["formatter"], "formatter")
        self.assertEqual(seen[0][1][0], "<b>B</b>")
        self.assertEqual(_compile(ChartConfig(show_tooltip=False))["tooltip"], {"show": False})

    def test_default_tooltip_shows_own_values_in_overlay_mode(self) -> None:
        rows = (make_row("A", [10, 20]),)
        spec = build_chart_specification(rows, ("R", "C"), ChartConfig(stacking_mode="cumulative_overlay"))
        option = compile_echarts_option(spec)
        self.assertEqual(option["tooltip"], {"trigger": "item"})
        longest, shortest = option["series"]
        self.assertEqual(longest["data"][0]["value"], 30.0)
        for series in (longest, shortest):
            text = series["data"][0]["tooltip"]["formatter"]
            self.assertEqual(text, "<b>A</b><br/>R: 10<br/>C: 20<br/>Total: 30")
            self.assertNotIn("C: 30", text)

    def test_default_tooltip_on_gradient_pill(self) -> None:
        option = _compile(ChartConfig(stacking_mode="gradient_pill"))
        pill = option["series"][0]
        self.assertEqual(pill["data"][1]["tooltip"]["formatter"], "<b>B</b><br/>Revenue: 5<br/>Cost: 5<br/>Total: 10")
        self.assertNotIn("__pill__", pill["data"][1]["tooltip"]["formatter"])
        self.assertTrue(all(s["tooltip"] == {"show": False} for s in option["series"][1:]))

    def test_tooltip_text_escapes_template_braces(self) -> None:
        spec = build_chart_specification((make_row("{a}", [1]),), ("n",), ChartConfig())
        text = compile_echarts_option(spec)["series"][0]["data"][0]["tooltip"]["formatter"]
        self.assertTrue(text.startswith("<b>(a)</b>"))

    def test_hover_emphasis_disabled(self) -> None:
        option = _compile(ChartConfig(hover_emphasis=False))
        self.assertEqual(option["series"][0]["emphasis"], {"disabled": True})
        self.assertFalse(option["series"][0]["silent"])

    def test_flat_gradient_compiles_to_color(self) -> None:
        flat = LinearGradient(stops=(GradientStop(0.0, "#111111"), GradientStop(1.0, "#111111")))
        self.assertEqual(gradient_to_echarts(flat), "#111111")

    def test_legend_hidden(self) -> None:
        self.assertEqual(_compile(ChartConfig(show_legend=False))["legend"], {"show": False})

    def test_legend_right_anchor(self) -> None:
        legend = _compile(ChartConfig(legend_position="right"))["legend"]
        self.assertEqual(legend["orient"], "vertical")
        self.assertEqual(legend["right"], 8)
        self.assertEqual(legend["top"], "middle")


if __name__ == "__main__":
    unittest.main()
