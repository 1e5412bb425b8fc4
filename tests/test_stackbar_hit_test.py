import unittest

from stackbar_plot.geometry import PlotRect
from stackbar_plot.rows import make_row
from stackbar_ui import (
    CategoryClick,
    HeadlessSurface,
    HitTester,
    LiveChartState,
    PointerClick,
    parse_pointer_click,
    resolve_row_index,
)
from stackbar_ui.hit_test import pixel_to_band


RECT = PlotRect(x=50, y=20, width=200, height=100)


def _rows(*names: str):
    return tuple(make_row(name, [1.0]) for name in names)


class HitTestMathTests(unittest.TestCase):
    def test_outside_rect_never_resolves(self) -> None:
        for px, py in ((49.9, 60), (250.1, 60), (100, 19.9), (100, 120.1)):
            self.assertIsNone(resolve_row_index(px, py, RECT, 4))

    def test_row_zero_is_bottom_band(self) -> None:
        self.assertEqual(resolve_row_index(100, 119, RECT, 4), 0)
        self.assertEqual(resolve_row_index(100, 21, RECT, 4), 3)

    def test_band_centers_map_to_integers(self) -> None:
        # 4 rows over 100px: band centers at y = 107.5, 82.5, 57.5, 32.5.
        for idx, py in enumerate((107.5, 82.5, 57.5, 32.5)):
            self.assertAlmostEqual(pixel_to_band(py, RECT, 4), idx)

    def test_band_boundary_rounds_half_up(self) -> None:
        # y = 95 sits exactly between row 0 and row 1.
        self.assertAlmostEqual(pixel_to_band(95, RECT, 4), 0.5)
        self.assertEqual(resolve_row_index(100, 95, RECT, 4), 1)
        self.assertEqual(resolve_row_index(100, 95.01, RECT, 4), 0)

    def test_rect_edges(self) -> None:
        self.assertEqual(resolve_row_index(50, 120, RECT, 4), 0)
        self.assertEqual(resolve_row_index(250, 20.5, RECT, 4), 3)
        self.assertIsNone(resolve_row_index(250, 20, RECT, 4))

    def test_no_rows_never_resolves(self) -> None:
        self.assertIsNone(resolve_row_index(100, 60, RECT, 0))

    def test_parse_pointer_click(self) -> None:
        self.assertEqual(parse_pointer_click("click", {"offsetX": 1, "offsetY": 2}), PointerClick(1.0, 2.0))
        self.assertEqual(parse_pointer_click("click", {"x": "3", "y": 4}), PointerClick(3.0, 4.0))
        self.assertIsNone(parse_pointer_click("mousemove", {"x": 1, "y": 2}))
        self.assertIsNone(parse_pointer_click("click", {"x": float("nan"), "y": 2}))
        self.assertIsNone(parse_pointer_click("click", None))


class HitTesterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clicks: list[CategoryClick] = []
        self.state = LiveChartState(rows=_rows("A", "B"), on_category_click=self.clicks.append)
        self.surface = HeadlessSurface(RECT)
        self.tester = HitTester(self.state)

    def test_attach_binds_single_listener(self) -> None:
        self.assertEqual(self.tester.state, "unbound")
        self.tester.attach(self.surface)
        self.assertEqual(self.tester.state, "bound")
        self.assertEqual(self.surface.listener_count(), 1)
        self.tester.sync()
        self.assertEqual(self.surface.listener_count(), 1)

    def test_click_emits_category(self) -> None:
        self.tester.attach(self.surface)
        self.assertTrue(self.surface.dispatch("click", {"offsetX": 100, "offsetY": 110}))
        self.assertEqual(self.clicks, [CategoryClick(category="A", index=0)])

    def test_click_outside_rect_emits_nothing(self) -> None:
        self.tester.attach(self.surface)
        self.surface.dispatch("click", {"offsetX": 10, "offsetY": 110})
        self.assertEqual(self.clicks, [])

    def test_listener_reads_live_state(self) -> None:
        self.tester.attach(self.surface)
        self.state.rows = _rows("X", "Y", "Z", "W")
        replaced: list[CategoryClick] = []
        self.state.on_category_click = replaced.append
        self.surface.dispatch("click", {"offsetX": 100, "offsetY": 30})
        self.assertEqual(self.clicks, [])
        self.assertEqual(replaced, [CategoryClick(category="W", index=3)])

    def test_listener_reads_plot_rect_at_click_time(self) -> None:
        self.tester.attach(self.surface)
        self.surface.set_plot_rect(PlotRect(x=0, y=0, width=20, height=20))
        self.surface.dispatch("click", {"offsetX": 100, "offsetY": 110})
        self.assertEqual(self.clicks, [])
        self.surface.set_plot_rect(None)
        self.surface.dispatch("click", {"offsetX": 10, "offsetY": 10})
        self.assertEqual(self.clicks, [])

    def test_reattach_moves_listener(self) -> None:
        self.tester.attach(self.surface)
        replacement = HeadlessSurface(RECT)
        self.tester.attach(replacement)
        self.assertEqual(self.surface.listener_count(), 0)
        self.assertEqual(replacement.listener_count(), 1)
        self.tester.attach(replacement)
        self.assertEqual(replacement.listener_count(), 1)

    def test_interactive_toggle_unbinds_and_rebinds(self) -> None:
        self.tester.attach(self.surface)
        self.state.interactive = False
        self.tester.sync()
        self.assertEqual(self.tester.state, "unbound")
        self.assertEqual(self.surface.listener_count(), 0)
        self.state.interactive = True
        self.tester.sync()
        self.assertEqual(self.surface.listener_count(), 1)

    def test_detach_removes_listener(self) -> None:
        self.tester.attach(self.surface)
        self.tester.detach()
        self.assertEqual(self.surface.listener_count(), 0)
        self.assertIsNone(self.tester.surface)
        self.surface.dispatch("click", {"offsetX": 100, "offsetY": 110})
        self.assertEqual(self.clicks, [])


if __name__ == "__main__":
    unittest.main()
