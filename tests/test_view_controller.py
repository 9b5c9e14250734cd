import pytest

from waypoint.controllers import ViewController


@pytest.fixture
def view(qapp):
    return ViewController(zoom=1.0, zoom_step=0.25, min_zoom=0.5, max_zoom=2.0)


class TestZoom:

    def test_zoom_in_and_out(self, view):
        assert view.zoom_in() is True
        assert view.zoom_level == 1.25
        assert view.zoom_out() is True
        assert view.zoom_level == 1.0

    def test_clamped_to_range(self, view):
        view.set_zoom(10)
        assert view.zoom_level == 2.0
        assert view.zoom_in() is False

        view.set_zoom(0.1)
        assert view.zoom_level == 0.5
        assert view.zoom_out() is False

    def test_signal_only_on_change(self, view):
        emitted = []
        view.zoom_changed.connect(emitted.append)

        view.set_zoom(1.5)
        view.set_zoom(1.5)

        assert emitted == [1.5]

    def test_zoom_percent(self, view):
        view.set_zoom(1.25)
        assert view.zoom_percent() == 125


class TestScrollTarget:

    def test_centers_region(self, view):
        view.set_zoom(2.0)
        # Region top at 1000 + 100*2 = 1200, height 40 -> 80px, viewport 600
        assert view.scroll_target(1000, 100, 600, height=40) == 1200 - (600 - 80) // 2

    def test_never_negative(self, view):
        assert view.scroll_target(0, 10, 800) == 0
