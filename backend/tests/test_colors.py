from speedmap.core import colors
from speedmap.core.colors import (
    RGB,
    color_components,
    color_for,
    gradient_for,
    gradient_legend,
    normalize_speed,
)
from speedmap.core.constants import GRADIENT_STOPS


def test_endpoints_match_first_and_last_stop():
    assert color_components(0) == RGB(*GRADIENT_STOPS[0][1])
    assert color_components(100) == RGB(*GRADIENT_STOPS[-1][1])


def test_speeds_above_max_and_below_zero_are_clamped():
    assert color_components(250) == color_components(100)
    assert color_components(-5) == color_components(0)
    assert normalize_speed(-1) == 0.0
    assert normalize_speed(1e9) == 1.0


def test_known_interpolated_values():
    # 10 Mbps -> normalized ~0.3517, just past the orange stop
    assert color_components(10) == RGB(255, 166, 0)
    # 1 Mbps -> normalized ~0.0941, between red and orange-red
    assert color_components(1) == RGB(255, 30, 0)


def test_channels_stay_in_range():
    for i in range(0, 1001):
        c = color_components(i / 10)
        assert 0 <= c.r <= 255
        assert 0 <= c.g <= 255
        assert 0 <= c.b <= 255


def test_colors_vary_continuously():
    prev = color_components(0)
    for i in range(1, 10001):
        cur = color_components(i / 100)
        assert abs(cur.r - prev.r) <= 10
        assert abs(cur.g - prev.g) <= 10
        assert abs(cur.b - prev.b) <= 10
        prev = cur


def test_color_for_formats_rgba_with_opacity():
    assert color_for(0) == "rgba(139, 0, 0, 0.6)"
    assert color_for(100, 1) == "rgba(0, 180, 0, 1)"


def test_gradient_rings_share_base_color():
    g = gradient_for(0)
    assert g.inner == "rgba(139, 0, 0, 0.9)"
    assert g.middle == "rgba(139, 0, 0, 0.5)"
    assert g.outer == "rgba(139, 0, 0, 0.15)"
    assert g.hex == "#8b0000"


def test_legend_spans_full_range():
    legend = gradient_legend(10)
    assert len(legend) == 11
    assert legend[0]["speed"] == 0
    assert legend[-1]["speed"] == 100
    assert legend[5]["label"] == "50 Mbps"
    assert legend[-1]["color"] == "rgba(0, 180, 0, 1)"


def test_zero_width_segment_uses_lower_stop(monkeypatch):
    stops = (
        (0.5, (10, 20, 30)),
        (0.5, (200, 200, 200)),
        (1.0, (0, 0, 0)),
    )
    monkeypatch.setattr(colors, "GRADIENT_STOPS", stops)
    monkeypatch.setattr(colors, "normalize_speed", lambda speed: 0.5)
    assert color_components(42) == RGB(10, 20, 30)


def test_value_on_a_stop_resolves_to_earlier_segment(monkeypatch):
    # both segments touching 0.5 are candidates; the first one wins
    stops = (
        (0.0, (0, 0, 0)),
        (0.5, (100, 0, 0)),
        (0.5, (0, 200, 0)),
        (1.0, (0, 0, 255)),
    )
    monkeypatch.setattr(colors, "GRADIENT_STOPS", stops)
    monkeypatch.setattr(colors, "normalize_speed", lambda speed: 0.5)
    assert color_components(42) == RGB(100, 0, 0)


def test_interior_stop_positions_give_the_stop_color(monkeypatch):
    for pos, rgb in GRADIENT_STOPS[1:-1]:
        monkeypatch.setattr(colors, "normalize_speed", lambda speed, pos=pos: pos)
        assert color_components(1) == RGB(*rgb)
