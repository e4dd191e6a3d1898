"""
Unit tests for the rendering module.

Tests potential-map normalisation, field-line seeding and arrow geometry,
and the fixed drawing order of the scene composer.
"""

import math

import pytest
import numpy as np

from chargefield import RenderSettings, SimulationParameters, TracerSettings, Viewport
from chargefield.physics import Charge, InvalidChargeError
from chargefield.rendering import (
    Arrowhead,
    Clear,
    FieldLineRenderer,
    FilledCircle,
    LineSegment,
    PixelBuffer,
    PotentialMapRenderer,
    RecordingSurface,
    SceneComposer,
    arrowhead_points,
    render_field_lines,
    render_potential_map,
    seed_points
)


class TestPotentialMap:
    """Test suite for the potential heat map."""

    def test_intensity_bounds_and_maximum(self):
        """Test intensities lie in [0, 255] and the strongest pixel maps to 255."""
        charges = [Charge(30.0, 20.0, True), Charge(45.0, 25.0, False)]
        pmap = render_potential_map(charges, 60, 40)

        assert pmap.intensity.shape == (40, 60)
        assert pmap.intensity.dtype == np.uint8
        assert pmap.intensity.min() >= 0
        assert pmap.intensity.max() == 255

        y, x = np.unravel_index(np.argmax(pmap.magnitude), pmap.magnitude.shape)
        assert pmap.intensity[y, x] == 255
        assert pmap.max_magnitude == pytest.approx(pmap.magnitude[y, x])

    def test_linear_normalisation(self):
        """Test each intensity is floor(255 * |V| / max)."""
        pmap = render_potential_map([Charge(10.0, 10.0, False)], 30, 20)
        expected = np.minimum(255, np.floor(pmap.magnitude / pmap.max_magnitude * 255))
        np.testing.assert_array_equal(pmap.intensity, expected.astype(np.uint8))

    def test_colour_mapping(self):
        """Test the red/blue diverging scale with constant alpha."""
        pmap = render_potential_map([Charge(10.0, 10.0, True)], 30, 20)
        np.testing.assert_array_equal(pmap.rgba[..., 0], pmap.intensity)
        assert np.all(pmap.rgba[..., 1] == 0)
        np.testing.assert_array_equal(pmap.rgba[..., 2], 255 - pmap.intensity)
        assert np.all(pmap.rgba[..., 3] == 64)
        assert pmap.rgba.shape == (20, 30, 4)

    def test_no_charges_renders_minimum(self):
        """Test an all-zero potential renders minimum intensity without dividing by zero."""
        pmap = render_potential_map([], 30, 20)
        assert pmap.max_magnitude == 0.0
        assert np.all(pmap.intensity == 0)
        assert np.all(pmap.rgba[..., 2] == 255)

    def test_all_pixels_excluded(self):
        """Test a viewport entirely inside a charge body is all zero."""
        pmap = render_potential_map([Charge(2.0, 2.0, True)], 5, 5)
        assert np.all(pmap.intensity == 0)

    def test_custom_alpha(self):
        renderer = PotentialMapRenderer(settings=RenderSettings(potential_alpha=128))
        pmap = renderer.render([Charge(10.0, 10.0, True)], 20, 20)
        assert np.all(pmap.rgba[..., 3] == 128)

    def test_to_command(self):
        pmap = render_potential_map([Charge(10.0, 10.0, True)], 20, 10)
        command = pmap.to_command()
        assert isinstance(command, PixelBuffer)
        assert command.rgba is pmap.rgba
        assert (pmap.width, pmap.height) == (20, 10)


class TestFieldLineGeometry:
    """Test suite for seeding and arrowhead geometry."""

    def test_seed_points(self):
        """Test seeds are evenly spaced on the offset circle."""
        seeds = seed_points(Charge(100.0, 50.0, True), 8, 11.0)
        assert len(seeds) == 8
        assert seeds[0] == pytest.approx((111.0, 50.0))
        assert seeds[2] == pytest.approx((100.0, 61.0))
        for x, y in seeds:
            assert math.hypot(x - 100.0, y - 50.0) == pytest.approx(11.0)

    def test_arrowhead_points(self):
        """Test barbs sit 30 degrees either side of the reversed direction."""
        left, right = arrowhead_points((0.0, 0.0), (10.0, 0.0), 10.0, math.pi / 6)
        assert left == pytest.approx((10.0 - 10.0 * math.cos(math.pi / 6), 5.0))
        assert right == pytest.approx((10.0 - 10.0 * math.cos(math.pi / 6), -5.0))

    def test_arrowhead_points_follow_direction(self):
        left, right = arrowhead_points((0.0, 0.0), (0.0, 4.0), 2.0, math.pi / 6)
        # Barbs trail behind the tip
        assert left[1] < 4.0 and right[1] < 4.0
        assert left[0] == pytest.approx(-right[0])


class TestFieldLineRenderer:
    """Test suite for field-line draw commands."""

    @pytest.fixture
    def renderer(self):
        return FieldLineRenderer(Viewport(600, 400))

    def test_lines_per_charge(self, renderer):
        """Test each charge seeds the configured number of lines."""
        charges = [Charge(300.0, 200.0, True), Charge(100.0, 100.0, False)]
        lines = renderer.trace_all(charges)
        assert len(lines) == 16
        assert all(line.is_positive for line in lines[:8])
        assert not any(line.is_positive for line in lines[8:])
        assert lines[0].points[0] == pytest.approx((311.0, 200.0))

    def test_segments_and_arrow_stride(self, renderer):
        """Test one segment per point pair and an arrowhead every 10th segment."""
        charges = [Charge(300.0, 200.0, True)]
        commands = renderer.render(charges)
        lines = renderer.trace_all(charges)

        segments = [c for c in commands if isinstance(c, LineSegment)]
        arrows = [c for c in commands if isinstance(c, Arrowhead)]
        assert len(segments) == sum(len(line) - 1 for line in lines)
        assert len(arrows) == sum(math.ceil((len(line) - 1) / 10) for line in lines)

    def test_arrowhead_at_segment_end(self, renderer):
        """Test the first command pair is segment 0 with its arrowhead at the end point."""
        commands = renderer.render([Charge(300.0, 200.0, True)])
        first, second = commands[0], commands[1]
        assert isinstance(first, LineSegment)
        assert isinstance(second, Arrowhead)
        assert second.tip == first.end
        assert first.start == pytest.approx((311.0, 200.0))

    def test_arrow_orientation_follows_line(self, renderer):
        """Test arrows on a negative charge's lines point away from it too."""
        commands = renderer.render([Charge(300.0, 200.0, False)])
        arrow = next(c for c in commands if isinstance(c, Arrowhead))
        # First line leaves along +x; barbs trail towards the charge
        assert arrow.left[0] < arrow.tip[0]
        assert arrow.right[0] < arrow.tip[0]

    def test_custom_settings(self):
        settings = RenderSettings(lines_per_charge=3, arrow_stride=1)
        commands = render_field_lines([Charge(300.0, 200.0, True)], settings=settings)
        segments = [c for c in commands if isinstance(c, LineSegment)]
        arrows = [c for c in commands if isinstance(c, Arrowhead)]
        assert len(arrows) == len(segments)

    def test_no_charges(self, renderer):
        assert renderer.render([]) == []


class TestSceneComposer:
    """Test suite for frame composition."""

    @pytest.fixture
    def composer(self, small_params):
        return SceneComposer(small_params)

    def test_drawing_order(self, composer):
        """Test clear, potential map, field lines, then charge markers."""
        charges = [Charge(40.0, 40.0, True), Charge(80.0, 40.0, False)]
        commands = composer.render(charges)

        assert isinstance(commands[0], Clear)
        assert (commands[0].width, commands[0].height) == (120, 80)
        assert isinstance(commands[1], PixelBuffer)
        assert commands[1].rgba.shape == (80, 120, 4)

        markers = commands[-2:]
        assert all(isinstance(c, FilledCircle) for c in markers)
        assert all(isinstance(c, (LineSegment, Arrowhead)) for c in commands[2:-2])
        assert len(commands) > 4

    def test_charge_markers(self, composer):
        """Test markers use the charge radius and polarity colours."""
        charges = [Charge(40.0, 40.0, True), Charge(80.0, 40.0, False)]
        positive, negative = composer.render(charges)[-2:]
        assert positive == FilledCircle((40.0, 40.0), 10.0, 'red', 'black')
        assert negative == FilledCircle((80.0, 40.0), 10.0, 'blue', 'black')

    def test_empty_scene(self, composer):
        commands = composer.render([])
        assert [type(c) for c in commands] == [Clear, PixelBuffer]

    def test_malformed_charge_fails_before_drawing(self, composer):
        """Test invalid records raise and nothing reaches the surface."""
        surface = RecordingSurface()
        with pytest.raises(InvalidChargeError):
            composer.draw([Charge(10.0, 10.0, True), {'x': 5, 'y': 5}], surface)
        assert surface.commands == []

    def test_draw_executes_on_surface(self, composer):
        surface = RecordingSurface()
        commands = composer.draw([Charge(60.0, 40.0, True)], surface)
        assert surface.commands == commands

    def test_each_render_is_fresh(self, composer):
        """Test redrawing onto the same surface starts from a clear frame."""
        surface = RecordingSurface()
        composer.draw([Charge(60.0, 40.0, True)], surface)
        composer.draw([], surface)
        assert [type(c) for c in surface.commands] == [Clear, PixelBuffer]
        assert len(surface.of_type(FilledCircle)) == 0

    def test_render_is_deterministic(self, composer):
        charges = [Charge(30.0, 30.0, True), Charge(90.0, 50.0, False)]
        first = composer.render(charges)
        second = composer.render(charges)
        assert first[2:] == second[2:]
        np.testing.assert_array_equal(first[1].rgba, second[1].rgba)

    def test_uses_configured_tracer(self):
        params = SimulationParameters(viewport=Viewport(600, 400), tracer=TracerSettings(max_steps=3))
        commands = SceneComposer(params).render([Charge(300.0, 200.0, True)])
        segments = [c for c in commands if isinstance(c, LineSegment)]
        assert len(segments) == 8 * 2
