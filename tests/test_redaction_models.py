"""
Unit tests for redaction_models module.
"""

import dataclasses

import pytest

from OR_Libs.ImageEditingLib.redaction_models import Action, Rectangle


class TestRectangle:
    """Tests for Rectangle normalization and helpers."""

    def test_from_points_forward_drag(self):
        assert Rectangle.from_points((10, 10), (60, 60)) == Rectangle(10, 10, 60, 60)

    def test_from_points_reversed_drag(self):
        assert Rectangle.from_points((60, 60), (10, 10)) == Rectangle(10, 10, 60, 60)

    @pytest.mark.parametrize(
        "start, end",
        [((60, 10), (10, 60)), ((10, 60), (60, 10))],
    )
    def test_from_points_swaps_axes_independently(self, start, end):
        rect = Rectangle.from_points(start, end)

        assert rect.as_tuple() == (10, 10, 60, 60)

    def test_out_of_order_corners_rejected(self):
        with pytest.raises(ValueError):
            Rectangle(60, 10, 10, 60)

    def test_size(self):
        rect = Rectangle(10, 20, 40, 25)

        assert rect.width == 30
        assert rect.height == 5
        assert not rect.is_empty

    def test_same_point_is_empty(self):
        rect = Rectangle.from_points((30, 30), (30, 30))

        assert rect.is_empty
        assert rect.width == 0

    def test_zero_height_is_empty(self):
        assert Rectangle(0, 5, 10, 5).is_empty

    def test_clipped(self):
        assert Rectangle(-5, -5, 600, 20).clipped(500, 500) == Rectangle(0, 0, 500, 20)

    def test_clipped_outside_collapses(self):
        rect = Rectangle(600, 600, 700, 700).clipped(500, 500)

        assert rect.is_empty

    def test_to_box_rounds(self):
        assert Rectangle(10.4, 10.6, 20.2, 30.0).to_box() == (10, 11, 20, 30)

    def test_is_immutable(self):
        rect = Rectangle(0, 0, 1, 1)

        with pytest.raises(dataclasses.FrozenInstanceError):
            rect.x0 = 5


class TestAction:
    def test_is_immutable(self):
        action = Action("black-out", Rectangle(0, 0, 1, 1))

        with pytest.raises(dataclasses.FrozenInstanceError):
            action.kind = "blur"

    def test_equality(self):
        assert Action("blur", Rectangle(0, 0, 1, 1)) == Action("blur", Rectangle(0, 0, 1, 1))
