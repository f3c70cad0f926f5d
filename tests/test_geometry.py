"""Tests for Rect and window placement."""

import pytest
from term_curses import ConstrainedRect, Placement, Rect


class TestRect:
    """Tests for the Rect dataclass."""

    def test_default_initialization(self):
        """Test that all fields default to zero."""
        rect = Rect()
        assert rect.y == 0
        assert rect.x == 0
        assert rect.height == 0
        assert rect.width == 0

    def test_cells(self):
        """Test that cells is height times width."""
        assert Rect(0, 0, 24, 80).cells == 1920

    @pytest.mark.parametrize("row, col", [(0, 0), (2, 3), (0, 3), (2, 0)])
    def test_contains_inside(self, row, col):
        """Test positions inside the rectangle."""
        assert Rect(5, 5, 3, 4).contains(row, col)

    @pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (3, 0), (0, 4)])
    def test_contains_outside(self, row, col):
        """Test positions outside the rectangle, relative to its origin."""
        assert not Rect(5, 5, 3, 4).contains(row, col)


class TestConstrainedRect:
    """Tests for ConstrainedRect placement."""

    SCREEN = Rect(0, 0, 24, 80)

    def test_exact_fit(self):
        """Test that a placement inside the bounds is kept as given."""
        placed = ConstrainedRect(Placement(2, 3, 5, 10), self.SCREEN)
        assert placed.rect() == Rect(2, 3, 5, 10)

    def test_zero_size_extends_to_edge(self):
        """Test that zero sizes extend to the bottom and right edges."""
        placed = ConstrainedRect(Placement(20, 70, 0, 0), self.SCREEN)
        assert placed.rect() == Rect(20, 70, 4, 10)

    def test_none_size_extends_to_edge(self):
        """Test that missing sizes behave like zero."""
        placed = ConstrainedRect(Placement(0, 0, None, None), self.SCREEN)
        assert placed.rect() == Rect(0, 0, 24, 80)

    def test_oversize_is_clamped(self):
        """Test that sizes larger than the room available are clamped."""
        placed = ConstrainedRect(Placement(10, 40, 100, 200), self.SCREEN)
        assert placed.height == 14
        assert placed.width == 40

    def test_origin_is_clamped(self):
        """Test that an origin beyond the screen is pulled back onto it."""
        placed = ConstrainedRect(Placement(100, 100, 0, 0), self.SCREEN)
        assert placed.y == 23
        assert placed.x == 79
        assert placed.height == 1
        assert placed.width == 1

    def test_centering_when_none(self):
        """Test that a missing origin centers the window."""
        placed = ConstrainedRect(Placement(None, None, 10, 40), self.SCREEN)
        assert placed.y == 7
        assert placed.x == 20

    def test_relative_sizes(self):
        """Test that float sizes are fractions of the available room."""
        placed = ConstrainedRect(Placement(None, None, 0.5, 0.5), self.SCREEN)
        assert placed.height == 12
        assert placed.width == 40
        assert placed.y == 6
        assert placed.x == 20

    def test_bounds_offset(self):
        """Test placement inside bounds that do not start at the origin."""
        placed = ConstrainedRect(Placement(None, None, 2, 2), Rect(10, 10, 6, 6))
        assert placed.y == 12
        assert placed.x == 12
