"""Tests for game/geometry.py - rectangles and overlap."""
import random

import pytest

from ballrunner.game.geometry import Rect, overlaps


@pytest.mark.unit
class TestRect:
    """Unit tests for Rect."""

    def test_edges(self):
        r = Rect(10, 20, 30, 40)
        assert r.right == 40
        assert r.top == 60

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            Rect(0, 0, -1, 5)
        with pytest.raises(ValueError):
            Rect(0, 0, 5, -1)


@pytest.mark.unit
class TestOverlaps:
    """Unit tests for overlaps()."""

    def test_interpenetrating(self):
        assert overlaps(Rect(0, 0, 10, 10), Rect(5, 5, 10, 10))

    def test_contained(self):
        assert overlaps(Rect(0, 0, 100, 100), Rect(10, 10, 5, 5))

    def test_disjoint(self):
        assert not overlaps(Rect(0, 0, 10, 10), Rect(20, 0, 10, 10))
        assert not overlaps(Rect(0, 0, 10, 10), Rect(0, 20, 10, 10))

    def test_touching_edges_do_not_overlap(self):
        """Rectangles sharing only an edge or corner are not colliding."""
        a = Rect(0, 0, 10, 10)
        assert not overlaps(a, Rect(10, 0, 10, 10))   # right edge
        assert not overlaps(a, Rect(-10, 0, 10, 10))  # left edge
        assert not overlaps(a, Rect(0, 10, 10, 10))   # top edge
        assert not overlaps(a, Rect(0, -10, 10, 10))  # bottom edge
        assert not overlaps(a, Rect(10, 10, 5, 5))    # corner

    def test_degenerate_rectangles_never_overlap(self):
        big = Rect(0, 0, 100, 100)
        assert not overlaps(big, Rect(50, 50, 0, 10))
        assert not overlaps(big, Rect(50, 50, 10, 0))
        assert not overlaps(Rect(50, 50, 0, 0), big)

    def test_symmetric(self):
        """overlaps(a, b) == overlaps(b, a) for random pairs, including touching ones."""
        rnd = random.Random(99)
        for _ in range(5000):
            # Integer grid makes shared edges common
            a = Rect(rnd.randint(-5, 5), rnd.randint(-5, 5), rnd.randint(0, 5), rnd.randint(0, 5))
            b = Rect(rnd.randint(-5, 5), rnd.randint(-5, 5), rnd.randint(0, 5), rnd.randint(0, 5))
            assert overlaps(a, b) == overlaps(b, a)
