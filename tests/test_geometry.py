import hypothesis.strategies as st
import pytest
from hypothesis import given, settings

from tank_battle.core.geometry import Direction, Rect, overlaps

rects = st.builds(
    Rect,
    x=st.integers(min_value=-50, max_value=850),
    y=st.integers(min_value=-50, max_value=650),
    width=st.integers(min_value=1, max_value=80),
    height=st.integers(min_value=1, max_value=80),
)


@pytest.mark.property
@settings(max_examples=25, deadline=None)
@given(a=rects, b=rects)
def test_overlap_is_symmetric(a: Rect, b: Rect) -> None:
    assert overlaps(a, b) == overlaps(b, a)


@pytest.mark.property
@settings(max_examples=25, deadline=None)
@given(rect=rects)
def test_rect_overlaps_itself(rect: Rect) -> None:
    assert rect.overlaps(rect)


def test_shared_edge_is_not_an_overlap():
    left = Rect(0, 0, 40, 40)

    assert not overlaps(left, Rect(40, 0, 40, 40))
    assert not overlaps(left, Rect(0, 40, 40, 40))
    assert overlaps(left, Rect(39, 39, 40, 40))


def test_within_accepts_rect_touching_the_border():
    assert Rect(768, 568, 32, 32).within(800, 600)
    assert not Rect(769, 0, 32, 32).within(800, 600)
    assert not Rect(-1, 0, 32, 32).within(800, 600)


def test_direction_deltas_use_screen_coordinates():
    assert Direction.UP.delta == (0, -1)
    assert Direction.DOWN.delta == (0, 1)
    assert Direction.LEFT.delta == (-1, 0)
    assert Direction.RIGHT.delta == (1, 0)
    assert Direction.UP.is_vertical
    assert not Direction.RIGHT.is_vertical


def test_moved_returns_new_rect():
    rect = Rect(10, 10, 5, 5)

    moved = rect.moved(2, -3)

    assert moved == Rect(12, 7, 5, 5)
    assert rect == Rect(10, 10, 5, 5)
    assert moved.center == (14.5, 9.5)
