import pytest

from quadkit.geometry import Color, Rect, RectOffset, Vec2


def test_vec_add_sub_round_trip():
    a = Vec2(1.5, -2.0)
    b = Vec2(3.0, 4.0)
    assert (a + b) - b == a
    assert -(-a) == a


def test_vec_scale():
    a = Vec2(1.0, 2.0)
    assert a * 2 == a + a
    assert 2 * a == a * 2


def test_vec_distance():
    assert Vec2(0.0, 0.0).distance(Vec2(3.0, 4.0)) == pytest.approx(5.0)
    assert Vec2(1.0, 1.0).distance(Vec2(1.0, 1.0)) == 0.0


def test_rect_point_and_size():
    r = Rect(1.0, 2.0, 3.0, 4.0)
    assert r.point() == Vec2(1.0, 2.0)
    assert r.size() == Vec2(3.0, 4.0)


@pytest.mark.parametrize(
    "point, inside",
    [
        (Vec2(0.0, 0.0), True),
        (Vec2(9.9, 9.9), True),
        (Vec2(10.0, 5.0), False),
        (Vec2(5.0, 10.0), False),
        (Vec2(-0.1, 5.0), False),
    ],
)
def test_rect_contains(point, inside):
    assert Rect(0.0, 0.0, 10.0, 10.0).contains(point) is inside


def test_rect_overlaps_touching_edges():
    r = Rect(0.0, 0.0, 10.0, 10.0)
    assert r.overlaps(Rect(10.0, 0.0, 5.0, 5.0))
    assert not r.overlaps(Rect(11.0, 0.0, 5.0, 5.0))
    assert not r.overlaps(Rect(0.0, -6.0, 5.0, 5.0))


def test_rect_intersect():
    a = Rect(0.0, 0.0, 10.0, 10.0)
    b = Rect(5.0, 5.0, 10.0, 10.0)
    assert a.intersect(b) == Rect(5.0, 5.0, 5.0, 5.0)
    assert a.intersect(b) == b.intersect(a)


def test_rect_intersect_disjoint():
    assert Rect(0.0, 0.0, 1.0, 1.0).intersect(Rect(5.0, 5.0, 1.0, 1.0)) is None


def test_rect_combine_with_holds_both():
    a = Rect(0.0, 0.0, 10.0, 10.0)
    b = Rect(5.0, -3.0, 10.0, 4.0)
    c = a.combine_with(b)
    assert c == b.combine_with(a)
    assert c.left == min(a.left, b.left)
    assert c.top == min(a.top, b.top)
    assert c.right == max(a.right, b.right)
    assert c.bottom == max(a.bottom, b.bottom)


def test_rect_offset():
    r = Rect(1.0, 2.0, 3.0, 4.0)
    moved = r.offset(Vec2(10.0, 20.0))
    assert moved.point() == r.point() + Vec2(10.0, 20.0)
    assert moved.size() == r.size()


def test_rect_offset_default():
    assert RectOffset() == RectOffset(0.0, 0.0, 0.0, 0.0)


def test_color_from_rgba():
    assert Color.from_rgba(255, 255, 255, 255).as_tuple() == (1.0, 1.0, 1.0, 1.0)
    assert Color.from_rgba(0, 0, 0, 255).as_tuple() == (0.0, 0.0, 0.0, 1.0)
    assert Color.from_rgba(0, 0, 0, 128).a == pytest.approx(128 / 255)