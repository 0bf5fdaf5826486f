import itertools

import pytest

from pixeldino.core.physics import (
    Position,
    Vector,
    Velocity,
    apply_velocity_to_position,
    is_collided,
)


def test_add_and_sub_mutate_and_chain():
    v = Velocity(1, 2)
    result = v.add(Velocity(3, 4)).sub(Velocity(1, 1))
    assert result is v
    assert v.get() == (3, 5)


def test_clone_is_independent_and_keeps_type():
    p = Position(200, 20)
    c = p.clone()
    c.add(Velocity(5, 5))
    assert isinstance(c, Position)
    assert p.get() == (200, 20)
    assert c.get() == (205, 25)


def test_apply_velocity_to_position_does_not_mutate():
    p = Position(10, 10)
    moved = apply_velocity_to_position(p, Velocity(-11, 0))
    assert moved.get() == (-1, 10)
    assert p.get() == (10, 10)
    assert isinstance(moved, Position)


def test_default_vector_is_zero():
    assert Vector().get() == (0.0, 0.0)


def test_overlapping_rectangles_collide():
    assert is_collided(0, 0, 10, 10, 5, 5, 10, 10)


def test_touching_edges_do_not_collide():
    assert not is_collided(0, 0, 10, 10, 10, 0, 10, 10)
    assert not is_collided(0, 0, 10, 10, 0, 10, 10, 10)


def test_separated_rectangles_do_not_collide():
    assert not is_collided(0, 0, 5, 5, 100, 100, 5, 5)


def test_contained_rectangle_collides():
    assert is_collided(0, 0, 100, 100, 10, 10, 2, 2)


RECTS = [
    (0, 0, 10, 10),
    (5, 5, 3, 3),
    (9.5, 0, 4, 4),
    (10, 10, 1, 1),
    (-3, 4, 8, 2),
    (200, 20, 16, 18),
    (201, 25, 15, 8),
]


@pytest.mark.parametrize("a,b", list(itertools.product(RECTS, RECTS)))
def test_collision_is_symmetric(a, b):
    assert is_collided(*a, *b) == is_collided(*b, *a)
