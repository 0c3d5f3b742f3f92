import math
import numpy as np
import pytest
from particles.templates import (
    DEFAULT_TEMPLATES, FIREWORK, SATURN, SPHERE, RING_RADIUS,
    IndexedTemplate, RandomTemplate, TemplateCatalog,
    firework_point, get_template, saturn_point, sphere_point,
)

TOTAL = 6000

def test_catalog_order():
    assert TemplateCatalog().names == ["sphere", "heart", "flower", "saturn", "firework"]

def test_catalog_cycles_back_to_start():
    catalog = TemplateCatalog()
    first = catalog.current
    visited = [catalog.advance() for _ in range(len(catalog))]
    assert visited[-1] is first
    assert catalog.advance() is visited[0]
    assert catalog.index == 1

def test_jump_to_and_unknown_name():
    catalog = TemplateCatalog()
    assert catalog.jump_to("SATURN") is SATURN
    assert catalog.index == 3
    with pytest.raises(KeyError):
        get_template("dodecahedron")

def test_sphere_points_on_unit_sphere():
    pts = SPHERE.points(TOTAL)
    assert pts.shape == (TOTAL, 3)
    assert pts.dtype == np.float32
    np.testing.assert_allclose(np.linalg.norm(pts, axis=1), 1.0, atol=1e-5)

def test_scalar_and_vectorized_agree():
    pts = SPHERE.points(TOTAL)
    for i in (0, 1, 17, 2999, 5999):
        np.testing.assert_allclose(pts[i], SPHERE.point(i, TOTAL), atol=1e-6)

@pytest.mark.parametrize("i", [0, 2, 100, 3000, 5998])
def test_saturn_even_index_on_ring(i):
    x, y, z = SATURN.point(i, TOTAL)
    assert y == 0.0
    assert math.hypot(x, z) == pytest.approx(RING_RADIUS)
    angle = 2 * math.pi * i / TOTAL
    assert x == pytest.approx(math.cos(angle) * RING_RADIUS)

@pytest.mark.parametrize("i", [1, 3, 101, 2999, 5999])
def test_saturn_odd_index_on_sphere(i):
    point = SATURN.point(i, TOTAL)
    assert point == pytest.approx(SPHERE.point(i, TOTAL))
    assert math.sqrt(sum(c * c for c in point)) == pytest.approx(1.0)
    # Raw generator accepts a scalar index too
    np.testing.assert_allclose(saturn_point(i, TOTAL), sphere_point(i, TOTAL))

def test_saturn_vectorized_parity():
    pts = SATURN.points(TOTAL)
    assert np.all(pts[0::2, 1] == 0.0)
    np.testing.assert_allclose(np.hypot(pts[0::2, 0], pts[0::2, 2]), RING_RADIUS, atol=1e-5)
    np.testing.assert_allclose(np.linalg.norm(pts[1::2], axis=1), 1.0, atol=1e-5)

def test_flat_templates_have_zero_z():
    for name in ("heart", "flower"):
        pts = get_template(name).points(TOTAL)
        assert np.all(pts[:, 2] == 0.0)

def test_flower_radius_bounded():
    pts = get_template("flower").points(TOTAL)
    assert np.all(np.hypot(pts[:, 0], pts[:, 1]) <= 0.7 + 1e-6)

def test_firework_points_inside_cube():
    rng = np.random.default_rng(3)
    for _ in range(1000):
        assert all(abs(c) <= 1.5 for c in FIREWORK.point(rng=rng))
    pts = FIREWORK.points(1000, rng)
    assert np.all(np.abs(pts) <= 1.5)

def test_firework_is_random():
    a = firework_point(np.random.default_rng(1))
    b = firework_point(np.random.default_rng(2))
    assert a != b

def test_template_kinds():
    assert isinstance(SPHERE, IndexedTemplate) and not SPHERE.stochastic
    assert isinstance(FIREWORK, RandomTemplate) and FIREWORK.stochastic
    assert sum(t.stochastic for t in DEFAULT_TEMPLATES) == 1
