import numpy as np
import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis is a test optional dependency")
from hypothesis import given, settings, strategies as st  # noqa: E402

from hyper4d.config import KernelConfig  # noqa: E402
from hyper4d.integrator import FrameState, Intent, advance  # noqa: E402
from hyper4d.projection import ProjectionMode, ProjectionParams, project  # noqa: E402
from hyper4d.rotation import Orientation, compose, elementary_rotation, identity, apply  # noqa: E402

finite = st.floats(-10, 10, allow_nan=False, allow_infinity=False)
angles = st.floats(-1.0, 1.0, allow_nan=False, allow_infinity=False)
planes = st.tuples(st.integers(0, 3), st.integers(0, 3)).filter(lambda p: p[0] != p[1])
vec4 = st.tuples(finite, finite, finite, finite).map(lambda t: np.array(t, dtype=float))


@given(plane=planes, theta=angles)
def test_rotation_inverse(plane, theta):
    m = compose(elementary_rotation(*plane, theta), elementary_rotation(*plane, -theta))
    np.testing.assert_allclose(m, np.eye(4), atol=1e-9)


@settings(max_examples=50)
@given(steps=st.lists(st.tuples(planes, angles), min_size=1, max_size=200), v=vec4,
       every=st.integers(1, 16))
def test_norm_preserved(steps, v, every):
    o = Orientation.identity(reorthonormalize_every=every)
    for plane, theta in steps:
        o = o.fold(elementary_rotation(*plane, theta))
    assert np.linalg.norm(o.apply(v)) == pytest.approx(np.linalg.norm(v), abs=1e-9)


@given(v=vec4)
def test_identity_apply(v):
    np.testing.assert_array_equal(apply(identity(), v), v)


@given(intents=st.sets(st.sampled_from(list(Intent)), min_size=1),
       dt=st.floats(0.001, 0.2))
def test_speed_never_exceeds_limit(intents, dt):
    config = KernelConfig()
    new = advance(FrameState.initial(config), dt, intents, config=config)
    assert np.linalg.norm(new.observer) <= config.move_speed * dt + 1e-12


@given(point=vec4, observer=vec4)
def test_perspective_always_finite(point, observer):
    out = project(point, observer, ProjectionMode.PERSPECTIVE, ProjectionParams())
    assert np.all(np.isfinite(out))
