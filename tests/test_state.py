import pytest
import numpy as np
from framegraph import state
from framegraph.frames import GCRF

@pytest.fixture
def default_state():
    return state.FrameState()

@pytest.fixture
def custom_state():
    return state.FrameState(
        r=[1.0, 2.0, 3.0],
        v=[4.0, 5.0, 6.0],
        a=[0.1, 0.0, -9.8],
        q=np.array([0.707, 0.0, 0.707, 0.0]),
        omega=np.array([0.1, 0.2, 0.3]),
        frame=GCRF(),
    )

def test_state_init_types(default_state):
    for attr in ('r', 'v', 'a', 'q', 'omega'):
        assert isinstance(getattr(default_state, attr), np.ndarray)
        assert getattr(default_state, attr).dtype == np.float64
    assert default_state.frame is None

def test_state_defaults(default_state):
    np.testing.assert_array_equal(default_state.r, np.zeros(3))
    np.testing.assert_array_equal(default_state.q, [1.0, 0.0, 0.0, 0.0])

def test_state_lists_coerced(custom_state):
    assert isinstance(custom_state.r, np.ndarray)
    assert custom_state.v[2] == 6.0

def test_state_copy(custom_state):
    s2 = custom_state.copy()
    assert np.allclose(s2.r, custom_state.r)
    assert s2.frame == custom_state.frame
    s2.r[0] = 100.0
    assert custom_state.r[0] == 1.0

def test_state_to_vector(custom_state):
    vec = custom_state.to_vector()
    assert vec.shape == (16,)
    np.testing.assert_array_equal(vec[6:9], [0.1, 0.0, -9.8])

def test_state_repr(custom_state):
    text = repr(custom_state)
    assert "GCRF" in text
    assert "r=[1.000, 2.000, 3.000] m" in text
