import pytest
from webcam.landmarks import HandLandmarks


def build_hand(overrides=None, default=(0.5, 0.5, 0.0)):
    """21-point hand with every landmark at default except the overrides."""
    points = [default] * 21
    for index, point in (overrides or {}).items():
        points[index] = point
    return HandLandmarks(landmarks=points, handedness="Right", confidence=0.9)


@pytest.fixture
def make_hand():
    return build_hand


@pytest.fixture
def palm_hand():
    # Fingertips nearer the camera than the wrist
    return build_hand({
        HandLandmarks.WRIST: (0.5, 0.8, -0.1),
        HandLandmarks.INDEX_TIP: (0.45, 0.4, -0.2),
        HandLandmarks.MIDDLE_TIP: (0.5, 0.35, -0.2),
    })


@pytest.fixture
def back_hand():
    return build_hand({
        HandLandmarks.WRIST: (0.5, 0.8, -0.1),
        HandLandmarks.INDEX_TIP: (0.45, 0.4, 0.0),
        HandLandmarks.MIDDLE_TIP: (0.5, 0.35, 0.0),
    })
