import numpy as np
import pytest
from particles.scene import ParticleScene, lerp_color, parse_color
from webcam.channel import LandmarkChannel
from webcam.config import Config
from webcam.landmarks import HandLandmarks


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class RecordingRenderer:
    def __init__(self):
        self.frames = []

    def render(self, frame):
        self.frames.append(frame)


@pytest.fixture
def config():
    config = Config()
    config.morph.count = 300
    return config


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def channel():
    return LandmarkChannel()


@pytest.fixture
def scene(config, channel, clock):
    return ParticleScene.from_config(config, channel=channel, clock=clock,
                                     rng=np.random.default_rng(0))


def test_parse_color():
    assert parse_color("#66ccff") == pytest.approx((0x66 / 255, 0xcc / 255, 1.0))
    with pytest.raises(ValueError):
        parse_color("#abc")
    with pytest.raises(ValueError):
        parse_color("#zzzzzz")


def test_lerp_color_endpoints():
    a, b = (0.0, 0.5, 1.0), (1.0, 0.0, 0.5)
    assert lerp_color(a, b, 0.0) == pytest.approx(a)
    assert lerp_color(a, b, 1.0) == pytest.approx(b)
    assert lerp_color(a, b, 0.5) == pytest.approx((0.5, 0.25, 0.75))


def test_first_frame_is_settled(scene):
    frame = scene.tick(now=0.1)
    assert frame.template_name == "sphere"
    assert not frame.switched
    assert frame.positions_dirty  # initial upload
    assert not scene.morph.is_morphing
    assert scene.tick(now=0.2).positions_dirty is False


def test_idle_frame_parameters(scene):
    frame = scene.tick(now=0.1)
    assert frame.scale == pytest.approx(1.0 + (0.6 - 1.0) * 0.08)
    assert frame.color == pytest.approx(parse_color("#66ccff"))
    assert frame.point_size == pytest.approx(0.015)
    assert frame.rotation_y == pytest.approx(0.002)


def test_scale_eases_toward_openness_target(scene, channel, make_hand):
    channel.publish(make_hand({
        HandLandmarks.WRIST: (0.5, 0.9, 0.0),
        HandLandmarks.INDEX_TIP: (0.5, 0.4, 0.0),
        HandLandmarks.MIDDLE_TIP: (0.5, 0.3, 0.0),
    }))
    scene.tick(now=0.1)
    assert scene.state.openness == 1.0
    for i in range(200):
        scene.tick(now=0.1 + i / 60)
    assert scene.scale == pytest.approx(2.2, abs=1e-3)


def test_pinch_and_depth_drive_color_and_size(scene, channel, make_hand):
    channel.publish(make_hand({
        HandLandmarks.WRIST: (0.5, 0.9, -0.5),
        HandLandmarks.THUMB_TIP: (0.4, 0.4, 0.0),
        HandLandmarks.INDEX_TIP: (0.4, 0.4, 0.0),
    }))
    frame = scene.tick(now=0.1)
    assert frame.color == pytest.approx(parse_color("#ff66cc"))
    assert frame.point_size == pytest.approx(0.055)


def test_rotation_accumulates(scene):
    for i in range(10):
        frame = scene.tick(now=i * 0.016)
    assert frame.rotation_y == pytest.approx(0.02)


def test_orientation_flip_advances_template(scene, channel, palm_hand, back_hand):
    channel.publish(back_hand)
    assert not scene.tick(now=0.5).switched  # inside startup dwell, dropped

    channel.publish(back_hand)
    assert not scene.tick(now=2.0).switched  # no change since last frame

    channel.publish(palm_hand)
    frame = scene.tick(now=2.1)
    assert frame.switched
    assert frame.template_name == "heart"
    assert scene.morph.is_morphing
    assert frame.positions_dirty

    channel.publish(back_hand)
    assert not scene.tick(now=2.5).switched  # within dwell of last switch

    channel.publish(palm_hand)
    assert scene.tick(now=3.4).switched
    assert scene.catalog.current.name == "flower"


def test_channel_results_applied_in_order(scene, channel, make_hand):
    touching = make_hand({
        HandLandmarks.THUMB_TIP: (0.4, 0.4, 0.0),
        HandLandmarks.INDEX_TIP: (0.4, 0.4, 0.0),
    })
    channel.publish(touching)
    channel.publish(None)
    scene.tick(now=0.1)
    assert scene.state.pinch == pytest.approx(0.9)
    assert scene.extractor.frame_count == 2


def test_morph_runs_to_completion_through_ticks(scene, channel, palm_hand, back_hand):
    channel.publish(back_hand)
    scene.tick(now=1.5)
    assert scene.morph.is_morphing
    for i in range(30):
        scene.tick(now=1.6 + i / 60)
    assert not scene.morph.is_morphing


def test_renderer_receives_each_frame(scene):
    renderer = RecordingRenderer()
    for i in range(3):
        scene.tick(now=i * 0.016, renderer=renderer)
    assert len(renderer.frames) == 3
    assert renderer.frames[0].positions is scene.morph.current


def test_initial_template_from_config(config, clock):
    config.morph.initial_template = "saturn"
    scene = ParticleScene.from_config(config, clock=clock)
    assert scene.catalog.current.name == "saturn"
    pts = scene.morph.current.reshape(-1, 3)
    assert np.all(pts[0::2, 1] == 0.0)


def test_unknown_initial_template(config):
    config.morph.initial_template = "cube"
    with pytest.raises(KeyError):
        ParticleScene.from_config(config)
