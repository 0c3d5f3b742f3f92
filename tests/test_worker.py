import pytest

pytest.importorskip("PyQt5")
pytest.importorskip("mediapipe")

from webcam import worker as worker_module
from webcam.channel import LandmarkChannel
from webcam.config import Config
from webcam.worker import WebcamWorker


class FakeTracker:
    """Scripted tracker: each entry is (landmarks, read_ok)."""

    def __init__(self, script, on_exhausted):
        self._script = list(script)
        self._on_exhausted = on_exhausted
        self.read_ok = False
        self.stopped = False

    def start(self):
        return True

    def get_landmarks(self):
        landmarks, self.read_ok = self._script.pop(0)
        if not self._script:
            self._on_exhausted()
        return landmarks

    def get_frame_with_landmarks(self, landmarks=None, black_background=False):
        return None

    def stop(self):
        self.stopped = True


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(worker_module.time, "sleep", calls.append)
    return calls


def run_worker(monkeypatch, script):
    config = Config()
    config.ui.show_preview = False
    channel = LandmarkChannel(maxsize=100)
    worker = WebcamWorker(config, channel)
    tracker = FakeTracker(script, worker.stop_process)
    monkeypatch.setattr(worker_module, "HandTracker", lambda cfg: tracker)
    worker.start_process()
    return channel, tracker


def test_failed_reads_are_not_published(monkeypatch, sleeps):
    channel, tracker = run_worker(monkeypatch, [(None, False)] * 5)
    assert channel.drain() == []
    assert sleeps == [WebcamWorker.READ_RETRY_DELAY] * 5
    assert tracker.stopped


def test_empty_frames_publish_no_hand(monkeypatch, sleeps):
    hand = object()
    channel, _ = run_worker(monkeypatch, [(None, True), (hand, True), (None, False)])
    assert channel.drain() == [None, hand]
    assert sleeps == [WebcamWorker.READ_RETRY_DELAY]
