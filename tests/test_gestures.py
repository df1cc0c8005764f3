import threading
from types import SimpleNamespace

import pytest

np = pytest.importorskip("numpy")
pytest.importorskip("cv2")
pytest.importorskip("mediapipe")

from tiny_thinkers.gestures import (  # noqa: E402
    INDEX_FINGER_TIP,
    WRIST,
    GestureController,
    pointing_direction,
)
from tiny_thinkers.maze import Direction  # noqa: E402


def hand(dx, dy):
    points = [SimpleNamespace(x=0.5, y=0.5) for _ in range(21)]
    points[WRIST] = SimpleNamespace(x=0.5, y=0.5)
    points[INDEX_FINGER_TIP] = SimpleNamespace(x=0.5 + dx, y=0.5 + dy)
    return points


@pytest.mark.parametrize("dx, dy, expected", [
    (0.3, 0.05, Direction.RIGHT),
    (-0.3, 0.0, Direction.LEFT),
    (0.02, -0.3, Direction.UP),
    (0.0, 0.3, Direction.DOWN),
    (0.05, 0.05, Direction.NONE),
])
def test_pointing_direction(dx, dy, expected):
    assert pointing_direction(hand(dx, dy)) is expected


class FakeCamera:
    def __init__(self, opened=True):
        self.opened = opened
        self.released = False
        self.reads = 0

    def isOpened(self):
        return self.opened and not self.released

    def read(self):
        self.reads += 1
        return True, np.zeros((48, 64, 3), dtype=np.uint8)

    def release(self):
        self.released = True


class FakeLandmarker:
    """Reports a fixed hand for every frame it is given"""

    def __init__(self, controller=None, landmarks=None):
        self.controller = controller
        self.landmarks = landmarks
        self.frames = 0
        self.closed = 0
        self.used_after_close = False
        self.first_frame = threading.Event()

    def detect_async(self, image, timestamp_ms):
        if self.closed:
            self.used_after_close = True
        self.frames += 1
        hands = [self.landmarks] if self.landmarks is not None else []
        self.controller.on_result(SimpleNamespace(hand_landmarks=hands), image, timestamp_ms)
        self.first_frame.set()

    def close(self):
        self.closed += 1


def make_controller(camera, landmarker, hold_frames=3):
    controller = GestureController(
        camera_factory=lambda: camera,
        landmarker_factory=lambda: landmarker,
        hold_frames=hold_frames,
    )
    landmarker.controller = controller
    return controller


def frame():
    return np.zeros((48, 64, 3), dtype=np.uint8)


def test_direction_reported_once_held():
    landmarker = FakeLandmarker(landmarks=hand(0.3, 0.0))
    controller = make_controller(FakeCamera(), landmarker)
    controller._landmarker = landmarker

    controller.process_frame(frame())
    controller.process_frame(frame())
    assert controller.get_direction() is Direction.NONE
    controller.process_frame(frame())
    assert controller.get_direction() is Direction.RIGHT
    assert controller.get_frame().shape == (48, 64, 3)


def test_changing_direction_restarts_the_hold():
    landmarker = FakeLandmarker(landmarks=hand(0.3, 0.0))
    controller = make_controller(FakeCamera(), landmarker, hold_frames=2)
    controller._landmarker = landmarker

    controller.process_frame(frame())
    controller.process_frame(frame())
    assert controller.get_direction() is Direction.RIGHT

    landmarker.landmarks = hand(0.0, -0.3)
    controller.process_frame(frame())
    assert controller.get_direction() is Direction.NONE
    controller.process_frame(frame())
    assert controller.get_direction() is Direction.UP

    landmarker.landmarks = None
    controller.process_frame(frame())
    assert controller.get_direction() is Direction.NONE


def test_start_fails_without_camera():
    camera = FakeCamera(opened=False)
    landmarker = FakeLandmarker()
    controller = make_controller(camera, landmarker)

    assert not controller.start()
    assert not controller.running
    assert camera.released
    assert landmarker.closed == 1


def test_start_fails_when_model_cannot_load():
    def broken():
        raise OSError("download failed")

    controller = GestureController(camera_factory=FakeCamera, landmarker_factory=broken)
    assert not controller.start()
    assert not controller.running


def test_stop_waits_for_worker_before_closing():
    camera = FakeCamera()
    landmarker = FakeLandmarker(landmarks=hand(-0.3, 0.0))
    controller = make_controller(camera, landmarker)

    assert controller.start()
    assert controller.running
    assert landmarker.first_frame.wait(2.0)

    controller.stop()
    assert not controller.running
    assert camera.released
    assert landmarker.closed == 1
    assert not landmarker.used_after_close
    assert controller.get_direction() is Direction.NONE
    assert controller.get_frame() is None

    # process_frame after stop is a no-op
    controller.process_frame(frame())
    assert not landmarker.used_after_close


def test_stop_without_start_is_safe():
    controller = make_controller(FakeCamera(), FakeLandmarker())
    controller.stop()
    controller.stop()
    assert not controller.running
