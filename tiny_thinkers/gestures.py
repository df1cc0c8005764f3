"""
Pointing-gesture input for the rescue maze

Point a finger at the webcam to steer the dog. Needs the ``gestures`` extra
(opencv-python and mediapipe).
"""

import logging
import os
import threading
import urllib.request

import cv2
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from .maze import Direction

logger = logging.getLogger(__name__)

MODEL_URL = ("https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
             "hand_landmarker/float16/1/hand_landmarker.task")
POINTING_THRESHOLD = 0.1
HOLD_FRAMES = 4          # a direction must be held this long before the dog moves
FRAME_INTERVAL = 0.033
FRAME_STEP_MS = 33

# Hand landmark indices
WRIST = 0
INDEX_FINGER_TIP = 8


def pointing_direction(landmarks, threshold=POINTING_THRESHOLD):
    """Direction the index finger points relative to the wrist"""
    wrist = landmarks[WRIST]
    index_tip = landmarks[INDEX_FINGER_TIP]

    dx = index_tip.x - wrist.x
    dy = index_tip.y - wrist.y

    if abs(dx) > abs(dy):
        if dx > threshold:
            return Direction.RIGHT
        elif dx < -threshold:
            return Direction.LEFT
    else:
        # Image y grows downwards
        if dy < -threshold:
            return Direction.UP
        elif dy > threshold:
            return Direction.DOWN

    return Direction.NONE


def open_camera(index=0):
    camera = cv2.VideoCapture(index)
    camera.set(cv2.CAP_PROP_FRAME_WIDTH, 640)
    camera.set(cv2.CAP_PROP_FRAME_HEIGHT, 480)
    return camera


class GestureController:
    """Turns webcam frames into maze directions on a background thread.

    Small hands wobble, so a direction is only reported once it has been seen
    for ``hold_frames`` frames in a row.
    """

    def __init__(self, model_path=None, camera_factory=open_camera,
                 landmarker_factory=None, hold_frames=HOLD_FRAMES):
        self.model_path = model_path or os.path.join(os.path.dirname(__file__), "hand_landmarker.task")
        self.camera_factory = camera_factory
        self.landmarker_factory = landmarker_factory or self._create_landmarker
        self.hold_frames = hold_frames

        self._camera = None
        self._landmarker = None
        self._thread = None
        self._stopping = threading.Event()
        self._lock = threading.Lock()
        self._latest_result = None
        self._timestamp_ms = 0
        self._candidate = Direction.NONE
        self._streak = 0
        self._direction = Direction.NONE
        self._frame = None

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def _create_landmarker(self):
        if not os.path.exists(self.model_path):
            logger.info("Downloading hand detection model to %s", self.model_path)
            urllib.request.urlretrieve(MODEL_URL, self.model_path)
        options = vision.HandLandmarkerOptions(
            base_options=python.BaseOptions(model_asset_path=self.model_path),
            running_mode=vision.RunningMode.LIVE_STREAM,
            num_hands=1,
            min_hand_detection_confidence=0.5,
            min_hand_presence_confidence=0.5,
            min_tracking_confidence=0.5,
            result_callback=self.on_result,
        )
        return vision.HandLandmarker.create_from_options(options)

    def on_result(self, result, output_image=None, timestamp_ms=0):
        """Landmarker callback, runs on mediapipe's thread"""
        with self._lock:
            self._latest_result = result

    def start(self):
        """Open the camera; returns False when gestures are unavailable"""
        if self.running:
            return True
        try:
            self._landmarker = self.landmarker_factory()
        except (OSError, RuntimeError, ValueError) as exc:
            logger.warning("Gesture input disabled: %s", exc)
            return False

        camera = self.camera_factory()
        if not camera.isOpened():
            logger.warning("Gesture input disabled: no camera found")
            camera.release()
            self._close_landmarker()
            return False

        self._camera = camera
        self._stopping.clear()
        self._thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._thread.start()
        logger.info("Gesture input started")
        return True

    def stop(self):
        """Stop the worker before the camera and model are closed"""
        self._stopping.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            if self._thread.is_alive():
                logger.warning("Gesture thread did not stop in time")
            self._thread = None
        if self._camera is not None:
            self._camera.release()
            self._camera = None
        self._close_landmarker()
        with self._lock:
            self._latest_result = None
            self._candidate = Direction.NONE
            self._streak = 0
            self._direction = Direction.NONE
            self._frame = None

    def _close_landmarker(self):
        landmarker, self._landmarker = self._landmarker, None
        if landmarker is not None:
            landmarker.close()

    def _capture_loop(self):
        camera = self._camera
        while not self._stopping.is_set():
            ok, frame = camera.read()
            if ok and not self._stopping.is_set():
                self.process_frame(frame)
            self._stopping.wait(FRAME_INTERVAL)

    def process_frame(self, frame):
        """Feed one BGR camera frame and update the held direction"""
        landmarker = self._landmarker
        if landmarker is None:
            return

        # Mirror so pointing left moves left
        frame = cv2.flip(frame, 1)
        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        self._timestamp_ms += FRAME_STEP_MS
        landmarker.detect_async(mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame),
                                self._timestamp_ms)

        with self._lock:
            result = self._latest_result
            seen = Direction.NONE
            if result is not None and result.hand_landmarks:
                seen = pointing_direction(result.hand_landmarks[0])

            if seen == self._candidate:
                self._streak += 1
            else:
                self._candidate, self._streak = seen, 1
            self._direction = self._candidate if self._streak >= self.hold_frames else Direction.NONE
            self._frame = frame

    def get_direction(self):
        with self._lock:
            return self._direction

    def get_frame(self):
        with self._lock:
            return self._frame.copy() if self._frame is not None else None
