import cv2
import mediapipe as mp

from stepup.models.landmark_model import Landmark

mp_pose = mp.solutions.pose


class MediaPipePoseDetector:
    """
    Single-person MediaPipe Pose wrapper.

    detect() returns the 33 landmarks of the first body, or None when
    nothing was detected. Frames are BGR as decoded by OpenCV.
    """

    def __init__(self, pose_cfg=None):
        kwargs = pose_cfg.model_dump() if pose_cfg is not None else {}
        self.pose = mp_pose.Pose(static_image_mode=False, **kwargs)

    def detect(self, frame, timestamp_ms=None):
        # timestamp is implied by call order in the solutions API
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        result = self.pose.process(rgb)

        if not result.pose_landmarks:
            return None

        return [
            Landmark(
                x=float(p.x),
                y=float(p.y),
                z=float(p.z),
                vis=float(p.visibility),
            )
            for p in result.pose_landmarks.landmark
        ]

    def close(self):
        self.pose.close()
