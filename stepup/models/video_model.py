from pydantic import BaseModel
from typing import Optional


class VideoModel(BaseModel):
    file_path: Optional[str] = None
    frame_count: int = 0
    fps: float = 0.0
    duration_sec: float = 0.0
    width: int = 0
    height: int = 0
