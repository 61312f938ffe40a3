from fastapi import APIRouter, File, HTTPException, Request, UploadFile
import os
import uuid

from stepup.pipeline.session_stage import run as session_stage
from stepup.pipeline.video_source import VideoSourceError
from stepup.utils.logger import error, info

router = APIRouter()


def require_ready(request: Request):
    capability = request.app.state.capability
    if not capability.is_ready:
        raise HTTPException(status_code=503, detail=capability.message)
    return capability


@router.post("/analyze")
async def analyze(request: Request, file: UploadFile = File(...)):
    capability = require_ready(request)

    suffix = os.path.splitext(file.filename or "")[1].lower() or ".mp4"
    tmp_path = f"/tmp/stepup_{uuid.uuid4()}{suffix}"

    with open(tmp_path, "wb") as out:
        out.write(await file.read())
    info(f"[INFO] Analyze: received {file.filename}")

    try:
        report, scheduler, _ = session_stage(
            tmp_path, capability, request.app.state.config
        )
    except VideoSourceError as e:
        # temp path stays in the server log only
        error(f"[ERROR] Analyze: {e}")
        raise HTTPException(
            status_code=400, detail=f"Unable to open video: {file.filename}"
        )
    finally:
        os.remove(tmp_path)

    request.app.state.session = scheduler
    return report.model_dump(exclude_none=True)
