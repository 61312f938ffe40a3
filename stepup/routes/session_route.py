from fastapi import APIRouter, HTTPException, Request

router = APIRouter()


def _session(request: Request):
    scheduler = getattr(request.app.state, "session", None)
    if scheduler is None:
        raise HTTPException(status_code=404, detail="No session yet")
    return scheduler


@router.get("/session")
def session(request: Request):
    return _session(request).snapshot().model_dump()


@router.post("/session/reset")
def reset(request: Request):
    scheduler = _session(request)
    scheduler.reset()
    return scheduler.snapshot().model_dump()
