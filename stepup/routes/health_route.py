from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/")
def health(request: Request):
    capability = request.app.state.capability
    return {
        "status": "ok",
        "service": "Step-Up Counter",
        "pose": capability.status.status,
        "message": capability.message,
    }
