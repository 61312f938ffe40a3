from contextlib import asynccontextmanager

from fastapi import FastAPI

from stepup.config.loader import load_config
from stepup.pipeline.capability import PoseCapability
from stepup.routes.analyze_route import router as analyze_router
from stepup.routes.health_route import router as health_router
from stepup.routes.session_route import router as session_router


def _mediapipe_factory(cfg):
    from stepup.utils.mediapipe_pose import MediaPipePoseDetector
    return lambda: MediaPipePoseDetector(cfg.pose)


def create_app(cfg=None, detector_factory=None) -> FastAPI:
    cfg = cfg or load_config()
    factory = detector_factory or _mediapipe_factory(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Pose detector is acquired once; failures stay visible via GET /
        app.state.capability.load(factory)
        yield
        app.state.capability.close()

    app = FastAPI(
        title="Step-Up Counter",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = cfg
    app.state.capability = PoseCapability()
    app.state.session = None

    app.include_router(health_router, tags=["health"])
    app.include_router(analyze_router, tags=["analysis"])
    app.include_router(session_router, tags=["session"])
    return app


app = create_app()
