from fastapi import FastAPI, Depends
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
import logging

from . import config
from .routers import detect, page
from .models.schemas import HealthResponse
from .clients.inference_client import InferenceClient

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='[%(name)s] %(levelname)s: %(message)s'
)

app = FastAPI(
    title="Object Detection Backend",
    description="Drop an image, detect objects with a hosted model and overlay the boxes",
    version="1.0.0"
)

# Add Prometheus metrics
Instrumentator().instrument(app).expose(app)

# Include routers
app.include_router(page.router)
app.include_router(detect.router)


@app.get("/api", response_class=JSONResponse)
async def root():
    return {
        "message": "Object Detection Backend API",
        "endpoints": {
            "page": "/",
            "detect": "/detect",
            "reset": "/reset",
            "state": "/state",
            "overlay": "/overlay.png",
            "health": "/health",
            "metrics": "/metrics"
        }
    }


@app.get("/health", response_model=HealthResponse)
async def health(client: InferenceClient = Depends(detect.get_inference_client)):
    """Health check endpoint"""
    token_configured = client.is_configured()
    return HealthResponse(
        status="healthy" if token_configured else "degraded",
        backend="healthy",
        token_configured=token_configured,
        model_url=client.url
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
