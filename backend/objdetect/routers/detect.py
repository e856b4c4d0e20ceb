from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from typing import Optional

from .. import config
from ..clients.inference_client import InferenceClient
from ..errors import DetectionAPIError, UploadError
from ..models.schemas import ComponentState
from ..services.component import DetectionComponent
from ..services.render import draw_overlay
from ..services.upload import read_upload_file

router = APIRouter(tags=["detection"])

inference_client = None
component = None


def get_inference_client() -> InferenceClient:
    """Get or create the inference API client"""
    global inference_client
    if inference_client is None:
        inference_client = InferenceClient(config.HF_MODEL_URL, config.HF_TOKEN, timeout=config.HF_TIMEOUT)
    return inference_client


def get_component() -> DetectionComponent:
    """Get or create the detection component state"""
    global component
    if component is None:
        component = DetectionComponent(clamp=config.CLAMP_BOXES)
    return component


@router.post("/detect", response_model=ComponentState)
async def detect_objects(
    file: Optional[UploadFile] = File(default=None),
    state: DetectionComponent = Depends(get_component),
    client: InferenceClient = Depends(get_inference_client),
):
    """
    Detect objects in a dropped image using the hosted model
    """
    try:
        upload = await read_upload_file(file)
    except UploadError as e:
        state.reject(e.message)
        raise HTTPException(status_code=400, detail=e.message)

    try:
        return await run_in_threadpool(state.detect, upload, client)
    except DetectionAPIError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Detection error: {str(e)}")


@router.post("/reset", response_model=ComponentState)
async def reset(state: DetectionComponent = Depends(get_component)):
    """Clear the current image and results"""
    state.reset()
    return state.snapshot()


@router.get("/state", response_model=ComponentState)
async def current_state(state: DetectionComponent = Depends(get_component)):
    return state.snapshot()


@router.get("/overlay.png")
async def overlay_image(state: DetectionComponent = Depends(get_component)):
    """Current image with the detections drawn in"""
    source = state.overlay_source()
    if source is None:
        raise HTTPException(status_code=404, detail="No detection results")
    upload, results, colors = source
    try:
        png = await run_in_threadpool(draw_overlay, upload.data, results, colors)
    except OSError as e:
        raise HTTPException(status_code=422, detail=f"Could not decode image: {str(e)}")
    return Response(content=png, media_type="image/png")
