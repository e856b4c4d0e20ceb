from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
import os

from ..services.component import DetectionComponent
from ..services.render import results_json
from .detect import get_component

router = APIRouter(tags=["page"])

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")
templates = Jinja2Templates(directory=TEMPLATES_DIR)


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, state: DetectionComponent = Depends(get_component)):
    snapshot = state.snapshot()
    raw_results = results_json(snapshot.detections) if snapshot.detections is not None else None
    return templates.TemplateResponse(
        request,
        "index.html",
        {"state": snapshot, "raw_results": raw_results}
    )
