from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class Box(BaseModel):
    model_config = ConfigDict(frozen=True)

    xmin: float
    ymin: float
    xmax: float
    ymax: float


class Detection(BaseModel):
    """One object reported by the inference API, in source-image pixels"""
    model_config = ConfigDict(frozen=True)

    label: str
    score: float
    box: Box


class DisplayBox(BaseModel):
    left: float
    top: float
    width: float
    height: float

    def css(self) -> dict:
        return {
            "left": f"{self.left}%",
            "top": f"{self.top}%",
            "width": f"{self.width}%",
            "height": f"{self.height}%",
        }


class ResultLabel(BaseModel):
    index: int
    label: str
    score_text: str
    color: str


class RenderedDetection(BaseModel):
    index: int
    label: str
    score: float
    score_text: str
    color: str
    display_box: DisplayBox


class ComponentState(BaseModel):
    status: str
    error: Optional[str] = None
    image_src: str = ""
    image_width: int = 0
    image_height: int = 0
    detections: Optional[List[Detection]] = None
    colors: List[str] = []
    labels: List[ResultLabel] = []
    overlays: List[RenderedDetection] = []


class HealthResponse(BaseModel):
    status: str
    backend: str
    token_configured: bool
    model_url: str
