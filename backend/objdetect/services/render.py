import io
import json
import random
from typing import List, Optional

from PIL import Image, ImageDraw

from ..models.schemas import Detection, RenderedDetection, ResultLabel
from .boxes import scale_bounding_box


def random_color(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    return "#{:06X}".format(rng.randint(0, 0xFFFFFF))


def assign_colors(count: int, rng: Optional[random.Random] = None) -> List[str]:
    """One color per detection index"""
    return [random_color(rng) for _ in range(count)]


def format_score(score: float) -> str:
    return f"{score * 100:.2f}%"


def render_labels(detections: List[Detection], colors: List[str]) -> List[ResultLabel]:
    """Label list entries; these do not depend on the image size"""
    return [
        ResultLabel(index=index, label=detection.label,
                    score_text=format_score(detection.score), color=color)
        for index, (detection, color) in enumerate(zip(detections, colors))
    ]


def render_detections(
    detections: List[Detection],
    colors: List[str],
    image_width: int,
    image_height: int,
    clamp: bool = False
) -> List[RenderedDetection]:
    """
    Build index-aligned overlay entries for the result view.
    Nothing is drawn until the image dimensions are known.
    """
    if image_width <= 0 or image_height <= 0:
        return []

    rendered = []
    for index, (detection, color) in enumerate(zip(detections, colors)):
        rendered.append(RenderedDetection(
            index=index,
            label=detection.label,
            score=detection.score,
            score_text=format_score(detection.score),
            color=color,
            display_box=scale_bounding_box(detection.box, image_width, image_height, clamp=clamp),
        ))
    return rendered


def results_json(detections: List[Detection]) -> str:
    return json.dumps([d.model_dump() for d in detections], indent=2)


def draw_overlay(image_data: bytes, detections: List[Detection], colors: List[str]) -> bytes:
    """
    Draw detections onto a copy of the image and return it as PNG
    """
    image = Image.open(io.BytesIO(image_data)).convert("RGB")
    draw = ImageDraw.Draw(image)

    for detection, color in zip(detections, colors):
        box = detection.box
        draw.rectangle([box.xmin, box.ymin, box.xmax, box.ymax], outline=color, width=2)

        text = f"{detection.label} ({format_score(detection.score)})"
        left, top, right, bottom = draw.textbbox((box.xmin, box.ymin), text)
        draw.rectangle([left - 2, top - 2, right + 2, bottom + 2], fill=color)
        draw.text((box.xmin, box.ymin), text, fill="white")

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
