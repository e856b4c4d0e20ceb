import io
import json

import requests
from PIL import Image

from objdetect.models.schemas import Box, Detection


def create_test_image(width=1000, height=500, color=(0, 255, 0), fmt="PNG"):
    """Encoded image bytes of the given size."""
    image = Image.new("RGB", (width, height), color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def make_response(status_code, body):
    """Builds a requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    if isinstance(body, (bytes, str)):
        response._content = body.encode() if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode()
    return response


def make_detection(label="cat", score=0.9753, xmin=100, ymin=50, xmax=300, ymax=150):
    return Detection(label=label, score=score, box=Box(xmin=xmin, ymin=ymin, xmax=xmax, ymax=ymax))


API_DETECTIONS = [
    {"label": "cat", "score": 0.9982, "box": {"xmin": 100, "ymin": 50, "xmax": 300, "ymax": 150}},
    {"label": "remote", "score": 0.9461, "box": {"xmin": 40, "ymin": 70, "xmax": 175, "ymax": 117}},
]
