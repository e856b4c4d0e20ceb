import logging
import random
import threading
from typing import List, Optional, Tuple

from ..clients.inference_client import InferenceClient
from ..errors import DetectionAPIError
from ..models.schemas import ComponentState, Detection
from .render import assign_colors, render_detections, render_labels
from .upload import UploadedImage

logger = logging.getLogger(__name__)

IDLE = "idle"
LOADING = "loading"
ERROR = "error"
SHOWING_RESULTS = "showing-results"


class DetectionComponent:
    """
    Transient state for one uploaded image.

    idle -> loading -> showing-results | error, and back to idle on reset.
    Every upload gets a generation number; results for an older
    generation are dropped when a newer upload has started.
    """

    def __init__(self, clamp: bool = False, rng: Optional[random.Random] = None):
        self.clamp = clamp
        self.rng = rng
        self._lock = threading.Lock()
        self._generation = 0
        self._clear()
        self.status = IDLE

    def _clear(self):
        self.error: Optional[str] = None
        self.upload: Optional[UploadedImage] = None
        self.image_src = ""
        self.image_width = 0
        self.image_height = 0
        self.results: Optional[List[Detection]] = None
        self.colors: List[str] = []

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, upload: UploadedImage) -> int:
        with self._lock:
            self._generation += 1
            self._clear()
            self.upload = upload
            self.image_src = upload.data_url
            self.image_width = upload.width
            self.image_height = upload.height
            self.status = LOADING
            logger.info("Upload %d accepted (%dx%d)", self._generation, upload.width, upload.height)
            return self._generation

    def reject(self, message: str):
        """A new drop that failed before reaching the API"""
        with self._lock:
            self._generation += 1
            self._clear()
            self.error = message
            self.status = ERROR

    def succeed(self, detections: List[Detection], generation: int) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.info("Discarding results of superseded upload %d", generation)
                return False
            self.results = list(detections)
            self.colors = assign_colors(len(self.results), self.rng)
            self.error = None
            self.status = SHOWING_RESULTS
            return True

    def fail(self, message: str, generation: Optional[int] = None) -> bool:
        with self._lock:
            if generation is not None and generation != self._generation:
                logger.info("Discarding error of superseded upload %d", generation)
                return False
            self.error = message
            self.status = ERROR
            return True

    def reset(self):
        with self._lock:
            self._generation += 1
            self._clear()
            self.status = IDLE

    def detect(self, upload: UploadedImage, client: InferenceClient) -> ComponentState:
        """Run one detection attempt for a validated upload"""
        generation = self.begin(upload)
        try:
            detections = client.detect(upload.payload)
        except DetectionAPIError as e:
            self.fail(e.message, generation)
            raise
        except Exception as e:
            logger.exception("Detection error")
            self.fail(str(e), generation)
            raise
        self.succeed(detections, generation)
        return self.snapshot()

    def overlay_source(self) -> Optional[Tuple[UploadedImage, List[Detection], List[str]]]:
        """Image and results of the current upload, read together"""
        with self._lock:
            if self.status != SHOWING_RESULTS or self.upload is None:
                return None
            return self.upload, list(self.results), list(self.colors)

    def snapshot(self) -> ComponentState:
        with self._lock:
            overlays = []
            labels = []
            if self.results:
                labels = render_labels(self.results, self.colors)
                overlays = render_detections(
                    self.results, self.colors,
                    self.image_width, self.image_height,
                    clamp=self.clamp
                )
            return ComponentState(
                status=self.status,
                error=self.error,
                image_src=self.image_src,
                image_width=self.image_width,
                image_height=self.image_height,
                detections=self.results,
                colors=list(self.colors),
                labels=labels,
                overlays=overlays,
            )
