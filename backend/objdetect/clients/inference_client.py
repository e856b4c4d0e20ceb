import logging
import time
from typing import List, Optional

import requests
from pydantic import ValidationError

from ..errors import DetectionAPIError
from ..models.schemas import Detection

logger = logging.getLogger(__name__)

FALLBACK_ERROR = "Failed to fetch results from the API"


class InferenceClient:
    def __init__(self, url: str, token: str, timeout: Optional[float] = None):
        self.url = url
        self.token = token
        self.timeout = timeout
        self.session = None
        self._connect()

    def _connect(self):
        """Create the HTTP session carrying the bearer credential"""
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        })

    def detect(self, payload: str) -> List[Detection]:
        """
        Run object detection on a base64 encoded image

        Args:
            payload: Base64 image data without the data URL prefix

        Returns:
            Detections in the order the API reported them

        Raises:
            DetectionAPIError: on transport failure, non-success status
                or an unexpected response body
        """
        if self.session is None:
            self._connect()

        start_time = time.time()
        try:
            response = self.session.post(
                self.url,
                json={"inputs": payload},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", self.url, e)
            raise DetectionAPIError(str(e))
        inference_time = (time.time() - start_time) * 1000  # Convert to ms

        if not response.ok:
            message = self._error_message(response)
            logger.warning("Inference API returned %s: %s", response.status_code, message)
            raise DetectionAPIError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            raise DetectionAPIError("Invalid JSON in API response", status_code=response.status_code)

        if not isinstance(body, list):
            raise DetectionAPIError("Unexpected API response format", status_code=response.status_code)

        try:
            detections = [Detection.model_validate(item) for item in body]
        except ValidationError as e:
            raise DetectionAPIError(f"Unexpected API response format: {e.error_count()} invalid field(s)",
                                    status_code=response.status_code)

        logger.info("Received %d detections in %.1f ms", len(detections), inference_time)
        return detections

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """First message of the error body, or a generic fallback"""
        try:
            body = response.json()
        except ValueError:
            return FALLBACK_ERROR

        if not isinstance(body, dict):
            return FALLBACK_ERROR
        error = body.get("error")
        # The hosted API reports a list of messages, older models a bare string
        if isinstance(error, list) and error and error[0]:
            return str(error[0])
        if isinstance(error, str) and error:
            return error
        return FALLBACK_ERROR

    def is_configured(self) -> bool:
        return bool(self.token)

    def close(self):
        """Close the HTTP session"""
        if self.session:
            self.session.close()
            self.session = None
