import os

# Hosted inference endpoint
HF_MODEL_URL = os.getenv(
    "HF_MODEL_URL",
    "https://api-inference.huggingface.co/models/facebook/detr-resnet-50"
)
HF_TOKEN = os.getenv("HF_TOKEN", "")

# Unset means requests waits indefinitely
_timeout = os.getenv("HF_TIMEOUT")
HF_TIMEOUT = float(_timeout) if _timeout else None

CLAMP_BOXES = os.getenv("CLAMP_BOXES", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
