from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class DetectionConfig:
    api_key: str = os.getenv("CLARIFAI_API_KEY", "")
    model_id: str = "food-item-v1"
    api_base: str = "https://api.clarifai.com/v2"
    timeout: float = 10.0
    min_confidence: float = 0.85
    max_ingredients: int = 12
    max_file_size_mb: int = 5
    supported_types: tuple[str, ...] = ("image/jpeg", "image/png", "image/webp", "image/heic")
    enabled: bool = True

    @property
    def outputs_url(self) -> str:
        return f"{self.api_base}/models/{self.model_id}/outputs"

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


DEFAULT_DETECTION_CONFIG = DetectionConfig()
