from __future__ import annotations

import base64
import logging
from typing import Any

import requests

from .config import DEFAULT_DETECTION_CONFIG, DetectionConfig
from .models import DetectionErrorKind, DetectionResult

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Clarifai API key is not configured on the server."
MISSING_IMAGE_MESSAGE = "Image file is required."
UNSUPPORTED_TYPE_MESSAGE = "Unsupported file type. Please upload a JPG, PNG, or WebP image."
AUTH_FAILED_MESSAGE = "Image recognition is unavailable right now. Please add ingredients manually."
PROVIDER_ERROR_MESSAGE = "Unable to detect ingredients. Try another photo."
NETWORK_ERROR_MESSAGE = "Something went wrong while processing the image. Please try again."
INVALID_RESPONSE_MESSAGE = "Image recognition returned an unexpected response. Please try again."
NO_INGREDIENTS_MESSAGE = "No ingredients recognized. Try a clearer image."


def _validate_upload(
    image: bytes | None,
    content_type: str | None,
    config: DetectionConfig,
) -> DetectionResult | None:
    """Return a failure result for an unusable upload, or ``None`` if it is fine."""
    if not image:
        return DetectionResult.failure(DetectionErrorKind.missing_image, MISSING_IMAGE_MESSAGE)
    if content_type not in config.supported_types:
        return DetectionResult.failure(
            DetectionErrorKind.unsupported_type, UNSUPPORTED_TYPE_MESSAGE,
        )
    if len(image) > config.max_file_size_bytes:
        return DetectionResult.failure(
            DetectionErrorKind.file_too_large,
            f"File is too large. Maximum size is {config.max_file_size_mb}MB.",
        )
    return None


def _extract_ingredients(payload: dict[str, Any], config: DetectionConfig) -> list[str]:
    outputs = payload.get("outputs")
    if not isinstance(outputs, list) or not outputs or not isinstance(outputs[0], dict):
        return []
    data = outputs[0].get("data")
    concepts = data.get("concepts") if isinstance(data, dict) else None
    if not isinstance(concepts, list):
        return []

    ingredients: list[str] = []
    for concept in concepts:
        if not isinstance(concept, dict):
            continue
        name = concept.get("name")
        value = concept.get("value")
        if not isinstance(name, str) or not isinstance(value, (int, float)):
            continue
        if value < config.min_confidence or not name.strip():
            continue
        ingredients.append(name.strip())
        if len(ingredients) >= config.max_ingredients:
            break
    return ingredients


def detect_ingredients(
    image: bytes | None,
    content_type: str | None,
    config: DetectionConfig = DEFAULT_DETECTION_CONFIG,
) -> DetectionResult:
    """
    Send an image to the Clarifai food model and return confident labels.

    Never raises: every failure (missing key, bad upload, network or
    provider error, nothing recognised) comes back as a failed result
    carrying a user-facing message.
    """
    if not config.enabled or not config.api_key:
        return DetectionResult.failure(DetectionErrorKind.not_configured, NOT_CONFIGURED_MESSAGE)

    invalid = _validate_upload(image, content_type, config)
    if invalid is not None:
        return invalid

    body = {
        "inputs": [
            {"data": {"image": {"base64": base64.b64encode(image).decode("ascii")}}},
        ]
    }

    try:
        response = requests.post(
            config.outputs_url,
            headers={
                "Authorization": f"Key {config.api_key}",
                "Content-Type": "application/json",
            },
            json=body,
            timeout=config.timeout,
        )
    except requests.exceptions.RequestException:
        logger.warning("Clarifai request failed", exc_info=True)
        return DetectionResult.failure(DetectionErrorKind.network_error, NETWORK_ERROR_MESSAGE)

    if response.status_code in (401, 403):
        logger.warning("Clarifai rejected credentials (HTTP %s)", response.status_code)
        return DetectionResult.failure(DetectionErrorKind.auth_failed, AUTH_FAILED_MESSAGE)

    try:
        payload = response.json()
    except ValueError:
        logger.warning("Clarifai returned a non-JSON body (HTTP %s)", response.status_code, exc_info=True)
        return DetectionResult.failure(
            DetectionErrorKind.invalid_response, INVALID_RESPONSE_MESSAGE,
        )

    if not response.ok:
        description = (payload.get("status") or {}).get("description") if isinstance(payload, dict) else None
        logger.warning("Clarifai returned HTTP %s: %s", response.status_code, description)
        return DetectionResult.failure(
            DetectionErrorKind.provider_error, description or PROVIDER_ERROR_MESSAGE,
        )

    if not isinstance(payload, dict):
        return DetectionResult.failure(
            DetectionErrorKind.invalid_response, INVALID_RESPONSE_MESSAGE,
        )

    ingredients = _extract_ingredients(payload, config)
    if not ingredients:
        return DetectionResult.failure(DetectionErrorKind.no_ingredients, NO_INGREDIENTS_MESSAGE)

    return DetectionResult(ingredients=ingredients)
