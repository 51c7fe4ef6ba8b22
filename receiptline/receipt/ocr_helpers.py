"""Pure OCR transformation helpers for receipt parsing."""

import math
from typing import Any

from receiptline.domain.receipt import BoundingBox, TextFragment

OCR_IMAGE_PADDING = 0  # Pixels of padding the OCR service added around the image
MIN_CONFIDENCE = 0.5  # Ignore detections with lower OCR confidence


def _clamp(val: float, min_val: float = 0.0, max_val: float = 1.0) -> float:
    return max(min_val, min(max_val, val))


def fragments_from_paddleocr(
    raw_result: dict[str, Any],
    padding: int = OCR_IMAGE_PADDING,
    min_confidence: float = MIN_CONFIDENCE,
) -> list[TextFragment]:
    """
    Convert a raw PaddleOCR service result into normalized text fragments.

    The service reports pixel quads with y growing downwards. Fragments use
    normalized [0, 1] boxes with y growing upwards, origin at the box's
    bottom-left corner.

    Args:
        raw_result: {"image_width", "image_height", "detections": [[quad, [text, conf]], ...]}
        padding: Padding the service image carries on each side, removed from coordinates
        min_confidence: Detections below this confidence are skipped

    Returns:
        Fragments in detection order
    """
    image_width = raw_result["image_width"] - 2 * padding
    image_height = raw_result["image_height"] - 2 * padding
    if image_width <= 0 or image_height <= 0:
        return []

    fragments: list[TextFragment] = []
    for detection in raw_result.get("detections", []):
        bbox, (text, confidence) = detection

        if confidence < min_confidence:
            continue

        # bbox is [[x1,y1], [x2,y2], [x3,y3], [x4,y4]]
        x_coords = [point[0] - padding for point in bbox]
        y_coords = [point[1] - padding for point in bbox]

        left = _clamp(min(x_coords) / image_width)
        right = _clamp(max(x_coords) / image_width)
        # Flip to y-up: the lowest pixel row becomes the box origin.
        bottom = _clamp(1.0 - max(y_coords) / image_height)
        top = _clamp(1.0 - min(y_coords) / image_height)

        fragments.append(
            TextFragment(
                text=text,
                bounding_box=BoundingBox(x=left, y=bottom, width=right - left, height=top - bottom),
                confidence=float(confidence),
            )
        )

    return fragments


def fragments_from_payload(items: list[dict[str, Any]]) -> list[TextFragment]:
    """
    Build fragments from the plain JSON contract.

    Each item is {"text": str, "boundingBox": {"x", "y", "width", "height"}}
    in normalized y-up coordinates, with an optional "confidence".

    Raises:
        ValueError: if an item has no string text, or a box coordinate is
            missing or not a finite number
    """
    fragments: list[TextFragment] = []
    for index, item in enumerate(items):
        try:
            text = item["text"]
            if not isinstance(text, str):
                raise TypeError(f"text must be a string, got {type(text).__name__}")
            box = item["boundingBox"]
            coords = [float(box["x"]), float(box["y"]), float(box.get("width", 0.0)), float(box.get("height", 0.0))]
            if not all(math.isfinite(value) for value in coords):
                raise ValueError("bounding box coordinates must be finite")
            confidence = item.get("confidence")
            if confidence is not None:
                confidence = float(confidence)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid fragment at index {index}: {exc}") from exc
        fragments.append(
            TextFragment(
                text=text,
                bounding_box=BoundingBox(*coords),
                confidence=confidence,
            )
        )
    return fragments


def fragments_from_ocr_json(data: Any) -> list[TextFragment]:
    """
    Accept a raw PaddleOCR result, a {"fragments": [...]} object, or a bare
    list of fragment objects.

    Raises:
        ValueError: if the shape is not recognized
    """
    if isinstance(data, list):
        return fragments_from_payload(data)
    if isinstance(data, dict):
        if "detections" in data:
            try:
                return fragments_from_paddleocr(data)
            except (KeyError, TypeError, ValueError) as exc:
                raise ValueError(f"Invalid OCR service result: {exc!r}") from exc
        if "fragments" in data:
            return fragments_from_payload(data["fragments"])
    raise ValueError("Unrecognized OCR JSON: expected detections or fragments")
