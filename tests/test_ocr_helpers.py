"""Tests for OCR transformation helpers."""

import pytest

from receiptline.receipt.line_assembler import assemble_text_lines
from receiptline.receipt.ocr_helpers import (
    fragments_from_ocr_json,
    fragments_from_paddleocr,
    fragments_from_payload,
)


def _bbox(x0: int, y0: int, x1: int, y1: int) -> list[list[int]]:
    return [[x0, y0], [x1, y0], [x1, y1], [x0, y1]]


def test_paddleocr_boxes_are_normalized_and_flipped_to_y_up() -> None:
    raw_result = {
        "status": "success",
        "image_width": 1000,
        "image_height": 2000,
        "detections": [
            [_bbox(100, 200, 400, 400), ["STORE", 0.99]],
        ],
    }

    [fragment] = fragments_from_paddleocr(raw_result, padding=0)

    assert fragment.text == "STORE"
    assert fragment.bounding_box.x == pytest.approx(0.1)
    assert fragment.bounding_box.width == pytest.approx(0.3)
    assert fragment.bounding_box.y == pytest.approx(0.8)
    assert fragment.bounding_box.height == pytest.approx(0.1)
    assert fragment.confidence == pytest.approx(0.99)


def test_paddleocr_drops_low_confidence_detections() -> None:
    raw_result = {
        "image_width": 100,
        "image_height": 100,
        "detections": [
            [_bbox(0, 0, 10, 10), ["keep", 0.9]],
            [_bbox(0, 20, 10, 30), ["noise", 0.2]],
        ],
    }

    fragments = fragments_from_paddleocr(raw_result, min_confidence=0.5)

    assert [fragment.text for fragment in fragments] == ["keep"]


def test_paddleocr_padding_is_removed_and_coordinates_clamped() -> None:
    raw_result = {
        "image_width": 120,
        "image_height": 120,
        "detections": [[_bbox(0, 0, 60, 130), ["edge", 0.9]]],
    }

    [fragment] = fragments_from_paddleocr(raw_result, padding=10)

    assert fragment.bounding_box.x == 0.0
    assert fragment.bounding_box.y == 0.0
    assert fragment.bounding_box.width == pytest.approx(0.5)


def test_paddleocr_rows_assemble_in_reading_order() -> None:
    raw_result = {
        "image_width": 1000,
        "image_height": 1000,
        "detections": [
            [_bbox(700, 502, 900, 540), ["4.50", 0.99]],
            [_bbox(100, 100, 500, 140), ["BEAN CAFE", 0.99]],
            [_bbox(100, 500, 300, 540), ["Latte", 0.99]],
        ],
    }

    assert assemble_text_lines(fragments_from_paddleocr(raw_result)) == ["BEAN CAFE", "Latte 4.50"]


def test_empty_image_yields_no_fragments() -> None:
    assert fragments_from_paddleocr({"image_width": 0, "image_height": 0, "detections": []}) == []


def test_payload_fragments_parse_boxes_and_optional_confidence() -> None:
    fragments = fragments_from_payload(
        [
            {"text": "Total", "boundingBox": {"x": 0.1, "y": 0.5, "width": 0.2, "height": 0.02}},
            {"text": "$5.48", "boundingBox": {"x": 0.8, "y": 0.5}, "confidence": 0.7},
        ]
    )

    assert fragments[0].confidence is None
    assert fragments[1].bounding_box.width == 0.0
    assert fragments[1].confidence == pytest.approx(0.7)


def test_payload_rejects_items_without_box() -> None:
    with pytest.raises(ValueError, match="index 1"):
        fragments_from_payload([{"text": "a", "boundingBox": {"x": 0, "y": 0}}, {"text": "b"}])


def test_ocr_json_accepts_all_shapes() -> None:
    item = {"text": "a", "boundingBox": {"x": 0.1, "y": 0.2}}

    assert len(fragments_from_ocr_json([item])) == 1
    assert len(fragments_from_ocr_json({"fragments": [item]})) == 1
    assert len(fragments_from_ocr_json({"image_width": 10, "image_height": 10, "detections": []})) == 0


def test_ocr_json_rejects_unknown_shapes() -> None:
    with pytest.raises(ValueError):
        fragments_from_ocr_json({"lines": ["a"]})
    with pytest.raises(ValueError):
        fragments_from_ocr_json({"detections": []})


@pytest.mark.parametrize("text", [None, 12, ["a"]])
def test_payload_rejects_non_string_text(text: object) -> None:
    with pytest.raises(ValueError, match="index 0"):
        fragments_from_payload([{"text": text, "boundingBox": {"x": 0.1, "y": 0.5}}])


@pytest.mark.parametrize(
    "box",
    [
        {"x": "nan", "y": 0.5},
        {"x": 0.1, "y": "inf"},
        {"x": 0.1, "y": 0.5, "width": float("nan")},
        {"x": 0.1, "y": 0.5, "height": "-inf"},
    ],
)
def test_payload_rejects_non_finite_coordinates(box: dict) -> None:
    with pytest.raises(ValueError, match="finite"):
        fragments_from_payload([{"text": "a", "boundingBox": box}])


def test_payload_rejects_non_numeric_confidence() -> None:
    with pytest.raises(ValueError, match="index 0"):
        fragments_from_payload([{"text": "a", "boundingBox": {"x": 0.1, "y": 0.5}, "confidence": "high"}])
