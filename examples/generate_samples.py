#!/usr/bin/env python
"""
Generate synthetic pick-list samples for trying out the pipeline.

This script creates:
- A rendered pick-list photo stand-in (rows of codes, quantities, bins)
- Column-wise OCR text as produced by a phone OCR engine
- OCR text without a header, to exercise the analysis report

Usage:
    python examples/generate_samples.py
    picklist-recon --text examples/sample_pages/ocr_columns.txt --no-save
"""

import numpy as np
from pathlib import Path

ROWS = [
    ("0001", "4022.678.06504", "Hex screw M4x10", "1.000", "S1-S30-B1"),
    ("0002", "4022.678.06510", "Washer 4.3", "4.000", "V1-S01-A1"),
    ("0003", "4022.679.00001", "Mounting bracket", "2.000", "S2-S05-C3"),
]

HEADER = ["Res Item", "Component", "Description", "Req Qty", "Storage Bin"]
COLUMNS_X = [20, 150, 400, 700, 850]


def create_picklist_image():
    """Render a pick-list table."""
    import cv2

    img = np.ones((400, 1100, 3), dtype=np.uint8) * 255

    cv2.putText(img, "PICK LIST 4711", (20, 50),
               cv2.FONT_HERSHEY_DUPLEX, 1.0, (0, 0, 0), 2)

    y = 120
    for x, title in zip(COLUMNS_X, HEADER):
        cv2.putText(img, title, (x, y), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 0, 0), 2)
    cv2.line(img, (20, y + 15), (1080, y + 15), (0, 0, 0), 1)

    for row in ROWS:
        y += 60
        for x, value in zip(COLUMNS_X, row):
            cv2.putText(img, value, (x, y), cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 0, 0), 1)

    return img


def create_column_text() -> str:
    """OCR text in column order, the layout the reconstructor expects."""
    lines = ["PICK LIST 4711", "Res Item Component Description Req Qty Storage Bin"]
    for col in range(len(HEADER)):
        lines.extend(row[col] for row in ROWS)
    return "\n".join(lines) + "\n"


def create_headerless_text() -> str:
    """OCR text where the header was not recognized."""
    return "PICK LIST 4711\nRes ltem Cornponent\n0001\n4022.678.06504\n1.000\n"


def main():
    import cv2

    output_dir = Path(__file__).parent / "sample_pages"
    output_dir.mkdir(parents=True, exist_ok=True)

    cv2.imwrite(str(output_dir / "picklist.png"), create_picklist_image())
    (output_dir / "ocr_columns.txt").write_text(create_column_text(), encoding="utf-8")
    (output_dir / "ocr_no_header.txt").write_text(create_headerless_text(), encoding="utf-8")

    print(f"Samples written to {output_dir}")


if __name__ == "__main__":
    main()
