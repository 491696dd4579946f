"""
Pick-list Table Reconstruction
==============================

Turns a photo of a printed warehouse pick-list into structured rows
(item code, component code, quantity, storage bin).

Main components:
- Text OCR of the captured photo
- Line classification by token pattern
- Table reconstruction by positional re-pairing
- Diagnostics report when no rows can be rebuilt
- JSON and log file export
"""

__version__ = "1.0.0"
__author__ = "Pick-list Reconstruction Team"
