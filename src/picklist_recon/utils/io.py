"""
I/O utilities for the pick-list extraction pipeline.

Handles:
- Image loading and validation
- OCR text file loading
- Timestamped log file persistence
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)


# ============================================================================
# Image Loading
# ============================================================================

def load_image(
    image_path: Union[str, Path],
    grayscale: bool = False
) -> np.ndarray:
    """
    Load an image from file.

    Args:
        image_path: Path to the image file
        grayscale: If True, load as grayscale

    Returns:
        Numpy array representing the image (BGR format if color)

    Raises:
        FileNotFoundError: If image file doesn't exist
        ValueError: If image cannot be decoded
    """
    import cv2

    image_path = Path(image_path)
    if not image_path.exists():
        raise FileNotFoundError(f"Image file not found: {image_path}")

    flag = cv2.IMREAD_GRAYSCALE if grayscale else cv2.IMREAD_COLOR
    img = cv2.imread(str(image_path), flag)

    if img is None:
        raise ValueError(f"Could not decode image: {image_path}")

    logger.debug(f"Loaded image: {image_path}, shape: {img.shape}")
    return img


def decode_image(data: bytes) -> np.ndarray:
    """Decode an in-memory image (e.g. an upload) to a BGR array."""
    import cv2

    buffer = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if img is None:
        raise ValueError("Could not decode image data")
    return img


def load_text(text_path: Union[str, Path]) -> str:
    """Load previously captured OCR text."""
    text_path = Path(text_path)
    if not text_path.exists():
        raise FileNotFoundError(f"Text file not found: {text_path}")

    with open(text_path, 'r', encoding='utf-8') as f:
        return f.read()


def get_file_size(path: Union[str, Path]) -> str:
    """Human readable size of a file in KB."""
    try:
        size_kb = Path(path).stat().st_size // 1024
        return f"{size_kb} KB"
    except OSError:
        return "Unknown size"


# ============================================================================
# Directory Management
# ============================================================================

def ensure_dir(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


# ============================================================================
# Log Persistence
# ============================================================================

def get_timestamp(now: Optional[datetime] = None) -> str:
    """Timestamp used in output filenames, e.g. 20240131_142501123."""
    now = now or datetime.now()
    return now.strftime("%Y%m%d_%H%M%S") + f"{now.microsecond // 1000:03d}"


def save_log_to_file(
    content: str,
    filename: str,
    directories: Sequence[Union[str, Path]],
    log_dir_name: str = "PicklistLogs"
) -> List[Path]:
    """
    Write content into `<dir>/<log_dir_name>/<filename>` for each directory.

    The first directory is the primary location; the others (e.g. a shared
    downloads folder) are best effort. Failures are logged and stop further
    writes, but never raise.

    Returns:
        Paths that were written successfully
    """
    saved_paths: List[Path] = []

    try:
        for directory in directories:
            log_dir = ensure_dir(Path(directory) / log_dir_name)
            file_path = log_dir / filename
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(content)
            saved_paths.append(file_path)
            logger.debug(f"Saved log to {directory}: {file_path}")
    except OSError as e:
        logger.error(f"Failed to save log: {e}")

    return saved_paths

