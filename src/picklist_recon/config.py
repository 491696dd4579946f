"""
Configuration and constants for the pick-list extraction pipeline.

This module provides:
- Global configuration settings
- OCR engine parameters
- Diagnostics and output settings
- Environment variable overrides
"""

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path
import logging

# ============================================================================
# Logging Configuration
# ============================================================================

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT
)
logger = logging.getLogger("picklist_recon")


# ============================================================================
# Directory Paths
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "output"


# ============================================================================
# Processing Configuration
# ============================================================================

@dataclass
class OCRConfig:
    """OCR configuration."""
    engine: str = "tesseract"  # tesseract, easyocr
    language: str = "eng"
    # psm 3 lets Tesseract split table columns into separate blocks
    tesseract_config: str = "--oem 3 --psm 3"
    use_gpu: bool = False


@dataclass
class DiagnosticsConfig:
    """Diagnostics report configuration."""
    context_before: int = 3
    context_after: int = 5


@dataclass
class OutputConfig:
    """Log file output configuration."""
    output_dir: Path = DEFAULT_OUTPUT_DIR
    # Optional shared location (e.g. ~/Downloads), written in addition
    public_dir: Optional[Path] = None
    log_dir_name: str = "PicklistLogs"
    save_logs: bool = True
    json_indent: int = 2

    @property
    def directories(self):
        dirs = [self.output_dir]
        if self.public_dir is not None:
            dirs.append(self.public_dir)
        return dirs


@dataclass
class PipelineConfig:
    """Main pipeline configuration."""
    ocr: OCRConfig = field(default_factory=OCRConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    debug_mode: bool = False


# ============================================================================
# Default Configuration Instance
# ============================================================================

def get_config() -> PipelineConfig:
    """Get the default pipeline configuration with environment overrides."""
    config = PipelineConfig()

    if os.environ.get("PICKLIST_DEBUG", "").lower() == "true":
        config.debug_mode = True

    if os.environ.get("PICKLIST_OUTPUT_DIR"):
        config.output.output_dir = Path(os.environ["PICKLIST_OUTPUT_DIR"])

    if os.environ.get("PICKLIST_PUBLIC_DIR"):
        config.output.public_dir = Path(os.environ["PICKLIST_PUBLIC_DIR"])

    if os.environ.get("PICKLIST_OCR_ENGINE"):
        config.ocr.engine = os.environ["PICKLIST_OCR_ENGINE"].lower()

    if os.environ.get("PICKLIST_OCR_LANG"):
        config.ocr.language = os.environ["PICKLIST_OCR_LANG"]

    return config
