"""
Text OCR module for pick-list photos.

Provides:
- Text extraction from a captured image
- Engine selection (Tesseract, optional EasyOCR)
- Line text with confidence scoring

The reconstruction engine only consumes `OCRResult.text`; confidences and
boxes are kept for display and logging.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Dict, Any
import numpy as np

logger = logging.getLogger(__name__)


class OCRError(RuntimeError):
    """Raised when an OCR engine fails to process an image."""


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class WordResult:
    """OCR result for a single word."""
    text: str
    confidence: float
    bbox: Optional[Tuple[int, int, int, int]] = None  # (x1, y1, x2, y2)


@dataclass
class LineResult:
    """OCR result for a line of text."""
    text: str
    confidence: float
    words: List[WordResult] = field(default_factory=list)
    bbox: Optional[Tuple[int, int, int, int]] = None


@dataclass
class OCRResult:
    """Complete OCR result for a captured image."""
    text: str
    confidence: float
    lines: List[LineResult] = field(default_factory=list)
    engine_used: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_low_confidence(self) -> bool:
        return self.confidence < 0.65

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "engine": self.engine_used,
            "lines": len(self.lines),
            "metadata": self.metadata
        }


# ============================================================================
# Text OCR Interface
# ============================================================================

class TextOCR:
    """
    Main text OCR interface.

    Engines:
    - Tesseract (baseline, always tried)
    - EasyOCR (optional, falls back to Tesseract when missing)
    """

    def __init__(
        self,
        engine: str = "tesseract",
        language: str = "eng",
        tesseract_config: str = "--oem 3 --psm 3",
        use_gpu: bool = False
    ):
        self.language = language
        self.tesseract_config = tesseract_config
        self.use_gpu = use_gpu
        self.engine_name = engine
        self._engine = self._create_engine(engine)
        logger.info(f"Initialized OCR engine: {self.engine_name}")

    def _create_engine(self, engine_name: str):
        """Create an OCR engine instance."""
        if engine_name == "tesseract":
            return TesseractEngine(language=self.language, config=self.tesseract_config)
        elif engine_name == "easyocr":
            try:
                return EasyOCREngine(language=self.language, use_gpu=self.use_gpu)
            except ImportError as e:
                logger.warning(f"{e}; falling back to tesseract")
                self.engine_name = "tesseract"
                return TesseractEngine(language=self.language, config=self.tesseract_config)
        else:
            raise ValueError(f"Unknown OCR engine: {engine_name}")

    def recognize(self, image: np.ndarray) -> OCRResult:
        """
        Recognize text in a captured image.

        Args:
            image: Input image (BGR or grayscale)

        Returns:
            OCRResult with lines joined by newlines

        Raises:
            OCRError: If the engine fails
        """
        result = self._engine.recognize(image)
        logger.info(
            f"OCR produced {len(result.lines)} lines "
            f"(confidence {result.confidence:.2f}, engine {result.engine_used})"
        )
        return result


# ============================================================================
# Tesseract Engine
# ============================================================================

class TesseractEngine:
    """OCR using Tesseract."""

    def __init__(
        self,
        language: str = "eng",
        config: str = "--oem 3 --psm 3"
    ):
        try:
            import pytesseract
            self.pytesseract = pytesseract

            # Test that tesseract is installed
            pytesseract.get_tesseract_version()

        except Exception as e:
            raise ImportError(
                f"Tesseract not available: {e}\n"
                "Install with: pip install pytesseract\n"
                "Also install Tesseract: https://github.com/tesseract-ocr/tesseract"
            )

        self.language = language
        self.config = config

    def _to_grayscale(self, image: np.ndarray) -> np.ndarray:
        import cv2

        if len(image.shape) == 3:
            gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        else:
            gray = image.copy()

        # Tesseract struggles below ~30px text height
        h = gray.shape[0]
        if h < 30:
            scale = 30.0 / h
            gray = cv2.resize(gray, None, fx=scale, fy=scale, interpolation=cv2.INTER_CUBIC)

        return gray

    def recognize(self, image: np.ndarray) -> OCRResult:
        """Recognize text using Tesseract."""
        gray = self._to_grayscale(image)

        try:
            data = self.pytesseract.image_to_data(
                gray,
                lang=self.language,
                config=self.config,
                output_type=self.pytesseract.Output.DICT
            )
        except Exception as e:
            logger.error(f"Tesseract error: {e}")
            raise OCRError(str(e)) from e

        return self._build_result(data)

    def _build_result(self, data: Dict[str, List[Any]]) -> OCRResult:
        """Group Tesseract word data into lines."""
        lines: List[LineResult] = []
        current_line: List[WordResult] = []
        current_key = None
        confidences = []

        def flush():
            if current_line:
                lines.append(LineResult(
                    text=' '.join(w.text for w in current_line),
                    confidence=float(np.mean([w.confidence for w in current_line])),
                    words=list(current_line)
                ))

        for i in range(len(data['text'])):
            text = str(data['text'][i]).strip()
            conf = float(data['conf'][i])

            if conf < 0 or not text:  # -1 means no valid confidence
                continue

            # line_num restarts in every block and paragraph
            key = (data['block_num'][i], data['par_num'][i], data['line_num'][i])
            word = WordResult(
                text=text,
                confidence=conf / 100.0,
                bbox=(
                    data['left'][i],
                    data['top'][i],
                    data['left'][i] + data['width'][i],
                    data['top'][i] + data['height'][i]
                )
            )

            if key != current_key:
                flush()
                current_line = [word]
                current_key = key
            else:
                current_line.append(word)

            confidences.append(conf / 100.0)

        flush()

        return OCRResult(
            text='\n'.join(line.text for line in lines),
            confidence=float(np.mean(confidences)) if confidences else 0.0,
            lines=lines,
            engine_used="tesseract"
        )


# ============================================================================
# EasyOCR Engine
# ============================================================================

class EasyOCREngine:
    """OCR using EasyOCR."""

    def __init__(
        self,
        language: str = "en",
        use_gpu: bool = False
    ):
        try:
            import easyocr
        except ImportError:
            raise ImportError(
                "EasyOCR not available. Install with: pip install easyocr"
            )

        # Map language codes
        lang_map = {"eng": "en", "deu": "de", "fra": "fr"}
        easy_lang = lang_map.get(language, language)

        self.reader = easyocr.Reader(
            [easy_lang],
            gpu=use_gpu,
            verbose=False
        )
        self.language = language

    def recognize(self, image: np.ndarray) -> OCRResult:
        """Recognize text using EasyOCR."""
        try:
            result = self.reader.readtext(image)
        except Exception as e:
            logger.error(f"EasyOCR error: {e}")
            raise OCRError(str(e)) from e

        lines = []
        confidences = []

        for bbox_points, text, conf in result:
            # Convert polygon to bounding box
            xs = [p[0] for p in bbox_points]
            ys = [p[1] for p in bbox_points]
            bbox = (int(min(xs)), int(min(ys)), int(max(xs)), int(max(ys)))

            word = WordResult(text=text, confidence=float(conf), bbox=bbox)
            lines.append(LineResult(
                text=text,
                confidence=float(conf),
                words=[word],
                bbox=bbox
            ))
            confidences.append(float(conf))

        # Sort lines by vertical position
        lines.sort(key=lambda l: l.bbox[1] if l.bbox else 0)

        return OCRResult(
            text='\n'.join(line.text for line in lines),
            confidence=float(np.mean(confidences)) if confidences else 0.0,
            lines=lines,
            engine_used="easyocr"
        )
