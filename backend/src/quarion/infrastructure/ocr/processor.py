"""OCR processor: slip image (or PDF) → recognised text via EasyOCR."""
from __future__ import annotations

import hashlib
import io
import logging
from collections.abc import Sequence

# Heavy deps: lazy loaded on first use so the module can be imported without them
try:
    import easyocr as _easyocr_module  # noqa: F401
    _EASYOCR_AVAILABLE = True
except ImportError:
    _EASYOCR_AVAILABLE = False

try:
    from pdf2image import convert_from_bytes as _convert_from_bytes  # noqa: F401
    from PIL import Image as _Image  # noqa: F401
    _PDF2IMAGE_AVAILABLE = True
except ImportError:
    _PDF2IMAGE_AVAILABLE = False

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGES = ("th", "en")

_PDF_MAGIC = b"%PDF"

# One reader per language tuple; model loading takes seconds.
_readers: dict[tuple[str, ...], object] = {}


def _get_reader(languages: tuple[str, ...], gpu: bool = False):
    if not _EASYOCR_AVAILABLE:
        raise RuntimeError("easyocr is not installed. Install it with: pip install easyocr")
    reader = _readers.get(languages)
    if reader is None:
        import easyocr
        logger.info("Loading EasyOCR reader for %s (gpu=%s)", ",".join(languages), gpu)
        reader = easyocr.Reader(list(languages), gpu=gpu)
        _readers[languages] = reader
    return reader


def hash_file(content: bytes) -> str:
    """SHA-256 hex digest of file bytes."""
    return hashlib.sha256(content).hexdigest()


def is_pdf(content: bytes) -> bool:
    return content[:4] == _PDF_MAGIC


def pdf_first_page(pdf_bytes: bytes, dpi: int = 200) -> bytes:
    """Rasterise the first page of a PDF to PNG bytes."""
    if not _PDF2IMAGE_AVAILABLE:
        raise RuntimeError("pdf2image is not installed. Install it with: pip install pdf2image")
    from pdf2image import convert_from_bytes
    pages = convert_from_bytes(pdf_bytes, dpi=dpi, first_page=1, last_page=1)
    if not pages:
        raise ValueError("PDF has no pages")
    buf = io.BytesIO()
    pages[0].save(buf, format="PNG")
    return buf.getvalue()


def recognize(
    image_bytes: bytes,
    language_hints: Sequence[str] = DEFAULT_LANGUAGES,
    gpu: bool = False,
) -> str:
    """Run EasyOCR on an image (or the first page of a PDF).

    Detections are grouped into paragraphs in reading order and joined with
    newlines, which keeps labels and their values on the same line.
    """
    if is_pdf(image_bytes):
        image_bytes = pdf_first_page(image_bytes)
    reader = _get_reader(tuple(language_hints), gpu=gpu)
    lines = reader.readtext(image_bytes, detail=0, paragraph=True)
    return "\n".join(line.strip() for line in lines if line and line.strip())


class EasyOcrRecognizer:
    """Callable recognizer bound to configured languages, injected into the slip workflow."""

    def __init__(self, languages: Sequence[str] = DEFAULT_LANGUAGES, gpu: bool = False) -> None:
        self.languages = tuple(languages)
        self.gpu = gpu

    def __call__(self, image_bytes: bytes) -> str:
        return recognize(image_bytes, self.languages, gpu=self.gpu)
