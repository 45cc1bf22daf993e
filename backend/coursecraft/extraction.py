from __future__ import annotations
import logging
from io import BytesIO
from pathlib import PurePath
from typing import NamedTuple

from docx import Document
from pypdf import PdfReader

try:
	import pytesseract  # type: ignore
	from PIL import Image  # type: ignore
except Exception:
	# OCR needs the tesseract binary as well; treat images as unextractable without it
	pytesseract = None  # type: ignore
	Image = None  # type: ignore

logger = logging.getLogger(__name__)

MIN_USEFUL_CHARS = 10
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif"}


class ExtractionResult(NamedTuple):
	text: str
	extracted: bool
	method: str


def _pdf_text(data: bytes) -> str:
	reader = PdfReader(BytesIO(data))
	pages = [page.extract_text() or "" for page in reader.pages]
	return "\n\n".join(p for p in pages if p.strip())


def _docx_text(data: bytes) -> str:
	document = Document(BytesIO(data))
	return "\n".join(p.text for p in document.paragraphs if p.text.strip())


def _image_text(data: bytes) -> str:
	if pytesseract is None or Image is None:
		raise RuntimeError("OCR dependencies not installed (tesseract-ocr, pytesseract, Pillow)")
	return pytesseract.image_to_string(Image.open(BytesIO(data)))


def placeholder_text(filename: str) -> str:
	lowered = filename.lower()
	if "resume" in lowered or "cv" in PurePath(lowered).stem.split("_"):
		return "UNSUITABLE: Personal resume/CV document cannot be converted to e-learning content."
	return f"EXPERT ANALYSIS: {filename} requires comprehensive evaluation for e-learning conversion potential."


def extract_text(filename: str, data: bytes) -> ExtractionResult:
	ext = PurePath(filename or "").suffix.lower()
	try:
		if ext == ".pdf":
			text, method = _pdf_text(data), "PDF Parser"
		elif ext == ".docx":
			text, method = _docx_text(data), "DOCX Parser"
		elif ext in (".txt", ".md", ".csv", ".json"):
			text, method = data.decode("utf-8", errors="replace"), "Direct Text Read"
		elif ext in IMAGE_EXTENSIONS:
			text, method = _image_text(data), "OCR"
		else:
			return ExtractionResult(placeholder_text(filename), False, "Unsupported Format")
	except Exception as exc:
		logger.warning("Text extraction failed for %s: %s", filename, exc)
		return ExtractionResult(placeholder_text(filename), False, "Extraction Fallback")
	if len(text.strip()) < MIN_USEFUL_CHARS:
		return ExtractionResult(placeholder_text(filename), False, "Expert Content Assessment")
	return ExtractionResult(text, True, method)
