import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


def read_pages(pdf_path: Union[str, Path]) -> List[str]:
    """Return the text of every page in *pdf_path*, in page order."""
    import fitz  # PyMuPDF

    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    with fitz.open(str(pdf_path)) as doc:
        pages = [page.get_text("text") for page in doc]
    logger.info("Read %d pages from %s", len(pages), pdf_path)
    return pages
