"""Page number parsing helpers for :mod:`pdfweave.pages`."""

from __future__ import annotations

import re
from typing import Iterable, List

from ..exceptions import PdfValidationError

_RANGE_RE = re.compile(r"^(\d+)\s*-\s*(\d+)$")


def parse_page_spec(page_spec: str) -> List[int]:
    """Parse a specification such as ``"1,3,5-7"`` into sorted unique numbers."""

    if not page_spec or not page_spec.strip():
        raise PdfValidationError("Page specification cannot be empty")

    pages: set[int] = set()
    for token in page_spec.split(","):
        token = token.strip()
        if not token:
            continue
        match = _RANGE_RE.match(token)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if start > end:
                raise PdfValidationError(
                    f"Invalid range '{token}': start page ({start}) must be <= end page ({end})."
                )
            pages.update(range(start, end + 1))
        elif token.isdigit():
            pages.add(int(token))
        else:
            raise PdfValidationError(
                f"Invalid page number: '{token}'. Expected a positive integer."
            )

    return sorted(pages)


def normalize_pages(pages: Iterable[int | str]) -> List[int]:
    """Normalise ``pages`` into a sorted list of unique integers."""

    normalised: set[int] = set()
    for page in pages:
        if isinstance(page, str):
            if not page.strip():
                continue
            try:
                normalised.add(int(page))
            except ValueError as exc:
                raise PdfValidationError(f"Invalid page number: '{page}'") from exc
        elif isinstance(page, bool) or not isinstance(page, int):
            raise PdfValidationError(f"Invalid page number: {page!r}")
        else:
            normalised.add(page)
    return sorted(normalised)


__all__ = ["parse_page_spec", "normalize_pages"]
