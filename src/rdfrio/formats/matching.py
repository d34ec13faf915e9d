"""
Format matching and content negotiation.

Pure functions that resolve a MIME type or a file name against a collection of
RDFFormat descriptors, and build HTTP Accept parameters for a set of formats.
Registries pass their own descriptors in; nothing here looks anything up
globally.

Usage:
    from rdfrio.formats.matching import match_file_name, rank_for_negotiation

    fmt = match_file_name("data/people.ttl", formats, fallback=RDFXML)
    accept = ", ".join(rank_for_negotiation(formats, require_context=True))
"""

import logging
from typing import Iterable, List, Optional

from .base import RDFFormat

logger = logging.getLogger(__name__)

MAX_QUALITY = 10
CONTEXT_PENALTY = 5
PREFERENCE_PENALTY = 2
NAMESPACE_PENALTY = 1


def normalize_mime_type(mime_type: str) -> str:
    """Trim a MIME type and strip any parameters (``;charset=...``)."""
    return mime_type.strip().split(";", 1)[0].strip()


def file_extension_of(file_name: str) -> Optional[str]:
    """
    Extract the extension of a file name.

    Directory components are ignored so that dots in folder names never count.

    Returns:
        The text after the last dot, or None if the name has no dot.
    """
    name = file_name.strip()
    sep_idx = max(name.rfind("/"), name.rfind("\\"))
    if sep_idx >= 0:
        name = name[sep_idx + 1:]
    dot_idx = name.rfind(".")
    if dot_idx < 0:
        return None
    return name[dot_idx + 1:]


def match_mime_type(
    mime_type: Optional[str],
    formats: Iterable[RDFFormat],
    fallback: Optional[RDFFormat] = None,
) -> Optional[RDFFormat]:
    """
    Find the first format that declares a MIME type.

    Args:
        mime_type: Candidate MIME type, e.g. "text/turtle;charset=UTF-8".
        formats: Formats to search, in priority order.
        fallback: Returned when nothing matches.

    Returns:
        The matching format, or fallback (which may be None).
    """
    if not mime_type:
        return fallback
    candidate = normalize_mime_type(mime_type).lower()
    for fmt in formats:
        for declared in fmt.mime_types:
            if declared.lower() == candidate:
                return fmt
    logger.debug(f"No format matches MIME type '{mime_type}'")
    return fallback


def match_file_name(
    file_name: Optional[str],
    formats: Iterable[RDFFormat],
    fallback: Optional[RDFFormat] = None,
) -> Optional[RDFFormat]:
    """
    Find the first format that declares the extension of a file name.

    Args:
        file_name: Candidate file name or path, e.g. "dumps/data.nt".
        formats: Formats to search, in priority order.
        fallback: Returned when nothing matches.

    Returns:
        The matching format, or fallback (which may be None).
    """
    if not file_name:
        return fallback
    ext = file_extension_of(file_name)
    if ext is None:
        return fallback
    candidate = ext.lower()
    for fmt in formats:
        for declared in fmt.file_extensions:
            if declared.lower() == candidate:
                return fmt
    logger.debug(f"No format matches file name '{file_name}'")
    return fallback


def quality_of(
    fmt: RDFFormat,
    require_context: bool = False,
    preferred_format: Optional[RDFFormat] = None,
) -> int:
    """Score a format on a 0-10 scale for content negotiation."""
    q_value = MAX_QUALITY
    if require_context and not fmt.supports_contexts:
        q_value -= CONTEXT_PENALTY
    if preferred_format is not None and preferred_format != fmt:
        q_value -= PREFERENCE_PENALTY
    if not fmt.supports_namespaces:
        q_value -= NAMESPACE_PENALTY
    return q_value


def rank_for_negotiation(
    formats: Iterable[RDFFormat],
    require_context: bool = False,
    preferred_format: Optional[RDFFormat] = None,
) -> List[str]:
    """
    Build Accept header parameters for a set of formats.

    Every MIME type of every format yields one entry; entries of formats scoring
    below the maximum carry a ``;q=0.N`` annotation. Entries keep the order of
    the input formats.

    Args:
        formats: Candidate formats.
        require_context: Penalize formats that cannot encode contexts.
        preferred_format: Penalize every format except this one.

    Returns:
        List of Accept parameters, e.g. ["text/turtle", "text/plain;q=0.9"].
    """
    accept_params: List[str] = []
    for fmt in formats:
        q_value = quality_of(fmt, require_context, preferred_format)
        for mime_type in fmt.mime_types:
            if q_value < MAX_QUALITY:
                accept_params.append(f"{mime_type};q=0.{q_value}")
            else:
                accept_params.append(mime_type)
    return accept_params


def accept_header(
    formats: Iterable[RDFFormat],
    require_context: bool = False,
    preferred_format: Optional[RDFFormat] = None,
) -> str:
    """Join the negotiation parameters into a single Accept header value."""
    return ", ".join(rank_for_negotiation(formats, require_context, preferred_format))
