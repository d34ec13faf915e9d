"""Format descriptor shared by the registries, the matcher and the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

SUPPORTS_NAMESPACES = True
NO_NAMESPACES = False
SUPPORTS_CONTEXTS = True
NO_CONTEXTS = False


def _as_tuple(values: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True, eq=False, slots=True)
class RDFFormat:
    """
    Identity and metadata of one RDF serialization.

    Formats are identified by name: two descriptors with the same name are the
    same format, whatever their other fields say.

    Attributes:
        name: Canonical, case-sensitive format name (e.g. "Turtle").
        mime_types: MIME types, the first one being the default.
        file_extensions: File extensions without the leading dot, the first
            one being the default. May be empty.
        charset: Default character encoding, or None if not applicable.
        supports_namespaces: Whether namespace declarations can be encoded.
        supports_contexts: Whether statement contexts (named graphs) can be
            encoded.
    """

    name: str
    mime_types: Tuple[str, ...]
    file_extensions: Tuple[str, ...] = ()
    charset: Optional[str] = None
    supports_namespaces: bool = NO_NAMESPACES
    supports_contexts: bool = NO_CONTEXTS

    def __post_init__(self) -> None:
        object.__setattr__(self, "mime_types", _as_tuple(self.mime_types))
        object.__setattr__(self, "file_extensions", _as_tuple(self.file_extensions))

    @property
    def default_mime_type(self) -> Optional[str]:
        return self.mime_types[0] if self.mime_types else None

    @property
    def default_file_extension(self) -> Optional[str]:
        return self.file_extensions[0] if self.file_extensions else None

    @property
    def has_charset(self) -> bool:
        return self.charset is not None

    def has_mime_type(self, mime_type: str) -> bool:
        """Check whether a MIME type (parameters ignored) belongs to this format."""
        if mime_type is None:
            return False
        base_type = mime_type.split(";", 1)[0].strip().lower()
        return any(m.lower() == base_type for m in self.mime_types)

    def has_file_extension(self, extension: str) -> bool:
        """Check whether an extension, with or without leading dot, belongs to this format."""
        if extension is None:
            return False
        ext = extension.strip().lower()
        if ext.startswith("."):
            ext = ext[1:]
        return any(e.lower() == ext for e in self.file_extensions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RDFFormat):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return (
            f"{self.name} (mimeTypes={', '.join(self.mime_types)}; "
            f"ext={', '.join(self.file_extensions)})"
        )
