"""
Parser and writer settings.

A RioSetting names one configurable behaviour and carries its default. A
RioConfig bag stores values for any subset of settings and, separately, the set
of error conditions that should be reported and skipped instead of aborting
the parse.

Usage:
    from rdfrio.settings import ParserConfig, BasicParserSettings, NTriplesParserSettings

    config = ParserConfig()
    config.set(BasicParserSettings.PRESERVE_BNODE_IDS, True)
    config.add_non_fatal(NTriplesParserSettings.FAIL_ON_INVALID_LINES)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Generic, Iterable, List, Optional, Set, TypeVar

from .errors import RioConfigurationError

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class RioSetting(Generic[T]):
    """
    A named setting with a default value.

    Keys are globally unique; two settings with the same key are the same
    setting.

    Attributes:
        key: Unique dotted key, e.g. "rdfrio.parser.preserve-bnode-ids".
        description: Human-readable description.
        default_value: Value used when a bag does not hold one.
        value_type: Optional type values must have; checked by validate().
    """

    key: str
    description: str
    default_value: T
    value_type: Optional[type] = field(default=None)

    def validate(self, value: Any) -> None:
        """
        Check a value against the declared type.

        Raises:
            RioConfigurationError: If the value has the wrong type.
        """
        if self.value_type is None or value is None:
            return
        if self.value_type is not bool and isinstance(value, bool):
            ok = False
        else:
            ok = isinstance(value, self.value_type)
        if not ok:
            raise RioConfigurationError(
                f"Invalid value {value!r} for setting '{self.key}': "
                f"expected {self.value_type.__name__}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RioSetting):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"RioSetting({self.key!r}, default={self.default_value!r})"


class RioConfig:
    """
    A bag of setting values plus the set of non-fatal error conditions.

    Settings absent from the bag resolve to their defaults. The bag is meant to
    be filled before an operation and read during it.
    """

    def __init__(self) -> None:
        self._settings: Dict[RioSetting, Any] = {}
        self._non_fatal_errors: Set[RioSetting] = set()

    def get(self, setting: RioSetting[T]) -> T:
        """Return the stored value, or the setting's default."""
        return self._settings.get(setting, setting.default_value)

    def set(self, setting: RioSetting[T], value: T) -> "RioConfig":
        """Store a value, replacing any previous one. Returns the bag."""
        self._settings[setting] = value
        return self

    def is_set(self, setting: RioSetting) -> bool:
        return setting in self._settings

    def remove(self, setting: RioSetting) -> None:
        self._settings.pop(setting, None)

    def use_defaults(self) -> None:
        """Drop every stored value and the non-fatal error set."""
        self._settings.clear()
        self._non_fatal_errors.clear()

    def settings(self) -> List[RioSetting]:
        """Settings that hold an explicit value, in the order they were set."""
        return list(self._settings)

    # =========================================================================
    # Non-fatal errors
    # =========================================================================

    def is_non_fatal(self, setting: RioSetting) -> bool:
        return setting in self._non_fatal_errors

    def add_non_fatal(self, setting: RioSetting) -> "RioConfig":
        self._non_fatal_errors.add(setting)
        return self

    def remove_non_fatal(self, setting: RioSetting) -> "RioConfig":
        self._non_fatal_errors.discard(setting)
        return self

    def set_non_fatal_errors(self, settings: Iterable[RioSetting]) -> "RioConfig":
        self._non_fatal_errors = set(settings)
        return self

    @property
    def non_fatal_errors(self) -> FrozenSet[RioSetting]:
        return frozenset(self._non_fatal_errors)

    def __repr__(self) -> str:
        values = ", ".join(f"{s.key}={v!r}" for s, v in self._settings.items())
        return f"{self.__class__.__name__}({values})"


class ParserConfig(RioConfig):
    """Settings bag for one parse operation."""


class WriterConfig(RioConfig):
    """Settings bag for one write operation."""


# =============================================================================
# Setting groups
# =============================================================================

class BasicParserSettings:
    """Settings understood by most parsers."""

    PRESERVE_BNODE_IDS: RioSetting[bool] = RioSetting(
        "rdfrio.parser.preserve-bnode-ids",
        "Keep blank node identifiers from the document instead of minting fresh ones",
        False,
        bool,
    )

    VERIFY_LANGUAGE_TAGS: RioSetting[bool] = RioSetting(
        "rdfrio.parser.verify-language-tags",
        "Report language tags that are not well-formed",
        True,
        bool,
    )

    VERIFY_RELATIVE_URIS: RioSetting[bool] = RioSetting(
        "rdfrio.parser.verify-relative-uris",
        "Report relative IRIs in formats that require absolute ones",
        True,
        bool,
    )


class NTriplesParserSettings:
    """Settings specific to the N-Triples and N-Quads parsers."""

    FAIL_ON_INVALID_LINES: RioSetting[bool] = RioSetting(
        "rdfrio.ntriples.fail-on-invalid-lines",
        "Abort on a malformed line instead of reporting and skipping it",
        True,
        bool,
    )


class YARSParserSettings:
    """Settings specific to the YARS parser."""

    CASE_INSENSITIVE_DIRECTIVES: RioSetting[bool] = RioSetting(
        "rdfrio.yars.case-insensitive-directives",
        "Allows case-insensitive directives to be recognised",
        False,
        bool,
    )


class BasicWriterSettings:
    """Settings understood by most writers."""

    PRETTY_PRINT: RioSetting[bool] = RioSetting(
        "rdfrio.writer.pretty-print",
        "Lay the output out over several lines where the format allows it",
        True,
        bool,
    )


_SETTING_GROUPS = (
    BasicParserSettings,
    NTriplesParserSettings,
    YARSParserSettings,
    BasicWriterSettings,
)


def known_settings() -> List[RioSetting]:
    """List every setting declared by the built-in setting groups."""
    found: List[RioSetting] = []
    for group in _SETTING_GROUPS:
        for value in vars(group).values():
            if isinstance(value, RioSetting):
                found.append(value)
    return found


def lookup_setting(key: str) -> Optional[RioSetting]:
    """Find a built-in setting by key."""
    for setting in known_settings():
        if setting.key == key:
            return setting
    return None
