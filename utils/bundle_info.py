"""Typed, never-failing lookups over an application bundle's info dictionary."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Protocol, TypeVar

from utils.semantic_version import SemanticVersion, parse_semantic_version

logger = logging.getLogger(__name__)

# Everything an info dictionary can hold; this is exactly what plistlib produces
BundleValue = (
    bool
    | int
    | float
    | str
    | datetime
    | bytes
    | list["BundleValue"]
    | dict[str, "BundleValue"]
)

BUNDLE_VALUE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    str,
    datetime,
    bytes,
    list,
    dict,
)

SHORT_VERSION_KEY = "CFBundleShortVersionString"
BUILD_VERSION_KEY = "CFBundleVersion"
NAME_KEY = "CFBundleName"
IDENTIFIER_KEY = "CFBundleIdentifier"

# Returned in place of a bundle ID; kept stable for existing callers
NO_BUNDLE_ID_FOUND = "ERROR.NO_BUNDLE_ID_FOUND"

_INVALID_IDENTIFIER_CHARACTERS = re.compile(r"[^0-9A-Za-z-]+")

T = TypeVar("T")


class BundleInfoSource(Protocol):
    """Anything that can be queried for info dictionary values by key.

    Plain ``dict`` and other mappings satisfy this protocol.
    """

    def get(self, key: str, default: Any = None, /) -> Any: ...


@dataclass(frozen=True)
class BundleInfo:
    """Immutable snapshot of a bundle's info dictionary."""

    info: Mapping[str, BundleValue] = field(default_factory=dict)

    # Values may be lists and dicts
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "info", MappingProxyType(dict(self.info)))

    def get(self, key: str, default: Any = None, /) -> Any:
        return self.info.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.info

    def __len__(self) -> int:
        return len(self.info)


class BundleInfoError(str, Enum):
    """The ways reading a required info dictionary value can fail."""

    VALUE_NOT_FOUND = "BundleInfoDictionaryValueNotFound"
    VALUE_INVALID_FORMAT = "BundleInfoDictionaryValueInvalidFormat"


def error_version(error: BundleInfoError, *details: str) -> SemanticVersion:
    """
    Build a version which represents an error instead of a real version.

    This lets callers handle error states by inspecting a well-formed,
    comparable version rather than catching exceptions.

    Args:
        error: The kind of failure
        details: Additional details; each must be a valid semver identifier

    Returns:
        ``0.0.0-ERROR.<error>.<details...>``
    """
    return SemanticVersion(0, 0, 0, pre_release=("ERROR", error.value, *details))


def _build_identifiers(build: str) -> tuple[str, ...]:
    # Bundle build numbers are free-form ("12 (3)"); coerce them into identifiers
    identifiers = (
        _INVALID_IDENTIFIER_CHARACTERS.sub("-", part) for part in build.split(".")
    )
    return tuple(identifier for identifier in identifiers if identifier)


def extract_version(short_version: str | None, build: str | None) -> SemanticVersion:
    """
    Turn a bundle's short version string and build string into a semantic version.

    The short version supplies ``major.minor.patch``; versions that omit
    trailing components (``"1.2"``, ``"3"``) are padded with zeros. A non-empty
    build string becomes the version's build metadata.

    This never raises. Failures are returned as error versions:

    - short version missing:
      ``0.0.0-ERROR.BundleInfoDictionaryValueNotFound.CFBundleShortVersionString``
    - short version unparseable:
      ``0.0.0-ERROR.BundleInfoDictionaryValueInvalidFormat.CFBundleShortVersionString``

    Args:
        short_version: The raw ``CFBundleShortVersionString`` value
        build: The raw ``CFBundleVersion`` value

    Returns:
        The parsed version, or an error version
    """
    if short_version is None:
        logger.debug("No %s found in bundle info", SHORT_VERSION_KEY)
        return error_version(BundleInfoError.VALUE_NOT_FOUND, SHORT_VERSION_KEY)

    version = None
    for suffix in ("", ".0", ".0.0"):
        try:
            version = parse_semantic_version(short_version.strip() + suffix)
        except ValueError:
            continue
        if suffix:
            logger.debug(
                "Padded short version %r with %r to parse it", short_version, suffix
            )
        break

    if version is None:
        logger.debug("Short version %r is not a semantic version", short_version)
        return error_version(BundleInfoError.VALUE_INVALID_FORMAT, SHORT_VERSION_KEY)

    if build:
        identifiers = _build_identifiers(build)
        if identifiers:
            version = version.with_build(*identifiers)

    return version


def _resolve_source(source: BundleInfoSource | None) -> BundleInfoSource:
    if source is not None:
        return source

    # Imported here since the main bundle loader depends on this module
    from services.bundle_source import get_main_bundle

    return get_main_bundle()


def bundle_value(
    key: str, kind: type[T], source: BundleInfoSource | None = None
) -> T | None:
    """
    Fetch a value of a specific type from a bundle's info dictionary.

    Args:
        key: The info dictionary key
        kind: One of the bundle value types (bool, int, float, str, datetime,
            bytes, list, dict)
        source: The bundle to read; defaults to the main bundle

    Returns:
        The value if present and of the requested type, otherwise None
    """
    if kind not in BUNDLE_VALUE_TYPES:
        return None

    value = _resolve_source(source).get(key)
    if value is None:
        return None

    # bool is an int subclass and int is not a float; neither should cross over
    if isinstance(value, bool) and kind is not bool:
        return None
    if kind is float and not isinstance(value, float):
        return None

    return value if isinstance(value, kind) else None


def bundle_version(source: BundleInfoSource | None = None) -> SemanticVersion:
    """
    Find the semantic version of a bundle.

    Uses ``CFBundleShortVersionString`` for ``major.minor.patch`` and
    ``CFBundleVersion`` as build metadata. See ``extract_version`` for the
    error versions this can return.
    """
    source = _resolve_source(source)
    return extract_version(
        bundle_value(SHORT_VERSION_KEY, str, source),
        bundle_value(BUILD_VERSION_KEY, str, source),
    )


def bundle_id(source: BundleInfoSource | None = None) -> str:
    """The bundle's identifier, or ``"ERROR.NO_BUNDLE_ID_FOUND"``."""
    identifier = bundle_value(IDENTIFIER_KEY, str, source)
    return NO_BUNDLE_ID_FOUND if identifier is None else identifier


def bundle_name(source: BundleInfoSource | None = None) -> str:
    """The bundle's display name, or an empty string."""
    return bundle_value(NAME_KEY, str, source) or ""
