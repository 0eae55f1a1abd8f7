"""Semantic version value with semver 2.0.0 precedence."""

import re
from dataclasses import dataclass, field, replace
from functools import total_ordering

# Identifiers are dot-separated; each one is a non-empty run of these characters
IDENTIFIER_PATTERN = re.compile(r"[0-9A-Za-z-]+")

_VERSION_PATTERN = re.compile(
    r"(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)"
    r"(?:-(?P<pre_release>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
)


def _identifier_key(identifier: str) -> tuple[int, int, str]:
    # Numeric identifiers sort numerically and always before alphanumeric ones
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


@total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """
    Represents a semantic version: ``major.minor.patch[-preRelease][+build]``.

    Build identifiers are informational only. They are rendered by ``str()``
    but take no part in equality, hashing or ordering.
    """

    major: int
    minor: int
    patch: int
    pre_release: tuple[str, ...] = field(default=())
    build: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

        # Accept any iterable of identifiers but always store tuples
        object.__setattr__(self, "pre_release", tuple(self.pre_release))
        object.__setattr__(self, "build", tuple(self.build))

        for identifier in self.pre_release + self.build:
            if not isinstance(identifier, str) or not IDENTIFIER_PATTERN.fullmatch(
                identifier
            ):
                raise ValueError(f"Invalid semantic version identifier: {identifier!r}")

    @property
    def is_pre_release(self) -> bool:
        return bool(self.pre_release)

    @property
    def is_error(self) -> bool:
        """True when this version is an error sentinel rather than a real version."""
        return "ERROR" in self.pre_release

    def with_build(self, *identifiers: str) -> "SemanticVersion":
        """Return a copy of this version carrying the given build identifiers."""
        return replace(self, build=identifiers)

    def _precedence_key(self) -> tuple:
        if not self.pre_release:
            # A release outranks every pre-release of the same core version
            pre_release_key: tuple = (1,)
        else:
            pre_release_key = (0, tuple(_identifier_key(i) for i in self.pre_release))
        return (self.major, self.minor, self.patch, pre_release_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence_key() == other._precedence_key()

    def __lt__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()

    def __hash__(self) -> int:
        return hash(self._precedence_key())

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release:
            version += "-" + ".".join(self.pre_release)
        if self.build:
            version += "+" + ".".join(self.build)
        return version


def parse_semantic_version(version_string: str) -> SemanticVersion:
    """
    Parse a full semantic version string.

    Args:
        version_string: Version string (e.g., "1.2.3", "2.0.0-beta.1+456")

    Returns:
        SemanticVersion with every component of the string

    Raises:
        ValueError: If the string is not ``major.minor.patch[-pre][+build]``
    """
    version_string = version_string.strip()
    match = _VERSION_PATTERN.fullmatch(version_string)

    if not match:
        raise ValueError(f"Invalid version format: {version_string}")

    pre_release = match.group("pre_release")
    build = match.group("build")
    return SemanticVersion(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        pre_release=tuple(pre_release.split(".")) if pre_release else (),
        build=tuple(build.split(".")) if build else (),
    )
