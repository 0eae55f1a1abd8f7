"""Hardware model identifier parsing and device classification."""

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from services.hardware_identifier import HardwareIdentifierProvider


class ModelType(str):
    """
    A device's model type, like ``"MacBookPro"`` or ``"iPad"``.

    Compares, hashes and orders exactly like the underlying string.
    """

    __slots__ = ()

    UNKNOWN: ClassVar["ModelType"]

    @property
    def device_class(self) -> "DeviceClass | None":
        return classify(self)

    @property
    def is_simulator(self) -> bool:
        return is_simulator(self)

    @property
    def is_virtual_machine(self) -> bool:
        return is_virtual_machine(self)

    @property
    def is_unknown(self) -> bool:
        return self == UNKNOWN_MODEL_TYPE

    def __repr__(self) -> str:
        return f"ModelType({str(self)!r})"


# Placeholder for when the model type cannot be identified
UNKNOWN_MODEL_TYPE = "__UNKNOWN__"
ModelType.UNKNOWN = ModelType(UNKNOWN_MODEL_TYPE)


class DeviceClass(str, Enum):
    """A broad class of device, like "desktop" or "phone"."""

    TV_BOX = "tvBox"
    DESKTOP = "desktop"
    LAPTOP = "laptop"
    TABLET = "tablet"
    PHONE = "phone"
    PORTABLE_MUSIC_PLAYER = "portableMusicPlayer"
    WATCH = "watch"


# Model type prefixes reported by Apple hardware
MAC_BOOK = ModelType("MacBook")
MAC_BOOK_AIR = ModelType("MacBookAir")
MAC_BOOK_PRO = ModelType("MacBookPro")
IMAC = ModelType("iMac")
IMAC_PRO = ModelType("iMacPro")
MAC_MINI = ModelType("Macmini")
MAC_PRO = ModelType("MacPro")
IPHONE = ModelType("iPhone")
IPOD = ModelType("iPod")
IPAD = ModelType("iPad")
WATCH = ModelType("Watch")
TV = ModelType("AppleTV")

# Simulators report their CPU architecture instead of a model identifier
IPHONE_SIMULATOR_I386 = ModelType("i386")
IPHONE_SIMULATOR_X86_64 = ModelType("x86_64")
IPHONE_SIMULATOR_ARM64 = ModelType("arm64")
VM_VMWARE = ModelType("VMware")

DEVICE_CLASSES: MappingProxyType[str, DeviceClass] = MappingProxyType(
    {
        TV: DeviceClass.TV_BOX,
        IMAC: DeviceClass.DESKTOP,
        IMAC_PRO: DeviceClass.DESKTOP,
        MAC_MINI: DeviceClass.DESKTOP,
        MAC_PRO: DeviceClass.DESKTOP,
        MAC_BOOK: DeviceClass.LAPTOP,
        MAC_BOOK_AIR: DeviceClass.LAPTOP,
        MAC_BOOK_PRO: DeviceClass.LAPTOP,
        IPAD: DeviceClass.TABLET,
        IPHONE: DeviceClass.PHONE,
        IPOD: DeviceClass.PORTABLE_MUSIC_PLAYER,
        WATCH: DeviceClass.WATCH,
    }
)

SIMULATOR_MODEL_TYPES = frozenset(
    {IPHONE_SIMULATOR_I386, IPHONE_SIMULATOR_X86_64, IPHONE_SIMULATOR_ARM64}
)
VIRTUAL_MACHINE_MODEL_TYPES = frozenset({VM_VMWARE})

# "MacBookAir9,1" is model type "MacBookAir", major version "9" and minor
# version "1"; the model type is the shortest word prefix before the digits
MODEL_TYPE_PATTERN = re.compile(r"\w+")


def classify(model_type: str) -> DeviceClass | None:
    """The device class indicated by a model type, or None if it can't be determined."""
    return DEVICE_CLASSES.get(model_type)


def is_simulator(model_type: str) -> bool:
    """Whether a model type likely represents a simulator."""
    return model_type in SIMULATOR_MODEL_TYPES


def is_virtual_machine(model_type: str) -> bool:
    """Whether a model type likely represents a virtual machine."""
    return model_type in VIRTUAL_MACHINE_MODEL_TYPES


@dataclass(frozen=True)
class ModelIdentifier:
    """A hardware model identifier split into its model type and version."""

    model_type: ModelType
    major_version: int | None = None
    minor_version: int | None = None
    identifier: str | None = None

    @property
    def version(self) -> str | None:
        if self.major_version is None or self.minor_version is None:
            return None
        return f"{self.major_version},{self.minor_version}"


def parse_model_identifier(identifier: str | None) -> ModelIdentifier:
    """
    Parse a hardware model identifier like ``"MacBookPro16,1"``.

    Identifiers that aren't Apple-style (no trailing ``<digits>,<digits>``),
    such as a simulator's ``"x86_64"``, are kept verbatim as the model type.

    Args:
        identifier: Raw identifier from the hardware, or None if unavailable

    Returns:
        ModelIdentifier; its model type is ``ModelType.UNKNOWN`` when the
        identifier is None
    """
    if identifier is None:
        return ModelIdentifier(model_type=ModelType.UNKNOWN)

    parts = _split_identifier(identifier)
    if parts is None:
        return ModelIdentifier(model_type=ModelType(identifier), identifier=identifier)

    model_type, major, minor = parts
    try:
        major_version, minor_version = int(major), int(minor)
    except ValueError:
        # Past the interpreter's digit limit; the model type still stands
        major_version = minor_version = None

    return ModelIdentifier(
        model_type=ModelType(model_type),
        major_version=major_version,
        minor_version=minor_version,
        identifier=identifier,
    )


def _split_identifier(identifier: str) -> tuple[str, str, str] | None:
    """Split into (model type, major, minor), or None if not Apple-style."""
    head, sep, minor = identifier.rpartition(",")
    if not sep or not minor.isdecimal():
        return None

    # Leave at least one character for the model type
    start = len(head)
    while start > 1 and head[start - 1].isdecimal():
        start -= 1

    model_type, major = head[:start], head[start:]
    if not major or not MODEL_TYPE_PATTERN.fullmatch(model_type):
        return None
    return model_type, major, minor


def parse_model_token(identifier: str | None) -> ModelType:
    """The model type of a raw hardware identifier, e.g. ``"MacBookAir9,1"`` -> ``"MacBookAir"``."""
    return parse_model_identifier(identifier).model_type


@dataclass(frozen=True, eq=False)
class Device:
    """
    A device, identified by its model type.

    When no class is given, it is inferred from the model type. Two devices
    are equal when their model types are equal; the class is not compared.
    """

    model_type: ModelType
    device_class: DeviceClass | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.model_type, ModelType):
            object.__setattr__(self, "model_type", ModelType(self.model_type))
        if self.device_class is None:
            object.__setattr__(self, "device_class", classify(self.model_type))

    @classmethod
    def from_identifier(cls, identifier: str | None) -> "Device":
        return cls(model_type=parse_model_token(identifier))

    @property
    def is_simulator(self) -> bool:
        return self.model_type.is_simulator

    @property
    def is_virtual_machine(self) -> bool:
        return self.model_type.is_virtual_machine

    @property
    def is_unknown(self) -> bool:
        return self.model_type.is_unknown

    @property
    def display_name(self) -> str:
        return str(self.model_type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return self.model_type == other.model_type

    def __hash__(self) -> int:
        return hash(self.model_type)

    def __str__(self) -> str:
        return self.display_name


KNOWN_DEVICES: MappingProxyType[str, Device] = MappingProxyType(
    {
        "mac_book": Device(MAC_BOOK),
        "mac_book_air": Device(MAC_BOOK_AIR),
        "mac_book_pro": Device(MAC_BOOK_PRO),
        "imac": Device(IMAC),
        "imac_pro": Device(IMAC_PRO),
        "mac_mini": Device(MAC_MINI),
        "mac_pro": Device(MAC_PRO),
        "iphone": Device(IPHONE),
        "ipod": Device(IPOD),
        "ipad": Device(IPAD),
        "watch": Device(WATCH),
        "tv": Device(TV),
        "iphone_simulator_i386": Device(IPHONE_SIMULATOR_I386),
        "iphone_simulator_x86_64": Device(IPHONE_SIMULATOR_X86_64),
        "iphone_simulator_arm64": Device(IPHONE_SIMULATOR_ARM64),
        "vm_vmware": Device(VM_VMWARE),
    }
)


def current_device(provider: "HardwareIdentifierProvider | None" = None) -> Device:
    """
    The device this process is running on.

    Args:
        provider: Source of the raw hardware identifier; defaults to the
            configured provider

    Returns:
        Device whose model type is ``ModelType.UNKNOWN`` if no identifier
        could be read
    """
    if provider is None:
        from services.hardware_identifier import get_hardware_identifier_provider

        provider = get_hardware_identifier_provider()

    return Device.from_identifier(provider.get_identifier())
