"""
Utility functions for converting introspection values to API response models.
"""

from routers.models import (
    BundleInfoResponseDto,
    DeviceResponseDto,
    SemanticVersionDto,
)
from utils.bundle_info import (
    BundleInfoSource,
    bundle_id,
    bundle_name,
    bundle_version,
)
from utils.device_model import Device, ModelIdentifier
from utils.semantic_version import SemanticVersion


def convert_version_to_dto(version: SemanticVersion) -> SemanticVersionDto:
    return SemanticVersionDto(
        major=version.major,
        minor=version.minor,
        patch=version.patch,
        preRelease=list(version.pre_release),
        build=list(version.build),
        version=str(version),
        isError=version.is_error,
    )


def convert_bundle_to_dto(source: BundleInfoSource) -> BundleInfoResponseDto:
    """
    Summarize a bundle's id, name and version.

    Missing or malformed values come back as the accessors' sentinel values,
    never as errors.
    """
    return BundleInfoResponseDto(
        id=bundle_id(source),
        name=bundle_name(source),
        version=convert_version_to_dto(bundle_version(source)),
    )


def convert_identifier_to_dto(parsed: ModelIdentifier) -> DeviceResponseDto:
    """
    Describe the device a parsed hardware model identifier belongs to.

    Args:
        parsed: Result of parsing the raw hardware identifier

    Returns:
        DeviceResponseDto with the inferred class and the simulator/VM flags
    """
    device = Device(model_type=parsed.model_type)
    return DeviceResponseDto(
        modelType=str(device.model_type),
        deviceClass=device.device_class,
        isSimulator=device.is_simulator,
        isVirtualMachine=device.is_virtual_machine,
        identifier=parsed.identifier,
        majorVersion=parsed.major_version,
        minorVersion=parsed.minor_version,
    )
