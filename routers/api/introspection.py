from typing import Annotated, Any, List

from fastapi import APIRouter, Body, Query

from routers.models import (
    BundleInfoResponseDto,
    DeviceClassificationDto,
    DeviceResponseDto,
    SemanticVersionDto,
)
from routers.utils.introspection_conversion import (
    convert_bundle_to_dto,
    convert_identifier_to_dto,
    convert_version_to_dto,
)
from services.bundle_source import get_main_bundle
from services.hardware_identifier import get_hardware_identifier_provider
from utils.bundle_info import BundleInfo, extract_version
from utils.device_model import DEVICE_CLASSES, parse_model_identifier

router = APIRouter(
    prefix="/api/introspection",
    tags=["introspection"],
    responses={404: {"description": "Not found"}},
)


@router.get("/device")
async def get_device(
    identifier: Annotated[str | None, Query()] = None,
) -> DeviceResponseDto:
    """
    Describe a device from its hardware model identifier (e.g. "MacBookAir9,1").
    Without an identifier, describes the device this service runs on.
    """
    if identifier is None:
        identifier = get_hardware_identifier_provider().get_identifier()
    return convert_identifier_to_dto(parse_model_identifier(identifier))


@router.get("/device/classes")
async def get_device_classes() -> List[DeviceClassificationDto]:
    """
    List the model types that map to a known device class.
    """
    return [
        DeviceClassificationDto(modelType=str(model_type), deviceClass=device_class)
        for model_type, device_class in DEVICE_CLASSES.items()
    ]


@router.get("/bundle")
async def get_main_bundle_info() -> BundleInfoResponseDto:
    """
    Get the id, name and version of the main bundle.
    """
    return convert_bundle_to_dto(get_main_bundle())


@router.post("/bundle")
async def read_bundle_info(
    info: Annotated[dict[str, Any], Body()],
) -> BundleInfoResponseDto:
    """
    Get the id, name and version of the bundle described by an info dictionary.
    """
    return convert_bundle_to_dto(BundleInfo(info))


@router.get("/version")
async def get_version(
    short_version: Annotated[str | None, Query(alias="shortVersion")] = None,
    build: Annotated[str | None, Query()] = None,
) -> SemanticVersionDto:
    """
    Build a semantic version from a short version string and a build string.
    Unparseable input yields an error version, not an error response.
    """
    return convert_version_to_dto(extract_version(short_version, build))
