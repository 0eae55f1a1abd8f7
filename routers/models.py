from pydantic import BaseModel

from utils.device_model import DeviceClass


class SemanticVersionDto(BaseModel):
    major: int
    minor: int
    patch: int
    preRelease: list[str] = []
    build: list[str] = []
    version: str
    isError: bool = False


class BundleInfoResponseDto(BaseModel):
    id: str
    name: str
    version: SemanticVersionDto


class DeviceResponseDto(BaseModel):
    modelType: str
    deviceClass: DeviceClass | None = None
    isSimulator: bool
    isVirtualMachine: bool
    identifier: str | None = None
    majorVersion: int | None = None
    minorVersion: int | None = None


class DeviceClassificationDto(BaseModel):
    modelType: str
    deviceClass: DeviceClass
