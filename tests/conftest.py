"""Test configuration and shared fixtures."""

import plistlib
from datetime import datetime

import pytest

from config.settings import get_settings
from services.bundle_source import get_main_bundle
from services.hardware_identifier import get_hardware_identifier_provider

# Configure anyio to use only asyncio backend
pytest_plugins = ("anyio",)


@pytest.fixture(scope="session")
def anyio_backend():
    """Force asyncio backend for all tests."""
    return "asyncio"


@pytest.fixture(autouse=True)
def clear_cached_configuration():
    """Drop cached settings, main bundle and hardware provider between tests."""
    get_settings.cache_clear()
    get_main_bundle.cache_clear()
    get_hardware_identifier_provider.cache_clear()
    yield
    get_settings.cache_clear()
    get_main_bundle.cache_clear()
    get_hardware_identifier_provider.cache_clear()


@pytest.fixture
def sample_info_dictionary():
    """An info dictionary like the one Finder ships with."""
    return {
        "CFBundleIdentifier": "com.apple.finder",
        "CFBundleName": "Finder",
        "CFBundleShortVersionString": "14.5",
        "CFBundleVersion": "1654.5.3",
        "LSMinimumSystemVersion": "14.0",
        "LSUIElement": False,
        "NSHighResolutionCapable": True,
        "CFBundleDevelopmentRegion": "en",
        "BuildMachineOSBuild": "23F79",
        "DTPlatformBuild": "",
        "BuildDate": datetime(2024, 5, 1, 12, 0, 0),
        "SupportedFeatureCount": 12,
        "DisplayScale": 2.0,
        "IconData": b"\x89PNG",
        "CFBundleDocumentTypes": [{"CFBundleTypeName": "Folder"}],
    }


@pytest.fixture
def write_info_plist(tmp_path):
    """Factory that writes an info dictionary as an Info.plist and returns its path."""

    def _write(info, relative_path="Info.plist", fmt=plistlib.FMT_XML):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as fp:
            plistlib.dump(info, fp, fmt=fmt)
        return path

    return _write
