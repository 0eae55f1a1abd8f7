"""Integration tests for introspection endpoints."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from services.hardware_identifier import StaticHardwareIdentifierProvider
from utils.bundle_info import BundleInfo


@pytest.fixture
def client():
    """Create a test client."""
    from main import app

    with TestClient(app) as client:
        yield client


class TestDeviceEndpoint:
    def test_get_device_for_identifier(self, client):
        """Test GET /api/introspection/device classifies the given identifier."""
        response = client.get(
            "/api/introspection/device", params={"identifier": "MacBookAir9,1"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "modelType": "MacBookAir",
            "deviceClass": "laptop",
            "isSimulator": False,
            "isVirtualMachine": False,
            "identifier": "MacBookAir9,1",
            "majorVersion": 9,
            "minorVersion": 1,
        }

    def test_get_device_for_simulator_identifier(self, client):
        response = client.get(
            "/api/introspection/device", params={"identifier": "x86_64"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["modelType"] == "x86_64"
        assert data["deviceClass"] is None
        assert data["isSimulator"] is True
        assert data["majorVersion"] is None

    def test_get_device_for_oversized_identifier(self, client):
        response = client.get(
            "/api/introspection/device",
            params={"identifier": "iPhone" + "1" * 5000 + ",1"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["modelType"] == "iPhone"
        assert data["deviceClass"] == "phone"
        assert data["majorVersion"] is None
        assert data["minorVersion"] is None

    def test_get_current_device(self, client):
        """Test that the current device comes from the configured provider."""
        provider = StaticHardwareIdentifierProvider("AppleTV11,1")

        with patch(
            "routers.api.introspection.get_hardware_identifier_provider",
            return_value=provider,
        ):
            response = client.get("/api/introspection/device")

        assert response.status_code == 200
        data = response.json()
        assert data["modelType"] == "AppleTV"
        assert data["deviceClass"] == "tvBox"

    def test_get_current_device_unavailable(self, client):
        provider = StaticHardwareIdentifierProvider(None)

        with patch(
            "routers.api.introspection.get_hardware_identifier_provider",
            return_value=provider,
        ):
            response = client.get("/api/introspection/device")

        assert response.status_code == 200
        data = response.json()
        assert data["modelType"] == "__UNKNOWN__"
        assert data["deviceClass"] is None
        assert data["identifier"] is None

    def test_get_device_classes(self, client):
        response = client.get("/api/introspection/device/classes")

        assert response.status_code == 200
        classes = {item["modelType"]: item["deviceClass"] for item in response.json()}
        assert len(classes) == 12
        assert classes["Macmini"] == "desktop"
        assert classes["iPod"] == "portableMusicPlayer"
        assert "x86_64" not in classes


class TestBundleEndpoints:
    def test_post_bundle_info(self, client, sample_info_dictionary):
        info = {
            key: value
            for key, value in sample_info_dictionary.items()
            if isinstance(value, (str, bool, int, float, list))
        }

        response = client.post("/api/introspection/bundle", json=info)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "com.apple.finder"
        assert data["name"] == "Finder"
        assert data["version"] == {
            "major": 14,
            "minor": 5,
            "patch": 0,
            "preRelease": [],
            "build": ["1654", "5", "3"],
            "version": "14.5.0+1654.5.3",
            "isError": False,
        }

    def test_post_empty_bundle_info_returns_sentinels(self, client):
        """Test that missing values produce sentinel values, not errors."""
        response = client.post("/api/introspection/bundle", json={})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "ERROR.NO_BUNDLE_ID_FOUND"
        assert data["name"] == ""
        assert data["version"]["isError"] is True
        assert data["version"]["preRelease"] == [
            "ERROR",
            "BundleInfoDictionaryValueNotFound",
            "CFBundleShortVersionString",
        ]

    def test_post_malformed_version_returns_error_version(self, client):
        response = client.post(
            "/api/introspection/bundle",
            json={"CFBundleShortVersionString": "not-a-version"},
        )

        assert response.status_code == 200
        assert (
            response.json()["version"]["version"]
            == "0.0.0-ERROR.BundleInfoDictionaryValueInvalidFormat.CFBundleShortVersionString"
        )

    def test_post_non_object_body_is_rejected(self, client):
        response = client.post("/api/introspection/bundle", json=["not", "a", "dict"])

        assert response.status_code == 422
        data = response.json()
        assert data["statusCode"] == 422
        assert data["error"] == "Unprocessable Entity"
        assert isinstance(data["message"], list)

    def test_get_main_bundle_info(self, client):
        main_bundle = BundleInfo(
            {
                "CFBundleIdentifier": "com.example.service",
                "CFBundleName": "Service",
                "CFBundleShortVersionString": "2.1",
                "CFBundleVersion": "77",
            }
        )

        with patch(
            "routers.api.introspection.get_main_bundle", return_value=main_bundle
        ):
            response = client.get("/api/introspection/bundle")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "com.example.service"
        assert data["name"] == "Service"
        assert data["version"]["version"] == "2.1.0+77"


class TestVersionEndpoint:
    def test_get_version(self, client):
        response = client.get(
            "/api/introspection/version",
            params={"shortVersion": "1.2.3", "build": "456"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["version"] == "1.2.3+456"
        assert data["build"] == ["456"]
        assert data["isError"] is False

    def test_get_version_padded(self, client):
        response = client.get(
            "/api/introspection/version", params={"shortVersion": "1.2", "build": ""}
        )

        assert response.status_code == 200
        assert response.json()["version"] == "1.2.0"

    def test_get_version_missing_short_version(self, client):
        response = client.get("/api/introspection/version")

        assert response.status_code == 200
        data = response.json()
        assert data["isError"] is True
        assert (
            data["version"]
            == "0.0.0-ERROR.BundleInfoDictionaryValueNotFound.CFBundleShortVersionString"
        )


class TestErrorResponses:
    def test_unknown_route(self, client):
        response = client.get("/api/introspection/nothing-here")

        assert response.status_code == 404
