"""
API Integration Tests for Enhancement Endpoints
"""

import pytest


class TestEnhanceAPI:
    """Integration tests for transform endpoints"""

    @pytest.mark.parametrize("endpoint", ["contrast", "otsu", "invert"])
    def test_parameterless_transforms(self, client, loaded_image_id, endpoint):
        response = client.post(f"/api/enhance/{endpoint}", json={"image_id": loaded_image_id})
        assert response.status_code == 200
        data = response.json()
        assert data["method"] == endpoint
        assert data["image_id"] == loaded_image_id
        assert data["processing_time_ms"] >= 0
        assert data["thumbnail_base64"]

    def test_otsu_returns_threshold(self, client, loaded_image_id):
        data = client.post("/api/enhance/otsu", json={"image_id": loaded_image_id}).json()
        assert 0 <= data["threshold"] <= 255
        assert data["info"]["pixel_format"] == "gray"
        assert data["format_changed"] is True

    def test_threshold(self, client, loaded_image_id):
        response = client.post(
            "/api/enhance/threshold", json={"image_id": loaded_image_id, "threshold": 200}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["threshold"] == 200
        assert data["info"]["channels"] == 1

    def test_threshold_default(self, client, loaded_image_id):
        data = client.post("/api/enhance/threshold", json={"image_id": loaded_image_id}).json()
        assert data["threshold"] == 128

    def test_brightness(self, client, loaded_image_id):
        response = client.post(
            "/api/enhance/brightness", json={"image_id": loaded_image_id, "delta": -40}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["format_changed"] is False
        assert data["info"]["pixel_format"] == "rgb"

        metadata = client.get(f"/api/image/{loaded_image_id}").json()
        assert metadata["last_method"] == "brightness"
        assert metadata["params"] == {"delta": -40}

    @pytest.mark.parametrize(
        "endpoint, body",
        [
            ("threshold", {"threshold": 256}),
            ("threshold", {"threshold": -1}),
            ("brightness", {"delta": 300}),
            ("brightness", {"delta": -256}),
        ],
    )
    def test_out_of_range_sliders(self, client, loaded_image_id, endpoint, body):
        body["image_id"] = loaded_image_id
        assert client.post(f"/api/enhance/{endpoint}", json=body).status_code == 422

    @pytest.mark.parametrize("endpoint", ["contrast", "otsu", "invert", "threshold", "brightness"])
    def test_unknown_image(self, client, endpoint):
        response = client.post(f"/api/enhance/{endpoint}", json={"image_id": "img_missing"})
        assert response.status_code == 404
        assert "img_missing" in response.json()["error"]


class TestHistogramAPI:
    """Integration tests for the histogram endpoint"""

    def test_histogram(self, client, loaded_image_id):
        response = client.get(f"/api/enhance/{loaded_image_id}/histogram")
        assert response.status_code == 200
        data = response.json()
        assert len(data["counts"]) == 256
        assert data["total"] == 160 * 120
        assert data["source"] == "original"
        assert data["otsu_threshold"] is not None

    def test_histogram_of_result(self, client, loaded_image_id):
        client.post("/api/enhance/threshold", json={"image_id": loaded_image_id, "threshold": 100})
        data = client.get(
            f"/api/enhance/{loaded_image_id}/histogram", params={"processed": True}
        ).json()
        assert data["source"] == "processed"
        nonzero = [level for level, count in enumerate(data["counts"]) if count]
        assert set(nonzero) <= {0, 255}

    def test_histogram_unknown_image(self, client):
        assert client.get("/api/enhance/img_missing/histogram").status_code == 404


class TestSystemAPI:
    """Integration tests for system endpoints"""

    def test_status(self, client, loaded_image_id):
        response = client.get("/api/system/status")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["image_store"]["image_count"] == 1

    def test_root_and_health(self, client):
        assert client.get("/").json()["name"] == "Image Enhancement Flow"
        assert client.get("/health").json()["services"]["image_manager"] is True
