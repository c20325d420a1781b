"""
Tests for the HTTP API.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

from server import app

client = TestClient(app)


class TestNationalIdApi:

    def test_valid(self):
        response = client.post("/api/national-id/validate", json={"national_id": "1960315123451"})

        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"] is True
        assert body["sex"] == "male"
        assert body["date_of_birth"] == "1996-03-15"
        assert body["region"] == "Cluj"

    def test_invalid_is_not_http_error(self):
        response = client.post("/api/national-id/validate", json={"national_id": "123"})

        assert response.status_code == 200
        assert response.json()["is_valid"] is False
        assert response.json()["error"] == "CNP must be exactly 13 digits."

    def test_regions(self):
        response = client.get("/api/regions")

        assert response.status_code == 200
        assert "Cluj" in response.json()["regions"]


class TestCalculatorApi:

    def test_health(self):
        assert client.get("/api/health").json()["status"] == "healthy"

    def test_demographics(self):
        response = client.post("/api/demographics", json={
            "date_of_birth": "2015-06-01",
            "reference_date": "2025-06-01",
        })

        assert response.status_code == 200
        assert response.json()["age_months"] == 120
        assert response.json()["is_pediatric"] is True

    def test_bmi_adult(self):
        response = client.post("/api/calculators/bmi", json={"height_cm": 170, "weight_kg": 70})

        assert response.status_code == 200
        body = response.json()
        assert body["computed"] is True
        assert body["result"]["bmi"] == 24.2
        assert body["result"]["category"] == "Healthy Weight"
        assert body["observation"]["calculation_type"] == "bmi"

    def test_bmi_pediatric(self):
        response = client.post("/api/calculators/bmi", json={
            "height_cm": 100,
            "weight_kg": 24,
            "date_of_birth": "2015-06-01",
            "sex": "male",
            "reference_date": "2025-06-01",
            "encounter_id": "enc-9",
        })

        body = response.json()
        assert body["result"]["category"] == "Obesity"
        assert body["result"]["meta"]["methodology"] == "CDC LMS 2000 (Pediatric)"
        assert body["observation"]["encounter_id"] == "enc-9"
        assert body["observation"]["inputs"]["demographics_snapshot"]["sex"] == "male"

    def test_bmi_non_positive_not_computed(self):
        response = client.post("/api/calculators/bmi", json={"height_cm": 0, "weight_kg": 70})

        assert response.status_code == 200
        assert response.json() == {"computed": False, "result": None, "observation": None}

    def test_height_with_bone_age(self):
        response = client.post("/api/calculators/height-prediction", json={
            "height_cm": 100,
            "sex": "male",
            "bone_age_years": 5.0,
        })

        body = response.json()
        assert body["computed"] is True
        assert body["result"]["multiplier"] == 1.638
        assert body["result"]["is_bone_age"] is True
        assert body["observation"]["calculation_type"] == "paley_height"

    def test_height_with_birth_date(self):
        response = client.post("/api/calculators/height-prediction", json={
            "height_cm": 100,
            "sex": "male",
            "date_of_birth": "2020-06-01",
            "reference_date": "2025-06-01",
        })

        body = response.json()
        assert body["result"]["age_used"] == 5.0
        assert body["result"]["is_bone_age"] is False

    def test_height_needs_an_age(self):
        response = client.post("/api/calculators/height-prediction", json={
            "height_cm": 100,
            "sex": "male",
        })

        assert response.status_code == 422

    def test_height_unknown_sex_not_computed(self):
        response = client.post("/api/calculators/height-prediction", json={
            "height_cm": 100,
            "sex": "x",
            "bone_age_years": 5.0,
        })

        assert response.json()["computed"] is False

    def test_imperial(self):
        response = client.get("/api/format/imperial", params={"cm": 180})

        assert response.json() == {"cm": 180.0, "feet": 5, "inches": 11, "display": "5' 11\""}

    def test_imperial_rejects_non_positive(self):
        assert client.get("/api/format/imperial", params={"cm": 0}).status_code == 422


class TestObservationApi:

    def test_round_trip(self):
        created = client.post("/api/calculators/bmi", json={"height_cm": 170, "weight_kg": 70}).json()

        response = client.post("/api/observations/parse", json=created["observation"])

        assert response.status_code == 200
        assert response.json()["calculation_type"] == "bmi"
        assert response.json()["observation"] == created["observation"]

    def test_unknown_type_is_422(self):
        response = client.post("/api/observations/parse", json={"calculation_type": "egfr"})

        assert response.status_code == 422


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
