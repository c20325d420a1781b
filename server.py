"""
Clinicalc Web Server

FastAPI-based web server exposing the clinical calculators. The server is
stateless: results are returned for the caller to store.
"""

import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

# Setup paths
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from knowledge.regions import list_regions
from src.config import configure_logging, get_config
from src.engines import (
    chronological_age_years,
    compute_bmi,
    compute_height_prediction,
    format_imperial_height,
    imperial_height_parts,
    resolve_demographics,
    validate_national_id,
)
from src.exporters import export_payload
from src.models import (
    BmiCategory,
    DemographicContext,
    NationalIdDecoded,
    normalize_sex,
    parse_observation,
    record_bmi,
    record_height_prediction,
)

logger = logging.getLogger(__name__)

DEGRADED_CATEGORIES = {BmiCategory.UNKNOWN, BmiCategory.LOOKUP_FAILED}

config = get_config()
configure_logging(config.log_level)

# Create FastAPI app
app = FastAPI(
    title="Clinicalc",
    description="Clinicalc - Clinical Calculation API (CNP, BMI, Paley height prediction)",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class NationalIdRequest(BaseModel):
    """Request model for national ID validation."""
    national_id: str = Field(..., description="13-digit personal numeric code (CNP)")


class DemographicsRequest(BaseModel):
    """Request model for age resolution."""
    date_of_birth: date
    reference_date: Optional[date] = Field(None, description="Clinical event date (default: today)")


class BmiRequest(BaseModel):
    """Request model for BMI calculation."""
    height_cm: float = Field(..., description="Height in centimeters")
    weight_kg: float = Field(..., description="Weight in kilograms")
    date_of_birth: Optional[date] = None
    sex: Optional[str] = Field(None, description="Patient sex (male/female)")
    reference_date: Optional[date] = Field(None, description="Measurement date (default: today)")
    encounter_id: Optional[str] = None


class HeightPredictionRequest(BaseModel):
    """Request model for Paley adult height prediction."""
    height_cm: float = Field(..., description="Current height in centimeters")
    sex: Optional[str] = Field(None, description="Patient sex (male/female)")
    date_of_birth: Optional[date] = None
    reference_date: Optional[date] = Field(None, description="Measurement date (default: today)")
    bone_age_years: Optional[float] = Field(None, description="Skeletal age override in years")
    encounter_id: Optional[str] = None


class CalculationResponse(BaseModel):
    """Engine output plus the observation payload ready for storage."""
    computed: bool
    result: Optional[dict[str, Any]] = None
    observation: Optional[dict[str, Any]] = None


class ImperialHeight(BaseModel):
    cm: float
    feet: int
    inches: int
    display: str


# Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@app.post("/api/national-id/validate", response_model=NationalIdDecoded)
async def validate_cnp(request: NationalIdRequest):
    """
    Validate a national ID and decode sex, birth date and region.

    Invalid IDs are not an HTTP error: `is_valid` is false and `error` says why.
    """
    return validate_national_id(request.national_id)


@app.get("/api/regions")
async def get_regions():
    """List region names for pickers."""
    return {"regions": list_regions()}


@app.post("/api/demographics", response_model=DemographicContext)
async def demographics(request: DemographicsRequest):
    """Resolve age in months and the infant/pediatric/adult class."""
    return resolve_demographics(request.date_of_birth, request.reference_date)


@app.post("/api/calculators/bmi", response_model=CalculationResponse)
async def calculate_bmi(request: BmiRequest):
    """
    Calculate and grade BMI.

    Non-positive measurements are not an error: `computed` is false.
    """
    reference_date = request.reference_date or date.today()
    result = compute_bmi(
        request.height_cm,
        request.weight_kg,
        birth_date=request.date_of_birth,
        sex=request.sex,
        reference_date=reference_date,
    )
    if result is None:
        return CalculationResponse(computed=False)

    if result.category in DEGRADED_CATEGORIES:
        logger.warning(
            "BMI graded with fallback category %r (%s)",
            result.category.value, result.meta.methodology,
        )

    observation = record_bmi(
        result,
        height_cm=request.height_cm,
        weight_kg=request.weight_kg,
        date_of_birth=request.date_of_birth,
        sex=normalize_sex(request.sex),
        encounter_id=request.encounter_id,
    )
    return CalculationResponse(
        computed=True,
        result=export_payload(result),
        observation=export_payload(observation),
    )


@app.post("/api/calculators/height-prediction", response_model=CalculationResponse)
async def predict_height(request: HeightPredictionRequest):
    """
    Predict adult height with the Paley multiplier method.

    Uses `bone_age_years` when given, otherwise chronological age from
    `date_of_birth` at `reference_date`.
    """
    reference_date = request.reference_date or date.today()
    uses_bone_age = request.bone_age_years is not None

    if uses_bone_age:
        age_years = request.bone_age_years
    elif request.date_of_birth is not None:
        age_years = chronological_age_years(request.date_of_birth, reference_date)
    else:
        raise HTTPException(
            status_code=422,
            detail="Either date_of_birth or bone_age_years is required",
        )

    result = compute_height_prediction(
        request.height_cm,
        age_years,
        request.sex,
        uses_bone_age=uses_bone_age,
    )
    if result is None:
        return CalculationResponse(computed=False)

    observation = record_height_prediction(
        result,
        height_cm=request.height_cm,
        reference_date=reference_date,
        encounter_id=request.encounter_id,
    )
    return CalculationResponse(
        computed=True,
        result=export_payload(result),
        observation=export_payload(observation),
    )


@app.get("/api/format/imperial", response_model=ImperialHeight)
async def imperial(cm: float = Query(..., gt=0, description="Height in centimeters")):
    """Convert centimeters to feet/inches for display."""
    feet, inches = imperial_height_parts(cm)
    return ImperialHeight(cm=cm, feet=feet, inches=inches, display=format_imperial_height(cm))


@app.post("/api/observations/parse")
async def parse_stored_observation(payload: dict[str, Any]):
    """
    Validate a stored observation payload against its calculation type.

    The stored result is returned as-is; nothing is recomputed.
    """
    try:
        observation = parse_observation(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))

    return {
        "calculation_type": observation.calculation_type,
        "observation": export_payload(observation),
    }


def run_server(host: Optional[str] = None, port: Optional[int] = None):
    """Run the server."""
    import uvicorn
    uvicorn.run(app, host=host or config.host, port=port or config.port)


if __name__ == "__main__":
    run_server()
