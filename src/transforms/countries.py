from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


UNKNOWN_REGION = "Unknown"


class CountryNameIn(BaseModel):
    common: StrictStr


class CountryIn(BaseModel):
    name: CountryNameIn
    region: StrictStr | None = None
    population: StrictInt = Field(ge=0)
    area: StrictFloat = Field(ge=0)


class CountryRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    region: str
    population: int
    area: float


def transform_countries(payload: Any) -> list[CountryRecord]:
    """
    RAW -> records for /v3.1/all
    - payload must be the JSON array itself (no envelope)
    - unknown keys are ignored; a missing required field fails the whole batch
    """
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of countries, got {type(payload).__name__}")

    records: list[CountryRecord] = []
    for item in payload:
        c = CountryIn.model_validate(item)
        region = c.region if c.region and c.region.strip() else UNKNOWN_REGION
        records.append(
            CountryRecord(
                name=c.name.common,
                region=region,
                population=c.population,
                area=c.area,
            )
        )

    return records
