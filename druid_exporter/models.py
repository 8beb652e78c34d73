from typing import Any
from pydantic import BaseModel, Field, StrictInt, StrictStr, model_validator


class TaskCountRecord(BaseModel):
    # Missing or null keys decode as zero values; present values must have the exact JSON type
    type: StrictStr = ""
    status: StrictStr = ""
    total: StrictInt = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        # Druid returns lower-case column names; the documented shape is Type/Status/Total
        if isinstance(data, dict):
            return {str(k).lower(): v for k, v in data.items() if v is not None}
        return data


class StrictTaskCountRecord(TaskCountRecord):
    type: StrictStr
    status: StrictStr
    total: StrictInt = Field(ge=0)


class HealthResponse(BaseModel):
    ok: bool
