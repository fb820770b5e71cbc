#!filepath: fuel_regression/config/data_config.py
from pydantic import BaseModel, Field

CARS_DATA_URL = "https://storage.googleapis.com/tfjs-tutorials/carsData.json"

# miles per gallon -> km per litre
MPG_TO_KMPL = 2.352


class FieldConfig(BaseModel):
    horsepower: str = "Horsepower"
    efficiency_raw: str = "Miles_per_Gallon"


class DataConfig(BaseModel):
    url: str = CARS_DATA_URL
    fields: FieldConfig = Field(default_factory=FieldConfig)
    conversion_factor: float = Field(MPG_TO_KMPL, gt=0)
    timeout: float = Field(10.0, gt=0)
    max_attempts: int = Field(1, ge=1)
