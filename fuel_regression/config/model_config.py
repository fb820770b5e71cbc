#!filepath: fuel_regression/config/model_config.py
from pydantic import BaseModel, Field


class ModelConfig(BaseModel):
    # dense(1 -> hidden_units, bias) -> dense(hidden_units -> 1, bias)
    hidden_units: int = Field(1, ge=1)
    use_bias: bool = True
