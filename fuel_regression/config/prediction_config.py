# fuel_regression/config/prediction_config.py
from pydantic import BaseModel, Field


class PredictionConfig(BaseModel):
    num_samples: int = Field(300, ge=2)

    x_label: str = "Horsepower"
    y_label: str = "Km per Liter"
    plot_height: int = 300

    output_dir: str = "reports"
