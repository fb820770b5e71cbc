#!filepath: fuel_regression/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig
from .data_config import DataConfig
from .model_config import ModelConfig
from .training_config import TrainingConfig
from .prediction_config import PredictionConfig

ENV_DATA_URL = "FUEL_DATA_URL"


def project_root() -> str:
    """
    fuel_regression/config/app_config.py -> fuel_regression/config -> fuel_regression -> project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    model: ModelConfig = Field(default_factory=ModelConfig)
    training: TrainingConfig = Field(default_factory=TrainingConfig)
    prediction: PredictionConfig = Field(default_factory=PredictionConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env

        - default: fuel_regression/config/base.yml
        - FUEL_DATA_URL (env or <project_root>/.env) overrides data.url
        - independent of the current working directory
        """
        load_dotenv(os.path.join(project_root(), ".env"))

        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        url = os.getenv(ENV_DATA_URL)
        if url:
            raw["data"] = {**(raw.get("data") or {}), "url": url}

        return cls(**raw)
