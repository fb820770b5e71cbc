from .app_config import AppConfig
from .log_config import LogConfig
from .data_config import DataConfig
from .model_config import ModelConfig
from .training_config import TrainingConfig
from .prediction_config import PredictionConfig

__all__ = [
    "AppConfig",
    "LogConfig",
    "DataConfig",
    "ModelConfig",
    "TrainingConfig",
    "PredictionConfig",
]
