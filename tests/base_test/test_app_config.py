#!filepath: tests/base_test/test_app_config.py
import yaml
import pytest

from fuel_regression.config import AppConfig
from fuel_regression.config.app_config import ENV_DATA_URL
from fuel_regression.config.data_config import CARS_DATA_URL, DataConfig, MPG_TO_KMPL
from fuel_regression.config.log_config import LogConfig
from fuel_regression.config.model_config import ModelConfig
from fuel_regression.config.prediction_config import PredictionConfig
from fuel_regression.config.training_config import TrainingConfig


@pytest.fixture(autouse=True)
def no_env_override(monkeypatch):
    monkeypatch.delenv(ENV_DATA_URL, raising=False)


@pytest.fixture
def sample_config_file(tmp_path):
    data = {
        "log": {"dir": "logs", "level": "DEBUG"},
        "data": {
            "url": "http://example.test/cars.json",
            "fields": {"horsepower": "hp", "efficiency_raw": "mpg"},
            "max_attempts": 3,
        },
        "model": {"hidden_units": 4},
        "training": {"batch_size": 16, "epochs": 5, "seed": 11},
        "prediction": {"num_samples": 50},
    }

    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.safe_dump(data), encoding="utf-8")
    return config_file


def test_app_config_load(sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    assert isinstance(cfg, AppConfig)
    assert isinstance(cfg.log, LogConfig)
    assert isinstance(cfg.data, DataConfig)
    assert isinstance(cfg.model, ModelConfig)
    assert isinstance(cfg.training, TrainingConfig)
    assert isinstance(cfg.prediction, PredictionConfig)


def test_config_values(sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    assert cfg.log.level == "DEBUG"
    assert cfg.log.dir == "logs"
    assert cfg.data.url == "http://example.test/cars.json"
    assert cfg.data.fields.horsepower == "hp"
    assert cfg.data.max_attempts == 3
    assert cfg.model.hidden_units == 4
    assert cfg.training.batch_size == 16
    assert cfg.training.seed == 11
    assert cfg.prediction.num_samples == 50


def test_partial_file_keeps_defaults(sample_config_file):
    cfg = AppConfig.load(path=str(sample_config_file))

    # not in the file
    assert cfg.data.conversion_factor == MPG_TO_KMPL
    assert cfg.training.learning_rate == pytest.approx(1e-3)
    assert cfg.training.shuffle is True
    assert cfg.prediction.y_label == "Km per Liter"


def test_bundled_defaults():
    cfg = AppConfig.load()

    assert cfg.data.url == CARS_DATA_URL
    assert cfg.data.conversion_factor == pytest.approx(2.352)
    assert cfg.training.batch_size == 32
    assert cfg.training.epochs == 50
    assert cfg.prediction.num_samples == 300
    assert cfg.model_dump() == AppConfig().model_dump()


def test_empty_file_is_all_defaults(tmp_path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")

    assert AppConfig.load(path=str(empty)).model_dump() == AppConfig().model_dump()


def test_env_overrides_data_url(sample_config_file, monkeypatch):
    monkeypatch.setenv(ENV_DATA_URL, "http://mirror.test/cars.json")

    cfg = AppConfig.load(path=str(sample_config_file))

    assert cfg.data.url == "http://mirror.test/cars.json"
    # rest of the data section survives
    assert cfg.data.fields.efficiency_raw == "mpg"


def test_missing_file_should_fail(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppConfig.load(path=str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize(
    "section, values",
    [
        ("training", {"batch_size": 0}),
        ("training", {"epochs": -1}),
        ("data", {"conversion_factor": 0}),
        ("prediction", {"num_samples": 1}),
    ],
)
def test_invalid_value_should_fail(tmp_path, section, values):
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text(yaml.safe_dump({section: values}))

    with pytest.raises(ValueError):
        AppConfig.load(path=str(bad_file))
