import numpy as np
import pytest

from price_module.data_collector.dataset import DataSet
from price_module.utils.config import Config, TrainingConfig

SCENARIO_PAIRS = [(10000, 20000), (20000, 18000), (30000, 16000), (40000, 14000)]


@pytest.fixture
def scenario_dataset():
    """Perfectly linear: price = 22000 - 0.2 * mileage"""
    return DataSet.from_pairs(SCENARIO_PAIRS)


@pytest.fixture
def line_dataset():
    """Perfectly linear: price = 5 + 3 * mileage"""
    x = np.arange(10, dtype=float)
    return DataSet.from_arrays(x, 5 + 3 * x)


@pytest.fixture
def noisy_dataset():
    rng = np.random.default_rng(42)
    x = rng.uniform(0, 200000, size=50)
    y = 8500 - 0.02 * x + rng.uniform(-300, 300, size=50)
    return DataSet.from_arrays(x, y)


@pytest.fixture
def fast_training():
    """Large enough step for four samples to converge well before the epoch cap"""
    return TrainingConfig(learning_rate=0.1, max_epoch=1000, tolerance=1e-7)


@pytest.fixture
def tmp_config(tmp_path):
    return Config(
        models_root=str(tmp_path / 'models'),
        logs_root=str(tmp_path / 'logs'),
        plots_root=str(tmp_path / 'plots'),
        log_level='WARNING',
    )


@pytest.fixture
def write_csv(tmp_path):
    def _write(content: str, name: str = 'data.csv'):
        path = tmp_path / name
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def scenario_csv(write_csv):
    rows = '\n'.join(f"{m},{p}" for m, p in SCENARIO_PAIRS)
    return write_csv(f"km,price\n{rows}\n")


class FakeRun:
    class info:
        run_id = 'run-123'

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeMlflow:
    def __init__(self):
        self.calls = {}

    def set_tracking_uri(self, uri):
        self.calls['uri'] = uri

    def set_experiment(self, name):
        self.calls['experiment'] = name

    def start_run(self):
        return FakeRun()

    def log_params(self, params):
        self.calls['params'] = params

    def log_metrics(self, metrics):
        self.calls['metrics'] = metrics

    def log_artifact(self, path):
        self.calls['artifact'] = path


@pytest.fixture
def fake_mlflow(monkeypatch):
    from price_module.core import model_manager

    fake = FakeMlflow()
    monkeypatch.setattr(model_manager, 'mlflow', fake)
    return fake
