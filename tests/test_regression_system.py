import json
from pathlib import Path

import pytest

from price_module.core.baseline import BaselineModels
from price_module.core.model import ParameterSpace, TrainingStatus
from price_module.data_collector.dataset import DataSet
from price_module.systems.regression_system import PriceRegressionSystem
from price_module.utils.exceptions import DivergenceError, InputError, NumericDegeneracyError

BUNDLED_DATA = Path(__file__).resolve().parent.parent / 'data' / 'data.csv'


@pytest.fixture
def system(tmp_config, fast_training):
    tmp_config.training = fast_training
    return PriceRegressionSystem(tmp_config)


class TestTraining:

    def test_train_scenario(self, system, scenario_dataset):
        result = system.train(scenario_dataset)
        assert result.state.status is TrainingStatus.CONVERGED
        assert result.model.space is ParameterSpace.RAW
        assert result.standardized_model.space is ParameterSpace.STANDARDIZED
        assert result.model.theta0 == pytest.approx(22000, abs=1)
        assert result.model.theta1 == pytest.approx(-0.2, abs=0.01)
        assert result.mean == pytest.approx(25000)
        assert result.epochs == len(result.state.loss_history)

    def test_on_epoch_callback(self, system, scenario_dataset):
        seen = []
        result = system.train(scenario_dataset, on_epoch=lambda epoch, loss: seen.append(epoch))
        assert seen == list(range(result.epochs))

    def test_constant_mileage_is_degenerate(self, system):
        dataset = DataSet.from_pairs([(50000, 9000), (50000, 8000), (50000, 7000)])
        with pytest.raises(NumericDegeneracyError):
            system.train(dataset)

    def test_evaluate_fills_reports(self, system, scenario_dataset):
        result = system.evaluate(scenario_dataset, system.train(scenario_dataset))
        assert result.metrics.r2 == pytest.approx(1.0)
        assert 'ordinary_least_squares' in result.baseline['models']

    def test_evaluate_respects_flags(self, tmp_config, fast_training, scenario_dataset):
        tmp_config.training = fast_training
        tmp_config.compute_metrics = False
        tmp_config.compare_baseline = False
        system = PriceRegressionSystem(tmp_config)
        result = system.evaluate(scenario_dataset, system.train(scenario_dataset))
        assert result.metrics is None
        assert result.baseline is None

    def test_invalid_config_rejected(self, tmp_config):
        tmp_config.training.learning_rate = 0.0
        with pytest.raises(ValueError):
            PriceRegressionSystem(tmp_config)


class TestRunExperiment:

    def test_writes_model_and_metadata(self, system, scenario_csv, tmp_path):
        output = tmp_path / 'out' / 'thetas'
        result = system.run_experiment(scenario_csv, output)

        theta0, theta1 = (float(v) for v in output.read_text().split(','))
        assert theta0 == result.model.theta0
        assert theta1 == result.model.theta1

        meta = json.loads((tmp_path / 'out' / 'thetas.meta.json').read_text())
        assert meta['status'] == 'converged'
        assert meta['epochs'] == result.epochs
        assert meta['standardization']['mean'] == pytest.approx(25000)
        assert meta['metrics']['r2'] == pytest.approx(1.0)
        assert meta['config']['learning_rate'] == 0.1
        assert meta['data']['rows'] == 4
        assert meta['data']['mileage_max'] == 40000.0
        assert result.data_summary == meta['data']

    def test_default_output_path(self, system, scenario_csv, tmp_config):
        system.run_experiment(scenario_csv)
        assert tmp_config.thetas_path.exists()

    def test_missing_data_file(self, system, tmp_path):
        with pytest.raises(InputError):
            system.run_experiment(tmp_path / 'missing.csv')

    def test_divergence_leaves_no_model(self, tmp_config, scenario_csv, tmp_path):
        tmp_config.training.learning_rate = 1.0
        system = PriceRegressionSystem(tmp_config)
        output = tmp_path / 'thetas'
        with pytest.raises(DivergenceError):
            system.run_experiment(scenario_csv, output)
        assert not output.exists()

    def test_plots(self, system, scenario_csv, tmp_config):
        tmp_config.make_plots = True
        result = system.run_experiment(scenario_csv, Path(tmp_config.models_root) / 'thetas')
        assert len(result.plots) == 3
        assert all(Path(p).exists() for p in result.plots)
        assert all(Path(p).parent == Path(tmp_config.plots_root) for p in result.plots)

    def test_log_file(self, tmp_config, fast_training, scenario_csv):
        tmp_config.training = fast_training
        tmp_config.log_to_file = True
        PriceRegressionSystem(tmp_config).run_experiment(scenario_csv)
        assert list(Path(tmp_config.logs_root).glob('price_model_*.log'))

    def test_tracking(self, tmp_config, fast_training, scenario_csv, fake_mlflow):
        tmp_config.training = fast_training
        tmp_config.track_experiments = True

        result = PriceRegressionSystem(tmp_config).run_experiment(scenario_csv)
        assert fake_mlflow.calls['params']['learning_rate'] == 0.1
        assert fake_mlflow.calls['params']['status'] == 'converged'
        assert fake_mlflow.calls['metrics']['theta0'] == result.model.theta0
        assert fake_mlflow.calls['artifact'] == str(tmp_config.thetas_path)

    def test_bundled_data_matches_least_squares(self, tmp_config):
        tmp_config.training.loss_metric = 'mse'
        system = PriceRegressionSystem(tmp_config)
        result = system.run_experiment(BUNDLED_DATA)

        ols = BaselineModels.ordinary_least_squares(system.load_data(BUNDLED_DATA))
        assert result.model.theta0 == pytest.approx(ols.theta0, rel=1e-4)
        assert result.model.theta1 == pytest.approx(ols.theta1, rel=1e-4)
        assert result.model.theta1 < 0
