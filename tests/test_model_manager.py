import json

import pytest

from price_module.core.baseline import BaselineModels
from price_module.core.model import LinearModel, ParameterSpace
from price_module.core.model_manager import ModelManager
from price_module.utils.exceptions import PersistenceError


@pytest.fixture
def manager(tmp_config):
    return ModelManager(tmp_config)


class TestPersistence:

    def test_round_trip_is_exact(self, manager, tmp_path):
        model = LinearModel(8499.599649933216, -0.0214489635917023)
        path = manager.save_model(model, path=tmp_path / 'thetas')
        assert manager.load_model(path) == model

    def test_text_format(self, manager, tmp_path):
        path = manager.save_model(LinearModel(1.5, -0.25), path=tmp_path / 'thetas')
        assert (tmp_path / 'thetas').read_text() == '1.5,-0.25'
        assert path == str(tmp_path / 'thetas')

    def test_default_path(self, manager, tmp_config):
        manager.save_model(LinearModel(1.0, 2.0))
        assert tmp_config.thetas_path.exists()
        assert manager.load_model() == LinearModel(1.0, 2.0)

    def test_metadata_written(self, manager, tmp_path):
        path = manager.save_model(LinearModel(1.0, 2.0), {'status': 'converged', 'epochs': 12},
                                  path=tmp_path / 'thetas')
        meta = json.loads((tmp_path / 'thetas.meta.json').read_text())
        assert meta['status'] == 'converged'
        assert meta['theta1'] == 2.0
        assert manager.load_metadata(path)['epochs'] == 12

    def test_refuses_standardized_model(self, manager, tmp_path):
        with pytest.raises(ValueError):
            manager.save_model(LinearModel(1.0, 2.0, ParameterSpace.STANDARDIZED), path=tmp_path / 't')

    def test_missing_file(self, manager, tmp_path):
        with pytest.raises(PersistenceError):
            manager.load_model(tmp_path / 'missing')

    @pytest.mark.parametrize('content', ['', '\n', 'abc', '1.0', '1,2,3', '1.0,x', 'nan,1.0'])
    def test_malformed_file(self, manager, tmp_path, content):
        path = tmp_path / 'thetas'
        path.write_text(content)
        with pytest.raises(PersistenceError):
            manager.load_model(path)

    def test_whitespace_tolerated(self, manager, tmp_path):
        path = tmp_path / 'thetas'
        path.write_text(' 8499.599650 , -0.021449 \n')
        model = manager.load_model(path)
        assert model == LinearModel(8499.59965, -0.021449)

    def test_unwritable_location(self, manager, tmp_path):
        blocker = tmp_path / 'blocker'
        blocker.write_text('')
        with pytest.raises(PersistenceError):
            manager.save_model(LinearModel(1.0, 2.0), path=blocker / 'thetas')

    def test_model_info_absent(self, manager, tmp_path):
        assert manager.get_model_info(tmp_path / 'none') is None

    def test_missing_metadata(self, manager, tmp_path):
        path = tmp_path / 'thetas'
        path.write_text('1,2')
        with pytest.raises(PersistenceError):
            manager.load_metadata(path)


class TestExperimentTracking:

    def test_disabled_by_default(self, manager):
        assert manager.log_experiment({'a': 1}, {'b': 2.0}) is None

    def test_logs_run(self, tmp_config, fake_mlflow):
        tmp_config.track_experiments = True

        run_id = ModelManager(tmp_config).log_experiment({'learning_rate': 0.1}, {'r2': 0.9}, 'thetas')
        assert run_id == 'run-123'
        assert fake_mlflow.calls['experiment'] == tmp_config.mlflow_experiment_name
        assert fake_mlflow.calls['metrics'] == {'r2': 0.9}
        assert fake_mlflow.calls['artifact'] == 'thetas'


class TestBaseline:

    def test_ols_on_scenario(self, scenario_dataset):
        ols = BaselineModels.ordinary_least_squares(scenario_dataset)
        assert ols.space is ParameterSpace.RAW
        assert ols.theta0 == pytest.approx(22000)
        assert ols.theta1 == pytest.approx(-0.2)

    def test_compare(self, scenario_dataset):
        report = BaselineModels().compare(scenario_dataset, LinearModel(22000.0, -0.2))
        assert set(report['models']) == {'dummy_mean', 'ordinary_least_squares', 'gradient_descent'}
        assert report['models']['gradient_descent']['r2'] == pytest.approx(1.0)
        assert report['models']['dummy_mean']['r2'] == pytest.approx(0.0)
        assert report['coefficient_gap']['theta1'] == pytest.approx(0.0, abs=1e-9)
