import numpy as np
import pytest
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from price_module.core.model import LinearModel, ParameterSpace
from price_module.data_collector.dataset import DataSet
from price_module.evaluation.metrics import MetricsEvaluator
from price_module.utils.exceptions import NumericDegeneracyError


@pytest.fixture
def evaluator():
    return MetricsEvaluator()


class TestMetricsEvaluator:

    def test_perfect_fit(self, evaluator, scenario_dataset):
        metrics = evaluator.evaluate(scenario_dataset, LinearModel(22000.0, -0.2))
        assert metrics.r2 == pytest.approx(1.0)
        assert metrics.mae == pytest.approx(0.0, abs=1e-9)
        assert metrics.rmse == pytest.approx(0.0, abs=1e-9)
        assert metrics.mean_price == pytest.approx(17000)
        assert metrics.fit_quality == 'excellent'

    def test_matches_sklearn(self, evaluator, noisy_dataset):
        model = LinearModel(8000.0, -0.015)
        metrics = evaluator.evaluate(noisy_dataset, model)
        y_pred = model.predict(noisy_dataset.mileage)
        assert metrics.r2 == pytest.approx(r2_score(noisy_dataset.price, y_pred))
        assert metrics.mae == pytest.approx(mean_absolute_error(noisy_dataset.price, y_pred))
        assert metrics.mse == pytest.approx(mean_squared_error(noisy_dataset.price, y_pred))
        assert metrics.rmse == pytest.approx(np.sqrt(metrics.mse))
        assert metrics.n_samples == 50

    def test_sums_of_squares(self, evaluator, scenario_dataset):
        metrics = evaluator.evaluate(scenario_dataset, LinearModel(17000.0, 0.0))
        assert metrics.ss_tot == pytest.approx(20e6)
        assert metrics.ss_res == pytest.approx(metrics.ss_tot)
        assert metrics.r2 == pytest.approx(0.0)
        assert metrics.fit_quality == 'poor'

    def test_idempotent(self, evaluator, noisy_dataset):
        model = LinearModel(8000.0, -0.015)
        assert evaluator.evaluate(noisy_dataset, model) == evaluator.evaluate(noisy_dataset, model)

    def test_constant_price_is_degenerate(self, evaluator):
        dataset = DataSet.from_pairs([(1, 5000), (2, 5000), (3, 5000)])
        with pytest.raises(NumericDegeneracyError):
            evaluator.evaluate(dataset, LinearModel(5000.0, 0.0))

    def test_rejects_standardized_model(self, evaluator, scenario_dataset):
        with pytest.raises(ValueError):
            evaluator.evaluate(scenario_dataset, LinearModel(0.0, 0.0, ParameterSpace.STANDARDIZED))

    def test_residual_sign(self, scenario_dataset):
        residuals = MetricsEvaluator.residuals(scenario_dataset, LinearModel(22000.0, -0.2))
        np.testing.assert_allclose(residuals, 0, atol=1e-9)
        residuals = MetricsEvaluator.residuals(scenario_dataset, LinearModel(0.0, 0.0))
        np.testing.assert_array_equal(residuals, scenario_dataset.price)

    @pytest.mark.parametrize('r2, label', [
        (0.95, 'excellent'),
        (0.8, 'good'),
        (0.6, 'moderate'),
        (0.5, 'poor'),
        (-1.0, 'poor'),
    ])
    def test_fit_quality(self, r2, label):
        assert MetricsEvaluator.fit_quality(r2) == label

    def test_to_dict(self, evaluator, scenario_dataset):
        metrics = evaluator.evaluate(scenario_dataset, LinearModel(22000.0, -0.2))
        data = metrics.to_dict()
        assert set(data) == {'r2', 'mae', 'mse', 'rmse', 'mean_price', 'ss_res', 'ss_tot', 'n_samples'}
        assert metrics.explained_variance_pct == pytest.approx(100.0)
