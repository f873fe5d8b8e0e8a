import logging

import pytest

from price_module.utils.config import Config, TrainingConfig, DEFAULT_CONFIG
from price_module.utils.logger import Logger
from price_module.utils.validators import ConfigValidator


class TestConfig:

    def test_defaults(self):
        training = DEFAULT_CONFIG.training
        assert training.learning_rate == 0.001
        assert training.max_epoch == 1000
        assert training.tolerance == 1e-7
        assert training.loss_metric == 'mae'
        assert DEFAULT_CONFIG.thetas_path.name == 'thetas'

    def test_json_round_trip(self, tmp_path):
        config = Config(log_level='DEBUG', training=TrainingConfig(learning_rate=0.05, max_epoch=10))
        path = tmp_path / 'config.json'
        config.save(str(path))
        assert Config.load(str(path)) == config

    def test_from_dict_partial(self):
        config = Config.from_dict({'training': {'learning_rate': 0.2}, 'make_plots': True})
        assert config.training.learning_rate == 0.2
        assert config.training.max_epoch == 1000
        assert config.make_plots

    def test_with_training_ignores_none(self):
        config = Config().with_training(learning_rate=0.3, max_epoch=None)
        assert config.training.learning_rate == 0.3
        assert config.training.max_epoch == 1000
        assert Config().training.learning_rate == 0.001

    def test_no_directories_created(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Config()
        assert list(tmp_path.iterdir()) == []

    def test_validator(self):
        assert ConfigValidator.validate_config(Config())
        with pytest.raises(ValueError):
            ConfigValidator.validate_config(Config(thetas_file=''))


class TestLogger:

    def test_records_are_not_decorated(self, caplog):
        logger = Logger('PriceModelTest', level='INFO')
        with caplog.at_level(logging.INFO, logger='PriceModelTest'):
            logger.info('hello')
        record = caplog.records[-1]
        assert record.getMessage() == 'hello'
        assert record.levelname == 'INFO'

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / 'logs' / 'run.log'
        logger = Logger('PriceModelFileTest', level='DEBUG', log_file=str(log_file))
        logger.log_epoch(3, 0.5)
        for handler in logger.logger.handlers:
            handler.flush()
        assert 'Эпоха 3' in log_file.read_text(encoding='utf-8')
