import logging
import logging.handlers

from mastery_app import configure
from mastery_app.core.config import Config
from mastery_app.core.errors import InsufficientCardsError, MasteryError
from mastery_app.core.logging_config import ROOT_LOGGER_NAME, get_logger, setup_logging


class TestConfig:

    def test_defaults(self):
        assert Config.get('SIMILARITY_THRESHOLD') == 0.8
        assert Config.get('SIMILARITY_INCLUSIVE') is False
        assert Config.get('DEFAULT_DISTRACTOR_COUNT') == 3
        assert Config.get('MIN_CARDS') == 2

    def test_unknown_key_uses_default(self):
        assert Config.get('NOT_A_SETTING', 'fallback') == 'fallback'

    def test_env_override_is_coerced(self, monkeypatch):
        monkeypatch.setenv('MASTERY_DEFAULT_DISTRACTOR_COUNT', '5')
        monkeypatch.setenv('MASTERY_SIMILARITY_THRESHOLD', '0.75')
        monkeypatch.setenv('MASTERY_SHUFFLE_ON_START', 'no')
        assert Config.get('DEFAULT_DISTRACTOR_COUNT') == 5
        assert Config.get('SIMILARITY_THRESHOLD') == 0.75
        assert Config.get('SHUFFLE_ON_START') is False

    def test_bad_env_value_falls_back(self, monkeypatch):
        monkeypatch.setenv('MASTERY_MIN_CARDS', 'many')
        assert Config.get('MIN_CARDS') == 2

    def test_subclass_overrides(self):
        class StrictConfig(Config):
            MIN_CARDS = 4

        assert StrictConfig.get('MIN_CARDS') == 4


class TestErrors:

    def test_to_dict(self):
        error = InsufficientCardsError(available=1, required=4)
        assert isinstance(error, MasteryError)
        assert error.to_dict() == {
            'success': False,
            'message': error.message,
            'code': 'INSUFFICIENT_CARDS',
            'details': {'available': 1, 'required': 4},
        }


class TestLogging:

    def teardown_method(self):
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_console_only_by_default(self):
        logger = setup_logging('DEBUG')
        assert logger.level == logging.DEBUG
        assert not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)

    def test_file_handler_with_log_dir(self, tmp_path):
        logger = setup_logging('INFO', log_dir=str(tmp_path))
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)
        assert (tmp_path / 'mastery.log').exists()

    def test_configure_from_config_class(self, monkeypatch):
        monkeypatch.setenv('MASTERY_LOG_LEVEL', 'warning')
        logger = configure()
        assert logger.name == ROOT_LOGGER_NAME
        assert logger.level == logging.WARNING

    def test_get_logger_nests_under_engine_logger(self):
        assert get_logger('custom').name == f'{ROOT_LOGGER_NAME}.custom'
        assert get_logger(f'{ROOT_LOGGER_NAME}.cards').name == f'{ROOT_LOGGER_NAME}.cards'
        assert get_logger().name == ROOT_LOGGER_NAME
