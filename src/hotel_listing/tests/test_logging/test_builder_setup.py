import logging

from hotel_listing.core.logging.builder import make_dict_config, setup_logging


def test_make_dict_config_with_log_dir_uses_files(dummy_settings, tmp_path):
    dummy_settings.LOG_DIR = tmp_path

    cfg = make_dict_config(dummy_settings)

    assert {"console", "file", "error_file"} == set(cfg["handlers"])
    assert "json" in cfg["formatters"]
    assert cfg["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"


def test_make_dict_config_stdout_only(dummy_settings, tmp_path):
    dummy_settings.LOG_DIR = tmp_path
    dummy_settings.LOG_TO_STDOUT = True
    dummy_settings.ENABLE_SQL_LOGGING = True

    cfg = make_dict_config(dummy_settings)

    assert {"console", "error_console"} == set(cfg["handlers"])
    assert cfg["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(dummy_settings, tmp_path, restore_logging):
    dummy_settings.LOG_DIR = tmp_path / "logs"
    assert not dummy_settings.LOG_DIR.exists()

    setup_logging(dummy_settings)

    assert dummy_settings.LOG_DIR.exists()
    assert logging.getLogger().handlers
