import logging
import logging.handlers
from pathlib import Path

import numpy as np
import pytest
import yaml

from shape_emitter.core.utils import Settings, load_settings, make_rng, setup_logging


def test_load_settings(tmp_path):
    path = tmp_path / 'settings.yaml'
    path.write_text(yaml.safe_dump({
        'logging': {'level': 'debug'},
        'seed': '7',
        'presets_dir': str(tmp_path / 'presets'),
    }))
    settings = load_settings(path)
    assert settings.logging == {'level': 'debug'}
    assert settings.seed == 7
    assert settings.presets_dir == tmp_path / 'presets'


def test_load_empty_settings(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('')
    assert load_settings(path) == Settings()


def test_load_settings_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / 'missing.yaml')


def test_load_settings_rejects_non_mapping(tmp_path):
    path = tmp_path / 'list.yaml'
    path.write_text('- 1\n- 2\n')
    with pytest.raises(ValueError, match="mapping"):
        load_settings(path)


def test_load_settings_bad_yaml(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text('logging: {level: [\n')
    with pytest.raises(yaml.YAMLError):
        load_settings(path)


def test_settings_expand_user_dir():
    settings = Settings.from_dict({'presets_dir': '~/presets'})
    assert settings.presets_dir == Path.home() / 'presets'


def test_setup_logging_defaults():
    setup_logging({})
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / 'logs' / 'emitter.log'
    setup_logging({'level': 'info', 'log_file': str(log_file)})

    root = logging.getLogger()
    assert root.level == logging.INFO
    file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].maxBytes == 1024 * 1024
    assert file_handlers[0].backupCount == 5

    logging.getLogger('shape_emitter.test').info("hello from the emitter")
    file_handlers[0].flush()
    assert "hello from the emitter" in log_file.read_text()


def test_setup_logging_does_not_stack_handlers():
    setup_logging({})
    setup_logging({})
    assert len(logging.getLogger().handlers) == 1


def test_make_rng_is_reproducible():
    a = make_rng(5).uniform(size=4)
    b = make_rng(5).uniform(size=4)
    np.testing.assert_array_equal(a, b)
    assert isinstance(make_rng(), np.random.Generator)


def test_load_settings_logs_through_module_logger(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger='shape_emitter.core.utils'):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / 'missing.yaml')
    records = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert records and all(r.name == 'shape_emitter.core.utils' for r in records)
    assert 'missing.yaml' in records[0].getMessage()
