import logging
import math

import pytest
import yaml

from shape_emitter.core.emitter import EmitterShape
from shape_emitter.core.errors import PresetError
from shape_emitter.core.presets import (
    BUILTIN_PRESETS, EmitterPreset, PresetManager, build_emitter, get_preset,
    get_preset_manager, list_presets,
)
from shape_emitter.core.spread import SpreadLoopMode
from shape_emitter.shapes import Box, Circle, Edge


@pytest.fixture
def manager(tmp_path):
    return PresetManager(user_presets_dir=tmp_path / 'presets')


@pytest.mark.parametrize("name", sorted(BUILTIN_PRESETS))
def test_builtin_presets_build_and_emit(manager, rng, name):
    emitter = manager.require(name).build()
    for particle in emitter.emit(20, rng):
        assert math.isclose(particle.direction.length, 1.0, rel_tol=1e-9)


def test_missing_user_dir_is_not_created(tmp_path):
    manager = PresetManager(user_presets_dir=tmp_path / 'nowhere')
    assert not (tmp_path / 'nowhere').exists()
    assert manager.list_all() == sorted(BUILTIN_PRESETS)


def test_spread_preset_builds_spread_mode(manager):
    emitter = manager.require('ping_pong_arc').build()
    assert isinstance(emitter.shape, Edge)
    assert emitter.mode.is_spread
    assert emitter.mode.spread.loop_mode == SpreadLoopMode.PING_PONG
    assert emitter.direction_params.spherize_direction == 0.3


def test_user_preset_overrides_builtin(tmp_path):
    presets_dir = tmp_path / 'presets'
    presets_dir.mkdir()
    (presets_dir / 'fountain.yaml').write_text(yaml.safe_dump({
        'description': 'Flat ring instead',
        'shape': 'circle',
        'shape_params': {'radius': 4.0},
    }))
    manager = PresetManager(user_presets_dir=presets_dir)

    preset = manager.get('fountain')
    assert preset.name == 'fountain'
    assert preset.shape == 'circle'
    emitter = preset.build()
    assert emitter.shape == Circle(radius=4.0)


def test_multiple_presets_in_one_file(tmp_path):
    presets_dir = tmp_path / 'presets'
    presets_dir.mkdir()
    (presets_dir / 'pack.yaml').write_text(yaml.safe_dump({'presets': {
        'sparks': {'shape': 'sphere', 'tags': ['fire']},
        'curtain': {'shape': 'line', 'mode': 'spread', 'spread': {'amount': 0.2}},
    }}))
    manager = PresetManager(user_presets_dir=presets_dir)

    assert manager.exists('sparks')
    assert manager.exists('curtain')
    assert not manager.exists('pack')
    assert manager.require('curtain').build().mode.spread.amount == 0.2


def test_invalid_file_is_skipped_with_warning(tmp_path, caplog):
    presets_dir = tmp_path / 'presets'
    presets_dir.mkdir()
    (presets_dir / 'broken.yaml').write_text("shape: [sphere\n")
    (presets_dir / 'listy.yaml').write_text("- sphere\n- box\n")
    (presets_dir / 'good.yaml').write_text("shape: box\n")

    with caplog.at_level(logging.WARNING, logger='shape_emitter.core.presets'):
        manager = PresetManager(user_presets_dir=presets_dir)

    assert manager.exists('good')
    assert not manager.exists('broken')
    assert not manager.exists('listy')
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any('broken.yaml' in m for m in warnings)
    assert any('listy.yaml' in m for m in warnings)


def test_malformed_presets_mapping_is_skipped(tmp_path, caplog):
    presets_dir = tmp_path / 'presets'
    presets_dir.mkdir()
    (presets_dir / 'nulls.yaml').write_text("presets:\n  broken:\n  fine:\n    shape: sphere\n")
    (presets_dir / 'listed.yaml').write_text("presets:\n  - sphere\n  - box\n")
    (presets_dir / 'empty.yaml').write_text("presets:\n")

    with caplog.at_level(logging.WARNING, logger='shape_emitter.core.presets'):
        manager = PresetManager(user_presets_dir=presets_dir)

    assert manager.exists('fine')
    assert not manager.exists('broken')
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("'broken'" in m and 'nulls.yaml' in m for m in warnings)
    assert any('listed.yaml' in m for m in warnings)
    assert any('empty.yaml' in m for m in warnings)
    assert manager.list_all() == sorted(list(BUILTIN_PRESETS) + ['fine'])


def test_delete_from_multi_preset_file(tmp_path):
    presets_dir = tmp_path / 'presets'
    presets_dir.mkdir()
    pack = presets_dir / 'pack.yaml'
    pack.write_text(yaml.safe_dump({'presets': {
        'mine': {'shape': 'sphere'},
        'theirs': {'shape': 'circle'},
    }}))

    manager = PresetManager(user_presets_dir=presets_dir)
    assert manager.source_of('mine') == pack
    assert manager.delete_preset('mine')

    reloaded = PresetManager(user_presets_dir=presets_dir)
    assert not reloaded.exists('mine')
    assert reloaded.get('theirs').shape == 'circle'

    assert reloaded.delete_preset('theirs')
    assert not pack.exists()


def test_delete_preset_without_name_key(tmp_path):
    presets_dir = tmp_path / 'presets'
    presets_dir.mkdir()
    (presets_dir / 'fountain.yaml').write_text("shape: circle\n")

    manager = PresetManager(user_presets_dir=presets_dir)
    assert manager.get('fountain').shape == 'circle'
    assert manager.delete_preset('fountain')
    # The built-in shows through again
    assert manager.get('fountain').shape == 'cone'
    assert not (presets_dir / 'fountain.yaml').exists()


def test_save_under_custom_filename_keeps_name(manager):
    path = manager.save_preset(EmitterPreset(name='spark', shape='sphere'), filename='my_sparks')
    assert path.name == 'my_sparks.yaml'

    reloaded = PresetManager(user_presets_dir=manager.user_presets_dir)
    assert reloaded.exists('spark')
    assert not reloaded.exists('my_sparks')
    assert reloaded.source_of('spark') == path

    assert reloaded.delete_preset('spark')
    assert not path.exists()


def test_resave_moves_preset_out_of_multi_preset_file(tmp_path):
    presets_dir = tmp_path / 'presets'
    presets_dir.mkdir()
    pack = presets_dir / 'pack.yaml'
    pack.write_text(yaml.safe_dump({'presets': {
        'mine': {'shape': 'sphere'},
        'theirs': {'shape': 'circle'},
    }}))

    manager = PresetManager(user_presets_dir=presets_dir)
    manager.save_preset(EmitterPreset(name='mine', shape='box'))

    assert set(yaml.safe_load(pack.read_text())['presets']) == {'theirs'}
    reloaded = PresetManager(user_presets_dir=presets_dir)
    assert reloaded.get('mine').shape == 'box'
    assert reloaded.source_of('mine') == presets_dir / 'mine.yaml'


def test_save_refuses_to_overwrite_other_presets(tmp_path):
    presets_dir = tmp_path / 'presets'
    presets_dir.mkdir()
    (presets_dir / 'pack.yaml').write_text(yaml.safe_dump({'presets': {'theirs': {'shape': 'circle'}}}))

    manager = PresetManager(user_presets_dir=presets_dir)
    with pytest.raises(PresetError, match="already holds"):
        manager.save_preset(EmitterPreset(name='mine'), filename='pack')
    assert manager.exists('theirs')


def test_save_and_delete_preset(manager):
    preset = EmitterPreset(name='drizzle', shape='edge', direction={'mode': 'fixed', 'fixed': [0, -1, 0]},
                           tags=['rain'])
    path = manager.save_preset(preset)
    assert path.exists()
    assert yaml.safe_load(path.read_text())['shape'] == 'edge'

    reloaded = PresetManager(user_presets_dir=manager.user_presets_dir)
    assert reloaded.get('drizzle').to_dict() == preset.to_dict()

    assert reloaded.delete_preset('drizzle')
    assert not path.exists()
    assert reloaded.get('drizzle') is None


def test_builtin_presets_cannot_be_deleted(manager):
    assert manager.delete_preset('explosion') is False
    assert manager.exists('explosion')


def test_from_emitter_captures_configuration(manager, rng):
    emitter = manager.require('ring_spread').build()
    emitter.emit(5, rng)

    preset = EmitterPreset.from_emitter('my_ring', emitter, description='copy', tags=['ring'])
    assert preset.mode == 'spread'
    assert preset.spread == {'amount': 0.05, 'loop_mode': 'loop', 'uniform': True}

    rebuilt = preset.build()
    assert rebuilt.shape == emitter.shape
    assert rebuilt.mode.spread.current_index == 0.0


def test_build_rejects_spread_on_box():
    preset = EmitterPreset(name='bad', shape='box', mode='spread', spread={'amount': 0.1})
    with pytest.raises(NotImplementedError):
        preset.build()


def test_unknown_shape_in_preset():
    with pytest.raises(PresetError, match="Unknown shape"):
        EmitterPreset(name='bad', shape='torus').build()


def test_queries(manager):
    assert manager.list_by_tag('SPREAD') == ['crystal_shell', 'ping_pong_arc', 'ring_spread']
    assert manager.list_by_shape('line') == ['edge_rain', 'ping_pong_arc']
    assert manager.list_by_shape('cube') == ['cube_burst']
    assert 'explosion' in manager.search('radial')
    assert manager.search('no such thing') == []
    assert manager.find(tag='spread', shape='ring') == ['ring_spread']
    assert manager.find(query='SPARK', shape='mesh') == ['crystal_shell']


def test_require_unknown_preset(manager):
    assert manager.get('nope') is None
    with pytest.raises(PresetError, match="Unknown preset 'nope'"):
        manager.require('nope')
    # Still a KeyError for callers that treat presets as a mapping
    with pytest.raises(KeyError):
        manager.require('nope')


def test_module_level_helpers(tmp_path):
    manager = get_preset_manager(tmp_path / 'presets')
    assert get_preset_manager() is manager
    assert get_preset('fountain').shape == 'cone'
    assert list_presets(tag='rain') == ['edge_rain']
    assert list_presets(shape='box') == ['cube_burst']
    assert isinstance(build_emitter('cube_burst').shape, Box)
    assert isinstance(build_emitter('explosion'), EmitterShape)
