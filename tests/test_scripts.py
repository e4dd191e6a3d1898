"""Tests for the render_scene command-line script."""

import argparse
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / 'scripts'))

from render_scene import main, parse_charge
from chargefield.physics import Charge


class TestParseCharge:
    """Test suite for command-line charge parsing."""

    def test_positive_and_negative(self):
        assert parse_charge('10,20,+') == Charge(10.0, 20.0, True)
        assert parse_charge(' 30.5, 40 , - ') == Charge(30.5, 40.0, False)

    @pytest.mark.parametrize("text", ['10,20', '10,20,x', 'a,20,+', 'nan,20,-', '1,2,3,+'])
    def test_malformed(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_charge(text)


def test_main_writes_image(tmp_path):
    """Test a full render to disk with a small override configuration."""
    override = tmp_path / 'small.yaml'
    override.write_text("viewport:\n  width: 80\n  height: 60\ntracer:\n  max_steps: 50\n", encoding='utf-8')

    exit_code = main(['-c', '20,30,+', '-c', '60,30,-', '-o', 'dipole',
                      '-d', str(tmp_path), '--config', str(override)])

    assert exit_code == 0
    assert (tmp_path / 'dipole.png').exists()


def test_main_print_config(tmp_path, capsys):
    """Test --print-config shows the merged configuration, overrides included."""
    override = tmp_path / 'tiny.yaml'
    override.write_text("viewport:\n  width: 40\n  height: 30\ntracer:\n  max_steps: 20\n", encoding='utf-8')

    main(['-c', '20,15,+', '-o', 'tiny', '-d', str(tmp_path),
          '--config', str(override), '--print-config'])

    out = capsys.readouterr().out
    assert 'width: 40' in out
    assert 'max_steps: 20' in out


def test_repeated_runs_do_not_accumulate_files(tmp_path):
    from config import config_manager

    override = tmp_path / 'tiny.yaml'
    override.write_text("viewport:\n  width: 40\n  height: 30\n", encoding='utf-8')

    for name in ('first', 'second'):
        main(['-c', '20,15,-', '-o', name, '-d', str(tmp_path), '--config', str(override)])

    assert config_manager.loaded_files == ['base_config.yaml', str(override)]


class TestInteractiveArgs:
    """Test suite for the interactive editor's command line."""

    def test_defaults(self):
        from interactive import parse_args
        assert parse_args([]).config == []

    def test_config_overrides(self):
        from interactive import parse_args
        args = parse_args(['--config', 'a.yaml', 'b'])
        assert args.config == ['a.yaml', 'b']

    def test_rejects_positional_files(self):
        from interactive import parse_args
        with pytest.raises(SystemExit):
            parse_args(['a.yaml'])
