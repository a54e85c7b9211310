"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner
from main import main


@pytest.fixture
def runner():
    return CliRunner()


def test_process(runner, tmp_path):
    output = tmp_path / 'out.png'
    result = runner.invoke(main, ['process', '-s', 'ramp', '--size', '32', '-q', '60', '-o', str(output)])
    assert result.exit_code == 0, result.output
    assert 'PSNR (Y/Cr/Cb)' in result.output
    assert 'Saved:' in result.output
    assert output.exists()


def test_process_image_file(runner, tmp_path):
    source = tmp_path / 'in.png'
    runner.invoke(main, ['process', '-s', 'checkerboard', '--size', '16', '-q', '100',
                         '--no-quantization', '-o', str(source)])
    result = runner.invoke(main, ['process', str(source), '-c', '420', '-t', 'dwt',
                                  '-o', str(tmp_path / 'out.png')])
    assert result.exit_code == 0, result.output
    assert 'Image: 16x16' in result.output


def test_inspect(runner):
    result = runner.invoke(main, ['inspect', '-s', 'gradient', '--size', '16', '-x', '1', '--channel', 'cb'])
    assert result.exit_code == 0, result.output
    assert '--- quant_table ---' in result.output


def test_inspect_full_image_dwt(runner):
    result = runner.invoke(main, ['inspect', '-s', 'gradient', '--size', '16', '-t', 'dwt'])
    assert result.exit_code == 0
    assert 'nothing to inspect' in result.output


def test_inspect_outside_image(runner):
    result = runner.invoke(main, ['inspect', '-s', 'gradient', '--size', '16', '-x', '5'])
    assert result.exit_code != 0


def test_sweep(runner):
    result = runner.invoke(main, ['sweep', '-s', 'stripes', '--size', '32',
                                  '--start', '10', '--end', '30', '--step', '10'])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert len(lines) == 4
    assert lines[0].split() == ['Q', 'PSNR_Y', 'SSIM_Y', 'BPP', 'Ratio']


def test_maps(runner, tmp_path):
    out_dir = tmp_path / 'maps'
    result = runner.invoke(main, ['maps', '-s', 'text_edges', '--size', '32', '-o', str(out_dir)])
    assert result.exit_code == 0, result.output
    assert len(list(out_dir.glob('*.png'))) == 7
    assert (out_dir / 'blocking_map.png').exists()


def test_requires_source(runner):
    result = runner.invoke(main, ['process'])
    assert result.exit_code != 0


def test_unknown_synthetic(runner):
    result = runner.invoke(main, ['process', '-s', 'nope'])
    assert result.exit_code != 0
    assert 'unknown image' in result.output
