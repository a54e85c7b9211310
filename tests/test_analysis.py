"""Tests for fidelity metrics and diagnostic maps."""

import numpy as np
import pytest
from engines.analysis import (
    compute_artifact_map, compute_edge_distortion_map, compute_blocking_map, compute_metrics,
)
from utils.metrics import (
    compute_psnr, compute_ssim, compute_gaussian_ssim, estimate_bits, estimate_bitrate, Timer,
)


def _reference_ssim(x, y, radius=4, stride=4):
    h, w = x.shape
    scores = []
    for cy in range(0, h, stride):
        for cx in range(0, w, stride):
            wx = x[max(0, cy - radius):cy + radius + 1, max(0, cx - radius):cx + radius + 1]
            wy = y[max(0, cy - radius):cy + radius + 1, max(0, cx - radius):cx + radius + 1]
            ux, uy = wx.mean(), wy.mean()
            vx = np.mean(wx * wx) - ux * ux
            vy = np.mean(wy * wy) - uy * uy
            cxy = np.mean(wx * wy) - ux * uy
            num = (2 * ux * uy + 6.5025) * (2 * cxy + 58.5225)
            den = (ux * ux + uy * uy + 6.5025) * (vx + vy + 58.5225)
            scores.append(num / den)
    return float(np.mean(scores))


def test_psnr():
    a = np.zeros((4, 4))
    assert compute_psnr(a, a) == 100.0
    assert compute_psnr(a, a + 1.0) == pytest.approx(10 * np.log10(255.0 ** 2))
    assert compute_psnr(a, np.zeros((4, 5))) == 0.0


def test_ssim_identical_is_one():
    plane = np.random.default_rng(0).uniform(0, 255, (21, 30))
    assert compute_ssim(plane, plane) == 1.0
    flat = np.full((9, 5), 42.0)
    assert compute_ssim(flat, flat) == 1.0


def test_ssim_matches_windowed_definition():
    rng = np.random.default_rng(5)
    x = rng.uniform(0, 255, (23, 18))
    y = np.clip(x + rng.normal(0, 12, x.shape), 0, 255)
    assert compute_ssim(x, y) == pytest.approx(_reference_ssim(x, y), abs=1e-9)


def test_ssim_drops_with_noise():
    rng = np.random.default_rng(6)
    x = np.add.outer(np.arange(32.0), np.arange(32.0)) * 3.0
    light = x + rng.normal(0, 2, x.shape)
    heavy = x + rng.normal(0, 30, x.shape)
    assert 1.0 > compute_ssim(x, light) > compute_ssim(x, heavy)


def test_ssim_multichannel_and_mismatch():
    a = np.random.default_rng(7).uniform(0, 255, (16, 16, 3))
    b = a.copy()
    b[:, :, 2] += 20.0
    expected = np.mean([compute_ssim(a[:, :, c], b[:, :, c]) for c in range(3)])
    assert compute_ssim(a, b) == pytest.approx(expected)
    assert compute_ssim(a, b[:8]) == 0.0


def test_gaussian_ssim():
    plane = np.random.default_rng(8).uniform(0, 255, (32, 32))
    assert compute_gaussian_ssim(plane, plane) == pytest.approx(1.0)
    assert np.isnan(compute_gaussian_ssim(plane[:8, :8], plane[:8, :8]))


def test_artifact_map():
    a = np.zeros((2, 2, 3))
    b = np.full((2, 2, 3), 10.0)
    b[0, 0, 0] = 100.0
    amap = compute_artifact_map(a, b)
    assert amap.shape == a.shape
    assert amap[0, 0, 0] == 255.0
    assert amap[1, 1, 1] == 50.0
    assert np.all(compute_artifact_map(a, b, gain=1.0) == np.minimum(b, 255.0))


def test_artifact_map_mismatch_is_zeros():
    amap = compute_artifact_map(np.ones((4, 4, 3)), np.ones((4, 5, 3)))
    assert amap.shape == (4, 4, 3)
    assert not amap.any()


def test_edge_distortion_map():
    original = np.zeros((10, 10))
    original[:, 5:] = 100.0
    flat = np.full((10, 10), 50.0)
    assert not compute_edge_distortion_map(original, original).any()

    emap = compute_edge_distortion_map(original, flat)
    assert emap[5, 4] == 255.0
    assert emap[5, 2] == 0.0
    assert not emap[0, :].any() and not emap[:, -1].any()


def test_edge_distortion_rejects_mismatch():
    with pytest.raises(ValueError):
        compute_edge_distortion_map(np.zeros((4, 4)), np.zeros((4, 5)))
    with pytest.raises(ValueError):
        compute_edge_distortion_map(np.zeros((4, 4, 3)), np.zeros((4, 4, 3)))


def test_blocking_map():
    plane = np.zeros((16, 16))
    plane[:, 8:] = 10.0
    bmap = compute_blocking_map(plane)
    assert np.all(bmap[:, 8] == 80.0)
    bmap[:, 8] = 0.0
    assert not bmap.any()

    plane[:, 8:] = 100.0
    assert np.all(compute_blocking_map(plane)[:, 8] == 255.0)


def test_blocking_map_ignores_interior_steps():
    plane = np.zeros((16, 16))
    plane[:, 5:] = 40.0
    assert not compute_blocking_map(plane).any()


def test_compute_metrics_identical():
    image = np.random.default_rng(9).uniform(0, 255, (16, 16, 3))
    metrics = compute_metrics(image, image)
    assert metrics.psnr_y == metrics.psnr_cr == metrics.psnr_cb == 100.0
    assert metrics.ssim_y == pytest.approx(1.0)
    assert not metrics.artifact_map.any()


def test_compute_metrics_mismatch():
    metrics = compute_metrics(np.zeros((8, 8, 3)), np.zeros((8, 9, 3)))
    assert metrics.psnr_y == 0.0 and metrics.ssim_cb == 0.0
    assert metrics.artifact_map.shape == (8, 8, 3)


def test_estimate_bits():
    values = np.array([0.0, 0.2, 1.0, -4.0, 8.0])
    # 2 * 0.5 + (0 + 3) + (2 + 3) + (3 + 3) + header
    assert estimate_bits(values) == pytest.approx(415.0)


def test_estimate_bitrate():
    info = estimate_bitrate([np.array([[0.0, 0.2, 1.0, -4.0, 8.0]])], (1, 5))
    assert info['estimated_bits'] == pytest.approx(415.0)
    assert info['bpp'] == pytest.approx(83.0)
    assert info['compression_ratio'] == pytest.approx(120.0 / 415.0)
    assert info['nonzero_count'] == 3
    assert info['total_coeffs'] == 5


def test_timer_accumulates():
    timer = Timer()
    assert timer.measure_process(sum, [1, 2]) == 3
    timer.measure_process(sum, [3])
    timer.measure_analysis(max, 1, 2)
    assert timer.process_time_ms >= 0.0
    assert timer.analysis_time_ms >= 0.0
