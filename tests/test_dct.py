"""Tests for DCT/IDCT operations."""

import numpy as np
import pytest
from engines.dct_engine import dct2, idct2, encode_block, decode_block, dct_basis


def _reference_dct(block):
    """Direct 1/4 C(u) C(v) double-sum definition."""
    C = lambda k: 1.0 / np.sqrt(2.0) if k == 0 else 1.0
    out = np.zeros((8, 8))
    for u in range(8):
        for v in range(8):
            s = 0.0
            for x in range(8):
                for y in range(8):
                    s += (block[x, y]
                          * np.cos((2 * x + 1) * u * np.pi / 16.0)
                          * np.cos((2 * y + 1) * v * np.pi / 16.0))
            out[u, v] = 0.25 * C(u) * C(v) * s
    return out


def test_dct_idct_invertibility():
    """DCT/IDCT should be perfectly invertible."""
    block = np.random.rand(8, 8) * 255
    shifted = block - 128.0
    dct_coeffs = dct2(shifted)
    recovered = idct2(dct_coeffs) + 128.0
    assert np.allclose(block, recovered, atol=1e-10)


def test_encode_decode_block_invertibility():
    """encode/decode should recover original without quantization."""
    block = np.random.rand(8, 8) * 255
    dct_coeffs = encode_block(block)
    recovered = decode_block(dct_coeffs)
    assert np.allclose(block, recovered, atol=1e-8)


def test_decode_block_does_not_clip():
    """Clamping belongs to the inverse color transform, not the block decoder."""
    coeffs = np.zeros((8, 8))
    coeffs[0, 0] = 8 * 200.0
    assert np.allclose(decode_block(coeffs), 328.0)


def test_matches_summation_formula():
    rng = np.random.default_rng(7)
    block = rng.uniform(-128, 127, (8, 8))
    assert np.allclose(dct2(block), _reference_dct(block), atol=1e-9)


def test_level_shift_reduces_dc():
    """Level shift reduces DC coefficient magnitude."""
    block = np.ones((8, 8)) * 200
    dct_no_shift = dct2(block)
    dct_with_shift = dct2(block - 128.0)
    assert abs(dct_with_shift[0, 0]) < abs(dct_no_shift[0, 0])


def test_energy_preservation():
    """Parseval's theorem: sum(block^2) == sum(dct^2) for ortho norm."""
    block = np.random.rand(8, 8) * 255
    shifted = block - 128.0
    dct_block = dct2(shifted)
    assert np.isclose(np.sum(shifted ** 2), np.sum(dct_block ** 2), rtol=1e-10)


@pytest.mark.parametrize("value", [0.0, 37.5, 128.0, 255.0])
def test_constant_block_dc_isolation(value):
    """Constant block A -> DC of 8A, no AC energy."""
    dct_block = dct2(np.full((8, 8), value))
    assert dct_block[0, 0] == pytest.approx(8 * value, abs=1e-9)
    assert np.allclose(dct_block[0, 1:], 0, atol=1e-10)
    assert np.allclose(dct_block[1:, :], 0, atol=1e-10)


def test_basis_patterns():
    assert np.allclose(dct_basis(0, 0), 1.0 / 8.0)
    impulse = dct2(dct_basis(2, 5))
    expected = np.zeros((8, 8))
    expected[2, 5] = 1.0
    assert np.allclose(impulse, expected, atol=1e-12)


def test_basis_rejects_out_of_range():
    with pytest.raises(ValueError):
        dct_basis(8, 0)
