"""Tests for spectral-mask construction."""

import numpy as np
import pytest

from wifi_aci.spectrum.mask import (
    MASK_ATTENUATION_DB,
    MASK_OFFSETS_MHZ,
    REFERENCE_NORMALIZATION,
    ChannelWidth,
    UnsupportedChannelWidth,
    build_spectral_mask,
    normalization_divisor,
)

WIDTHS = [20, 40, 80, 160]


class TestNormalization:
    @pytest.mark.parametrize("width", WIDTHS)
    @pytest.mark.parametrize("power_dbm", [-10.0, 0.0, 16.0, 23.0])
    @pytest.mark.parametrize("center", [2412.0, 5180.0, 5955.5])
    def test_area_equals_tx_power(self, width, power_dbm, center):
        mask = build_spectral_mask(width, center, power_dbm)
        assert mask.area() == pytest.approx(10 ** (power_dbm / 10), rel=1e-9)

    @pytest.mark.parametrize("width", WIDTHS)
    def test_reference_divisors(self, width):
        mask = build_spectral_mask(width, 5500.0, 20.0, normalization="reference")
        assert mask.peak_density == pytest.approx(100.0 / REFERENCE_NORMALIZATION[width], rel=1e-12)
        # Published constants are rounded: area is within 1e-4 of the tx power.
        assert mask.area() == pytest.approx(100.0, rel=1e-4)

    def test_exact_divisor_close_to_published(self):
        assert normalization_divisor(20) == pytest.approx(20.1414, abs=1e-3)
        assert normalization_divisor(160) == pytest.approx(161.0724, abs=1e-2)

    def test_unknown_normalization(self):
        with pytest.raises(ValueError, match="Unknown normalization"):
            build_spectral_mask(20, 5180.0, 0.0, normalization="measured")


class TestShape:
    @pytest.mark.parametrize("width", WIDTHS)
    def test_nine_points_strictly_increasing(self, width):
        mask = build_spectral_mask(width, 5500.0, 16.0)
        assert len(mask.frequencies) == 9
        assert np.all(np.diff(mask.frequencies) > 0)
        assert np.all(mask.densities >= 0)

    @pytest.mark.parametrize("width", WIDTHS)
    def test_symmetric_about_centre(self, width):
        mask = build_spectral_mask(width, 5500.0, 16.0)
        offsets = mask.frequencies - 5500.0
        assert np.array_equal(offsets, -offsets[::-1])
        assert np.array_equal(mask.densities, mask.densities[::-1])

    def test_20mhz_points(self):
        mask = build_spectral_mask(20, 5180.0, 0.0)
        assert mask.frequencies.tolist() == [5150, 5160, 5169, 5171, 5180, 5189, 5191, 5200, 5210]
        assert mask.low_edge_mhz == 5150.0
        assert mask.high_edge_mhz == 5210.0

    def test_attenuation_template(self):
        mask = build_spectral_mask(40, 5190.0, 10.0)
        rel_db = 10 * np.log10(mask.densities / mask.peak_density)
        assert rel_db.tolist() == pytest.approx(list(MASK_ATTENUATION_DB), abs=1e-9)

    def test_templates_cover_every_width(self):
        assert set(MASK_OFFSETS_MHZ) == set(ChannelWidth)
        assert set(REFERENCE_NORMALIZATION) == set(ChannelWidth)

    def test_immutable(self):
        mask = build_spectral_mask(20, 5180.0, 0.0)
        with pytest.raises(ValueError):
            mask.densities[0] = 1.0


class TestLookup:
    def test_index_of_control_point(self):
        mask = build_spectral_mask(20, 5180.0, 0.0)
        assert mask.index_of(5189.0) == 5
        assert mask.index_of(5190.0) is None

    def test_density_at_control_point(self):
        mask = build_spectral_mask(20, 5180.0, 0.0)
        assert mask.density_at(5171.0) == mask.peak_density

    def test_density_at_interpolates(self):
        mask = build_spectral_mask(20, 5180.0, 0.0)
        expected = (0.01 + 1.0) / 2 * mask.peak_density
        assert mask.density_at(5170.0) == pytest.approx(expected)

    def test_density_outside_support(self):
        mask = build_spectral_mask(20, 5180.0, 0.0)
        assert mask.density_at(5100.0) == 0.0
        assert mask.density_at(5211.0) == 0.0


class TestChannelWidth:
    @pytest.mark.parametrize("width", [0, 5, 10, 30, 60, 320, 20.5])
    def test_unsupported_width_raises(self, width):
        with pytest.raises(UnsupportedChannelWidth):
            build_spectral_mask(width, 5180.0, 0.0)

    def test_is_value_error(self):
        with pytest.raises(ValueError, match="Unsupported channel width"):
            ChannelWidth.from_mhz(10)

    def test_from_float(self):
        assert ChannelWidth.from_mhz(40.0) is ChannelWidth.W40
