"""
Tests for the Color Replace Filter.

Tests cover:
- Tolerance-gated matching on Euclidean RGB distance
- Lightness-preserving recoloring
- Alpha preservation and input immutability
- Banded processing
- Error handling
"""

import unittest
from unittest import mock

import numpy as np

from RC_Libs.errors import EmptyRasterError, InvalidColorError
from RC_Libs.HistoryLib.edit_history import EditOperation
from RC_Libs.ImageEditingLib import color_replace_filter
from RC_Libs.ImageEditingLib.color_replace_filter import ColorReplacer, validate_tolerance
from RC_Libs.ImageEditingLib.image_models import Raster


def make_raster(pixels, width):
    """Build a raster from a flat list of RGBA tuples."""
    data = b"".join(bytes(pixel) for pixel in pixels)
    return Raster(width=width, height=len(pixels) // width, data=data)


class TestReplaceColor(unittest.TestCase):
    """Test the pixel transform."""

    def setUp(self):
        self.replacer = ColorReplacer()

    def test_red_to_blue_scenario(self):
        """Red pixel becomes pure blue, green pixel is untouched."""
        raster = make_raster([(255, 0, 0, 255), (0, 255, 0, 255)], width=2)

        result = self.replacer.replace_color(raster, "#ff0000", "#0000ff", 10)

        self.assertEqual(result.pixel(0, 0), (0, 0, 255, 255))
        self.assertEqual(result.pixel(1, 0), (0, 255, 0, 255))

    def test_zero_tolerance_matches_exact_color_only(self):
        raster = make_raster(
            [(255, 0, 0, 255), (254, 0, 0, 255), (255, 1, 0, 255), (0, 0, 0, 255)],
            width=2,
        )

        mask = self.replacer.build_match_mask(raster, "#ff0000", 0)
        result = self.replacer.replace_color(raster, "#ff0000", "#0000ff", 0)

        self.assertEqual(mask.tolist(), [[True, False], [False, False]])
        self.assertEqual(result.pixel(0, 0), (0, 0, 255, 255))
        self.assertEqual(result.pixel(1, 0), (254, 0, 0, 255))
        self.assertEqual(result.pixel(0, 1), (255, 1, 0, 255))
        self.assertEqual(result.pixel(1, 1), (0, 0, 0, 255))

    def test_tolerance_boundary_is_inclusive(self):
        """A pixel exactly tolerance away matches; one unit further does not."""
        raster = make_raster([(255, 10, 0, 255), (255, 11, 0, 255)], width=2)

        mask = self.replacer.build_match_mask(raster, (255, 0, 0), 10)

        self.assertEqual(mask.tolist(), [[True, False]])

    def test_distance_is_euclidean(self):
        """(6, 8, 0) away is distance 10, so it matches at tolerance 10."""
        raster = make_raster([(106, 108, 100, 255), (107, 108, 100, 255)], width=2)

        mask = self.replacer.build_match_mask(raster, (100, 100, 100), 10)

        self.assertEqual(mask.tolist(), [[True, False]])

    def test_max_tolerance_matches_every_pixel(self):
        """Tolerance 255 selects even colors further than 255 away."""
        raster = make_raster(
            [(0, 255, 255, 255), (255, 0, 0, 255), (0, 0, 0, 255), (90, 200, 10, 255)],
            width=2,
        )

        mask = self.replacer.build_match_mask(raster, "#ff0000", 255)
        result = self.replacer.replace_color(raster, "#ff0000", "#0000ff", 255)

        self.assertTrue(mask.all())
        # Cyan sits at the far corner of the RGB cube from red
        self.assertEqual(result.pixel(0, 0), (0, 0, 255, 255))

    def test_preserves_lightness_offset(self):
        """A darker shade of the target becomes the same darker shade of the replacement."""
        raster = make_raster([(200, 0, 0, 255), (100, 0, 0, 255)], width=2)

        result = self.replacer.replace_color(raster, (200, 0, 0), (0, 0, 200), 100)

        self.assertEqual(result.pixel(0, 0), (0, 0, 200, 255))
        self.assertEqual(result.pixel(1, 0), (0, 0, 100, 255))

    def test_lightness_is_clamped(self):
        """Offsets pushing past white clamp to white."""
        raster = make_raster([(255, 200, 200, 255)], width=1)

        result = self.replacer.replace_color(raster, (128, 0, 0), (255, 255, 128), 255)

        self.assertEqual(result.pixel(0, 0), (255, 255, 255, 255))

    def test_never_changes_alpha(self):
        raster = make_raster(
            [(255, 0, 0, 0), (255, 0, 0, 128), (255, 0, 0, 255), (0, 255, 0, 7)],
            width=2,
        )

        result = self.replacer.replace_color(raster, "#ff0000", "#00ff00", 255)

        np.testing.assert_array_equal(result.as_array()[..., 3], raster.as_array()[..., 3])

    def test_does_not_mutate_source(self):
        raster = make_raster([(255, 0, 0, 255), (250, 5, 5, 200)], width=1)
        snapshot = bytes(raster.data)

        result = self.replacer.replace_color(raster, "#ff0000", "#123456", 30)

        self.assertEqual(raster.data, snapshot)
        self.assertIsNot(result, raster)
        self.assertNotEqual(result, raster)

    def test_result_has_same_dimensions(self):
        raster = Raster.blank(7, 3, (10, 20, 30, 255))

        result = self.replacer.replace_color(raster, (10, 20, 30), (200, 100, 50), 0)

        self.assertEqual(result.size, (7, 3))

    def test_banded_processing_matches_single_pass(self):
        rng = np.random.default_rng(1234)
        pixels = rng.integers(0, 256, size=(9, 5, 4), dtype=np.uint8)
        raster = Raster.from_array(pixels)

        single = self.replacer.replace_color(raster, (128, 128, 128), "#33cc66", 120)
        with mock.patch.object(color_replace_filter, "ROW_BAND_PIXELS", 7):
            banded = self.replacer.replace_color(raster, (128, 128, 128), "#33cc66", 120)

        self.assertEqual(single, banded)


class TestReplaceColorErrors(unittest.TestCase):
    """Test validation of replace_color and apply arguments."""

    def setUp(self):
        self.replacer = ColorReplacer()
        self.raster = make_raster([(255, 0, 0, 255), (0, 255, 0, 255)], width=2)

    def test_malformed_target_raises_invalid_color(self):
        snapshot = self.raster.data

        with self.assertRaises(InvalidColorError):
            self.replacer.apply(self.raster, "red", "#0000ff", 10)

        self.assertEqual(self.raster.data, snapshot)

    def test_malformed_replacement_raises_invalid_color(self):
        with self.assertRaises(InvalidColorError):
            self.replacer.replace_color(self.raster, "#ff0000", "#00ff0", 10)

    def test_no_operation_created_on_invalid_color(self):
        with mock.patch.object(EditOperation, "create") as create:
            with self.assertRaises(InvalidColorError):
                self.replacer.apply(self.raster, "red", "#0000ff", 10)
        create.assert_not_called()

    def test_empty_raster_raises(self):
        for width, height in [(0, 5), (5, 0), (0, 0)]:
            with self.assertRaises(EmptyRasterError):
                self.replacer.replace_color(Raster(width, height, b""), "#ff0000", "#0000ff", 10)

    def test_invalid_tolerance_raises(self):
        with self.assertRaises(ValueError):
            self.replacer.replace_color(self.raster, "#ff0000", "#0000ff", 256)
        with self.assertRaises(ValueError):
            self.replacer.replace_color(self.raster, "#ff0000", "#0000ff", -1)
        with self.assertRaises(TypeError):
            self.replacer.replace_color(self.raster, "#ff0000", "#0000ff", 10.5)

    def test_non_raster_source_raises(self):
        with self.assertRaises(TypeError):
            self.replacer.replace_color([(255, 0, 0, 255)], "#ff0000", "#0000ff", 10)


class TestApply(unittest.TestCase):
    """Test apply() and the EditOperation it builds."""

    def test_apply_returns_operation_with_result(self):
        raster = make_raster([(255, 0, 0, 255), (0, 255, 0, 255)], width=2)

        operation = ColorReplacer().apply(raster, "#F00", (0, 0, 255), 10)

        self.assertIsInstance(operation, EditOperation)
        self.assertEqual(operation.original_color, "#ff0000")
        self.assertEqual(operation.replacement_color, "#0000ff")
        self.assertEqual(operation.tolerance, 10)
        self.assertEqual(operation.result_raster.pixel(0, 0), (0, 0, 255, 255))

    def test_operation_ids_are_unique(self):
        raster = Raster.blank(1, 1)
        replacer = ColorReplacer()

        ids = {replacer.apply(raster, "#000", "#fff", 0).id for _ in range(5)}

        self.assertEqual(len(ids), 5)


class TestValidateTolerance(unittest.TestCase):

    def test_accepts_bounds(self):
        self.assertEqual(validate_tolerance(0), 0)
        self.assertEqual(validate_tolerance(255), 255)
        self.assertEqual(validate_tolerance(np.int64(30)), 30)

    def test_rejects_booleans(self):
        with self.assertRaises(TypeError):
            validate_tolerance(True)


if __name__ == "__main__":
    unittest.main()
