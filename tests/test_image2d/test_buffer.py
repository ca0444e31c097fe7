"""Tests for owned image construction, point access and arithmetic."""

from __future__ import annotations

import numpy as np
import pytest

from imagegrid.image2d import (
    BitDepth,
    DimensionMismatchError,
    ImageBuffer2D,
    ImageError,
    Luma,
    PixelType,
    Rect,
    Rgb,
)


class TestFromVec:
    def test_dimensions(self) -> None:
        v1 = [Luma([n]) for n in range(9)]
        v2 = [Luma([n]) for n in range(6)]
        assert ImageBuffer2D.from_vec(3, 3, v1).dimensions == (3, 3)
        assert ImageBuffer2D.from_vec(2, 3, v2).dimensions == (2, 3)
        assert ImageBuffer2D.from_vec(3, 2, v2).dimensions == (3, 2)

    def test_length_mismatch(self) -> None:
        v2 = [Luma([n]) for n in range(6)]
        with pytest.raises(DimensionMismatchError) as exc:
            ImageBuffer2D.from_vec(3, 3, v2)
        assert exc.value.expected == 9
        assert exc.value.actual == 6
        with pytest.raises(ImageError):
            ImageBuffer2D.from_vec(4, 2, v2)

    def test_scanline_round_trip(self) -> None:
        v = [Luma([n]) for n in range(6)]
        img = ImageBuffer2D.from_vec(2, 3, v)
        for y in range(3):
            for x in range(2):
                assert img.get_pixel(x, y)[0] == x + y * 2
        assert img.to_vec() == v

    def test_mixed_pixel_types_rejected(self) -> None:
        with pytest.raises(TypeError):
            ImageBuffer2D.from_vec(2, 1, [Luma([1]), Rgb([1, 2, 3])])

    def test_empty_needs_pixel_type(self) -> None:
        with pytest.raises(ValueError):
            ImageBuffer2D.from_vec(0, 0, [])
        assert ImageBuffer2D.from_vec(0, 3, [], Luma).dimensions == (0, 3)


class TestFromRawVec:
    def test_chunks_into_pixels(self) -> None:
        img = ImageBuffer2D.from_raw_vec(2, 1, [1, 2, 3, 4, 5, 6], Rgb)
        assert img.to_vec() == [Rgb([1, 2, 3]), Rgb([4, 5, 6])]

    def test_not_a_multiple_of_channels(self) -> None:
        with pytest.raises(DimensionMismatchError):
            ImageBuffer2D.from_raw_vec(2, 1, [1, 2, 3, 4, 5], Rgb)

    def test_wrong_pixel_count(self) -> None:
        with pytest.raises(DimensionMismatchError):
            ImageBuffer2D.from_raw_vec(3, 1, [1, 2, 3, 4, 5, 6], Rgb)


class TestNew:
    @pytest.mark.parametrize("pixel_type", [Luma, Luma.with_subpixel(np.float32)])
    def test_zeros(self, pixel_type) -> None:
        img = ImageBuffer2D.new(100, 200, pixel_type)
        assert (img.width, img.height) == (100, 200)
        assert all(pixel.is_zero() for pixel in img)

    def test_negative_dimensions(self) -> None:
        with pytest.raises(ValueError):
            ImageBuffer2D.new(-1, 2, Luma)

    def test_len_matches_dimensions(self) -> None:
        img = ImageBuffer2D.new(7, 4, Rgb)
        assert len(img) == img.width * img.height == 28


class TestGenerate:
    def test_generate(self) -> None:
        u32 = Luma.with_subpixel(np.uint32)
        img = ImageBuffer2D.generate(128, 72, lambda x, y: u32([5 * x + 13 * y]))
        for (y, x), pix in img.enumerate_pixels():
            assert pix == u32([5 * x + 13 * y])

    def test_called_once_per_coordinate(self) -> None:
        seen: list[tuple[int, int]] = []

        def f(x: int, y: int) -> Luma:
            seen.append((x, y))
            return Luma([0])

        ImageBuffer2D.generate(4, 3, f)
        assert sorted(seen) == sorted((x, y) for x in range(4) for y in range(3))

    def test_zero_area_needs_pixel_type(self) -> None:
        img = ImageBuffer2D.generate(0, 3, lambda x, y: Rgb(), pixel_type=Rgb)
        assert img.dimensions == (0, 3)
        assert img.pixel_type is Rgb
        with pytest.raises(ValueError):
            ImageBuffer2D.generate(0, 3, lambda x, y: Rgb())


class TestNdarray:
    def test_from_2d_array(self) -> None:
        img = ImageBuffer2D.from_ndarray(np.array([[1, 2], [3, 4]]), Luma)
        assert img.get_pixel(1, 0) == Luma([2])

    def test_from_ndarray_copies(self) -> None:
        src = np.zeros((2, 2, 3), dtype=np.uint8)
        img = ImageBuffer2D.from_ndarray(src, Rgb)
        src[0, 0] = 9
        assert img.get_pixel(0, 0).is_zero()

    def test_wrong_channel_axis(self) -> None:
        with pytest.raises(DimensionMismatchError):
            ImageBuffer2D.from_ndarray(np.zeros((2, 2, 2)), Rgb)

    def test_to_ndarray(self, img3x3: ImageBuffer2D) -> None:
        arr = img3x3.to_ndarray()
        assert arr.shape == (3, 3, 1)
        assert arr[:, :, 0].tolist() == [[0, 1, 2], [3, 4, 5], [6, 7, 8]]


class TestPointAccess:
    def test_put_pixel(self, zeros5x5: ImageBuffer2D) -> None:
        for y in range(1, 4):
            for x in range(1, 4):
                zeros5x5.put_pixel(x, y, Luma([2 * x + 3 * y]))

        for (y, x), p in zeros5x5.enumerate_pixels():
            if 1 <= x <= 3 and 1 <= y <= 3:
                assert p == Luma([2 * x + 3 * y])
            else:
                assert p == Luma([0])

    def test_get_pixel_mut(self, zeros5x5: ImageBuffer2D) -> None:
        zeros5x5.get_pixel_mut(2, 1)[0] = 42
        assert zeros5x5.get_pixel(2, 1) == Luma([42])

    def test_index_mut(self, zeros5x5: ImageBuffer2D) -> None:
        for x in range(1, 4):
            for y in range(1, 4):
                zeros5x5[x, y][0] = 2 * x + 3 * y

        for (y, x), p in zeros5x5.enumerate_pixels():
            expected = 2 * x + 3 * y if 1 <= x <= 3 and 1 <= y <= 3 else 0
            assert p == Luma([expected])

    def test_setitem(self, zeros5x5: ImageBuffer2D) -> None:
        zeros5x5[4, 0] = Luma([9])
        assert zeros5x5.get_pixel(4, 0) == Luma([9])

    def test_get_pixel_is_read_only(self, img3x3: ImageBuffer2D) -> None:
        with pytest.raises(ValueError):
            img3x3.get_pixel(0, 0)[0] = 1

    @pytest.mark.parametrize("x,y", [(3, 0), (0, 3), (-1, 0), (0, -1)])
    def test_out_of_bounds(self, img3x3: ImageBuffer2D, x: int, y: int) -> None:
        with pytest.raises(IndexError):
            img3x3.get_pixel(x, y)
        with pytest.raises(IndexError):
            img3x3.put_pixel(x, y, Luma([1]))

    def test_put_pixel_rejects_other_pixel_type(self) -> None:
        img = ImageBuffer2D.new(2, 2, Rgb)
        rgb_f32 = Rgb.with_subpixel(np.float32)
        with pytest.raises(TypeError):
            img.put_pixel(0, 0, Luma([7]))
        with pytest.raises(TypeError):
            img[1, 0] = rgb_f32([1.9, 2.9, 300.5])
        assert all(p.is_zero() for p in img)


class TestSlicesAndCopies:
    def test_as_slice_owned(self, img3x3: ImageBuffer2D) -> None:
        flat = img3x3.as_slice()
        assert flat is not None
        assert flat[:, 0].tolist() == list(range(9))

    def test_as_slice_full_width_view(self, img3x3: ImageBuffer2D) -> None:
        flat = img3x3.sub_image(Rect(0, 1, 3, 2)).as_slice()
        assert flat is not None
        assert flat[:, 0].tolist() == [3, 4, 5, 6, 7, 8]

    def test_as_slice_column_window(self, img3x3: ImageBuffer2D) -> None:
        assert img3x3.sub_image(Rect(1, 0, 2, 3)).as_slice() is None

    def test_to_owned_is_independent(self, img3x3: ImageBuffer2D) -> None:
        copy = img3x3.to_owned()
        copy.put_pixel(0, 0, Luma([99]))
        assert img3x3.get_pixel(0, 0) == Luma([0])
        assert copy != img3x3

    def test_into_raw_vec(self, img3x3: ImageBuffer2D) -> None:
        assert img3x3.into_raw_vec() == [Luma([n]) for n in range(9)]

    def test_image_type(self) -> None:
        assert ImageBuffer2D.new(1, 1, Rgb).image_type() == (PixelType.RGB, BitDepth.EIGHT)


class TestEquality:
    def test_equal_across_storage_kinds(self, img3x3: ImageBuffer2D) -> None:
        view = img3x3.get_view()
        assert view == img3x3
        assert img3x3 == view
        assert img3x3.sub_image(img3x3.rect()) == img3x3.to_owned()

    def test_dimensions_must_match(self) -> None:
        a = ImageBuffer2D.new(2, 3, Luma)
        b = ImageBuffer2D.new(3, 2, Luma)
        assert a != b

    def test_pixel_types_must_match(self) -> None:
        assert ImageBuffer2D.new(2, 2, Luma) != ImageBuffer2D.new(2, 2, Luma.with_subpixel(np.uint16))


class TestArithmetic:
    def test_add(self) -> None:
        img1 = ImageBuffer2D.from_raw_vec(3, 3, [0, 1, 2, 3, 4, 5, 6, 7, 8], Luma)
        img2 = ImageBuffer2D.from_raw_vec(3, 3, [8, 7, 6, 5, 4, 3, 2, 1, 0], Luma)
        res = img1 + img2
        assert isinstance(res, ImageBuffer2D)
        assert all(p == Luma([8]) for p in res)

    def test_sub_mul_div_rem(self) -> None:
        a = ImageBuffer2D.from_raw_vec(2, 1, [9, 7], Luma)
        b = ImageBuffer2D.from_raw_vec(2, 1, [2, 3], Luma)
        assert (a - b).to_vec() == [Luma([7]), Luma([4])]
        assert (a * b).to_vec() == [Luma([18]), Luma([21])]
        assert (a / b).to_vec() == [Luma([4]), Luma([2])]
        assert (a % b).to_vec() == [Luma([1]), Luma([1])]

    def test_views_and_owned_mix(self, img3x3: ImageBuffer2D) -> None:
        top = img3x3.sub_image(Rect(0, 0, 3, 1))
        bottom = img3x3.sub_image(Rect(0, 2, 3, 1))
        res = bottom - top
        assert res.to_vec() == [Luma([6])] * 3
        assert (res + top).to_vec() == bottom.to_vec()

    def test_operands_untouched(self, img3x3: ImageBuffer2D) -> None:
        before = img3x3.to_owned()
        _ = img3x3 * img3x3
        assert img3x3 == before

    def test_dimension_mismatch(self) -> None:
        a = ImageBuffer2D.new(2, 2, Luma)
        b = ImageBuffer2D.new(2, 3, Luma)
        with pytest.raises(DimensionMismatchError):
            a + b
        with pytest.raises(DimensionMismatchError):
            a.get_view() % b.get_view()

    def test_pixel_type_mismatch(self) -> None:
        with pytest.raises(TypeError):
            ImageBuffer2D.new(2, 2, Luma) + ImageBuffer2D.new(2, 2, Rgb)
