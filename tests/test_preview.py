import pytest

from pstcodec.exceptions import MalformedValue
from pstcodec.preview import COLOR_FEATURE, COLOR_LAND, COLOR_SEA, grid_rows, render


LINES = [
    '## FeatureMap starts at byte 0',
    'FeatureMap_0_8   : M8   :   f0   :    ',
    'FeatureMap_1_8   : M8   :   01   :    ',
    'FeatureMap_0_2   : F1   :  07  :   ',
    'CoastMap_0_8   : MM8   :   fe   :    ',
]


def test_grid_rows():
    rows = grid_rows(LINES, 'FeatureMap')

    assert [_.name for _ in rows] == ['FeatureMap_0', 'FeatureMap_1']
    assert rows[0].features == [(2, 0x07)]
    assert rows[1].features == []

    with pytest.raises(MalformedValue):
        grid_rows(LINES, 'SailingMap')


def test_render():
    image = render(grid_rows(LINES, 'FeatureMap'))

    assert image.size == (8, 2)
    assert image.mode == 'RGB'
    assert image.getpixel((0, 0)) == COLOR_LAND
    assert image.getpixel((2, 0)) == COLOR_FEATURE
    assert image.getpixel((4, 0)) == COLOR_SEA
    assert image.getpixel((7, 1)) == COLOR_LAND


def test_render_coast():
    image = render(grid_rows(LINES, 'CoastMap'))

    assert image.size == (8, 1)
    assert image.getpixel((0, 0)) == COLOR_LAND
    assert image.getpixel((7, 0)) == COLOR_SEA
