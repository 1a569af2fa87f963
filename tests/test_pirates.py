import io

import pytest

from pstcodec.core import Unpacker
from pstcodec.enum import Kind
from pstcodec.lines import PstLine
from pstcodec.names import RegionName
from pstcodec.pack import Packer
from pstcodec.savegames import PiratesSavegame
from pstcodec.streams import Stream


def test_sections():
    names = [str(_.name) for _ in PiratesSavegame.get_sections()]

    assert len(names) == 29
    assert names[0] == 'Intro'
    assert names[-1] == 'Skill'
    assert names.index('FeatureMap') < names.index('SailingMap') < names.index('CoastMap')


@pytest.mark.parametrize('name,kind', [
    ('Intro_0', Kind.TEXT0),
    ('Personal_2', Kind.BINARY),
    ('City_7', Kind.INT),
    ('City_7_2', Kind.BINARY),
    ('Ship_100_5_4', Kind.BINARY),
    ('LandingParty_0', Kind.UFLOAT),
    ('LandingParty_5', Kind.HEX),
    ('Personal_3', None),
])
def test_uniform_rules(name, kind):
    assert PiratesSavegame.uniform_rule(RegionName.parse(name)) == kind


def test_split_rules_add_up():
    sections = {str(_.name): _ for _ in PiratesSavegame.get_sections()}

    for name in ('Ship', 'f', 'CityInfo', 'Log', 'Villain', 'CityLoc', 't', 'Top10'):
        subsections = PiratesSavegame.split_rule(RegionName.parse(f'{name}_0'))
        assert sum(_.width * _.count for _ in subsections) == sections[name].width

    assert PiratesSavegame.split_rule(RegionName.parse('Personal_3')) is None


def test_blank_savegame():
    data = bytes(2_000_000)
    stream = Stream(data)
    unpacker = Unpacker(PiratesSavegame)

    lines = list(unpacker.iter_lines(stream))
    consumed = stream.tell()

    assert unpacker.context.starting_year == 0

    assert lines[0] == '## Intro starts at byte 0'
    assert 'Intro_0   : t0   :      :    ' in lines
    assert 'd_0   : x36   :   zero_string   :    ' in lines
    assert 'SailingMap_0_293   : m293   :      :    ' in lines
    log = lines.index('# Ship\'s Log')
    assert lines[log - 1].startswith('## Log starts at byte ')
    assert lines[log + 1].startswith('Log_0_0 ')
    assert 'Ship_0_4_5   : x0   :   zero_string   :    ' in lines

    leaves = [PstLine.parse(_) for _ in lines]
    leaves = [_ for _ in leaves if _ is not None]
    assert len([_ for _ in leaves if _.identifier.startswith('FeatureMap_')]) == 462
    assert not any(_.is_feature for _ in leaves)

    out = io.BytesIO()
    Packer().pack(lines, out)

    assert out.getvalue() == data[:consumed]
