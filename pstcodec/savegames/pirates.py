'''
# Sid Meier's Pirates! savegame

The savegame has variable length parts at the beginning and at the end (they
contain texts) and a huge fixed length section in the middle. Sections with
single letter names are not understood yet.

Once we hit the start of the fixed length section (Personal_0) we peek far
ahead to read the starting year, that is needed to decode all the date stamps.
'''
from ..core import Schema, Section, Subsection as Sub
from ..enum import Kind


class PiratesSavegame(Schema):
    Intro        = Section(6, 4, Kind.INT)
    CityName     = Section(128, 8, Kind.TEXT8)
    Personal     = Section(57, 4, Kind.INT)
    Ship         = Section(128, 1116)
    f            = Section(128, 1116)
    City         = Section(128, 32)
    CityInfo     = Section(128, 148)
    Log          = Section(1000, 28)
    j            = Section(1, 4, Kind.HEX)
    e            = Section(30, 32)  # at least three parts: unknown, peace and war, date and age
    Quest        = Section(64, 32)
    LogCount     = Section(1, 4, Kind.INT)
    TopoMap      = Section(462, 586)
    FeatureMap   = Section(462, 293, Kind.FMAP)
    TreasureMap  = Section(4, 328)
    SailingMap   = Section(462, 293, Kind.SMAP)
    vv           = Section(256, 12)
    vvv          = Section(2, 4, Kind.INT)
    Top10        = Section(10, 28)
    d            = Section(1, 36, Kind.ZERO)
    Villain      = Section(28, 36)
    t            = Section(1, 120)
    CityLoc      = Section(128, 16)
    CoastMap     = Section(462, 293, Kind.CMAP)
    k            = Section(8, 4, Kind.INT)
    LandingParty = Section(8, 32)
    m            = Section(1, 12)
    ShipName     = Section(8, 8, Kind.TEXT8)
    Skill        = Section(1, 4, Kind.INT)

    banners = {
        'Log': 'Ship\'s Log',
    }

    sentinel = 'Personal_0'
    starting_year_distance = 887272

    uniform = {
        'Intro_0':        Kind.TEXT0,
        'Intro_3':        Kind.HEX,
        'Personal_2':     Kind.BINARY,
        'Personal_5':     Kind.SHORT,
        'Personal_6':     Kind.SHORT,
        'Personal_9':     Kind.SHORT,
        'Personal_10':    Kind.SHORT,
        'Personal_18':    Kind.BINARY,
        'Personal_45':    Kind.SHORT,
        'Personal_46':    Kind.SHORT,
        'Personal_47':    Kind.CHAR,
        'Personal_48':    Kind.CHAR,
        'Personal_49':    Kind.CHAR,
        'Personal_50':    Kind.CHAR,
        'Ship_x_2':       Kind.SHORT,
        'Ship_x_3':       Kind.SHORT,
        'Ship_x_5':       Kind.SHORT,
        'Ship_x_5_4':     Kind.BINARY,
        'Ship_x_6':       Kind.SHORT,
        'City_x':         Kind.INT,
        'City_x_2':       Kind.BINARY,
        'City_x_4':       Kind.BULK,
        'City_x_7':       Kind.BULK,
        'CityInfo_x_0_2': Kind.SHORT,
        'CityInfo_x_0_3': Kind.SHORT,
        'CityInfo_x_3':   Kind.SHORT,
        'e_x':            Kind.INT,
        'Quest_x':        Kind.INT,
        'TreasureMap_x':  Kind.INT,
        'vv_x':           Kind.INT,
        'Villain_x_4':    Kind.BINARY,
        't_x_7':          Kind.INT,
        'LandingParty_0': Kind.UFLOAT,
        'LandingParty_1': Kind.UFLOAT,
        'LandingParty_x': Kind.HEX,
    }

    split = {
        'Personal_51':      [Sub(Kind.CHAR), Sub(Kind.ZERO, 3)],
        'Personal_52':      [Sub(Kind.BINARY), Sub(Kind.BULK, 3)],
        'Ship_x':           [Sub(Kind.BULK, 16, 10), Sub(Kind.ZERO, 956)],
        'Ship_x_0':         [Sub(Kind.SHORT, 2, 6), Sub(Kind.UFLOAT)],
        'Ship_x_1':         [Sub(Kind.UFLOAT), Sub(Kind.HEX, 4, 3)],
        'Ship_x_2_6':       [Sub(Kind.BINARY), Sub(Kind.BULK, 1)],
        # Ship_x_4_4 and Ship_x_4_5 were two shorts, now an integer and an empty
        # zero string: this keeps Ship_x_4_6 and Ship_x_4_7 numbered as before
        'Ship_x_4':         [Sub(Kind.SHORT, 2, 4), Sub(Kind.INT), Sub(Kind.ZERO, 0), Sub(Kind.SHORT, 2, 2)],
        'f_x':              [Sub(Kind.BULK, 2), Sub(Kind.ZERO, 98), Sub(Kind.BULK, 2), Sub(Kind.ZERO, 1014)],
        'City_x_3':         [Sub(Kind.CHAR, 1, 3), Sub(Kind.BULK, 1)],
        'CityInfo_x':       [Sub(Kind.BULK, 36), Sub(Kind.BULK, 48), Sub(Kind.BULK, 28), Sub(Kind.BULK, 32), Sub(Kind.BULK, 4)],
        'CityInfo_x_0':     [Sub(Kind.BULK), Sub(Kind.INT, 4, 4), Sub(Kind.BULK, 4, 3), Sub(Kind.INT)],
        'CityInfo_x_1':     [Sub(Kind.INT), Sub(Kind.BULK), Sub(Kind.INT, 4, 5), Sub(Kind.SHORT, 2, 10)],
        'Log_x':            [Sub(Kind.LCHAR, 1, 8), Sub(Kind.INT, 4, 3), Sub(Kind.UFLOAT, 4, 2)],
        'TreasureMap_x_68': [Sub(Kind.BULK, 1), Sub(Kind.BINARY), Sub(Kind.BULK, 1), Sub(Kind.BINARY)],
        'Villain_x':        [Sub(Kind.SHORT, 2, 10), Sub(Kind.INT), Sub(Kind.SHORT, 2, 6)],
        'CityLoc_x':        [Sub(Kind.MFLOAT, 4, 2), Sub(Kind.HEX, 4, 2)],
        't_x':              [Sub(Kind.BULK, 8), Sub(Kind.BULK, 16, 7)],
        'Top10_x':          [Sub(Kind.INT, 4, 2), Sub(Kind.SHORT, 2, 10)],
        'Top10_x_1':        [Sub(Kind.BINARY), Sub(Kind.ZERO, 3)],
    }
