"""
Percentile mapping tables.

EPTS_2018
    OPTN EPTS mapping table published March 2019 from SRTR 2018 data
    (https://optn.transplant.hrsa.gov/media/2973/epts_mapping_table_2018.pdf).
    The published table has no separate 99th percentile row: raw scores
    above the 98th percentile bound map straight to 100.

KDPI_2018_APPROX
    KDRI_RAO -> KDPI mapping for the 2018 reference donor population. KDRI
    values must first be divided by the 2018 scaling factor (see
    KDRI_SCALING_2018), which places the reference median at KDRI_RAO 1.0.
    Breakpoints are reconstructed from published anchor values and not
    copied from the OPTN document; compare with the OPTN KDPI mapping
    table before using them for allocation decisions.
"""

from .lookup import PercentileTable

# Median KDRI_Rao of the 2018 reference donor population
KDRI_SCALING_2018 = 1.250609

EPTS_2018 = PercentileTable.from_pairs(
    "OPTN EPTS mapping table 2018",
    [
    (0.01760937493806, 0),
    (0.26646040897072, 1),
    (0.43019022030158, 2),
    (0.53311909650924, 3),
    (0.6326384644618, 4),
    (0.72237546897176, 5),
    (0.79626762491444, 6),
    (0.86666326886303, 7),
    (0.93318206707734, 8),
    (0.99713552361396, 9),
    (1.05717462942817, 10),
    (1.11295047122014, 11),
    (1.16625651808412, 12),
    (1.21680853847071, 13),
    (1.26376711078916, 14),
    (1.31368583162218, 15),
    (1.35657090379317, 16),
    (1.40054004106776, 17),
    (1.44364750171116, 18),
    (1.48333283375386, 19),
    (1.52214579055442, 20),
    (1.55765040533122, 21),
    (1.58995558100723, 22),
    (1.62089164593683, 23),
    (1.65069609856263, 24),
    (1.67861943874059, 25),
    (1.70721730298086, 26),
    (1.73409171800137, 27),
    (1.76033059548255, 28),
    (1.78570658610832, 29),
    (1.81141204654346, 30),
    (1.83677817077353, 31),
    (1.86147227926078, 32),
    (1.8856943405636, 33),
    (1.90975222450376, 34),
    (1.93251418676668, 35),
    (1.95384268564753, 36),
    (1.97509582477755, 37),
    (1.99555578370979, 38),
    (2.01713252865473, 39),
    (2.03840588637919, 40),
    (2.0573216975, 41),
    (2.0760282837, 42),
    (2.0946334302, 43),
    (2.1124041904, 44),
    (2.1309607446, 45),
    (2.1493271732, 46),
    (2.1665608233, 47),
    (2.1831697467, 48),
    (2.2002004889, 49),
    (2.2167886167, 50),
    (2.2327798091, 51),
    (2.249696783, 52),
    (2.2657166324, 53),
    (2.2815880018, 54),
    (2.2969371337, 55),
    (2.3123839836, 56),
    (2.3273073238, 57),
    (2.3420260096, 58),
    (2.3577084189, 59),
    (2.3726607709, 60),
    (2.3878466804, 61),
    (2.4036167009, 62),
    (2.4189776636, 63),
    (2.4346310746, 64),
    (2.4502258727, 65),
    (2.4651170255, 66),
    (2.4801013005, 67),
    (2.4945728953, 68),
    (2.5093709788, 69),
    (2.52526276, 70),
    (2.5420048257, 71),
    (2.5579622234, 72),
    (2.5740517596, 73),
    (2.5916171143, 74),
    (2.6082122769, 75),
    (2.6254483231, 76),
    (2.6420702932, 77),
    (2.6597107489, 78),
    (2.677196478, 79),
    (2.6963709068, 80),
    (2.7149238167, 81),
    (2.733058547, 82),
    (2.7525722108, 83),
    (2.7725258038, 84),
    (2.7918184831, 85),
    (2.8130560826, 86),
    (2.8346703962, 87),
    (2.8567884134, 88),
    (2.8787142208, 89),
    (2.9010274586, 90),
    (2.9253225296, 91),
    (2.9496725194, 92),
    (2.9765579121, 93),
    (3.0046060752, 94),
    (3.0355958919, 95),
    (3.0710265739, 96),
    (3.1104036029, 97),
    (3.1633656423, 98),
    ],
)

KDPI_2018_APPROX = PercentileTable.from_pairs(
    "KDPI 2018 (approximate, reconstructed from published anchors)",
    [
    (0.43755564, 0),
    (0.48205504, 1),
    (0.51260692, 2),
    (0.53685955, 3),
    (0.55743103, 4),
    (0.57556043, 5),
    (0.59194086, 6),
    (0.60700277, 7),
    (0.62103349, 8),
    (0.63423529, 9),
    (0.64675648, 10),
    (0.65870940, 11),
    (0.67018146, 12),
    (0.68124215, 13),
    (0.69194778, 14),
    (0.70234476, 15),
    (0.71247182, 16),
    (0.72236176, 17),
    (0.73204261, 18),
    (0.74153863, 19),
    (0.75087096, 20),
    (0.76005822, 21),
    (0.76911692, 22),
    (0.77806182, 23),
    (0.78690621, 24),
    (0.79566215, 25),
    (0.80434061, 26),
    (0.81295169, 27),
    (0.82150472, 28),
    (0.83000836, 29),
    (0.83847071, 30),
    (0.84689938, 31),
    (0.85530158, 32),
    (0.86368415, 33),
    (0.87205362, 34),
    (0.88041631, 35),
    (0.88877827, 36),
    (0.89714541, 37),
    (0.90552350, 38),
    (0.91391818, 39),
    (0.92233505, 40),
    (0.93077961, 41),
    (0.93925738, 42),
    (0.94777385, 43),
    (0.95633455, 44),
    (0.96494507, 45),
    (0.97361106, 46),
    (0.98233826, 47),
    (0.99113257, 48),
    (1.00000000, 49),
    (1.00894677, 50),
    (1.01797928, 51),
    (1.02710420, 52),
    (1.03632842, 53),
    (1.04565918, 54),
    (1.05510402, 55),
    (1.06467090, 56),
    (1.07436818, 57),
    (1.08420471, 58),
    (1.09418985, 59),
    (1.10433357, 60),
    (1.11464651, 61),
    (1.12514002, 62),
    (1.13582631, 63),
    (1.14671847, 64),
    (1.15783068, 65),
    (1.16917825, 66),
    (1.18077781, 67),
    (1.19264750, 68),
    (1.20480714, 69),
    (1.21727845, 70),
    (1.23008539, 71),
    (1.24325440, 72),
    (1.25681485, 73),
    (1.27079947, 74),
    (1.28524492, 75),
    (1.30019244, 76),
    (1.31568869, 77),
    (1.33178676, 78),
    (1.34854741, 79),
    (1.36604070, 80),
    (1.38434792, 81),
    (1.40356428, 82),
    (1.42380218, 83),
    (1.44519576, 84),
    (1.46790683, 85),
    (1.49213319, 86),
    (1.51812012, 87),
    (1.54617701, 88),
    (1.57670192, 89),
    (1.61021911, 90),
    (1.64743894, 91),
    (1.68935796, 92),
    (1.73743703, 93),
    (1.79394390, 94),
    (1.86268457, 95),
    (1.95081253, 96),
    (2.07445193, 97),
    (2.28542362, 98),
    (2.49725506, 99),
    ],
)
