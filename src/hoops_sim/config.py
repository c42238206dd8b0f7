"""Static league and postseason configuration constants."""

TIER_SIZES: dict[int, int] = {1: 30, 2: 86, 3: 144}

T1_CONFERENCES: dict[str, tuple[str, ...]] = {
    "East": ("Atlantic", "Central", "Southeast"),
    "West": ("Northwest", "Pacific", "Southwest"),
}

T2_DIVISION_SIZES: dict[str, int] = {
    "Pacific Northwest": 8,
    "California": 8,
    "Southwest": 8,
    "Great Plains": 8,
    "Great Lakes": 8,
    "South": 8,
    "Southeast": 7,
    "Northeast": 9,
    "Texas": 8,
    "Prairie/Mountain Canada": 7,
    "Central Mexico": 7,
}

T3_METROS: tuple[str, ...] = (
    "Greater Los Angeles MBL",
    "Bay Area MBL",
    "Inland Empire MBL",
    "Central Valley MBL",
    "Greater Seattle MBL",
    "Pacific NW Small Cities MBL",
    "Phoenix Metro MBL",
    "Mountain West MBL",
    "Border Cities MBL",
    "Dallas-Fort Worth MBL",
    "Greater Houston MBL",
    "Greater Chicago MBL",
    "Greater Detroit MBL",
    "Twin Cities MBL",
    "Midwest College Towns MBL",
    "Ohio Valley MBL",
    "New England MBL",
    "Greater Philadelphia MBL",
    "Upstate New York MBL",
    "Atlanta Metro MBL",
    "North Carolina Triangle MBL",
    "South Florida MBL",
    "Tennessee Valley MBL",
    "Gulf Coast MBL",
)
T3_METRO_SIZE = 6

# Home-court assignment by 0-based game index. True means the higher seed hosts.
HOME_PATTERNS: dict[int, tuple[bool, ...]] = {
    7: (True, True, False, False, True, False, True),
    5: (True, True, False, False, True),
    3: (True, False, True),
}
SUPPORTED_BEST_OF = tuple(sorted(HOME_PATTERNS))

T1_SEEDS_PER_CONFERENCE = 8
T1_BEST_OF = 7

T2_DIVISION_SEEDS = 4
T2_DIVISION_BEST_OF = 3
T2_NATIONAL_FIELD = 16
T2_RUNNER_UP_QUALIFIERS = 5
T2_NATIONAL_BEST_OF = 5

T3_METRO_BEST_OF = 3
T3_BYE_COUNT = 8
T3_REGIONAL_BEST_OF = 3
T3_NATIONAL_BEST_OF = 5
# Champion, runner-up and bronze winner need a four-team semifinal.
T3_MIN_METRO_CHAMPIONS = 4

BRONZE_BEST_OF = 3

RELEGATION_BEST_OF = 5
RELEGATION_SLOTS = 3
RELEGATION_MIN_TEAMS = 4
RELEGATION_TIERS = (1, 2)

PROMOTION_SLOTS = 3

# Default provider tuning (points per game, home-court edge, rating scale).
BASE_SCORE = 108.0
SCORE_SPREAD = 11.5
RATING_POINTS = 0.42
HOME_COURT_POINTS: dict[int, float] = {1: 2.8, 2: 3.2, 3: 3.6}
PLAYOFF_PACE_FACTOR = 0.97
OVERTIME_BASE_SCORE = 10.5
OVERTIME_SPREAD = 3.2

DEFAULT_GAMES_PER_MATCHUP = 2
