"""NBA team codes and the ESPN depth chart URLs they map to."""

from depth_chart_manager.errors import UnknownTeamError

ESPN_DEPTH_URL = "https://www.espn.com/nba/team/depth/_/name/{slug}"

# NBA abbreviation -> ESPN URL slug
ESPN_SLUGS: dict[str, str] = {
    "ATL": "atl",
    "BOS": "bos",
    "BKN": "bkn",
    "CHA": "cha",
    "CHI": "chi",
    "CLE": "cle",
    "DAL": "dal",
    "DEN": "den",
    "DET": "det",
    "GSW": "gs",
    "HOU": "hou",
    "IND": "ind",
    "LAC": "lac",
    "LAL": "lal",
    "MEM": "mem",
    "MIA": "mia",
    "MIL": "mil",
    "MIN": "min",
    "NOP": "no",
    "NYK": "ny",
    "OKC": "okc",
    "ORL": "orl",
    "PHI": "phi",
    "PHX": "phx",
    "POR": "por",
    "SAC": "sac",
    "SAS": "sa",
    "TOR": "tor",
    "UTA": "utah",
    "WAS": "wsh",
}

_SLUG_TO_CODE = {slug: code for code, slug in ESPN_SLUGS.items()}

# balldontlie team ids 1..30 follow the order of ESPN_SLUGS
_BALLDONTLIE_IDS: dict[int, str] = {i: code for i, code in enumerate(ESPN_SLUGS, start=1)}


def team_code(value: str) -> str:
    """Canonical uppercase abbreviation for an abbreviation or ESPN slug.

    >>> team_code("gs")
    'GSW'
    >>> team_code("atl")
    'ATL'
    """
    cleaned = value.strip()
    if cleaned.upper() in ESPN_SLUGS:
        return cleaned.upper()
    if cleaned.lower() in _SLUG_TO_CODE:
        return _SLUG_TO_CODE[cleaned.lower()]
    raise UnknownTeamError(value)


def team_for_balldontlie_id(team_id: int) -> str:
    try:
        return _BALLDONTLIE_IDS[team_id]
    except KeyError:
        raise UnknownTeamError(str(team_id)) from None


def depth_chart_url(code: str) -> str:
    return ESPN_DEPTH_URL.format(slug=ESPN_SLUGS[team_code(code)])


def all_team_codes() -> list[str]:
    return list(ESPN_SLUGS)
