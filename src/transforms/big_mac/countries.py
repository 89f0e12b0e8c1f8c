"""Country and currency baskets for the Big Mac Index.

These are editorial policy choices, kept as independent literal lists.
"""

BASE_CURRENCIES = ("USD", "EUR", "GBP", "JPY", "CNY")

# Countries published in the index. EUZ is the synthetic euro-area entry.
REPORTING_COUNTRIES = frozenset([
    "ARG", "AUS", "BRA", "GBR", "CAN", "CHL", "CHN", "COL", "CRI", "CZE",
    "DNK", "EGY", "EUZ", "HKG", "HUN", "IDN", "IND", "ISR", "JPN", "MYS",
    "MEX", "NZL", "NOR", "PAK", "PER", "PHL", "POL", "RUS", "SAU", "SGP",
    "ZAF", "KOR", "LKA", "SWE", "CHE", "TWN", "THA", "TUR", "ARE", "UKR",
    "USA", "URY", "VNM", "AZE", "BHR", "HRV", "GTM", "HND", "JOR", "KWT",
    "LBN", "MDA", "NIC", "OMN", "QAT", "ROU",
])

# Countries used to fit price against GDP per capita. Includes individual
# euro-area members, which are never reported on their own.
REGRESSION_COUNTRIES = frozenset([
    "ARG", "AUS", "BRA", "GBR", "CAN", "CHL", "CHN", "COL", "CRI", "CZE",
    "DNK", "EUZ", "HUN", "IDN", "IND", "ISR", "JPN", "MYS", "MEX", "NZL",
    "NOR", "PER", "PHL", "POL", "RUS", "ZAF", "KOR", "SWE", "CHE", "TWN",
    "THA", "TUR", "UKR", "USA", "URY", "VNM",
    "AUT", "BEL", "NLD", "FIN", "FRA", "DEU", "IRL", "ITA", "PRT", "ESP",
    "GRC", "EST",
])
