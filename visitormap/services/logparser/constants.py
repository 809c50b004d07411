import re
from functools import lru_cache

ALLOWED_GEOIP_LOCALES = ["de", "en", "es", "fr", "ja", "pt-BR", "ru", "zh-CN"]
GEOIP_LOCALES_DEFAULT = ["en"]

# IPy iptype() values that a GeoIP database can never resolve
NON_ROUTABLE_IP_TYPES = frozenset({
    "PRIVATE",
    "LOOPBACK",
    "RESERVED",
    "LINKLOCAL",
    "SITELOCAL",
    "CARRIER_GRADE_NAT",
    "UNSPECIFIED",
    "ULA",
    "MULTICAST",
    "UNASSIGNED",
})

UNKNOWN = "Unknown"


@lru_cache(maxsize=1)
def combined_log_pattern() -> re.Pattern[str]:
    """Nginx/Apache combined log format.

    IP - USER [TIMESTAMP] "METHOD PATH PROTOCOL" STATUS SIZE "REFERER" "USERAGENT"

    Status and size are captured as raw tokens so that non-numeric values can be
    reported instead of silently failing the match.
    """
    return re.compile(
        r'(?P<ip>\S+) - (?P<remote_user>\S+) '
        r'\[(?P<timestamp>[^\]]*)\] '
        r'"(?P<method>\S+) (?P<url>\S+) (?P<protocol>\S+)" '
        r'(?P<status>\S+) (?P<body_size>\S+) '
        r'"(?P<referer>(?:[^"\\]|\\.)*)" '
        r'"(?P<user_agent>(?:[^"\\]|\\.)*)"'
    )
