from .operating_systems import OSInfo, OSUpdate, detect_os, normalize_os, os_info
from .sections import Section, parse_sections
from .user_agent import Browser, UserAgent, detect_engine, parse

__all__ = [
    "Browser",
    "OSInfo",
    "OSUpdate",
    "Section",
    "UserAgent",
    "detect_engine",
    "detect_os",
    "normalize_os",
    "os_info",
    "parse",
    "parse_sections",
]
