"""Input acquisition."""
from rainlevel.data.profile import ProfileData, load_profile, parse_profile

__all__ = [
    "ProfileData",
    "load_profile",
    "parse_profile",
]
