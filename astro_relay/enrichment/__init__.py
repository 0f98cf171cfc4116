from .geocode import Coordinates, GeocodeClient
from .profile import ProfileSigns, ProfileDataClient
from .summary import ProfileEnrichmentFetcher, base_summary, build_instructions

__all__ = [
    "Coordinates",
    "GeocodeClient",
    "ProfileDataClient",
    "ProfileEnrichmentFetcher",
    "ProfileSigns",
    "base_summary",
    "build_instructions",
]
