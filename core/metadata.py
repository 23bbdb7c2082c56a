"""
QuotaTrack Core Metadata
------------------------
Houses global metadata for versioning. The backend and the UI footer
read it so they report the same version.
"""

from datetime import date

__project__ = "QuotaTrack"
__version__ = "1.0.0"
__updated__ = date.today().isoformat()

CORE_METADATA = {
    "project": __project__,
    "version": __version__,
    "updated": __updated__,
    "description": (
        "QuotaTrack is a personal sales-activity tracker: meetings and deals "
        "recorded per quarter, measured against meeting and MMR goals."
    ),
}

def get_metadata() -> dict:
    """Return current system metadata as a dict."""
    return CORE_METADATA
