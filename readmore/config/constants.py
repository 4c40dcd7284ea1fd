"""
Centralized constants for readmore.

Values that shape search behavior live here so the batch command, the
interactive picker and the content index agree on them.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

READMORE_CONFIG_DIR = Path.home() / ".config" / "readmore"

# =============================================================================
# MARKER & DATES
# =============================================================================

# Block comment token that identifies content carrying a read-more block
DEFAULT_MARKER = "wp:readmore/read-more"

DATE_FORMAT = "%Y-%m-%d"  # "2024-01-15"
DEFAULT_WINDOW_DAYS = 30  # Batch search window when no bounds are given

# =============================================================================
# PAGINATION
# =============================================================================

UNBOUNDED = -1  # page_size meaning "every match in one pass"
DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

# =============================================================================
# INTERACTIVE SEARCH
# =============================================================================

DEBOUNCE_SECONDS = 1.0  # Quiet period after the last edit before querying

# =============================================================================
# CONTENT STORE
# =============================================================================

DEFAULT_SITE_URL = "http://localhost"
MAX_ITEM_ID = 2**63 - 1  # Largest id an SQLite INTEGER column can hold
