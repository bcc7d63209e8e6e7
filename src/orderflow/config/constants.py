"""
Centralized application constants.

Single point of truth for the constants shared by the fetcher, the
normalizer and the dashboard routes.
"""

# ==============================================================================
# STORE SCANNING
# ==============================================================================

# Records per scan page. Fixed: callers of the fetcher cannot override it.
SCAN_PAGE_SIZE = 100

# ==============================================================================
# ORDER NORMALIZATION
# ==============================================================================

# Closed set of display statuses, anything else is coerced to the default
ORDER_STATUSES = ("paid", "pending", "failed")
DEFAULT_ORDER_STATUS = "pending"

DEFAULT_CURRENCY = "INR"
DEFAULT_MONEY = "0.00"

# ==============================================================================
# PRODUCT NORMALIZATION
# ==============================================================================

DEFAULT_PRODUCT_ID = "N/A"
DEFAULT_PRODUCT_TITLE = "Untitled Product"
DEFAULT_PRODUCT_STATUS = "active"

# Stored product tags are a single string joined with this separator
PRODUCT_TAG_SEPARATOR = ", "

# ==============================================================================
# DASHBOARD
# ==============================================================================

# Orders per dashboard page
DASHBOARD_PAGE_SIZE = 18

# Status filter values accepted by the order listing ("all" disables it)
STATUS_FILTER_OPTIONS = ("all",) + ORDER_STATUSES

SORT_ASC = "asc"
SORT_DESC = "desc"

# Cache key for the full order listing
ORDER_CACHE_KEY = "orderflow_orders"
