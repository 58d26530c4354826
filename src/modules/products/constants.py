"""Product domain constants.

Pagination defaults and bounds shared by the DTOs, the service layer
and the HTTP adapter.
"""

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Fields a client may change through a partial update.
UPDATABLE_FIELDS: tuple[str, ...] = ("name", "description", "price", "stock")
