from dataclasses import dataclass, field
from math import ceil

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
# Keeps the row offset inside a signed 64-bit integer
MAX_PAGE = (2 ** 63 - 1) // MAX_PAGE_SIZE

SORT_ASC = 'asc'
SORT_DESC = 'desc'


def _as_int(value, default):
    """
    Convert any value to int, falling back to ``default`` if conversion
    fails or the value is ``None``.
    """
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def clamp_page(value):
    return min(MAX_PAGE, max(DEFAULT_PAGE, _as_int(value, DEFAULT_PAGE)))


def clamp_page_size(value):
    return min(MAX_PAGE_SIZE, max(MIN_PAGE_SIZE, _as_int(value, DEFAULT_PAGE_SIZE)))


@dataclass
class ListParams:
    """
    Normalized list-endpoint parameters.

    ``filters`` holds exact-match filters keyed by their query-string name
    (``clientId``, ``status``...); the repository decides which of them apply
    to its table.
    """
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE
    search: str = None
    sort_by: str = None
    sort_order: str = SORT_DESC
    filters: dict = field(default_factory=dict)

    def __post_init__(self):
        self.page = clamp_page(self.page)
        self.page_size = clamp_page_size(self.page_size)
        self.sort_order = (self.sort_order or SORT_DESC).lower()
        if self.sort_order not in (SORT_ASC, SORT_DESC):
            self.sort_order = SORT_DESC
        if self.search is not None:
            self.search = self.search.strip() or None
        self.filters = {k: v for k, v in (self.filters or {}).items() if v not in (None, '')}

    @property
    def offset(self):
        return (self.page - 1) * self.page_size

    @classmethod
    def from_args(cls, args, filter_names=()):
        """
        Build params from a parsed query-string mapping (``reqparse`` result
        or ``request.args``). Garbage numbers fall back to their defaults.
        """
        return cls(
            page=args.get('page'),
            page_size=args.get('pageSize'),
            search=args.get('search'),
            sort_by=args.get('sortBy'),
            sort_order=args.get('sortOrder'),
            filters={name: args.get(name) for name in filter_names},
        )


@dataclass
class Page:
    items: list
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self):
        return ceil(self.total / self.page_size) if self.total else 0

    def to_dict(self, schema):
        """Serialize items with a marshmallow ``many=True`` schema."""
        return {
            'items': schema.dump(self.items),
            'total': self.total,
            'page': self.page,
            'pageSize': self.page_size,
            'totalPages': self.total_pages,
        }


def paginate(query, params):
    """
    Apply ``params`` offset/limit to a SQLAlchemy *query* and return a
    :class:`Page` with the total count of every matching row.
    """
    total_items = query.order_by(None).count()
    if params.offset >= total_items:
        return Page(items=[], total=total_items, page=params.page, page_size=params.page_size)

    items = (
        query.limit(params.page_size)
        .offset(params.offset)
        .all()
    )
    return Page(items=items, total=total_items, page=params.page, page_size=params.page_size)
