"""Page/limit handling shared by every list endpoint."""
from __future__ import annotations

import math

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _as_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def page_params(query_params) -> tuple[int, int]:
    """``page`` >= 1 and ``limit`` in [1, MAX_LIMIT]; junk or zero falls back to defaults."""
    page = max(1, _as_int(query_params.get('page')) or 1)
    limit = min(MAX_LIMIT, max(1, _as_int(query_params.get('limit')) or DEFAULT_LIMIT))
    return page, limit


def paginate(queryset, query_params, serialize) -> dict:
    page, limit = page_params(query_params)
    total = queryset.count()
    offset = (page - 1) * limit
    rows = queryset[offset:offset + limit]
    return {
        'data': serialize(rows),
        'pagination': {
            'page': page,
            'limit': limit,
            'total': total,
            'pages': math.ceil(total / limit),
        },
    }
