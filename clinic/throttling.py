"""
Per-address request throttles.

``ApiRateThrottle`` applies to every endpoint.  ``AuthRateThrottle`` is
stacked on signup and login only; both endpoints share its bucket so
that the two together allow a fixed number of attempts per window from
one address.
"""
from __future__ import annotations

import re

from rest_framework.throttling import SimpleRateThrottle

_UNITS = {'s': 1, 'sec': 1, 'm': 60, 'min': 60, 'h': 3600, 'hour': 3600, 'd': 86400, 'day': 86400}
_RATE_RE = re.compile(r'^\s*(\d+)\s*/\s*(\d*)\s*([a-z]+)\s*$')


class _AddressRateThrottle(SimpleRateThrottle):
    """Keyed by client address, with rates such as ``5/15min``."""

    def parse_rate(self, rate):
        if rate is None:
            return (None, None)
        match = _RATE_RE.match(rate.lower())
        if not match:
            raise ValueError(f'Invalid throttle rate: {rate!r}')
        num, mult, unit = match.groups()
        if unit not in _UNITS:
            # accept the DRF spelling where only the first letter matters
            unit = unit[0]
        duration = _UNITS[unit] * int(mult or 1)
        return int(num), duration

    def get_cache_key(self, request, view):
        return self.cache_format % {
            'scope': self.scope,
            'ident': self.get_ident(request),
        }


class ApiRateThrottle(_AddressRateThrottle):
    scope = 'api'


class AuthRateThrottle(_AddressRateThrottle):
    scope = 'auth'
