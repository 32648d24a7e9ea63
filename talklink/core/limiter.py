"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Link generation joins rooms on the
remote server, so it is limited per client address.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LINK_LIMIT = "30/minute"
SETTINGS_WRITE_LIMIT = "10/minute"

limit_link = limiter.limit(LINK_LIMIT)
limit_settings_write = limiter.limit(SETTINGS_WRITE_LIMIT)
