"""HTTP middleware. Applied in main app; last added = outermost."""

from talklink.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
