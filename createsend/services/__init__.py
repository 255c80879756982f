from .lists import AsyncListResource, ListResource

__all__ = ["ListResource", "AsyncListResource"]
