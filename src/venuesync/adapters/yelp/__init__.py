"""Public interface for the Yelp adapter."""

from __future__ import annotations

from .client import YelpAdapter
from .schema import YelpBusiness, YelpSearchResponse
from .translator import translate_business

__all__ = ["YelpAdapter", "YelpBusiness", "YelpSearchResponse", "translate_business"]
