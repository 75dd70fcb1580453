"""Python client for the VetCare API."""

from vetcare.client.api import VetcareClient, dirty_fields
from vetcare.client.errors import ApiRequestError, error_message
from vetcare.client.listing import ListState, Page, normalize_page, page_window, serialize_filters

__all__ = [
    "ApiRequestError",
    "ListState",
    "Page",
    "VetcareClient",
    "dirty_fields",
    "error_message",
    "normalize_page",
    "page_window",
    "serialize_filters",
]
