"""REST client for the TidyHQ API."""

from tidyhq.client.builder import make_url_parameters
from tidyhq.client.rest import Rest, RestResponse
from tidyhq.client.tidyhq import TidyHQ

__all__ = ["Rest", "RestResponse", "TidyHQ", "make_url_parameters"]
