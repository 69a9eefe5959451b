"""Python client for the MedFlow API.

``AuthSession`` holds the signed-in user and bearer token; one
``ResourceStore`` per resource keeps a local list in step with the
server by patching it after each successful call.
"""
from .http import ApiClient, ApiError
from .session import AuthSession
from .stores import RESOURCE_PATHS, BillingStore, ResourceStore

__all__ = ['ApiClient', 'ApiError', 'AuthSession', 'BillingStore', 'ResourceStore', 'RESOURCE_PATHS']
