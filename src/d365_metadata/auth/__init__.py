"""
Authentication module for the D365 metadata CLI

Supplies bearer tokens for the $metadata request, either a static token or one
acquired from Azure AD with client credentials.
"""

from .interface import IAuthProvider, AuthenticationError
from .d365_auth import AzureClientCredentialsProvider, StaticTokenProvider

__all__ = [
    "IAuthProvider",
    "AuthenticationError",
    "AzureClientCredentialsProvider",
    "StaticTokenProvider",
]
