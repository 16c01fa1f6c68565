"""
D365 Metadata CLI

Fetches the OData $metadata document of a Dynamics 365 environment, normalizes
its entity types into JSON and answers list/show/search/export queries over it.
"""

__version__ = "0.1.0"

from .main import main

__all__ = ["main"]
