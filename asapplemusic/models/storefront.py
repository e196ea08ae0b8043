"""
Storefront data model: a country or region specific catalog.
"""

from dataclasses import dataclass
from typing import List
from .decoding import api_field
from .resource import Resource, register_resource

@register_resource
@dataclass
class Storefront(Resource):
    """Storefront; its `id` is the two-letter code used in catalog URLs."""
    name: str = ""
    default_language_tag: str = ""
    supported_language_tags: List[str] = api_field(default_factory=list)
    explicit_content_policy: str = ""

    RESOURCE_TYPE = "storefronts"

    def supports_language(self, lang: str) -> bool:
        """Check if the storefront is localized for a language tag."""
        tags = {tag.lower() for tag in self.supported_language_tags}
        return lang.lower() in tags
