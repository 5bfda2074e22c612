"""Partners Module: registration and lookup."""

from citrus_modules.partners.service import PartnerService

__all__ = ["PartnerService"]
