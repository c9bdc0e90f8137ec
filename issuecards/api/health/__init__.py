"""Health probe resources."""

from issuecards.api.health.resources import HealthResource, ReadyResource

__all__ = ["HealthResource", "ReadyResource"]
