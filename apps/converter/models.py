"""
Model discovery for Django.
The ORM models live in the infrastructure layer.
"""

from apps.converter.infrastructure.persistence.models import StoredValue  # noqa: F401
