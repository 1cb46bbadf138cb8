"""
Table repository.
"""

from ..models import Table
from .base import DocumentRepository


class TableRepository(DocumentRepository[Table]):
    model = Table
