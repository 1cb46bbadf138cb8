"""
Order repository.
"""

from ..models import Order
from .base import DocumentRepository


class OrderRepository(DocumentRepository[Order]):
    model = Order
