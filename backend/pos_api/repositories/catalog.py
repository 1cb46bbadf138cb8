"""
Catalog repositories: Category, Product.
"""

from ..models import Category, Product
from .base import DocumentRepository


class CategoryRepository(DocumentRepository[Category]):
    model = Category


class ProductRepository(DocumentRepository[Product]):
    model = Product
