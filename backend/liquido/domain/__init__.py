"""
Domain Layer - Business Entities

Pydantic models for the catalog tree and for users with their orders and
service requests.
"""
from liquido.domain.catalog import Section, Brand, Line, Product, parse_sections
from liquido.domain.user import UserProfile, Order, ServiceRequest, RequestStatus, ServiceType

__all__ = [
    'Section', 'Brand', 'Line', 'Product', 'parse_sections',
    'UserProfile', 'Order', 'ServiceRequest', 'RequestStatus', 'ServiceType'
]
