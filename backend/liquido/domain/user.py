"""
User Domain Models

Users live under users/<uid>; their orders and service requests are child
subtrees keyed by push id. Timestamps are milliseconds since epoch as
written by the database server.
"""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class RequestStatus(str, Enum):
    """Status shared by orders and service requests (no transition rules)"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ServiceType(str, Enum):
    """Service request kinds; values are the database child names"""
    PRODUCT_REQUEST = "product-request"
    MAINTENANCE_REQUEST = "maintenance-request"

    @property
    def node(self) -> str:
        return f"{self.value}s"

    @property
    def label(self) -> str:
        return "Product Request" if self is ServiceType.PRODUCT_REQUEST else "Maintenance Request"


class UserProfile(BaseModel):
    """Profile stored at users/<uid> (orders/services subtrees excluded)"""

    model_config = ConfigDict(extra="ignore")

    uid: str = Field(..., description="Identity provider user id")
    name: str = Field("", description="Display name")
    email: str = Field("", description="Email address")
    phone: str = Field("", description="Phone number")
    createdAt: Optional[int] = Field(None, description="Creation timestamp (ms)")

    def to_dict(self) -> dict:
        return self.model_dump()


class Order(BaseModel):
    """Loyal-customer order stored at users/<uid>/orders/<orderId>"""

    model_config = ConfigDict(extra="allow")

    orderId: str
    userId: str
    userName: str = "N/A"
    userEmail: str = "N/A"
    userPhone: str = "N/A"
    productName: str = "N/A"
    productDetails: Dict[str, Any] = Field(default_factory=dict)
    date: str = ""
    time: str = ""
    createdAt: Optional[int] = None
    status: Optional[str] = RequestStatus.PENDING.value

    def to_dict(self) -> dict:
        return self.model_dump()


class ServiceRequest(BaseModel):
    """Service request stored at users/<uid>/services/<type>s/<serviceId>"""

    model_config = ConfigDict(extra="allow")

    serviceId: str
    serviceType: ServiceType
    userId: str
    userName: str = "N/A"
    userEmail: str = "N/A"
    userPhone: str = "N/A"

    # product-request
    productImage: Optional[str] = None
    message: Optional[str] = None

    # maintenance-request
    date: Optional[str] = None
    time: Optional[str] = None
    description: Optional[str] = None

    createdAt: Optional[int] = None
    status: Optional[str] = RequestStatus.PENDING.value

    @property
    def typeDisplay(self) -> str:
        return self.serviceType.label

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data["typeDisplay"] = self.typeDisplay
        return data
