from roomivo.db.models.role import Role
from roomivo.db.models.user import User
from roomivo.db.models.property import Property, PropertyImage
from roomivo.db.models.application import Application
from roomivo.db.models.contract import Contract
from roomivo.db.models.message import Message

__all__ = ["Role", "User", "Property", "PropertyImage", "Application", "Contract", "Message"]
