from enum import Enum

class UserRole(str, Enum):
    admin = "Admin"
    editor = "Editor"
    customer = "Customer"
