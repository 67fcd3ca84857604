from app.domains.identity.entities import User, Permissions

__all__ = [
    "User",
    "Permissions"
]
