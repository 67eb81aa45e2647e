from neropage.features.auth.models.user import User

__all__ = ["User"]
