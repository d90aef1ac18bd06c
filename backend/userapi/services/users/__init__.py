from userapi.services.users.service import UserService

__all__ = ["UserService"]
