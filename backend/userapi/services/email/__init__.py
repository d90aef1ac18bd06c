from userapi.services.email.sender import EmailService

__all__ = ["EmailService"]
