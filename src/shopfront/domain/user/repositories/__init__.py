from shopfront.domain.user.repositories.user_repository import (
    UserCredentials,
    UserRepository,
)

__all__ = ["UserCredentials", "UserRepository"]
