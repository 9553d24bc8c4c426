from shopfront.application.context.auth_context import AuthenticatedContext

__all__ = ["AuthenticatedContext"]
