from .sqlalchemy_identity_provider import SQLAlchemyIdentityProvider

__all__ = ["SQLAlchemyIdentityProvider"]
