from .authenticate_user import AuthenticateUserUseCase
from .login_user import LoginUserUseCase
from .register_user import RegisterUserUseCase

__all__ = ["AuthenticateUserUseCase", "LoginUserUseCase", "RegisterUserUseCase"]
