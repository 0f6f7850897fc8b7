from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from jose import JWTError
from destaque_sheq.config import settings
from destaque_sheq.core.security import decode_access_token


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware que identifica o usuário em TODAS as requisições da API

    Fluxo:
    1. Extrai o token JWT do header Authorization
    2. Decodifica o token (user_id e papel válidos)
    3. Adiciona ao contexto da request (request.state)

    Erros de autenticação são devolvidos como JSON 401 direto daqui,
    pois exceções levantadas em middleware não passam pelos handlers do FastAPI.
    """

    # Rotas públicas que NÃO precisam de autenticação
    PUBLIC_PATHS = [
        "/",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
        f"{settings.API_V1_STR}/openapi.json",
        f"{settings.API_V1_STR}/auth/login",
        f"{settings.API_V1_STR}/auth/signup",
        f"{settings.API_V1_STR}/setup/status",
        f"{settings.API_V1_STR}/setup/init",
        f"{settings.API_V1_STR}/version",
    ]

    async def dispatch(self, request: Request, call_next):
        """
        Processa cada requisição antes de chegar nas rotas
        """
        path = request.url.path

        # Permitir requisições OPTIONS (CORS preflight)
        if request.method == "OPTIONS":
            return await call_next(request)

        # Rotas públicas e tudo que não é API passam direto
        if path in self.PUBLIC_PATHS or not path.startswith(f"{settings.API_V1_STR}/"):
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            return JSONResponse(
                status_code=401,
                content={"detail": "Token de autenticação não fornecido"}
            )

        token = auth_header.replace("Bearer ", "")

        try:
            payload = decode_access_token(token)
        except JWTError as e:
            return JSONResponse(status_code=401, content={"detail": str(e)})

        # Adicionar ao contexto da request
        request.state.user_id = payload["user_id"]

        return await call_next(request)
