from datetime import datetime, timedelta
from typing import Dict, Any
from jose import JWTError, jwt
import bcrypt
from destaque_sheq.config import settings
from destaque_sheq.models.usuario import Usuario, PapelUsuario


def hash_password(password: str) -> str:
    """
    Gera hash da senha usando bcrypt
    """
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifica se a senha corresponde ao hash
    """
    password_bytes = plain_password.encode('utf-8')
    hashed_bytes = hashed_password.encode('utf-8')
    return bcrypt.checkpw(password_bytes, hashed_bytes)


def create_access_token(usuario: Usuario) -> str:
    """
    Cria o JWT de sessão do usuário (user_id, papel e email)

    Expira em ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    claims = {
        "user_id": usuario.id,
        "papel": usuario.papel.value,
        "email": usuario.email,
        "exp": datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica e valida um JWT de sessão

    Returns:
        Claims com "papel" convertido para PapelUsuario

    Raises:
        JWTError: token inválido, expirado, sem user_id ou com papel desconhecido
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise JWTError(f"Token inválido: {str(e)}")

    if not payload.get("user_id"):
        raise JWTError("Token inválido: usuário não identificado")

    try:
        payload["papel"] = PapelUsuario(payload.get("papel"))
    except ValueError:
        raise JWTError("Token inválido: papel desconhecido")

    return payload
