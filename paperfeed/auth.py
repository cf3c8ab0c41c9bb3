"""JWT bearer-token verification.

Sign-in itself happens at an external identity provider; this module only
checks the tokens it hands out.
"""

import time
from typing import Optional

import jwt

from .config import load_settings


def _secret() -> str:
    secret = load_settings()["jwt_secret"]
    if not secret:
        raise RuntimeError("Missing PAPERFEED_JWT_SECRET")
    return secret


def generate_token(user_id: str, expire_days: Optional[int] = None) -> str:
    """
    生成 JWT token

    Args:
        user_id: Identity-provider user id

    Returns:
        JWT token 字符串
    """
    cfg = load_settings()
    days = expire_days if expire_days is not None else cfg["jwt_expire_days"]
    payload = {
        "user_id": user_id,
        "iat": int(time.time()),
        "exp": int(time.time()) + days * 24 * 3600,
    }
    return jwt.encode(payload, _secret(), algorithm=cfg["jwt_algorithm"])


def verify_token(token: str) -> Optional[str]:
    """
    验证 JWT token

    Returns:
        user_id 或 None (验证失败)
    """
    try:
        payload = jwt.decode(token, _secret(), algorithms=[load_settings()["jwt_algorithm"]])
        return payload.get("user_id")
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """支持 "Bearer xxx" 和 "xxx" 两种格式"""
    if not authorization:
        return None
    if authorization.startswith("Bearer "):
        return authorization[7:]
    return authorization
