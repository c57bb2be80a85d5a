"""
Security utilities and authentication
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import time
from collections import defaultdict

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import settings
from app.core.errors import Forbidden, Unauthenticated

# Simple in-memory rate limiter
rate_limiter = defaultdict(list)

security = HTTPBearer(auto_error=False)


@dataclass
class Principal:
    """Authenticated caller"""
    user_type: str  # "admin" or "company"
    company_id: Optional[str] = None
    company_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.user_type == "admin"


def create_access_token(principal: Principal, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token for an admin or company session"""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.TOKEN_EXPIRE_MINUTES))
    payload = {
        "sub": principal.company_id or "admin",
        "type": principal.user_type,
        "name": principal.company_name,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.TOKEN_ALGORITHM)


def decode_access_token(token: str) -> Principal:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.TOKEN_ALGORITHM])
    except jwt.PyJWTError:
        raise Unauthenticated("Invalid or expired token")

    user_type = payload.get("type")
    if user_type == "admin":
        return Principal(user_type="admin")
    if user_type == "company" and payload.get("sub"):
        return Principal(user_type="company", company_id=payload["sub"], company_name=payload.get("name"))
    raise Unauthenticated("Invalid or expired token")


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Principal:
    """Resolve the bearer token into a Principal"""
    if credentials is None:
        raise Unauthenticated("Unauthorized")
    return decode_access_token(credentials.credentials)


def require_admin(principal: Principal = Depends(get_current_user)) -> Principal:
    if not principal.is_admin:
        raise Forbidden("Admin access required")
    return principal


def ensure_company_access(principal: Principal, company_id: str) -> None:
    """Admins may act on any company; a company only on itself"""
    if principal.is_admin or principal.company_id == company_id:
        return
    raise Forbidden("Unauthorized to access this company's events")


def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    current_time = time.time()
    minute_ago = current_time - 60

    # Clean old requests
    rate_limiter[client_ip] = [
        req_time for req_time in rate_limiter[client_ip]
        if req_time > minute_ago
    ]

    # Check limit
    if len(rate_limiter[client_ip]) >= limit:
        return False

    # Add current request
    rate_limiter[client_ip].append(current_time)
    return True


def get_client_ip(request) -> str:
    """Extract client IP from request"""
    # Check for forwarded IP first (for reverse proxy setups)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    # Check for real IP header
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    # Fall back to direct client IP
    return request.client.host if request.client else "unknown"
